[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gfxlab"
version = "0.1.0"
description = "An entity-component scene model with transforms, cameras, lights, asset registries and JSON scene loading"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["ecs", "entity-component-system", "scene-graph", "camera", "3d", "rendering"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gfxlab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
