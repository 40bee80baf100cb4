"""Named stores for the assets a scene refers to."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

AssetBuilder = Callable[[Any], Any]


class AssetLoader:
    """Holds the assets of one kind, each under a unique name.

    ``builder`` turns an asset description from the scene file into the
    asset itself; it may be replaced to change how assets are made.
    """

    def __init__(self, kind: str, builder: AssetBuilder) -> None:
        self.kind = kind
        self.builder = builder
        self._assets: dict[str, Any] = {}

    def deserialize(self, data: Any) -> None:
        """Build and store every asset in ``{name: description}``; other data is ignored."""
        if not isinstance(data, Mapping):
            return
        for name, description in data.items():
            self._assets[name] = self.builder(description)

    def get(self, name: str) -> Any:
        """Return the asset with the given name, or None if there is none."""
        return self._assets.get(name)

    def clear(self) -> None:
        """Drop every asset held by this loader."""
        self._assets.clear()


def _string(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{what} must be a string, got {value!r}")
    return value


def _shader_program(description: Any) -> dict[str, str]:
    if not isinstance(description, Mapping):
        raise TypeError("a shader description must be an object")
    return {
        "vs": _string(description.get("vs", ""), "vertex shader path"),
        "fs": _string(description.get("fs", ""), "fragment shader path"),
    }


def _texture(description: Any) -> str:
    return _string(description, "texture path")


def _sampler(description: Any) -> dict[str, Any]:
    return dict(description) if isinstance(description, Mapping) else {}


def _mesh(description: Any) -> str:
    return _string(description, "mesh path")


def _material(description: Any) -> dict[str, Any]:
    if not isinstance(description, Mapping):
        raise TypeError("a material description must be an object")
    material = dict(description)
    material["type"] = _string(description.get("type", ""), "material type")
    return material


SHADERS = AssetLoader("shaders", _shader_program)
TEXTURES = AssetLoader("textures", _texture)
SAMPLERS = AssetLoader("samplers", _sampler)
MESHES = AssetLoader("meshes", _mesh)
MATERIALS = AssetLoader("materials", _material)

# Materials refer to shaders, textures and samplers, so they come last.
_LOADERS = (SHADERS, TEXTURES, SAMPLERS, MESHES, MATERIALS)


def deserialize_all_assets(asset_data: Any) -> None:
    """Load each asset section (shaders, textures, samplers, meshes, materials) that is present."""
    if not isinstance(asset_data, Mapping):
        return
    for loader in _LOADERS:
        if loader.kind in asset_data:
            loader.deserialize(asset_data[loader.kind])


def clear_all_assets() -> None:
    """Drop the assets of every kind."""
    for loader in _LOADERS:
        loader.clear()