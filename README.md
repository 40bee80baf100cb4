# gfxlab

A small entity-component scene model for real-time 3D applications. It covers
the parts of a renderer that do not touch the GPU: transforms, a scene graph of
entities and components, camera view and projection matrices, lights, named
asset registries, and loading a whole scene from JSON-style data. All matrices
are `numpy` arrays in column-vector convention, so `M @ v` maps a point or
direction.

## Installing

```
pip install .
```

Add the `test` extra (`pip install .[test]`) to run the test suite with pytest.

## Modules

- `gfxlab.component` – the abstract `Component` base class. Each component type
  has a unique `ID` string and an `owner` set by the entity that holds it.
- `gfxlab.transform` – `Transform` (position, rotation in radians, scale,
  radius) with `to_mat4()` and `deserialize()`, and `yaw_pitch_roll()`.
- `gfxlab.camera` – `CameraComponent`, `CameraType`, and the matrix helpers
  `look_at`, `perspective` and `ortho`.
- `gfxlab.components` – `FreeCameraControllerComponent`, `MovementComponent`,
  `CollisionComponent` (with `CollisionBoundary` walls), `LightComponent`
  (with `LightType`, `Attenuation`, `SpotAngle`), `MeshRendererComponent`, and
  `deserialize_component()`.
- `gfxlab.entity` – `Entity` and `World`.
- `gfxlab.assets` – `AssetLoader`, the registries `SHADERS`, `TEXTURES`,
  `SAMPLERS`, `MESHES`, `MATERIALS`, `deserialize_all_assets()` and
  `clear_all_assets()`.
- `gfxlab.application` – `Application`, `State` and `WindowConfiguration`.
- `gfxlab.diagnostics` – `ScreenshotQueue`, `default_screenshot_filepath()` and
  `format_debug_message()`.

## Building a scene

A scene is a list of entity descriptions. Each entity has an optional name,
position, rotation in degrees and scale, a list of components picked by their
`"type"`, and optional children whose transforms are relative to the parent.

```python
from gfxlab.entity import World
from gfxlab.camera import CameraComponent

scene = [
    {
        "name": "player",
        "position": [0, 1, 5],
        "components": [
            {"type": "Camera", "fovY": 60, "near": 0.1, "far": 200},
            {"type": "Free Camera Controller", "speedupFactor": 4},
        ],
        "children": [
            {"name": "torch", "position": [0.3, -0.2, -0.5],
             "components": [{"type": "Light", "lType": "point",
                             "diffuse_light": [1, 0.8, 0.6]}]},
        ],
    },
]

world = World()
world.deserialize(scene)

player = next(e for e in world.entities() if e.name == "player")
camera = player.get_component(CameraComponent)
view = camera.get_view_matrix()
projection = camera.get_projection_matrix((1280, 720))
view_projection = projection @ view
```

The component types understood in scene data are `Camera`,
`Free Camera Controller`, `Movement`, `Mesh Renderer`, `Collision` and `Light`;
an unknown type is ignored. Angles in scene data (`rotation`, `fovY`,
`angularVelocity`) are given in degrees and stored in radians.

Entities own their components. Use `Entity.add_component`,
`Entity.get_component`, `Entity.get_component_at`, `Entity.delete_component`,
`Entity.delete_component_at` and `Entity.remove_component` to manage them.
`Entity.get_local_to_world_matrix()` combines the entity's transform with those
of all its ancestors.

Removing entities from a world is deferred: `World.mark_for_removal` queues an
entity and `World.delete_marked_entities` removes everything queued.
`World.clear` removes every entity.

## Assets

`Mesh Renderer` components look up their `mesh` and `material` by name in the
`MESHES` and `MATERIALS` registries; a name that is not loaded gives `None`.
An `AssetLoader` holds one kind of asset, each built from its description by
its `builder` function, which may be replaced. `deserialize_all_assets` loads
the `shaders`, `textures`, `samplers`, `meshes` and `materials` sections that
are present, in that order; `clear_all_assets` empties every registry.

The default builders only validate and keep the descriptions: a shader is a
`{"vs": path, "fs": path}` dict, a texture or mesh is its file path, a sampler
or material is a dict of its settings.

## Running states

`Application` drives a set of named `State` objects registered with
`register_state`. A host loop calls `start()` once, `frame(delta_time)` for
every frame until `should_close` is set (by `close()`), then `stop()`.
`change_state` takes effect at the end of the frame, destroying the old state
and initialising the new one. The `key_event`, `cursor_move_event`,
`cursor_enter_event`, `mouse_button_event` and `scroll_event` methods forward
input to the current state. `window_configuration()` reads the `window`
section of the configuration (`title`, `size.width`, `size.height`,
`fullscreen`).

The `screenshots` section of the configuration (`{"directory": ...,
"requests": [{"file": ..., "frame": ...}]}`) is turned into a
`ScreenshotQueue`; `frame()` returns the paths requested for that frame.
`default_screenshot_filepath()` names a time-stamped screenshot file and
`format_debug_message()` turns graphics debug message codes into a readable
line.

## What it does not do

gfxlab does not open windows, talk to a graphics API, compile shaders, load
image or model files, draw anything or capture pixels, and it has no command
to run. Those are left to the host program that uses these classes.