import math

import numpy as np
import pytest

from gfxlab.assets import MATERIALS, MESHES, clear_all_assets
from gfxlab.camera import CameraComponent
from gfxlab.components import (
    Attenuation,
    CollisionComponent,
    FreeCameraControllerComponent,
    LightComponent,
    LightType,
    MeshRendererComponent,
    MovementComponent,
    SpotAngle,
    deserialize_component,
)


class _Holder:
    def __init__(self):
        self.components = []

    def add_component(self, component_type):
        component = component_type()
        component.owner = self
        self.components.append(component)
        return component


@pytest.fixture
def loaded_assets():
    MATERIALS.deserialize({"red": {"type": "tinted", "tint": [1, 0, 0, 1]}})
    MESHES.deserialize({"cube": "models/cube.obj"})
    yield
    clear_all_assets()


def test_free_camera_empty_object_keeps_defaults():
    component = FreeCameraControllerComponent()
    fresh = FreeCameraControllerComponent()
    component.deserialize({})
    assert component.rotation_sensitivity == fresh.rotation_sensitivity
    assert component.fov_sensitivity == fresh.fov_sensitivity
    assert np.array_equal(component.position_sensitivity, fresh.position_sensitivity)
    assert component.speedup_factor == fresh.speedup_factor


def test_free_camera_reads_values():
    component = FreeCameraControllerComponent()
    component.deserialize(
        {
            "rotationSensitivity": 0.5,
            "fovSensitivity": 2,
            "positionSensitivity": [1, 2, 4],
            "speedupFactor": 7,
        }
    )
    assert component.rotation_sensitivity == 0.5
    assert component.fov_sensitivity == 2.0
    assert component.position_sensitivity.tolist() == [1.0, 2.0, 4.0]
    assert component.speedup_factor == 7.0


def test_free_camera_ignores_non_object():
    component = FreeCameraControllerComponent()
    component.deserialize([1, 2, 3])
    assert component.speedup_factor == FreeCameraControllerComponent().speedup_factor


def test_free_camera_rejects_bad_vector():
    with pytest.raises(ValueError):
        FreeCameraControllerComponent().deserialize({"positionSensitivity": [1, 2]})


def test_movement_reads_linear_and_converts_angular():
    component = MovementComponent()
    component.deserialize({"linearVelocity": [1, 0, -2], "angularVelocity": [180, 90, 0]})
    assert component.linear_velocity.tolist() == [1.0, 0.0, -2.0]
    assert np.allclose(component.angular_velocity, [math.pi, math.pi / 2, 0.0])


def test_movement_defaults_stay_zero():
    component = MovementComponent()
    component.deserialize({})
    assert not component.linear_velocity.any()
    assert not component.angular_velocity.any()


def test_collision_builds_walls_by_index():
    component = CollisionComponent()
    component.deserialize(
        {
            "WallsNumber": 2,
            "x_Boundary": [-5, 5],
            "z_Boundary": [0, 20],
            "x_Boundary0": [-1, 1],
            "y_Boundary0": [0, 3],
            "z_position0": -4,
            "z_position1": -8,
        }
    )
    assert component.walls_number == 2
    assert component.x_boundary.tolist() == [-5.0, 5.0]
    assert not component.y_boundary.any()
    assert component.z_boundary.tolist() == [0.0, 20.0]
    assert len(component.walls) == 2
    first, second = component.walls
    assert first.x_boundary.tolist() == [-1.0, 1.0]
    assert first.y_boundary.tolist() == [0.0, 3.0]
    assert first.z_position == -4.0
    assert not second.x_boundary.any()
    assert second.z_position == -8.0


def test_collision_appends_on_repeated_reads():
    component = CollisionComponent()
    component.deserialize({"WallsNumber": 1})
    component.deserialize({"WallsNumber": 1})
    assert len(component.walls) == 2


def test_collision_without_walls():
    component = CollisionComponent()
    component.deserialize({"x_Boundary": [1, 2]})
    assert component.walls == []
    assert component.projectiles_number == 0


def test_light_defaults_to_directional():
    component = LightComponent()
    component.deserialize({"diffuse_light": [1, 1, 1], "attenuation_linear": 0.5})
    assert component.type is LightType.DIRECTIONAL
    assert component.diffuse_light.tolist() == [1.0, 1.0, 1.0]
    assert component.attenuation == Attenuation()


def test_point_light_reads_attenuation_but_not_cone():
    component = LightComponent()
    component.deserialize(
        {
            "lType": "point",
            "attenuation_constant": 2,
            "attenuation_linear": 0.5,
            "attenuation_quadratic": 0.25,
            "spot_angle_inner": 0.3,
        }
    )
    assert component.type is LightType.POINT
    assert component.attenuation == Attenuation(constant=2.0, linear=0.5, quadratic=0.25)
    assert component.spot_angle == SpotAngle()


def test_spotlight_reads_cone_angles():
    component = LightComponent()
    component.deserialize(
        {
            "lType": "spotlight",
            "specular_light": [0.2, 0.4, 0.6],
            "spot_angle_inner": 0.3,
            "spot_angle_outer": 0.6,
        }
    )
    assert component.type is LightType.SPOTLIGHT
    assert component.spot_angle == SpotAngle(inner_cone=0.3, outer_cone=0.6)
    assert np.allclose(component.specular_light, [0.2, 0.4, 0.6])
    assert component.attenuation == Attenuation()


def test_unknown_light_type_keeps_previous_type():
    component = LightComponent()
    component.deserialize({"lType": "point"})
    component.deserialize({"lType": "laser", "attenuation_constant": 9})
    assert component.type is LightType.POINT
    assert component.attenuation.constant == Attenuation().constant


def test_mesh_renderer_looks_up_assets(loaded_assets):
    component = MeshRendererComponent()
    component.deserialize({"material": "red", "mesh": "cube"})
    assert component.material is MATERIALS.get("red")
    assert component.mesh == MESHES.get("cube")


def test_mesh_renderer_unknown_names_give_none(loaded_assets):
    component = MeshRendererComponent()
    component.deserialize({"material": "blue", "mesh": "sphere"})
    assert component.material is None
    assert component.mesh is None


def test_mesh_renderer_requires_names():
    with pytest.raises(KeyError):
        MeshRendererComponent().deserialize({"mesh": "cube"})


def test_mesh_renderer_requires_string_names():
    with pytest.raises(TypeError):
        MeshRendererComponent().deserialize({"material": 3, "mesh": "cube"})


@pytest.mark.parametrize(
    "type_name, component_type",
    [
        ("Camera", CameraComponent),
        ("Free Camera Controller", FreeCameraControllerComponent),
        ("Movement", MovementComponent),
        ("Collision", CollisionComponent),
        ("Light", LightComponent),
    ],
)
def test_deserialize_component_picks_type(type_name, component_type):
    holder = _Holder()
    component = deserialize_component({"type": type_name}, holder)
    assert type(component) is component_type
    assert holder.components == [component]
    assert component.owner is holder


def test_deserialize_component_reads_settings():
    holder = _Holder()
    component = deserialize_component({"type": "Camera", "near": 0.5, "far": 50}, holder)
    assert component.near == 0.5
    assert component.far == 50.0


def test_deserialize_component_mesh_renderer(loaded_assets):
    holder = _Holder()
    component = deserialize_component(
        {"type": "Mesh Renderer", "material": "red", "mesh": "cube"}, holder
    )
    assert component.material is MATERIALS.get("red")


def test_deserialize_component_unknown_type():
    holder = _Holder()
    assert deserialize_component({"type": "Teleporter"}, holder) is None
    assert deserialize_component({}, holder) is None
    assert holder.components == []


def test_deserialize_component_rejects_non_object():
    with pytest.raises(TypeError):
        deserialize_component(["Camera"], _Holder())