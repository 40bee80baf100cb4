"""The component types a scene file can attach to an entity."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Any, ClassVar, Protocol, TypeVar

import numpy as np

from gfxlab.assets import MATERIALS, MESHES
from gfxlab.camera import CameraComponent
from gfxlab.component import Component

_C = TypeVar("_C", bound=Component)


def _number(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{what} must be a number, got {value!r}")
    return float(value)


def _integer(value: Any, what: str) -> int:
    return int(_number(value, what))


def _vector(value: Any, size: int, what: str) -> np.ndarray:
    try:
        vector = np.asarray(value, dtype=float)
    except (TypeError, ValueError) as exc:
        raise TypeError(f"{what} must be an array of {size} numbers, got {value!r}") from exc
    if vector.shape != (size,):
        raise ValueError(f"{what} must be an array of {size} numbers, got {value!r}")
    return vector.copy()


@dataclass(eq=False)
class FreeCameraControllerComponent(Component):
    """Lets the user fly the owning entity around with the mouse and keyboard."""

    ID: ClassVar[str] = "Free Camera Controller"

    rotation_sensitivity: float = 0.01
    fov_sensitivity: float = 0.3
    position_sensitivity: np.ndarray = field(default_factory=lambda: np.full(3, 3.0))
    speedup_factor: float = 5.0

    def deserialize(self, data: Any) -> None:
        """Read the sensitivities and speed-up factor; absent keys keep their values."""
        if not isinstance(data, Mapping):
            return
        if "rotationSensitivity" in data:
            self.rotation_sensitivity = _number(data["rotationSensitivity"], "rotationSensitivity")
        if "fovSensitivity" in data:
            self.fov_sensitivity = _number(data["fovSensitivity"], "fovSensitivity")
        if "positionSensitivity" in data:
            self.position_sensitivity = _vector(
                data["positionSensitivity"], 3, "positionSensitivity"
            )
        if "speedupFactor" in data:
            self.speedup_factor = _number(data["speedupFactor"], "speedupFactor")


@dataclass(eq=False)
class MovementComponent(Component):
    """Moves and spins the owning entity at a constant rate."""

    ID: ClassVar[str] = "Movement"

    linear_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def deserialize(self, data: Any) -> None:
        """Read the velocities; the angular velocity is given in degrees per second."""
        if not isinstance(data, Mapping):
            return
        self.linear_velocity = _vector(
            data.get("linearVelocity", self.linear_velocity), 3, "linearVelocity"
        )
        self.angular_velocity = np.radians(
            _vector(data.get("angularVelocity", self.angular_velocity), 3, "angularVelocity")
        )


@dataclass(eq=False)
class CollisionBoundary:
    """One wall: its extent along x and y and its depth along z."""

    x_boundary: np.ndarray = field(default_factory=lambda: np.zeros(2))
    y_boundary: np.ndarray = field(default_factory=lambda: np.zeros(2))
    z_position: float = 0.0


@dataclass(eq=False)
class CollisionComponent(Component):
    """The bounds of a playing area and the walls inside it."""

    ID: ClassVar[str] = "Collision"

    walls: list[CollisionBoundary] = field(default_factory=list)
    x_boundary: np.ndarray = field(default_factory=lambda: np.zeros(2))
    y_boundary: np.ndarray = field(default_factory=lambda: np.zeros(2))
    z_boundary: np.ndarray = field(default_factory=lambda: np.zeros(2))
    walls_number: int = 0
    projectiles_number: int = 0

    def deserialize(self, data: Any) -> None:
        """Read the area bounds and append ``WallsNumber`` walls keyed by their index."""
        if not isinstance(data, Mapping):
            return
        if "WallsNumber" in data:
            self.walls_number = _integer(data["WallsNumber"], "WallsNumber")
        if "x_Boundary" in data:
            self.x_boundary = _vector(data["x_Boundary"], 2, "x_Boundary")
        if "y_Boundary" in data:
            self.y_boundary = _vector(data["y_Boundary"], 2, "y_Boundary")
        if "z_Boundary" in data:
            self.z_boundary = _vector(data["z_Boundary"], 2, "z_Boundary")
        for index in range(self.walls_number):
            wall = CollisionBoundary()
            if (key := f"x_Boundary{index}") in data:
                wall.x_boundary = _vector(data[key], 2, key)
            if (key := f"y_Boundary{index}") in data:
                wall.y_boundary = _vector(data[key], 2, key)
            if (key := f"z_position{index}") in data:
                wall.z_position = _number(data[key], key)
            self.walls.append(wall)


class LightType(Enum):
    DIRECTIONAL = "directional"
    POINT = "point"
    SPOTLIGHT = "spotlight"


@dataclass
class Attenuation:
    """Coefficients of the distance fall-off of a point or spot light."""

    constant: float = 1.0
    linear: float = 0.0
    quadratic: float = 0.0


@dataclass
class SpotAngle:
    """Inner and outer cone angles of a spot light."""

    inner_cone: float = 0.0
    outer_cone: float = 0.1


@dataclass(eq=False)
class LightComponent(Component):
    """A light source placed at the owning entity."""

    ID: ClassVar[str] = "Light"

    type: LightType = LightType.DIRECTIONAL
    diffuse_light: np.ndarray = field(default_factory=lambda: np.zeros(3))
    specular_light: np.ndarray = field(default_factory=lambda: np.zeros(3))
    ambient_light: np.ndarray = field(default_factory=lambda: np.zeros(3))
    attenuation: Attenuation = field(default_factory=Attenuation)
    spot_angle: SpotAngle = field(default_factory=SpotAngle)

    def deserialize(self, data: Any) -> None:
        """Read colours and light type; attenuation and cone angles only where the type uses them."""
        if not isinstance(data, Mapping):
            return
        for key in ("diffuse_light", "specular_light", "ambient_light"):
            if key in data:
                setattr(self, key, _vector(data[key], 3, key))

        kind = data.get("lType", "directional")
        if kind == "directional":
            self.type = LightType.DIRECTIONAL
            return
        if kind == "point":
            self.type = LightType.POINT
        elif kind == "spotlight":
            self.type = LightType.SPOTLIGHT
        else:
            return
        self._read_attenuation(data)
        if self.type is LightType.SPOTLIGHT:
            if "spot_angle_inner" in data:
                self.spot_angle.inner_cone = _number(data["spot_angle_inner"], "spot_angle_inner")
            if "spot_angle_outer" in data:
                self.spot_angle.outer_cone = _number(data["spot_angle_outer"], "spot_angle_outer")

    def _read_attenuation(self, data: Mapping[str, Any]) -> None:
        for key, attribute in (
            ("attenuation_constant", "constant"),
            ("attenuation_linear", "linear"),
            ("attenuation_quadratic", "quadratic"),
        ):
            if key in data:
                setattr(self.attenuation, attribute, _number(data[key], key))


@dataclass(eq=False)
class MeshRendererComponent(Component):
    """Draws a mesh with a material at the owning entity's transform."""

    ID: ClassVar[str] = "Mesh Renderer"

    mesh: Any = None
    material: Any = None

    def deserialize(self, data: Any) -> None:
        """Look up the ``material`` and ``mesh`` named in ``data`` among the loaded assets."""
        if not isinstance(data, Mapping):
            return
        material_name = data["material"]
        if not isinstance(material_name, str):
            raise TypeError(f"material must be a string, got {material_name!r}")
        mesh_name = data["mesh"]
        if not isinstance(mesh_name, str):
            raise TypeError(f"mesh must be a string, got {mesh_name!r}")
        self.material = MATERIALS.get(material_name)
        self.mesh = MESHES.get(mesh_name)


class _ComponentHolder(Protocol):
    def add_component(self, component_type: type[_C]) -> _C: ...


_COMPONENT_TYPES: dict[str, type[Component]] = {
    component_type.ID: component_type
    for component_type in (
        CameraComponent,
        FreeCameraControllerComponent,
        MovementComponent,
        MeshRendererComponent,
        CollisionComponent,
        LightComponent,
    )
}


def deserialize_component(data: Any, entity: _ComponentHolder) -> Component | None:
    """Add to ``entity`` the component named by ``data["type"]`` and read it from ``data``.

    Returns the new component, or None when the type is not known.
    """
    if not isinstance(data, Mapping):
        raise TypeError(f"component data must be an object, got {type(data).__name__}")
    component_type = _COMPONENT_TYPES.get(data.get("type", ""))
    if component_type is None:
        return None
    component = entity.add_component(component_type)
    component.deserialize(data)
    return component