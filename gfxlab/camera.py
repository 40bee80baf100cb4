"""Camera component and the view and projection matrices it produces."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

import numpy as np

from gfxlab.component import Component


class CameraType(Enum):
    ORTHOGRAPHIC = "orthographic"
    PERSPECTIVE = "perspective"


def look_at(eye: Sequence[float], center: Sequence[float], up: Sequence[float]) -> np.ndarray:
    """Right-handed view matrix for a camera at ``eye`` looking at ``center``."""
    eye = np.asarray(eye, dtype=float)
    forward = np.asarray(center, dtype=float) - eye
    forward /= np.linalg.norm(forward)
    side = np.cross(forward, np.asarray(up, dtype=float))
    side /= np.linalg.norm(side)
    true_up = np.cross(side, forward)
    view = np.eye(4)
    view[0, :3] = side
    view[1, :3] = true_up
    view[2, :3] = -forward
    view[0, 3] = -np.dot(side, eye)
    view[1, 3] = -np.dot(true_up, eye)
    view[2, 3] = np.dot(forward, eye)
    return view


def perspective(fov_y: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection onto the clip range -1..1."""
    tan_half = math.tan(fov_y / 2.0)
    projection = np.zeros((4, 4))
    projection[0, 0] = 1.0 / (aspect * tan_half)
    projection[1, 1] = 1.0 / tan_half
    projection[2, 2] = -(far + near) / (far - near)
    projection[2, 3] = -(2.0 * far * near) / (far - near)
    projection[3, 2] = -1.0
    return projection


def ortho(left: float, right: float, bottom: float, top: float) -> np.ndarray:
    """Two-dimensional orthographic projection."""
    projection = np.eye(4)
    projection[0, 0] = 2.0 / (right - left)
    projection[1, 1] = 2.0 / (top - bottom)
    projection[2, 2] = -1.0
    projection[0, 3] = -(right + left) / (right - left)
    projection[1, 3] = -(top + bottom) / (top - bottom)
    return projection


@dataclass
class CameraComponent(Component):
    """Marks its entity as the point of view the scene is drawn from."""

    ID: ClassVar[str] = "Camera"

    camera_type: CameraType = CameraType.PERSPECTIVE
    near: float = 0.01
    far: float = 100.0
    fov_y: float = math.radians(90.0)
    ortho_height: float = 1.0

    def deserialize(self, data: Any) -> None:
        """Read the camera settings; absent keys take their defaults, ``fovY`` is in degrees."""
        if not isinstance(data, Mapping):
            return
        if data.get("cameraType", "perspective") == "orthographic":
            self.camera_type = CameraType.ORTHOGRAPHIC
        else:
            self.camera_type = CameraType.PERSPECTIVE
        self.near = float(data.get("near", 0.01))
        self.far = float(data.get("far", 100.0))
        self.fov_y = float(data.get("fovY", 90.0)) * (math.pi / 180.0)
        self.ortho_height = float(data.get("orthoHeight", 1.0))

    def get_view_matrix(self) -> np.ndarray:
        """View matrix taken from the owning entity's local-to-world matrix."""
        if self.owner is None:
            raise RuntimeError("the camera is not attached to an entity")
        matrix = np.asarray(self.owner.get_local_to_world_matrix(), dtype=float)
        eye = matrix @ np.array([0.0, 0.0, 0.0, 1.0])
        center = matrix @ np.array([0.0, 0.0, -1.0, 1.0])
        up = matrix @ np.array([0.0, 1.0, 0.0, 0.0])
        return look_at(eye[:3], center[:3], up[:3])

    def get_projection_matrix(self, viewport_size: Sequence[int]) -> np.ndarray:
        """Projection matrix whose aspect ratio comes from ``viewport_size`` (width, height)."""
        aspect = float(viewport_size[0]) / float(viewport_size[1])
        if self.camera_type is CameraType.ORTHOGRAPHIC:
            top = self.ortho_height / 2.0
            bottom = -top
            return ortho(bottom * aspect, top * aspect, bottom, top)
        return perspective(self.fov_y, aspect, self.near, self.far)