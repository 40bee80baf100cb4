"""Translation, rotation and scale of an object relative to its parent."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import numpy as np


def _read_vector(value: Any, size: int = 3) -> np.ndarray:
    """Convert a JSON array of numbers into a float vector of the given size."""
    try:
        vector = np.asarray(value, dtype=float)
    except (TypeError, ValueError) as exc:
        raise TypeError(f"expected an array of {size} numbers, got {value!r}") from exc
    if vector.shape != (size,):
        raise ValueError(f"expected an array of {size} numbers, got {value!r}")
    return vector


def yaw_pitch_roll(yaw: float, pitch: float, roll: float) -> np.ndarray:
    """Rotation matrix applying roll (z), then pitch (x), then yaw (y)."""
    ch, sh = math.cos(yaw), math.sin(yaw)
    cp, sp = math.cos(pitch), math.sin(pitch)
    cb, sb = math.cos(roll), math.sin(roll)
    rotate_y = np.array(
        [[ch, 0.0, sh, 0.0], [0.0, 1.0, 0.0, 0.0], [-sh, 0.0, ch, 0.0], [0.0, 0.0, 0.0, 1.0]]
    )
    rotate_x = np.array(
        [[1.0, 0.0, 0.0, 0.0], [0.0, cp, -sp, 0.0], [0.0, sp, cp, 0.0], [0.0, 0.0, 0.0, 1.0]]
    )
    rotate_z = np.array(
        [[cb, -sb, 0.0, 0.0], [sb, cb, 0.0, 0.0], [0.0, 0.0, 1.0, 0.0], [0.0, 0.0, 0.0, 1.0]]
    )
    return rotate_y @ rotate_x @ rotate_z


@dataclass(eq=False)
class Transform:
    """Position, Euler rotation (radians; x pitch, y yaw, z roll) and scale."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))
    radius: int = 1

    def to_mat4(self) -> np.ndarray:
        """Matrix that scales, then rotates, then translates."""
        translate = np.eye(4)
        translate[:3, 3] = self.position
        scale = np.diag([*np.asarray(self.scale, dtype=float), 1.0])
        rotation = yaw_pitch_roll(self.rotation[1], self.rotation[0], self.rotation[2])
        return translate @ rotation @ scale

    def deserialize(self, data: Any) -> None:
        """Read position, rotation (in degrees), scale and radius; missing keys keep their values."""
        if not isinstance(data, Mapping):
            raise TypeError(f"transform data must be an object, got {type(data).__name__}")
        if "position" in data:
            self.position = _read_vector(data["position"])
        if "rotation" in data:
            self.rotation = np.radians(_read_vector(data["rotation"]))
        if "scale" in data:
            self.scale = _read_vector(data["scale"])
        if "radius" in data:
            self.radius = int(data["radius"])