import math

import numpy as np
import pytest

from gfxlab.transform import Transform, yaw_pitch_roll


def test_default_transform_is_identity():
    assert np.allclose(Transform().to_mat4(), np.eye(4))
    assert Transform().radius == 1


def test_origin_maps_to_position():
    t = Transform(
        position=np.array([1.5, -2.0, 7.0]),
        rotation=np.array([0.3, 1.1, -0.4]),
        scale=np.array([2.0, 0.5, 3.0]),
    )
    result = t.to_mat4() @ np.array([0.0, 0.0, 0.0, 1.0])
    assert np.allclose(result[:3], [1.5, -2.0, 7.0])
    assert result[3] == pytest.approx(1.0)


def test_scale_only():
    t = Transform(scale=np.array([2.0, 3.0, 4.0]))
    result = t.to_mat4() @ np.array([1.0, 1.0, 1.0, 1.0])
    assert np.allclose(result, [2.0, 3.0, 4.0, 1.0])


def test_scale_is_applied_before_rotation():
    t = Transform(rotation=np.array([0.0, math.pi / 2, 0.0]), scale=np.array([2.0, 1.0, 1.0]))
    result = t.to_mat4() @ np.array([1.0, 0.0, 0.0, 1.0])
    assert np.allclose(result[:3], [0.0, 0.0, -2.0])


def test_zero_angles_give_identity():
    assert np.allclose(yaw_pitch_roll(0.0, 0.0, 0.0), np.eye(4))


def test_yaw_turns_z_axis_to_x_axis():
    result = yaw_pitch_roll(math.pi / 2, 0.0, 0.0) @ np.array([0.0, 0.0, 1.0, 0.0])
    assert np.allclose(result[:3], [1.0, 0.0, 0.0])


@pytest.mark.parametrize("angles", [(0.2, 0.0, 0.0), (0.0, 1.3, 0.0), (0.0, 0.0, -0.7), (0.4, -1.2, 2.5)])
def test_rotation_is_proper_orthonormal(angles):
    rotation = yaw_pitch_roll(*angles)[:3, :3]
    assert np.allclose(rotation @ rotation.T, np.eye(3))
    assert np.linalg.det(rotation) == pytest.approx(1.0)


def test_rotation_is_yaw_after_pitch_after_roll():
    combined = yaw_pitch_roll(0.4, -1.2, 2.5)
    separate = yaw_pitch_roll(0.4, 0.0, 0.0) @ yaw_pitch_roll(0.0, -1.2, 0.0) @ yaw_pitch_roll(0.0, 0.0, 2.5)
    assert np.allclose(combined, separate)


def test_deserialize_reads_degrees():
    t = Transform()
    t.deserialize({"position": [1, 2, 3], "rotation": [0, 90, 45], "scale": [2, 2, 2], "radius": 5})
    assert np.allclose(t.position, [1, 2, 3])
    assert np.allclose(t.rotation, np.radians([0, 90, 45]))
    assert np.allclose(t.scale, [2, 2, 2])
    assert t.radius == 5


def test_deserialize_keeps_missing_values():
    t = Transform(position=np.array([4.0, 5.0, 6.0]), radius=3)
    t.deserialize({"scale": [1, 2, 3]})
    assert np.allclose(t.position, [4.0, 5.0, 6.0])
    assert np.allclose(t.rotation, [0.0, 0.0, 0.0])
    assert np.allclose(t.scale, [1, 2, 3])
    assert t.radius == 3


def test_deserialize_rejects_non_object():
    with pytest.raises(TypeError):
        Transform().deserialize([1, 2, 3])


def test_deserialize_rejects_short_vector():
    with pytest.raises(ValueError):
        Transform().deserialize({"position": [1, 2]})