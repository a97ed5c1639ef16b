import numpy as np
import pytest

from ridepath.utils.orientation import (
    IDENTITY,
    angle_between,
    describe_orientation,
    frame_from_direction,
    identity,
    orientation_from_direction,
    orientation_from_euler,
    quaternion_to_euler,
    slerp,
)


def test_identity_is_a_copy():
    q = identity()
    q[0] = 5.0
    assert np.allclose(IDENTITY, [0, 0, 0, 1])


def test_forward_z_is_identity():
    q = orientation_from_direction([0, 0, 1])
    assert angle_between(q, IDENTITY) < 1e-9


def test_direction_x_is_yaw_90():
    q = orientation_from_direction([2, 0, 0])
    yaw, pitch, roll = quaternion_to_euler(q, degrees=True)
    assert yaw == pytest.approx(90.0)
    assert pitch == pytest.approx(0.0, abs=1e-9)
    assert roll == pytest.approx(0.0, abs=1e-9)


@pytest.mark.parametrize("direction", [[0, 0, 0], [0, 3, 0], [0, -1, 0], [1e-7, 1, 0]])
def test_degenerate_directions(direction):
    assert orientation_from_direction(direction) is None


def test_frame_is_orthonormal():
    forward = np.array([1.0, 2.0, -2.0]) / 3.0
    right, up, fwd = frame_from_direction(forward)
    M = np.column_stack([right, up, fwd])
    assert np.allclose(M.T @ M, np.eye(3))
    assert np.linalg.det(M) == pytest.approx(1.0)
    # Up keeps a positive world-Y component
    assert up[1] > 0


def test_euler_round_trip_order():
    q = orientation_from_euler(yaw=30, pitch=-10, roll=5)
    yaw, pitch, roll = quaternion_to_euler(q, degrees=True)
    assert (yaw, pitch, roll) == pytest.approx((30, -10, 5))


def test_slerp_endpoints_and_midpoint():
    target = orientation_from_euler(yaw=90)
    assert angle_between(slerp(IDENTITY, target, 0.0), IDENTITY) < 1e-9
    assert angle_between(slerp(IDENTITY, target, 1.0), target) < 1e-9
    mid = slerp(IDENTITY, target, 0.5)
    assert quaternion_to_euler(mid, degrees=True)[0] == pytest.approx(45.0)


def test_slerp_takes_shortest_path():
    # -q is the same rotation as q; interpolation must not go the long way
    target = orientation_from_euler(yaw=10)
    step = slerp(IDENTITY, -target, 0.5)
    assert angle_between(step, IDENTITY) == pytest.approx(np.deg2rad(5.0))


def test_describe_orientation():
    text = describe_orientation(orientation_from_euler(yaw=90))
    assert text.startswith("Yaw: 90.0°")
