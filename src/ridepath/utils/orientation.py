"""
Orientation utilities for the suspended rig.

All functions exchange quaternions in scipy's scalar-last format
[x, y, z, w], which is also the format stored in RigPose.

Frame convention
----------------
The rig frame is right-handed with +Z as the forward (travel) axis,
+Y as the rig's up axis and +X pointing to the rig's right. World up
is +Y, matching the scene the rig is rendered in.

Common Use Cases
----------------
- Orient the rig along a travel direction: use `orientation_from_basis()`
- Inspect yaw/pitch/roll: use `quaternion_to_euler()`
- Blend two orientations: use `slerp()`

Examples
--------
>>> from ridepath.utils.orientation import IDENTITY, slerp
>>> q = slerp(IDENTITY, orientation_from_euler(yaw=90), 0.5)
>>> describe_orientation(q)
'Yaw: 45.0°, Pitch: 0.0°, Roll: 0.0°'
"""
from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.transform import Rotation as R
from scipy.spatial.transform import Slerp


# =============================================================================
# Identity quaternion (no rotation)
# =============================================================================

IDENTITY: NDArray[np.float64] = np.array([0.0, 0.0, 0.0, 1.0], dtype=np.float64)
"""Identity quaternion [0, 0, 0, 1] representing no rotation."""

WORLD_UP: NDArray[np.float64] = np.array([0.0, 1.0, 0.0], dtype=np.float64)
"""World up axis used to build the rig frame."""

# Intrinsic yaw (about Y), then pitch (about X), then roll (about Z)
RIG_EULER_ORDER = "YXZ"

# Below this |up x forward| the heading is undefined (pitch at ±90°)
BASIS_EPSILON = 1e-6


def identity() -> NDArray[np.float64]:
    """Return a fresh copy of the identity quaternion."""
    return IDENTITY.copy()


# =============================================================================
# Basis construction
# =============================================================================

def orientation_from_basis(
    right: NDArray[np.float64],
    up: NDArray[np.float64],
    forward: NDArray[np.float64],
) -> NDArray[np.float64]:
    """
    Create an orientation from three orthonormal axes.

    Parameters
    ----------
    right, up, forward : NDArray[np.float64]
        World-frame directions of the rig's +X, +Y and +Z axes (3,).
        They are used as the columns of the rotation matrix.

    Returns
    -------
    NDArray[np.float64]
        Quaternion [x, y, z, w].
    """
    R_mat = np.column_stack([right, up, forward])
    return R.from_matrix(R_mat).as_quat()


def frame_from_direction(
    forward: NDArray[np.float64],
    up_hint: NDArray[np.float64] = WORLD_UP,
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]] | None:
    """
    Gram-Schmidt a rig frame whose forward axis is `forward`.

    Parameters
    ----------
    forward : NDArray[np.float64]
        Unit travel direction (3,).
    up_hint : NDArray[np.float64]
        Approximate up direction. Default is world +Y.

    Returns
    -------
    tuple | None
        (right, up, forward) unit vectors, or None when `forward` is
        parallel to `up_hint` and no unique frame exists.
    """
    forward = np.asarray(forward, dtype=np.float64)
    right = np.cross(up_hint, forward)
    n = np.linalg.norm(right)
    if n < BASIS_EPSILON:
        return None
    right = right / n

    corrected_up = np.cross(forward, right)
    corrected_up = corrected_up / np.linalg.norm(corrected_up)
    return right, corrected_up, forward


def orientation_from_direction(
    forward: tuple[float, float, float] | list[float] | NDArray,
    up_hint: tuple[float, float, float] | list[float] | NDArray = (0.0, 1.0, 0.0),
) -> NDArray[np.float64] | None:
    """
    Orientation whose forward (+Z) axis points along `forward`.

    Returns None for a zero direction or one parallel to `up_hint`.

    Examples
    --------
    >>> # Travel along +X: rig yawed 90 degrees
    >>> q = orientation_from_direction([1, 0, 0])
    """
    forward = np.asarray(forward, dtype=np.float64)
    n = np.linalg.norm(forward)
    if n < BASIS_EPSILON:
        return None

    frame = frame_from_direction(forward / n, np.asarray(up_hint, dtype=np.float64))
    if frame is None:
        return None
    return orientation_from_basis(*frame)


# =============================================================================
# Euler angles (yaw, pitch, roll)
# =============================================================================

def orientation_from_euler(
    yaw: float = 0.0,
    pitch: float = 0.0,
    roll: float = 0.0,
    degrees: bool = True,
) -> NDArray[np.float64]:
    """
    Create orientation quaternion from rig Euler angles.

    Parameters
    ----------
    yaw : float
        Heading, rotation about world Y.
    pitch : float
        Nose up/down, rotation about the rig's X axis.
    roll : float
        Bank, rotation about the rig's Z (forward) axis.
    degrees : bool
        If True (default), angles are in degrees. If False, radians.

    Returns
    -------
    NDArray[np.float64]
        Quaternion [x, y, z, w].
    """
    rot = R.from_euler(RIG_EULER_ORDER, [yaw, pitch, roll], degrees=degrees)
    return rot.as_quat()


def quaternion_to_euler(
    q: NDArray[np.float64],
    degrees: bool = False,
) -> tuple[float, float, float]:
    """
    Decompose a quaternion into rig Euler angles.

    Parameters
    ----------
    q : NDArray[np.float64]
        Quaternion [x, y, z, w]
    degrees : bool
        If True, return degrees. Otherwise radians (default).

    Returns
    -------
    tuple[float, float, float]
        (yaw, pitch, roll) angles
    """
    yaw, pitch, roll = R.from_quat(q).as_euler(RIG_EULER_ORDER, degrees=degrees)
    return float(yaw), float(pitch), float(roll)


# =============================================================================
# Interpolation
# =============================================================================

def slerp(
    q_from: NDArray[np.float64],
    q_to: NDArray[np.float64],
    fraction: float,
) -> NDArray[np.float64]:
    """
    Shortest-path spherical interpolation between two orientations.

    Parameters
    ----------
    q_from, q_to : NDArray[np.float64]
        Quaternions [x, y, z, w].
    fraction : float
        0 returns `q_from`, 1 returns `q_to`.

    Returns
    -------
    NDArray[np.float64]
        Interpolated unit quaternion [x, y, z, w].
    """
    fraction = float(np.clip(fraction, 0.0, 1.0))
    key_rots = R.from_quat(np.vstack([q_from, q_to]))
    return Slerp([0.0, 1.0], key_rots)(fraction).as_quat()


def angle_between(q_a: NDArray[np.float64], q_b: NDArray[np.float64]) -> float:
    """Smallest rotation angle [rad] taking `q_a` to `q_b`."""
    delta = R.from_quat(q_a).inv() * R.from_quat(q_b)
    return float(delta.magnitude())


def describe_orientation(q: NDArray[np.float64]) -> str:
    """
    Get human-readable description of an orientation.

    Examples
    --------
    >>> describe_orientation([0, 0, 0, 1])
    'Yaw: 0.0°, Pitch: 0.0°, Roll: 0.0°'
    """
    yaw, pitch, roll = quaternion_to_euler(np.asarray(q, dtype=np.float64), degrees=True)
    return f"Yaw: {yaw:.1f}°, Pitch: {pitch:.1f}°, Roll: {roll:.1f}°"
