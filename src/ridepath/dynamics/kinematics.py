"""
Kinematics of a rig suspended from fixed anchors and following a path.

The rig's position is taken directly from the path. Its orientation
follows the travel direction through a low-pass filter: each update
moves the current orientation a small fraction of the way toward a
"gentled" target that faces along the path with a little bank and
pitch added. Rope lengths are the straight-line distances from each
anchor (pole top) to the rig.

Frames follow `ridepath.utils.orientation`: world up is +Y and the
rig's forward axis is +Z.
"""
from __future__ import annotations

import warnings
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.spatial.transform import Rotation as R

from ridepath.profiles import KinematicsParams, RideProfile
from ridepath.utils.orientation import (
    RIG_EULER_ORDER,
    WORLD_UP,
    frame_from_direction,
    identity,
    orientation_from_basis,
    slerp,
)
from ridepath.utils.validation import as_points, as_vector, validate_positive

# Reference rig layout: four poles on a square
POLE_HEIGHT = 20.0
POLE_SPACING = 15.0
DEFAULT_ROPE_LENGTH = 1.0


def default_anchors(height: float = POLE_HEIGHT, spacing: float = POLE_SPACING) -> NDArray[np.float64]:
    """
    Pole tops of the reference four-pole rig.

    Ordered front-left, front-right, back-right, back-left.

    Returns
    -------
    NDArray[np.float64]
        Array of shape (4, 3).
    """
    validate_positive(spacing, "spacing")
    h = 0.5 * spacing
    anchors = np.array([
        [-h, height, -h],
        [h, height, -h],
        [h, height, h],
        [-h, height, h],
    ], dtype=np.float64)
    anchors.setflags(write=False)
    return anchors


@dataclass(frozen=True, eq=False)
class RigPose:
    """
    Snapshot of the rig after one kinematics update.

    Attributes
    ----------
    position : NDArray[np.float64]
        Rig position in world frame (3,)
    orientation : NDArray[np.float64]
        Unit quaternion [x, y, z, w]
    rope_lengths : NDArray[np.float64]
        Distance from each anchor to the rig (K,)
    """

    position: NDArray[np.float64]
    orientation: NDArray[np.float64]
    rope_lengths: NDArray[np.float64] = field(default_factory=lambda: np.zeros(0))

    def as_dict(self) -> dict:
        """Flat dictionary for logging."""
        out = {
            "p_x": float(self.position[0]),
            "p_y": float(self.position[1]),
            "p_z": float(self.position[2]),
            "q_x": float(self.orientation[0]),
            "q_y": float(self.orientation[1]),
            "q_z": float(self.orientation[2]),
            "q_w": float(self.orientation[3]),
        }
        for i, length in enumerate(self.rope_lengths):
            out[f"rope_{i}"] = float(length)
        return out


class KinematicsEngine:
    """
    Stateful pose tracker for one simulated rig.

    Parameters
    ----------
    anchors : array-like
        Fixed anchor points, shape (K, 3). Copied and frozen.
    initial_position : array-like
        Rig position before the first update. Default origin.
    params : KinematicsParams | RideProfile | None
        Kinematics constants, or a ride profile whose constants are
        used. Default is the rollercoaster profile.

    Attributes
    ----------
    anchors : NDArray[np.float64]
        Read-only anchor set (K, 3)
    position : NDArray[np.float64]
        Current rig position (3,)
    orientation : NDArray[np.float64]
        Current rig orientation [x, y, z, w]
    rope_lengths : NDArray[np.float64]
        Current anchor distances (K,). All 1.0 until the first update.
    params : KinematicsParams
        Active constants

    Notes
    -----
    The orientation is a running filter: every call feeds the previous
    orientation into the next. One engine must therefore belong to one
    session and be driven from one call site at a fixed cadence.

    Examples
    --------
    >>> engine = KinematicsEngine(default_anchors(), initial_position=[0, 14, 0])
    >>> current, ahead = sampler.sample_pair(progress)
    >>> pose = engine.update(current, ahead)
    >>> pose.rope_lengths
    """

    def __init__(
        self,
        anchors: ArrayLike,
        initial_position: ArrayLike = (0.0, 0.0, 0.0),
        params: KinematicsParams | RideProfile | None = None,
    ) -> None:
        if params is None:
            params = RideProfile.ROLLERCOASTER
        if isinstance(params, RideProfile):
            params = params.kinematics
        self.params: KinematicsParams = params

        anchors = np.array(as_points(anchors, "anchors"), copy=True)
        anchors.setflags(write=False)
        self.anchors = anchors

        self._initial_position = as_vector(initial_position, "initial_position").copy()
        self.reset()

    def reset(self, position: ArrayLike | None = None) -> None:
        """
        Restore the initial state.

        Parameters
        ----------
        position : array-like | None
            New rig position. If None, the constructor's initial position.
        """
        if position is None:
            self.position = self._initial_position.copy()
        else:
            self.position = as_vector(position, "position").copy()
        self.orientation = identity()
        self.rope_lengths = np.full(len(self.anchors), DEFAULT_ROPE_LENGTH, dtype=np.float64)

    def target_orientation(self, direction: NDArray[np.float64]) -> NDArray[np.float64] | None:
        """
        Gentled orientation the rig is steered toward for `direction`.

        Builds a frame facing along `direction` with world up as the up
        hint, decomposes it into yaw/pitch/roll, then adds a small pitch
        proportional to the vertical component and a small bank
        proportional to the world-Z component of `direction`.

        Returns None when `direction` is parallel to world up, where no
        heading can be derived.
        """
        frame = frame_from_direction(direction, WORLD_UP)
        if frame is None:
            return None

        target = orientation_from_basis(*frame)
        with warnings.catch_warnings():
            # Near-vertical travel sits next to the YXZ singularity; the
            # decomposition is still exact enough to recompose
            warnings.filterwarnings("ignore", message="Gimbal lock detected", category=UserWarning)
            yaw, pitch, roll = R.from_quat(target).as_euler(RIG_EULER_ORDER)

        magnitude = np.linalg.norm(direction)
        pitch += self.params.pitch_coefficient * direction[1]
        roll += self.params.bank_coefficient * direction[2] * magnitude

        return R.from_euler(RIG_EULER_ORDER, [yaw, pitch, roll]).as_quat()

    def update(self, current_point: ArrayLike, next_point: ArrayLike) -> RigPose:
        """
        Advance the rig to `current_point`, facing toward `next_point`.

        Parameters
        ----------
        current_point : array-like
            Path point at the current progress (3,)
        next_point : array-like
            Path point slightly ahead (3,)

        Returns
        -------
        RigPose
            Independent snapshot of the new state.

        Notes
        -----
        When the two points (nearly) coincide the orientation is left
        unchanged, but position and rope lengths are still updated.
        """
        current = as_vector(current_point, "current_point")
        ahead = as_vector(next_point, "next_point")

        delta = ahead - current
        n = np.linalg.norm(delta)
        direction = delta / n if n > 0.0 else np.zeros(3)

        if np.linalg.norm(direction) > self.params.min_direction and np.all(np.isfinite(direction)):
            target = self.target_orientation(direction)
            if target is not None:
                blended = slerp(self.orientation, target, self.params.slerp_factor)
                if np.all(np.isfinite(blended)):
                    self.orientation = blended

        self.position = current.copy()
        self._update_rope_lengths()
        return self.pose()

    def _update_rope_lengths(self) -> None:
        if len(self.anchors) == 0:
            return
        self.rope_lengths = np.linalg.norm(self.anchors - self.position, axis=1)

    def pose(self) -> RigPose:
        """Snapshot of the current state."""
        return RigPose(
            position=self.position.copy(),
            orientation=self.orientation.copy(),
            rope_lengths=self.rope_lengths.copy(),
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(anchors={len(self.anchors)}, "
            f"position={np.round(self.position, 3).tolist()})"
        )
