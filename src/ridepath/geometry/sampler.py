"""
Parametric sampling of a dense path over normalized progress.

Progress maps onto the dense path by point index, not by arc length:
progress p lands at fractional index p * (M - 1). Where points are
packed closely the rig therefore moves slower per unit progress. The
telemetry scale constants are calibrated against this parameterization.
"""
from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ridepath.utils.validation import as_count, as_points, clamp_progress, validate_positive

DEFAULT_TANGENT_STEP = 0.01
TANGENT_EPSILON = 1e-12


class CurveSampler:
    """
    Point and tangent queries on a dense path.

    Parameters
    ----------
    dense_path : array-like
        Dense path of shape (M, 3), usually from `build_dense_path`.
    tangent_step : float
        Forward progress step used to estimate the tangent. Default 0.01.

    Attributes
    ----------
    points : NDArray[np.float64]
        Read-only copy of the dense path.
    tangent_step : float
        Progress step for tangent estimation.

    Notes
    -----
    The sampler holds no mutable state after construction and can be
    shared between sessions. Degenerate paths never raise:

    - empty path: `point_at` and `tangent_at` return zero vectors
    - single point: `point_at` returns that point, tangent is zero
    - coincident samples: tangent is zero

    Examples
    --------
    >>> sampler = CurveSampler(build_dense_path(points, offsets))
    >>> sampler.point_at(0.5)
    >>> sampler.tangent_at(0.5)
    """

    __slots__ = ("points", "tangent_step")

    def __init__(self, dense_path: ArrayLike, tangent_step: float = DEFAULT_TANGENT_STEP) -> None:
        validate_positive(tangent_step, "tangent_step")
        pts = np.array(as_points(dense_path, "dense_path"), dtype=np.float64, copy=True)
        pts.setflags(write=False)
        self.points = pts
        self.tangent_step = float(tangent_step)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_empty(self) -> bool:
        """True when the path has fewer than two points."""
        return len(self.points) < 2

    def point_at(self, progress: float) -> NDArray[np.float64]:
        """
        Position at normalized progress.

        Parameters
        ----------
        progress : float
            Normalized progress; values outside [0, 1] are clamped.

        Returns
        -------
        NDArray[np.float64]
            Interpolated point (3,).
        """
        n = len(self.points)
        if n == 0:
            return np.zeros(3, dtype=np.float64)
        if n == 1:
            return self.points[0].copy()

        index = clamp_progress(progress) * (n - 1)
        lo = int(math.floor(index))
        hi = int(math.ceil(index))
        if lo == hi:
            return self.points[lo].copy()

        frac = index - lo
        return self.points[lo] + frac * (self.points[hi] - self.points[lo])

    def tangent_at(self, progress: float) -> NDArray[np.float64]:
        """
        Unit travel direction at normalized progress.

        Estimated as the normalized difference between the point one
        `tangent_step` ahead (clamped at 1) and the current point. At
        progress 1 both samples coincide and the zero vector is returned.

        Returns
        -------
        NDArray[np.float64]
            Unit tangent (3,) or the zero vector when undefined.
        """
        if self.is_empty:
            return np.zeros(3, dtype=np.float64)

        p = clamp_progress(progress)
        delta = self.point_at(min(p + self.tangent_step, 1.0)) - self.point_at(p)
        n = np.linalg.norm(delta)
        if n < TANGENT_EPSILON:
            return np.zeros(3, dtype=np.float64)
        return delta / n

    def sample_pair(self, progress: float) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """
        Current point and the point one tangent step ahead.

        This is the pair the kinematics engine consumes each tick.
        """
        p = clamp_progress(progress)
        return self.point_at(p), self.point_at(min(p + self.tangent_step, 1.0))

    def length(self) -> float:
        """Polyline length of the dense path (course length statistic)."""
        if self.is_empty:
            return 0.0
        return float(np.linalg.norm(np.diff(self.points, axis=0), axis=1).sum())

    def sample(self, n: int) -> NDArray[np.float64]:
        """
        `n` points at evenly spaced progress values from 0 to 1.

        Useful for drawing a coarser preview of the path.
        """
        n = as_count(n, "n")
        return np.vstack([self.point_at(p) for p in np.linspace(0.0, 1.0, n)])

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(points={len(self.points)}, tangent_step={self.tangent_step})"
