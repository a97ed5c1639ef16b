"""
Validation utilities for path inputs and simulation parameters.

Provides functions that coerce user-supplied point lists into numpy
arrays and reject programmer errors early with descriptive messages.
Numerically degenerate but well-formed input (coincident points,
too few control points) is never rejected here; the engine absorbs it.
"""
from __future__ import annotations

import math
import warnings

import numpy as np
from numpy.typing import ArrayLike, NDArray


def validate_positive(value: float, name: str, strict: bool = True) -> None:
    """
    Validate that a scalar value is positive.

    Parameters
    ----------
    value : float
        Value to validate
    name : str
        Parameter name for error messages
    strict : bool
        If True, raise ValueError. If False, issue warning.

    Raises
    ------
    ValueError
        If strict=True and value is not > 0 (NaN included)
    """
    if not value > 0:
        msg = f"{name} must be positive, got {value}"
        if strict:
            raise ValueError(msg)
        else:
            warnings.warn(msg, RuntimeWarning, stacklevel=2)


def as_count(value: float, name: str) -> int:
    """
    Validate a positive whole-number count and return it as an int.

    Raises
    ------
    ValueError
        If value is not positive or has a fractional part
    """
    validate_positive(value, name)
    if int(value) != value:
        raise ValueError(f"{name} must be a whole number, got {value}")
    return int(value)


def validate_non_negative(value: float, name: str) -> None:
    """Validate that a value is non-negative."""
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_fraction(value: float, name: str) -> None:
    """Validate that a value lies in the closed interval [0, 1]."""
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {value}")


def clamp_progress(progress: float) -> float:
    """
    Clamp a progress value to [0, 1].

    NaN maps to 0, the start of the path.
    """
    p = float(progress)
    if math.isnan(p):
        return 0.0
    return min(max(p, 0.0), 1.0)


def as_points(points: ArrayLike | None, name: str = "points") -> NDArray[np.float64]:
    """
    Coerce a sequence of 3D points into a float64 array of shape (N, 3).

    Parameters
    ----------
    points : array-like | None
        Sequence of (x, y, z) triples. None or an empty sequence gives
        an empty (0, 3) array.
    name : str
        Parameter name for error messages

    Returns
    -------
    NDArray[np.float64]
        Array of shape (N, 3)

    Raises
    ------
    ValueError
        If the input cannot be read as a list of 3D points
    """
    if points is None:
        return np.zeros((0, 3), dtype=np.float64)

    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return np.zeros((0, 3), dtype=np.float64)
    if arr.ndim == 1 and arr.shape[0] == 3:
        arr = arr[None, :]
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"{name} must have shape (N, 3), got {arr.shape}")
    return arr


def as_vector(v: ArrayLike, name: str = "vector") -> NDArray[np.float64]:
    """Coerce a single 3D vector into a float64 array of shape (3,)."""
    arr = np.asarray(v, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"{name} must have shape (3,), got {arr.shape}")
    return arr


def validate_offsets(
    offsets: NDArray[np.float64],
    n_segments: int,
) -> None:
    """
    Check the segment offset count against the number of segments.

    Missing offsets are legal (they default to zero). Extra offsets are
    ignored, which usually means the caller forgot to resize the list
    after removing a control point, so a warning is issued.
    """
    if len(offsets) > n_segments:
        warnings.warn(
            f"Got {len(offsets)} segment offsets for {n_segments} segments. "
            "Extra offsets are ignored.",
            RuntimeWarning,
            stacklevel=3
        )
