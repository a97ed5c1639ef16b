"""
Dense path construction from control points and segment offsets.

Every consecutive pair of control points is joined by a quadratic
Bézier segment whose middle control point is the segment midpoint
displaced by that segment's offset. With all offsets zero the segment
is a straight line.

The resulting dense path is a plain (M, 3) array. It is recomputed from
scratch whenever the inputs change and is returned read-only.
"""
from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ridepath.utils.validation import as_count, as_points, validate_offsets

# Reference resolution: total divisions spread over all segments
DEFAULT_TOTAL_DIVISIONS = 50
# Resolution used by the ride simulation view
SIMULATION_TOTAL_DIVISIONS = 100

# Support beam layout used by the course editor
SUPPORT_SPACING = 8
SUPPORT_MIN_HEIGHT = 0.5


def segment_count(n_points: int, closed: bool = False) -> int:
    """Number of Bézier segments for `n_points` control points."""
    if n_points < 2:
        return 0
    if closed and n_points >= 3:
        return n_points
    return n_points - 1


def divisions_for_total(total_divisions: int, n_points: int, closed: bool = False) -> int:
    """
    Per-segment divisions when `total_divisions` is spread over a path.

    Rounds up, so short paths still get at least one division per segment.

    Examples
    --------
    >>> divisions_for_total(50, 5)
    13
    >>> divisions_for_total(50, 2)
    50
    """
    n_seg = segment_count(n_points, closed)
    if n_seg == 0:
        return max(1, int(total_divisions))
    return max(1, math.ceil(total_divisions / n_seg))


def quadratic_bezier(
    p0: NDArray[np.float64],
    c: NDArray[np.float64],
    p1: NDArray[np.float64],
    divisions: int,
) -> NDArray[np.float64]:
    """
    Sample a quadratic Bézier curve at `divisions + 1` evenly spaced t values.

    B(t) = (1-t)² p0 + 2(1-t)t c + t² p1, t = k / divisions, k = 0..divisions.

    Returns
    -------
    NDArray[np.float64]
        Array of shape (divisions + 1, 3); first row is p0, last row is p1.
    """
    t = np.linspace(0.0, 1.0, divisions + 1)[:, None]
    s = 1.0 - t
    pts = (s * s) * p0 + (2.0 * s * t) * c + (t * t) * p1
    # Pin the endpoints exactly; shared joints must match bit for bit
    pts[0] = p0
    pts[-1] = p1
    return pts


def resize_offsets(
    offsets: ArrayLike | None,
    n_points: int,
    closed: bool = False,
) -> NDArray[np.float64]:
    """
    Resize an offset list to match `n_points` control points.

    Existing offsets are kept in order, missing ones are zero-filled and
    surplus ones dropped. This mirrors what the editor does after a point
    is added or removed.
    """
    current = as_points(offsets, "offsets")
    resized = np.zeros((segment_count(n_points, closed), 3), dtype=np.float64)
    n = min(len(current), len(resized))
    resized[:n] = current[:n]
    return resized


def build_dense_path(
    control_points: ArrayLike,
    offsets: ArrayLike | None = None,
    divisions_per_segment: int = DEFAULT_TOTAL_DIVISIONS,
    closed: bool = False,
) -> NDArray[np.float64]:
    """
    Expand control points and segment offsets into a dense point list.

    Parameters
    ----------
    control_points : array-like
        Ordered control points, shape (N, 3).
    offsets : array-like | None
        One offset per segment, shape (N-1, 3) for open paths and (N, 3)
        for closed ones. Missing offsets are treated as zero.
    divisions_per_segment : int
        Bézier divisions per segment; each segment yields
        `divisions_per_segment + 1` samples before join de-duplication.
    closed : bool
        If True and N >= 3, add a final segment back to the first point.

    Returns
    -------
    NDArray[np.float64]
        Read-only array of shape (M, 3). Empty (0, 3) when N < 2.

    Raises
    ------
    ValueError
        If `divisions_per_segment` < 1 or the inputs are not 3D points.

    Examples
    --------
    >>> path = build_dense_path([(0, 0, 0), (2, 0, 0)], divisions_per_segment=4)
    >>> path[:, 0]
    array([0. , 0.5, 1. , 1.5, 2. ])
    """
    divisions = as_count(divisions_per_segment, "divisions_per_segment")

    pts = as_points(control_points, "control_points")
    n_seg = segment_count(len(pts), closed)
    if n_seg == 0:
        empty = np.zeros((0, 3), dtype=np.float64)
        empty.setflags(write=False)
        return empty

    offs = as_points(offsets, "offsets")
    validate_offsets(offs, n_seg)

    pieces: list[NDArray[np.float64]] = []
    for i in range(n_seg):
        start = pts[i]
        end = pts[(i + 1) % len(pts)]
        offset = offs[i] if i < len(offs) else np.zeros(3)

        mid = 0.5 * (start + end)
        segment = quadratic_bezier(start, mid + offset, end, divisions)

        # Later segments drop their first sample (the shared joint)
        pieces.append(segment if i == 0 else segment[1:])

    dense = np.vstack(pieces)
    dense.setflags(write=False)
    return dense


class PathBuilder:
    """
    Reusable dense-path builder with fixed resolution settings.

    Parameters
    ----------
    divisions_per_segment : int | None
        Fixed per-segment divisions. If None, `total_divisions` is spread
        across the segments of each path being built.
    total_divisions : int
        Total divisions shared by all segments when
        `divisions_per_segment` is None. Default 50.
    closed : bool
        Build closed loops (last point joins back to the first).

    Examples
    --------
    >>> builder = PathBuilder(total_divisions=100)
    >>> dense = builder.build(points, offsets)
    """

    def __init__(
        self,
        divisions_per_segment: int | None = None,
        total_divisions: int = DEFAULT_TOTAL_DIVISIONS,
        closed: bool = False,
    ) -> None:
        if divisions_per_segment is not None:
            divisions_per_segment = as_count(divisions_per_segment, "divisions_per_segment")
        self.divisions_per_segment = divisions_per_segment
        self.total_divisions = as_count(total_divisions, "total_divisions")
        self.closed = bool(closed)

    def divisions_for(self, n_points: int) -> int:
        """Per-segment divisions used for a path of `n_points` points."""
        if self.divisions_per_segment is not None:
            return self.divisions_per_segment
        return divisions_for_total(self.total_divisions, n_points, self.closed)

    def build(
        self,
        control_points: ArrayLike,
        offsets: ArrayLike | None = None,
    ) -> NDArray[np.float64]:
        """Build the dense path for the given control points and offsets."""
        pts = as_points(control_points, "control_points")
        return build_dense_path(
            pts,
            offsets,
            divisions_per_segment=self.divisions_for(len(pts)),
            closed=self.closed,
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(divisions_per_segment={self.divisions_per_segment}, "
            f"total_divisions={self.total_divisions}, closed={self.closed})"
        )


def support_positions(
    dense_path: ArrayLike,
    every: int = SUPPORT_SPACING,
    min_height: float = SUPPORT_MIN_HEIGHT,
    up_axis: int = 2,
) -> NDArray[np.float64]:
    """
    Dense-path points that carry a support beam.

    Every `every`-th point whose height component exceeds `min_height`
    gets a beam down to the ground plane. Low sections get none.

    Returns
    -------
    NDArray[np.float64]
        Array of shape (K, 3), possibly empty.
    """
    every = as_count(every, "every")
    pts = as_points(dense_path, "dense_path")
    if len(pts) == 0:
        return pts.copy()
    candidates = pts[::every]
    return candidates[candidates[:, up_axis] > min_height].copy()
