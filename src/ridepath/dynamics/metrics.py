"""
Ride telemetry from finite differences of path position.

Speed and G-forces are derived from three samples around the current
progress. The scale constants turn progress-space differences into
readouts of a plausible magnitude; they are not a unit calibration.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass

import numpy as np
import pandas as pd

from ridepath.geometry.sampler import CurveSampler
from ridepath.utils.validation import as_count, validate_fraction, validate_positive

DEFAULT_DELTA = 0.01
SPEED_SCALE = 50.0
G_SCALE = 10.0


@dataclass(frozen=True)
class TelemetrySnapshot:
    """
    Instantaneous ride readout.

    Attributes
    ----------
    speed : float
        Scaled speed [m/s]
    total_g : float
        Magnitude of the scaled acceleration [g]
    vertical_g : float
        Scaled |a_y| [g]
    lateral_g : float
        Scaled horizontal acceleration sqrt(a_x² + a_z²) [g]
    altitude : float
        Height (y) of the current point [m]
    """

    speed: float = 0.0
    total_g: float = 0.0
    vertical_g: float = 0.0
    lateral_g: float = 0.0
    altitude: float = 0.0

    def as_dict(self) -> dict[str, float]:
        """Plain dictionary for logging and display."""
        return asdict(self)


class MetricsCalculator:
    """
    Stateless telemetry calculator.

    Parameters
    ----------
    delta : float
        Progress step between the three samples. Default 0.01.
    speed_scale : float
        Multiplier from |velocity| to displayed speed. Default 50.
    g_scale : float
        Multiplier from |acceleration| to displayed G. Default 10.

    Notes
    -----
    Samples are taken at clamp(p - delta), p and clamp(p + delta).
    At progress 0 and 1 one neighbour collapses onto the current point,
    so the readouts shrink near the ends of the path.

    Examples
    --------
    >>> metrics = MetricsCalculator()
    >>> snap = metrics.compute(sampler, 0.25)
    >>> round(snap.speed, 1)
    """

    def __init__(
        self,
        delta: float = DEFAULT_DELTA,
        speed_scale: float = SPEED_SCALE,
        g_scale: float = G_SCALE,
    ) -> None:
        validate_positive(delta, "delta")
        validate_fraction(delta, "delta")
        validate_positive(speed_scale, "speed_scale")
        validate_positive(g_scale, "g_scale")
        self.delta = float(delta)
        self.speed_scale = float(speed_scale)
        self.g_scale = float(g_scale)

    def compute(self, sampler: CurveSampler, progress: float) -> TelemetrySnapshot:
        """
        Telemetry at `progress` along `sampler`.

        Returns an all-zero snapshot for paths with fewer than two points.
        """
        if sampler.is_empty:
            return TelemetrySnapshot()

        p = min(max(float(progress), 0.0), 1.0)
        prev = sampler.point_at(max(p - self.delta, 0.0))
        curr = sampler.point_at(p)
        nxt = sampler.point_at(min(p + self.delta, 1.0))

        velocity = nxt - prev
        prev_velocity = curr - prev
        acceleration = velocity - prev_velocity

        return TelemetrySnapshot(
            speed=float(np.linalg.norm(velocity) * self.speed_scale),
            total_g=float(np.linalg.norm(acceleration) * self.g_scale),
            vertical_g=float(abs(acceleration[1]) * self.g_scale),
            lateral_g=float(np.hypot(acceleration[0], acceleration[2]) * self.g_scale),
            altitude=float(curr[1]),
        )

    def compute_series(self, sampler: CurveSampler, progresses: Iterable[float]) -> pd.DataFrame:
        """
        Telemetry for many progress values at once.

        Returns
        -------
        pd.DataFrame
            One row per progress value with a `progress` column followed
            by the snapshot fields.
        """
        rows = []
        for p in progresses:
            row = {"progress": float(p)}
            row.update(self.compute(sampler, p).as_dict())
            rows.append(row)
        columns = ["progress", "speed", "total_g", "vertical_g", "lateral_g", "altitude"]
        return pd.DataFrame(rows, columns=columns)

    def peak(self, sampler: CurveSampler, samples: int = 201) -> dict[str, float]:
        """Maximum of each readout over `samples` evenly spaced progress values."""
        samples = as_count(samples, "samples")
        df = self.compute_series(sampler, np.linspace(0.0, 1.0, samples))
        return {k: float(df[k].max()) for k in ("speed", "total_g", "vertical_g", "lateral_g", "altitude")}
