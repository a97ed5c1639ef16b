"""
Scenario API: Fluent interface for defining and running rides.
"""
from __future__ import annotations

from pathlib import Path

import numpy as np

from ridepath.core.playback import PLAYBACK_PRESETS, PlaybackScheduler
from ridepath.core.session import RideSession
from ridepath.dynamics.kinematics import default_anchors
from ridepath.geometry.path import SIMULATION_TOTAL_DIVISIONS, PathBuilder, resize_offsets
from ridepath.geometry.sampler import CurveSampler
from ridepath.profiles import KINEMATICS_PRESETS, KinematicsParams, RideProfile
from ridepath.utils.io import load_course
from ridepath.utils.validation import as_points


class Scenario:
    """
    Assemble a course, rig and playback settings, then ride it.

    Examples
    --------
    >>> scenario = (
    ...     Scenario("demo")
    ...     .set_course([(-6, 2, 0), (-2, 4, 3), (0, 2, 5), (3, 6, 2), (8, 1, 0)])
    ...     .set_offset(1, (0, 2, 0))
    ...     .configure_playback("default", speed=2)
    ... )
    >>> session = scenario.run()
    """

    def __init__(self, name: str, output_dir: str | None = "output", log: bool = True):
        self.name = name
        self._output_dir = Path(output_dir) if output_dir is not None else None
        self._log = log and output_dir is not None

        self.points = np.zeros((0, 3))
        self.offsets = np.zeros((0, 3))
        self.anchors = default_anchors()
        self.profile = RideProfile.ROLLERCOASTER
        self.closed = False
        self.total_divisions = SIMULATION_TOTAL_DIVISIONS
        self.divisions_per_segment: int | None = None
        self._show_plots = False
        self._auto_save_plots = False

        self._kinematics: KinematicsParams = KINEMATICS_PRESETS["default"]
        self._playback_params = PLAYBACK_PRESETS["default"].copy()
        self._speed = 1.0
        self.session: RideSession | None = None

    # --- Course ---

    def set_course(self, points, offsets=None, closed: bool = False) -> 'Scenario':
        """Set control points and (optionally) segment offsets."""
        self.points = as_points(points, "points").copy()
        self.closed = closed
        self.offsets = resize_offsets(offsets, len(self.points), closed)
        return self

    def load_course(self, filepath: str, closed: bool = False) -> 'Scenario':
        """Read control points and offsets from a JSON course file."""
        points, offsets = load_course(filepath)
        return self.set_course(points, offsets, closed=closed)

    def set_offset(self, segment: int, offset) -> 'Scenario':
        """Displace one segment's curve handle."""
        if not 0 <= segment < len(self.offsets):
            raise IndexError(f"Segment {segment} out of range for {len(self.offsets)} segments")
        self.offsets[segment] = np.asarray(offset, dtype=float)
        return self

    def set_resolution(self, total_divisions: int | None = None, divisions_per_segment: int | None = None) -> 'Scenario':
        """Choose path resolution: a total spread over segments, or a fixed per-segment count."""
        if total_divisions is not None:
            self.total_divisions = int(total_divisions)
        self.divisions_per_segment = divisions_per_segment
        return self

    def set_anchors(self, anchors=None, height: float | None = None, spacing: float | None = None) -> 'Scenario':
        """Explicit anchors, or the four-pole layout at a given height/spacing."""
        if anchors is not None:
            self.anchors = as_points(anchors, "anchors").copy()
        else:
            kwargs = {}
            if height is not None:
                kwargs["height"] = height
            if spacing is not None:
                kwargs["spacing"] = spacing
            self.anchors = default_anchors(**kwargs)
        return self

    # --- Configuration ---

    def set_profile(self, profile: RideProfile | str) -> 'Scenario':
        """Select the ride profile by member or label (e.g. "Rollercoaster")."""
        if isinstance(profile, str):
            profile = RideProfile.from_label(profile)
        profile.require_enabled()
        self.profile = profile
        self._kinematics = profile.kinematics
        return self

    def configure_kinematics(self, preset: str = "default", **kwargs) -> 'Scenario':
        """
        Configure kinematics with a preset or custom overrides.

        Presets: 'default', 'gentle', 'responsive', 'rigid'
        Kwargs: slerp_factor, bank_coefficient, pitch_coefficient, min_direction
        """
        if preset not in KINEMATICS_PRESETS:
            raise ValueError(f"Unknown kinematics preset '{preset}'. Valid options: {list(KINEMATICS_PRESETS)}")
        self._kinematics = KINEMATICS_PRESETS[preset].with_overrides(**kwargs)
        return self

    def configure_playback(self, preset: str = "default", speed: float | None = None, **kwargs) -> 'Scenario':
        """
        Configure playback with a preset or custom overrides.

        Presets: 'default', 'realtime', 'preview'
        Kwargs: base_rate, nominal_tick_ms, scale_by_elapsed
        """
        if preset not in PLAYBACK_PRESETS:
            raise ValueError(f"Unknown playback preset '{preset}'. Valid options: {list(PLAYBACK_PRESETS)}")
        self._playback_params = PLAYBACK_PRESETS[preset].copy()
        self._playback_params.update(kwargs)
        if speed is not None:
            self._speed = float(speed)
        return self

    def enable_plotting(self, show: bool = False) -> 'Scenario':
        """Generate plots at the end of the ride (requires logging)."""
        self._show_plots = show
        self._auto_save_plots = not show
        return self

    # --- Build & run ---

    def builder(self) -> PathBuilder:
        return PathBuilder(
            divisions_per_segment=self.divisions_per_segment,
            total_divisions=self.total_divisions,
            closed=self.closed,
        )

    def build_session(self) -> RideSession:
        """Create the RideSession for the current configuration."""
        sampler = CurveSampler(self.builder().build(self.points, self.offsets))
        scheduler = PlaybackScheduler(speed_multiplier=self._speed, **self._playback_params)
        self.session = RideSession(
            sampler,
            anchors=self.anchors,
            profile=self._kinematics,
            scheduler=scheduler,
            simulation_name=self.name if self._log else None,
            output_dir=self._output_dir,
            auto_save_plots=self._auto_save_plots and self._log,
            keep_history=True,
        )
        return self.session

    def run(self, max_ticks: int | None = None, log_interval: float = 1.0) -> RideSession:
        print(f"Running Scenario: {self.name}")
        if len(self.points) < 2:
            raise ValueError("A course needs at least 2 control points. Call set_course() first.")

        session = self.build_session()
        print(f"[Scenario] Profile: {self.profile.label}, {len(session.sampler)} path points")
        session.run(max_ticks=max_ticks, log_interval=log_interval)

        if self._show_plots and session.logger is not None:
            print("[Scenario] Generating plots...")
            session.save_plots(show=True)

        return session
