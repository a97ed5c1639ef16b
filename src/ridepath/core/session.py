"""
Ride session orchestrator.

Owns one path sampler, one kinematics engine and one playback
scheduler, and advances them together once per animation tick with
optional logging and automatic output organization.
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path

import numpy as np
from numpy.typing import ArrayLike

from ridepath.core.playback import NOMINAL_TICK_MS, PlaybackScheduler, PlaybackState
from ridepath.dynamics.kinematics import (
    POLE_HEIGHT,
    KinematicsEngine,
    RigPose,
    default_anchors,
)
from ridepath.dynamics.metrics import MetricsCalculator, TelemetrySnapshot
from ridepath.geometry.path import SIMULATION_TOTAL_DIVISIONS, PathBuilder
from ridepath.geometry.sampler import CurveSampler
from ridepath.logger import CSVLogger
from ridepath.profiles import KinematicsParams, RideProfile
from ridepath.utils.validation import validate_positive

# Default output directory
DEFAULT_OUTPUT_DIR = Path("output")
# Rig starts at 70% of pole height, centred between the poles
DEFAULT_START_POSITION = (0.0, 0.7 * POLE_HEIGHT, 0.0)


class RideSession:
    """
    One simulated ride: path, rig and playback driven tick by tick.

    Parameters
    ----------
    sampler : CurveSampler
        Path to ride along.
    anchors : array-like | None
        Anchor points (pole tops). Default: `default_anchors()`.
    profile : RideProfile | KinematicsParams
        Ride profile or explicit kinematics constants.
    scheduler : PlaybackScheduler | None
        Playback driver. Default: a new scheduler with default settings.
    metrics : MetricsCalculator | None
        Telemetry calculator. Default: reference constants.
    initial_position : array-like
        Rig position before the first tick.
    tick_ms : float
        Tick period used when `step()` is called without a duration [ms].
    simulation_name : str | None
        Name used to organize output files. If None, logging is disabled.
    output_dir : Path | str | None
        Base directory for outputs. Defaults to "./output".
    auto_timestamp : bool
        Append a timestamp to the output folder name.
    auto_save_plots : bool
        Generate plots when `run()` completes (requires logging).
    keep_history : bool
        Keep a per-tick list of dict records in `history`.

    Attributes
    ----------
    t : float
        Elapsed session time [s]
    ticks : int
        Number of ticks stepped
    pose : RigPose
        Latest rig pose
    telemetry : TelemetrySnapshot
        Latest telemetry
    logger : CSVLogger | None
        Data logger instance, or None if logging disabled
    output_path : Path | None
        Path to session output directory

    Notes
    -----
    The kinematics engine is updated on every tick, also while paused,
    so the rig keeps settling toward its target orientation after
    playback stops, the way a render loop keeps drawing frames.

    **Output Organization:**
    When logging is enabled, creates:
        output_dir/
            ride_name_20260109_101530/
                logs/
                    session.csv
                plots/
                    path_3d.png
                    telemetry.png
                    rope_lengths.png

    Examples
    --------
    >>> sampler = CurveSampler(build_dense_path(points, offsets))
    >>> session = RideSession(sampler)
    >>> session.play()
    >>> while not session.step():
    ...     render(session.pose)
    """

    def __init__(
        self,
        sampler: CurveSampler,
        anchors: ArrayLike | None = None,
        profile: RideProfile | KinematicsParams = RideProfile.ROLLERCOASTER,
        scheduler: PlaybackScheduler | None = None,
        metrics: MetricsCalculator | None = None,
        initial_position: ArrayLike = DEFAULT_START_POSITION,
        tick_ms: float = NOMINAL_TICK_MS,
        simulation_name: str | None = None,
        output_dir: Path | str | None = None,
        auto_timestamp: bool = True,
        auto_save_plots: bool = False,
        keep_history: bool = False,
    ) -> None:
        validate_positive(tick_ms, "tick_ms")
        if isinstance(profile, RideProfile):
            profile.require_enabled()
        self.profile = profile

        self.sampler = sampler
        self.kinematics = KinematicsEngine(
            default_anchors() if anchors is None else anchors,
            initial_position=initial_position,
            params=profile,
        )
        self.scheduler = scheduler if scheduler is not None else PlaybackScheduler()
        self.metrics = metrics if metrics is not None else MetricsCalculator()
        self.tick_ms = float(tick_ms)

        self.t = 0.0
        self.ticks = 0
        self.pose: RigPose = self.kinematics.pose()
        self.telemetry: TelemetrySnapshot = self.metrics.compute(self.sampler, self.progress)
        self.keep_history = keep_history
        self.history: list[dict] = []

        # Output configuration
        self._simulation_name = simulation_name
        self._output_dir = Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR
        self._auto_timestamp = auto_timestamp
        self._auto_save_plots = auto_save_plots
        self.output_path: Path | None = None
        self.logger: CSVLogger | None = None

        if simulation_name is not None:
            self.enable_logging(simulation_name)

    @classmethod
    def from_control_points(
        cls,
        control_points: ArrayLike,
        offsets: ArrayLike | None = None,
        builder: PathBuilder | None = None,
        **kwargs,
    ) -> RideSession:
        """
        Build the dense path and wrap it in a new session.

        Parameters
        ----------
        control_points, offsets : array-like
            Editor inputs
        builder : PathBuilder | None
            Path builder. Default spreads 100 divisions over the path,
            the resolution of the ride view.
        **kwargs
            Forwarded to the constructor.
        """
        builder = builder if builder is not None else PathBuilder(total_divisions=SIMULATION_TOTAL_DIVISIONS)
        sampler = CurveSampler(builder.build(control_points, offsets))
        return cls(sampler, **kwargs)

    @classmethod
    def with_logging(
        cls,
        name: str,
        sampler: CurveSampler,
        anchors: ArrayLike | None = None,
        output_dir: Path | str | None = None,
        auto_save_plots: bool = True,
        **kwargs,
    ) -> RideSession:
        """
        Convenience factory to create a session with logging pre-enabled.

        Examples
        --------
        >>> session = RideSession.with_logging("loop_test", sampler)
        >>> session.run()
        """
        return cls(
            sampler,
            anchors=anchors,
            simulation_name=name,
            output_dir=output_dir,
            auto_timestamp=True,
            auto_save_plots=auto_save_plots,
            **kwargs,
        )

    def enable_logging(self, name: str | None = None) -> Path:
        """
        Enable data logging with automatic output organization.

        Creates output directory structure and initializes CSV logger.

        Raises
        ------
        ValueError
            If no session name available
        """
        if name is not None:
            self._simulation_name = name

        if self._simulation_name is None:
            raise ValueError(
                "Session name required for logging. "
                "Either pass simulation_name to __init__ or name to enable_logging()."
            )

        if self._auto_timestamp:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            folder_name = f"{self._simulation_name}_{timestamp}"
        else:
            folder_name = self._simulation_name

        self.output_path = self._output_dir / folder_name

        logs_dir = self.output_path / "logs"
        plots_dir = self.output_path / "plots"
        logs_dir.mkdir(parents=True, exist_ok=True)
        plots_dir.mkdir(parents=True, exist_ok=True)

        self.logger = CSVLogger(logs_dir / "session.csv")

        print(f"[RideSession] Logging enabled: {self.output_path}")
        print(f"              Logs: {logs_dir}")
        print(f"              Plots: {plots_dir}")

        return self.output_path

    def disable_logging(self) -> None:
        """Disable logging and close any open log files."""
        if self.logger is not None:
            self.logger.close()
            self.logger = None
            print("[RideSession] Logging disabled")

    # --- Delegated state ---

    @property
    def anchors(self) -> np.ndarray:
        return self.kinematics.anchors

    @property
    def progress(self) -> float:
        return self.scheduler.progress

    @property
    def state(self) -> PlaybackState:
        return self.scheduler.state

    @property
    def is_playing(self) -> bool:
        return self.scheduler.is_playing

    # --- Playback controls ---

    def play(self) -> None:
        """Start playback. Ignored for paths too short to ride."""
        if self.sampler.is_empty:
            print("[RideSession] Warning: path has fewer than 2 points, nothing to play.")
            return
        self.scheduler.play()

    def pause(self) -> None:
        self.scheduler.pause()

    def seek(self, value: float) -> RigPose:
        """Jump to `value` and refresh pose and telemetry there."""
        self.scheduler.seek(value)
        return self.refresh()

    def set_speed(self, multiplier: float) -> None:
        self.scheduler.speed_multiplier = multiplier

    # --- Path editing ---

    def set_path(
        self,
        control_points: ArrayLike,
        offsets: ArrayLike | None = None,
        builder: PathBuilder | None = None,
    ) -> None:
        """
        Replace the path after an edit.

        The dense path is rebuilt from scratch. Progress and rig state
        carry over, so the rig continues from where it is.
        """
        builder = builder if builder is not None else PathBuilder(total_divisions=SIMULATION_TOTAL_DIVISIONS)
        self.sampler = CurveSampler(builder.build(control_points, offsets), self.sampler.tangent_step)
        self.refresh()

    # --- Stepping ---

    def refresh(self) -> RigPose:
        """Update pose and telemetry at the current progress without advancing."""
        current, ahead = self.sampler.sample_pair(self.progress)
        self.pose = self.kinematics.update(current, ahead)
        self.telemetry = self.metrics.compute(self.sampler, self.progress)
        return self.pose

    def step(self, delta_time_ms: float | None = None) -> bool:
        """
        Advance the session by one tick.

        Parameters
        ----------
        delta_time_ms : float | None
            Tick duration [ms]. Default `tick_ms`.

        Returns
        -------
        bool
            True if playback is stopped after this tick, False otherwise

        Notes
        -----
        Performs:
        1. Advance playback progress
        2. Update rig pose from the path pair at the new progress
        3. Compute telemetry
        4. Log state (if enabled)
        """
        dt_ms = self.tick_ms if delta_time_ms is None else float(delta_time_ms)

        self.scheduler.tick(dt_ms)
        self.refresh()

        self.t += dt_ms / 1000.0
        self.ticks += 1

        if self.logger is not None:
            self.logger.log(self)
        if self.keep_history:
            self.history.append(self.record())

        return not self.scheduler.is_playing

    def record(self) -> dict:
        """Flat dictionary of the latest tick."""
        row = {"t": self.t, "progress": self.progress, "playing": self.is_playing}
        row.update(self.pose.as_dict())
        row.update(self.telemetry.as_dict())
        return row

    def run(
        self,
        max_ticks: int | None = None,
        log_interval: float = 1.0,
    ) -> int:
        """
        Play from the current progress until the end of the path.

        Parameters
        ----------
        max_ticks : int | None
            Stop after this many ticks even if the end is not reached.
        log_interval : float
            Interval [s] for printing progress to terminal. Set to <= 0 to disable.

        Returns
        -------
        int
            Number of ticks stepped.
        """
        self.play()
        if not self.is_playing:
            return 0

        last_log_time = self.t
        steps = 0
        print(
            f"[RideSession] Starting playback: {len(self.sampler)} path points, "
            f"speed={self.scheduler.speed_multiplier}x, tick={self.tick_ms}ms"
        )

        try:
            while max_ticks is None or steps < max_ticks:
                stopped = self.step()
                steps += 1
                if stopped:
                    print(f"[RideSession] Reached end of path at t={self.t:.3f}s ({steps} ticks)")
                    break

                if log_interval > 0 and (self.t - last_log_time) >= log_interval:
                    print(
                        f"[RideSession] t={self.t:6.2f}s | progress={self.scheduler.percent:3d}% "
                        f"| speed={self.telemetry.speed:6.2f} | G={self.telemetry.total_g:5.2f}"
                    )
                    last_log_time = self.t
        finally:
            if self.logger:
                self.logger.flush()

            if self._auto_save_plots and self.logger is not None:
                print("[RideSession] Auto-generating plots...")
                self.save_plots()

        return steps

    # --- Plotting ---

    def save_plots(self, show: bool = False) -> None:
        """
        Generate and save standard plots from logged data.

        Raises
        ------
        RuntimeError
            If logging is not enabled or no data logged yet
        """
        if self.logger is None or self.output_path is None:
            raise RuntimeError(
                "Logging must be enabled to save plots. "
                "Call enable_logging() or use RideSession.with_logging()."
            )

        from ridepath.visualization.plotting import (
            plot_dense_path,
            plot_rope_lengths,
            plot_telemetry,
        )

        csv_path = self.output_path / "logs" / "session.csv"
        plots_dir = self.output_path / "plots"

        if not csv_path.exists():
            raise RuntimeError(
                f"No log file found at {csv_path}. "
                "Has the session been run yet?"
            )

        plot_dense_path(
            self.sampler.points,
            anchors=self.anchors,
            save_path=str(plots_dir / "path_3d.png"),
            show=show,
        )
        plot_telemetry(str(csv_path), save_path=str(plots_dir / "telemetry.png"), show=show)
        plot_rope_lengths(str(csv_path), save_path=str(plots_dir / "rope_lengths.png"), show=show)

        print(f"[RideSession] Plots saved to: {plots_dir}")

    def close(self) -> None:
        """Flush and close the logger, if any."""
        if self.logger is not None:
            self.logger.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(points={len(self.sampler)}, "
            f"progress={self.progress:.3f}, state={self.state.name})"
        )
