"""
Playback of normalized progress with a play/pause state machine.

Manages:
- Play/pause transitions (PAUSED ⇄ PLAYING)
- Per-tick progress advance at a base rate times a speed multiplier
- End-of-path stop (progress clamps to 1 and playback pauses)
- Seeking from a slider
"""
from __future__ import annotations

import math
from enum import Enum, auto

from ridepath.utils.validation import clamp_progress, validate_positive

BASE_RATE = 0.002  # progress per nominal tick
NOMINAL_TICK_MS = 16.0
SPEED_PRESETS = (0.5, 1.0, 2.0, 4.0)
# Accumulated float steps that land within this of 1 count as the end
END_TOLERANCE = 1e-9


class PlaybackState(Enum):
    """
    Playback states.

    State Machine:
        PAUSED ⇄ PLAYING
        PLAYING → PAUSED when progress reaches 1
    """

    PAUSED = auto()
    PLAYING = auto()


class PlaybackScheduler:
    """
    Advances progress along the path over time.

    Parameters
    ----------
    base_rate : float
        Progress added per tick at speed multiplier 1. Default 0.002.
    nominal_tick_ms : float
        Tick period the base rate is calibrated for [ms]. Default 16.
    scale_by_elapsed : bool
        If True, scale each advance by delta_time_ms / nominal_tick_ms so
        the advance per second no longer depends on the tick rate.
        Default False: every tick advances by the same amount, as the
        host animation loop is expected to tick at the nominal period.
    speed_multiplier : float
        Initial playback speed multiplier. Default 1.

    Attributes
    ----------
    state : PlaybackState
        Current state, PAUSED initially
    progress : float
        Current progress in [0, 1], 0 initially

    Examples
    --------
    >>> player = PlaybackScheduler()
    >>> player.play()
    >>> while player.is_playing:
    ...     player.tick(16)
    >>> player.progress
    1.0
    """

    def __init__(
        self,
        base_rate: float = BASE_RATE,
        nominal_tick_ms: float = NOMINAL_TICK_MS,
        scale_by_elapsed: bool = False,
        speed_multiplier: float = 1.0,
    ) -> None:
        validate_positive(base_rate, "base_rate")
        validate_positive(nominal_tick_ms, "nominal_tick_ms")
        self.base_rate = float(base_rate)
        self.nominal_tick_ms = float(nominal_tick_ms)
        self.scale_by_elapsed = bool(scale_by_elapsed)

        self.state = PlaybackState.PAUSED
        self.progress = 0.0
        self._speed_multiplier = 1.0
        self.speed_multiplier = speed_multiplier

    # --- Properties ---

    @property
    def speed_multiplier(self) -> float:
        """Playback speed multiplier (e.g. 0.5, 1, 2, 4)."""
        return self._speed_multiplier

    @speed_multiplier.setter
    def speed_multiplier(self, value: float) -> None:
        validate_positive(value, "speed_multiplier")
        self._speed_multiplier = float(value)

    @property
    def is_playing(self) -> bool:
        return self.state is PlaybackState.PLAYING

    @property
    def at_end(self) -> bool:
        return self.progress >= 1.0

    @property
    def percent(self) -> int:
        """Progress as a whole percentage."""
        return int(round(self.progress * 100))

    # --- Transitions ---

    def play(self) -> None:
        """Start playing; restarts from 0 when already at the end."""
        if self.progress >= 1.0:
            self.progress = 0.0
        self.state = PlaybackState.PLAYING

    def pause(self) -> None:
        """Stop advancing. Progress is kept."""
        self.state = PlaybackState.PAUSED

    def toggle(self) -> PlaybackState:
        """Play when paused, pause when playing. Returns the new state."""
        if self.is_playing:
            self.pause()
        else:
            self.play()
        return self.state

    def tick(self, delta_time_ms: float = NOMINAL_TICK_MS, speed_multiplier: float | None = None) -> float:
        """
        Advance progress by one tick.

        Parameters
        ----------
        delta_time_ms : float
            Time since the previous tick [ms]. Only used when
            `scale_by_elapsed` is True.
        speed_multiplier : float | None
            Multiplier for this tick. If None, the stored multiplier.

        Returns
        -------
        float
            Progress after the tick.

        Notes
        -----
        Has no effect while PAUSED. Reaching the end clamps progress to
        exactly 1 and pauses. A NaN advance (from a NaN multiplier or
        elapsed time) leaves progress where it is.
        """
        if not self.is_playing:
            return self.progress

        multiplier = self._speed_multiplier if speed_multiplier is None else float(speed_multiplier)
        step = self.base_rate * multiplier
        if self.scale_by_elapsed:
            step *= max(float(delta_time_ms), 0.0) / self.nominal_tick_ms

        if math.isnan(step):
            step = 0.0
        self.progress = clamp_progress(self.progress + step)
        if self.progress >= 1.0 - END_TOLERANCE:
            self.progress = 1.0
            self.state = PlaybackState.PAUSED
        return self.progress

    def seek(self, value: float) -> float:
        """
        Jump to `value`, clamped to [0, 1]. NaN jumps to the start.

        Seeking to the end while playing pauses playback.
        """
        self.progress = clamp_progress(value)
        if self.is_playing and self.progress >= 1.0:
            self.state = PlaybackState.PAUSED
        return self.progress

    def reset(self) -> None:
        """Back to the initial state: PAUSED at progress 0."""
        self.state = PlaybackState.PAUSED
        self.progress = 0.0

    def ticks_to_end(self, speed_multiplier: float | None = None) -> int:
        """Number of nominal ticks needed from the current progress to the end."""
        multiplier = self._speed_multiplier if speed_multiplier is None else float(speed_multiplier)
        validate_positive(multiplier, "speed_multiplier")
        remaining = 1.0 - self.progress
        if remaining <= 0.0:
            return 0
        # Guard float drift so an exact multiple is not rounded up
        return math.ceil(round(remaining / (self.base_rate * multiplier), 9))

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(state={self.state.name}, "
            f"progress={self.progress:.3f}, speed={self._speed_multiplier}x)"
        )


PLAYBACK_PRESETS: dict[str, dict] = {
    "default": {"base_rate": BASE_RATE, "nominal_tick_ms": NOMINAL_TICK_MS, "scale_by_elapsed": False},
    "realtime": {"base_rate": BASE_RATE, "nominal_tick_ms": NOMINAL_TICK_MS, "scale_by_elapsed": True},
    "preview": {"base_rate": 0.01, "nominal_tick_ms": NOMINAL_TICK_MS, "scale_by_elapsed": False},
}
