"""
Playback Timing Verification Tests.

Tests tick counts and ride durations against closed-form values:
- Ticks to end N = ceil(1 / (rate * speed))
- Ride duration T = N * tick period
- Elapsed-time scaling halves the ticks when the period doubles
"""

import math

import pytest

from ridepath.core.playback import BASE_RATE, NOMINAL_TICK_MS, SPEED_PRESETS, PlaybackScheduler
from ridepath.core.session import RideSession


@pytest.mark.parametrize("speed", SPEED_PRESETS)
def test_ticks_to_end_matches_closed_form(speed):
    expected = math.ceil(round(1.0 / (BASE_RATE * speed), 9))
    player = PlaybackScheduler(speed_multiplier=speed)
    assert player.ticks_to_end() == expected

    player.play()
    ticks = 0
    while player.is_playing:
        player.tick()
        ticks += 1
    assert ticks == expected
    assert player.progress == 1.0


@pytest.mark.parametrize("speed", SPEED_PRESETS)
def test_ride_duration(reference_points, speed):
    session = RideSession.from_control_points(reference_points)
    session.set_speed(speed)
    ticks = session.run(log_interval=0)
    assert session.t == pytest.approx(ticks * NOMINAL_TICK_MS / 1000.0)
    assert session.t == pytest.approx(8.0 / speed)


def test_elapsed_scaling_halves_ticks():
    player = PlaybackScheduler(scale_by_elapsed=True)
    player.play()
    ticks = 0
    while player.is_playing:
        player.tick(2 * NOMINAL_TICK_MS)
        ticks += 1
    assert ticks == 250


def test_resume_from_midway():
    player = PlaybackScheduler()
    player.seek(0.25)
    assert player.ticks_to_end() == 375
    assert player.ticks_to_end(speed_multiplier=0.5) == 750
