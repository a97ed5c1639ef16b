import pytest

from ridepath.core.playback import (
    BASE_RATE,
    PLAYBACK_PRESETS,
    SPEED_PRESETS,
    PlaybackScheduler,
    PlaybackState,
)


@pytest.fixture
def player():
    return PlaybackScheduler()


def test_initial_state(player):
    assert player.state is PlaybackState.PAUSED
    assert player.progress == 0.0
    assert player.speed_multiplier == 1.0


def test_tick_does_nothing_while_paused(player):
    player.tick(16, 1)
    assert player.progress == 0.0


def test_tick_advances_by_base_rate(player):
    player.play()
    player.tick(16, 1)
    assert player.progress == pytest.approx(BASE_RATE)
    player.tick(16, 2)
    assert player.progress == pytest.approx(3 * BASE_RATE)


def test_play_then_500_ticks_reaches_end(player):
    player.play()
    for _ in range(500):
        player.tick(16, 1)
        assert 0.0 <= player.progress <= 1.0
    assert player.progress == 1.0
    assert player.state is PlaybackState.PAUSED


def test_end_clamps_exactly_to_one(player):
    player.seek(0.999)
    player.play()
    player.tick(16, 4)
    assert player.progress == 1.0
    assert not player.is_playing


def test_ticks_after_end_are_ignored(player):
    player.play()
    while player.is_playing:
        player.tick()
    player.tick(16, 4)
    assert player.progress == 1.0


def test_play_at_end_restarts(player):
    player.seek(1.0)
    player.play()
    assert player.progress == 0.0
    assert player.is_playing


def test_pause_keeps_progress(player):
    player.play()
    for _ in range(10):
        player.tick()
    player.pause()
    kept = player.progress
    player.tick()
    assert player.progress == kept
    assert player.state is PlaybackState.PAUSED


def test_toggle(player):
    assert player.toggle() is PlaybackState.PLAYING
    assert player.toggle() is PlaybackState.PAUSED


def test_seek_clamps(player):
    assert player.seek(-3) == 0.0
    assert player.seek(7) == 1.0
    assert player.seek(0.4) == pytest.approx(0.4)


def test_seek_nan_goes_to_start(player):
    player.play()
    player.tick()
    assert player.seek(float("nan")) == 0.0
    assert player.percent == 0
    assert player.is_playing


def test_playback_ends_after_seek_nan(player):
    player.play()
    player.seek(float("nan"))
    for _ in range(1000):
        player.tick(16)
    assert player.progress == 1.0
    assert player.state is PlaybackState.PAUSED


def test_nan_tick_leaves_progress_unchanged(player):
    player.play()
    player.tick()
    before = player.progress
    assert player.tick(speed_multiplier=float("nan")) == before
    assert player.is_playing


def test_nan_elapsed_time_leaves_progress_unchanged():
    player = PlaybackScheduler(scale_by_elapsed=True)
    player.play()
    assert player.tick(float("nan")) == 0.0


def test_infinite_tick_ends_playback(player):
    player.play()
    assert player.tick(speed_multiplier=float("inf")) == 1.0
    assert player.state is PlaybackState.PAUSED


def test_seek_while_paused_stays_paused(player):
    player.seek(0.5)
    assert player.state is PlaybackState.PAUSED


def test_seek_to_end_while_playing_pauses(player):
    player.play()
    player.seek(1.0)
    assert player.state is PlaybackState.PAUSED


def test_seek_inside_while_playing_keeps_playing(player):
    player.play()
    player.seek(0.3)
    assert player.is_playing


def test_stored_speed_multiplier(player):
    player.speed_multiplier = 4
    player.play()
    player.tick()
    assert player.progress == pytest.approx(4 * BASE_RATE)


@pytest.mark.parametrize("value", [0, -1, float("nan")])
def test_invalid_speed_multiplier(player, value):
    with pytest.raises(ValueError):
        player.speed_multiplier = value


def test_fixed_cadence_ignores_elapsed_time(player):
    player.play()
    player.tick(100, 1)
    assert player.progress == pytest.approx(BASE_RATE)


def test_scale_by_elapsed():
    player = PlaybackScheduler(scale_by_elapsed=True)
    player.play()
    player.tick(32, 1)
    assert player.progress == pytest.approx(2 * BASE_RATE)


def test_percent(player):
    player.seek(0.456)
    assert player.percent == 46


def test_reset(player):
    player.play()
    player.tick()
    player.reset()
    assert player.progress == 0.0
    assert player.state is PlaybackState.PAUSED


@pytest.mark.parametrize("speed", SPEED_PRESETS)
def test_ticks_to_end_matches_playback(speed):
    player = PlaybackScheduler(speed_multiplier=speed)
    expected = player.ticks_to_end()
    player.play()
    ticks = 0
    while player.is_playing:
        player.tick()
        ticks += 1
    assert ticks == expected


def test_presets_construct():
    for params in PLAYBACK_PRESETS.values():
        PlaybackScheduler(**params)


def test_invalid_rates():
    with pytest.raises(ValueError):
        PlaybackScheduler(base_rate=0)
    with pytest.raises(ValueError):
        PlaybackScheduler(nominal_tick_ms=-16)
