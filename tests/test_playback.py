from __future__ import annotations

from playback import PlaybackEstimator


def test_position_advances_while_playing() -> None:
    estimator = PlaybackEstimator(duration_ms=180000)
    estimator.start(position_ms=1000, now=50000)

    assert estimator.position(now=50000) == 1000
    assert estimator.position(now=52500) == 3500


def test_position_is_clamped_to_duration() -> None:
    estimator = PlaybackEstimator(duration_ms=10000)
    estimator.start(position_ms=9000, now=0)

    assert estimator.position(now=5000) == 10000


def test_position_frozen_while_paused() -> None:
    estimator = PlaybackEstimator(duration_ms=180000)
    estimator.start(now=0)
    estimator.pause(now=4000)

    assert estimator.position(now=60000) == 4000

    estimator.resume(now=60000)
    assert estimator.position(now=61000) == 5000


def test_pause_and_resume_are_idempotent() -> None:
    estimator = PlaybackEstimator(duration_ms=180000)
    estimator.start(now=0)
    estimator.pause(now=1000)
    estimator.pause(now=3000)
    estimator.resume(now=5000)
    estimator.resume(now=9000)

    assert estimator.position(now=10000) == 6000


def test_seek_moves_anchor() -> None:
    estimator = PlaybackEstimator(duration_ms=180000)
    estimator.start(now=0)
    estimator.seek(30000, now=2000)

    assert estimator.position(now=3000) == 31000

    estimator.seek(-50, now=3000)
    assert estimator.position(now=3000) == 0


def test_sync_adopts_player_state() -> None:
    estimator = PlaybackEstimator()
    estimator.start(now=0)
    estimator.sync(position_ms=42000, is_playing=False, duration_ms=200000, now=1000)

    assert estimator.duration_ms == 200000
    assert estimator.position(now=9000) == 42000

    estimator.sync(position_ms=42000, is_playing=True, now=9000)
    assert estimator.position(now=10000) == 43000


def test_unknown_duration_is_not_clamped() -> None:
    estimator = PlaybackEstimator()
    estimator.start(position_ms=0, now=0)

    assert estimator.position(now=999999) == 999999


def test_expired() -> None:
    estimator = PlaybackEstimator(duration_ms=180000)
    estimator.start(now=0)

    assert not estimator.expired(30000, now=29999)
    assert estimator.expired(30000, now=30000)


def test_sync_from_player_payload() -> None:
    estimator = PlaybackEstimator()
    state = {"is_playing": True, "progress_ms": 5000, "item": {"duration_ms": 6000}}

    estimator.sync_from_player(state, now=100)

    assert estimator.duration_ms == 6000
    assert estimator.position(now=1100) == 6000
    assert estimator.position(now=600) == 5500


def test_sync_from_empty_player() -> None:
    estimator = PlaybackEstimator(duration_ms=10000)
    estimator.start(position_ms=3000, now=0)

    estimator.sync_from_player(None, now=500)

    assert estimator.is_playing is False
    assert estimator.position(now=9000) == 0
