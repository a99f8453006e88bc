# tests/test_nav_timing.py
"""
Unit tests for TimingTracker.

Covers:
- rolling average over the last N successes
- timeout counter and the two-clause timeout prediction
"""

from __future__ import annotations

from bot_core.nav import TimingTracker
from env.loader import TimingConfig


def test_average_of_recorded_samples() -> None:
    tracker = TimingTracker()
    for ms in (1000, 2000, 3000):
        tracker.record_success(ms)

    assert tracker.average_time() == 2000


def test_initial_average_before_any_sample() -> None:
    tracker = TimingTracker(TimingConfig(initial_average_ms=5000))
    assert tracker.average_time() == 5000
    assert tracker.samples() == []


def test_window_drops_oldest_sample() -> None:
    tracker = TimingTracker()
    tracker.record_success(1000)
    tracker.record_success(2000)
    tracker.record_success(3000)
    for _ in range(8):
        tracker.record_success(3000)

    # 11 samples recorded, window of 10: the 1000ms sample is gone
    samples = tracker.samples()
    assert len(samples) == 10
    assert 1000 not in samples
    assert tracker.average_time() == (2000 + 9 * 3000) / 10


def test_timeouts_do_not_touch_average() -> None:
    tracker = TimingTracker()
    tracker.record_success(4000)
    tracker.record_timeout()
    tracker.record_timeout()

    assert tracker.timeouts == 2
    assert tracker.average_time() == 4000


def test_predicts_timeout_for_long_trip_after_repeated_timeouts() -> None:
    tracker = TimingTracker()
    tracker.record_success(100)  # keep the linear estimate tiny
    for _ in range(4):
        tracker.record_timeout()

    assert tracker.predict_timeout(250) is True


def test_no_prediction_for_short_trip_without_history() -> None:
    tracker = TimingTracker()
    assert tracker.timeouts == 0
    assert tracker.predict_timeout(10) is False


def test_three_timeouts_are_not_enough() -> None:
    tracker = TimingTracker()
    tracker.record_success(100)
    for _ in range(3):
        tracker.record_timeout()

    assert tracker.predict_timeout(250) is False


def test_linear_estimate_over_ceiling_predicts_timeout() -> None:
    tracker = TimingTracker()
    tracker.record_success(10_000)

    # (200 / 50) * 10000 = 40000 > 30000
    assert tracker.predict_timeout(200) is True
    # (100 / 50) * 10000 = 20000 <= 30000
    assert tracker.predict_timeout(100) is False


def test_default_estimate_goes_chunked_past_300_blocks() -> None:
    tracker = TimingTracker()

    # initial 5000ms: (300 / 50) * 5000 == 30000, not strictly greater
    assert tracker.predict_timeout(300) is False
    assert tracker.predict_timeout(301) is True
