"""Tests for session metrics tracking."""

from __future__ import annotations

import pytest

from rope_counter.analysis.metrics import MetricsTracker
from rope_counter.core.types import DebugInfo, DetectionResult, MotionState


def _result(state: MotionState, count: int = 0) -> DetectionResult:
    return DetectionResult(
        count=count,
        state=state,
        debug=DebugInfo(
            mid_hip_y=0.6,
            ground_y=0.6,
            threshold=0.045,
            hand_amplitude=0.04,
            hands_active=True,
        ),
    )


def _tracker_with_jumps(times: list[float], **kwargs: float) -> MetricsTracker:
    tracker = MetricsTracker(**kwargs)  # type: ignore[arg-type]
    tracker.observe(_result(MotionState.GROUNDED), 0.0)
    for i, t in enumerate(times, start=1):
        tracker.observe(_result(MotionState.JUMP_START, i), t)
    return tracker


class TestMetricsTracker:
    """Tests for the MetricsTracker class."""

    def test_only_jump_start_is_counted(self) -> None:
        tracker = MetricsTracker()

        assert not tracker.observe(_result(MotionState.GROUNDED), 0.0)
        assert tracker.observe(_result(MotionState.JUMP_START, 1), 0.5)
        assert not tracker.observe(_result(MotionState.AIRBORNE, 1), 0.6)
        assert not tracker.observe(_result(MotionState.LANDED, 1), 0.7)
        assert not tracker.observe(_result(MotionState.NO_POSE, 1), 0.8)

        assert tracker.jump_count == 1
        assert tracker.stats.duration_s == pytest.approx(0.8)

    def test_jumps_per_minute(self) -> None:
        tracker = _tracker_with_jumps([0.5 * i for i in range(1, 61)])

        assert tracker.jumps_per_minute() == pytest.approx(120.0)
        assert tracker.jumps_per_minute(60.0) == pytest.approx(60.0)

    def test_jumps_per_minute_empty_session(self) -> None:
        assert MetricsTracker().jumps_per_minute() == 0.0

    def test_current_cadence_uses_recent_jumps(self) -> None:
        """Cadence reflects the latest window, not the session average."""
        slow = [1.0 * i for i in range(1, 11)]
        fast = [10.0 + 0.4 * i for i in range(1, 11)]
        tracker = _tracker_with_jumps(slow + fast, cadence_window=10)

        assert tracker.current_cadence() == pytest.approx(150.0)
        assert tracker.peak_cadence() == pytest.approx(150.0)

    def test_cadence_needs_two_jumps(self) -> None:
        tracker = _tracker_with_jumps([1.0])

        assert tracker.current_cadence() is None
        assert tracker.peak_cadence() is None

    def test_longest_streak_splits_on_pauses(self) -> None:
        times = [0.5, 1.0, 1.5, 2.0, 6.0, 6.5, 7.0]
        tracker = _tracker_with_jumps(times, max_gap_s=1.5)

        assert tracker.longest_streak == 4

    def test_summary(self) -> None:
        tracker = _tracker_with_jumps([0.5, 1.0, 1.5, 2.0])

        summary = tracker.get_summary()

        assert summary.total_jumps == 4
        assert summary.total_duration_s == pytest.approx(2.0)
        assert summary.jumps_per_minute == pytest.approx(120.0)
        assert summary.longest_streak == 4
        assert summary.peak_cadence == pytest.approx(120.0)

    def test_reset(self) -> None:
        tracker = _tracker_with_jumps([0.5, 1.0])

        tracker.reset()

        assert tracker.jump_count == 0
        assert tracker.stats.start_time is None
        assert tracker.longest_streak == 0
