"""Session statistics derived from detector output.

This module is pure logic with NO I/O and NO OpenCV imports.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rope_counter.core.types import DetectionResult, MotionState


@dataclass
class SessionSummary:
    """Summary statistics for a skipping session."""

    total_jumps: int
    total_duration_s: float
    jumps_per_minute: float
    peak_cadence: float | None
    longest_streak: int


@dataclass
class SessionStats:
    """Raw per-session record.

    Attributes:
        jump_times: Timestamp (seconds) of every counted jump
        start_time: Timestamp of the first observed frame
        last_time: Timestamp of the most recent observed frame
    """

    jump_times: list[float] = field(default_factory=list)
    start_time: float | None = None
    last_time: float | None = None

    @property
    def jump_count(self) -> int:
        return len(self.jump_times)

    @property
    def duration_s(self) -> float:
        if self.start_time is None or self.last_time is None:
            return 0.0
        return self.last_time - self.start_time

    def reset(self) -> None:
        """Clear all recorded data."""
        self.jump_times.clear()
        self.start_time = None
        self.last_time = None


class MetricsTracker:
    """Tracks cadence and streaks by observing detection results.

    Args:
        cadence_window: Number of recent jumps used for the live cadence
        max_gap_s: Longest pause between jumps that still continues a streak
    """

    def __init__(self, cadence_window: int = 10, max_gap_s: float = 1.5) -> None:
        self.cadence_window = cadence_window
        self.max_gap_s = max_gap_s
        self.stats = SessionStats()

    @property
    def jump_count(self) -> int:
        """Get total jump count."""
        return self.stats.jump_count

    def observe(self, result: DetectionResult, timestamp: float) -> bool:
        """Record a detector result.

        Args:
            result: Output of JumpRopeDetector.update for this frame
            timestamp: Frame timestamp in seconds

        Returns:
            True if the result counted a new jump
        """
        if self.stats.start_time is None:
            self.stats.start_time = timestamp
        self.stats.last_time = timestamp

        if result.state == MotionState.JUMP_START:
            self.stats.jump_times.append(timestamp)
            return True
        return False

    def jumps_per_minute(self, duration_s: float | None = None) -> float:
        """Average rate over the session.

        Args:
            duration_s: Session length (defaults to the observed span)
        """
        duration = self.stats.duration_s if duration_s is None else duration_s
        if duration <= 0:
            return 0.0
        return self.jump_count / (duration / 60.0)

    def current_cadence(self) -> float | None:
        """Jumps per minute over the most recent jumps, None with fewer than 2."""
        recent = self.stats.jump_times[-self.cadence_window :]
        if len(recent) < 2:
            return None

        span = recent[-1] - recent[0]
        if span <= 0:
            return None
        return (len(recent) - 1) / (span / 60.0)

    def peak_cadence(self) -> float | None:
        """Highest cadence seen over any window of consecutive jumps."""
        times = self.stats.jump_times
        if len(times) < 2:
            return None

        size = min(self.cadence_window, len(times))
        best: float | None = None
        for start in range(len(times) - size + 1):
            span = times[start + size - 1] - times[start]
            if span <= 0:
                continue
            cadence = (size - 1) / (span / 60.0)
            if best is None or cadence > best:
                best = cadence
        return best

    @property
    def longest_streak(self) -> int:
        """Most jumps in a row without a pause longer than max_gap_s."""
        times = self.stats.jump_times
        if not times:
            return 0

        longest = current = 1
        for prev, curr in zip(times, times[1:]):
            if curr - prev <= self.max_gap_s:
                current += 1
                longest = max(longest, current)
            else:
                current = 1
        return longest

    def get_summary(self, session_duration_s: float | None = None) -> SessionSummary:
        """Get session summary statistics.

        Args:
            session_duration_s: Total session duration (defaults to observed span)

        Returns:
            SessionSummary with computed statistics
        """
        duration = self.stats.duration_s if session_duration_s is None else session_duration_s
        return SessionSummary(
            total_jumps=self.jump_count,
            total_duration_s=duration,
            jumps_per_minute=self.jumps_per_minute(duration),
            peak_cadence=self.peak_cadence(),
            longest_streak=self.longest_streak,
        )

    def reset(self) -> None:
        """Clear all recorded data."""
        self.stats.reset()
