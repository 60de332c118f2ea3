"""Rope-turning detection from wrist motion.

This module is pure logic with NO I/O and NO OpenCV imports.
"""

from __future__ import annotations

from collections import deque

from rope_counter.core.types import FrameSample


class HandActivityTracker:
    """Rolling window of wrist height used to spot rope-turning motion.

    Hands count as active when the wrists travel more than a fraction of the
    torso height within the window while staying below the shoulder line.
    """

    def __init__(self, window_size: int = 10, amplitude_ratio: float = 0.05) -> None:
        """Initialize tracker.

        Args:
            window_size: Number of recent wrist samples kept
            amplitude_ratio: Minimum wrist travel as a fraction of torso height
        """
        self.amplitude_ratio = amplitude_ratio
        self._history: deque[float] = deque(maxlen=window_size)

    @property
    def history(self) -> tuple[float, ...]:
        """Current window contents, oldest first."""
        return tuple(self._history)

    @property
    def amplitude(self) -> float:
        """Wrist travel (max - min) across the window."""
        if len(self._history) < 2:
            return 0.0
        return max(self._history) - min(self._history)

    def push(self, mid_wrist_y: float) -> None:
        """Append a wrist sample, evicting the oldest once full."""
        self._history.append(mid_wrist_y)

    def update(self, sample: FrameSample) -> bool:
        """Record this frame's wrist height and report hand activity.

        Args:
            sample: Validated frame sample

        Returns:
            True when rope-turning motion is present
        """
        self.push(sample.mid_wrist_y)

        moving = self.amplitude > sample.torso_height * self.amplitude_ratio
        below_shoulders = sample.mid_wrist_y > sample.mid_shoulder_y

        return moving and below_shoulders

    def reset(self) -> None:
        """Clear the wrist window."""
        self._history.clear()
