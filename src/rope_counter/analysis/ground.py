"""Adaptive ground-level baseline for hip height.

This module is pure logic with NO I/O and NO OpenCV imports.
"""

from __future__ import annotations


class GroundLevelEstimator:
    """Slowly adapting estimate of standing hip height.

    The baseline is an exponential moving average that only absorbs samples
    taken while grounded and close to the current baseline, so drift from
    camera movement or sway is followed but a jump is never averaged in.
    """

    def __init__(self, band_ratio: float = 0.5, smoothing: float = 0.05) -> None:
        """Initialize estimator.

        Args:
            band_ratio: Re-centering band as a fraction of the jump threshold
            smoothing: Weight given to each new sample
        """
        self.band_ratio = band_ratio
        self.smoothing = smoothing
        self._ground_y: float | None = None

    @property
    def ground_y(self) -> float | None:
        """Current baseline, or None before the first sample."""
        return self._ground_y

    @property
    def is_established(self) -> bool:
        return self._ground_y is not None

    def update(self, mid_hip_y: float, jump_threshold: float, airborne: bool) -> float:
        """Fold the current hip height into the baseline.

        Args:
            mid_hip_y: Hip midpoint height this frame
            jump_threshold: Current takeoff threshold
            airborne: Whether the subject is currently in the air

        Returns:
            Updated baseline
        """
        if self._ground_y is None:
            self._ground_y = mid_hip_y

        if not airborne and abs(mid_hip_y - self._ground_y) < jump_threshold * self.band_ratio:
            self._ground_y = self._ground_y * (1 - self.smoothing) + mid_hip_y * self.smoothing

        return self._ground_y

    def reset(self) -> None:
        """Forget the baseline."""
        self._ground_y = None
