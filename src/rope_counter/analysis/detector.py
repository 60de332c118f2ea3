"""Jump-rope detection state machine.

This module is pure logic with NO I/O and NO OpenCV imports.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from rope_counter.analysis.ground import GroundLevelEstimator
from rope_counter.analysis.hands import HandActivityTracker
from rope_counter.analysis.validator import validate_landmarks
from rope_counter.core.config import RopeDetectionSettings
from rope_counter.core.logging import get_logger
from rope_counter.core.types import (
    DebugInfo,
    DetectionResult,
    FrameSample,
    JumpPhase,
    Landmark,
    MotionState,
)

logger = get_logger(__name__)


@dataclass
class DetectorState:
    """Internal state for jump counting."""

    phase: JumpPhase = JumpPhase.GROUNDED
    jump_count: int = 0
    hands_active: bool = False


class JumpRopeDetector:
    """State machine counting jump-rope repetitions from pose landmarks.

    Transitions:
        GROUNDED → AIRBORNE: Hip rises above the takeoff threshold while the
            hands are turning the rope (counts one jump)
        AIRBORNE → GROUNDED: Hip drops back below the lower landing threshold

    The landing threshold sits below the takeoff threshold, so a hip hovering
    between the two cannot flutter between phases.

    This class is pure logic - no I/O, no OpenCV, no side effects.
    Not thread-safe; feed it frames sequentially from a single caller.
    """

    def __init__(self, settings: RopeDetectionSettings | None = None) -> None:
        """Initialize detector with settings.

        Args:
            settings: Detection parameters (uses defaults if None)
        """
        self.settings = settings or RopeDetectionSettings()
        self._state = DetectorState()
        self._hands = HandActivityTracker(
            window_size=self.settings.wrist_history_size,
            amplitude_ratio=self.settings.hand_amplitude_ratio,
        )
        self._ground = GroundLevelEstimator(
            band_ratio=self.settings.ground_band_ratio,
            smoothing=self.settings.ground_smoothing,
        )

    @property
    def jump_count(self) -> int:
        """Jumps counted since the last reset."""
        return self._state.jump_count

    @property
    def current_phase(self) -> JumpPhase:
        """Get current jump phase."""
        return self._state.phase

    @property
    def is_jumping(self) -> bool:
        """Check if currently airborne."""
        return self._state.phase == JumpPhase.AIRBORNE

    @property
    def ground_y(self) -> float | None:
        """Current hip baseline, None until the first valid frame."""
        return self._ground.ground_y

    @property
    def hands_active(self) -> bool:
        """Hand activity from the last accepted frame."""
        return self._state.hands_active

    @property
    def wrist_history(self) -> tuple[float, ...]:
        """Wrist heights in the rolling window, oldest first."""
        return self._hands.history

    def reset(self) -> None:
        """Reset detector to initial state. Call at the start of every session."""
        self._state = DetectorState()
        self._hands.reset()
        self._ground.reset()

    def update(self, landmarks: Sequence[Landmark | None] | None) -> DetectionResult:
        """Process one frame of pose landmarks.

        Args:
            landmarks: Full pose landmark list for the frame (None if no pose)

        Returns:
            DetectionResult with the running count, state label and diagnostics
        """
        sample, rejection = validate_landmarks(landmarks, self.settings)
        if sample is None:
            return self._rejected(rejection or MotionState.NO_POSE)

        return self._process_sample(sample)

    def _process_sample(self, sample: FrameSample) -> DetectionResult:
        hands_active = self._hands.update(sample)
        self._state.hands_active = hands_active

        mid_hip_y = sample.mid_hip_y
        threshold = sample.torso_height * self.settings.takeoff_ratio
        ground_y = self._ground.update(mid_hip_y, threshold, airborne=self.is_jumping)

        state = self._transition(mid_hip_y, ground_y, threshold, hands_active)

        return DetectionResult(
            count=self._state.jump_count,
            state=state,
            debug=DebugInfo(
                mid_hip_y=mid_hip_y,
                ground_y=ground_y,
                threshold=threshold,
                hand_amplitude=self._hands.amplitude,
                hands_active=hands_active,
            ),
        )

    def _transition(
        self,
        mid_hip_y: float,
        ground_y: float,
        threshold: float,
        hands_active: bool,
    ) -> MotionState:
        """Apply takeoff/landing rules and return the frame's state label."""
        if self._state.phase == JumpPhase.GROUNDED:
            # Hip rise without rope motion is a squat or crouch, not a jump
            if mid_hip_y < ground_y - threshold and hands_active:
                self._state.phase = JumpPhase.AIRBORNE
                self._state.jump_count += 1
                logger.debug(
                    "Takeoff #%d (hip=%.4f ground=%.4f threshold=%.4f)",
                    self._state.jump_count,
                    mid_hip_y,
                    ground_y,
                    threshold,
                )
                return MotionState.JUMP_START
            return MotionState.GROUNDED

        if mid_hip_y > ground_y - threshold * self.settings.landing_ratio:
            self._state.phase = JumpPhase.GROUNDED
            logger.debug("Landed (hip=%.4f ground=%.4f)", mid_hip_y, ground_y)
            return MotionState.LANDED

        return MotionState.AIRBORNE

    def _rejected(self, state: MotionState) -> DetectionResult:
        """Build a result for a frame that failed validation, leaving state untouched."""
        return DetectionResult(
            count=self._state.jump_count,
            state=state,
            debug=DebugInfo(
                mid_hip_y=None,
                ground_y=self._ground.ground_y,
                threshold=None,
                hand_amplitude=self._hands.amplitude,
                hands_active=False,
            ),
        )


def count_jumps_batch(
    landmark_frames: Iterable[Sequence[Landmark | None] | None],
    settings: RopeDetectionSettings | None = None,
) -> list[DetectionResult]:
    """Run a fresh detector over a recorded sequence of landmark frames.

    Pure function for batch processing recorded data.

    Args:
        landmark_frames: Per-frame landmark lists (must be in frame order)
        settings: Detection settings

    Returns:
        One DetectionResult per input frame
    """
    detector = JumpRopeDetector(settings)
    return [detector.update(landmarks) for landmarks in landmark_frames]
