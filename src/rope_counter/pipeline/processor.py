"""Frame processing pipeline orchestration."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rope_counter.analysis.detector import JumpRopeDetector
from rope_counter.analysis.metrics import MetricsTracker
from rope_counter.core.config import Settings, get_settings
from rope_counter.core.exceptions import PoseEstimationError
from rope_counter.core.logging import get_logger
from rope_counter.core.types import (
    DetectionResult,
    Frame,
    JumpPhase,
    Landmark,
    MotionState,
)

if TYPE_CHECKING:
    from rope_counter.vision.pose import PoseEstimator

logger = get_logger(__name__)

ResultCallback = Callable[[DetectionResult], None]
CountCallback = Callable[[int], None]


@dataclass
class ProcessedFrame:
    """Result of processing a single frame."""

    frame: Frame | None
    landmarks: list[Landmark] | None
    result: DetectionResult

    @property
    def count(self) -> int:
        return self.result.count

    @property
    def state(self) -> MotionState:
        return self.result.state


class FrameProcessor:
    """Orchestrates the per-frame pipeline.

    Coordinates:
    - Pose estimation
    - Jump counting
    - Session metrics
    - Event callbacks (sound, speech or UI hooks supplied by the host)
    """

    def __init__(
        self,
        settings: Settings | None = None,
        pose_estimator: PoseEstimator | None = None,
        on_jump: ResultCallback | None = None,
        on_land: ResultCallback | None = None,
        on_count_change: CountCallback | None = None,
    ) -> None:
        """Initialize processor with settings.

        Args:
            settings: Application settings (uses defaults if None)
            pose_estimator: Landmark source (MediaPipe estimator if None)
            on_jump: Called with the result of every JUMP_START frame
            on_land: Called with the result of every LANDED frame
            on_count_change: Called with the new count whenever it changes
        """
        self.settings = settings or get_settings()

        self._pose_estimator = pose_estimator
        self._detector = JumpRopeDetector(self.settings.rope)
        self._metrics = MetricsTracker()

        self.on_jump = on_jump
        self.on_land = on_land
        self.on_count_change = on_count_change

        self._last_count = 0
        self._initialized = False

    @property
    def metrics(self) -> MetricsTracker:
        """Get session metrics."""
        return self._metrics

    @property
    def jump_count(self) -> int:
        return self._detector.jump_count

    @property
    def current_phase(self) -> JumpPhase:
        """Get current jump phase."""
        return self._detector.current_phase

    def initialize(self) -> None:
        """Initialize all components."""
        if self._initialized:
            return

        if self._pose_estimator is None:
            from rope_counter.vision.pose import PoseEstimator

            self._pose_estimator = PoseEstimator(self.settings.pose)

        self._pose_estimator.initialize()
        self._initialized = True
        logger.info("Frame processor initialized")

    def shutdown(self) -> None:
        """Release all resources."""
        if self._pose_estimator is not None:
            self._pose_estimator.close()
        self._initialized = False
        logger.info("Frame processor shutdown")

    def process_frame(self, frame: Frame) -> ProcessedFrame:
        """Run pose estimation and jump counting on a video frame.

        Args:
            frame: Input video frame

        Returns:
            ProcessedFrame with the landmarks and detection result
        """
        if not self._initialized:
            self.initialize()

        if self._pose_estimator is None:
            raise PoseEstimationError("Pose estimator not initialized")

        landmarks = self._pose_estimator.estimate(frame)

        result = self._handle(landmarks, frame.timestamp)
        return ProcessedFrame(frame=frame, landmarks=landmarks, result=result)

    def process_landmarks(
        self,
        landmarks: Sequence[Landmark | None] | None,
        timestamp: float,
    ) -> ProcessedFrame:
        """Run jump counting on landmarks produced elsewhere.

        Args:
            landmarks: Pose landmark list for one frame
            timestamp: Frame timestamp in seconds

        Returns:
            ProcessedFrame without an image
        """
        result = self._handle(landmarks, timestamp)
        return ProcessedFrame(
            frame=None,
            landmarks=list(landmarks) if landmarks is not None else None,  # type: ignore[arg-type]
            result=result,
        )

    def _handle(
        self,
        landmarks: Sequence[Landmark | None] | None,
        timestamp: float,
    ) -> DetectionResult:
        result = self._detector.update(landmarks)

        if self._metrics.observe(result, timestamp):
            logger.info("Jump %d at %.2fs", result.count, timestamp)

        self._dispatch(result)
        return result

    def _dispatch(self, result: DetectionResult) -> None:
        """Invoke host callbacks for transitions in this result."""
        if result.state == MotionState.JUMP_START and self.on_jump is not None:
            self.on_jump(result)
        elif result.state == MotionState.LANDED and self.on_land is not None:
            self.on_land(result)

        if result.count != self._last_count:
            self._last_count = result.count
            if self.on_count_change is not None:
                self.on_count_change(result.count)

    def reset_session(self) -> None:
        """Start a new session: clear the count, baseline and metrics."""
        self._detector.reset()
        self._metrics.reset()
        self._last_count = 0
        if self.on_count_change is not None:
            self.on_count_change(0)
        logger.info("Session reset")

    def __enter__(self) -> FrameProcessor:
        """Context manager entry."""
        self.initialize()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Context manager exit."""
        self.shutdown()
