"""MediaPipe pose estimation wrapper using the Tasks API."""

from __future__ import annotations

import urllib.request
from pathlib import Path

import cv2
import mediapipe as mp
from mediapipe.tasks import python
from mediapipe.tasks.python import vision

from rope_counter.core.config import PoseSettings
from rope_counter.core.exceptions import PoseEstimationError
from rope_counter.core.logging import get_logger
from rope_counter.core.types import Frame, Landmark

logger = get_logger(__name__)

MODEL_URL_TEMPLATE = (
    "https://storage.googleapis.com/mediapipe-models/pose_landmarker/"
    "pose_landmarker_{variant}/float16/latest/pose_landmarker_{variant}.task"
)
MODEL_DIR = Path(__file__).parent.parent.parent.parent / "data" / "models"


def model_path_for(variant: str, model_dir: Path | None = None) -> Path:
    """Local path of the landmarker model for a variant."""
    return (model_dir or MODEL_DIR) / f"pose_landmarker_{variant}.task"


def _download_model(variant: str, model_dir: Path | None = None) -> Path:
    """Download the pose landmarker model if not present.

    Returns:
        Path to the downloaded model file

    Raises:
        PoseEstimationError: If download fails
    """
    model_path = model_path_for(variant, model_dir)
    if model_path.exists():
        return model_path

    logger.info("Downloading MediaPipe pose landmarker model (%s)...", variant)
    model_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        urllib.request.urlretrieve(MODEL_URL_TEMPLATE.format(variant=variant), model_path)
        logger.info("Model downloaded to %s", model_path)
        return model_path
    except Exception as e:
        raise PoseEstimationError(f"Failed to download model: {e}") from e


def convert_pose_landmarks(pose_landmarks: list[object]) -> list[Landmark]:
    """Convert one MediaPipe landmark list to Landmark objects.

    MediaPipe leaves visibility unset on some backends; those points are
    treated as fully visible.
    """
    landmarks: list[Landmark] = []
    for lm in pose_landmarks:
        visibility = getattr(lm, "visibility", None)
        landmarks.append(
            Landmark(
                x=float(lm.x),  # type: ignore[attr-defined]
                y=float(lm.y),  # type: ignore[attr-defined]
                z=float(lm.z),  # type: ignore[attr-defined]
                visibility=1.0 if visibility is None else float(visibility),
            )
        )
    return landmarks


class PoseEstimator:
    """Wrapper for MediaPipe pose estimation using the Tasks API.

    Converts MediaPipe results to plain Landmark lists
    to avoid leaking MediaPipe objects throughout the codebase.
    """

    def __init__(self, settings: PoseSettings | None = None) -> None:
        """Initialize pose estimator with settings.

        Args:
            settings: Pose estimation settings (uses defaults if None)
        """
        self.settings = settings or PoseSettings()
        self._landmarker: vision.PoseLandmarker | None = None
        self._last_timestamp_ms = -1

    @property
    def is_initialized(self) -> bool:
        """Check if MediaPipe model is loaded."""
        return self._landmarker is not None

    def initialize(self) -> None:
        """Load MediaPipe pose model.

        Raises:
            PoseEstimationError: If model fails to load
        """
        if self._landmarker is not None:
            return

        try:
            model_path = _download_model(self.settings.model_variant, self.settings.model_dir)

            options = vision.PoseLandmarkerOptions(
                base_options=python.BaseOptions(model_asset_path=str(model_path)),
                running_mode=vision.RunningMode.VIDEO,
                num_poses=1,
                min_pose_detection_confidence=self.settings.min_detection_confidence,
                min_pose_presence_confidence=self.settings.min_presence_confidence,
                min_tracking_confidence=self.settings.min_tracking_confidence,
            )

            self._landmarker = vision.PoseLandmarker.create_from_options(options)
            self._last_timestamp_ms = -1
            logger.info("MediaPipe PoseLandmarker initialized (%s)", self.settings.model_variant)

        except PoseEstimationError:
            raise
        except Exception as e:
            raise PoseEstimationError(f"Failed to initialize MediaPipe: {e}") from e

    def close(self) -> None:
        """Release MediaPipe resources."""
        if self._landmarker is not None:
            self._landmarker.close()
            self._landmarker = None

    def estimate(self, frame: Frame) -> list[Landmark] | None:
        """Run pose estimation on a frame.

        Args:
            frame: Input video frame

        Returns:
            Landmarks of the first detected person, or None if no pose detected

        Raises:
            PoseEstimationError: If estimation fails
        """
        if self._landmarker is None:
            self.initialize()

        if self._landmarker is None:
            raise PoseEstimationError("Pose estimator not initialized")

        # VIDEO mode rejects non-increasing timestamps
        timestamp_ms = max(int(frame.timestamp * 1000), self._last_timestamp_ms + 1)
        self._last_timestamp_ms = timestamp_ms

        try:
            rgb_image = cv2.cvtColor(frame.image, cv2.COLOR_BGR2RGB)
            mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_image)
            results = self._landmarker.detect_for_video(mp_image, timestamp_ms)
        except Exception as e:
            logger.error("Pose estimation failed: %s", e)
            raise PoseEstimationError(f"Estimation failed: {e}") from e

        if not results.pose_landmarks:
            return None

        return convert_pose_landmarks(results.pose_landmarks[0])

    def __enter__(self) -> PoseEstimator:
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
        self.close()
