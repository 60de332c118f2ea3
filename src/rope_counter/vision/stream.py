"""Video source frame generator."""

from __future__ import annotations

import time
from collections.abc import Generator

import cv2
import numpy as np

from rope_counter.core.config import VideoSettings
from rope_counter.core.exceptions import VideoStreamError
from rope_counter.core.logging import get_logger
from rope_counter.core.types import Frame

logger = get_logger(__name__)


def parse_source(source: str | int) -> str | int:
    """Interpret a numeric source string as a camera index."""
    if isinstance(source, int):
        return source
    return int(source) if source.strip().isdigit() else source


class VideoStream:
    """Generator-based video stream over an OpenCV capture source.

    Provides frames as Frame dataclass instances with metadata. File sources
    are timestamped from the container frame rate, cameras from the wall clock.
    """

    def __init__(self, settings: VideoSettings | None = None) -> None:
        """Initialize stream.

        Args:
            settings: Video source settings (uses defaults if None)
        """
        self.settings = settings or VideoSettings()
        self.source = parse_source(self.settings.source)
        self._capture: cv2.VideoCapture | None = None
        self._frame_idx = 0
        self._start_time: float | None = None
        self._fps = self.settings.fallback_fps

    @property
    def is_running(self) -> bool:
        """Check if stream is active."""
        return self._capture is not None

    @property
    def is_camera(self) -> bool:
        return isinstance(self.source, int)

    @property
    def frame_count(self) -> int:
        """Number of frames captured so far."""
        return self._frame_idx

    @property
    def fps(self) -> float:
        return self._fps

    def start(self) -> None:
        """Open the capture source.

        Raises:
            VideoStreamError: If the source cannot be opened
        """
        capture = cv2.VideoCapture(self.source)
        if not capture.isOpened():
            capture.release()
            raise VideoStreamError(f"Could not open video source: {self.source}")

        reported_fps = capture.get(cv2.CAP_PROP_FPS)
        if reported_fps and reported_fps > 0:
            self._fps = float(reported_fps)

        self._capture = capture
        self._frame_idx = 0
        self._start_time = time.time()
        logger.info("Video stream started (%s @ %.1f fps)", self.source, self._fps)

    def stop(self) -> None:
        """Release the capture source."""
        if self._capture is not None:
            self._capture.release()
            self._capture = None
            logger.info("Video stream stopped (captured %d frames)", self._frame_idx)

    def frames(self) -> Generator[Frame, None, None]:
        """Generate Frame objects until the source is exhausted.

        Yields:
            Frame objects with image data and metadata

        Raises:
            VideoStreamError: If the stream cannot be read
        """
        if self._capture is None:
            self.start()

        max_frames = self.settings.max_frames

        while self._capture is not None:
            if max_frames is not None and self._frame_idx >= max_frames:
                break

            try:
                ok, image = self._capture.read()
            except cv2.error as e:
                raise VideoStreamError(f"Frame capture failed: {e}") from e

            if not ok or image is None:
                break

            yield Frame(
                image=np.asarray(image, dtype=np.uint8),
                timestamp=self._timestamp(),
                index=self._frame_idx,
            )
            self._frame_idx += 1

    def _timestamp(self) -> float:
        if self.is_camera:
            return time.time() - (self._start_time or time.time())
        return self._frame_idx / self._fps

    def __iter__(self) -> Generator[Frame, None, None]:
        """Allow direct iteration over stream."""
        return self.frames()

    def __enter__(self) -> VideoStream:
        """Context manager entry."""
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Context manager exit."""
        self.stop()
