"""Custom exceptions for Rope Counter."""


class RopeCounterError(Exception):
    """Base exception for all Rope Counter errors."""

    pass


class VideoStreamError(RopeCounterError):
    """Error with video capture or frame reading."""

    def __init__(self, message: str = "Video stream error") -> None:
        self.message = message
        super().__init__(self.message)


class PoseEstimationError(RopeCounterError):
    """Pose estimation failed or returned invalid data."""

    def __init__(self, message: str = "Pose estimation failed") -> None:
        self.message = message
        super().__init__(self.message)
