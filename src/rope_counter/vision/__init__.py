"""Computer vision adapters: pose estimation and video capture."""

from rope_counter.vision.pose import PoseEstimator
from rope_counter.vision.stream import VideoStream

__all__ = [
    "PoseEstimator",
    "VideoStream",
]
