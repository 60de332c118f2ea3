"""Core infrastructure: config, types, exceptions, and logging."""

from rope_counter.core.config import (
    LoggingSettings,
    PoseSettings,
    RopeDetectionSettings,
    Settings,
    VideoSettings,
    get_settings,
)
from rope_counter.core.exceptions import (
    PoseEstimationError,
    RopeCounterError,
    VideoStreamError,
)
from rope_counter.core.logging import get_logger, setup_logging
from rope_counter.core.types import (
    DebugInfo,
    DetectionResult,
    Frame,
    FrameSample,
    JumpPhase,
    Landmark,
    LandmarkIndex,
    MotionState,
    landmarks_from_array,
)

__all__ = [
    # Config
    "Settings",
    "RopeDetectionSettings",
    "PoseSettings",
    "VideoSettings",
    "LoggingSettings",
    "get_settings",
    # Types
    "Landmark",
    "LandmarkIndex",
    "FrameSample",
    "Frame",
    "JumpPhase",
    "MotionState",
    "DebugInfo",
    "DetectionResult",
    "landmarks_from_array",
    # Exceptions
    "RopeCounterError",
    "VideoStreamError",
    "PoseEstimationError",
    # Logging
    "setup_logging",
    "get_logger",
]
