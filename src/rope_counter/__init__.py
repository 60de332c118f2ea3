"""Rope Counter: real-time jump-rope repetition counting from pose landmarks."""

from rope_counter.analysis.detector import JumpRopeDetector, count_jumps_batch
from rope_counter.core.config import RopeDetectionSettings
from rope_counter.core.types import DetectionResult, Landmark, MotionState

__version__ = "0.1.0"

__all__ = [
    "JumpRopeDetector",
    "count_jumps_batch",
    "RopeDetectionSettings",
    "DetectionResult",
    "Landmark",
    "MotionState",
]
