"""Pure analysis logic: landmark validation, hand activity, ground level, jump counting.

This module contains NO I/O operations and NO OpenCV imports.
All functions operate on typed dataclasses and return results.
"""

from rope_counter.analysis.detector import JumpRopeDetector, count_jumps_batch
from rope_counter.analysis.ground import GroundLevelEstimator
from rope_counter.analysis.hands import HandActivityTracker
from rope_counter.analysis.metrics import MetricsTracker, SessionSummary
from rope_counter.analysis.validator import validate_landmarks

__all__ = [
    "JumpRopeDetector",
    "count_jumps_batch",
    "GroundLevelEstimator",
    "HandActivityTracker",
    "MetricsTracker",
    "SessionSummary",
    "validate_landmarks",
]
