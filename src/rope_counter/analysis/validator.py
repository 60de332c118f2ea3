"""Landmark validation for incoming pose frames.

This module is pure logic with NO I/O and NO OpenCV imports.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from rope_counter.core.config import RopeDetectionSettings
from rope_counter.core.types import (
    REQUIRED_LANDMARKS,
    FrameSample,
    Landmark,
    MotionState,
)


def validate_landmarks(
    landmarks: Sequence[Landmark | None] | None,
    settings: RopeDetectionSettings,
) -> tuple[FrameSample | None, MotionState | None]:
    """Check that a frame's landmarks are usable for jump detection.

    Args:
        landmarks: Full pose landmark list for one frame (may be None)
        settings: Detection parameters supplying the validation floors

    Returns:
        (sample, None) when the frame is usable, otherwise
        (None, NO_POSE) or (None, POOR_VISIBILITY)
    """
    if (
        isinstance(landmarks, (str, bytes))
        or not isinstance(landmarks, Sequence)
        or len(landmarks) < settings.min_landmarks
    ):
        return None, MotionState.NO_POSE

    if any(not isinstance(landmarks[index.value], Landmark) for index in REQUIRED_LANDMARKS):
        return None, MotionState.NO_POSE

    sample = FrameSample.from_landmarks(landmarks)  # type: ignore[arg-type]

    # NaN visibility must fail the floor
    if not (
        sample.left_hip.visibility >= settings.min_hip_visibility
        and sample.right_hip.visibility >= settings.min_hip_visibility
    ):
        return None, MotionState.POOR_VISIBILITY

    if not _is_finite(sample):
        return None, MotionState.POOR_VISIBILITY

    # Collapsed torso would shrink every threshold to zero
    if sample.torso_height < settings.min_torso_height:
        return None, MotionState.POOR_VISIBILITY

    return sample, None


def _is_finite(sample: FrameSample) -> bool:
    values = (
        sample.left_hip.y,
        sample.right_hip.y,
        sample.left_shoulder.y,
        sample.right_shoulder.y,
        sample.left_wrist.y,
        sample.right_wrist.y,
    )
    return all(math.isfinite(v) for v in values)
