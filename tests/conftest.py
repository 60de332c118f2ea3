"""Pytest fixtures for Rope Counter tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from rope_counter.core.config import RopeDetectionSettings
from rope_counter.core.types import POSE_LANDMARK_COUNT, Landmark, LandmarkIndex

# Standing subject: hips at 0.6, shoulders 0.3 above -> torso height 0.3,
# takeoff threshold 0.045, landing threshold 0.036, hand threshold 0.015.
GROUND_HIP_Y = 0.6
TORSO = 0.3
WRIST_SWING = 0.02

LandmarkFactory = Callable[..., list[Landmark]]


def make_landmarks(
    hip_y: float = GROUND_HIP_Y,
    wrist_y: float | None = None,
    shoulder_y: float | None = None,
    hip_visibility: float = 0.9,
) -> list[Landmark]:
    """Build a full 33-point landmark list with the given key heights.

    Shoulders default to one torso above the hips and wrists to 0.1 above
    the hips, so the whole body moves together unless overridden.
    """
    if shoulder_y is None:
        shoulder_y = hip_y - TORSO
    if wrist_y is None:
        wrist_y = hip_y - 0.1

    landmarks = [Landmark(x=0.5, y=0.5, z=0.0, visibility=0.9) for _ in range(POSE_LANDMARK_COUNT)]
    landmarks[LandmarkIndex.LEFT_HIP.value] = Landmark(
        x=0.45, y=hip_y, z=0.0, visibility=hip_visibility
    )
    landmarks[LandmarkIndex.RIGHT_HIP.value] = Landmark(
        x=0.55, y=hip_y, z=0.0, visibility=hip_visibility
    )
    landmarks[LandmarkIndex.LEFT_SHOULDER.value] = Landmark(x=0.4, y=shoulder_y, z=0.0, visibility=0.9)
    landmarks[LandmarkIndex.RIGHT_SHOULDER.value] = Landmark(x=0.6, y=shoulder_y, z=0.0, visibility=0.9)
    landmarks[LandmarkIndex.LEFT_WRIST.value] = Landmark(x=0.3, y=wrist_y, z=0.0, visibility=0.9)
    landmarks[LandmarkIndex.RIGHT_WRIST.value] = Landmark(x=0.7, y=wrist_y, z=0.0, visibility=0.9)
    return landmarks


def turning(hip_y: float, frame_idx: int) -> list[Landmark]:
    """Frame with the wrists swinging up and down on alternate frames."""
    swing = WRIST_SWING if frame_idx % 2 else -WRIST_SWING
    return make_landmarks(hip_y=hip_y, wrist_y=hip_y - 0.1 + swing)


@pytest.fixture
def landmark_factory() -> LandmarkFactory:
    """Factory for custom landmark frames."""
    return make_landmarks


@pytest.fixture
def turning_frame() -> Callable[[float, int], list[Landmark]]:
    """Factory for frames with the rope turning at a given hip height."""
    return turning


@pytest.fixture
def rope_settings() -> RopeDetectionSettings:
    """Create detection settings with the stock thresholds."""
    return RopeDetectionSettings(
        min_landmarks=33,
        min_hip_visibility=0.5,
        wrist_history_size=10,
        hand_amplitude_ratio=0.05,
        takeoff_ratio=0.15,
        landing_ratio=0.8,
        ground_band_ratio=0.5,
        ground_smoothing=0.05,
    )


@pytest.fixture
def standing_sequence() -> list[list[Landmark]]:
    """Subject turning the rope without leaving the ground."""
    return [turning(GROUND_HIP_Y, i) for i in range(30)]


@pytest.fixture
def single_jump_sequence() -> list[list[Landmark]]:
    """Create a sequence with one clean jump.

    Simulates: 10 frames grounded, 5 frames airborne with the hips 0.06 up,
    10 frames grounded. Hands turn the rope throughout.
    """
    frames = []
    frame_idx = 0

    for hip_y in [GROUND_HIP_Y] * 10 + [GROUND_HIP_Y - 0.06] * 5 + [GROUND_HIP_Y] * 10:
        frames.append(turning(hip_y, frame_idx))
        frame_idx += 1

    return frames


@pytest.fixture
def skipping_sequence() -> list[list[Landmark]]:
    """Create a sequence of five consecutive jumps (10 grounded frames first)."""
    frames = [turning(GROUND_HIP_Y, i) for i in range(10)]
    frame_idx = 10

    for _ in range(5):
        for hip_y in [GROUND_HIP_Y - 0.03, GROUND_HIP_Y - 0.06, GROUND_HIP_Y - 0.06, GROUND_HIP_Y - 0.03]:
            frames.append(turning(hip_y, frame_idx))
            frame_idx += 1
        for _ in range(4):
            frames.append(turning(GROUND_HIP_Y, frame_idx))
            frame_idx += 1

    return frames
