"""Core data types and structures."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto

import numpy as np
from numpy.typing import NDArray

POSE_LANDMARK_COUNT = 33


@dataclass(frozen=True, slots=True)
class Landmark:
    """A single body landmark with 3D coordinates and visibility score.

    Coordinates are normalized [0, 1] relative to frame dimensions,
    with y growing downward.
    """

    x: float
    y: float
    z: float
    visibility: float

    def to_pixel(self, width: int, height: int) -> tuple[int, int]:
        """Convert normalized coordinates to pixel coordinates."""
        return int(self.x * width), int(self.y * height)


class LandmarkIndex(Enum):
    """MediaPipe pose landmark indices (subset used for rope counting)."""

    NOSE = 0
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_WRIST = 15
    RIGHT_WRIST = 16
    LEFT_HIP = 23
    RIGHT_HIP = 24


REQUIRED_LANDMARKS = (
    LandmarkIndex.LEFT_SHOULDER,
    LandmarkIndex.RIGHT_SHOULDER,
    LandmarkIndex.LEFT_WRIST,
    LandmarkIndex.RIGHT_WRIST,
    LandmarkIndex.LEFT_HIP,
    LandmarkIndex.RIGHT_HIP,
)


@dataclass(frozen=True, slots=True)
class FrameSample:
    """The landmarks the detector reads from a single frame.

    Attributes:
        left_hip: Left hip landmark
        right_hip: Right hip landmark
        left_shoulder: Left shoulder landmark
        right_shoulder: Right shoulder landmark
        left_wrist: Left wrist landmark
        right_wrist: Right wrist landmark
    """

    left_hip: Landmark
    right_hip: Landmark
    left_shoulder: Landmark
    right_shoulder: Landmark
    left_wrist: Landmark
    right_wrist: Landmark

    @classmethod
    def from_landmarks(cls, landmarks: Sequence[Landmark]) -> FrameSample:
        """Pick the required landmarks out of a full pose landmark list."""
        return cls(
            left_hip=landmarks[LandmarkIndex.LEFT_HIP.value],
            right_hip=landmarks[LandmarkIndex.RIGHT_HIP.value],
            left_shoulder=landmarks[LandmarkIndex.LEFT_SHOULDER.value],
            right_shoulder=landmarks[LandmarkIndex.RIGHT_SHOULDER.value],
            left_wrist=landmarks[LandmarkIndex.LEFT_WRIST.value],
            right_wrist=landmarks[LandmarkIndex.RIGHT_WRIST.value],
        )

    @property
    def mid_hip_y(self) -> float:
        return (self.left_hip.y + self.right_hip.y) / 2

    @property
    def mid_shoulder_y(self) -> float:
        return (self.left_shoulder.y + self.right_shoulder.y) / 2

    @property
    def mid_wrist_y(self) -> float:
        return (self.left_wrist.y + self.right_wrist.y) / 2

    @property
    def torso_height(self) -> float:
        """Vertical hip-to-shoulder distance, the scale unit for all thresholds."""
        return abs(self.mid_hip_y - self.mid_shoulder_y)


def landmarks_from_array(array: NDArray[np.floating]) -> list[Landmark]:
    """Convert an (N, 4) array of [x, y, z, visibility] rows to landmarks.

    Args:
        array: Landmark array as produced by most pose backends

    Returns:
        List of Landmark objects in row order

    Raises:
        ValueError: If the array is not two-dimensional with 4 columns
    """
    values = np.asarray(array, dtype=np.float64)
    if values.ndim != 2 or values.shape[1] != 4:
        raise ValueError(f"Expected an (N, 4) landmark array, got shape {values.shape}")

    return [
        Landmark(x=float(x), y=float(y), z=float(z), visibility=float(v))
        for x, y, z, v in values
    ]


class JumpPhase(Enum):
    """Phases of the jump state machine."""

    GROUNDED = auto()
    AIRBORNE = auto()


class MotionState(Enum):
    """State label reported for each processed frame."""

    NO_POSE = "NO_POSE"
    POOR_VISIBILITY = "POOR_VISIBILITY"
    GROUNDED = "GROUNDED"
    AIRBORNE = "AIRBORNE"
    JUMP_START = "JUMP_START"
    LANDED = "LANDED"


@dataclass(slots=True)
class DebugInfo:
    """Diagnostic values for calibration and debugging displays.

    Attributes:
        mid_hip_y: Current hip midpoint height (None on rejected frames)
        ground_y: Current ground baseline (None until established)
        threshold: Takeoff threshold for this frame (None on rejected frames)
        hand_amplitude: Wrist travel over the rolling window
        hands_active: Whether rope-turning motion was detected this frame
    """

    mid_hip_y: float | None
    ground_y: float | None
    threshold: float | None
    hand_amplitude: float
    hands_active: bool


@dataclass(slots=True)
class DetectionResult:
    """Output of a single detector update."""

    count: int
    state: MotionState
    debug: DebugInfo

    @property
    def is_jumping(self) -> bool:
        """True while the subject is in the air."""
        return self.state in (MotionState.AIRBORNE, MotionState.JUMP_START)


@dataclass(slots=True)
class Frame:
    """A video frame with metadata.

    Attributes:
        image: BGR image array (OpenCV format)
        timestamp: Frame timestamp in seconds
        index: Frame sequence number
    """

    image: NDArray[np.uint8]
    timestamp: float
    index: int

    @property
    def width(self) -> int:
        """Frame width in pixels."""
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        """Frame height in pixels."""
        return int(self.image.shape[0])
