"""Tests for the frame processing pipeline."""

from __future__ import annotations

import numpy as np
import pytest

from rope_counter.core.config import Settings
from rope_counter.core.types import DetectionResult, Frame, JumpPhase, Landmark, MotionState
from rope_counter.pipeline.processor import FrameProcessor


class FakePoseEstimator:
    """Replays canned landmark frames in place of MediaPipe."""

    def __init__(self, frames: list[list[Landmark] | None]) -> None:
        self._frames = iter(frames)
        self.initialized = False
        self.closed = False

    def initialize(self) -> None:
        self.initialized = True

    def close(self) -> None:
        self.closed = True

    def estimate(self, frame: Frame) -> list[Landmark] | None:
        return next(self._frames)


def _frames(count: int, fps: float = 30.0) -> list[Frame]:
    image = np.zeros((48, 64, 3), dtype=np.uint8)
    return [Frame(image=image, timestamp=i / fps, index=i) for i in range(count)]


class TestFrameProcessor:
    """Tests for the FrameProcessor class."""

    def test_process_frame_counts_jumps(self, skipping_sequence: list[list[Landmark]]) -> None:
        estimator = FakePoseEstimator(skipping_sequence)

        with FrameProcessor(Settings(), pose_estimator=estimator) as processor:  # type: ignore[arg-type]
            results = [processor.process_frame(f) for f in _frames(len(skipping_sequence))]

        assert estimator.initialized
        assert estimator.closed
        assert results[-1].count == 5
        assert processor.jump_count == 5
        assert processor.metrics.jump_count == 5
        assert processor.current_phase == JumpPhase.GROUNDED
        assert results[0].frame is not None
        assert results[0].landmarks is skipping_sequence[0]

    def test_missing_pose_passes_through(self) -> None:
        estimator = FakePoseEstimator([None])
        processor = FrameProcessor(Settings(), pose_estimator=estimator)  # type: ignore[arg-type]

        processed = processor.process_frame(_frames(1)[0])

        assert processed.state == MotionState.NO_POSE
        assert processed.landmarks is None

    def test_callbacks_fire_on_transitions(self, skipping_sequence: list[list[Landmark]]) -> None:
        """Host hooks receive each takeoff, landing and count change."""
        jumps: list[DetectionResult] = []
        landings: list[DetectionResult] = []
        counts: list[int] = []

        processor = FrameProcessor(
            Settings(),
            pose_estimator=FakePoseEstimator([]),  # type: ignore[arg-type]
            on_jump=jumps.append,
            on_land=landings.append,
            on_count_change=counts.append,
        )

        for i, landmarks in enumerate(skipping_sequence):
            processor.process_landmarks(landmarks, timestamp=i / 30.0)

        assert len(jumps) == 5
        assert len(landings) == 5
        assert all(r.state == MotionState.JUMP_START for r in jumps)
        assert all(r.state == MotionState.LANDED for r in landings)
        assert counts == [1, 2, 3, 4, 5]

    def test_reset_session(self, single_jump_sequence: list[list[Landmark]]) -> None:
        counts: list[int] = []
        processor = FrameProcessor(
            Settings(),
            pose_estimator=FakePoseEstimator([]),  # type: ignore[arg-type]
            on_count_change=counts.append,
        )
        for i, landmarks in enumerate(single_jump_sequence):
            processor.process_landmarks(landmarks, timestamp=i / 30.0)

        processor.reset_session()

        assert processor.jump_count == 0
        assert processor.metrics.jump_count == 0
        assert counts == [1, 0]

        for i, landmarks in enumerate(single_jump_sequence):
            processor.process_landmarks(landmarks, timestamp=i / 30.0)

        assert processor.jump_count == 1
        assert counts == [1, 0, 1]

    def test_metrics_use_frame_timestamps(self, skipping_sequence: list[list[Landmark]]) -> None:
        processor = FrameProcessor(Settings(), pose_estimator=FakePoseEstimator([]))  # type: ignore[arg-type]

        for i, landmarks in enumerate(skipping_sequence):
            processor.process_landmarks(landmarks, timestamp=i / 30.0)

        summary = processor.metrics.get_summary()
        assert summary.total_jumps == 5
        assert summary.total_duration_s == pytest.approx((len(skipping_sequence) - 1) / 30.0)
        # One jump every 8 frames at 30 fps
        assert summary.peak_cadence == pytest.approx(225.0)
        assert summary.longest_streak == 5
