"""Frame processing pipeline orchestration."""

from rope_counter.pipeline.processor import FrameProcessor, ProcessedFrame

__all__ = ["FrameProcessor", "ProcessedFrame"]
