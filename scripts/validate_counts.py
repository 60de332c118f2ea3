#!/usr/bin/env python3
"""Validate jump counting accuracy.

Process recorded videos and compare the detected jump count against
hand-counted reference values.
"""

from __future__ import annotations

import argparse
import csv
import sys
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from rope_counter.core.config import Settings, get_settings
from rope_counter.core.exceptions import RopeCounterError
from rope_counter.core.logging import get_logger, setup_logging
from rope_counter.pipeline.processor import FrameProcessor
from rope_counter.vision.stream import VideoStream

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of validating a single video."""

    video: Path
    detected: int
    expected: int

    @property
    def error(self) -> int:
        return self.detected - self.expected

    @property
    def error_percent(self) -> float | None:
        if self.expected == 0:
            return None
        return self.error / self.expected * 100


def count_video(video_path: Path, settings: Settings) -> int:
    """Run a video through the full pipeline and return the final count."""
    video_settings = settings.video.model_copy(update={"source": str(video_path)})

    logger.info("Processing video: %s", video_path)

    with FrameProcessor(settings) as processor, VideoStream(video_settings) as stream:
        for frame in stream.frames():
            processor.process_frame(frame)
            if (frame.index + 1) % 300 == 0:
                logger.info("Processed %d frames...", frame.index + 1)

        return processor.jump_count


def load_reference_data(csv_path: Path) -> list[tuple[Path, int]]:
    """Load expected counts from CSV.

    Expected format: video,expected_count (video paths relative to the CSV)
    """
    references = []

    with open(csv_path, newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            video = Path(row["video"])
            if not video.is_absolute():
                video = csv_path.parent / video
            references.append((video, int(row.get("expected_count", row.get("count", 0)))))

    logger.info("Loaded %d reference videos", len(references))
    return references


def print_results(results: list[ValidationResult]) -> None:
    """Print validation results to console."""
    print("\n" + "=" * 60)
    print("COUNT VALIDATION")
    print("=" * 60)
    print(f"{'Video':<30} {'Detected':<10} {'Expected':<10} {'Error':<8}")
    print("-" * 60)

    for r in results:
        print(f"{r.video.name:<30} {r.detected:<10} {r.expected:<10} {r.error:<+8}")

    if not results:
        return

    errors = np.array([abs(r.error) for r in results], dtype=np.float64)
    total_expected = sum(r.expected for r in results)
    total_detected = sum(r.detected for r in results)

    print("\n" + "=" * 60)
    print(f"Mean absolute error: {errors.mean():.2f} jumps")
    print(f"Max error:           {int(errors.max())} jumps")
    print(f"Total detected:      {total_detected} / {total_expected}")


def main() -> int:
    """Run validation script."""
    parser = argparse.ArgumentParser(description="Validate jump-rope counting accuracy")
    parser.add_argument(
        "reference",
        type=Path,
        help="CSV with columns video,expected_count",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Output CSV for results",
    )

    args = parser.parse_args()

    settings = get_settings()
    setup_logging(settings.logging.level)

    results: list[ValidationResult] = []
    for video, expected in load_reference_data(args.reference):
        try:
            detected = count_video(video, settings)
        except RopeCounterError as e:
            logger.error("Skipping %s: %s", video, e)
            continue
        results.append(ValidationResult(video=video, detected=detected, expected=expected))

    print_results(results)

    if args.output:
        with open(args.output, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["video", "detected", "expected", "error"])
            for r in results:
                writer.writerow([r.video, r.detected, r.expected, r.error])
        logger.info("Results saved to %s", args.output)

    return 0 if results else 1


if __name__ == "__main__":
    sys.exit(main())
