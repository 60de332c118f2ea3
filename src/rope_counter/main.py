"""Command-line entry point for Rope Counter."""

from __future__ import annotations

import argparse
import sys

from rope_counter.core.config import Settings, get_settings
from rope_counter.core.exceptions import RopeCounterError, VideoStreamError
from rope_counter.core.logging import get_logger, setup_logging
from rope_counter.pipeline.processor import FrameProcessor

logger = get_logger(__name__)


def run_counting_session(settings: Settings) -> int:
    """Count jumps from the configured video source until it ends.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    from rope_counter.vision.stream import VideoStream

    logger.info("Starting Rope Counter on source %s", settings.video.source)

    processor = FrameProcessor(settings)
    stream = VideoStream(settings.video)

    try:
        with processor, stream:
            for frame in stream.frames():
                processor.process_frame(frame)

        summary = processor.metrics.get_summary()
        logger.info(
            "Session: %d jumps in %.1fs (%.1f/min, longest streak %d)",
            summary.total_jumps,
            summary.total_duration_s,
            summary.jumps_per_minute,
            summary.longest_streak,
        )
        if summary.peak_cadence is not None:
            logger.info("Peak cadence: %.1f jumps/min", summary.peak_cadence)
        return 0

    except VideoStreamError as e:
        logger.error("Video source failed: %s", e)
        return 1

    except RopeCounterError as e:
        logger.error("Counting error: %s", e)
        return 2

    except KeyboardInterrupt:
        logger.info("Interrupted by user (%d jumps)", processor.jump_count)
        return 0

    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        return 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rope Counter - count jump-rope repetitions from a camera or video"
    )
    parser.add_argument(
        "--source",
        help="Camera index or video file path (default: VIDEO_SOURCE or 0)",
    )
    parser.add_argument(
        "--max-frames",
        type=int,
        help="Stop after this many frames",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    overrides: dict[str, object] = {}
    if args.source is not None:
        overrides["source"] = args.source
    if args.max_frames is not None:
        overrides["max_frames"] = args.max_frames
    if overrides:
        settings = settings.model_copy(
            update={"video": settings.video.model_copy(update=overrides)}
        )

    level = "DEBUG" if args.debug else settings.logging.level
    setup_logging(level, settings.logging.file)

    sys.exit(run_counting_session(settings))


if __name__ == "__main__":
    main()
