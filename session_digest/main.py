"""Main entry point for Session Digest."""

import argparse
import sys
from pathlib import Path

from .config import get_settings
from .recording.intake import RecordingFormatError, load_recording
from .recording.render import render_json, render_text
from .recording.summarizer import EventSummarizer
from .utils.logging import LogContext, configure_logging, get_logger, log_operation

logger = get_logger(__name__)


def run_digest(
    recording_path: str,
    output_format: str = "text",
    verbose_sources: bool | None = None,
) -> str:
    """Summarize one recording file and return the rendered digest."""
    settings = get_settings()
    if verbose_sources is not None:
        settings.verbose_sources = verbose_sources

    events = load_recording(Path(recording_path))
    summarizer = EventSummarizer.from_settings(settings)

    with LogContext(recording=recording_path):
        with log_operation("summarize", logger=logger, event_count=len(events)) as op:
            nodes = summarizer.summarize(events)
            op["node_count"] = len(nodes)

    if output_format == "json":
        return render_json(nodes)
    return render_text(nodes)


def cli(argv: list[str] | None = None) -> int:
    """Command-line interface."""
    parser = argparse.ArgumentParser(
        description="Summarize an rrweb session recording into a reviewable event list"
    )
    parser.add_argument(
        "recording",
        help="Path to the recording JSON (data.snapshots, events or a bare list)"
    )
    parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )
    parser.add_argument(
        "--verbose-sources",
        action="store_true",
        default=None,
        help="Also summarize scroll, stylesheet, font and other low-level sources"
    )
    parser.add_argument(
        "--log-level",
        help="Log level (default: from SESSION_DIGEST_LOG_LEVEL or INFO)"
    )

    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(
        level=args.log_level or settings.log_level,
        json_format=settings.log_json,
    )

    try:
        output = run_digest(
            args.recording,
            output_format=args.format,
            verbose_sources=args.verbose_sources,
        )
    except RecordingFormatError as e:
        logger.error("Cannot load recording", path=args.recording, error=str(e))
        return 2

    sys.stdout.write(output)
    return 0


def main() -> None:
    sys.exit(cli())


if __name__ == "__main__":
    main()
