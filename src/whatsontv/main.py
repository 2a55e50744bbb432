"""Main orchestration module for WhatsOnTV.

Entry point for the daily schedule workflow:
1. Load configuration (defaults, config.json, environment, CLI)
2. Fetch and filter the TVMaze schedule
3. Render to the terminal or post to Slack
4. Optionally repeat every day at the configured notification time
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import TYPE_CHECKING, NoReturn

import schedule

from whatsontv.aggregator import fetch_all_shows
from whatsontv.config import FETCH_SOURCES, load_config, merge_show_options
from whatsontv.notifier import notify


if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from whatsontv.config import AppConfig
    from whatsontv.models import ShowOptions

__all__ = ["main", "run", "run_scheduled"]


# =============================================================================
# Logging Configuration
# =============================================================================


def _configure_logging(*, debug: bool = False) -> None:
    """Configure logging for the application.

    Logs go to stderr (stdout carries the schedule) and to a log file.
    """
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler("whatsontv.log", encoding="utf-8"),
        ],
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)


logger = logging.getLogger(__name__)


# =============================================================================
# Main Workflow
# =============================================================================


def run(
    options: ShowOptions,
    config: AppConfig,
    *,
    slack: bool = False,
    output_dir: str | Path | None = None,
) -> bool:
    """Execute the complete fetch and notify workflow.

    Args:
        options: Date, country and filter criteria.
        config: Loaded configuration.
        slack: Post to Slack instead of printing.
        output_dir: Also save the output files here.

    Returns:
        True if workflow completed successfully.
    """
    try:
        logger.info("Starting WhatsOnTV for %s", options.resolved_date())

        shows = fetch_all_shows(options)
        logger.info("Summary: %d shows", len(shows))

        success = notify(shows, options, config, slack=slack, output_dir=output_dir)
        if not success:
            logger.error("Failed to deliver schedule")
            return False

        logger.info("Workflow completed successfully")

    except Exception:
        logger.exception("Workflow failed")
        return False
    else:
        return True


def run_scheduled(
    options: ShowOptions,
    config: AppConfig,
    *,
    slack: bool = False,
    output_dir: str | Path | None = None,
    poll_seconds: int = 30,
) -> NoReturn:
    """Run the workflow every day at ``config.notification_time``.

    The date is re-resolved on every run, so an explicit ``--date`` is
    ignored in this mode.
    """

    def daily_job() -> None:
        options.date = ""
        run(options, config, slack=slack, output_dir=output_dir)

    schedule.every().day.at(config.notification_time).do(daily_job)
    logger.info(
        "Scheduled daily notification at %s (next run: %s)",
        config.notification_time,
        schedule.next_run(),
    )

    while True:
        schedule.run_pending()
        time.sleep(poll_seconds)


# =============================================================================
# CLI Entry Point
# =============================================================================


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    List options accept comma-separated values (``-t Scripted,Reality``).
    Unset options fall back to config.json.
    """
    parser = argparse.ArgumentParser(
        prog="whatsontv",
        description="WhatsOnTV - today's TV schedule from TVMaze",
    )
    parser.add_argument("-d", "--date", help="Schedule date (YYYY-MM-DD), default today")
    parser.add_argument("-c", "--country", help="Country code for network schedule (e.g. US, GB)")
    parser.add_argument("-t", "--types", help="Show types to include (e.g. Scripted,Reality)")
    parser.add_argument("-n", "--networks", help="Networks to include (e.g. CBS,Netflix)")
    parser.add_argument("-g", "--genres", help="Genres to include (e.g. Drama,Comedy)")
    parser.add_argument("-l", "--languages", help="Languages to include (e.g. English)")
    parser.add_argument(
        "-f",
        "--fetch",
        choices=FETCH_SOURCES,
        default="all",
        help="Schedule endpoints to query (default: all)",
    )
    parser.add_argument(
        "--time-sort",
        action="store_true",
        help="List shows chronologically instead of grouped by network",
    )
    parser.add_argument("--slack", action="store_true", help="Post to Slack instead of printing")
    parser.add_argument(
        "--schedule",
        action="store_true",
        help="Keep running and notify daily at the configured time",
    )
    parser.add_argument("--config", help="Path to config.json")
    parser.add_argument("-o", "--output", help="Also save output files to this directory")
    parser.add_argument("-D", "--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> NoReturn:
    """Main entry point for the application.

    Loads configuration, runs the workflow, and exits with appropriate
    status code.
    """
    args = _parse_args(argv)
    _configure_logging(debug=args.debug)

    config = load_config(args.config)
    options = merge_show_options(args, config)

    if args.schedule:
        run_scheduled(options, config, slack=args.slack, output_dir=args.output)

    success = run(options, config, slack=args.slack, output_dir=args.output)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
