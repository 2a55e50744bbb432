"""Notification module for rendering and delivering the schedule.

Three outputs share one pipeline result:
1. Console - aligned plain-text lines (``formatting.format_message``)
2. Slack - Block Kit messages via ``chat.postMessage``
3. Files - latest_message.txt + shows.json for archiving
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

from whatsontv.formatting import format_message
from whatsontv.grouping import group_and_sort
from whatsontv.slack import SlackClient, SlackError, chunk_blocks, format_slack_blocks


if TYPE_CHECKING:
    from whatsontv.config import AppConfig, SlackConfig
    from whatsontv.models import Show, ShowOptions


__all__ = [
    "notify",
    "notify_console",
    "notify_slack",
    "save_to_file",
]

logger = logging.getLogger(__name__)


# =============================================================================
# Console Output
# =============================================================================


def notify_console(
    shows: list[Show],
    options: ShowOptions,
    stream: TextIO | None = None,
) -> bool:
    """Print the formatted schedule.

    Args:
        shows: Filtered shows.
        options: Options used for the fetch.
        stream: Output stream, stdout by default.

    Returns:
        True if the schedule was written.
    """
    out = stream if stream is not None else sys.stdout
    try:
        out.write(format_message(shows, options) + "\n")
        out.flush()
    except OSError:
        logger.exception("Failed to write schedule to console")
        return False
    return True


# =============================================================================
# Slack Output
# =============================================================================


def _client_from_config(slack_config: SlackConfig) -> SlackClient:
    return SlackClient(
        token=slack_config.token,
        channel=slack_config.channel_id,
        username=slack_config.username,
        icon_emoji=slack_config.icon_emoji,
    )


def _report_error(client: SlackClient, error: Exception) -> None:
    """Tell the channel the run failed; log if even that fails."""
    try:
        client.post_message(f"Error fetching TV shows: {error}")
    except SlackError as send_error:
        logger.error(
            "Failed to send error message to Slack: %s (original error: %s)",
            send_error,
            error,
        )


def notify_slack(
    shows: list[Show],
    options: ShowOptions,
    slack_config: SlackConfig,
    *,
    client: SlackClient | None = None,
) -> bool:
    """Post the schedule to Slack as Block Kit messages.

    Long schedules are split into several messages of at most 50 blocks.
    On failure the error is logged and reported to the channel as plain
    text.

    Args:
        shows: Filtered shows.
        options: Options used for the fetch.
        slack_config: Token, channel and bot identity.
        client: Pre-built client (tests inject a mock).

    Returns:
        True if every message was delivered.
    """
    slack = client if client is not None else _client_from_config(slack_config)
    date = options.resolved_date()

    try:
        blocks = format_slack_blocks(group_and_sort(shows), date)
        chunks = chunk_blocks(blocks)
        for index, chunk in enumerate(chunks, start=1):
            slack.post_message(f"TV Shows for {date} ({index}/{len(chunks)})", chunk)
        logger.info(
            "Sent %d shows to Slack in %d message(s)", len(shows), len(chunks)
        )
    except SlackError as exc:
        logger.exception("Slack notification failed")
        _report_error(slack, exc)
        return False
    else:
        return True


# =============================================================================
# File Output
# =============================================================================


def _show_to_dict(show: Show) -> dict[str, Any]:
    """Convert a Show to a JSON-serializable dictionary."""
    data = asdict(show)
    data["genres"] = list(show.genres)
    return data


def save_to_file(
    message: str,
    shows: list[Show],
    output_dir: str | Path = "output",
) -> None:
    """Save the message and show data to local files.

    Creates two files:
    - latest_message.txt: Human-readable formatted schedule
    - shows.json: Shows grouped by network in JSON format

    Args:
        message: Formatted message string.
        shows: Filtered shows.
        output_dir: Output directory path.
    """
    output_path = Path(output_dir)

    try:
        output_path.mkdir(parents=True, exist_ok=True)

        message_file = output_path / "latest_message.txt"
        message_file.write_text(message, encoding="utf-8")

        json_data = {
            network: [_show_to_dict(s) for s in members]
            for network, members in group_and_sort(shows).items()
        }
        json_file = output_path / "shows.json"
        json_file.write_text(
            json.dumps(json_data, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

        logger.info("Results saved to %s/", output_path)

    except OSError:
        logger.exception("Failed to save results")


# =============================================================================
# Main Notification Interface
# =============================================================================


def notify(
    shows: list[Show],
    options: ShowOptions,
    config: AppConfig,
    *,
    slack: bool = False,
    output_dir: str | Path | None = None,
) -> bool:
    """Deliver the schedule to the selected output.

    Args:
        shows: Filtered shows.
        options: Options used for the fetch.
        config: Loaded configuration (Slack settings).
        slack: Send to Slack instead of the console.
        output_dir: Also save the message and JSON data here.

    Returns:
        True if delivery succeeded.
    """
    if output_dir is not None:
        save_to_file(format_message(shows, options), shows, output_dir)

    if slack:
        if not config.slack.is_configured:
            logger.error("Slack output requested but token/channel are not configured")
            return False
        return notify_slack(shows, options, config.slack)

    return notify_console(shows, options)
