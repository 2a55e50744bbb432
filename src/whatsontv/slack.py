"""Slack output: Block Kit formatting and a minimal Web API client.

Messages are posted with ``chat.postMessage`` using a bot token. Slack
answers HTTP 200 even for most failures, so the ``ok`` flag in the body is
checked as well as the status code.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Final

import httpx

from whatsontv.constants import NO_AIRTIME, UNKNOWN_SHOW
from whatsontv.formatting import (
    format_episode_info,
    format_time,
    group_by_series,
)
from whatsontv.grouping import sort_by_airtime, sort_episodes
from whatsontv.sources.base import create_http_client


if TYPE_CHECKING:
    from whatsontv.models import NetworkGroups, Show


__all__ = [
    "SlackClient",
    "SlackError",
    "chunk_blocks",
    "format_show_text",
    "format_slack_blocks",
    "type_emoji",
]

logger = logging.getLogger(__name__)

SLACK_API_BASE: Final[str] = "https://slack.com/api"
MAX_BLOCKS_PER_MESSAGE: Final[int] = 50
# Header block text is limited to 150 characters by Slack
MAX_HEADER_LENGTH: Final[int] = 150

Block = dict[str, Any]

TYPE_EMOJI: Final[dict[str, str]] = {
    "scripted": "📝",
    "reality": "👁",
    "talk": "🎙",
    "documentary": "🎬",
    "variety": "🎭",
    "game": "🎮",
    "news": "📰",
    "sports": "⚽",
}
DEFAULT_EMOJI: Final[str] = "📺"


class SlackError(Exception):
    """Raised when a Slack API call fails."""


# =============================================================================
# Block Kit Formatting
# =============================================================================


def type_emoji(show_type: str | None) -> str:
    """Emoji for a show type; 📺 when unknown."""
    if not show_type:
        return DEFAULT_EMOJI
    return TYPE_EMOJI.get(show_type.lower(), DEFAULT_EMOJI)


def _header(text: str) -> Block:
    return {
        "type": "header",
        "text": {
            "type": "plain_text",
            "text": text[:MAX_HEADER_LENGTH],
            "emoji": True,
        },
    }


def _section(text: str) -> Block:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def format_show_text(show: Show, episode_info: str | None = None) -> str:
    """mrkdwn line for one show: emoji, bold name, episode, time."""
    info = format_episode_info(show) if episode_info is None else episode_info
    airtime = format_time(show.airtime) if show.has_airtime() else NO_AIRTIME
    name = show.name or UNKNOWN_SHOW
    parts = [type_emoji(show.type), f"*{name}*"]
    if info:
        parts.append(info)
    parts.append(f"({airtime})")
    return " ".join(parts)


def _consecutive_range(episodes: list[Show]) -> str | None:
    """Return "S01E01-03" when episodes form one run within a season."""
    ordered = sort_episodes(episodes)
    first, last = ordered[0], ordered[-1]
    if not first.number:
        return None
    for previous, episode in zip(ordered, ordered[1:], strict=False):
        if episode.season != previous.season or episode.number != previous.number + 1:
            return None
    return f"S{first.season:02d}E{first.number:02d}-{last.number:02d}"


def _network_sections(shows: list[Show]) -> list[Block]:
    blocks: list[Block] = []
    for episodes in group_by_series(sort_by_airtime(shows)).values():
        if len(episodes) > 1 and not any(e.has_airtime() for e in episodes):
            ordered = sort_episodes(episodes)
            label = _consecutive_range(ordered)
            if label is not None:
                blocks.append(_section(format_show_text(ordered[0], label)))
            else:
                blocks.append(
                    _section("\n".join(format_show_text(e) for e in ordered))
                )
        else:
            blocks.extend(
                _section(format_show_text(e)) for e in sort_by_airtime(episodes)
            )
    return blocks


def format_slack_blocks(groups: NetworkGroups, date: str) -> list[Block]:
    """Build Block Kit blocks for shows grouped by network.

    Args:
        groups: Shows grouped (and sorted) by network.
        date: Schedule date shown in the title.

    Returns:
        Blocks: title, divider, one header plus sections per network
        (alphabetical, dividers between), and an attribution footer.
    """
    blocks: list[Block] = [_header(f"📺 TV Shows for {date}"), {"type": "divider"}]

    networks = [name for name in sorted(groups) if groups[name]]
    if not networks:
        blocks.append(_section("No shows found for the specified criteria."))

    for index, network in enumerate(networks):
        if index > 0:
            blocks.append({"type": "divider"})
        blocks.append(_header(network))
        blocks.extend(_network_sections(groups[network]))

    blocks.append(
        {
            "type": "context",
            "elements": [{"type": "mrkdwn", "text": "_Data provided by TVMaze API_"}],
        }
    )
    return blocks


def chunk_blocks(
    blocks: list[Block],
    size: int = MAX_BLOCKS_PER_MESSAGE,
) -> list[list[Block]]:
    """Split blocks into message-sized chunks (Slack allows 50 per message)."""
    if size < 1:
        msg = f"Chunk size must be positive, got {size}"
        raise ValueError(msg)
    return [blocks[i : i + size] for i in range(0, len(blocks), size)]


# =============================================================================
# Web API Client
# =============================================================================


class SlackClient:
    """Tiny ``chat.postMessage`` client on top of httpx.

    Args:
        token: Bot token (xoxb-...).
        channel: Default channel id.
        username: Display name for the bot.
        icon_emoji: Emoji avatar, e.g. ":tv:".
        transport: Optional httpx transport (tests inject a MockTransport).
    """

    def __init__(
        self,
        token: str,
        channel: str,
        username: str = "WhatsOnTV",
        icon_emoji: str = ":tv:",
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.token = token
        self.channel = channel
        self.username = username
        self.icon_emoji = icon_emoji
        self.transport = transport

    def post_message(
        self,
        text: str,
        blocks: list[Block] | None = None,
        channel: str | None = None,
    ) -> dict[str, Any]:
        """Post a message and return Slack's response body.

        Raises:
            SlackError: If the token/channel is missing, the request fails,
                or Slack answers with ``ok: false``.
        """
        target = channel or self.channel
        if not self.token or not target:
            msg = "Slack token and channel must be configured"
            raise SlackError(msg)

        payload: dict[str, Any] = {
            "channel": target,
            "text": text,
            "username": self.username,
            "icon_emoji": self.icon_emoji,
            "mrkdwn": True,
        }
        if blocks:
            payload["blocks"] = blocks

        try:
            with create_http_client(self.transport) as client:
                response = client.post(
                    f"{SLACK_API_BASE}/chat.postMessage",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.token}"},
                )
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as exc:
            msg = f"Slack API error: HTTP {exc.response.status_code}"
            raise SlackError(msg) from exc
        except httpx.RequestError as exc:
            msg = f"Slack request failed: {exc}"
            raise SlackError(msg) from exc
        except ValueError as exc:
            msg = "Slack returned an invalid response"
            raise SlackError(msg) from exc

        if not isinstance(body, dict) or not body.get("ok"):
            error = body.get("error", "unknown_error") if isinstance(body, dict) else "unknown_error"
            msg = f"Slack API error: {error}"
            raise SlackError(msg)

        logger.debug("Posted Slack message to %s (ts=%s)", target, body.get("ts"))
        return body
