"""Tests for Slack Block Kit formatting and the chat.postMessage client."""

from __future__ import annotations

import json

import httpx
import pytest

from whatsontv.slack import (
    MAX_BLOCKS_PER_MESSAGE,
    SlackClient,
    SlackError,
    chunk_blocks,
    format_show_text,
    format_slack_blocks,
    type_emoji,
)


# =============================================================================
# Formatting Tests
# =============================================================================


class TestShowText:
    """Tests for per-show mrkdwn text."""

    def test_type_emoji(self) -> None:
        assert type_emoji("Scripted") == "📝"
        assert type_emoji("reality") == "👁"
        assert type_emoji("Animation") == "📺"
        assert type_emoji(None) == "📺"

    def test_timed_show(self, make_show) -> None:  # noqa: ANN001
        text = format_show_text(make_show(name="Survivor", type="Reality", airtime="20:00"))
        assert text == "👁 *Survivor* S01E01 (8:00 PM)"

    def test_untimed_show(self, make_show) -> None:  # noqa: ANN001
        text = format_show_text(make_show(name="Drop", airtime=None, season=0, number=0))
        assert text == "📝 *Drop* (N/A)"


class TestFormatSlackBlocks:
    """Tests for the complete block list."""

    def test_structure(self, make_show) -> None:  # noqa: ANN001
        groups = {
            "NBC": [make_show(id=1, name="Tonight", network="NBC")],
            "CBS": [make_show(id=2, name="Survivor", network="CBS")],
        }
        blocks = format_slack_blocks(groups, "2025-03-01")

        assert blocks[0]["type"] == "header"
        assert blocks[0]["text"]["text"] == "📺 TV Shows for 2025-03-01"
        assert blocks[1] == {"type": "divider"}

        headers = [b["text"]["text"] for b in blocks[2:] if b["type"] == "header"]
        assert headers == ["CBS", "NBC"]

        assert blocks[-1]["type"] == "context"
        assert blocks[-1]["elements"][0]["text"] == "_Data provided by TVMaze API_"

    def test_dividers_between_networks(self, make_show) -> None:  # noqa: ANN001
        groups = {
            "A": [make_show(network="A")],
            "B": [make_show(network="B")],
            "C": [make_show(network="C")],
        }
        blocks = format_slack_blocks(groups, "2025-03-01")
        # Title divider plus one between each pair of networks
        assert sum(1 for b in blocks if b["type"] == "divider") == 3

    def test_empty_schedule(self) -> None:
        blocks = format_slack_blocks({}, "2025-03-01")
        sections = [b for b in blocks if b["type"] == "section"]

        assert len(sections) == 1
        assert "No shows found" in sections[0]["text"]["text"]

    def test_consecutive_drop_collapses(self, make_show) -> None:  # noqa: ANN001
        drop = [
            make_show(id=5, name="Binge", network="Netflix", airtime=None, season=2, number=n)
            for n in (3, 1, 2)
        ]
        blocks = format_slack_blocks({"Netflix": drop}, "2025-03-01")
        sections = [b["text"]["text"] for b in blocks if b["type"] == "section"]

        assert sections == ["📝 *Binge* S02E01-03 (N/A)"]

    def test_non_consecutive_drop_lists_each_episode(self, make_show) -> None:  # noqa: ANN001
        drop = [
            make_show(id=5, name="Binge", network="Netflix", airtime=None, season=1, number=n)
            for n in (1, 4)
        ]
        blocks = format_slack_blocks({"Netflix": drop}, "2025-03-01")
        sections = [b["text"]["text"] for b in blocks if b["type"] == "section"]

        assert sections == ["📝 *Binge* S01E01 (N/A)\n📝 *Binge* S01E04 (N/A)"]

    def test_repeated_episode_does_not_hide_gap(self, make_show) -> None:  # noqa: ANN001
        """E1, E3, E3 is not the run E01-03."""
        drop = [
            make_show(id=5, name="Binge", network="Netflix", airtime=None, season=1, number=n)
            for n in (1, 3, 3)
        ]
        blocks = format_slack_blocks({"Netflix": drop}, "2025-03-01")
        sections = [b["text"]["text"] for b in blocks if b["type"] == "section"]

        assert sections == [
            "📝 *Binge* S01E01 (N/A)\n📝 *Binge* S01E03 (N/A)\n📝 *Binge* S01E03 (N/A)"
        ]

    def test_long_header_truncated(self, make_show) -> None:  # noqa: ANN001
        name = "N" * 200
        blocks = format_slack_blocks({name: [make_show(network=name)]}, "2025-03-01")
        assert len(blocks[2]["text"]["text"]) == 150


class TestChunkBlocks:
    """Tests for splitting blocks into messages."""

    def test_chunks_respect_limit(self) -> None:
        blocks = [{"type": "divider"}] * 120
        chunks = chunk_blocks(blocks)

        assert [len(c) for c in chunks] == [MAX_BLOCKS_PER_MESSAGE, MAX_BLOCKS_PER_MESSAGE, 20]
        assert sum(chunks, []) == blocks

    def test_empty(self) -> None:
        assert chunk_blocks([]) == []

    def test_invalid_size(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            chunk_blocks([{"type": "divider"}], size=0)


# =============================================================================
# Client Tests
# =============================================================================


def _slack_transport(
    body: object,
    status: int = 200,
    seen: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, json=body)

    return httpx.MockTransport(handler)


class TestSlackClient:
    """Tests for SlackClient.post_message."""

    def test_successful_post(self) -> None:
        seen: list[httpx.Request] = []
        client = SlackClient(
            "xoxb-test",
            "C123",
            transport=_slack_transport({"ok": True, "ts": "1.0"}, seen=seen),
        )
        body = client.post_message("hello", [{"type": "divider"}])

        assert body["ok"] is True
        request = seen[0]
        assert request.url.path == "/api/chat.postMessage"
        assert request.headers["Authorization"] == "Bearer xoxb-test"

        payload = json.loads(request.content)
        assert payload["channel"] == "C123"
        assert payload["text"] == "hello"
        assert payload["username"] == "WhatsOnTV"
        assert payload["icon_emoji"] == ":tv:"
        assert payload["blocks"] == [{"type": "divider"}]

    def test_channel_override(self) -> None:
        seen: list[httpx.Request] = []
        client = SlackClient(
            "xoxb-test", "C123", transport=_slack_transport({"ok": True}, seen=seen)
        )
        client.post_message("hi", channel="C999")
        assert json.loads(seen[0].content)["channel"] == "C999"
        assert "blocks" not in json.loads(seen[0].content)

    def test_ok_false_raises(self) -> None:
        client = SlackClient(
            "xoxb-test",
            "C123",
            transport=_slack_transport({"ok": False, "error": "channel_not_found"}),
        )
        with pytest.raises(SlackError, match="channel_not_found"):
            client.post_message("hello")

    def test_http_error_raises(self) -> None:
        client = SlackClient("xoxb-test", "C123", transport=_slack_transport({}, status=500))
        with pytest.raises(SlackError, match="HTTP 500"):
            client.post_message("hello")

    def test_request_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        client = SlackClient("xoxb-test", "C123", transport=httpx.MockTransport(handler))
        with pytest.raises(SlackError, match="request failed"):
            client.post_message("hello")

    @pytest.mark.parametrize(("token", "channel"), [("", "C123"), ("xoxb-test", "")])
    def test_missing_credentials(self, token: str, channel: str) -> None:
        client = SlackClient(token, channel, transport=_slack_transport({"ok": True}))
        with pytest.raises(SlackError, match="must be configured"):
            client.post_message("hello")
