"""Shared fixtures: TVMaze payloads and a fake TVMaze server."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from whatsontv.models import Show


NETWORK_ITEM: dict[str, Any] = {
    "id": 1001,
    "name": "Pilot",
    "season": 1,
    "number": 1,
    "airdate": "2025-03-01",
    "airtime": "20:00",
    "show": {
        "id": 1,
        "name": "Survivor",
        "type": "Reality",
        "language": "English",
        "genres": ["Adventure"],
        "network": {
            "id": 2,
            "name": "CBS",
            "country": {"name": "United States", "code": "US", "timezone": "America/New_York"},
        },
        "webChannel": None,
        "summary": "<p><b>Survivor</b> strands strangers &amp; friends.</p>",
    },
}

WEB_ITEM: dict[str, Any] = {
    "id": 2002,
    "name": "Chapter One",
    "season": "4",
    "number": "1",
    "airdate": "2025-03-01",
    "airtime": "",
    "_embedded": {
        "show": {
            "id": 2,
            "name": "Stranger Things",
            "type": "Scripted",
            "language": "English",
            "genres": ["Drama", "Fantasy", "Science-Fiction"],
            "network": None,
            "webChannel": {"id": 1, "name": "Netflix", "country": None},
            "summary": "<p>A small town.</p>",
        }
    },
}


@pytest.fixture
def network_item() -> dict[str, Any]:
    return json.loads(json.dumps(NETWORK_ITEM))


@pytest.fixture
def web_item() -> dict[str, Any]:
    return json.loads(json.dumps(WEB_ITEM))


@pytest.fixture
def make_show() -> Callable[..., Show]:
    """Factory for Show records with sensible defaults."""

    def _make(**kwargs: Any) -> Show:
        defaults: dict[str, Any] = {
            "id": 1,
            "name": "Test Show",
            "type": "Scripted",
            "language": "English",
            "genres": ("Drama",),
            "network": "CBS",
            "country": "US",
            "season": 1,
            "number": 1,
            "airtime": "20:00",
        }
        defaults.update(kwargs)
        return Show(**defaults)

    return _make


@pytest.fixture
def tvmaze_transport(
    network_item: dict[str, Any],
    web_item: dict[str, Any],
) -> Callable[..., httpx.MockTransport]:
    """Build a MockTransport serving both schedule endpoints.

    Every request is appended to the returned transport's ``requests`` list.
    Pass ``network=`` / ``web=`` to override a payload, or an int to answer
    with that HTTP status instead.
    """

    def _build(network: object = None, web: object = None) -> httpx.MockTransport:
        network_payload = [network_item] if network is None else network
        web_payload = [web_item] if web is None else web
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            payload = web_payload if request.url.path == "/schedule/web" else network_payload
            if isinstance(payload, int):
                return httpx.Response(payload, json={"message": "error"})
            return httpx.Response(200, json=payload)

        transport = httpx.MockTransport(handler)
        transport.requests = seen  # type: ignore[attr-defined]
        return transport

    return _build
