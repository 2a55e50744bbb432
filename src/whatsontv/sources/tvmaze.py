"""TVMaze schedule source.

Fetches the daily schedule from two public, unauthenticated endpoints:

- ``/schedule``: linear TV, filtered server-side by ``country``. Items carry
  the series under ``show``.
- ``/schedule/web``: streaming releases. Items carry the series under
  ``_embedded.show`` and the endpoint ignores ``country``.

Both requests run concurrently. A failing endpoint degrades to an empty
list so the other one still produces output.

API docs: https://www.tvmaze.com/api
"""

from __future__ import annotations

import asyncio
import logging
import math
import re
from typing import Any, ClassVar

import httpx

from whatsontv.constants import (
    NETWORK_SCHEDULE_PATH,
    TVMAZE_BASE_URL,
    UNKNOWN_SHOW,
    UNKNOWN_TYPE,
    WEB_SCHEDULE_PATH,
)
from whatsontv.models import FetchSource, Show, ShowOptions
from whatsontv.sanitize import sanitize_text
from whatsontv.sources.base import (
    BaseSource,
    create_async_http_client,
    register_source,
)


__all__ = [
    "TVMazeSource",
    "fetch_schedules",
    "normalize_schedule",
    "normalize_show",
]

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"^\s*(-?\d+)")


# =============================================================================
# Fetching
# =============================================================================


async def _get_schedule(
    client: httpx.AsyncClient,
    path: str,
    params: dict[str, str],
) -> list[dict[str, Any]]:
    """Fetch one schedule endpoint, turning any failure into ``[]``."""
    try:
        response = await client.get(f"{TVMAZE_BASE_URL}{path}", params=params)
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPStatusError as exc:
        logger.warning(
            "TVMaze %s returned HTTP %d", path, exc.response.status_code
        )
        return []
    except httpx.RequestError as exc:
        logger.warning("TVMaze %s request failed: %s", path, exc)
        return []
    except ValueError:
        logger.warning("TVMaze %s returned invalid JSON", path)
        return []

    if not isinstance(payload, list):
        logger.warning(
            "TVMaze %s returned %s instead of a list",
            path,
            type(payload).__name__,
        )
        return []

    logger.debug("TVMaze %s: %d items", path, len(payload))
    return payload


async def _fetch_schedules_async(
    date: str,
    country: str,
    fetch: FetchSource,
    transport: httpx.AsyncBaseTransport | None,
) -> list[dict[str, Any]]:
    network_params = {"date": date}
    if country and country.strip():
        network_params["country"] = country.strip()
    web_params = {"date": date}

    async with create_async_http_client(transport) as client:
        requests = []
        if fetch in ("all", "network"):
            requests.append(_get_schedule(client, NETWORK_SCHEDULE_PATH, network_params))
        if fetch in ("all", "web"):
            requests.append(_get_schedule(client, WEB_SCHEDULE_PATH, web_params))
        results = await asyncio.gather(*requests)

    items: list[dict[str, Any]] = []
    for result in results:
        items.extend(result)
    return items


def fetch_schedules(
    date: str,
    country: str,
    *,
    fetch: FetchSource = "all",
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[dict[str, Any]]:
    """Fetch raw schedule items for a date.

    Network schedule items come first, web schedule items after.

    Args:
        date: Schedule date (YYYY-MM-DD).
        country: Country code for the network schedule. Empty omits it.
        fetch: "all" for both endpoints, or "network" / "web" for one.
        transport: Optional httpx transport (tests inject a MockTransport).

    Returns:
        Raw TVMaze items. Never raises for HTTP or decoding problems.
    """
    return asyncio.run(_fetch_schedules_async(date, country, fetch, transport))


# =============================================================================
# Normalization
# =============================================================================


def _to_int(value: object) -> int:
    """Coerce season/episode numbers that may arrive as strings."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        return int(match.group(1)) if match else 0
    return 0


def _non_empty_str(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _series_data(raw: dict[str, Any]) -> tuple[dict[str, Any], bool]:
    """Locate the series payload; second value is True for flat items."""
    embedded = raw.get("_embedded")
    if isinstance(embedded, dict) and isinstance(embedded.get("show"), dict):
        return embedded["show"], False
    if isinstance(raw.get("show"), dict):
        return raw["show"], False
    return raw, True


def _channel_info(series: dict[str, Any]) -> tuple[str, str | None, bool]:
    """Return (name, country code, is_streaming); web channel wins."""
    for key in ("webChannel", "network"):
        channel = series.get(key)
        if not isinstance(channel, dict):
            continue
        name = _non_empty_str(channel.get("name"))
        if name is None:
            continue
        country = channel.get("country")
        code = (
            _non_empty_str(country.get("code")) if isinstance(country, dict) else None
        )
        return name, code, key == "webChannel"
    return "", None, False


def normalize_show(raw: object) -> Show:
    """Map one TVMaze schedule item onto a Show.

    Accepts the network shape (``show``), the web shape (``_embedded.show``)
    and a flat series dict. Missing or malformed fields fall back to the
    Show defaults; this function never raises.
    """
    if not isinstance(raw, dict):
        return Show()

    try:
        series, flat = _series_data(raw)
        network, country, is_streaming = _channel_info(series)

        show_id = series.get("id")
        genres = series.get("genres")
        airtime = _non_empty_str(raw.get("airtime"))

        return Show(
            id=show_id if isinstance(show_id, int) and not isinstance(show_id, bool) else 0,
            name=_non_empty_str(series.get("name")) or UNKNOWN_SHOW,
            episode_name="" if flat else (_non_empty_str(raw.get("name")) or ""),
            type=_non_empty_str(series.get("type")) or UNKNOWN_TYPE,
            language=_non_empty_str(series.get("language")),
            genres=tuple(g for g in genres if isinstance(g, str))
            if isinstance(genres, list)
            else (),
            network=network,
            country=country,
            is_streaming=is_streaming,
            season=_to_int(raw.get("season")),
            number=_to_int(raw.get("number")),
            airtime=airtime.strip() if airtime else None,
            summary=sanitize_text(series.get("summary")),
        )
    except Exception as exc:
        logger.debug("Error normalizing TVMaze item: %s", exc)
        return Show()


def normalize_schedule(items: object) -> list[Show]:
    """Normalize a list of raw items; non-list input yields ``[]``."""
    if not isinstance(items, list):
        return []
    return [normalize_show(item) for item in items]


# =============================================================================
# Source
# =============================================================================


@register_source("tvmaze")
class TVMazeSource(BaseSource):
    """Daily schedule from TVMaze (linear TV and streaming).

    Website: https://www.tvmaze.com

    Attributes:
        source_name: "TVMaze"
        source_type: "schedule"
    """

    source_name: ClassVar[str] = "TVMaze"
    source_type: ClassVar[str] = "schedule"

    def fetch(self, options: ShowOptions) -> list[Show]:
        """Fetch and normalize the schedule described by ``options``."""
        date = options.resolved_date()
        logger.info(
            "Fetching %s schedule from %s for %s (country=%s)",
            options.fetch,
            self.source_name,
            date,
            options.country or "-",
        )

        items = fetch_schedules(
            date,
            options.country,
            fetch=options.fetch,
            transport=self.transport,
        )
        shows = normalize_schedule(items)
        logger.info("Found %d shows from %s", len(shows), self.source_name)
        return shows
