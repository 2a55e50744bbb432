"""Data models for WhatsOnTV.

This module defines the canonical Show record produced by normalization
and the ShowOptions criteria consumed by the fetch and filter steps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date as date_cls
from typing import Literal

from whatsontv.constants import DEFAULT_COUNTRY, UNKNOWN_SHOW, UNKNOWN_TYPE

__all__ = ["FetchSource", "NetworkGroups", "Show", "ShowOptions"]

# Type aliases for clarity
FetchSource = Literal["all", "network", "web"]
NetworkGroups = dict[str, list["Show"]]


@dataclass(frozen=True, slots=True, kw_only=True)
class Show:
    """One scheduled episode with its series metadata attached.

    Both TVMaze schedule endpoints are normalized into this record, so
    everything downstream (filters, grouping, formatters) sees one shape.

    Attributes:
        id: Series id. Episodes of the same series share it.
        name: Series name.
        episode_name: Title of this particular episode.
        type: Series type (e.g. "Scripted", "Reality").
        language: Series language, None when TVMaze has none.
        genres: Series genres.
        network: Web channel name if present, else network name.
        country: ISO country code of that channel, if known.
        is_streaming: True when ``network`` came from a web channel.
        season: Season number, 0 when unknown.
        number: Episode number, 0 when unknown.
        airtime: "HH:MM" in the channel's local time, None when not set.
        summary: Plain-text series summary.

    Example:
        >>> show = Show(id=1, name="Survivor", network="CBS", airtime="20:00")
        >>> show.has_airtime()
        True
    """

    id: int = 0
    name: str = UNKNOWN_SHOW
    episode_name: str = ""
    type: str = UNKNOWN_TYPE
    language: str | None = None
    genres: tuple[str, ...] = ()
    network: str = ""
    country: str | None = None
    is_streaming: bool = False
    season: int = 0
    number: int = 0
    airtime: str | None = None
    summary: str = ""

    def has_airtime(self) -> bool:
        """Check whether the episode has a non-blank airtime."""
        return bool(self.airtime and self.airtime.strip())


@dataclass(slots=True, kw_only=True)
class ShowOptions:
    """Criteria for fetching and filtering shows.

    Empty lists mean "no filter" for that criterion.

    Attributes:
        date: Schedule date as YYYY-MM-DD. Empty means today.
        country: Country code sent to the network schedule endpoint.
            Also filters shows client-side when ``country_filter`` is set
            or another criterion is active.
        country_filter: True when the country was chosen explicitly.
        types: Show types to include.
        networks: Networks or platforms to include.
        genres: Genres to include.
        languages: Languages to include.
        fetch: Which schedule endpoints to query.
        time_sort: Render one chronological list instead of network groups.
    """

    date: str = ""
    country: str = DEFAULT_COUNTRY
    country_filter: bool = False
    types: list[str] = field(default_factory=list)
    networks: list[str] = field(default_factory=list)
    genres: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)
    fetch: FetchSource = "all"
    time_sort: bool = False

    def resolved_date(self) -> str:
        """Return the schedule date, defaulting to today (YYYY-MM-DD)."""
        value = self.date.strip() if self.date else ""
        return value or date_cls.today().isoformat()
