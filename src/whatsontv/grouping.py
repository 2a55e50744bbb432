"""Grouping and ordering of normalized shows.

Pure functions: the input list is never mutated and the same input always
produces the same groups in the same order.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from whatsontv.constants import DEFAULT_COUNTRY, UNKNOWN_NETWORK
from whatsontv.filters import is_us_platform


if TYPE_CHECKING:
    from whatsontv.models import NetworkGroups, Show


__all__ = [
    "airtime_minutes",
    "group_and_sort",
    "group_by_network",
    "network_key",
    "sort_by_airtime",
    "sort_episodes",
]

_AIRTIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def airtime_minutes(airtime: str | None) -> int | None:
    """Convert "HH:MM" to minutes since midnight; None if not parseable."""
    if not airtime:
        return None
    match = _AIRTIME_RE.match(airtime)
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def network_key(show: Show) -> str:
    """Grouping key for a show.

    The network (or web channel) name, suffixed with the country code for
    non-US channels unless the name is a known US platform.

    Examples:
        "CBS" (US)            -> "CBS"
        "BBC One" (GB)        -> "BBC One (GB)"
        "Netflix" (GB)        -> "Netflix"
        no network at all     -> "Unknown"
    """
    name = show.network or UNKNOWN_NETWORK
    if show.country and show.country.upper() != DEFAULT_COUNTRY and not is_us_platform(name):
        return f"{name} ({show.country})"
    return name


def group_by_network(shows: list[Show]) -> NetworkGroups:
    """Group shows by ``network_key``, keeping original relative order."""
    groups: NetworkGroups = {}
    for show in shows:
        groups.setdefault(network_key(show), []).append(show)
    return groups


def sort_by_airtime(shows: list[Show]) -> list[Show]:
    """Stable sort by airtime; shows without a valid airtime go last."""

    def sort_key(show: Show) -> tuple[int, int]:
        minutes = airtime_minutes(show.airtime)
        return (1, 0) if minutes is None else (0, minutes)

    return sorted(shows, key=sort_key)


def sort_episodes(shows: list[Show]) -> list[Show]:
    """Sort episodes of one series by season, then episode number."""
    return sorted(shows, key=lambda s: (s.season, s.number))


def group_and_sort(shows: list[Show]) -> NetworkGroups:
    """Group by network, then order each group by airtime."""
    return {
        network: sort_by_airtime(members)
        for network, members in group_by_network(shows).items()
    }
