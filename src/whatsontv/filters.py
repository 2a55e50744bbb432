"""Filter predicates for normalized shows.

Every criterion in ShowOptions is independent: an empty list is a no-op,
and non-empty criteria combine with logical AND. The default country is
only applied client-side alongside another criterion.
All comparisons are case-insensitive.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from whatsontv.constants import US_AVAILABLE_PLATFORMS


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from whatsontv.models import Show, ShowOptions


__all__ = [
    "filter_shows",
    "is_us_platform",
    "matches_country",
    "matches_genres",
    "matches_languages",
    "matches_networks",
    "matches_types",
    "normalize_network_name",
]


# =============================================================================
# Network name helpers
# =============================================================================


def _normalize_platform(name: str) -> str:
    name = name.lower().replace("+", " plus")
    return re.sub(r"\s+", " ", name).strip()


_US_PLATFORMS_NORMALIZED = tuple(
    _normalize_platform(platform) for platform in US_AVAILABLE_PLATFORMS
)


def is_us_platform(name: str | None) -> bool:
    """Check whether a network or platform is available in the US.

    "+" is treated as " plus" and the match is a substring test in both
    directions, so "Apple TV+" and "apple tv plus" are equivalent.

    Examples:
        >>> is_us_platform("Netflix")
        True
        >>> is_us_platform("Disney+")
        True
        >>> is_us_platform("BBC One")
        False
    """
    if not name:
        return False
    normalized = _normalize_platform(name)
    if not normalized:
        return False
    return any(
        platform in normalized or normalized in platform
        for platform in _US_PLATFORMS_NORMALIZED
    )


def normalize_network_name(name: str | None) -> str:
    """Collapse Paramount name variants; other names pass through.

    Examples:
        >>> normalize_network_name("Paramount Plus")
        'Paramount+'
        >>> normalize_network_name("paramount")
        'Paramount Network'
    """
    if not name:
        return ""

    lowered = name.lower()
    if "paramount" in lowered:
        if "plus" in lowered or "+" in lowered:
            return "Paramount+"
        return "Paramount Network"
    return name


# =============================================================================
# Predicates
# =============================================================================


def _lowered(values: Iterable[str]) -> set[str]:
    return {v.strip().lower() for v in values if v and v.strip()}


def matches_types(show: Show, types: list[str]) -> bool:
    """Exact (case-insensitive) match on the show type."""
    wanted = _lowered(types)
    return not wanted or show.type.lower() in wanted


def matches_networks(show: Show, networks: list[str]) -> bool:
    """Substring match on the normalized network name."""
    wanted = [
        normalize_network_name(n.strip()).lower() for n in networks if n and n.strip()
    ]
    if not wanted:
        return True
    if not show.network:
        return False
    network = normalize_network_name(show.network).lower()
    return any(w in network for w in wanted)


def matches_genres(show: Show, genres: list[str]) -> bool:
    """True when any show genre equals any wanted genre."""
    wanted = _lowered(genres)
    if not wanted:
        return True
    return any(genre.lower() in wanted for genre in show.genres)


def matches_languages(show: Show, languages: list[str]) -> bool:
    """Exact match on language; shows without a language never match."""
    wanted = _lowered(languages)
    if not wanted:
        return True
    return show.language is not None and show.language.lower() in wanted


def matches_country(show: Show, country: str) -> bool:
    """Keep shows from ``country``, without a country, or on US platforms."""
    if not country or not country.strip():
        return True
    if show.country is None:
        return True
    if show.country.lower() == country.strip().lower():
        return True
    return is_us_platform(show.network)


# =============================================================================
# Filter chain
# =============================================================================


def filter_shows(shows: list[Show], criteria: ShowOptions) -> list[Show]:
    """Apply every non-empty criterion in ``criteria`` to ``shows``.

    The default country only scopes the network schedule request. It
    narrows the result when the country was given explicitly or when
    another criterion is active.

    Args:
        shows: Normalized shows.
        criteria: Filter values; empty lists are ignored.

    Returns:
        New list with the shows matching all criteria, in input order.
    """
    predicates: list[Callable[[Show], bool]] = []

    if criteria.types:
        predicates.append(lambda s: matches_types(s, criteria.types))
    if criteria.networks:
        predicates.append(lambda s: matches_networks(s, criteria.networks))
    if criteria.genres:
        predicates.append(lambda s: matches_genres(s, criteria.genres))
    if criteria.languages:
        predicates.append(lambda s: matches_languages(s, criteria.languages))

    has_country = bool(criteria.country and criteria.country.strip())
    if has_country and (criteria.country_filter or predicates):
        predicates.append(lambda s: matches_country(s, criteria.country))

    if not predicates:
        return list(shows)

    return [show for show in shows if all(p(show) for p in predicates)]
