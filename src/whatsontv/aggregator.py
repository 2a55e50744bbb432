"""Show aggregation from all registered schedule sources.

This module provides the central orchestration for fetching the schedule,
normalizing it and applying the user's filter criteria.

Usage:
    from whatsontv.aggregator import fetch_all_shows
    from whatsontv.models import ShowOptions

    shows = fetch_all_shows(ShowOptions(date="2025-03-01", types=["Scripted"]))
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from whatsontv.filters import filter_shows
from whatsontv.sources import get_sources_by_type


if TYPE_CHECKING:
    import httpx

    from whatsontv.models import Show, ShowOptions

__all__ = ["fetch_all_shows"]

logger = logging.getLogger(__name__)


def fetch_all_shows(
    options: ShowOptions,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[Show]:
    """Fetch shows from every enabled schedule source and filter them.

    Args:
        options: Date, country, filter criteria and fetch mode.
        transport: Optional httpx transport passed to every source.

    Returns:
        Filtered shows in source order (network schedule before web).

    Example:
        >>> shows = fetch_all_shows(ShowOptions(networks=["HBO"]))
        >>> print(f"Shows: {len(shows)}")
    """
    logger.info("Fetching shows for %s...", options.resolved_date())

    all_shows: list[Show] = []

    sources = get_sources_by_type("schedule")
    logger.debug("Found %d registered schedule sources", len(sources))

    for name, source_cls in sources.items():
        try:
            source = source_cls(transport=transport)

            if not source.enabled:
                logger.debug("Skipping disabled source: %s", name)
                continue

            shows = source.fetch(options)
            all_shows.extend(shows)

        except Exception as exc:
            logger.warning("Source %s failed: %s", name, exc)
            # Continue with other sources - graceful degradation

    filtered = filter_shows(all_shows, options)

    logger.info(
        "Aggregation complete: %d shows fetched, %d after filters",
        len(all_shows),
        len(filtered),
    )
    return filtered
