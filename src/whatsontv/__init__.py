"""WhatsOnTV - daily TV schedule from TVMaze.

A small stateless tool that fetches today's schedule, filters it by
simple criteria and renders it to a terminal or posts it to Slack.

Architecture:
- sources/: Schedule sources (registered via @register_source)
  - tvmaze: network (/schedule) and streaming (/schedule/web) endpoints
- filters.py: Type, network, genre, language and country predicates
- grouping.py: Group by network, sort by airtime
- aggregator.py: Fetch from all sources and apply filters
- formatting.py: Aligned plain-text output
- slack.py: Block Kit output and chat.postMessage client
- notifier.py: Console / Slack / file delivery
- config.py: Defaults, config.json, environment and CLI merging

Usage:
    # Print today's US schedule
    whatsontv

    # Scripted shows on Netflix or HBO, posted to Slack
    whatsontv -t Scripted -n Netflix,HBO --slack

Example:
    >>> from whatsontv.aggregator import fetch_all_shows
    >>> from whatsontv.grouping import group_and_sort
    >>> from whatsontv.models import ShowOptions
    >>>
    >>> shows = fetch_all_shows(ShowOptions(genres=["Drama"]))
    >>> groups = group_and_sort(shows)
"""

from __future__ import annotations


__version__ = "1.0.0"

__all__ = [  # noqa: RUF022
    # Version info
    "__version__",
    # Main entry point
    "main",
    "run",
    # Models
    "Show",
    "ShowOptions",
    # Pipeline
    "fetch_all_shows",
    "normalize_show",
    "filter_shows",
    "group_by_network",
    "sort_by_airtime",
    # Sources
    "BaseSource",
    "register_source",
    "get_all_sources",
    # Notifier
    "notify",
    "format_message",
]


# Lazy imports to avoid circular dependencies
def __getattr__(name: str):  # type: ignore[no-untyped-def]  # noqa: PLR0911
    """Lazy import public API components."""
    if name in ("main", "run"):
        from whatsontv.main import main, run  # noqa: PLC0415

        return main if name == "main" else run

    if name in ("Show", "ShowOptions"):
        from whatsontv import models  # noqa: PLC0415

        return getattr(models, name)

    if name == "fetch_all_shows":
        from whatsontv.aggregator import fetch_all_shows  # noqa: PLC0415

        return fetch_all_shows

    if name == "normalize_show":
        from whatsontv.sources.tvmaze import normalize_show  # noqa: PLC0415

        return normalize_show

    if name == "filter_shows":
        from whatsontv.filters import filter_shows  # noqa: PLC0415

        return filter_shows

    if name in ("group_by_network", "sort_by_airtime"):
        from whatsontv import grouping  # noqa: PLC0415

        return getattr(grouping, name)

    if name in ("BaseSource", "register_source", "get_all_sources"):
        from whatsontv import sources  # noqa: PLC0415

        return getattr(sources, name)

    if name == "notify":
        from whatsontv.notifier import notify  # noqa: PLC0415

        return notify

    if name == "format_message":
        from whatsontv.formatting import format_message  # noqa: PLC0415

        return format_message

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
