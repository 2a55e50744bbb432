"""Plain-text formatting of shows for terminal output.

Produces fixed-width columns (time, network, type, show, episode) so the
schedule lines up in a terminal, plus helpers shared with the Slack
formatter (12-hour times, SxxEyy labels, episode ranges).
"""

from __future__ import annotations

from datetime import date as date_cls
from typing import TYPE_CHECKING, Final

from whatsontv.constants import NO_AIRTIME, UNKNOWN_NETWORK, UNKNOWN_SHOW, UNKNOWN_TYPE
from whatsontv.grouping import airtime_minutes, group_and_sort, sort_by_airtime, sort_episodes


if TYPE_CHECKING:
    from whatsontv.models import NetworkGroups, Show, ShowOptions


__all__ = [
    "format_date_heading",
    "format_episode_info",
    "format_episode_ranges",
    "format_message",
    "format_network",
    "format_network_groups",
    "format_show_line",
    "format_time",
    "format_time_sorted",
    "group_by_series",
]

# Column widths: time, network, type, show name, episode info
COLUMN_WIDTHS: Final[tuple[int, int, int, int, int]] = (8, 15, 10, 25, 20)
SEPARATOR: Final[str] = "=" * 30
FOOTER: Final[str] = "Data provided by TVMaze API (https://api.tvmaze.com)"
NO_SHOWS_MESSAGE: Final[str] = "No shows found for the specified criteria."


# =============================================================================
# Field helpers
# =============================================================================


def format_time(airtime: str | None) -> str:
    """Convert "HH:MM" to 12-hour format ("8:00 PM"); "TBA" if invalid."""
    minutes = airtime_minutes(airtime)
    if minutes is None:
        return "TBA"
    hour, minute = divmod(minutes, 60)
    period = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minute:02d} {period}"


def format_episode_info(show: Show) -> str:
    """Format season/episode as "S01E05"; zero parts are left out."""
    result = ""
    if show.season > 0:
        result += f"S{show.season:02d}"
    if show.number > 0:
        result += f"E{show.number:02d}"
    return result


def format_episode_ranges(shows: list[Show]) -> str:
    """Collapse consecutive episodes into ranges.

    Example:
        S1E1, S1E2, S1E3, S1E5, S2E1 -> "S1E1-3, S1E5, S2E1"
    """
    if not shows:
        return ""

    parts: list[str] = []
    episodes = sort_episodes(shows)
    start = end = episodes[0]

    def close_run() -> None:
        label = f"S{start.season}E{start.number}"
        if end.number != start.number:
            label += f"-{end.number}"
        parts.append(label)

    for episode in episodes[1:]:
        if episode.season == end.season and episode.number == end.number + 1:
            end = episode
            continue
        close_run()
        start = end = episode
    close_run()

    return ", ".join(parts)


def format_date_heading(value: str) -> str:
    """Render a YYYY-MM-DD date as "Saturday, March 01, 2025"."""
    try:
        return date_cls.fromisoformat(value).strftime("%A, %B %d, %Y")
    except ValueError:
        return value


def group_by_series(shows: list[Show]) -> dict[int, list[Show]]:
    """Group episodes by series id, in first-appearance order."""
    groups: dict[int, list[Show]] = {}
    for show in shows:
        groups.setdefault(show.id, []).append(show)
    return groups


# =============================================================================
# Lines
# =============================================================================


def _row(time: str, network: str, show_type: str, name: str, episode: str) -> str:
    cells = (time, network, show_type, name, episode)
    return " ".join(
        f"{cell:<{width}}" for cell, width in zip(cells, COLUMN_WIDTHS, strict=True)
    ).rstrip()


def format_show_line(show: Show, episode_info: str | None = None) -> str:
    """Format one show as an aligned row."""
    return _row(
        (show.airtime or "").strip() or NO_AIRTIME,
        show.network or UNKNOWN_NETWORK,
        show.type or UNKNOWN_TYPE,
        show.name or UNKNOWN_SHOW,
        format_episode_info(show) if episode_info is None else episode_info,
    )


def format_network(network: str, shows: list[Show]) -> list[str]:
    """Format one network block: header, separator and show rows.

    Several untimed episodes of one series (a streaming season drop)
    collapse into a single row listing the episode ranges.
    """
    if not shows:
        return []

    header = f"{network or UNKNOWN_NETWORK}:"
    lines = [header, "-" * len(header)]

    for episodes in group_by_series(sort_by_airtime(shows)).values():
        if len(episodes) > 1 and not any(e.has_airtime() for e in episodes):
            lines.append(
                format_show_line(episodes[0], format_episode_ranges(episodes))
            )
        else:
            lines.extend(format_show_line(e) for e in sort_by_airtime(episodes))

    return lines


def format_network_groups(groups: NetworkGroups) -> list[str]:
    """Format all networks alphabetically, separated by blank lines."""
    lines: list[str] = []
    for network in sorted(groups):
        shows = groups[network]
        if not shows:
            continue
        if lines:
            lines.append("")
        lines.extend(format_network(network, shows))
    return lines


def format_time_sorted(shows: list[Show]) -> list[str]:
    """Format one chronological list across all networks."""
    return [format_show_line(show) for show in sort_by_airtime(shows)]


# =============================================================================
# Message
# =============================================================================


def format_message(shows: list[Show], options: ShowOptions) -> str:
    """Build the complete console output for a schedule.

    Args:
        shows: Filtered shows.
        options: Options used for the fetch (date, time-sort toggle).

    Returns:
        Multi-line string with header, schedule body and footer.
    """
    from whatsontv import __version__  # noqa: PLC0415

    lines: list[str] = [
        f"WhatsOnTV v{__version__}",
        SEPARATOR,
        f"Shows for {format_date_heading(options.resolved_date())}",
        "",
    ]

    if not shows:
        lines.append(NO_SHOWS_MESSAGE)
    elif options.time_sort:
        lines.extend(format_time_sorted(shows))
    else:
        lines.extend(format_network_groups(group_and_sort(shows)))

    lines.extend(["", SEPARATOR, FOOTER])
    return "\n".join(lines)
