"""Configuration loading for WhatsOnTV.

Precedence, lowest to highest:
1. Built-in defaults (this module)
2. ``config.json`` (or the file named by ``$WHATSONTV_CONFIG``)
3. Environment variables for Slack credentials (``.env`` supported)
4. Command-line arguments

Example config.json:
    {
      "country": "US",
      "types": ["Scripted", "Reality"],
      "networks": ["CBS", "Netflix"],
      "genres": [],
      "languages": ["English"],
      "notificationTime": "09:00",
      "slack": {"token": "xoxb-...", "channelId": "C0123456", "username": "WhatsOnTV"}
    }
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

from dotenv import load_dotenv

from whatsontv.constants import DEFAULT_COUNTRY
from whatsontv.models import FetchSource, ShowOptions


__all__ = [
    "AppConfig",
    "SlackConfig",
    "load_config",
    "merge_show_options",
    "to_string_list",
]

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE: Final[str] = "config.json"
DEFAULT_NOTIFICATION_TIME: Final[str] = "09:00"
FETCH_SOURCES: Final[tuple[str, ...]] = ("all", "network", "web")


@dataclass(slots=True, kw_only=True)
class SlackConfig:
    """Slack delivery settings."""

    token: str = ""
    channel_id: str = ""
    username: str = "WhatsOnTV"
    icon_emoji: str = ":tv:"

    @property
    def is_configured(self) -> bool:
        return bool(self.token and self.channel_id)


@dataclass(slots=True, kw_only=True)
class AppConfig:
    """Default filter values and delivery settings."""

    country: str = DEFAULT_COUNTRY
    types: list[str] = field(default_factory=list)
    networks: list[str] = field(default_factory=list)
    genres: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)
    notification_time: str = DEFAULT_NOTIFICATION_TIME
    slack: SlackConfig = field(default_factory=SlackConfig)


def to_string_list(value: object, separator: str = ",") -> list[str]:
    """Coerce a CLI/config value into a list of trimmed, non-empty strings.

    Examples:
        >>> to_string_list("Drama, Comedy")
        ['Drama', 'Comedy']
        >>> to_string_list(["CBS", " HBO "])
        ['CBS', 'HBO']
        >>> to_string_list(None)
        []
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(separator) if part.strip()]
    if isinstance(value, (list, tuple)):
        result: list[str] = []
        for item in value:
            result.extend(to_string_list(item if isinstance(item, str) else str(item)))
        return result
    return [str(value)]


def _config_path(path: str | Path | None) -> Path:
    if path is not None:
        return Path(path)
    return Path(os.getenv("WHATSONTV_CONFIG", DEFAULT_CONFIG_FILE))


def _read_config_file(path: Path) -> dict[str, Any]:
    """Read the JSON config; missing file -> {}, bad file -> {} + warning."""
    if not path.exists():
        logger.debug("No config file at %s, using defaults", path)
        return {}

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Could not load %s: %s - using defaults", path, exc)
        return {}

    if not isinstance(data, dict):
        logger.warning("Config file %s must contain a JSON object - using defaults", path)
        return {}
    return data


def _load_environment() -> None:
    """Load environment variables from a .env file, if one exists."""
    if load_dotenv():
        logger.debug("Loaded environment from .env")


def _build_slack_config(raw: object) -> SlackConfig:
    data = raw if isinstance(raw, dict) else {}
    defaults = SlackConfig()

    def pick(key: str, env: str | None, default: str) -> str:
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
        if env:
            return os.getenv(env, "") or default
        return default

    return SlackConfig(
        token=pick("token", "SLACK_TOKEN", defaults.token),
        channel_id=pick("channelId", "SLACK_CHANNEL", defaults.channel_id),
        username=pick("username", "SLACK_USERNAME", defaults.username),
        icon_emoji=pick("icon_emoji", None, defaults.icon_emoji),
    )


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load configuration, falling back to defaults on any problem.

    Args:
        path: Explicit config file. Defaults to ``$WHATSONTV_CONFIG`` or
            ``config.json`` in the working directory.

    Returns:
        Merged configuration.
    """
    _load_environment()
    data = _read_config_file(_config_path(path))
    defaults = AppConfig()

    country = data.get("country")
    notification_time = data.get("notificationTime")

    config = AppConfig(
        country=country if isinstance(country, str) else defaults.country,
        types=to_string_list(data.get("types")),
        networks=to_string_list(data.get("networks")),
        genres=to_string_list(data.get("genres")),
        languages=to_string_list(data.get("languages")),
        notification_time=(
            notification_time
            if isinstance(notification_time, str) and notification_time
            else defaults.notification_time
        ),
        slack=_build_slack_config(data.get("slack")),
    )
    logger.debug("Loaded configuration: country=%s", config.country)
    return config


def _coerce_fetch(value: object) -> FetchSource:
    if isinstance(value, str) and value.lower() in ("network", "web"):
        return value.lower()  # type: ignore[return-value]
    return "all"


def merge_show_options(args: object, config: AppConfig) -> ShowOptions:
    """Combine parsed CLI arguments with the loaded configuration.

    CLI values win when given; list criteria fall back to the config
    lists only when the CLI list is empty.

    Args:
        args: argparse Namespace (or any object with matching attributes).
        config: Loaded configuration.
    """

    def cli_list(name: str) -> list[str]:
        return to_string_list(getattr(args, name, None))

    country = getattr(args, "country", None)
    date = getattr(args, "date", None)

    return ShowOptions(
        date=date.strip() if isinstance(date, str) else "",
        country=country.strip() if isinstance(country, str) else config.country,
        country_filter=isinstance(country, str) and bool(country.strip()),
        types=cli_list("types") or list(config.types),
        networks=cli_list("networks") or list(config.networks),
        genres=cli_list("genres") or list(config.genres),
        languages=cli_list("languages") or list(config.languages),
        fetch=_coerce_fetch(getattr(args, "fetch", None)),
        time_sort=bool(getattr(args, "time_sort", False)),
    )
