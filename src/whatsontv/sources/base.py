"""Base class and registry for schedule sources.

Sources register themselves with ``@register_source("name")`` when their
module is imported. The aggregator asks the registry for every enabled
source instead of importing them by hand.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, TypeVar

import httpx

from whatsontv.constants import HTTP_TIMEOUT_SECONDS


if TYPE_CHECKING:
    from whatsontv.models import Show, ShowOptions


__all__ = [
    "BaseSource",
    "create_async_http_client",
    "create_http_client",
    "get_all_sources",
    "get_sources_by_type",
    "register_source",
]

logger = logging.getLogger(__name__)

USER_AGENT = "WhatsOnTV/1.0 (+https://www.tvmaze.com/api)"

_SOURCES: dict[str, type[BaseSource]] = {}

SourceT = TypeVar("SourceT", bound="type[BaseSource]")


class BaseSource(ABC):
    """Abstract base for every schedule source.

    Attributes:
        source_name: Human-readable name used in logs.
        source_type: Category of the source ("schedule", ...).
        enabled: Disabled sources are skipped by the aggregator.
    """

    source_name: ClassVar[str] = "Unnamed Source"
    source_type: ClassVar[str] = "schedule"
    enabled: ClassVar[bool] = True

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.transport = transport

    @abstractmethod
    def fetch(self, options: ShowOptions) -> list[Show]:
        """Fetch and normalize shows for the given options."""


def register_source(name: str):  # type: ignore[no-untyped-def]
    """Class decorator adding a source to the registry under ``name``."""

    def decorator(cls: SourceT) -> SourceT:
        if name in _SOURCES and _SOURCES[name] is not cls:
            msg = f"Source {name!r} is already registered"
            raise ValueError(msg)
        _SOURCES[name] = cls
        logger.debug("Registered source: %s", name)
        return cls

    return decorator


def get_all_sources() -> dict[str, type[BaseSource]]:
    """Return a copy of the registry, importing built-in sources first."""
    from whatsontv.sources import tvmaze  # noqa: F401, PLC0415

    return dict(_SOURCES)


def get_sources_by_type(source_type: str) -> dict[str, type[BaseSource]]:
    """Return registered sources whose ``source_type`` matches."""
    return {
        name: cls
        for name, cls in get_all_sources().items()
        if cls.source_type == source_type
    }


def create_http_client(
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create a synchronous client with shared headers and timeout."""
    return httpx.Client(
        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        timeout=HTTP_TIMEOUT_SECONDS,
        follow_redirects=True,
        transport=transport,
    )


def create_async_http_client(
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an async client with shared headers and timeout."""
    return httpx.AsyncClient(
        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        timeout=HTTP_TIMEOUT_SECONDS,
        follow_redirects=True,
        transport=transport,
    )
