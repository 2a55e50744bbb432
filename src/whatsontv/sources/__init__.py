"""Schedule sources for WhatsOnTV.

Available sources:
- tvmaze: TVMaze daily schedule (network + web endpoints)
"""

from __future__ import annotations

from whatsontv.sources.base import (
    BaseSource,
    get_all_sources,
    get_sources_by_type,
    register_source,
)

__all__ = [
    "BaseSource",
    "get_all_sources",
    "get_sources_by_type",
    "register_source",
]
