"""Text sanitization for untrusted API content.

TVMaze returns series summaries as HTML fragments (``<p>...</p>``).
Everything we render is plain text, so tags are removed with nh3
(Rust-based Ammonia bindings) and entities are decoded.

Usage:
    from whatsontv.sanitize import sanitize_text

    summary = sanitize_text(raw_show.get("summary"))
"""

from __future__ import annotations

import html
import re
from typing import Final

import nh3


__all__ = [
    "MAX_SUMMARY_LENGTH",
    "sanitize_text",
]

MAX_SUMMARY_LENGTH: Final[int] = 1000


def sanitize_text(text: object, max_length: int = MAX_SUMMARY_LENGTH) -> str:
    """Remove all HTML tags and limit length.

    Args:
        text: Raw text that may contain HTML. Non-strings yield "".
        max_length: Maximum allowed length.

    Returns:
        Sanitized plain text, or empty string if input is None/empty.

    Example:
        >>> sanitize_text("<p><b>Survivor</b> &amp; friends</p>")
        'Survivor & friends'
    """
    if not text or not isinstance(text, str):
        return ""

    # nh3.clean with empty tags set strips ALL HTML
    cleaned = nh3.clean(text, tags=set())
    cleaned = html.unescape(cleaned)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()

    if len(cleaned) > max_length:
        cleaned = cleaned[: max_length - 3] + "..."

    return cleaned
