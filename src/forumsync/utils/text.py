"""Text normalization helpers for sheet cells and message content."""

from __future__ import annotations

from typing import Any


def string_or_empty(value: Any) -> str:
    """
    Normalize a cell value to a stripped string.

    Args:
        value: Any cell value

    Returns:
        Stripped string, or "" for None
    """
    if value is None:
        return ""
    return str(value).strip()


def truncate(text: str | None, limit: int) -> str:
    """
    Cut text to at most ``limit`` characters.

    This is a hard cut with no word awareness. Python strings index by code
    point, so multi-byte characters are never split.

    Example:
        >>> truncate("abcdef", 3)
        'abc'
    """
    if not text:
        return ""
    if limit < 0:
        raise ValueError("limit must be non-negative")
    return text[:limit]
