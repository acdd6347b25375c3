"""
Date helpers for due-date evaluation and timestamp display.

All comparisons are date-only in a fixed timezone, so a task due today is
never overdue regardless of the time of day the sync runs.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "Asia/Tokyo"

_DATE_PATTERN = re.compile(r"^(\d{4})[-/.](\d{1,2})[-/.](\d{1,2})$")


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_due_date(value: str | None, tz_name: str = DEFAULT_TIMEZONE) -> date | None:
    """
    Parse a due-date cell into a date.

    Accepts ``YYYY-MM-DD``, ``YYYY/MM/DD`` (with or without zero padding) and
    ISO-8601 datetimes. A datetime carrying an offset is converted to
    ``tz_name`` before its date is taken; a naive one is read as-is.
    Anything else yields None; this function never raises.

    Example:
        >>> parse_due_date("2025/3/7")
        datetime.date(2025, 3, 7)
        >>> parse_due_date("next week") is None
        True
    """
    if not value:
        return None
    text = str(value).strip()
    if not text:
        return None

    match = _DATE_PATTERN.match(text)
    if match:
        year, month, day = (int(part) for part in match.groups())
        try:
            return date(year, month, day)
        except ValueError:
            return None

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(ZoneInfo(tz_name))
    return parsed.date()


def today_in(tz_name: str, now: datetime) -> date:
    """Return the calendar date of ``now`` in the given timezone."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(ZoneInfo(tz_name)).date()


def format_timestamp(value: datetime, tz_name: str = DEFAULT_TIMEZONE) -> str:
    """
    Format a timestamp as ``YYYY/MM/DD HH:MM:SS`` in the given timezone.

    Example:
        >>> format_timestamp(datetime(2025, 1, 1, 0, 0, tzinfo=timezone.utc))
        '2025/01/01 09:00:00'
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(ZoneInfo(tz_name)).strftime("%Y/%m/%d %H:%M:%S")
