"""
Flexible calendar-date parsing.

Accepts ISO dates (and ISO timestamps) directly, and falls back to
three-part day/month/year strings separated by '/', '-' or '.'.
"""

import re
from datetime import date, datetime

from core.config import MIN_PLAUSIBLE_YEAR

_PART_SEPARATOR = re.compile(r"[/\-.]")


def _parse_direct(value: str) -> date | None:
    """Parse machine formats (YYYY-MM-DD, ISO timestamps)."""
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def _resolve_parts(parts: list[int]) -> tuple[int, int, int] | None:
    """
    Order three numeric parts as (year, month, day).

    Year-first when the first part looks like a year. Otherwise the last part
    must be the year; between the first two, whichever exceeds 12 is the day,
    and genuinely ambiguous input is read day-first (D/M/YYYY).
    """
    first, second, third = parts

    if first > MIN_PLAUSIBLE_YEAR:
        return first, second, third

    if third > MIN_PLAUSIBLE_YEAR:
        if first > 12:
            return third, second, first
        if second > 12:
            return third, first, second
        return third, second, first

    return None


def parse_flexible_date(value: str | None) -> date | None:
    """
    Parse a free-form date string.

    Returns:
        The calendar date, or None if the input is empty, unparseable,
        or names a day that does not exist (e.g. 31/02/2024).
    """
    if not value or not isinstance(value, str):
        return None
    clean = value.strip()
    if not clean:
        return None

    direct = _parse_direct(clean)
    if direct and direct.year > MIN_PLAUSIBLE_YEAR:
        return direct

    raw_parts = _PART_SEPARATOR.split(clean)
    if len(raw_parts) != 3:
        return None
    try:
        parts = [int(p) for p in raw_parts]
    except ValueError:
        return None

    resolved = _resolve_parts(parts)
    if resolved is None:
        return None

    year, month, day = resolved
    # date() rejects components that would roll over (Feb 31, month 13)
    # and raises OverflowError for parts beyond a C long
    try:
        return date(year, month, day)
    except (ValueError, OverflowError):
        return None
