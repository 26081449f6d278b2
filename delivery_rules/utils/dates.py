"""Canonical date helpers.

All dates are local civil dates; nothing here converts between time zones.
The canonical representation is ``YYYY-MM-DD``.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta

ISO_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$", re.ASCII)
EURO_DATE_PATTERN = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$", re.ASCII)


def is_valid_date_components(year: int, month: int, day: int) -> bool:
    """Return True when year/month/day name a real calendar day."""
    if month < 1 or month > 12:
        return False
    if day < 1 or day > 31:
        return False
    try:
        built = date(year, month, day)
    except ValueError:
        return False
    return (built.year, built.month, built.day) == (year, month, day)


def normalize_date(value: str | None) -> str | None:
    """Return ``YYYY-MM-DD`` for an ISO or ``DD/MM/YYYY`` string, else None.

    >>> normalize_date("25/12/2024")
    '2024-12-25'
    >>> normalize_date("31/02/2024") is None
    True
    """
    if not value or not isinstance(value, str):
        return None

    trimmed = value.strip()

    iso_match = ISO_DATE_PATTERN.match(trimmed)
    if iso_match:
        year, month, day = (int(part) for part in iso_match.groups())
        return trimmed if is_valid_date_components(year, month, day) else None

    euro_match = EURO_DATE_PATTERN.match(trimmed)
    if euro_match:
        day_text, month_text, year_text = euro_match.groups()
        if is_valid_date_components(int(year_text), int(month_text), int(day_text)):
            return f"{year_text}-{month_text}-{day_text}"
        return None

    return None


def as_date(value: date | datetime) -> date:
    """Drop the time part of a datetime, keeping the local civil date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def format_date(value: date | datetime) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    day = as_date(value)
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_date(value: str | None) -> date | None:
    """Parse an ISO or ``DD/MM/YYYY`` string into a date (local midnight)."""
    normalized = normalize_date(value)
    if normalized is None:
        return None
    year, month, day = (int(part) for part in normalized.split("-"))
    return date(year, month, day)


def add_days(value: date | datetime, days: int) -> date | datetime:
    """Return value shifted by days; negative values move backwards.

    Shifts past the end of the calendar clamp to its first or last day.
    """
    try:
        return value + timedelta(days=days)
    except OverflowError:
        if isinstance(value, datetime):
            return datetime.max if days > 0 else datetime.min
        return date.max if days > 0 else date.min
