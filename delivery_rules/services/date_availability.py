"""Delivery date filtering against blackout dates and date-range rules."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from delivery_rules.schemas.delivery import DateDisableRule, coerce_model
from delivery_rules.utils.dates import add_days, as_date, format_date, normalize_date, parse_date

logger = logging.getLogger(__name__)


def normalize_disabled_dates(disabled_dates: Iterable[Any] | None) -> set[str]:
    """Return the canonical form of every parsable date, dropping the rest."""
    normalized: set[str] = set()
    for value in disabled_dates or ():
        canonical = normalize_date(value)
        if canonical is None:
            logger.debug("[DATES] Ignoring malformed disabled date %r", value)
            continue
        normalized.add(canonical)
    return normalized


def is_date_in_range(target: str, start_date: str, end_date: str | None = None) -> bool:
    """Return True when canonical target lies in [start_date, end_date].

    A missing end_date makes the range a single day.
    """
    if target < start_date:
        return False
    return target <= (end_date or start_date)


def rule_applies_to_city(rule_city_id: int | None, city_id: int | None) -> bool:
    """Global rules apply everywhere; city rules only to their own city."""
    return rule_city_id is None or (city_id is not None and rule_city_id == city_id)


def build_disabled_date_set(
    rules: Iterable[Any] | None,
    city_id: int | None = None,
    *,
    window_start: date | None = None,
    window_end: date | None = None,
) -> set[str]:
    """Expand date-range rules applying to city_id into individual dates.

    When a window is given, each rule is clipped to it before expansion so
    open-ended ranges such as ``9999-12-31`` stay cheap.
    """
    disabled: set[str] = set()
    for raw_rule in rules or ():
        rule = coerce_model(DateDisableRule, raw_rule)
        if rule is None or not rule_applies_to_city(rule.city_id, city_id):
            continue

        start = parse_date(rule.start_date)
        if start is None:
            logger.debug("[DATES] Ignoring rule with malformed start date %r", rule.start_date)
            continue
        end = parse_date(rule.end_date) if rule.end_date else None
        end = end or start

        if window_start is not None:
            start = max(start, window_start)
        if window_end is not None:
            end = min(end, window_end)

        current = start
        while current <= end:
            disabled.add(format_date(current))
            if current >= end:
                break
            current = add_days(current, 1)
    return disabled


def _disabled_set(
    disable_source: Iterable[Any] | None,
    city_id: int | None,
    window_start: date,
    window_end: date,
) -> set[str]:
    if not isinstance(disable_source, Iterable) or isinstance(disable_source, (str, bytes, Mapping)):
        return set()
    date_strings: list[Any] = []
    rules: list[Any] = []
    for entry in disable_source:
        if isinstance(entry, str):
            date_strings.append(entry)
        else:
            rules.append(entry)
    return normalize_disabled_dates(date_strings) | build_disabled_date_set(
        rules, city_id, window_start=window_start, window_end=window_end
    )


def get_available_dates(
    start_date: date | datetime,
    window_size: int,
    disable_source: Iterable[Any] | None = None,
    city_id: int | None = None,
) -> list[str]:
    """Return enabled dates among window_size consecutive days from start_date.

    disable_source holds date strings, date-range rules, or both. The window
    stops early at the last day of the calendar.

    >>> get_available_dates(date(2024, 12, 24), 3, ["2024-12-25"])
    ['2024-12-24', '2024-12-26']
    """
    if window_size <= 0:
        return []

    first_day = as_date(start_date)
    last_day = add_days(first_day, window_size - 1)
    disabled = _disabled_set(disable_source, city_id, first_day, last_day)

    current = first_day
    available: list[str] = []
    while current <= last_day:
        day = format_date(current)
        if day not in disabled:
            available.append(day)
        if current >= last_day:
            break
        current = add_days(current, 1)
    return available


def is_date_available(target: date | datetime | str | None, disabled_dates: Iterable[Any] | None) -> bool:
    """Return False for unparsable targets or targets in disabled_dates."""
    day = format_date(target) if isinstance(target, (date, datetime)) else normalize_date(target)
    if day is None:
        return False
    return day not in normalize_disabled_dates(disabled_dates)
