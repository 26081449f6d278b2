"""City cutoff logic for same-day delivery.

Cutoffs are local ``HH:MM`` wall-clock times. Comparisons use only the hour
and minute of the reference instant, which callers always pass in explicitly.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import date, datetime, time
from typing import Any

from delivery_rules.core.config import settings
from delivery_rules.schemas.delivery import CutoffCountdown
from delivery_rules.utils.dates import add_days, format_date

logger = logging.getLogger(__name__)

TIME_OF_DAY_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$", re.ASCII)


def parse_time_of_day(value: str | time | None) -> time | None:
    """Parse ``H:MM`` or ``HH:MM`` (24-hour) into a time, or None if invalid."""
    if isinstance(value, time):
        return time(hour=value.hour, minute=value.minute)
    if not value or not isinstance(value, str):
        return None

    match = TIME_OF_DAY_PATTERN.match(value.strip())
    if match is None:
        return None

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return time(hour=hours, minute=minutes)


def _city_cutoff(city: Any) -> Any:
    if isinstance(city, Mapping):
        return city.get("cutoff_time")
    return getattr(city, "cutoff_time", None)


def effective_cutoff(city: Any, *, default_cutoff: str | None = None) -> str | time:
    """Return the city's cutoff or the configured default (``23:59``)."""
    return _city_cutoff(city) or default_cutoff or settings.delivery_default_cutoff_time


def is_before_cutoff(
    cutoff: str | time | None,
    now: datetime,
    *,
    invalid_allows_same_day: bool | None = None,
) -> bool:
    """Return True when now's hour:minute is strictly before cutoff.

    An unparsable cutoff yields the configured policy, which by default is
    False: same-day delivery is never promised on bad configuration.
    """
    parsed = parse_time_of_day(cutoff)
    if parsed is None:
        policy = (
            settings.delivery_invalid_cutoff_allows_same_day
            if invalid_allows_same_day is None
            else invalid_allows_same_day
        )
        logger.warning("[CUTOFF] Unparsable cutoff %r; same-day delivery %s", cutoff, "allowed" if policy else "closed")
        return policy
    return (now.hour, now.minute) < (parsed.hour, parsed.minute)


def same_day_available(
    city: Any,
    now: datetime,
    *,
    default_cutoff: str | None = None,
    invalid_allows_same_day: bool | None = None,
) -> bool:
    """Return True while same-day delivery can still be booked for city."""
    return is_before_cutoff(
        effective_cutoff(city, default_cutoff=default_cutoff),
        now,
        invalid_allows_same_day=invalid_allows_same_day,
    )


def minimum_delivery_date(
    city: Any,
    now: datetime,
    cart_delay: int,
    *,
    default_cutoff: str | None = None,
    invalid_allows_same_day: bool | None = None,
) -> date:
    """Return the earliest legal delivery date.

    Missing the cutoff costs exactly one extra day on top of cart_delay.
    """
    today: date = now.date()
    open_today = same_day_available(
        city,
        now,
        default_cutoff=default_cutoff,
        invalid_allows_same_day=invalid_allows_same_day,
    )
    offset = cart_delay if open_today else cart_delay + 1
    return add_days(today, offset)


def minimum_delivery_date_string(
    city: Any,
    now: datetime,
    cart_delay: int,
    *,
    default_cutoff: str | None = None,
    invalid_allows_same_day: bool | None = None,
) -> str:
    """Return minimum_delivery_date formatted as ``YYYY-MM-DD``."""
    return format_date(
        minimum_delivery_date(
            city,
            now,
            cart_delay,
            default_cutoff=default_cutoff,
            invalid_allows_same_day=invalid_allows_same_day,
        )
    )


def time_until_cutoff(city: Any, now: datetime, *, default_cutoff: str | None = None) -> CutoffCountdown | None:
    """Return time left before the cutoff, or None once it has passed.

    An unparsable cutoff has no moment to count down to, so it also gives None
    whatever the invalid-cutoff policy says.
    """
    cutoff = effective_cutoff(city, default_cutoff=default_cutoff)
    parsed = parse_time_of_day(cutoff)
    if parsed is None or not is_before_cutoff(parsed, now):
        return None

    remaining = (parsed.hour * 60 + parsed.minute) - (now.hour * 60 + now.minute)
    hours, minutes = divmod(remaining, 60)
    return CutoffCountdown(hours=hours, minutes=minutes)
