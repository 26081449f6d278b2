"""Time slot availability for a chosen delivery date and city.

Checks run in priority order and the first hit wins:

1. the slot itself is inactive or globally disabled;
2. a rule disables the slot on that date for every city;
3. a rule disables the slot on that date for the selected city.

Within one tier the first matching rule in input order supplies the reason.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from delivery_rules.schemas.delivery import (
    SlotAvailability,
    SlotDisableRule,
    TimeSlot,
    coerce_model,
    coerce_models,
)
from delivery_rules.services.date_availability import is_date_in_range
from delivery_rules.utils.dates import format_date, normalize_date

logger = logging.getLogger(__name__)

INACTIVE_REASON: str = "Slot is inactive"
GLOBALLY_DISABLED_REASON: str = "Slot is globally disabled"


def _canonical_target(target: date | datetime | str | None) -> str | None:
    if isinstance(target, (date, datetime)):
        return format_date(target)
    return normalize_date(target)


def _rule_covers(rule: SlotDisableRule, target: str) -> bool:
    start = normalize_date(rule.start_date)
    if start is None:
        return False
    end = normalize_date(rule.end_date) if rule.end_date else None
    return is_date_in_range(target, start, end)


def _find_rule(
    slot_id: int,
    target: str,
    rules: list[SlotDisableRule],
    city_id: int | None,
) -> SlotDisableRule | None:
    return next(
        (
            rule
            for rule in rules
            if rule.time_slot_id == slot_id and rule.city_id == city_id and _rule_covers(rule, target)
        ),
        None,
    )


def _evaluate(slot: TimeSlot, target: str | None, city_id: int | None, rules: list[SlotDisableRule]) -> SlotAvailability:
    if not slot.is_active:
        return SlotAvailability(slot=slot, disabled=True, reason=INACTIVE_REASON)
    if slot.is_globally_disabled:
        return SlotAvailability(slot=slot, disabled=True, reason=GLOBALLY_DISABLED_REASON)

    if target is None:
        return SlotAvailability(slot=slot, disabled=False)

    date_rule = _find_rule(slot.id, target, rules, None)
    if date_rule is not None:
        reason = f"Disabled: {date_rule.reason}" if date_rule.reason else f"Disabled on {target}"
        return SlotAvailability(slot=slot, disabled=True, reason=reason)

    if city_id is not None:
        city_rule = _find_rule(slot.id, target, rules, city_id)
        if city_rule is not None:
            reason = (
                f"Disabled for this city: {city_rule.reason}"
                if city_rule.reason
                else f"Disabled for this city on {target}"
            )
            return SlotAvailability(slot=slot, disabled=True, reason=reason)

    return SlotAvailability(slot=slot, disabled=False)


def check_slot_availability(
    slot: Any,
    target_date: date | datetime | str | None,
    city_id: int | None,
    rules: Iterable[Any] | None,
) -> SlotAvailability | None:
    """Evaluate one slot; returns None only when slot itself is malformed."""
    time_slot = coerce_model(TimeSlot, slot)
    if time_slot is None:
        return None
    return _evaluate(time_slot, _canonical_target(target_date), city_id, coerce_models(SlotDisableRule, rules))


def get_available_slots(
    slots: Iterable[Any] | None,
    target_date: date | datetime | str | None,
    city_id: int | None,
    rules: Iterable[Any] | None,
) -> list[SlotAvailability]:
    """Evaluate every slot for one (date, city) pair, keeping input order."""
    time_slots = coerce_models(TimeSlot, slots)
    disable_rules = coerce_models(SlotDisableRule, rules)
    target = _canonical_target(target_date)
    if target is None and target_date is not None:
        logger.debug("[SLOTS] Unparsable target date %r; only slot activity applies", target_date)
    return [_evaluate(slot, target, city_id, disable_rules) for slot in time_slots]


def get_enabled_slots(
    slots: Iterable[Any] | None,
    target_date: date | datetime | str | None,
    city_id: int | None,
    rules: Iterable[Any] | None,
) -> list[TimeSlot]:
    """Return only the slots that remain bookable."""
    return [result.slot for result in get_available_slots(slots, target_date, city_id, rules) if not result.disabled]


def is_slot_available(
    slot_id: int,
    slots: Iterable[Any] | None,
    target_date: date | datetime | str | None,
    city_id: int | None,
    rules: Iterable[Any] | None,
) -> bool:
    """Return True when slot_id exists among slots and is not disabled."""
    slot = next((item for item in coerce_models(TimeSlot, slots) if item.id == slot_id), None)
    if slot is None:
        return False
    return not _evaluate(slot, _canonical_target(target_date), city_id, coerce_models(SlotDisableRule, rules)).disabled
