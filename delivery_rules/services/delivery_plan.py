"""End-to-end delivery evaluation for one cart, city and instant."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from delivery_rules.core.config import settings
from delivery_rules.schemas.delivery import CheckoutFields, DeliveryConfig, DeliveryPlan, SlotAvailability
from delivery_rules.services.cart_delay import calculate_cart_delay
from delivery_rules.services.checkout_validator import validate_checkout
from delivery_rules.services.city_cutoff import minimum_delivery_date, same_day_available, time_until_cutoff
from delivery_rules.services.date_availability import get_available_dates
from delivery_rules.services.slot_availability import get_available_slots
from delivery_rules.utils.dates import add_days, normalize_date

logger = logging.getLogger(__name__)


def _select_date(available_dates: list[str], requested: str | None) -> str | None:
    canonical = normalize_date(requested)
    if canonical is not None and canonical in available_dates:
        return canonical
    return available_dates[0] if available_dates else None


def _prefill_checkout(
    checkout_fields: CheckoutFields | Mapping[str, Any] | None,
    selected_date: str | None,
    slots_for_date: list[SlotAvailability],
) -> CheckoutFields:
    if isinstance(checkout_fields, CheckoutFields):
        values: dict[str, Any] = checkout_fields.model_dump()
    elif isinstance(checkout_fields, Mapping):
        values = {key: checkout_fields[key] for key in CheckoutFields.model_fields if key in checkout_fields}
    else:
        values = {}

    for key in ("full_name", "phone_number", "delivery_address", "delivery_date"):
        if not isinstance(values.get(key), str):
            values[key] = ""
    if not values["delivery_date"].strip() and selected_date is not None:
        values["delivery_date"] = selected_date
    if not values.get("delivery_time_slot"):
        first_enabled = next((result.slot for result in slots_for_date if not result.disabled), None)
        values["delivery_time_slot"] = first_enabled.id if first_enabled is not None else 0
    return CheckoutFields.model_validate(values)


def plan_delivery(
    config: DeliveryConfig,
    cart_products: Iterable[Any] | None,
    city_id: int | None,
    now: datetime,
    *,
    window_days: int | None = None,
    delivery_date: str | None = None,
    checkout_fields: CheckoutFields | Mapping[str, Any] | None = None,
    default_cutoff: str | None = None,
    invalid_allows_same_day: bool | None = None,
    min_phone_digits: int | None = None,
) -> DeliveryPlan:
    """Compute delay, earliest date, bookable dates, slots and checkout state.

    Without a known city no cutoff applies and the minimum date is today plus
    the cart delay. The selected date is delivery_date when it is bookable,
    otherwise the first bookable date. Blank checkout date/slot fields are
    prefilled from the selection before validation. The keyword overrides
    replace the matching ``settings`` values for this call only.
    """
    cart_delay = calculate_cart_delay(cart_products)
    city = config.get_city(city_id)

    if city is not None:
        is_same_day = same_day_available(
            city,
            now,
            default_cutoff=default_cutoff,
            invalid_allows_same_day=invalid_allows_same_day,
        )
        minimum_date: date = minimum_delivery_date(
            city,
            now,
            cart_delay,
            default_cutoff=default_cutoff,
            invalid_allows_same_day=invalid_allows_same_day,
        )
        countdown = time_until_cutoff(city, now, default_cutoff=default_cutoff)
    else:
        if city_id is not None:
            logger.info("[PLAN] Unknown or inactive city_id=%s; no cutoff applied", city_id)
        is_same_day = False
        minimum_date = add_days(now.date(), cart_delay)
        countdown = None

    window = settings.delivery_date_window_days if window_days is None else window_days
    available_dates = get_available_dates(minimum_date, window, config.date_disable_rules, city_id)
    selected_date = _select_date(available_dates, delivery_date)

    slots_for_date: list[SlotAvailability] = []
    if selected_date is not None:
        slots_for_date = get_available_slots(config.time_slots, selected_date, city_id, config.slot_disable_rules)

    checkout = _prefill_checkout(checkout_fields, selected_date, slots_for_date)

    return DeliveryPlan(
        cart_delay=cart_delay,
        city=city,
        same_day_available=is_same_day,
        cutoff_countdown=countdown,
        minimum_date=minimum_date,
        available_dates=available_dates,
        selected_date=selected_date,
        slots_for_date=slots_for_date,
        checkout_validation=validate_checkout(checkout, min_phone_digits=min_phone_digits),
    )
