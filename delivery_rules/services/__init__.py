"""Delivery rule services."""

from delivery_rules.services.cart_delay import calculate_cart_delay, get_product_delay, parse_delay_from_tag
from delivery_rules.services.checkout_validator import (
    create_empty_checkout_fields,
    get_first_checkout_error,
    is_checkout_eligible,
    validate_checkout,
    validate_delivery_address,
    validate_delivery_date,
    validate_delivery_time_slot,
    validate_full_name,
    validate_phone_number,
)
from delivery_rules.services.city_cutoff import (
    effective_cutoff,
    is_before_cutoff,
    minimum_delivery_date,
    minimum_delivery_date_string,
    parse_time_of_day,
    same_day_available,
    time_until_cutoff,
)
from delivery_rules.services.date_availability import (
    build_disabled_date_set,
    get_available_dates,
    is_date_available,
    is_date_in_range,
    normalize_disabled_dates,
)
from delivery_rules.services.delivery_plan import plan_delivery
from delivery_rules.services.slot_availability import (
    check_slot_availability,
    get_available_slots,
    get_enabled_slots,
    is_slot_available,
)

__all__ = [
    "build_disabled_date_set",
    "calculate_cart_delay",
    "check_slot_availability",
    "create_empty_checkout_fields",
    "effective_cutoff",
    "get_available_dates",
    "get_available_slots",
    "get_enabled_slots",
    "get_first_checkout_error",
    "get_product_delay",
    "is_before_cutoff",
    "is_checkout_eligible",
    "is_date_available",
    "is_date_in_range",
    "is_slot_available",
    "minimum_delivery_date",
    "minimum_delivery_date_string",
    "normalize_disabled_dates",
    "parse_delay_from_tag",
    "parse_time_of_day",
    "plan_delivery",
    "same_day_available",
    "time_until_cutoff",
    "validate_checkout",
    "validate_delivery_address",
    "validate_delivery_date",
    "validate_delivery_time_slot",
    "validate_full_name",
    "validate_phone_number",
]
