"""Checkout field validation.

Each field is validated on its own; messages are collected in the fixed order
name, phone, address, date, slot. Nothing here raises: the caller decides
whether errors block submission.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from delivery_rules.core.config import settings
from delivery_rules.schemas.delivery import CheckoutFields, CheckoutValidationResult
from delivery_rules.utils.dates import ISO_DATE_PATTERN, is_valid_date_components

ERROR_MESSAGES: dict[str, str] = {
    "full_name_required": "Full name is required",
    "phone_number_required": "Phone number is required",
    "phone_number_invalid": "Phone number format is invalid",
    "delivery_address_required": "Delivery address is required",
    "delivery_date_required": "Delivery date is required",
    "delivery_date_invalid": "Delivery date format is invalid",
    "delivery_time_slot_required": "Delivery time slot is required",
}

FULL_NAME_REQUIRED: str = ERROR_MESSAGES["full_name_required"]
PHONE_NUMBER_REQUIRED: str = ERROR_MESSAGES["phone_number_required"]
PHONE_NUMBER_INVALID: str = ERROR_MESSAGES["phone_number_invalid"]
DELIVERY_ADDRESS_REQUIRED: str = ERROR_MESSAGES["delivery_address_required"]
DELIVERY_DATE_REQUIRED: str = ERROR_MESSAGES["delivery_date_required"]
DELIVERY_DATE_INVALID: str = ERROR_MESSAGES["delivery_date_invalid"]
DELIVERY_TIME_SLOT_REQUIRED: str = ERROR_MESSAGES["delivery_time_slot_required"]

NON_DIGIT_PATTERN = re.compile(r"[^0-9]")


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def validate_full_name(full_name: str | None) -> list[str]:
    return [FULL_NAME_REQUIRED] if _is_blank(full_name) else []


def validate_phone_number(phone_number: str | None, *, min_digits: int | None = None) -> list[str]:
    """Require a phone number with at least min_digits digits (default 7).

    Separators such as spaces, dashes, parentheses and ``+`` are ignored.
    """
    if _is_blank(phone_number):
        return [PHONE_NUMBER_REQUIRED]
    required = settings.checkout_min_phone_digits if min_digits is None else min_digits
    if len(NON_DIGIT_PATTERN.sub("", phone_number)) < required:
        return [PHONE_NUMBER_INVALID]
    return []


def validate_delivery_address(delivery_address: str | None) -> list[str]:
    return [DELIVERY_ADDRESS_REQUIRED] if _is_blank(delivery_address) else []


def validate_delivery_date(delivery_date: str | None) -> list[str]:
    """Require a real calendar date in ``YYYY-MM-DD`` form."""
    if _is_blank(delivery_date):
        return [DELIVERY_DATE_REQUIRED]

    match = ISO_DATE_PATTERN.match(delivery_date.strip())
    if match is None:
        return [DELIVERY_DATE_INVALID]

    year, month, day = (int(part) for part in match.groups())
    if not is_valid_date_components(year, month, day):
        return [DELIVERY_DATE_INVALID]
    return []


def validate_delivery_time_slot(delivery_time_slot: Any) -> list[str]:
    """Require a positive integer slot id."""
    if isinstance(delivery_time_slot, bool) or not isinstance(delivery_time_slot, int) or delivery_time_slot <= 0:
        return [DELIVERY_TIME_SLOT_REQUIRED]
    return []


def _as_fields(fields: CheckoutFields | Mapping[str, Any] | None) -> CheckoutFields:
    if isinstance(fields, CheckoutFields):
        return fields
    if isinstance(fields, Mapping):
        return CheckoutFields(
            full_name=_text(fields.get("full_name")),
            phone_number=_text(fields.get("phone_number")),
            delivery_address=_text(fields.get("delivery_address")),
            delivery_date=_text(fields.get("delivery_date")),
            delivery_time_slot=fields.get("delivery_time_slot", 0),
        )
    return create_empty_checkout_fields()


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def validate_checkout(
    fields: CheckoutFields | Mapping[str, Any] | None,
    *,
    min_phone_digits: int | None = None,
) -> CheckoutValidationResult:
    """Validate all checkout fields and aggregate their messages."""
    checkout = _as_fields(fields)
    errors: list[str] = [
        *validate_full_name(checkout.full_name),
        *validate_phone_number(checkout.phone_number, min_digits=min_phone_digits),
        *validate_delivery_address(checkout.delivery_address),
        *validate_delivery_date(checkout.delivery_date),
        *validate_delivery_time_slot(checkout.delivery_time_slot),
    ]
    return CheckoutValidationResult(is_valid=not errors, errors=errors)


def is_checkout_eligible(
    fields: CheckoutFields | Mapping[str, Any] | None,
    *,
    min_phone_digits: int | None = None,
) -> bool:
    """Return True when every checkout field validates."""
    return validate_checkout(fields, min_phone_digits=min_phone_digits).is_valid


def get_first_checkout_error(
    fields: CheckoutFields | Mapping[str, Any] | None,
    *,
    min_phone_digits: int | None = None,
) -> str | None:
    """Return the first validation message, or None when checkout is valid."""
    errors = validate_checkout(fields, min_phone_digits=min_phone_digits).errors
    return errors[0] if errors else None


def create_empty_checkout_fields() -> CheckoutFields:
    """Return blank fields for initialising a checkout form."""
    return CheckoutFields()
