"""Schema exports."""

from delivery_rules.schemas.delivery import (
    CartProduct,
    CheckoutFields,
    CheckoutValidationResult,
    CutoffCountdown,
    DateDisableRule,
    DeliveryCity,
    DeliveryConfig,
    DeliveryPlan,
    SlotAvailability,
    SlotDisableRule,
    TimeSlot,
    format_time_slot_label,
)

__all__ = [
    "CartProduct",
    "CheckoutFields",
    "CheckoutValidationResult",
    "CutoffCountdown",
    "DateDisableRule",
    "DeliveryCity",
    "DeliveryConfig",
    "DeliveryPlan",
    "SlotAvailability",
    "SlotDisableRule",
    "TimeSlot",
    "format_time_slot_label",
]
