"""Delivery rule value objects passed into and returned by the engine.

Dates are canonical ``YYYY-MM-DD`` strings and times are ``HH:MM`` (24-hour)
strings. All models are frozen: the engine never mutates its inputs.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_time_slot_label(start_time: str, end_time: str) -> str:
    """Return the default display label for a slot."""
    return f"{start_time} - {end_time}"


class CartProduct(BaseModel):
    """One cart line; only its tags matter for delivery."""

    tags: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> list[str]:
        if not isinstance(value, (list, tuple)):
            return []
        return [tag for tag in value if isinstance(tag, str)]


class DeliveryCity(BaseModel):
    """Delivery city with optional same-day cutoff."""

    id: int
    name: str
    is_special: bool = False
    is_active: bool = True
    cutoff_time: str | None = None

    model_config = ConfigDict(frozen=True)


class TimeSlot(BaseModel):
    """Delivery time window offered to the customer."""

    id: int
    label: str = ""
    start_time: str
    end_time: str
    is_active: bool = True
    is_globally_disabled: bool = False

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _default_label(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and not str(data.get("label") or "").strip():
            data = dict(data)
            data["label"] = format_time_slot_label(str(data.get("start_time", "")), str(data.get("end_time", "")))
        return data


class DateDisableRule(BaseModel):
    """Blackout for a date or inclusive date range, optionally for one city."""

    id: int | None = None
    city_id: int | None = None
    start_date: str
    end_date: str | None = None
    reason: str | None = None

    model_config = ConfigDict(frozen=True)


class SlotDisableRule(BaseModel):
    """Blackout for one time slot on a date or inclusive date range."""

    id: int | None = None
    time_slot_id: int
    city_id: int | None = None
    start_date: str
    end_date: str | None = None
    reason: str | None = None

    model_config = ConfigDict(frozen=True)


class CheckoutFields(BaseModel):
    """Customer-entered fields gating checkout submission."""

    full_name: str = ""
    phone_number: str = ""
    delivery_address: str = ""
    delivery_date: str = ""
    delivery_time_slot: Any = 0

    model_config = ConfigDict(frozen=True)

    @field_validator("full_name", "phone_number", "delivery_address", "delivery_date", mode="before")
    @classmethod
    def _none_to_blank(cls, value: Any) -> Any:
        return "" if value is None else value


class SlotAvailability(BaseModel):
    """Availability of one slot for a (date, city) pair."""

    slot: TimeSlot
    disabled: bool
    reason: str | None = None

    model_config = ConfigDict(frozen=True)


class CheckoutValidationResult(BaseModel):
    """Aggregated checkout validation outcome."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class CutoffCountdown(BaseModel):
    """Time remaining until a city's same-day cutoff."""

    hours: int
    minutes: int

    model_config = ConfigDict(frozen=True)


class DeliveryConfig(BaseModel):
    """Snapshot of active delivery configuration for one shop."""

    cities: list[DeliveryCity] = Field(default_factory=list)
    time_slots: list[TimeSlot] = Field(default_factory=list)
    date_disable_rules: list[DateDisableRule] = Field(default_factory=list)
    slot_disable_rules: list[SlotDisableRule] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def get_city(self, city_id: int | None) -> DeliveryCity | None:
        """Return the active city with this id, if any."""
        if city_id is None:
            return None
        return next((city for city in self.cities if city.id == city_id and city.is_active), None)

    def get_time_slot(self, slot_id: int | None) -> TimeSlot | None:
        """Return the active slot with this id, if any."""
        if slot_id is None:
            return None
        return next((slot for slot in self.time_slots if slot.id == slot_id and slot.is_active), None)


class DeliveryPlan(BaseModel):
    """Everything the checkout page needs to render delivery options."""

    cart_delay: int
    city: DeliveryCity | None = None
    same_day_available: bool
    cutoff_countdown: CutoffCountdown | None = None
    minimum_date: date
    available_dates: list[str]
    selected_date: str | None = None
    slots_for_date: list[SlotAvailability]
    checkout_validation: CheckoutValidationResult

    model_config = ConfigDict(frozen=True)


def coerce_model(model_cls: type[ModelT], value: Any) -> ModelT | None:
    """Return value as model_cls, or None when it cannot be validated."""
    if isinstance(value, model_cls):
        return value
    try:
        return model_cls.model_validate(value, from_attributes=not isinstance(value, Mapping))
    except ValidationError:
        logger.debug("Dropping malformed %s input: %r", model_cls.__name__, value)
        return None


def coerce_models(model_cls: type[ModelT], values: Iterable[Any] | None) -> list[ModelT]:
    """Validate each value as model_cls, dropping those that fail."""
    if values is None or isinstance(values, (str, bytes, Mapping)):
        return []
    try:
        items = list(values)
    except TypeError:
        return []
    coerced: list[ModelT] = []
    for value in items:
        model = coerce_model(model_cls, value)
        if model is not None:
            coerced.append(model)
    return coerced
