"""City cutoff and minimum delivery date tests."""

import logging
from datetime import date, datetime, time

from delivery_rules.core.config import settings
from delivery_rules.schemas import CutoffCountdown, DeliveryCity
from delivery_rules.services.cart_delay import calculate_cart_delay
from delivery_rules.services.city_cutoff import (
    effective_cutoff,
    is_before_cutoff,
    minimum_delivery_date,
    minimum_delivery_date_string,
    parse_time_of_day,
    same_day_available,
    time_until_cutoff,
)

MORNING = datetime(2024, 12, 24, 10, 0)
AFTERNOON = datetime(2024, 12, 24, 15, 0)


def _city(cutoff_time: str | None = "14:00") -> DeliveryCity:
    return DeliveryCity(id=1, name="Downtown", cutoff_time=cutoff_time)


def test_parse_time_of_day() -> None:
    assert parse_time_of_day("14:30") == time(14, 30)
    assert parse_time_of_day("9:05") == time(9, 5)
    assert parse_time_of_day(" 00:00 ") == time(0, 0)
    assert parse_time_of_day(time(8, 15, 42)) == time(8, 15)


def test_parse_time_of_day_rejects_invalid_values() -> None:
    for value in ["invalid", "24:00", "12:60", "1230", "12:5", "123:00", "", None, "-1:30"]:
        assert parse_time_of_day(value) is None, value


def test_effective_cutoff_defaults_to_end_of_day() -> None:
    assert effective_cutoff(_city("14:00")) == "14:00"
    assert effective_cutoff(_city(None)) == "23:59"
    assert effective_cutoff(_city("")) == "23:59"
    assert effective_cutoff({"id": 2, "name": "Suburbs"}) == "23:59"
    assert effective_cutoff(_city(None), default_cutoff="18:00") == "18:00"


def test_is_before_cutoff_is_strict() -> None:
    assert is_before_cutoff("14:00", MORNING)
    assert not is_before_cutoff("09:00", MORNING)
    assert not is_before_cutoff("10:00", MORNING)
    assert is_before_cutoff("10:01", MORNING)
    assert not is_before_cutoff("14:00", datetime(2024, 12, 24, 14, 0, 59))


def test_is_before_cutoff_fails_safe_on_unparsable_cutoff(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        assert not is_before_cutoff("25:00", MORNING)
    assert "Unparsable cutoff" in caplog.text


def test_is_before_cutoff_invalid_policy_can_be_overridden(monkeypatch) -> None:
    assert is_before_cutoff("nope", MORNING, invalid_allows_same_day=True)

    monkeypatch.setattr(settings, "delivery_invalid_cutoff_allows_same_day", True)
    assert is_before_cutoff("nope", MORNING)


def test_same_day_available() -> None:
    assert same_day_available(_city(), MORNING)
    assert not same_day_available(_city(), AFTERNOON)
    assert same_day_available(_city(None), datetime(2024, 12, 24, 22, 0))
    assert not same_day_available(_city(None), datetime(2024, 12, 24, 23, 59))


def test_minimum_delivery_date_combines_cutoff_and_cart_delay() -> None:
    city = _city()

    assert minimum_delivery_date(city, MORNING, 0) == date(2024, 12, 24)
    assert minimum_delivery_date(city, AFTERNOON, 0) == date(2024, 12, 25)
    assert minimum_delivery_date(city, MORNING, 2) == date(2024, 12, 26)
    assert minimum_delivery_date(city, AFTERNOON, 2) == date(2024, 12, 27)


def test_minimum_delivery_date_with_broken_cutoff_adds_a_day() -> None:
    assert minimum_delivery_date(_city("late"), MORNING, 1) == date(2024, 12, 26)


def test_minimum_delivery_date_uses_default_cutoff_from_settings(monkeypatch) -> None:
    monkeypatch.setattr(settings, "delivery_default_cutoff_time", "09:00")

    assert minimum_delivery_date(_city(None), MORNING, 0) == date(2024, 12, 25)
    assert minimum_delivery_date(_city(None), MORNING, 0, default_cutoff="12:00") == date(2024, 12, 24)


def test_minimum_delivery_date_string_crosses_year() -> None:
    assert minimum_delivery_date_string(_city(), datetime(2024, 12, 31, 16, 0), 0) == "2025-01-01"
    assert minimum_delivery_date_string(_city(), AFTERNOON, 2) == "2024-12-27"


def test_time_until_cutoff() -> None:
    city = _city()

    assert time_until_cutoff(city, datetime(2024, 12, 24, 12, 30)) == CutoffCountdown(hours=1, minutes=30)
    assert time_until_cutoff(city, datetime(2024, 12, 24, 13, 59)) == CutoffCountdown(hours=0, minutes=1)
    assert time_until_cutoff(city, datetime(2024, 12, 24, 14, 0)) is None
    assert time_until_cutoff(_city("bogus"), MORNING) is None


def test_cutoff_functions_are_repeatable() -> None:
    city = _city()

    assert minimum_delivery_date(city, AFTERNOON, 1) == minimum_delivery_date(city, AFTERNOON, 1)
    assert city.cutoff_time == "14:00"


def test_invalid_cutoff_policy_override_reaches_every_cutoff_function() -> None:
    broken = _city("bogus")

    assert same_day_available(broken, MORNING, invalid_allows_same_day=True)
    assert not same_day_available(broken, MORNING, invalid_allows_same_day=False)
    assert minimum_delivery_date(broken, MORNING, 1, invalid_allows_same_day=True) == date(2024, 12, 25)
    assert minimum_delivery_date_string(broken, MORNING, 1, invalid_allows_same_day=True) == "2024-12-25"
    assert time_until_cutoff(broken, MORNING) is None


def test_minimum_delivery_date_clamps_huge_cart_delay() -> None:
    delay = calculate_cart_delay([{"tags": ["delay-5000000"]}])

    assert delay == 5000000
    assert minimum_delivery_date(_city(), MORNING, delay) == date.max
    assert minimum_delivery_date_string(_city(), AFTERNOON, delay) == "9999-12-31"
