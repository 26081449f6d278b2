"""Delivery date availability tests."""

from datetime import date, datetime

from delivery_rules.schemas import DateDisableRule
from delivery_rules.services.date_availability import (
    build_disabled_date_set,
    get_available_dates,
    is_date_available,
    is_date_in_range,
    normalize_disabled_dates,
)

CHRISTMAS_EVE = date(2024, 12, 24)


def test_available_dates_excludes_disabled_date_only() -> None:
    result = get_available_dates(CHRISTMAS_EVE, 7, ["2024-12-25"])

    assert result == [
        "2024-12-24",
        "2024-12-26",
        "2024-12-27",
        "2024-12-28",
        "2024-12-29",
        "2024-12-30",
    ]


def test_available_dates_normalizes_mixed_formats_and_drops_garbage() -> None:
    result = get_available_dates(CHRISTMAS_EVE, 7, ["2024-12-25", "26/12/2024", "not-a-date", "31/02/2024"])

    assert result == ["2024-12-24", "2024-12-27", "2024-12-28", "2024-12-29", "2024-12-30"]


def test_available_dates_non_positive_window_is_empty() -> None:
    assert get_available_dates(CHRISTMAS_EVE, 0, []) == []
    assert get_available_dates(CHRISTMAS_EVE, -3, ["2024-12-25"]) == []


def test_available_dates_without_disable_source() -> None:
    assert get_available_dates(CHRISTMAS_EVE, 3) == ["2024-12-24", "2024-12-25", "2024-12-26"]
    assert get_available_dates(datetime(2024, 12, 31, 18, 30), 2, None) == ["2024-12-31", "2025-01-01"]


def test_available_dates_expands_inclusive_rule_ranges() -> None:
    rules = [DateDisableRule(start_date="2024-12-25", end_date="2024-12-26")]

    result = get_available_dates(CHRISTMAS_EVE, 5, rules)

    assert result == ["2024-12-24", "2024-12-27", "2024-12-28"]


def test_available_dates_applies_city_rules_only_to_their_city() -> None:
    rules = [
        {"start_date": "2024-12-25", "city_id": 1},
        {"start_date": "2024-12-27", "city_id": None},
    ]

    assert get_available_dates(CHRISTMAS_EVE, 4, rules, 1) == ["2024-12-24", "2024-12-26"]
    assert get_available_dates(CHRISTMAS_EVE, 4, rules, 2) == ["2024-12-24", "2024-12-25", "2024-12-26"]
    assert get_available_dates(CHRISTMAS_EVE, 4, rules) == ["2024-12-24", "2024-12-25", "2024-12-26"]


def test_build_disabled_date_set_handles_single_day_and_bad_rules() -> None:
    rules = [
        DateDisableRule(start_date="2024-12-31"),
        DateDisableRule(start_date="garbage", end_date="2025-01-05"),
        DateDisableRule(start_date="30/12/2024", end_date="nonsense"),
        {"reason": "missing start"},
    ]

    assert build_disabled_date_set(rules) == {"2024-12-30", "2024-12-31"}


def test_build_disabled_date_set_crosses_year_boundary() -> None:
    rules = [DateDisableRule(start_date="2024-12-30", end_date="2025-01-02", reason="New year")]

    assert build_disabled_date_set(rules) == {"2024-12-30", "2024-12-31", "2025-01-01", "2025-01-02"}


def test_normalize_disabled_dates_returns_canonical_set() -> None:
    assert normalize_disabled_dates(["25/12/2024", "2024-12-25", "bad", None]) == {"2024-12-25"}
    assert normalize_disabled_dates(None) == set()


def test_is_date_in_range_is_inclusive() -> None:
    assert is_date_in_range("2024-12-25", "2024-12-25")
    assert not is_date_in_range("2024-12-26", "2024-12-25")
    assert is_date_in_range("2024-12-26", "2024-12-25", "2024-12-26")
    assert not is_date_in_range("2024-12-24", "2024-12-25", "2024-12-26")


def test_is_date_available() -> None:
    assert not is_date_available("2024-12-25", ["2024-12-25"])
    assert is_date_available("2024-12-26", ["2024-12-25"])
    assert not is_date_available(date(2024, 12, 25), ["25/12/2024"])
    assert not is_date_available("not-a-date", [])


def test_available_dates_is_repeatable_and_leaves_input_untouched() -> None:
    disabled = ["2024-12-25"]

    first = get_available_dates(CHRISTMAS_EVE, 7, disabled)
    second = get_available_dates(CHRISTMAS_EVE, 7, disabled)

    assert first == second
    assert disabled == ["2024-12-25"]


def test_open_ended_rule_only_expands_inside_window() -> None:
    rules = [DateDisableRule(start_date="2024-12-25", end_date="9999-12-31")]

    assert get_available_dates(CHRISTMAS_EVE, 3, rules) == ["2024-12-24"]
    assert build_disabled_date_set(
        rules, window_start=date(2024, 12, 30), window_end=date(2025, 1, 1)
    ) == {"2024-12-30", "2024-12-31", "2025-01-01"}


def test_rules_and_window_stop_at_last_calendar_day() -> None:
    rules = [DateDisableRule(start_date="9999-12-30", end_date="9999-12-31")]

    assert build_disabled_date_set(rules) == {"9999-12-30", "9999-12-31"}
    assert get_available_dates(date(9999, 12, 30), 5) == ["9999-12-30", "9999-12-31"]
    assert get_available_dates(date(9999, 12, 29), 5, rules) == ["9999-12-29"]


def test_is_date_available_rejects_missing_target() -> None:
    assert not is_date_available(None, [])
