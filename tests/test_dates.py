"""Unit tests for expense_tracker.dates."""

from __future__ import annotations

from datetime import datetime

import pytest

from expense_tracker import dates


def test_month_key_of() -> None:
    assert dates.month_key_of(datetime(2024, 7, 31, 23, 59)) == "07/2024"


def test_day_stamp_of() -> None:
    assert dates.day_stamp_of(datetime(2024, 1, 5)) == "01/05/2024"


def test_display_month() -> None:
    assert dates.display_month("07/2024") == "July 2024"


def test_display_month_accepts_single_digit_month() -> None:
    assert dates.display_month("7/2024") == "July 2024"


@pytest.mark.parametrize("key", ["13/2024", "00/2024", "2024-07", "07/24", "", None, 42])
def test_display_month_invalid(key) -> None:
    assert dates.display_month(key) == "Invalid Date"


def test_parse_month_key_returns_month_start() -> None:
    assert dates.parse_month_key("02/2024") == datetime(2024, 2, 1)
    assert dates.parse_month_key("nope") is None


def test_display_day() -> None:
    assert dates.display_day("07/15/2024") == "07/15/2024"


@pytest.mark.parametrize("value", ["02/30/2024", "15/07/2024", "2024-07-15", "", None])
def test_display_day_invalid(value) -> None:
    assert dates.display_day(value) == "Invalid Date"


def test_system_clock_returns_datetime() -> None:
    assert isinstance(dates.system_clock(), datetime)
