"""Tests for `habit_tracker.clock`."""

import re
from datetime import date

import pytest
import pytz

from habit_tracker.clock import (
    FixedDateProvider,
    SystemDateProvider,
    parse_date_key,
    previous_day,
    to_date_key,
)


def test_date_key_is_zero_padded():
    assert to_date_key(date(2025, 3, 5)) == "2025-03-05"


def test_date_keys_sort_like_dates():
    days = [date(2025, 1, 9), date(2024, 12, 31), date(2025, 10, 1), date(2025, 1, 10)]
    assert sorted(to_date_key(d) for d in days) == [to_date_key(d) for d in sorted(days)]


@pytest.mark.parametrize(
    "day, expected",
    [
        ("2025-03-16", "2025-03-15"),
        ("2024-03-01", "2024-02-29"),  # leap year
        ("2025-03-01", "2025-02-28"),
        ("2025-01-01", "2024-12-31"),
        ("2025-03-31", "2025-03-30"),  # EU clocks go forward on the 30th
        ("2025-11-03", "2025-11-02"),  # US clocks go back on the 2nd
    ],
)
def test_previous_day_uses_calendar_arithmetic(day, expected):
    assert previous_day(day) == expected


def test_parse_rejects_other_formats():
    with pytest.raises(ValueError):
        parse_date_key("15/03/2025")


def test_fixed_provider_can_be_moved():
    clock = FixedDateProvider("2025-02-28")
    assert clock.today() == "2025-02-28"
    assert clock.advance() == "2025-03-01"
    clock.set("2025-12-31")
    assert clock.advance(2) == "2026-01-02"


def test_system_provider_returns_a_date_key():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", SystemDateProvider().today())
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", SystemDateProvider("Pacific/Auckland").today())


def test_system_provider_rejects_unknown_timezone():
    with pytest.raises(pytz.UnknownTimeZoneError):
        SystemDateProvider("Mars/Olympus_Mons")
