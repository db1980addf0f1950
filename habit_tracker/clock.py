"""Calendar-day keys used by the streak logic.

A day is represented as a zero-padded ``YYYY-MM-DD`` string, so comparing two
keys lexically gives the same answer as comparing the dates themselves.
"""
from datetime import date, datetime, timedelta
from typing import Optional, Protocol

import pytz

DATE_FORMAT = "%Y-%m-%d"


def to_date_key(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def parse_date_key(key: str) -> date:
    return datetime.strptime(key, DATE_FORMAT).date()


def previous_day(key: str) -> str:
    """Return the key of the calendar day before ``key``.

    Works on the date components, never on a fixed number of seconds, so a
    DST change or a leap day cannot shift the result.
    """
    return to_date_key(parse_date_key(key) - timedelta(days=1))


class DateProvider(Protocol):
    def today(self) -> str:  # pragma: no cover - interface
        ...


class SystemDateProvider:
    """Today's date on the wall clock, in ``timezone`` or the local zone."""

    def __init__(self, timezone: Optional[str] = None):
        self.timezone = pytz.timezone(timezone) if timezone else None

    def today(self) -> str:
        if self.timezone is None:
            return to_date_key(date.today())
        return to_date_key(datetime.now(self.timezone).date())


class FixedDateProvider:
    """A clock pinned to one day; tests move it with ``set`` and ``advance``."""

    def __init__(self, day: str):
        self.set(day)

    def set(self, day: str) -> None:
        self._day = parse_date_key(day)

    def advance(self, days: int = 1) -> str:
        self._day += timedelta(days=days)
        return self.today()

    def today(self) -> str:
        return to_date_key(self._day)
