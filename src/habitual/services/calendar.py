"""Calendar arithmetic over naive ``YYYY-MM-DD`` dates.

Every helper accepts either a :class:`datetime.date` or a strict ISO date
string. Nothing here touches time zones or time of day; ``today`` is the
only function that reads the wall clock.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Union

DateLike = Union[date, str]

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_ISO_WEEK = re.compile(r"^(\d{4})-W(\d{2})$")

_DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def parse_date(value: DateLike) -> date:
    """Return ``value`` as a date; strings must be exactly ``YYYY-MM-DD``.

    Datetimes are truncated to their calendar date.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}")
    return date.fromisoformat(value)


def format_date(value: DateLike) -> str:
    return parse_date(value).isoformat()


def format_date_human(value: DateLike) -> str:
    """Render a date as ``Tue, Feb 10 2026``."""

    d = parse_date(value)
    return f"{_DAY_NAMES[day_of_week(d)]}, {_MONTH_NAMES[d.month - 1]} {d.day} {d.year}"


def day_of_week(value: DateLike) -> int:
    """Return the weekday with 0 = Sunday through 6 = Saturday."""

    return parse_date(value).isoweekday() % 7


def iso_week(value: DateLike) -> str:
    """Return the ISO-8601 week identifier, e.g. ``2026-W07``.

    The year component is the ISO year, which differs from the calendar
    year for a few days around January 1st.
    """

    iso_year, week, _ = parse_date(value).isocalendar()
    return f"{iso_year}-W{week:02d}"


def add_days(value: DateLike, days: int) -> date:
    return parse_date(value) + timedelta(days=days)


def diff_days(a: DateLike, b: DateLike) -> int:
    """Return ``a - b`` in whole days (positive when ``a`` is later)."""

    return (parse_date(a) - parse_date(b)).days


def today() -> date:
    """Local wall-clock date."""

    return date.today()


def _split_week(week_id: str) -> tuple[int, int]:
    match = _ISO_WEEK.match(week_id)
    if match is None:
        raise ValueError(f"Expected a YYYY-W## week identifier, got {week_id!r}")
    return int(match.group(1)), int(match.group(2))


def are_consecutive_weeks(earlier: str, later: str) -> bool:
    """Return True when ``later`` is the week right after ``earlier``.

    Across a year boundary, week 1 follows week 52 or 53 of the previous
    year; the exact length of that year is not checked.
    """

    year_a, week_a = _split_week(earlier)
    year_b, week_b = _split_week(later)
    if year_a == year_b:
        return week_b - week_a == 1
    if year_b == year_a + 1 and week_b == 1:
        return week_a >= 52
    return False


__all__ = [
    "DateLike",
    "add_days",
    "are_consecutive_weeks",
    "day_of_week",
    "diff_days",
    "format_date",
    "format_date_human",
    "iso_week",
    "parse_date",
    "today",
]
