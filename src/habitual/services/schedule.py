"""Due-date predicate for habit recurrences."""

from __future__ import annotations

from ..models.recurrence import Daily, Recurrence, SpecificDays, Weekly
from .calendar import DateLike, day_of_week


def is_scheduled_weekday(days: frozenset[int], on: DateLike) -> bool:
    """Return True when the weekday of ``on`` is one of ``days``."""

    return day_of_week(on) in days


def is_due_on(recurrence: Recurrence, on: DateLike) -> bool:
    """Return True when ``on`` is a due occurrence of ``recurrence``.

    Weekly habits may be completed on any day, so every date counts as due;
    the once-per-week rule only matters for streaks.
    """

    if isinstance(recurrence, (Daily, Weekly)):
        return True
    if isinstance(recurrence, SpecificDays):
        return is_scheduled_weekday(recurrence.days, on)
    raise TypeError(f"Unsupported recurrence: {recurrence!r}")


__all__ = ["is_due_on", "is_scheduled_weekday"]
