"""Current and best streak calculations for every recurrence kind."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from ..models.recurrence import Daily, Recurrence, SpecificDays, Weekly
from .calendar import DateLike, add_days, are_consecutive_weeks, diff_days, iso_week, parse_date
from .schedule import is_scheduled_weekday

# Upper bound on day-by-day walks for sparse weekday schedules.
MAX_WALK_DAYS = 365


@dataclass(frozen=True)
class StreakResult:
    """Streak lengths; ``best_streak`` is never below ``current_streak``."""

    current_streak: int = 0
    best_streak: int = 0

    def as_dict(self) -> dict[str, int]:
        return {"current_streak": self.current_streak, "best_streak": self.best_streak}


def calculate_streaks(
    completion_dates: Iterable[DateLike],
    recurrence: Recurrence,
    today: DateLike,
) -> StreakResult:
    """Return the current and best streak for a completion history.

    Args:
        completion_dates: Dates the habit was completed, in any order
        recurrence: The habit's current recurrence, applied to all history
        today: Reference date the current streak is measured from

    Returns:
        StreakResult with both counts (``0, 0`` for an empty history)
    """
    dates = {parse_date(d) for d in completion_dates}
    if not dates:
        return StreakResult()

    reference = parse_date(today)

    if isinstance(recurrence, Daily):
        return _daily_streaks(dates, reference)
    if isinstance(recurrence, Weekly):
        return _weekly_streaks(dates, reference)
    if isinstance(recurrence, SpecificDays):
        return _specific_days_streaks(dates, recurrence.days, reference)
    raise TypeError(f"Unsupported recurrence: {recurrence!r}")


# =============================================================================
# Daily
# =============================================================================


def _daily_streaks(dates: set[date], today: date) -> StreakResult:
    current = 0
    cursor = today
    if cursor not in dates:
        # Grace: today may simply not be logged yet.
        cursor = add_days(today, -1)

    while cursor in dates:
        current += 1
        cursor = add_days(cursor, -1)

    best = max(current, _best_daily_streak(dates))
    return StreakResult(current_streak=current, best_streak=best)


def _best_daily_streak(dates: Iterable[date]) -> int:
    ordered = sorted(dates)
    if not ordered:
        return 0

    best = run = 1
    for previous, day in zip(ordered, ordered[1:]):
        gap = diff_days(day, previous)
        if gap == 1:
            run += 1
            best = max(best, run)
        elif gap > 1:
            run = 1
    return best


# =============================================================================
# Weekly
# =============================================================================


def _weekly_streaks(dates: set[date], today: date) -> StreakResult:
    weeks = {iso_week(d) for d in dates}

    current = 0
    cursor = today
    if iso_week(cursor) not in weeks:
        # Grace: the current week is still open.
        cursor = add_days(today, -7)

    while iso_week(cursor) in weeks:
        current += 1
        cursor = add_days(cursor, -7)

    best = max(current, _best_weekly_streak(weeks))
    return StreakResult(current_streak=current, best_streak=best)


def _best_weekly_streak(weeks: Iterable[str]) -> int:
    ordered = sorted(set(weeks))
    if not ordered:
        return 0

    best = run = 1
    for previous, week in zip(ordered, ordered[1:]):
        if are_consecutive_weeks(previous, week):
            run += 1
            best = max(best, run)
        else:
            run = 1
    return best


# =============================================================================
# Specific weekdays
# =============================================================================


def _specific_days_streaks(dates: set[date], days: frozenset[int], today: date) -> StreakResult:
    if not days:
        return StreakResult()

    current = 0
    grace_used = False
    cursor = today
    for _ in range(MAX_WALK_DAYS):
        if is_scheduled_weekday(days, cursor):
            if cursor in dates:
                current += 1
            elif current or grace_used:
                break
            else:
                # Grace: the most recent scheduled day may still be pending.
                grace_used = True
        cursor = add_days(cursor, -1)

    best = max(current, _best_specific_days_streak(dates, days))
    return StreakResult(current_streak=current, best_streak=best)


def _best_specific_days_streak(dates: set[date], days: frozenset[int]) -> int:
    best = 0
    for start in sorted(dates):
        if not is_scheduled_weekday(days, start):
            continue

        run = 0
        cursor = start
        for _ in range(MAX_WALK_DAYS):
            if is_scheduled_weekday(days, cursor):
                if cursor not in dates:
                    break
                run += 1
            cursor = add_days(cursor, 1)
        best = max(best, run)
    return best


__all__ = ["MAX_WALK_DAYS", "StreakResult", "calculate_streaks"]
