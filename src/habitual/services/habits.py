"""Habit scheduling façade and the habit service built on top of it."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, Optional, Protocol

from ..domain.repositories.habit import HabitRepository
from ..logging_config import get_logger
from ..models.habit import Completion, Habit
from ..models.recurrence import (
    DAILY,
    FREQUENCIES,
    SPECIFIC_DAYS,
    Recurrence,
    recurrence_from_fields,
    recurrence_to_fields,
)
from . import calendar
from .calendar import DateLike, parse_date
from .schedule import is_due_on
from .streaks import StreakResult, calculate_streaks

logger = get_logger(__name__)

MAX_TITLE_LENGTH = 200
RECENT_COMPLETIONS = 30

Clock = Callable[[], date]


class Schedulable(Protocol):
    """Anything carrying a recurrence rule, such as a :class:`Habit` row."""

    @property
    def recurrence(self) -> Recurrence:  # pragma: no cover - interface
        ...


class HabitScheduler:
    """Answers due-today and streak questions; the only reader of the clock."""

    def __init__(self, clock: Clock = calendar.today) -> None:
        self._clock = clock

    def today(self) -> date:
        return self._clock()

    def is_due_today(self, habit: Schedulable) -> bool:
        return is_due_on(habit.recurrence, self.today())

    def recompute_streak(
        self, habit: Schedulable, completion_dates: Iterable[DateLike]
    ) -> StreakResult:
        """Compute streaks for ``habit`` as of today without persisting anything."""
        return calculate_streaks(completion_dates, habit.recurrence, self.today())


@dataclass
class HabitDetail:
    """A habit with its most recent completions."""

    habit: Habit
    due_today: bool
    recent_completions: list[Completion] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            **self.habit.to_dict(),
            "due_today": self.due_today,
            "recent_completions": [c.to_dict() for c in self.recent_completions],
        }


@dataclass
class HabitStreakOverview:
    id: int
    title: str
    frequency: str
    current_streak: int
    best_streak: int
    active: bool

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "frequency": self.frequency,
            "current_streak": self.current_streak,
            "best_streak": self.best_streak,
            "active": self.active,
        }


@dataclass
class DueHabit:
    habit: Habit
    done: bool

    def to_dict(self) -> dict:
        return {**self.habit.to_dict(), "done": self.done}


def _validate_title(title: Optional[str]) -> str:
    title = (title or "").strip()
    if not title or len(title) > MAX_TITLE_LENGTH:
        raise ValueError(f"Habit title must be 1-{MAX_TITLE_LENGTH} characters")
    return title


def _build_recurrence(frequency: str, days: Optional[Iterable[int]]) -> Recurrence:
    if frequency not in FREQUENCIES:
        raise ValueError(f"Frequency must be one of: {', '.join(FREQUENCIES)}")
    if frequency == SPECIFIC_DAYS and not days:
        raise ValueError("Days are required for specific_days frequency")
    if frequency != SPECIFIC_DAYS and days:
        raise ValueError(f"Days only apply to specific_days frequency, not {frequency}")
    return recurrence_from_fields(frequency, list(days or ()))


class HabitService:
    """Habit CRUD plus completion logging with cached streak counters."""

    def __init__(self, repo: HabitRepository, scheduler: Optional[HabitScheduler] = None):
        self.repo = repo
        self.scheduler = scheduler or HabitScheduler()

    def _require(self, habit_id: int) -> Habit:
        habit = self.repo.get_by_id(habit_id)
        if habit is None:
            raise ValueError(f"Habit not found: {habit_id}")
        return habit

    # Habit records
    def list_habits(self) -> list[Habit]:
        return self.repo.list_active()

    def show(self, habit_id: int) -> HabitDetail:
        habit = self._require(habit_id)
        return HabitDetail(
            habit=habit,
            due_today=self.scheduler.is_due_today(habit),
            recent_completions=self.repo.list_completions(habit_id, limit=RECENT_COMPLETIONS),
        )

    def add(
        self,
        title: str,
        *,
        frequency: str = DAILY,
        days: Optional[Iterable[int]] = None,
    ) -> Habit:
        """Create a habit after validating its title and recurrence."""

        recurrence = _build_recurrence(frequency, days)
        stored_frequency, stored_days = recurrence_to_fields(recurrence)
        habit = self.repo.create(
            Habit(title=_validate_title(title), frequency=stored_frequency, days=stored_days)
        )
        logger.info("Habit created", extra={"habit_id": habit.id, "frequency": habit.frequency})
        return habit

    def edit(
        self,
        habit_id: int,
        *,
        title: Optional[str] = None,
        frequency: Optional[str] = None,
        days: Optional[Iterable[int]] = None,
    ) -> Habit:
        """Update a habit.

        A new frequency or day set applies to the whole history, so the
        cached streak counters are recomputed straight away.
        """

        habit = self._require(habit_id)
        if title is not None:
            habit.title = _validate_title(title)

        if frequency is not None or days is not None:
            new_frequency = frequency or habit.frequency
            new_days = days
            if new_days is None and new_frequency == SPECIFIC_DAYS:
                new_days = habit.scheduled_days
            recurrence = _build_recurrence(new_frequency, new_days)
            habit.frequency, habit.days = recurrence_to_fields(recurrence)
            # Old counts were measured under the previous rule; start over.
            self._apply_streaks(habit, keep_best=False)

        habit = self.repo.update(habit)
        logger.info("Habit updated", extra={"habit_id": habit_id})
        return habit

    def archive(self, habit_id: int) -> Habit:
        habit = self._require(habit_id)
        habit.is_active = False
        return self.repo.update(habit)

    def restore(self, habit_id: int) -> Habit:
        habit = self._require(habit_id)
        habit.is_active = True
        return self.repo.update(habit)

    def remove(self, habit_id: int) -> None:
        self._require(habit_id)
        self.repo.delete(habit_id)
        logger.info("Habit deleted", extra={"habit_id": habit_id})

    # Completion log
    def check(
        self, habit_id: int, on: Optional[DateLike] = None, *, note: Optional[str] = None
    ) -> Completion:
        """Mark a habit done for ``on`` (default: today) and refresh its streaks."""

        habit = self._require(habit_id)
        day = parse_date(on) if on is not None else self.scheduler.today()
        if self.repo.get_completion(habit_id, day) is not None:
            raise ValueError(f"Habit already checked for {day.isoformat()}")

        completion = self.repo.add_completion(Completion(habit_id=habit_id, occurred_on=day, note=note))
        self.refresh_streaks(habit)
        logger.info("Habit checked", extra={"habit_id": habit_id, "occurred_on": day.isoformat()})
        return completion

    def uncheck(self, habit_id: int, on: Optional[DateLike] = None) -> None:
        """Remove the completion for ``on`` (default: today) and refresh streaks."""

        habit = self._require(habit_id)
        day = parse_date(on) if on is not None else self.scheduler.today()
        if not self.repo.delete_completion(habit_id, day):
            raise ValueError(f"No completion found for {day.isoformat()}")

        self.refresh_streaks(habit)
        logger.info("Habit unchecked", extra={"habit_id": habit_id, "occurred_on": day.isoformat()})

    def refresh_streaks(self, habit: Habit) -> Habit:
        """Recompute and persist the cached streak fields of ``habit``."""
        self._apply_streaks(habit)
        return self.repo.update(habit)

    def _apply_streaks(self, habit: Habit, *, keep_best: bool = True) -> StreakResult:
        dates = self.repo.completion_dates(habit.id)
        result = self.scheduler.recompute_streak(habit, dates)

        habit.current_streak = result.current_streak
        if keep_best:
            # The stored best never goes down, even after an uncheck.
            habit.best_streak = max(result.best_streak, habit.best_streak)
        else:
            habit.best_streak = result.best_streak
        habit.last_completed_on = dates[0] if dates else None
        logger.debug(
            "Streaks recomputed",
            extra={"habit_id": habit.id, **result.as_dict()},
        )
        return result

    # Overviews
    def streaks(self) -> list[HabitStreakOverview]:
        return [
            HabitStreakOverview(
                id=habit.id,
                title=habit.title,
                frequency=habit.frequency,
                current_streak=habit.current_streak,
                best_streak=habit.best_streak,
                active=habit.is_active,
            )
            for habit in self.repo.list_active()
        ]

    def due_today(self) -> list[DueHabit]:
        """Active habits due today, flagged with whether today is already done."""

        today = self.scheduler.today()
        return [
            DueHabit(habit=habit, done=self.repo.get_completion(habit.id, today) is not None)
            for habit in self.repo.list_active()
            if self.scheduler.is_due_today(habit)
        ]


__all__ = [
    "DueHabit",
    "HabitDetail",
    "HabitScheduler",
    "HabitService",
    "HabitStreakOverview",
]
