"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.habit import Completion, Habit


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.get(Habit, habit_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, include_inactive: bool = False) -> list[Habit]:
        """List habits ordered by title, optionally including archived ones."""
        with self.session_factory() as session:
            statement = select(Habit).order_by(Habit.title, Habit.id)  # type: ignore

            if not include_inactive:
                statement = statement.where(Habit.is_active == True)  # noqa: E712

            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_active(self) -> list[Habit]:
        """List only active habits."""
        return self.list_all(include_inactive=False)

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def update(self, habit: Habit) -> Habit:
        """Update an existing habit."""
        with self.session_factory() as session:
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def delete(self, habit_id: int) -> None:
        """Delete a habit; completions go with it through the cascade."""
        with self.session_factory() as session:
            habit = session.get(Habit, habit_id)
            if habit:
                session.delete(habit)
                session.commit()

    # Completion operations
    def get_completion(self, habit_id: int, occurred_on: date) -> Optional[Completion]:
        """Get the completion for a habit on a given day."""
        with self.session_factory() as session:
            obj = session.get(Completion, (habit_id, occurred_on))
            if obj:
                session.expunge(obj)
            return obj

    def list_completions(self, habit_id: int, limit: Optional[int] = None) -> list[Completion]:
        """List completions newest first."""
        with self.session_factory() as session:
            statement = (
                select(Completion)
                .where(Completion.habit_id == habit_id)
                .order_by(Completion.occurred_on.desc())  # type: ignore
            )
            if limit is not None:
                statement = statement.limit(limit)
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def completion_dates(self, habit_id: int) -> list[date]:
        """Return the distinct completion dates, newest first."""
        with self.session_factory() as session:
            statement = (
                select(Completion.occurred_on)
                .where(Completion.habit_id == habit_id)
                .order_by(Completion.occurred_on.desc())  # type: ignore
            )
            return list(session.exec(statement).all())

    def add_completion(self, completion: Completion) -> Completion:
        """Record a completion."""
        with self.session_factory() as session:
            session.add(completion)
            session.commit()
            session.refresh(completion)
            session.expunge(completion)
            return completion

    def delete_completion(self, habit_id: int, occurred_on: date) -> bool:
        """Delete a completion, returning whether one existed."""
        with self.session_factory() as session:
            completion = session.get(Completion, (habit_id, occurred_on))
            if completion is None:
                return False
            session.delete(completion)
            session.commit()
            return True
