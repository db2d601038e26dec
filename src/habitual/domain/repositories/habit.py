"""Habit repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.habit import Completion, Habit


class HabitRepository(Protocol):
    """Storage for habits and their completion log."""

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def list_all(self, include_inactive: bool = False) -> list[Habit]:
        """List habits, optionally including archived ones."""
        ...

    def list_active(self) -> list[Habit]:
        """List only active habits."""
        ...

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        ...

    def update(self, habit: Habit) -> Habit:
        """Update an existing habit."""
        ...

    def delete(self, habit_id: int) -> None:
        """Delete a habit and its completions."""
        ...

    # Completion operations
    def get_completion(self, habit_id: int, occurred_on: date) -> Optional[Completion]:
        """Get the completion for a habit on a given day."""
        ...

    def list_completions(self, habit_id: int, limit: Optional[int] = None) -> list[Completion]:
        """List completions newest first."""
        ...

    def completion_dates(self, habit_id: int) -> list[date]:
        """Return the distinct completion dates, newest first."""
        ...

    def add_completion(self, completion: Completion) -> Completion:
        """Record a completion."""
        ...

    def delete_completion(self, habit_id: int, occurred_on: date) -> bool:
        """Delete a completion, returning whether one existed."""
        ...
