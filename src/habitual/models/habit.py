"""Habit tracking tables."""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from .recurrence import DAILY, Recurrence, recurrence_from_fields


class Habit(SQLModel, table=True):
    """A recurring habit plus its cached streak counters."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(nullable=False, max_length=200, index=True)
    frequency: str = Field(default=DAILY, nullable=False, max_length=32)
    days: Optional[str] = Field(default=None, max_length=32)  # JSON list, e.g. "[1, 3, 5]"
    is_active: bool = Field(default=True, nullable=False, index=True)
    current_streak: int = Field(default=0, nullable=False)
    best_streak: int = Field(default=0, nullable=False)
    last_completed_on: Optional[date] = Field(default=None)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    completions: list["Completion"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship(
            "Completion", back_populates="habit", cascade="all, delete-orphan"
        ),
    )

    @property
    def recurrence(self) -> Recurrence:
        """The recurrence rule rebuilt from ``frequency`` and ``days``."""
        return recurrence_from_fields(self.frequency, self.days)

    @property
    def scheduled_days(self) -> list[int]:
        if not self.days:
            return []
        return sorted(json.loads(self.days))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "frequency": self.frequency,
            "days": self.scheduled_days if self.days is not None else None,
            "is_active": self.is_active,
            "current_streak": self.current_streak,
            "best_streak": self.best_streak,
            "last_completed_on": (
                self.last_completed_on.isoformat() if self.last_completed_on else None
            ),
        }


class Completion(SQLModel, table=True):
    """A habit completed on one calendar day (at most one per day)."""

    __tablename__: ClassVar[str] = "completion"

    habit_id: int = Field(foreign_key="habit.id", primary_key=True)
    occurred_on: date = Field(primary_key=True, index=True)
    note: Optional[str] = Field(default=None, max_length=255)

    habit: "Habit" = Relationship(
        back_populates="completions",
        sa_relationship=relationship("Habit", back_populates="completions"),
    )

    def to_dict(self) -> dict:
        return {
            "habit_id": self.habit_id,
            "occurred_on": self.occurred_on.isoformat(),
            "note": self.note,
        }
