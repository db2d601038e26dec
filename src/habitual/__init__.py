"""Habit recurrence and streak tracking."""

from __future__ import annotations

from .config import BaseConfig
from .models.recurrence import Daily, Recurrence, SpecificDays, Weekly
from .services.habits import HabitScheduler, HabitService
from .services.schedule import is_due_on
from .services.streaks import StreakResult, calculate_streaks

__version__ = "0.1.0"

__all__ = [
    "BaseConfig",
    "Daily",
    "HabitScheduler",
    "HabitService",
    "Recurrence",
    "SpecificDays",
    "StreakResult",
    "Weekly",
    "calculate_streaks",
    "is_due_on",
]
