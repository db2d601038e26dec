"""SQLModel tables and recurrence value types."""

from .habit import Completion, Habit
from .recurrence import (
    DAILY,
    FREQUENCIES,
    SPECIFIC_DAYS,
    WEEKLY,
    Daily,
    Recurrence,
    SpecificDays,
    Weekly,
    recurrence_from_fields,
    recurrence_to_fields,
)

__all__ = [
    "Completion",
    "DAILY",
    "Daily",
    "FREQUENCIES",
    "Habit",
    "Recurrence",
    "SPECIFIC_DAYS",
    "SpecificDays",
    "WEEKLY",
    "Weekly",
    "recurrence_from_fields",
    "recurrence_to_fields",
]
