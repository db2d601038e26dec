"""Service module exports."""

from . import calendar, habits, schedule, streaks

__all__ = ["calendar", "habits", "schedule", "streaks"]
