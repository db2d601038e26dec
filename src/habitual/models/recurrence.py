"""Recurrence rules describing when a habit is due."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

DAILY = "daily"
WEEKLY = "weekly"
SPECIFIC_DAYS = "specific_days"
FREQUENCIES = (DAILY, WEEKLY, SPECIFIC_DAYS)


@dataclass(frozen=True)
class Daily:
    """Due every calendar day."""

    frequency = DAILY


@dataclass(frozen=True)
class Weekly:
    """Due any day; one completion per ISO week keeps the streak alive."""

    frequency = WEEKLY


@dataclass(frozen=True)
class SpecificDays:
    """Due on the listed weekdays only (0 = Sunday ... 6 = Saturday).

    An empty set is accepted and means the habit is never due.
    """

    days: frozenset[int] = field(default_factory=frozenset)

    frequency = SPECIFIC_DAYS

    def __post_init__(self) -> None:
        days = frozenset(self.days)
        invalid = sorted(d for d in days if not isinstance(d, int) or not 0 <= d <= 6)
        if invalid:
            raise ValueError(f"Weekdays must be between 0 (Sun) and 6 (Sat), got {invalid}")
        object.__setattr__(self, "days", days)


Recurrence = Union[Daily, Weekly, SpecificDays]


def recurrence_from_fields(frequency: str, days: Optional[Iterable[int] | str] = None) -> Recurrence:
    """Rebuild a recurrence from its stored frequency tag and day list.

    ``days`` may be a sequence of ints or the JSON text kept in the database.
    """

    if frequency == DAILY:
        return Daily()
    if frequency == WEEKLY:
        return Weekly()
    if frequency == SPECIFIC_DAYS:
        if isinstance(days, str):
            days = json.loads(days) if days.strip() else []
        return SpecificDays(frozenset(days or ()))
    raise ValueError(f"Frequency must be one of: {', '.join(FREQUENCIES)}")


def recurrence_to_fields(recurrence: Recurrence) -> tuple[str, Optional[str]]:
    """Return the ``(frequency, days_json)`` pair persisted for a recurrence."""

    if isinstance(recurrence, SpecificDays):
        return SPECIFIC_DAYS, json.dumps(sorted(recurrence.days))
    if isinstance(recurrence, (Daily, Weekly)):
        return recurrence.frequency, None
    raise TypeError(f"Unsupported recurrence: {recurrence!r}")


__all__ = [
    "DAILY",
    "FREQUENCIES",
    "SPECIFIC_DAYS",
    "WEEKLY",
    "Daily",
    "Recurrence",
    "SpecificDays",
    "Weekly",
    "recurrence_from_fields",
    "recurrence_to_fields",
]
