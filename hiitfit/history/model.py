"""Exercise history domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4


def as_calendar_date(value: date | datetime) -> date:
    """Drop any time-of-day component so days compare by year/month/day only."""
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(eq=False)
class ExerciseDay:
    date: date
    exercises: list[str] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        self.date = as_calendar_date(self.date)

    @property
    def unique_exercises(self) -> list[str]:
        return sorted(set(self.exercises))

    def count_exercises(self, exercise: str) -> int:
        return sum(1 for name in self.exercises if name == exercise)

    def is_same_day(self, other: date | datetime) -> bool:
        return self.date == as_calendar_date(other)
