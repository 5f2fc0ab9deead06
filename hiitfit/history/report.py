"""Seven-day activity window used by the weekly report."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Sequence

from hiitfit.history.catalog import EXERCISE_NAMES
from hiitfit.history.model import ExerciseDay


def previous_days(end: date, count: int = 7) -> list[date]:
    return [end - timedelta(days=offset) for offset in range(count - 1, -1, -1)]


def week_data(
    days: Sequence[ExerciseDay],
    end: date | None = None,
    count: int = 7,
) -> list[ExerciseDay]:
    """Return one record per day in the window, oldest first.

    The window ends on the newest recorded day (today for an empty history).
    Days without activity are filled with blank records.
    """
    if end is None:
        end = days[0].date if days else date.today()
    by_date = {day.date: day for day in days}
    return [by_date.get(d) or ExerciseDay(date=d) for d in previous_days(end, count)]


def week_totals(
    days: Sequence[ExerciseDay],
    names: Sequence[str] = EXERCISE_NAMES,
    end: date | None = None,
) -> dict[str, int]:
    window = week_data(days, end=end)
    return {name: sum(day.count_exercises(name) for day in window) for name in names}
