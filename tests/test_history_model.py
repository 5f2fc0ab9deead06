from __future__ import annotations

from datetime import date, datetime

from hiitfit.history.catalog import EXERCISE_NAMES, sample_history
from hiitfit.history.model import ExerciseDay


def test_unique_exercises_are_sorted_and_counted() -> None:
    day = ExerciseDay(date=date(2024, 3, 10), exercises=["Squat", "Burpee", "Squat"])

    assert day.unique_exercises == ["Burpee", "Squat"]
    assert day.count_exercises("Squat") == 2
    assert day.count_exercises("Burpee") == 1
    assert day.count_exercises("Step Up") == 0


def test_datetime_is_normalized_to_calendar_day() -> None:
    day = ExerciseDay(date=datetime(2024, 3, 10, 18, 45))

    assert day.date == date(2024, 3, 10)
    assert day.is_same_day(datetime(2024, 3, 10, 6, 0))
    assert not day.is_same_day(date(2024, 3, 11))


def test_each_day_gets_its_own_identifier() -> None:
    a = ExerciseDay(date=date(2024, 3, 10))
    b = ExerciseDay(date=date(2024, 3, 10))

    assert a.id != b.id
    assert a.exercises == []


def test_sample_history_is_newest_first_with_unique_days() -> None:
    days = sample_history(date(2024, 3, 10))
    dates = [day.date for day in days]

    assert dates == sorted(set(dates), reverse=True)
    assert dates[0] == date(2024, 3, 10)
    assert all(name in EXERCISE_NAMES for day in days for name in day.exercises)
