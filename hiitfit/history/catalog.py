"""Built-in exercises and demo history."""

from __future__ import annotations

from datetime import date, timedelta

from hiitfit.history.model import ExerciseDay

EXERCISE_NAMES: tuple[str, ...] = ("Squat", "Step Up", "Burpee", "Sun Salute")


def sample_history(today: date) -> list[ExerciseDay]:
    """Four days of activity ending today, newest first, with a one-day gap."""
    return [
        ExerciseDay(
            date=today,
            exercises=["Squat", "Step Up", "Burpee", "Sun Salute"],
        ),
        ExerciseDay(
            date=today - timedelta(days=1),
            exercises=["Squat", "Step Up", "Burpee", "Sun Salute", "Squat"],
        ),
        ExerciseDay(
            date=today - timedelta(days=2),
            exercises=["Burpee", "Sun Salute", "Burpee"],
        ),
        ExerciseDay(
            date=today - timedelta(days=4),
            exercises=["Sun Salute", "Squat", "Step Up", "Step Up"],
        ),
    ]
