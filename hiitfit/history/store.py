"""In-memory exercise history, kept newest first with one record per day."""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Callable
from uuid import UUID

from hiitfit.history.model import ExerciseDay, as_calendar_date
from hiitfit.history.persistence import (
    HistoryLoadError,
    HistorySaveError,
    default_history_path,
    load_history,
    save_history,
)

ChangeCallback = Callable[[], None]

logger = logging.getLogger(__name__)


class HistoryStore:
    """Owner of the exercise history.

    Every mutation notifies subscribers and then flushes the whole history to
    `path`. Not thread-safe: use it from a single thread.
    """

    def __init__(
        self,
        path: Path | None = None,
        *,
        today: Callable[[], date] = date.today,
        load: bool = True,
    ) -> None:
        self.path = path or default_history_path()
        self.exercise_days: list[ExerciseDay] = []
        self.loading_error = False
        self.last_save_error: HistorySaveError | None = None
        self._today = today
        self._subscribers: list[ChangeCallback] = []
        if load:
            try:
                self.load()
            except HistoryLoadError as exc:
                logger.warning("Starting with empty history: %s", exc)
                self.loading_error = True

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def find_day(self, on: date | datetime) -> ExerciseDay | None:
        target = as_calendar_date(on)
        for day in self.exercise_days:
            if day.date == target:
                return day
        return None

    def add_exercise(self, on: date | datetime, exercise_name: str) -> None:
        """Record one exercise on any day, merging into an existing record for that day."""
        target = as_calendar_date(on)
        index = next(
            (i for i, day in enumerate(self.exercise_days) if day.date <= target),
            None,
        )
        if index is None:
            # Empty history, or older than every recorded day.
            self.exercise_days.append(ExerciseDay(date=target, exercises=[exercise_name]))
        elif self.exercise_days[index].date == target:
            self.exercise_days[index].exercises.append(exercise_name)
        else:
            self.exercise_days.insert(index, ExerciseDay(date=target, exercises=[exercise_name]))

        self._commit(strict=False)

    def add_done_exercise(self, exercise_name: str) -> None:
        """Record an exercise completed today.

        Only the head record is checked. Raises HistorySaveError if the flush
        fails; the in-memory history keeps the new entry.
        """
        today = self._today()
        if self.exercise_days and self.exercise_days[0].is_same_day(today):
            logger.debug("Adding %s", exercise_name)
            self.exercise_days[0].exercises.append(exercise_name)
        else:
            self.exercise_days.insert(0, ExerciseDay(date=today, exercises=[exercise_name]))

        self._commit(strict=True)

    def delete_day(self, day_id: UUID) -> bool:
        for i, day in enumerate(self.exercise_days):
            if day.id == day_id:
                del self.exercise_days[i]
                self._commit(strict=False)
                return True
        return False

    def load(self) -> None:
        self.exercise_days = load_history(self.path, today=self._today)
        self.loading_error = False

    def save(self) -> None:
        save_history(self.exercise_days, self.path)

    def _commit(self, *, strict: bool) -> None:
        for callback in list(self._subscribers):
            callback()
        try:
            self.save()
        except HistorySaveError as exc:
            self.last_save_error = exc
            if strict:
                raise
            logger.warning("History change kept in memory only: %s", exc)
        else:
            self.last_save_error = None
