"""History actions used by the web UI."""

from __future__ import annotations

from datetime import date
from typing import Callable

from hiitfit.history.model import ExerciseDay
from hiitfit.history.persistence import HistorySaveError
from hiitfit.history.store import HistoryStore

NotifyCallback = Callable[[str, str], None]


class HistoryController:
    """Button handlers for the history page.

    `notify(message, color)` receives user-facing feedback; colors follow
    NiceGUI's `positive` / `negative` names.
    """

    def __init__(
        self,
        store: HistoryStore,
        notify: NotifyCallback,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._store = store
        self._notify = notify
        self._today = today

    def mark_done(self, name: str) -> bool:
        try:
            self._store.add_done_exercise(name)
        except HistorySaveError as exc:
            self._notify(f"Not saved: {exc}", "negative")
            return False
        self._notify(f"{name} recorded", "positive")
        return True

    def add_on(self, picked: object, name: str) -> bool:
        try:
            chosen = date.fromisoformat(str(picked))
        except ValueError:
            self._notify("Pick a date first", "negative")
            return False
        if chosen > self._today():
            self._notify("Cannot add exercises in the future", "negative")
            return False
        self._store.add_exercise(chosen, name)
        return self._report_unsaved()

    def delete(self, day: ExerciseDay) -> bool:
        if not self._store.delete_day(day.id):
            return False
        return self._report_unsaved()

    def _report_unsaved(self) -> bool:
        if self._store.last_save_error is not None:
            self._notify(f"Not saved: {self._store.last_save_error}", "negative")
            return False
        return True
