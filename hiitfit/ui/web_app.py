"""NiceGUI web UI for HIIT Fit history."""

from __future__ import annotations

from datetime import date

from nicegui import ui

from hiitfit.history.catalog import EXERCISE_NAMES
from hiitfit.history.model import ExerciseDay
from hiitfit.history.report import week_totals
from hiitfit.history.store import HistoryStore
from hiitfit.ui.controller import HistoryController


def _fmt_day(day: ExerciseDay) -> str:
    return f"{day.date.day} {day.date.strftime('%b %Y')}"


def _fmt_exercises(day: ExerciseDay) -> str:
    return ", ".join(f"{name} x{day.count_exercises(name)}" for name in day.unique_exercises)


def run_web_ui(
    store: HistoryStore,
    *,
    host: str = "127.0.0.1",
    port: int = 8089,
) -> int:
    controller = HistoryController(
        store,
        notify=lambda message, color: ui.notify(message, color=color),
    )

    ui.label("HIIT FIT").classes("text-xl font-semibold tracking-wide")
    if store.loading_error:
        ui.label(f"History could not be loaded from {store.path}. Starting empty.").classes(
            "text-orange-500 font-bold"
        )

    with ui.card().classes("w-full"):
        ui.label("Done today").classes("text-base font-medium")
        with ui.row().classes("w-full gap-2"):
            for name in EXERCISE_NAMES:
                ui.button(name, on_click=lambda _, n=name: controller.mark_done(n))

    with ui.card().classes("w-full"):
        ui.label("Add exercise").classes("text-base font-medium")
        date_picker = ui.date(value=date.today().isoformat())
        with ui.row().classes("w-full gap-2"):
            for name in EXERCISE_NAMES:
                ui.button(
                    name,
                    on_click=lambda _, n=name: controller.add_on(date_picker.value, n),
                ).props("outline")

    week_label = ui.label("").classes("text-sm text-slate-500")

    @ui.refreshable
    def history_list() -> None:
        if not store.exercise_days:
            ui.label("No history yet").classes("text-sm")
            return
        for day in store.exercise_days:
            with ui.row().classes("w-full items-center justify-between"):
                ui.label(_fmt_day(day)).classes("font-semibold")
                ui.label(_fmt_exercises(day)).classes("text-sm")
                ui.button("Delete", on_click=lambda _, d=day: controller.delete(d)).props(
                    "flat color=negative"
                )

    ui.label("History").classes("text-lg font-semibold")
    history_list()

    def refresh_week() -> None:
        totals = week_totals(store.exercise_days)
        week_label.text = "Last week: " + " | ".join(
            f"{name}: {count}" for name, count in totals.items()
        )

    def refresh() -> None:
        history_list.refresh()
        refresh_week()

    store.subscribe(refresh)
    refresh_week()
    ui.run(host=host, port=port, reload=False, title="HIIT Fit History")
    return 0
