"""Terminal CLI entrypoint for HIIT Fit history."""

from __future__ import annotations

import argparse
import logging
from datetime import date
from pathlib import Path

from hiitfit.history.catalog import EXERCISE_NAMES, sample_history
from hiitfit.history.model import ExerciseDay
from hiitfit.history.persistence import HistorySaveError
from hiitfit.history.report import week_data, week_totals
from hiitfit.history.store import HistoryStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="HIIT Fit exercise history")
    parser.add_argument(
        "--history-file",
        type=Path,
        default=None,
        help="History file location (default: ~/.hiitfit/history.plist)",
    )
    parser.add_argument("--done", metavar="NAME", help="Record an exercise completed today")
    parser.add_argument("--add", metavar="NAME", help="Record an exercise on --date")
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Day for --add, as YYYY-MM-DD",
    )
    parser.add_argument(
        "--delete-day",
        type=date.fromisoformat,
        default=None,
        metavar="YYYY-MM-DD",
        help="Delete every exercise recorded on this day",
    )
    parser.add_argument("--list", action="store_true", help="Print the full history")
    parser.add_argument("--week", action="store_true", help="Print the last seven days")
    parser.add_argument(
        "--seed-sample",
        action="store_true",
        help="Fill an empty history with sample data",
    )
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch web UI (NiceGUI) for the history page",
    )
    parser.add_argument(
        "--web-host",
        default="127.0.0.1",
        help="Host bind for --ui-web",
    )
    parser.add_argument(
        "--web-port",
        type=int,
        default=8089,
        help="Port for --ui-web",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def format_day(day: ExerciseDay) -> str:
    return f"{day.date.day} {day.date.strftime('%b %Y')}"


def print_history(store: HistoryStore) -> None:
    if not store.exercise_days:
        print("No history yet")
        return
    for day in store.exercise_days:
        print(format_day(day))
        for name in day.unique_exercises:
            print(f"  {name:<12} x{day.count_exercises(name)}")


def print_week(store: HistoryStore) -> None:
    for day in week_data(store.exercise_days):
        print(f"{day.date.isoformat()}  {len(day.exercises):>3} exercise(s)")
    totals = week_totals(store.exercise_days)
    print(" | ".join(f"{name}: {count}" for name, count in totals.items()))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.add is not None and args.date is None:
        parser.error("--add requires --date")

    store = HistoryStore(args.history_file)
    if store.loading_error:
        print(f"Warning: could not load history from {store.path}. Starting empty.")

    if args.ui_web:
        from hiitfit.ui.web_app import run_web_ui

        return run_web_ui(store, host=args.web_host, port=args.web_port)

    acted = False

    if args.seed_sample:
        acted = True
        if store.exercise_days:
            print("History is not empty, sample data not added")
        else:
            store.exercise_days = sample_history(date.today())
            try:
                store.save()
            except HistorySaveError as exc:
                print(f"Error: {exc}")
                return 1
            print(f"Added {len(store.exercise_days)} sample day(s)")

    if args.add is not None:
        acted = True
        if args.date > date.today():
            print(f"Error: cannot record exercises on a future day ({args.date.isoformat()})")
            return 2
        _warn_unknown(args.add)
        store.add_exercise(args.date, args.add)
        if store.last_save_error is not None:
            print(f"Warning: {store.last_save_error}")
        print(f"Recorded {args.add} on {args.date.isoformat()}")

    if args.done is not None:
        acted = True
        _warn_unknown(args.done)
        try:
            store.add_done_exercise(args.done)
        except HistorySaveError as exc:
            print(f"Error: {exc}")
            return 1
        print(f"Recorded {args.done} today")

    if args.delete_day is not None:
        acted = True
        day = store.find_day(args.delete_day)
        if day is None or not store.delete_day(day.id):
            print(f"No history on {args.delete_day.isoformat()}")
            return 1
        if store.last_save_error is not None:
            print(f"Warning: {store.last_save_error}")
        print(f"Deleted {args.delete_day.isoformat()}")

    if args.list:
        acted = True
        print_history(store)

    if args.week:
        acted = True
        print_week(store)

    if not acted:
        parser.print_help()
        return 1
    return 0


def _warn_unknown(name: str) -> None:
    if name not in EXERCISE_NAMES:
        print(f"Note: '{name}' is not a built-in exercise ({', '.join(EXERCISE_NAMES)})")


if __name__ == "__main__":
    raise SystemExit(main())
