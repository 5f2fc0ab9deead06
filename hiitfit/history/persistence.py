"""Local persistence for the exercise history (binary property list)."""

from __future__ import annotations

import logging
import os
import plistlib
import tempfile
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any, Callable, Sequence
from uuid import UUID, uuid4

from hiitfit.history.model import ExerciseDay

FORMAT_VERSION = 1

logger = logging.getLogger(__name__)


class HistoryError(Exception):
    """Base error for history storage."""


class HistoryLoadError(HistoryError):
    """Raised when the history file exists but cannot be parsed."""


class HistorySaveError(HistoryError):
    """Raised when the history cannot be serialized or written."""


def default_history_path() -> Path:
    override = os.environ.get("HIITFIT_HISTORY")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".hiitfit" / "history.plist"


@dataclass(frozen=True)
class StoredDay:
    identifier: str
    day: date
    exercises: tuple[str, ...]

    @classmethod
    def from_day(cls, day: ExerciseDay) -> StoredDay:
        return cls(identifier=str(day.id), day=day.date, exercises=tuple(day.exercises))

    @classmethod
    def decode(cls, raw: Sequence[Any], today: date) -> StoredDay:
        """Decode one `[id, date, exercises]` triple, defaulting bad fields."""
        identifier = raw[0] if len(raw) > 0 else None
        day = raw[1] if len(raw) > 1 else None
        exercises = raw[2] if len(raw) > 2 else None
        return cls(
            identifier=_decode_identifier(identifier),
            day=_decode_date(day, today),
            exercises=_decode_exercises(exercises),
        )

    def encode(self) -> list[Any]:
        return [self.identifier, _local_midnight_utc(self.day), list(self.exercises)]

    def to_day(self) -> ExerciseDay:
        return ExerciseDay(date=self.day, exercises=list(self.exercises), id=UUID(self.identifier))


def _decode_identifier(value: Any) -> str:
    if isinstance(value, str):
        try:
            return str(UUID(value))
        except ValueError:
            pass
    return str(uuid4())


def _local_midnight_utc(day: date) -> datetime:
    """Plist dates are UTC instants: store the start of the local day."""
    local = datetime.combine(day, time()).astimezone()
    return local.astimezone(timezone.utc).replace(tzinfo=None)


def _decode_date(value: Any, today: date) -> date:
    if isinstance(value, datetime):
        # plistlib returns naive UTC instants.
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone().date()
    if isinstance(value, date):
        return value
    return today


def _decode_exercises(value: Any) -> tuple[str, ...]:
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return tuple(value)
    return ()


def _unwrap_records(payload: Any) -> list[Any]:
    if isinstance(payload, list):
        # Unversioned files are a bare list of triples.
        return payload
    if isinstance(payload, dict):
        version = payload.get("version")
        if type(version) is not int or version != FORMAT_VERSION:
            raise HistoryLoadError(f"Unsupported history format version: {version!r}")
        records = payload.get("days")
        if not isinstance(records, list):
            raise HistoryLoadError("History field 'days' must be an array")
        return records
    raise HistoryLoadError(
        f"History must be an array or a versioned dictionary, got {type(payload).__name__}"
    )


def _normalize(days: list[ExerciseDay]) -> list[ExerciseDay]:
    merged: dict[date, ExerciseDay] = {}
    for day in days:
        existing = merged.get(day.date)
        if existing is None:
            merged[day.date] = day
        else:
            existing.exercises.extend(day.exercises)
    return sorted(merged.values(), key=lambda d: d.date, reverse=True)


def load_history(
    path: Path | None = None,
    today: Callable[[], date] = date.today,
) -> list[ExerciseDay]:
    target = path or default_history_path()
    try:
        data = target.read_bytes()
    except FileNotFoundError:
        return []
    except OSError as exc:
        raise HistoryLoadError(f"Cannot read history from {target}: {exc}") from exc

    try:
        payload = plistlib.loads(data)
    except Exception as exc:
        raise HistoryLoadError(f"Cannot read history from {target}: {exc}") from exc

    records = _unwrap_records(payload)
    fallback_day = today()
    days: list[ExerciseDay] = []
    for i, raw in enumerate(records):
        if not isinstance(raw, list):
            logger.warning("Skipping history record %d in %s: not an array", i + 1, target)
            continue
        days.append(StoredDay.decode(raw, fallback_day).to_day())

    out = _normalize(days)
    logger.debug("Loaded %d history day(s) from %s", len(out), target)
    return out


def save_history(days: Sequence[ExerciseDay], path: Path | None = None) -> Path:
    target = path or default_history_path()
    payload = {
        "version": FORMAT_VERSION,
        "days": [StoredDay.from_day(day).encode() for day in days],
    }
    try:
        data = plistlib.dumps(payload, fmt=plistlib.FMT_BINARY)
        target.parent.mkdir(parents=True, exist_ok=True)
        _atomic_write(target, data)
    except (OSError, TypeError, ValueError, OverflowError) as exc:
        raise HistorySaveError(f"Cannot save history to {target}: {exc}") from exc

    logger.debug("Saved %d history day(s) to %s", len(days), target)
    return target


def _atomic_write(target: Path, data: bytes) -> None:
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, target)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
