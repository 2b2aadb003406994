"""Data loading utilities for Cognita's dashboard pipeline.

Rows arrive in the storage backend's snake_case shape and are mapped onto
the frozen domain records the aggregation helpers consume. Problems with
individual rows are logged here; they never reach the aggregation code as
exceptions.
"""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Final, Iterable, Mapping, Optional, TypeVar

import numpy as np
import pandas as pd

from analytics.calendar import to_timestamp
from core.errors import NotAuthenticatedError, SnapshotError
from core.models import (
    DashboardSnapshot,
    FinanceTransaction,
    Habit,
    MoodEntry,
    StudySession,
    Task,
    TimestampLike,
)
from core.storage import (
    FINANCES_TABLE,
    HABIT_COMPLETIONS_TABLE,
    HABITS_TABLE,
    MOOD_ENTRIES_TABLE,
    STUDY_SESSIONS_TABLE,
    TABLES,
    TASKS_TABLE,
    AuthProvider,
    InMemoryRecordStore,
    RecordStore,
    StaticAuthProvider,
)

__all__ = [
    "study_session_from_row",
    "habits_from_rows",
    "transaction_from_row",
    "mood_entry_from_row",
    "task_from_row",
    "fetch_snapshot",
    "load_export",
    "load_snapshot",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CACHE_SIZE: Final[int] = 8
_TRANSACTION_TYPES: Final[frozenset[str]] = frozenset({"income", "expense"})


def _parse_timestamp(value: Any, *, field: str, row_id: Any) -> TimestampLike:
    """Return ``value`` as a datetime, or unchanged if it cannot be parsed."""

    if value is None or value == "":
        return None
    try:
        timestamp = pd.Timestamp(value)
    except (TypeError, ValueError, OverflowError):
        logger.warning("Row %s has an unparseable %s: %r", row_id, field, value)
        return value
    if pd.isna(timestamp):
        return None
    return timestamp.to_pydatetime()


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def study_session_from_row(row: Mapping[str, Any]) -> StudySession:
    return StudySession(
        id=str(row["id"]),
        subject=str(row.get("subject") or ""),
        duration_minutes=int(row.get("duration_minutes") or 0),
        session_date=_parse_timestamp(row.get("session_date"), field="session_date", row_id=row["id"]),
        notes=row.get("notes"),
    )


def habits_from_rows(
    habit_rows: Iterable[Mapping[str, Any]],
    completion_rows: Iterable[Mapping[str, Any]] = (),
) -> list[Habit]:
    """Join habit rows with their ``habit_completions`` rows."""

    completions: dict[str, set[str]] = defaultdict(set)
    for completion in completion_rows:
        habit_id = completion.get("habit_id")
        completion_date = completion.get("completion_date")
        if habit_id is None or not completion_date:
            logger.warning("Skipping incomplete habit completion row: %r", dict(completion))
            continue
        completions[str(habit_id)].add(str(completion_date))

    habits: list[Habit] = []
    for row in habit_rows:
        habit_id = str(row["id"])
        habits.append(
            Habit(
                id=habit_id,
                name=str(row.get("name") or ""),
                description=row.get("description"),
                target_frequency=row.get("target_frequency") or "daily",
                color=row.get("color") or "#3b82f6",
                is_active=bool(row.get("is_active", True)),
                completions=frozenset(completions.get(habit_id, ())),
            )
        )
    return habits


def transaction_from_row(row: Mapping[str, Any]) -> FinanceTransaction:
    kind = row.get("type")
    if kind not in _TRANSACTION_TYPES:
        logger.warning("Transaction %s has unknown type %r; it is left out of totals", row["id"], kind)
    return FinanceTransaction(
        id=str(row["id"]),
        type=kind,
        amount=float(row.get("amount") or 0.0),
        category=str(row.get("category") or ""),
        description=str(row.get("description") or ""),
        transaction_date=_parse_timestamp(
            row.get("transaction_date"), field="transaction_date", row_id=row["id"]
        ),
    )


def mood_entry_from_row(row: Mapping[str, Any]) -> MoodEntry:
    return MoodEntry(
        id=str(row["id"]),
        mood_rating=int(row["mood_rating"]),
        energy_level=int(row["energy_level"]),
        stress_level=int(row["stress_level"]),
        entry_date=str(row.get("entry_date") or ""),
        notes=row.get("notes"),
    )


def task_from_row(row: Mapping[str, Any]) -> Task:
    return Task(
        id=str(row["id"]),
        title=str(row.get("title") or ""),
        description=row.get("description"),
        due_date=_parse_timestamp(row.get("due_date"), field="due_date", row_id=row["id"]),
        priority=row.get("priority") or "medium",
        status=row.get("status") or "pending",
        estimated_minutes=_optional_int(row.get("estimated_minutes")),
        completed_at=_parse_timestamp(row.get("completed_at"), field="completed_at", row_id=row["id"]),
    )


def _sorted_rows(rows: list[dict[str, Any]], column: str) -> list[dict[str, Any]]:
    """Return rows newest first by ``column``, the order the backend queries use."""

    if not rows:
        return rows
    stamps = [to_timestamp(row.get(column), "UTC") for row in rows]
    # Epoch seconds keep dates beyond the nanosecond range sortable.
    keys = pd.Series(
        [stamp.timestamp() if stamp is not None else np.nan for stamp in stamps],
        dtype=float,
    )
    order = keys.sort_values(ascending=False, kind="stable", na_position="last").index
    return [rows[i] for i in order]


def _map_rows(
    rows: Iterable[Mapping[str, Any]],
    mapper: Callable[[Mapping[str, Any]], T],
    table: str,
) -> list[T]:
    """Map rows with ``mapper``, logging and skipping the ones it rejects."""

    records: list[T] = []
    for row in rows:
        try:
            records.append(mapper(row))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed %s row %r: %s", table, row.get("id"), exc)
    return records


def fetch_snapshot(store: RecordStore, auth: AuthProvider) -> DashboardSnapshot:
    """Load the signed-in user's collections into an immutable snapshot.

    Only active habits are loaded. Study sessions, transactions and mood
    entries are ordered newest first and tasks by creation time, newest first.
    """

    user_id = auth.get_current_user()
    if not user_id:
        raise NotAuthenticatedError("No user is signed in.")

    habit_rows = [row for row in store.list(HABITS_TABLE, user_id) if row.get("is_active", True)]
    habit_ids = {str(row["id"]) for row in habit_rows}
    completion_rows = [
        row
        for row in store.list(HABIT_COMPLETIONS_TABLE, user_id)
        if str(row.get("habit_id")) in habit_ids
    ]

    sessions = _sorted_rows(store.list(STUDY_SESSIONS_TABLE, user_id), "session_date")
    finances = _sorted_rows(store.list(FINANCES_TABLE, user_id), "transaction_date")
    moods = _sorted_rows(store.list(MOOD_ENTRIES_TABLE, user_id), "entry_date")
    tasks = _sorted_rows(store.list(TASKS_TABLE, user_id), "created_at")

    snapshot = DashboardSnapshot(
        study_sessions=tuple(_map_rows(sessions, study_session_from_row, STUDY_SESSIONS_TABLE)),
        habits=tuple(habits_from_rows(habit_rows, completion_rows)),
        transactions=tuple(_map_rows(finances, transaction_from_row, FINANCES_TABLE)),
        mood_entries=tuple(_map_rows(moods, mood_entry_from_row, MOOD_ENTRIES_TABLE)),
        tasks=tuple(_map_rows(tasks, task_from_row, TASKS_TABLE)),
    )
    logger.info(
        "Loaded snapshot for %s: %d sessions, %d habits, %d transactions, %d mood entries, %d tasks",
        user_id,
        len(snapshot.study_sessions),
        len(snapshot.habits),
        len(snapshot.transactions),
        len(snapshot.mood_entries),
        len(snapshot.tasks),
    )
    return snapshot


def load_export(
    path: str | Path, user_id: Optional[str] = None
) -> tuple[InMemoryRecordStore, StaticAuthProvider]:
    """Read a JSON export into an in-memory store signed in as its user.

    The export is an object with a ``user_id`` and one list of rows per
    table name. Passing ``user_id`` attributes the rows to that user instead.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Export file not found: {path}")

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"Export {path} is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise SnapshotError(f"Export {path} must contain a JSON object.")

    user_id = user_id or str(payload.get("user_id") or "local-user")
    tables: dict[str, list[dict[str, Any]]] = {}
    for table in TABLES:
        rows = payload.get(table, [])
        if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
            raise SnapshotError(f"Export table {table!r} must be a list of row objects.")
        tables[table] = [{**row, "user_id": user_id} for row in rows]

    return InMemoryRecordStore(tables), StaticAuthProvider(user_id)


@lru_cache(maxsize=_CACHE_SIZE)
def load_snapshot(path: str | Path, user_id: Optional[str] = None) -> DashboardSnapshot:
    """Return the snapshot stored in a JSON export.

    Results are cached to avoid redundant disk reads when the dashboard is
    recomputed for the same export during a session.
    """

    store, auth = load_export(path, user_id)
    return fetch_snapshot(store, auth)
