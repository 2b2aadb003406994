"""Storage and identity collaborators consumed by the dashboard.

The hosted backend and its auth service live outside this package; only
their call surface is described here, plus the in-process implementations
used for local exports and tests.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Iterable, Mapping, Optional, Protocol
from uuid import uuid4

from core.errors import RecordNotFoundError

__all__ = [
    "TABLES",
    "AuthCallback",
    "AuthProvider",
    "RecordStore",
    "StaticAuthProvider",
    "InMemoryRecordStore",
]

logger = logging.getLogger(__name__)

STUDY_SESSIONS_TABLE = "study_sessions"
HABITS_TABLE = "habits"
HABIT_COMPLETIONS_TABLE = "habit_completions"
FINANCES_TABLE = "finances"
MOOD_ENTRIES_TABLE = "mood_entries"
TASKS_TABLE = "tasks"

TABLES: tuple[str, ...] = (
    STUDY_SESSIONS_TABLE,
    HABITS_TABLE,
    HABIT_COMPLETIONS_TABLE,
    FINANCES_TABLE,
    MOOD_ENTRIES_TABLE,
    TASKS_TABLE,
)

AuthCallback = Callable[[Optional[str]], None]


class AuthProvider(Protocol):
    def get_current_user(self) -> Optional[str]: ...

    def on_auth_change(self, callback: AuthCallback) -> Callable[[], None]: ...


class RecordStore(Protocol):
    def list(self, table: str, user_id: str) -> list[dict[str, Any]]: ...

    def insert(self, table: str, user_id: str, row: Mapping[str, Any]) -> dict[str, Any]: ...

    def update(
        self, table: str, user_id: str, row_id: str, changes: Mapping[str, Any]
    ) -> dict[str, Any]: ...

    def delete(self, table: str, user_id: str, row_id: str) -> None: ...


class StaticAuthProvider:
    """Single-user identity provider for local use."""

    def __init__(self, user_id: Optional[str] = None) -> None:
        self._user_id = user_id
        self._callbacks: list[AuthCallback] = []

    def get_current_user(self) -> Optional[str]:
        return self._user_id

    def on_auth_change(self, callback: AuthCallback) -> Callable[[], None]:
        """Register ``callback`` and return a function that unsubscribes it."""

        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def sign_in(self, user_id: str) -> None:
        self._set_user(user_id)

    def sign_out(self) -> None:
        self._set_user(None)

    def _set_user(self, user_id: Optional[str]) -> None:
        self._user_id = user_id
        for callback in list(self._callbacks):
            callback(user_id)


class InMemoryRecordStore:
    """Dictionary-backed record store keyed by table and user.

    Mood entries are unique per user and date: inserting a second entry for
    the same ``entry_date`` replaces the first one.
    """

    def __init__(self, rows: Optional[Mapping[str, Iterable[Mapping[str, Any]]]] = None) -> None:
        self._tables: dict[str, list[dict[str, Any]]] = {table: [] for table in TABLES}
        for table, table_rows in (rows or {}).items():
            self._tables.setdefault(table, []).extend(dict(row) for row in table_rows)

    def _rows(self, table: str) -> list[dict[str, Any]]:
        return self._tables.setdefault(table, [])

    def list(self, table: str, user_id: str) -> list[dict[str, Any]]:
        return [
            copy.deepcopy(row) for row in self._rows(table) if row.get("user_id") == user_id
        ]

    def insert(self, table: str, user_id: str, row: Mapping[str, Any]) -> dict[str, Any]:
        record = dict(row)
        record["user_id"] = user_id
        record.setdefault("id", uuid4().hex)

        rows = self._rows(table)
        if table == MOOD_ENTRIES_TABLE:
            for index, existing in enumerate(rows):
                if existing.get("user_id") == user_id and existing.get("entry_date") == record.get(
                    "entry_date"
                ):
                    record["id"] = existing["id"]
                    rows[index] = record
                    logger.debug("Replaced mood entry for %s", record.get("entry_date"))
                    return copy.deepcopy(record)

        rows.append(record)
        return copy.deepcopy(record)

    def update(
        self, table: str, user_id: str, row_id: str, changes: Mapping[str, Any]
    ) -> dict[str, Any]:
        for row in self._rows(table):
            if row.get("id") == row_id and row.get("user_id") == user_id:
                row.update({k: v for k, v in changes.items() if k not in {"id", "user_id"}})
                return copy.deepcopy(row)
        raise RecordNotFoundError(f"{table} row {row_id!r} not found")

    def delete(self, table: str, user_id: str, row_id: str) -> None:
        rows = self._rows(table)
        for index, row in enumerate(rows):
            if row.get("id") == row_id and row.get("user_id") == user_id:
                del rows[index]
                return
        raise RecordNotFoundError(f"{table} row {row_id!r} not found")
