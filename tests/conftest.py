"""Shared fixtures for the Cognita test-suite."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import streamlit as st

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config.settings import get_settings  # noqa: E402
from core.models import (  # noqa: E402
    DashboardSnapshot,
    FinanceTransaction,
    Habit,
    MoodEntry,
    StudySession,
    Task,
)

NOW = datetime(2024, 1, 10, 15, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clear_streamlit_secrets(monkeypatch):
    """Provide an empty secrets mapping so tests don't rely on Streamlit runtime."""

    monkeypatch.setattr(st, "secrets", {}, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def sample_snapshot() -> DashboardSnapshot:
    return DashboardSnapshot(
        study_sessions=(
            StudySession("s1", "Mathematics", 45, NOW - timedelta(hours=3)),
            StudySession("s2", "Physics", 30, NOW - timedelta(days=1)),
            StudySession("s3", "Mathematics", 60, NOW - timedelta(days=2)),
            StudySession("s4", "History", 20, NOW - timedelta(days=12)),
        ),
        habits=(
            Habit("h1", "Review", completions=frozenset({"2024-01-10", "2024-01-09"})),
            Habit("h2", "Exercise", completions=frozenset({"2024-01-08"})),
            Habit("h3", "Old habit", is_active=False, completions=frozenset({"2024-01-10"})),
        ),
        transactions=(
            FinanceTransaction("t1", "income", 100.0, "Allowance", "Monthly", NOW - timedelta(days=9)),
            FinanceTransaction("t2", "expense", 30.0, "Food", "Lunch", NOW - timedelta(days=1)),
            FinanceTransaction("t3", "expense", 20.0, "Books", "Notebook", NOW - timedelta(days=10)),
        ),
        mood_entries=(
            MoodEntry("m1", 4, 3, 2, "2024-01-10"),
            MoodEntry("m2", 2, 2, 5, "2024-01-08"),
        ),
        tasks=(
            Task("k1", "Problem set", due_date=NOW + timedelta(days=2)),
            Task("k2", "Essay", status="completed", due_date=NOW + timedelta(days=1), completed_at=NOW),
            Task("k3", "Reading", due_date=NOW + timedelta(days=8)),
        ),
    )
