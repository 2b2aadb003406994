"""Core domain package for the Cognita application."""

from .data_loader import fetch_snapshot, load_export, load_snapshot
from .errors import CognitaError, NotAuthenticatedError, RecordNotFoundError, SnapshotError
from .models import (
    BreakdownRow,
    DashboardSnapshot,
    DashboardSummary,
    FinanceBalance,
    FinanceTransaction,
    Habit,
    HabitCompletionRate,
    HabitDay,
    HabitStatus,
    MoodEntry,
    MoodPoint,
    SeriesPoint,
    StudySession,
    Task,
    TaskCompletionRate,
)
from .summary_service import build_dashboard_summary, summary_to_dict

__all__ = [
    "BreakdownRow",
    "DashboardSnapshot",
    "DashboardSummary",
    "FinanceBalance",
    "FinanceTransaction",
    "Habit",
    "HabitCompletionRate",
    "HabitDay",
    "HabitStatus",
    "MoodEntry",
    "MoodPoint",
    "SeriesPoint",
    "StudySession",
    "Task",
    "TaskCompletionRate",
    "CognitaError",
    "NotAuthenticatedError",
    "RecordNotFoundError",
    "SnapshotError",
    "build_dashboard_summary",
    "fetch_snapshot",
    "load_export",
    "load_snapshot",
    "summary_to_dict",
]
