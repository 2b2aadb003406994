"""Shared data model definitions for the Cognita dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal, Optional, TypedDict, Union

TimestampLike = Union[datetime, date, str, None]

TransactionType = Literal["income", "expense"]
TargetFrequency = Literal["daily", "weekly"]
TaskPriority = Literal["low", "medium", "high"]
TaskStatus = Literal["pending", "in_progress", "completed"]


@dataclass(frozen=True)
class StudySession:
    id: str
    subject: str
    duration_minutes: int
    session_date: TimestampLike
    notes: Optional[str] = None


@dataclass(frozen=True)
class Habit:
    id: str
    name: str
    target_frequency: TargetFrequency = "daily"
    color: str = "#3b82f6"
    is_active: bool = True
    completions: frozenset[str] = field(default_factory=frozenset)
    description: Optional[str] = None


@dataclass(frozen=True)
class FinanceTransaction:
    id: str
    type: TransactionType
    amount: float
    category: str
    description: str
    transaction_date: TimestampLike


@dataclass(frozen=True)
class MoodEntry:
    id: str
    mood_rating: int
    energy_level: int
    stress_level: int
    entry_date: str
    notes: Optional[str] = None


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    priority: TaskPriority = "medium"
    status: TaskStatus = "pending"
    due_date: TimestampLike = None
    description: Optional[str] = None
    estimated_minutes: Optional[int] = None
    completed_at: TimestampLike = None


@dataclass(frozen=True)
class DashboardSnapshot:
    """Immutable bundle of the five collections loaded for one refresh."""

    study_sessions: tuple[StudySession, ...] = ()
    habits: tuple[Habit, ...] = ()
    transactions: tuple[FinanceTransaction, ...] = ()
    mood_entries: tuple[MoodEntry, ...] = ()
    tasks: tuple[Task, ...] = ()


class HabitCompletionRate(TypedDict):
    completed_count: int
    active_count: int
    rate_percent: int


class FinanceBalance(TypedDict):
    balance: float
    weekly_expense: float
    total_income: float
    total_expense: float


class TaskCompletionRate(TypedDict):
    completed: int
    total: int
    rate_percent: int


class SeriesPoint(TypedDict):
    day: date
    label: str
    value: float


class MoodPoint(TypedDict):
    day: date
    label: str
    mood: int
    energy: int
    stress: int


class HabitDay(TypedDict):
    day: date
    label: str
    completed: bool


class HabitStatus(TypedDict):
    id: str
    name: str
    color: str
    completed_today: bool
    progress_percent: int
    history: list[HabitDay]


class BreakdownRow(TypedDict):
    label: str
    amount: float
    percent_of_top: float


class DashboardSummary(TypedDict):
    reference_day: date
    today_study_minutes: int
    total_study_minutes: int
    study_session_count: int
    habit_completion: HabitCompletionRate
    habits: list[HabitStatus]
    finance: FinanceBalance
    today_mood: Optional[MoodEntry]
    average_mood: float
    task_completion: TaskCompletionRate
    upcoming_tasks: list[Task]
    study_series: list[SeriesPoint]
    mood_series: list[MoodPoint]
    top_expense_categories: list[BreakdownRow]
    top_subjects: list[BreakdownRow]


__all__ = [
    "TimestampLike",
    "TransactionType",
    "TargetFrequency",
    "TaskPriority",
    "TaskStatus",
    "StudySession",
    "Habit",
    "FinanceTransaction",
    "MoodEntry",
    "Task",
    "DashboardSnapshot",
    "HabitCompletionRate",
    "FinanceBalance",
    "TaskCompletionRate",
    "SeriesPoint",
    "MoodPoint",
    "HabitDay",
    "BreakdownRow",
    "DashboardSummary",
]
