"""Dashboard metric helpers shared across Cognita services."""

from analytics.aggregation import daily_series, daily_totals, rate_percent, top_n_breakdown
from analytics.calendar import calendar_day, day_key, reference_instant, to_timestamp, window_days
from analytics.finance import finance_balance, top_n_by_category
from analytics.habits import habit_completion_rate, habit_history, habit_progress, habit_statuses
from analytics.mood import average_mood, mood_series, today_mood
from analytics.study import (
    study_minutes_series,
    today_study_minutes,
    top_n_by_subject,
    total_study_minutes,
)
from analytics.tasks import days_until_due, task_completion_rate, upcoming_tasks

__all__ = [
    "daily_series",
    "daily_totals",
    "rate_percent",
    "top_n_breakdown",
    "calendar_day",
    "day_key",
    "reference_instant",
    "to_timestamp",
    "window_days",
    "finance_balance",
    "top_n_by_category",
    "habit_completion_rate",
    "habit_history",
    "habit_progress",
    "habit_statuses",
    "average_mood",
    "mood_series",
    "today_mood",
    "study_minutes_series",
    "today_study_minutes",
    "top_n_by_subject",
    "total_study_minutes",
    "days_until_due",
    "task_completion_rate",
    "upcoming_tasks",
]
