"""Core logic for assembling Cognita dashboard summaries."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date, datetime
from typing import Any, Optional

import pandas as pd

from analytics.calendar import reference_instant
from analytics.finance import finance_balance, top_n_by_category
from analytics.habits import habit_completion_rate, habit_statuses
from analytics.mood import average_mood, mood_series, today_mood
from analytics.study import (
    study_minutes_series,
    today_study_minutes,
    top_n_by_subject,
    total_study_minutes,
)
from analytics.tasks import task_completion_rate, upcoming_tasks
from config.settings import Settings
from core.models import DashboardSnapshot, DashboardSummary

__all__ = ["build_dashboard_summary", "summary_to_dict"]


def build_dashboard_summary(
    snapshot: DashboardSnapshot,
    now: Any,
    settings: Optional[Settings] = None,
) -> DashboardSummary:
    """Compute every dashboard figure for ``snapshot`` as of ``now``.

    ``now`` is read once and threaded through each figure, so the result is
    fully determined by its arguments.
    """

    settings = settings or Settings()
    tz = settings.timezone
    reference = reference_instant(now, tz)

    sessions = snapshot.study_sessions
    transactions = snapshot.transactions
    entries = snapshot.mood_entries
    tasks = snapshot.tasks

    return {
        "reference_day": reference.date(),
        "today_study_minutes": today_study_minutes(sessions, reference, tz),
        "total_study_minutes": total_study_minutes(sessions),
        "study_session_count": len(sessions),
        "habit_completion": habit_completion_rate(snapshot.habits, reference, tz),
        "habits": habit_statuses(snapshot.habits, reference, settings.series_days, tz),
        "finance": finance_balance(transactions, reference, tz),
        "today_mood": today_mood(entries, reference, tz),
        "average_mood": average_mood(entries),
        "task_completion": task_completion_rate(tasks),
        "upcoming_tasks": upcoming_tasks(tasks, reference, settings.upcoming_horizon_days, tz),
        "study_series": study_minutes_series(sessions, reference, settings.series_days, tz),
        "mood_series": mood_series(entries, reference, settings.series_days, tz),
        "top_expense_categories": top_n_by_category(transactions, settings.top_n),
        "top_subjects": top_n_by_subject(sessions, settings.top_n),
    }


def _json_value(value: Any) -> Any:
    if isinstance(value, (pd.Timestamp, datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(_json_value(item) for item in value)
    if isinstance(value, dict):
        return {key: _json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_value(item) for item in value]
    return value


def summary_to_dict(summary: DashboardSummary) -> dict[str, Any]:
    """Return ``summary`` as JSON-ready data with ISO-8601 dates."""

    payload: dict[str, Any] = dict(summary)
    mood = summary["today_mood"]
    payload["today_mood"] = asdict(mood) if mood is not None else None
    payload["upcoming_tasks"] = [asdict(task) for task in summary["upcoming_tasks"]]
    return _json_value(payload)
