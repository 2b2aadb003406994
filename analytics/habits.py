"""Habit completion figures."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

from analytics.aggregation import rate_percent
from analytics.calendar import DEFAULT_TIMEZONE, day_key, reference_instant, weekday_label, window_days

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from core.models import Habit, HabitCompletionRate, HabitDay, HabitStatus

__all__ = [
    "HABIT_PROGRESS_WINDOW",
    "habit_completion_rate",
    "habit_history",
    "habit_progress",
    "habit_statuses",
]

HABIT_PROGRESS_WINDOW = 30


def habit_completion_rate(
    habits: Sequence[Habit],
    now: Any,
    tz: str = DEFAULT_TIMEZONE,
) -> HabitCompletionRate:
    """Return how many active habits were completed on ``now``'s day."""

    today_key = day_key(reference_instant(now, tz), tz)
    active = [habit for habit in habits if habit.is_active]
    completed = sum(1 for habit in active if today_key in habit.completions)
    return {
        "completed_count": completed,
        "active_count": len(active),
        "rate_percent": rate_percent(completed, len(active)),
    }


def habit_history(
    habit: Habit,
    now: Any,
    days: int = 7,
    tz: str = DEFAULT_TIMEZONE,
) -> list[HabitDay]:
    return [
        {
            "day": day,
            "label": weekday_label(day),
            "completed": day.isoformat() in habit.completions,
        }
        for day in window_days(now, days, tz)
    ]


def habit_progress(habit: Habit, window: int = HABIT_PROGRESS_WINDOW) -> int:
    """Return completions as a percentage of ``window`` days, capped at 100."""

    if window <= 0:
        return 0
    return min(rate_percent(len(habit.completions), window), 100)


def habit_statuses(
    habits: Sequence[Habit],
    now: Any,
    days: int = 7,
    tz: str = DEFAULT_TIMEZONE,
) -> list[HabitStatus]:
    """Return today's state, progress and recent history for each active habit."""

    today_key = day_key(reference_instant(now, tz), tz)
    return [
        {
            "id": habit.id,
            "name": habit.name,
            "color": habit.color,
            "completed_today": today_key in habit.completions,
            "progress_percent": habit_progress(habit),
            "history": habit_history(habit, now, days, tz),
        }
        for habit in habits
        if habit.is_active
    ]
