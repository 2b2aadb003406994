"""Task completion and deadline figures."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Sequence

from analytics.aggregation import rate_percent
from analytics.calendar import DEFAULT_TIMEZONE, reference_instant, to_timestamp

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from core.models import Task, TaskCompletionRate

__all__ = [
    "DEFAULT_HORIZON_DAYS",
    "task_completion_rate",
    "days_until_due",
    "upcoming_tasks",
]

DEFAULT_HORIZON_DAYS = 3

_SECONDS_PER_DAY = 86_400


def task_completion_rate(tasks: Sequence[Task]) -> TaskCompletionRate:
    completed = sum(1 for task in tasks if task.status == "completed")
    total = len(tasks)
    return {
        "completed": completed,
        "total": total,
        "rate_percent": rate_percent(completed, total),
    }


def days_until_due(task: Task, now: Any, tz: str = DEFAULT_TIMEZONE) -> int | None:
    """Return whole days until ``task`` is due, rounded up, or ``None`` without a due date.

    A task due later today is 1; a task overdue by less than a day is 0.
    """

    due = to_timestamp(task.due_date, tz)
    if due is None:
        return None
    elapsed = due.timestamp() - reference_instant(now, tz).timestamp()
    return math.ceil(elapsed / _SECONDS_PER_DAY)


def upcoming_tasks(
    tasks: Sequence[Task],
    now: Any,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
    tz: str = DEFAULT_TIMEZONE,
) -> list[Task]:
    """Return open tasks due within ``horizon_days``, keeping the input order."""

    reference = reference_instant(now, tz)
    upcoming: list[Task] = []
    for task in tasks:
        if task.status == "completed":
            continue
        remaining = days_until_due(task, reference, tz)
        if remaining is not None and 0 <= remaining <= horizon_days:
            upcoming.append(task)
    return upcoming
