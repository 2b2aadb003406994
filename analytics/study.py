"""Study session figures for the dashboard."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

from analytics.aggregation import daily_series, top_n_breakdown
from analytics.calendar import DEFAULT_TIMEZONE, calendar_day, reference_instant

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from core.models import BreakdownRow, SeriesPoint, StudySession

__all__ = [
    "today_study_minutes",
    "total_study_minutes",
    "study_minutes_series",
    "top_n_by_subject",
]


def today_study_minutes(
    sessions: Sequence[StudySession],
    now: Any,
    tz: str = DEFAULT_TIMEZONE,
) -> int:
    """Return minutes studied on ``now``'s calendar day."""

    today = reference_instant(now, tz).date()
    return sum(
        session.duration_minutes
        for session in sessions
        if calendar_day(session.session_date, tz) == today
    )


def total_study_minutes(sessions: Sequence[StudySession]) -> int:
    return sum(session.duration_minutes for session in sessions)


def study_minutes_series(
    sessions: Sequence[StudySession],
    now: Any,
    days: int = 7,
    tz: str = DEFAULT_TIMEZONE,
) -> list[SeriesPoint]:
    return daily_series(
        sessions,
        now,
        days,
        date_of=lambda session: session.session_date,
        value_of=lambda session: session.duration_minutes,
        tz=tz,
    )


def top_n_by_subject(sessions: Sequence[StudySession], n: int = 5) -> list[BreakdownRow]:
    """Rank subjects by total minutes studied."""

    return top_n_breakdown(
        ((session.subject, session.duration_minutes) for session in sessions),
        n,
    )
