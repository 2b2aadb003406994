"""Formatting helpers for Cognita summaries."""

from __future__ import annotations

from html import escape
from typing import Any

from core.models import DashboardSummary

__all__ = ["build_highlights", "format_currency", "format_minutes", "format_rating"]


def format_minutes(minutes: float) -> str:
    total = int(minutes)
    return f"{total // 60}h {total % 60}m"


def format_currency(amount: float, symbol: str = "$") -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_rating(value: Any, scale: int = 5) -> str:
    return f"{value}/{scale}"


def build_highlights(summary: DashboardSummary) -> list[str]:
    """Return short HTML snippets summarising the day for the highlights card."""

    highlights: list[str] = [
        f"Studied <strong>{format_minutes(summary['today_study_minutes'])}</strong> today.",
    ]

    habits = summary["habit_completion"]
    if habits["active_count"]:
        highlights.append(
            f"Habits: <strong>{habits['completed_count']} of {habits['active_count']}</strong> "
            f"done ({habits['rate_percent']}%)."
        )

    finance = summary["finance"]
    highlights.append(
        f"Balance <strong>{format_currency(finance['balance'])}</strong>, "
        f"{format_currency(finance['weekly_expense'])} spent this week."
    )

    mood = summary["today_mood"]
    if mood is not None:
        highlights.append(
            f"Mood {format_rating(mood.mood_rating)}, energy {format_rating(mood.energy_level)}, "
            f"stress {format_rating(mood.stress_level)}."
        )

    if summary["top_expense_categories"]:
        top = summary["top_expense_categories"][0]
        highlights.append(
            f"Top spend: <strong>{escape(top['label'])}</strong> at {format_currency(top['amount'])}."
        )

    upcoming = len(summary["upcoming_tasks"])
    if upcoming:
        highlights.append(f"{upcoming} task{'s' if upcoming != 1 else ''} due in the next few days.")

    return highlights
