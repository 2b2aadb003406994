"""Mood, energy and stress figures."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Sequence

import numpy as np

from analytics.calendar import DEFAULT_TIMEZONE, day_key, reference_instant, weekday_label, window_days

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from core.models import MoodEntry, MoodPoint

__all__ = [
    "today_mood",
    "mood_series",
    "average_mood",
]


def _first_entry_by_date(entries: Sequence[MoodEntry]) -> dict[str, MoodEntry]:
    by_date: dict[str, MoodEntry] = {}
    for entry in entries:
        by_date.setdefault(entry.entry_date, entry)
    return by_date


def today_mood(
    entries: Sequence[MoodEntry],
    now: Any,
    tz: str = DEFAULT_TIMEZONE,
) -> Optional[MoodEntry]:
    """Return the entry logged for ``now``'s day.

    Entries are unique per date upstream; when they are not, the first one in
    iteration order wins.
    """

    today_key = day_key(reference_instant(now, tz), tz)
    for entry in entries:
        if entry.entry_date == today_key:
            return entry
    return None


def mood_series(
    entries: Sequence[MoodEntry],
    now: Any,
    days: int = 7,
    tz: str = DEFAULT_TIMEZONE,
) -> list[MoodPoint]:
    """Return mood, energy and stress per day for the trailing window.

    Each day reads the single entry keyed to it; days without one are 0.
    """

    by_date = _first_entry_by_date(entries)
    points: list[MoodPoint] = []
    for day in window_days(now, days, tz):
        entry = by_date.get(day.isoformat())
        points.append(
            {
                "day": day,
                "label": weekday_label(day),
                "mood": entry.mood_rating if entry else 0,
                "energy": entry.energy_level if entry else 0,
                "stress": entry.stress_level if entry else 0,
            }
        )
    return points


def average_mood(entries: Sequence[MoodEntry]) -> float:
    """Return the mean mood rating to one decimal, rounding halves up."""

    if not entries:
        return 0.0
    mean = sum(entry.mood_rating for entry in entries) / len(entries)
    return float(np.floor(mean * 10 + 0.5) / 10)
