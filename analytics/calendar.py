"""Calendar-day resolution shared by every date-keyed dashboard figure.

All aggregation helpers decide which day a record belongs to through
:func:`calendar_day`, so a single time zone governs "today" and every
N-day window.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

import pandas as pd

__all__ = [
    "DEFAULT_TIMEZONE",
    "to_timestamp",
    "reference_instant",
    "calendar_day",
    "day_key",
    "window_days",
    "weekday_label",
]

DEFAULT_TIMEZONE = "UTC"


def to_timestamp(value: Any, tz: str = DEFAULT_TIMEZONE) -> Optional[pd.Timestamp]:
    """Return ``value`` as a timestamp aware of ``tz``, or ``None``.

    Naive values are read as wall time in ``tz``; aware values are converted.
    Anything pandas cannot parse yields ``None`` instead of raising.
    """

    if value is None:
        return None
    try:
        timestamp = pd.Timestamp(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if pd.isna(timestamp):
        return None

    try:
        if timestamp.tzinfo is None:
            return timestamp.tz_localize(tz, ambiguous=False, nonexistent="shift_forward")
        return timestamp.tz_convert(tz)
    except (TypeError, ValueError, OverflowError):
        return None


def reference_instant(now: Any, tz: str = DEFAULT_TIMEZONE) -> pd.Timestamp:
    """Return the reference instant for a computation.

    Unlike record dates, a bad ``now`` is a caller error and raises.
    """

    timestamp = to_timestamp(now, tz)
    if timestamp is None:
        raise ValueError(f"Invalid reference instant: {now!r}")
    return timestamp


def calendar_day(value: Any, tz: str = DEFAULT_TIMEZONE) -> Optional[date]:
    timestamp = to_timestamp(value, tz)
    if timestamp is None:
        return None
    return timestamp.date()


def day_key(value: Any, tz: str = DEFAULT_TIMEZONE) -> Optional[str]:
    """Return the ``YYYY-MM-DD`` key used by habit completions and mood entries."""

    day = calendar_day(value, tz)
    return day.isoformat() if day is not None else None


def window_days(now: Any, days: int, tz: str = DEFAULT_TIMEZONE) -> list[date]:
    """Return the last ``days`` calendar days ending on ``now``'s day, oldest first."""

    if days <= 0:
        return []
    today = reference_instant(now, tz).date()
    index = pd.date_range(end=pd.Timestamp(today), periods=days, freq="D")
    return [stamp.date() for stamp in index]


def weekday_label(day: date) -> str:
    return day.strftime("%a")
