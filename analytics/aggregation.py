"""Generic bucketing, ranking and percentage helpers."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any, Callable, Hashable, Iterable, TypeVar

import numpy as np
import pandas as pd

from analytics.calendar import DEFAULT_TIMEZONE, calendar_day, weekday_label, window_days

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from core.models import BreakdownRow, SeriesPoint

__all__ = [
    "rate_percent",
    "daily_totals",
    "daily_series",
    "top_n_breakdown",
]

T = TypeVar("T")


def rate_percent(part: float, whole: float) -> int:
    """Return ``part / whole`` as a whole percentage, rounding halves up.

    A zero or negative ``whole`` yields 0 rather than a division error.
    """

    if whole <= 0:
        return 0
    return int(np.floor(part / whole * 100 + 0.5))


def daily_totals(
    records: Iterable[T],
    *,
    date_of: Callable[[T], Any],
    value_of: Callable[[T], Any],
    tz: str = DEFAULT_TIMEZONE,
) -> pd.Series:
    """Return summed values per calendar day, skipping records without a usable date."""

    rows: list[tuple[date, Any]] = []
    for record in records:
        day = calendar_day(date_of(record), tz)
        if day is None:
            continue
        rows.append((day, value_of(record)))

    if not rows:
        return pd.Series(dtype=float)

    frame = pd.DataFrame(rows, columns=["day", "value"])
    return frame.groupby("day", sort=False)["value"].sum()


def daily_series(
    records: Iterable[T],
    now: Any,
    days: int = 7,
    *,
    date_of: Callable[[T], Any],
    value_of: Callable[[T], Any],
    tz: str = DEFAULT_TIMEZONE,
) -> list[SeriesPoint]:
    """Return one point per calendar day for the last ``days`` days, oldest first."""

    window = window_days(now, days, tz)
    if not window:
        return []

    totals = daily_totals(records, date_of=date_of, value_of=value_of, tz=tz)
    values = totals.reindex(pd.Index(window, dtype=object), fill_value=0).tolist()

    return [
        {"day": day, "label": weekday_label(day), "value": float(value)}
        for day, value in zip(window, values)
    ]


def top_n_breakdown(pairs: Iterable[tuple[Hashable, Any]], n: int = 5) -> list[BreakdownRow]:
    """Group ``(label, amount)`` pairs, rank by summed amount and keep the top ``n``.

    Grouping is by exact label. Equal totals keep the order in which their
    labels first appeared. ``percent_of_top`` is measured against the sum of
    the rows returned, not against every group.
    """

    if n <= 0:
        return []

    labels: list[Hashable] = []
    amounts: list[Any] = []
    for label, amount in pairs:
        labels.append(label)
        amounts.append(amount)

    if not labels:
        return []

    totals = (
        pd.Series(amounts, index=pd.Index(labels, dtype=object), dtype=float)
        .groupby(level=0, sort=False, dropna=False)
        .sum()
    )
    top = totals.sort_values(ascending=False, kind="stable").head(n)
    top_total = float(top.sum())

    rows: list[BreakdownRow] = []
    for label, amount in top.items():
        amount = float(amount)
        share = amount / top_total * 100 if top_total > 0 else 0.0
        rows.append({"label": str(label), "amount": amount, "percent_of_top": share})
    return rows
