"""Balance and expense breakdown figures."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

import pandas as pd

from analytics.aggregation import top_n_breakdown
from analytics.calendar import DEFAULT_TIMEZONE, reference_instant, to_timestamp

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from core.models import BreakdownRow, FinanceBalance, FinanceTransaction

__all__ = [
    "WEEKLY_WINDOW_DAYS",
    "finance_balance",
    "top_n_by_category",
]

WEEKLY_WINDOW_DAYS = 7


def finance_balance(
    transactions: Sequence[FinanceTransaction],
    now: Any,
    tz: str = DEFAULT_TIMEZONE,
) -> FinanceBalance:
    """Return the running balance and the expenses of the trailing week.

    The weekly window runs from ``now`` minus seven days (inclusive) up to
    ``now``. Transactions of any other type than income or expense are left
    out of every figure.
    """

    reference = reference_instant(now, tz)
    week_start = reference - pd.Timedelta(days=WEEKLY_WINDOW_DAYS)

    total_income = 0.0
    total_expense = 0.0
    weekly_expense = 0.0
    for transaction in transactions:
        if transaction.type == "income":
            total_income += float(transaction.amount)
        elif transaction.type == "expense":
            total_expense += float(transaction.amount)
            occurred = to_timestamp(transaction.transaction_date, tz)
            if occurred is not None and week_start <= occurred <= reference:
                weekly_expense += float(transaction.amount)

    return {
        "balance": total_income - total_expense,
        "weekly_expense": weekly_expense,
        "total_income": total_income,
        "total_expense": total_expense,
    }


def top_n_by_category(
    transactions: Sequence[FinanceTransaction],
    n: int = 5,
) -> list[BreakdownRow]:
    """Rank expense categories by total amount spent."""

    return top_n_breakdown(
        (
            (transaction.category, transaction.amount)
            for transaction in transactions
            if transaction.type == "expense"
        ),
        n,
    )
