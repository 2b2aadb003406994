"""Unit tests for the dashboard metric helpers."""

from __future__ import annotations

import copy
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from analytics.aggregation import daily_series, rate_percent, top_n_breakdown
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
from core.models import FinanceTransaction, Habit, MoodEntry, StudySession, Task

NOW = datetime(2024, 1, 10, 15, 0, tzinfo=timezone.utc)
TODAY = "2024-01-10"


def _expense(txn_id: str, amount: float, category: str, when=NOW) -> FinanceTransaction:
    return FinanceTransaction(txn_id, "expense", amount, category, "", when)


def test_to_timestamp_is_fail_soft():
    assert to_timestamp("not a date") is None
    assert to_timestamp(None) is None
    assert to_timestamp("") is None
    assert calendar_day("2024-13-45") is None


def test_calendar_day_uses_configured_time_zone():
    late_evening_utc = "2024-01-10T03:00:00+00:00"

    assert calendar_day(late_evening_utc) == date(2024, 1, 10)
    assert calendar_day(late_evening_utc, "America/New_York") == date(2024, 1, 9)
    assert day_key(datetime(2024, 1, 9, 23, 0), "Asia/Tokyo") == "2024-01-09"


def test_reference_instant_rejects_invalid_now():
    with pytest.raises(ValueError):
        reference_instant("yesterday-ish")


def test_window_days_oldest_first():
    days = window_days(NOW, 7)

    assert days[0] == date(2024, 1, 4)
    assert days[-1] == date(2024, 1, 10)
    assert len(days) == 7
    assert window_days(NOW, 0) == []


def test_rate_percent_rounds_halves_up():
    assert rate_percent(1, 8) == 13
    assert rate_percent(1, 3) == 33
    assert rate_percent(2, 3) == 67
    assert rate_percent(5, 0) == 0


def test_today_study_minutes_counts_only_today():
    sessions = [
        StudySession("a", "Maths", 45, NOW - timedelta(hours=2)),
        StudySession("b", "Maths", 30, datetime(2024, 1, 10, 0, 5, tzinfo=timezone.utc)),
        StudySession("c", "Physics", 50, NOW - timedelta(days=1)),
        StudySession("d", "Physics", 15, "garbage"),
    ]

    assert today_study_minutes(sessions, NOW) == 75
    assert today_study_minutes([], NOW) == 0


def test_today_study_minutes_respects_time_zone():
    sessions = [StudySession("a", "Maths", 40, "2024-01-10T03:00:00+00:00")]

    assert today_study_minutes(sessions, NOW) == 40
    assert today_study_minutes(sessions, NOW, tz="America/New_York") == 0


def test_total_study_minutes_includes_undated_sessions():
    sessions = [StudySession("a", "Maths", 40, NOW), StudySession("b", "Art", 20, "bad date")]

    assert total_study_minutes(sessions) == 60


def test_habit_completion_rate_counts_active_habits_only():
    habits = [
        Habit("h1", "Review", is_active=True, completions=frozenset({TODAY})),
        Habit("h2", "Exercise", is_active=True, completions=frozenset()),
        Habit("h3", "Retired", is_active=False, completions=frozenset({TODAY})),
    ]

    assert habit_completion_rate(habits, NOW) == {
        "completed_count": 1,
        "active_count": 2,
        "rate_percent": 50,
    }


def test_habit_completion_rate_without_active_habits():
    habits = [Habit("h1", "Retired", is_active=False, completions=frozenset({TODAY}))]

    assert habit_completion_rate(habits, NOW) == {
        "completed_count": 0,
        "active_count": 0,
        "rate_percent": 0,
    }


def test_habit_history_and_progress():
    habit = Habit("h1", "Review", completions=frozenset({"2024-01-10", "2024-01-08", "2023-12-01"}))

    history = habit_history(habit, NOW, days=3)

    assert [row["day"] for row in history] == [date(2024, 1, 8), date(2024, 1, 9), date(2024, 1, 10)]
    assert [row["completed"] for row in history] == [True, False, True]
    assert habit_progress(habit) == 10
    full = Habit("h2", "Daily", completions=frozenset(f"2023-11-{day:02d}" for day in range(1, 31)) | {TODAY})
    assert habit_progress(full) == 100


def test_habit_statuses_cover_active_habits():
    habits = [
        Habit("h1", "Review", color="#123456", completions=frozenset({TODAY, "2024-01-08"})),
        Habit("h2", "Retired", is_active=False, completions=frozenset({TODAY})),
    ]

    statuses = habit_statuses(habits, NOW, days=3)

    assert len(statuses) == 1
    status = statuses[0]
    assert (status["id"], status["name"], status["color"]) == ("h1", "Review", "#123456")
    assert status["completed_today"] is True
    assert status["progress_percent"] == 7
    assert [day["completed"] for day in status["history"]] == [True, False, True]


def test_finance_balance_and_weekly_expense():
    transactions = [
        FinanceTransaction("t1", "income", 100.0, "Allowance", "", NOW - timedelta(days=1)),
        FinanceTransaction("t2", "expense", 30.0, "Food", "", NOW - timedelta(days=2)),
        FinanceTransaction("t3", "expense", 20.0, "Books", "", NOW - timedelta(days=10)),
    ]

    result = finance_balance(transactions, NOW)

    assert result["balance"] == pytest.approx(50.0)
    assert result["weekly_expense"] == pytest.approx(30.0)
    assert result["total_income"] == pytest.approx(100.0)
    assert result["total_expense"] == pytest.approx(50.0)


def test_finance_weekly_window_bounds():
    transactions = [
        _expense("edge", 5.0, "Food", NOW - timedelta(days=7)),
        _expense("outside", 7.0, "Food", NOW - timedelta(days=7, seconds=1)),
        _expense("future", 11.0, "Food", NOW + timedelta(days=1)),
        _expense("undated", 13.0, "Food", "not a date"),
    ]

    result = finance_balance(transactions, NOW)

    assert result["weekly_expense"] == pytest.approx(5.0)
    assert result["balance"] == pytest.approx(-36.0)


def test_finance_balance_accepts_decimal_amounts():
    transactions = [
        FinanceTransaction("t1", "income", Decimal("100.00"), "Allowance", "", NOW),
        FinanceTransaction("t2", "expense", Decimal("30.00"), "Food", "", NOW - timedelta(days=1)),
    ]

    result = finance_balance(transactions, NOW)

    assert result["balance"] == pytest.approx(70.0)
    assert result["weekly_expense"] == pytest.approx(30.0)
    assert top_n_by_category(transactions)[0]["amount"] == pytest.approx(30.0)


def test_finance_balance_ignores_unknown_types():
    transactions = [
        FinanceTransaction("t1", "income", 10.0, "Gift", "", NOW),
        FinanceTransaction("t2", "transfer", 99.0, "Other", "", NOW),  # type: ignore[arg-type]
    ]

    result = finance_balance(transactions, NOW)

    assert result["balance"] == pytest.approx(10.0)
    assert result["weekly_expense"] == 0
    assert top_n_by_category(transactions) == []


def test_today_mood_returns_first_match():
    first = MoodEntry("m1", 4, 3, 2, TODAY)
    duplicate = MoodEntry("m2", 1, 1, 5, TODAY)
    entries = [MoodEntry("m0", 3, 3, 3, "2024-01-09"), first, duplicate]

    assert today_mood(entries, NOW) is first
    assert today_mood(entries[:1], NOW) is None
    assert today_mood([], NOW) is None


def test_mood_series_reads_single_entry_per_day():
    entries = [
        MoodEntry("m1", 4, 3, 2, TODAY),
        MoodEntry("m2", 1, 1, 5, TODAY),
        MoodEntry("m3", 2, 5, 4, "2024-01-07"),
        MoodEntry("m4", 5, 5, 1, "not-a-date"),
    ]

    series = mood_series(entries, NOW)

    assert len(series) == 7
    assert series[-1]["mood"] == 4
    assert series[-1]["energy"] == 3
    assert series[-1]["stress"] == 2
    assert series[3]["day"] == date(2024, 1, 7)
    assert (series[3]["mood"], series[3]["energy"], series[3]["stress"]) == (2, 5, 4)
    assert series[0] == {"day": date(2024, 1, 4), "label": "Thu", "mood": 0, "energy": 0, "stress": 0}


def test_average_mood():
    entries = [MoodEntry("a", 4, 3, 2, TODAY), MoodEntry("b", 3, 3, 3, "2024-01-09"), MoodEntry("c", 4, 1, 1, "x")]

    assert average_mood(entries) == pytest.approx(3.7)
    assert average_mood([]) == 0.0


def test_average_mood_rounds_halves_up():
    entries = [MoodEntry(str(index), rating, 3, 3, f"2024-01-0{index + 1}") for index, rating in enumerate([2, 2, 3, 2])]

    assert average_mood(entries) == pytest.approx(2.3)


def test_task_completion_rate():
    tasks = [
        Task("a", "One", status="completed"),
        Task("b", "Two", status="in_progress"),
        Task("c", "Three"),
    ]

    assert task_completion_rate(tasks) == {"completed": 1, "total": 3, "rate_percent": 33}
    assert task_completion_rate([]) == {"completed": 0, "total": 0, "rate_percent": 0}


def test_upcoming_tasks_boundaries():
    tasks = [
        Task("edge", "Due in exactly three days", due_date=NOW + timedelta(days=3)),
        Task("late", "One second past the horizon", due_date=NOW + timedelta(days=3, seconds=1)),
        Task("past", "Due yesterday", due_date=NOW - timedelta(days=1)),
        Task("recent", "Overdue by an hour", due_date=NOW - timedelta(hours=1)),
        Task("done", "Completed", status="completed", due_date=NOW + timedelta(days=1)),
        Task("nodate", "No due date"),
        Task("bad", "Unparseable due date", due_date="someday"),
        Task("soon", "Due tomorrow", status="in_progress", due_date=NOW + timedelta(days=1)),
    ]

    result = upcoming_tasks(tasks, NOW)

    assert [task.id for task in result] == ["edge", "recent", "soon"]
    assert upcoming_tasks(tasks, NOW, horizon_days=0) == [tasks[3]]


def test_days_until_due_rounds_up():
    assert days_until_due(Task("a", "A", due_date=NOW + timedelta(hours=1)), NOW) == 1
    assert days_until_due(Task("b", "B", due_date=NOW - timedelta(hours=23)), NOW) == 0
    assert days_until_due(Task("c", "C", due_date=NOW - timedelta(hours=25)), NOW) == -1
    assert days_until_due(Task("d", "D"), NOW) is None
    assert days_until_due(Task("e", "E", due_date="3024-01-10T00:00:00+00:00"), NOW) > 365_000


def test_study_series_excludes_old_sessions():
    sessions = [StudySession("old", "Maths", 90, NOW - timedelta(days=10))]

    series = study_minutes_series(sessions, NOW)

    assert len(series) == 7
    assert all(point["value"] == 0 for point in series)


def test_study_series_last_bucket_is_today():
    sessions = [
        StudySession("today", "Maths", 45, NOW.replace(hour=8)),
        StudySession("earlier", "Maths", 20, NOW - timedelta(days=3)),
        StudySession("earlier-2", "Art", 10, NOW - timedelta(days=3, hours=1)),
        StudySession("bad", "Art", 99, "bad date"),
    ]

    series = study_minutes_series(sessions, NOW)

    assert series[-1]["value"] == 45
    assert series[-1]["day"] == date(2024, 1, 10)
    assert series[-1]["label"] == "Wed"
    assert series[3]["value"] == 30
    assert sum(point["value"] for point in series) == 75


def test_daily_series_accepts_custom_accessors():
    records = [
        {"when": "2024-01-09T10:00:00Z", "steps": 1200},
        {"when": "2024-01-09T18:00:00Z", "steps": 800},
        {"when": None, "steps": 5000},
    ]

    series = daily_series(
        records,
        NOW,
        days=2,
        date_of=lambda record: record["when"],
        value_of=lambda record: record["steps"],
    )

    assert [point["value"] for point in series] == [2000, 0]


def test_top_n_by_category_uses_displayed_total():
    transactions = [
        _expense("t1", 30.0, "Food"),
        _expense("t2", 30.0, "Books"),
        _expense("t3", 20.0, "Transport"),
        _expense("t4", 20.0, "Food"),
        FinanceTransaction("t5", "income", 500.0, "Food", "", NOW),
    ]

    rows = top_n_by_category(transactions, n=2)

    assert [(row["label"], row["amount"]) for row in rows] == [("Food", 50.0), ("Books", 30.0)]
    assert [row["percent_of_top"] for row in rows] == [62.5, 37.5]


def test_top_n_by_category_keeps_first_seen_order_for_ties():
    transactions = [
        _expense("t1", 10.0, "Transport"),
        _expense("t2", 25.0, "Food"),
        _expense("t3", 10.0, "Books"),
        _expense("t4", 10.0, "food"),
    ]

    rows = top_n_by_category(transactions)

    assert [row["label"] for row in rows] == ["Food", "Transport", "Books", "food"]
    assert sum(row["percent_of_top"] for row in rows) == pytest.approx(100.0)


def test_top_n_by_subject():
    sessions = [
        StudySession("a", "Maths", 30, NOW),
        StudySession("b", "Physics", 50, NOW),
        StudySession("c", "Maths", 40, "bad date"),
        StudySession("d", "History", 10, NOW),
    ]

    rows = top_n_by_subject(sessions, n=2)

    assert [(row["label"], row["amount"]) for row in rows] == [("Maths", 70.0), ("Physics", 50.0)]
    assert rows[0]["percent_of_top"] == pytest.approx(70 / 120 * 100)


def test_top_n_breakdown_edge_cases():
    assert top_n_breakdown([], 5) == []
    assert top_n_breakdown([("A", 1.0)], 0) == []
    assert top_n_breakdown([("A", 0.0)], 5) == [{"label": "A", "amount": 0.0, "percent_of_top": 0.0}]


def test_helpers_do_not_mutate_inputs():
    sessions = [StudySession("a", "Maths", 30, NOW), StudySession("b", "Art", 20, NOW - timedelta(days=1))]
    transactions = [_expense("t1", 10.0, "Food"), _expense("t2", 5.0, "Books")]
    habits = [Habit("h1", "Review", completions=frozenset({TODAY}))]
    tasks = [Task("k2", "Later", due_date=NOW + timedelta(days=2)), Task("k1", "Soon", due_date=NOW)]
    before = copy.deepcopy((sessions, transactions, habits, tasks))

    top_n_by_subject(sessions)
    study_minutes_series(sessions, NOW)
    top_n_by_category(transactions)
    finance_balance(transactions, NOW)
    habit_completion_rate(habits, NOW)
    upcoming_tasks(tasks, NOW)

    assert (sessions, transactions, habits, tasks) == before
    assert [task.id for task in tasks] == ["k2", "k1"]
