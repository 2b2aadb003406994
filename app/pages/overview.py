"""Overview dashboard page layout."""

from __future__ import annotations

from html import escape

import pandas as pd
import streamlit as st

from app.layout import card, chip
from core import DashboardSummary, HabitStatus, Task
from core.formatting import build_highlights, format_currency, format_minutes, format_rating
from visualization import build_breakdown_chart, build_mood_chart, build_study_chart

MAX_DEADLINES = 5


def _render_metric_cards(summary: DashboardSummary) -> None:
    habits = summary["habit_completion"]
    finance = summary["finance"]
    tasks = summary["task_completion"]
    mood = summary["today_mood"]

    row_one = st.columns(3, gap="medium")
    row_one[0].metric("Study time today", format_minutes(summary["today_study_minutes"]))
    row_one[0].caption(
        f"{format_minutes(summary['total_study_minutes'])} across "
        f"{summary['study_session_count']} sessions"
    )
    row_one[1].metric("Habits today", f"{habits['rate_percent']}%")
    row_one[1].caption(f"{habits['completed_count']} of {habits['active_count']} completed")
    row_one[2].metric("Balance", format_currency(finance["balance"]))
    row_one[2].caption(f"{format_currency(finance['weekly_expense'])} spent this week")

    row_two = st.columns(3, gap="medium")
    if mood is not None:
        row_two[0].metric("Today's mood", format_rating(mood.mood_rating))
        row_two[0].caption(
            f"Energy: {format_rating(mood.energy_level)}, Stress: {format_rating(mood.stress_level)}, "
            f"Average: {summary['average_mood']}/5"
        )
    else:
        row_two[0].metric("Today's mood", "Not logged")
        row_two[0].caption(f"Log your mood today. Average: {summary['average_mood']}/5")
    row_two[1].metric("Task progress", f"{tasks['rate_percent']}%")
    row_two[1].caption(f"{tasks['completed']} of {tasks['total']} completed")
    row_two[2].metric("Upcoming tasks", len(summary["upcoming_tasks"]))
    row_two[2].caption("Due in the next few days")


def _render_habits(habits: list[HabitStatus]) -> None:
    for habit in habits:
        cells = []
        for day in habit["history"]:
            state = "cg-day cg-day--done" if day["completed"] else "cg-day"
            cells.append(
                f"<span class='{state}' title='{day['day']:%d %b}'>{day['label'][:1]}</span>"
            )
        strip = "".join(cells)
        status = chip("done today", "low") if habit["completed_today"] else ""
        st.markdown(
            f"<div class='cg-habit' style='--cg-habit: {escape(habit['color'])}'>"
            f"<strong>{escape(habit['name'])}</strong>{status}"
            f"<div class='cg-habit__strip'>{strip}</div></div>",
            unsafe_allow_html=True,
        )
        st.progress(habit["progress_percent"], text=f"{habit['progress_percent']}% of the last 30 days")


def _render_deadlines(tasks: list[Task]) -> None:
    for task in tasks[:MAX_DEADLINES]:
        due_label = f"{pd.Timestamp(task.due_date):%d %b %Y}" if task.due_date else "TBC"
        st.markdown(
            f"<div class='cg-deadline'><div><strong>{escape(task.title)}</strong>"
            f"<br><span>Due {due_label}</span></div>"
            f"{chip(task.priority, task.priority)}</div>",
            unsafe_allow_html=True,
        )


def _render_dashboard(summary: DashboardSummary) -> None:
    _render_metric_cards(summary)

    left, right = st.columns(2, gap="medium")
    with left:
        with card("Study activity", suffix="Last 7 days"):
            st.plotly_chart(build_study_chart(summary["study_series"]), use_container_width=True)
    with right:
        with card("Mood trends", suffix="Last 7 days"):
            st.plotly_chart(build_mood_chart(summary["mood_series"]), use_container_width=True)

    left, right = st.columns(2, gap="medium")
    with left:
        with card("Spending by category"):
            chart = build_breakdown_chart(
                summary["top_expense_categories"],
                value_label="Spend",
                value_prefix="$",
                empty_message="No expense data yet",
            )
            st.plotly_chart(chart, use_container_width=True, key="category-breakdown")
    with right:
        with card("Study time by subject"):
            chart = build_breakdown_chart(
                summary["top_subjects"],
                value_label="Minutes",
                value_suffix=" min",
                empty_message="No study data yet",
            )
            st.plotly_chart(chart, use_container_width=True, key="subject-breakdown")

    if summary["habits"]:
        with card("Habits", suffix="Last 7 days"):
            _render_habits(summary["habits"])

    if summary["upcoming_tasks"]:
        with card("Upcoming deadlines"):
            _render_deadlines(summary["upcoming_tasks"])

    with card("Highlights"):
        items = "".join(f"<li>{item}</li>" for item in build_highlights(summary))
        st.markdown(f"<ul class='cg-highlights'>{items}</ul>", unsafe_allow_html=True)


def render_page(summary: DashboardSummary) -> None:
    """Render the overview dashboard page."""

    st.markdown(
        "<div class='cg-hero'><h1>Welcome back!</h1>"
        "<span>Here's your progress overview for today</span></div>",
        unsafe_allow_html=True,
    )
    _render_dashboard(summary)
    st.caption(f"Figures as of {summary['reference_day']:%d %b %Y}")


__all__ = ["render_page"]
