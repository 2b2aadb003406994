"""Synthetic Cognita export generator.

Produces a student-style JSON export (study sessions, habits, finances, mood
entries and tasks) for development and demos. The layout matches what
:func:`core.data_loader.load_export` reads.
"""

from __future__ import annotations

import argparse
import json
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Optional, Sequence, Tuple, TypeVar

import numpy as np

T = TypeVar("T")

DEFAULT_USER_ID = "local-user"
DEFAULT_OUTPUT = Path(__file__).resolve().parent / "seed.json"

SUBJECTS: Tuple[str, ...] = ("Mathematics", "Physics", "History", "Literature", "Chemistry", "Spanish")

EXPENSE_CATEGORIES: Tuple[Tuple[str, float, float], ...] = (
    ("Food", 12.0, 4.0),
    ("Transport", 6.5, 2.5),
    ("Books", 24.0, 8.0),
    ("Entertainment", 15.0, 6.0),
    ("Other", 9.0, 4.0),
)

INCOME_CATEGORIES: Tuple[str, ...] = ("Allowance", "Part-time Job", "Scholarship", "Gift")


@dataclass(frozen=True)
class HabitProfile:
    """A habit and how reliably the synthetic user keeps it."""

    name: str
    color: str
    adherence: float
    target_frequency: str = "daily"
    description: str = ""


HABITS: Sequence[HabitProfile] = (
    HabitProfile("Morning review", "#3b82f6", 0.8, description="Skim yesterday's notes"),
    HabitProfile("Exercise", "#10b981", 0.55),
    HabitProfile("Read 20 pages", "#f59e0b", 0.65),
    HabitProfile("Flashcards", "#8b5cf6", 0.7),
    HabitProfile("Weekly planning", "#ec4899", 0.9, target_frequency="weekly"),
)

TASK_TITLES: Tuple[str, ...] = (
    "Problem set 4",
    "Lab report draft",
    "Essay outline",
    "Revise chapter 7",
    "Group project sync",
    "Vocabulary quiz prep",
    "Submit scholarship form",
    "Past paper practice",
)


def _rng_choice(options: Sequence[T], rng: np.random.Generator) -> T:
    if not options:
        raise ValueError("Cannot choose from an empty sequence")
    idx = int(rng.integers(0, len(options)))
    return options[idx]


def _at(day: date, hour: int, minute: int = 0) -> str:
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=timezone.utc).isoformat()


def generate_export(
    end_date: date | None = None,
    days: int = 30,
    *,
    user_id: str = DEFAULT_USER_ID,
    seed: Optional[int] = None,
) -> dict[str, Any]:
    """Generate ``days`` days of activity ending on ``end_date`` (today by default)."""

    rng = np.random.default_rng(seed)
    end = end_date or date.today()
    window = [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]

    sessions: list[dict[str, Any]] = []
    finances: list[dict[str, Any]] = []
    moods: list[dict[str, Any]] = []
    completions: list[dict[str, Any]] = []

    habits = [
        {
            "id": f"habit-{index}",
            "name": profile.name,
            "description": profile.description or None,
            "target_frequency": profile.target_frequency,
            "color": profile.color,
            "is_active": True,
        }
        for index, profile in enumerate(HABITS, start=1)
    ]

    for day in window:
        for _ in range(int(rng.integers(0, 4))):
            sessions.append(
                {
                    "id": f"session-{len(sessions) + 1}",
                    "subject": _rng_choice(SUBJECTS, rng),
                    "duration_minutes": int(rng.choice([25, 25, 50, 45, 60, 90])),
                    "notes": None,
                    "session_date": _at(day, int(rng.integers(8, 22)), int(rng.integers(0, 60))),
                }
            )

        for habit, profile in zip(habits, HABITS):
            due = profile.target_frequency == "daily" or day.weekday() == 6
            if due and rng.random() < profile.adherence:
                completions.append({"habit_id": habit["id"], "completion_date": day.isoformat()})

        for category, mean, spread in EXPENSE_CATEGORIES:
            if rng.random() < 0.35:
                finances.append(
                    {
                        "id": f"txn-{len(finances) + 1}",
                        "type": "expense",
                        "amount": round(float(abs(rng.normal(mean, spread))), 2),
                        "category": category,
                        "description": f"{category} purchase",
                        "transaction_date": _at(day, int(rng.integers(7, 23))),
                    }
                )

        if day.day in (1, 15):
            finances.append(
                {
                    "id": f"txn-{len(finances) + 1}",
                    "type": "income",
                    "amount": round(float(rng.normal(400, 40)), 2),
                    "category": _rng_choice(INCOME_CATEGORIES, rng),
                    "description": "Payment received",
                    "transaction_date": _at(day, 9),
                }
            )

        if rng.random() < 0.8:
            stress = int(np.clip(round(rng.normal(3, 1)), 1, 5))
            moods.append(
                {
                    "id": f"mood-{len(moods) + 1}",
                    "mood_rating": int(np.clip(round(rng.normal(3.6, 0.9)), 1, 5)),
                    "energy_level": int(np.clip(round(rng.normal(3.2, 1)), 1, 5)),
                    "stress_level": stress,
                    "notes": None,
                    "entry_date": day.isoformat(),
                }
            )

    tasks: list[dict[str, Any]] = []
    for index, title in enumerate(TASK_TITLES, start=1):
        due_day = end + timedelta(days=int(rng.integers(-3, 10)))
        completed = rng.random() < 0.35
        tasks.append(
            {
                "id": f"task-{index}",
                "title": title,
                "description": None,
                "due_date": _at(due_day, 23, 59),
                "priority": _rng_choice(("low", "medium", "high"), rng),
                "status": "completed" if completed else _rng_choice(("pending", "in_progress"), rng),
                "estimated_minutes": int(rng.choice([30, 60, 90, 120])),
                "completed_at": _at(end, 12) if completed else None,
                "created_at": _at(end - timedelta(days=int(rng.integers(1, days))), 10),
            }
        )

    return {
        "user_id": user_id,
        "study_sessions": sessions,
        "habits": habits,
        "habit_completions": completions,
        "finances": finances,
        "mood_entries": moods,
        "tasks": tasks,
    }


def write_export(path: str | Path = DEFAULT_OUTPUT, *, seed: Optional[int] = None, **kwargs: Any) -> dict[str, Any]:
    """Generate synthetic data and persist it to ``path``.

    Additional keyword arguments are forwarded to :func:`generate_export`.
    """

    export = generate_export(seed=seed, **kwargs)
    Path(path).write_text(json.dumps(export, indent=2), encoding="utf-8")
    return export


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Write a synthetic Cognita export.")
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT)
    parser.add_argument("--days", type=int, default=30)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    write_export(args.output, seed=args.seed, days=args.days)


if __name__ == "__main__":
    main()
