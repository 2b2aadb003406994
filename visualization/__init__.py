"""Visualization utilities for Cognita dashboards."""

from .charts import build_breakdown_chart, build_mood_chart, build_study_chart
from .theme import theme_tokens

__all__ = [
    "build_breakdown_chart",
    "build_mood_chart",
    "build_study_chart",
    "theme_tokens",
]
