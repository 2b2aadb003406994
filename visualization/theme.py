"""Colour and typography tokens shared by the dashboard charts."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ThemeTokens:
    time_format: str = "%a %d %b"
    label_font: str = "Inter, sans-serif"
    brand_blue: str = "#1D4ED8"
    mood_color: str = "#8B5CF6"
    energy_color: str = "#10B981"
    stress_color: str = "#F97316"
    neutral_grey: str = "#64748B"
    neutral_white: str = "#FFFFFF"
    neutral_background: str = "rgba(100, 116, 139, 0.18)"
    category_palette: tuple[str, ...] = (
        "#1D4ED8",
        "#0EA5E9",
        "#14B8A6",
        "#F59E0B",
        "#EC4899",
    )


_TOKENS = ThemeTokens()


def theme_tokens() -> ThemeTokens:
    """Return the tokens used for the study, mood and breakdown charts."""

    return _TOKENS
