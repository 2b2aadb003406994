"""Centralised configuration handling for Cognita."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import streamlit as st
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TIMEZONE = "UTC"
DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "seed.json"

_SECRET_FIELDS = (
    "timezone",
    "upcoming_horizon_days",
    "series_days",
    "top_n",
    "data_path",
    "user_id",
    "log_level",
)


def _streamlit_section(name: str) -> Mapping[str, Any] | None:
    """Return a mapping from Streamlit secrets for the given section."""

    try:
        if hasattr(st, "secrets") and name in st.secrets:
            section = st.secrets[name]
            if isinstance(section, Mapping):
                return section
            return dict(section)
    except Exception:  # pragma: no cover - accessing secrets may fail in tests
        return None
    return None


class Settings(BaseSettings):
    """Application settings sourced from env vars and Streamlit secrets."""

    timezone: str = DEFAULT_TIMEZONE
    upcoming_horizon_days: int = 3
    series_days: int = 7
    top_n: int = 5
    data_path: Path = DEFAULT_DATA_PATH
    user_id: str | None = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="COGNITA_", extra="ignore")

    @field_validator("upcoming_horizon_days", "series_days", "top_n")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must be zero or greater")
        return value

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown time zone {value!r}") from exc
        return value


@lru_cache
def get_settings() -> Settings:
    """Load and cache application settings."""

    overrides: dict[str, Any] = {}
    secrets_section = _streamlit_section("cognita")
    if secrets_section:
        overrides = {key: secrets_section.get(key) for key in _SECRET_FIELDS}

    return Settings(**{k: v for k, v in overrides.items() if v is not None})
