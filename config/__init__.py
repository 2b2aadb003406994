"""Application configuration utilities."""

from .logging_config import configure_logging
from .settings import DEFAULT_DATA_PATH, DEFAULT_TIMEZONE, Settings, get_settings

__all__ = [
    "DEFAULT_DATA_PATH",
    "DEFAULT_TIMEZONE",
    "Settings",
    "configure_logging",
    "get_settings",
]
