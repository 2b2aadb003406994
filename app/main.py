"""Cognita dashboard with responsive card layout."""

from __future__ import annotations

import logging

import pandas as pd
import streamlit as st

from app.layout import inject_css
from app.pages import render_overview_page
from config import configure_logging, get_settings
from core import CognitaError, DashboardSnapshot, build_dashboard_summary, load_snapshot

logger = logging.getLogger(__name__)


@st.cache_data(show_spinner=False)
def _load_snapshot(data_path: str, user_id: str | None) -> DashboardSnapshot:
    """Load and cache the snapshot stored at ``data_path``."""

    return load_snapshot(data_path, user_id)


def main() -> None:
    """Application entrypoint for the Cognita dashboard."""

    st.set_page_config(
        page_title="Cognita | Dashboard",
        page_icon="📚",
        layout="wide",
        initial_sidebar_state="collapsed",
    )
    settings = get_settings()
    configure_logging(settings.log_level)
    inject_css()

    try:
        snapshot = _load_snapshot(str(settings.data_path), settings.user_id)
    except FileNotFoundError:
        st.error(f"No data export found at {settings.data_path}.")
        st.caption("Run `python -m data.synth` to generate a sample export.")
        return
    except CognitaError as exc:
        logger.exception("Failed to load dashboard data")
        st.error(f"Dashboard data could not be loaded: {exc}")
        return

    now = pd.Timestamp.now(tz=settings.timezone)
    summary = build_dashboard_summary(snapshot, now, settings)
    render_overview_page(summary)


if __name__ == "__main__":
    main()
