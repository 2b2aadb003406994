"""Page modules for the Cognita Streamlit application."""

from .overview import render_page as render_overview_page

__all__ = [
    "render_overview_page",
]
