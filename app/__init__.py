"""Streamlit application package for Cognita."""

from .main import main

__all__ = ["main"]
