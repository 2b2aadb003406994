"""Shared layout primitives for the Cognita Streamlit app."""

from __future__ import annotations

from contextlib import contextmanager
from html import escape

import streamlit as st

PRIORITY_CLASSES = {
    "high": "cg-chip--high",
    "medium": "cg-chip--medium",
    "low": "cg-chip--low",
}

_CSS = """
<style>
  :root {
    --cg-gap: 18px;
    --cg-radius: 14px;
    --cg-surface: #FFFFFF;
    --cg-page: #F5F7FB;
    --cg-outline: #E2E8F0;
    --cg-ink: #0F172A;
    --cg-muted: #64748B;
    --cg-lift: 0 1px 3px rgba(15, 23, 42, 0.08);
  }

  [data-testid="stAppViewContainer"] > .main {
    background: var(--cg-page);
  }

  .block-container {
    max-width: 1240px;
    padding: 1.5rem 1rem 3rem;
  }

  .cg-hero {
    border-radius: var(--cg-radius);
    padding: 22px 26px;
    margin-bottom: var(--cg-gap);
    background: linear-gradient(120deg, #1D4ED8 0%, #6D28D9 100%);
    color: #F8FAFC;
  }

  .cg-hero h1 {
    color: #F8FAFC;
    font-size: 1.9rem;
    margin: 0 0 6px;
  }

  [data-testid="stMetric"] {
    background: var(--cg-surface);
    border: 1px solid var(--cg-outline);
    border-radius: var(--cg-radius);
    box-shadow: var(--cg-lift);
    padding: 14px 18px;
  }

  [data-testid="stMetricLabel"] {
    color: var(--cg-muted);
  }

  .cg-card-anchor {
    display: none;
  }

  [data-testid="stVerticalBlock"]:has(> .cg-card-anchor) {
    background: var(--cg-surface);
    border: 1px solid var(--cg-outline);
    border-radius: var(--cg-radius);
    box-shadow: var(--cg-lift);
    padding: 18px;
    margin-bottom: var(--cg-gap);
    gap: 10px;
  }

  .cg-card__head {
    display: flex;
    justify-content: space-between;
    align-items: baseline;
    color: var(--cg-ink);
    font-weight: 600;
  }

  .cg-chip {
    border-radius: 999px;
    padding: 1px 9px;
    font-size: 0.75rem;
    background: #EEF2FF;
    color: #4338CA;
    text-transform: capitalize;
  }

  .cg-chip--high { background: #FEE2E2; color: #B91C1C; }
  .cg-chip--medium { background: #FEF3C7; color: #B45309; }
  .cg-chip--low { background: #DCFCE7; color: #15803D; }

  .cg-deadline {
    display: flex;
    justify-content: space-between;
    align-items: center;
    border-left: 3px solid #6D28D9;
    background: #F8FAFC;
    border-radius: 6px;
    padding: 8px 12px;
    margin-bottom: 6px;
  }

  .cg-deadline span {
    color: var(--cg-muted);
    font-size: 0.85rem;
  }

  .cg-habit {
    display: flex;
    flex-wrap: wrap;
    align-items: center;
    gap: 8px;
  }

  .cg-habit__strip {
    display: flex;
    gap: 4px;
    margin-left: auto;
  }

  .cg-day {
    width: 22px;
    height: 22px;
    border-radius: 50%;
    background: #E2E8F0;
    color: var(--cg-muted);
    font-size: 0.7rem;
    text-align: center;
    line-height: 22px;
  }

  .cg-day--done {
    background: var(--cg-habit, #1D4ED8);
    color: #FFFFFF;
  }

  .cg-highlights {
    margin: 0;
    padding-left: 1.2rem;
    color: #334155;
    line-height: 1.7;
  }

  .cg-highlights strong {
    color: var(--cg-ink);
  }
</style>
"""


def inject_css() -> None:
    """Inject card, metric and deadline styling into the Streamlit app."""

    st.markdown(_CSS, unsafe_allow_html=True)


def chip(text: str, variant: str | None = None) -> str:
    """Return a pill label, coloured by task priority when ``variant`` names one."""

    modifier = PRIORITY_CLASSES.get(variant or "", "")
    return f"<span class='cg-chip {modifier}'>{escape(text)}</span>"


@contextmanager
def card(title: str, suffix: str | None = None):
    """Render the block's content inside a Cognita card."""

    with st.container():
        st.markdown('<div class="cg-card-anchor"></div>', unsafe_allow_html=True)
        st.markdown(
            f'<div class="cg-card__head"><span>{escape(title)}</span>'
            f'{chip(suffix) if suffix else ""}</div>',
            unsafe_allow_html=True,
        )
        yield
