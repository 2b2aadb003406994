"""Plotly chart builders for the Cognita dashboard."""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from core.models import BreakdownRow, MoodPoint, SeriesPoint

from .theme import theme_tokens

TOKENS = theme_tokens()

_FRAME = dict(
    margin=dict(l=0, r=0, t=20, b=0),
    plot_bgcolor="rgba(0,0,0,0)",
    paper_bgcolor="rgba(0,0,0,0)",
)

__all__ = [
    "build_study_chart",
    "build_mood_chart",
    "build_breakdown_chart",
]


def _empty_plotly_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        annotations=[
            dict(
                text=message,
                x=0.5,
                y=0.5,
                xref="paper",
                yref="paper",
                showarrow=False,
                font=dict(color=TOKENS.neutral_grey, size=14, family=TOKENS.label_font),
            )
        ],
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        **_FRAME,
    )
    return fig


def _series_frame(series: Sequence[SeriesPoint]) -> pd.DataFrame:
    frame = pd.DataFrame(list(series), columns=["day", "label", "value"])
    frame["day"] = pd.to_datetime(frame["day"])
    return frame


def build_study_chart(series: Sequence[SeriesPoint]) -> go.Figure:
    """Render minutes studied per day as a bar chart."""

    frame = _series_frame(series)
    if frame.empty or not (frame["value"] > 0).any():
        return _empty_plotly_figure("No study sessions in the last week.")

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=frame["label"],
            y=frame["value"],
            name="Minutes",
            marker=dict(color=TOKENS.brand_blue, line=dict(color=TOKENS.neutral_white, width=1)),
            text=[f"{int(value)}m" if value > 0 else "" for value in frame["value"]],
            textposition="inside",
            customdata=frame["day"].dt.strftime(TOKENS.time_format),
            hovertemplate="%{customdata}<br>%{y:,.0f} min<extra></extra>",
        )
    )

    fig.update_layout(
        title="",
        xaxis_title="",
        yaxis_title="Minutes",
        bargap=0.3,
        xaxis=dict(showgrid=False, categoryorder="array", categoryarray=frame["label"].tolist()),
        yaxis=dict(showgrid=True, gridcolor=TOKENS.neutral_background, zeroline=False),
        **_FRAME,
    )
    return fig


def build_mood_chart(series: Sequence[MoodPoint], scale: int = 5) -> go.Figure:
    """Render mood, energy and stress lines on a shared 0-5 axis."""

    frame = pd.DataFrame(list(series), columns=["day", "label", "mood", "energy", "stress"])
    if frame.empty or not (frame[["mood", "energy", "stress"]] > 0).any().any():
        return _empty_plotly_figure("No mood entries in the last week.")

    frame["day"] = pd.to_datetime(frame["day"])
    hover_template = f"%{{x|{TOKENS.time_format}}}<br>%{{y}}/{scale}<extra></extra>"

    fig = go.Figure()
    for column, label, color in (
        ("mood", "Mood", TOKENS.mood_color),
        ("energy", "Energy", TOKENS.energy_color),
        ("stress", "Stress", TOKENS.stress_color),
    ):
        fig.add_trace(
            go.Scatter(
                x=frame["day"],
                y=frame[column],
                mode="lines+markers",
                name=label,
                line=dict(color=color, width=3, shape="spline", smoothing=0.45),
                marker=dict(size=7, color=color, line=dict(color=TOKENS.neutral_white, width=1.5)),
                hovertemplate=hover_template,
            )
        )

    fig.update_layout(
        title="",
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1.0),
        xaxis=dict(showgrid=False, tickformat="%a"),
        yaxis=dict(range=[0, scale + 0.5], showgrid=True, gridcolor=TOKENS.neutral_background, zeroline=False),
        **_FRAME,
    )
    return fig


def build_breakdown_chart(
    rows: Sequence[BreakdownRow],
    *,
    value_label: str = "Amount",
    value_prefix: str = "",
    value_suffix: str = "",
    empty_message: str = "No data yet.",
) -> go.Figure:
    """Render a top-N breakdown as horizontal bars with each row's share."""

    if not rows:
        return _empty_plotly_figure(empty_message)

    data = pd.DataFrame(list(rows), columns=["label", "amount", "percent_of_top"])
    data["formatted_amount"] = data["amount"].map(lambda x: f"{value_prefix}{x:,.2f}{value_suffix}")
    data["formatted_share"] = data["percent_of_top"].map(lambda x: f"{x:.1f}%")

    palette = list(TOKENS.category_palette)
    repeats = (len(data) // len(palette)) + 1
    color_sequence = (palette * repeats)[: len(data)]

    fig = px.bar(
        data,
        x="amount",
        y="label",
        orientation="h",
        text="formatted_amount",
        color="label",
        color_discrete_sequence=color_sequence,
    )

    fig.update_traces(
        hovertemplate="%{y}<br>%{text}<br>Share: %{customdata[0]}<extra></extra>",
        textposition="outside",
        cliponaxis=False,
    )
    for trace, share in zip(fig.data, data["formatted_share"]):
        trace.customdata = [[share]]

    fig.update_layout(
        margin=dict(l=0, r=10, t=20, b=0),
        xaxis=dict(title=value_label, showgrid=False, zeroline=False),
        yaxis=dict(title="", automargin=True, categoryorder="array", categoryarray=data["label"].tolist()[::-1]),
        bargap=0.35,
        showlegend=False,
        height=240,
    )
    return fig
