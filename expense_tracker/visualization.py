"""Plotly visualisation helpers for the expense tracker.

Functions here accept monthly summaries or breakdowns produced by
:mod:`expense_tracker.ledger` and return ``plotly.graph_objects.Figure``
instances that Streamlit renders via ``st.plotly_chart``.
"""

from __future__ import annotations

from typing import Dict, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from . import config
from .dates import display_day
from .ledger import MonthlySummary

SUMMARY_COLUMNS = ["date", "income", "bills", "food", "other", "totalExpenses", "savings"]


def _empty_figure(title: str = "No data to display") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def summaries_to_frame(summaries: Sequence[MonthlySummary]) -> pd.DataFrame:
    """Flatten summaries into a DataFrame, one row per summary."""
    if not summaries:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    rows = [summary.to_dict() for summary in summaries]
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def create_summary_line_chart(summaries: Sequence[MonthlySummary], title: str | None = None) -> go.Figure:
    """Plot income, total expenses and savings against the summary date.

    Parameters
    ----------
    summaries : sequence of MonthlySummary
        Summaries of the selected month, in recorded order.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        One line per series, x ticks rendered as short dates.
    """
    df = summaries_to_frame(summaries)
    if df.empty:
        return _empty_figure()
    fig = go.Figure()
    for series, colour in config.SERIES_COLORS.items():
        fig.add_trace(
            go.Scatter(
                x=df["date"],
                y=df[series],
                mode="lines+markers",
                name=series,
                line=dict(color=colour, shape="spline"),
            )
        )
    fig.update_xaxes(
        tickmode="array",
        tickvals=list(df["date"]),
        ticktext=[display_day(value) for value in df["date"]],
        showgrid=True,
        griddash="dash",
    )
    fig.update_yaxes(showgrid=True, griddash="dash")
    fig.update_layout(
        title=title or "Summary chart",
        xaxis_title="Date",
        yaxis_title="Amount",
        legend_title_text="",
    )
    return fig


def create_breakdown_bar_chart(breakdown: Dict[str, Dict[str, float]], title: str | None = None) -> go.Figure:
    """Render category totals from :func:`ledger.category_breakdown` as bars."""
    if not breakdown:
        return _empty_figure()
    df = pd.DataFrame(
        [
            {"Category": name.title(), "Total": entry["total"], "Entries": entry["count"]}
            for name, entry in breakdown.items()
        ]
    )
    fig = px.bar(df, x="Category", y="Total", hover_data=["Entries"])
    fig.update_layout(
        title=title or "Category breakdown",
        xaxis_title="Category",
        yaxis_title="Total",
    )
    return fig
