"""
Plotly chart builders for the dashboard.
"""
import logging
from typing import List

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from src.utils.formatting import format_number, shorten_number

logger = logging.getLogger(__name__)

SERIES_COLORS = {
    "cases": "#FF00CA",
    "deaths": "#B400FF",
}
GRID_COLOR = "rgba(242, 242, 242, .1)"
TEXT_COLOR = "#fff"


def _base_layout(**kwargs):
    defaults = dict(
        template="plotly_dark",
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color=TEXT_COLOR),
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="center", x=0.5),
        margin=dict(t=70, b=60, l=60, r=0),
    )
    defaults.update(kwargs)
    return defaults


def axis_ticks(max_value: float, target: int = 5) -> List[float]:
    """Evenly spaced 'nice' tick values from 0 up to at least max_value."""
    if not np.isfinite(max_value) or max_value <= 0:
        return [0]

    raw_step = max_value / target
    magnitude = 10 ** np.floor(np.log10(raw_step))
    for multiple in (1, 2, 2.5, 5, 10):
        step = multiple * magnitude
        if max_value / step <= target:
            break

    top = np.ceil(max_value / step) * step
    return np.arange(0, top + step / 2, step).tolist()


def monthly_bar_chart(monthly: pd.DataFrame) -> go.Figure:
    """
    Grouped bar chart of monthly cases and deaths.

    Args:
        monthly: Aggregated frame with columns date, cases, deaths

    Returns:
        Figure with one bar trace per series, categories in row order
    """
    fig = go.Figure()
    months = monthly["date"].tolist()

    for column in ("cases", "deaths"):
        values = monthly[column].tolist()
        fig.add_trace(go.Bar(
            x=months,
            y=values,
            name=column,
            marker_color=SERIES_COLORS[column],
            customdata=[format_number(v) for v in values],
            hovertemplate="<b>%{fullData.name}</b> : %{customdata}<extra></extra>",
        ))

    if len(monthly) > 0:
        peak = float(pd.to_numeric(monthly[["cases", "deaths"]].stack(), errors="coerce").max())
    else:
        peak = 0.0
    ticks = axis_ticks(peak)

    fig.update_layout(**_base_layout(
        barmode="group",
        height=400,
        xaxis=dict(
            title=dict(text="Months"),
            type="category",
            categoryorder="array",
            categoryarray=months,
            gridcolor=GRID_COLOR,
        ),
        yaxis=dict(
            title=dict(text="Total"),
            tickmode="array",
            tickvals=ticks,
            ticktext=[shorten_number(v) or "" for v in ticks],
            gridcolor=GRID_COLOR,
        ),
    ))

    logger.debug(f"Built monthly bar chart with {len(months)} months")
    return fig
