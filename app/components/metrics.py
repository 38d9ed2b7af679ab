from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from config import THEME


@dataclass(frozen=True)
class Kpi:
    label: str
    value: str
    tone: str = ""  # "female" | "male" | "accent" | ""
    help: Optional[str] = None


def render_kpi_row(kpis: list[Kpi]) -> None:
    cols = st.columns(len(kpis))
    for c, k in zip(cols, kpis):
        with c:
            help_html = f'<div class="metric-help">{escape(k.help)}</div>' if k.help else ""
            st.markdown(
                f"""
<div class="metric-card {k.tone}">
  <div class="metric-label">{escape(k.label)}</div>
  <div class="metric-value">{escape(k.value)}</div>
  {help_html}
</div>
                """,
                unsafe_allow_html=True,
            )


def fmt_count(v: Optional[int]) -> str:
    return "—" if v is None else f"{v:,}"


def fmt_balance(v: Optional[float]) -> str:
    return "N/A" if v is None else f"{v:.2f}"


def create_plotly_theme() -> dict:
    return {
        "font_family": "DM Sans, system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif",
        "font_color": THEME["text_primary"],
        "paper_bgcolor": THEME["bg_card"],
        "plot_bgcolor": THEME["bg_card"],
        "colorway": [THEME["female"], THEME["male"], THEME["accent_primary"], THEME["unknown"]],
        "gridcolor": THEME["grid"],
        "axis_linecolor": THEME["border_color"],
        "legend": {
            "orientation": "h",
            "yanchor": "bottom",
            "y": 1.02,
            "xanchor": "left",
            "x": 0,
            "font": {"color": THEME["text_secondary"]},
        },
        "title_font": {"color": THEME["navy_900"], "size": 16},
    }


def apply_plotly_theme(fig: go.Figure, x_title: str, y_title: str) -> go.Figure:
    theme = create_plotly_theme()
    fig.update_layout(
        margin=dict(l=10, r=10, t=44, b=10),
        font=dict(family=theme["font_family"], color=theme["font_color"]),
        paper_bgcolor=theme["paper_bgcolor"],
        plot_bgcolor=theme["plot_bgcolor"],
        colorway=theme["colorway"],
        legend=theme["legend"],
        title_font=theme["title_font"],
    )
    fig.update_xaxes(
        title_text=x_title,
        gridcolor=theme["gridcolor"],
        zeroline=False,
        linecolor=theme["axis_linecolor"],
        tickfont=dict(color=THEME["text_secondary"]),
        title_font=dict(color=THEME["text_secondary"]),
    )
    fig.update_yaxes(
        title_text=y_title,
        gridcolor=theme["gridcolor"],
        zeroline=False,
        linecolor=theme["axis_linecolor"],
        tickfont=dict(color=THEME["text_secondary"]),
        title_font=dict(color=THEME["text_secondary"]),
        separatethousands=True,
    )
    return fig


def build_trend_figure(df: pd.DataFrame, title: str = "Popularity trend over time") -> go.Figure:
    """
    Female and male yearly counts as filled areas, with a range slider for
    zooming into a time window. Ticks land on decades.
    """
    fig = go.Figure()
    for col, label, color in (
        ("female_count", "Girls", THEME["female"]),
        ("male_count", "Boys", THEME["male"]),
    ):
        fig.add_trace(
            go.Scatter(
                x=df["year"],
                y=df[col],
                name=label,
                mode="lines",
                line=dict(color=color, width=2),
                fill="tozeroy",
                hovertemplate="%{x}: %{y:,}<extra>" + label + "</extra>",
            )
        )
    fig.update_layout(title=title, hovermode="x unified", height=420)
    fig = apply_plotly_theme(fig, x_title="Year", y_title="Count")
    fig.update_xaxes(dtick=10, rangeslider=dict(visible=len(df) > 1))
    return fig


def build_country_figure(df: pd.DataFrame, title: str = "Distribution by country") -> go.Figure:
    long = df.melt(
        id_vars=["country_name"],
        value_vars=["female_count", "male_count"],
        var_name="series",
        value_name="count",
    )
    long["series"] = long["series"].map({"female_count": "Girls", "male_count": "Boys"})
    fig = px.bar(
        long,
        x="country_name",
        y="count",
        color="series",
        barmode="stack",
        title=title,
        color_discrete_map={"Girls": THEME["female"], "Boys": THEME["male"]},
    )
    return apply_plotly_theme(fig, x_title="Country", y_title="Count")


def plot(fig: go.Figure) -> None:
    st.plotly_chart(fig, use_container_width=True)
