from __future__ import annotations

from typing import Optional

import streamlit as st

from components.filters import render_countries_filter, render_year_range
from components.metrics import (
    Kpi,
    build_country_figure,
    build_trend_figure,
    fmt_balance,
    fmt_count,
    plot,
    render_kpi_row,
)
from components.narrative import render_empty_state, render_page_intro
from config import AppConfig
from data.filters import NameTrendParams
from data.models import NameTrendResponse, by_country_to_frame, time_series_to_frame
from data.service import use_countries, use_meta_years, use_name_trend
from navigation import ROUTES, navigate


def _render_summary(data: NameTrendResponse) -> None:
    s = data.summary
    st.subheader("Statistics")
    render_kpi_row(
        [
            Kpi("Total count", fmt_count(s.total_count), tone="accent"),
            Kpi("Female count", fmt_count(s.female_count), tone="female"),
            Kpi("Male count", fmt_count(s.male_count), tone="male"),
            Kpi("Gender balance", fmt_balance(s.gender_balance), tone="accent", help="0 = all female, 100 = all male"),
        ]
    )
    countries = ", ".join(s.countries) if s.countries else "—"
    st.caption(f"**Years:** {s.name_start} – {s.name_end} · **Countries:** {countries}")
    if s.has_unknown_data:
        st.caption(f"Includes {s.unknown_count:,} registrations with unknown sex.")


def _render_trend(data: NameTrendResponse) -> None:
    st.subheader("Trends over time")
    df = time_series_to_frame(data.time_series)
    if df.empty:
        render_empty_state("No yearly data recorded for this name.", icon="📉")
    else:
        plot(build_trend_figure(df))
    st.caption(f"Data available for {len(df)} years")


def _render_by_country(data: NameTrendResponse) -> None:
    st.subheader("Distribution by country")
    df = by_country_to_frame(data.by_country)
    if df.empty:
        render_empty_state("No country breakdown available.", icon="🌍")
    else:
        plot(build_country_figure(df))
        with st.expander("Show underlying data"):
            st.dataframe(df, hide_index=True, use_container_width=True)
    st.caption(f"Data available for {len(df)} countries")


def _trend_params(cfg: AppConfig, use_mock: bool, name: str) -> NameTrendParams:
    years = use_meta_years(cfg, use_mock)
    countries = use_countries(cfg, use_mock)
    with st.expander("Filter this name", expanded=False):
        selected = render_countries_filter(countries.data.countries, []) if countries.data else []
        window = render_year_range(years.data) if years.data else None
    year_min = year_max = None
    if window and years.data and window != (years.data.min_year, years.data.max_year):
        year_min, year_max = window
    return NameTrendParams(name=name, countries=tuple(selected), year_min=year_min, year_max=year_max)


def render(cfg: AppConfig, use_mock: bool, name: Optional[str]) -> None:
    if st.button("← Back to names"):
        navigate(ROUTES["names"])

    render_page_intro(name or "Name details", "Name statistics and trends")

    params = _trend_params(cfg, use_mock, name or "")
    with st.spinner("Loading name data…"):
        result = use_name_trend(cfg, use_mock, params)

    if result.is_error:
        st.error(f"Could not load this name. {result.error}")
        return

    data = result.data
    if data is None:
        render_empty_state("No data available for this name.")
        return

    _render_summary(data)
    st.divider()
    _render_trend(data)
    st.divider()
    _render_by_country(data)
