from __future__ import annotations

from typing import Optional

import streamlit as st

from components.filters import (
    render_countries_filter,
    render_gender_balance_slider,
    render_page_size,
    render_popularity_trio,
    render_search,
    render_sort_controls,
    render_year_range,
)
from components.narrative import render_empty_state, render_page_intro, render_status_banner
from config import AppConfig
from data.filters import NamesFilterParams
from data.models import NamesListResponse, YearRange, names_to_frame
from data.popularity import PopularityFilter
from data.query_cache import QueryResult
from data.service import peek_names, use_countries, use_meta_years, use_names
from navigation import build_name_detail_url, navigate_to


def _init_state() -> None:
    if "explorer_page" not in st.session_state:
        st.session_state.explorer_page = 1
    if "explorer_popularity" not in st.session_state:
        st.session_state.explorer_popularity = PopularityFilter()
    if "explorer_signature" not in st.session_state:
        st.session_state.explorer_signature = None


def _build_filters(
    page_size: int,
    search: str,
    countries: list[str],
    years: Optional[tuple[int, int]],
    year_range: Optional[YearRange],
    balance: tuple[int, int],
    popularity: PopularityFilter,
    sort_by: str,
    sort_order: str,
) -> NamesFilterParams:
    # Only narrowed ranges are sent; the full range is the API default.
    year_min = year_max = None
    if years and year_range and years != (year_range.min_year, year_range.max_year):
        year_min, year_max = years
    balance_min = balance_max = None
    if balance != (0, 100):
        balance_min, balance_max = balance
    return NamesFilterParams(
        page=1,
        page_size=page_size,
        countries=tuple(countries),
        year_min=year_min,
        year_max=year_max,
        gender_balance_min=balance_min,
        gender_balance_max=balance_max,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search or None,
        **popularity.query_params(),
    )


def _render_table(resp: NamesListResponse) -> None:
    meta = resp.meta
    first = (meta.page - 1) * meta.page_size + 1
    last = first + len(resp.names) - 1
    st.caption(
        f"Showing {first:,}–{last:,} of {meta.total_count:,} names · page {meta.page} of {meta.total_pages} · "
        f"data {meta.db_start}–{meta.db_end} · population {meta.popularity_summary.population_total:,}"
    )
    st.dataframe(
        names_to_frame(resp),
        hide_index=True,
        use_container_width=True,
        column_config={
            "rank": st.column_config.NumberColumn("Rank"),
            "name": st.column_config.TextColumn("Name"),
            "total_count": st.column_config.NumberColumn("Total", format="%d"),
            "female_count": st.column_config.NumberColumn("♀ Female", format="%d"),
            "male_count": st.column_config.NumberColumn("♂ Male", format="%d"),
            "unknown_count": st.column_config.NumberColumn("Unknown", format="%d"),
            "gender_balance": st.column_config.ProgressColumn(
                "Gender balance", min_value=0, max_value=100, format="%.1f"
            ),
            "cumulative_share": st.column_config.NumberColumn("Cumulative share", format="%.4f"),
            "name_start": st.column_config.NumberColumn("First year", format="%d"),
            "name_end": st.column_config.NumberColumn("Last year", format="%d"),
            "countries": st.column_config.TextColumn("Countries"),
        },
    )


def _render_results(result: QueryResult[NamesListResponse], page: int) -> None:
    """Banner + table for one query state. Holds no widgets so it can be drawn twice per run."""
    if result.is_error:
        render_status_banner("error", f"Error: {result.error}")
    elif result.is_loading:
        render_status_banner("loading", f"Loading page {page}…")
    elif result.data is not None:
        render_status_banner("ok", f"API connected - {len(result.data.names)} names loaded")

    resp = result.data
    if resp is None:
        return
    if result.is_placeholder_data:
        st.caption(f"Showing page {resp.meta.page} until page {page} is ready.")
    if resp.is_empty:
        render_empty_state(
            "No names match these filters.",
            hint="Try clearing the search, widening the year range or selecting more countries.",
        )
        return
    _render_table(resp)


def _render_pagination(resp: NamesListResponse) -> None:
    meta = resp.meta
    c1, c2, c3 = st.columns([1, 2, 1])
    if c1.button("← Previous", disabled=not meta.has_previous, use_container_width=True):
        st.session_state.explorer_page = max(1, st.session_state.explorer_page - 1)
        st.rerun()
    c2.markdown(
        f"<div style='text-align:center'>Page <b>{meta.page}</b> of {max(meta.total_pages, 1)}</div>",
        unsafe_allow_html=True,
    )
    if c3.button("Next →", disabled=not meta.has_next, use_container_width=True):
        st.session_state.explorer_page = st.session_state.explorer_page + 1
        st.rerun()


def _render_open_details(resp: NamesListResponse) -> None:
    c1, c2 = st.columns([3, 1])
    name = c1.selectbox("Open a name", [n.name for n in resp.names], label_visibility="collapsed")
    if c2.button("View details →", use_container_width=True) and name:
        navigate_to(build_name_detail_url(name))


def render(cfg: AppConfig, use_mock: bool) -> None:
    render_page_intro("Explore names", "Browse names, filter by country, years, gender balance and popularity.")
    _init_state()

    years = use_meta_years(cfg, use_mock)
    countries = use_countries(cfg, use_mock)
    for res in (years, countries):
        if res.is_error:
            st.error(res.error)

    # --- Filter bar ---
    with st.container(border=True):
        st.markdown("#### Filters")
        c1, c2 = st.columns(2)
        with c1:
            search = render_search()
        with c2:
            selected = render_countries_filter(countries.data.countries, []) if countries.data else []
        c3, c4 = st.columns(2)
        with c3:
            year_window = render_year_range(years.data) if years.data else None
        with c4:
            balance = render_gender_balance_slider()

        popularity = render_popularity_trio(st.session_state.explorer_popularity)
        if popularity != st.session_state.explorer_popularity:
            st.session_state.explorer_popularity = popularity
            st.session_state.explorer_page = 1
            st.rerun()

        c5, c6 = st.columns([3, 1])
        with c5:
            sort_by, sort_order = render_sort_controls()
        with c6:
            page_size = render_page_size(cfg.default_page_size)

    try:
        base = _build_filters(
            page_size=page_size,
            search=search,
            countries=selected,
            years=year_window,
            year_range=years.data,
            balance=balance,
            popularity=popularity,
            sort_by=sort_by,
            sort_order=sort_order,
        )
    except ValueError as e:
        st.error(f"Invalid filters: {e}")
        return

    # Any filter change starts again from the first page.
    signature = base.cache_key()
    if st.session_state.explorer_signature != signature:
        st.session_state.explorer_signature = signature
        st.session_state.explorer_page = 1
    page = st.session_state.explorer_page
    filters = base.with_page(page)

    # --- Results: previous page stays on screen until the requested one resolves ---
    slot = st.empty()
    pending = peek_names(cfg, use_mock, filters)
    if not pending.is_success:
        with slot.container():
            _render_results(pending, page)

    result = use_names(cfg, use_mock, filters)
    with slot.container():
        _render_results(result, page)

    resp = result.data
    if result.is_success and resp is not None:
        derived = popularity.apply_summary(resp.meta.popularity_summary)
        if derived != popularity:
            st.session_state.explorer_popularity = derived
            st.rerun()
        if not resp.is_empty:
            _render_pagination(resp)
            _render_open_details(resp)
