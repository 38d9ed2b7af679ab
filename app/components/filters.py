from __future__ import annotations

from typing import Optional, Sequence

import streamlit as st

from data.filters import POPULARITY_FIELDS, SORT_FIELDS, SORT_ORDERS
from data.models import Country, YearRange
from data.popularity import FIELD_LABELS, PopularityFilter


COUNTRY_FLAGS = {
    "US": "🇺🇸",
    "UK": "🇬🇧",
    "CA": "🇨🇦",
    "AU": "🇦🇺",
    "IE": "🇮🇪",
    "NZ": "🇳🇿",
    "SE": "🇸🇪",
    "NO": "🇳🇴",
    "DK": "🇩🇰",
    "FI": "🇫🇮",
}

SORT_LABELS = {
    "rank": "Rank",
    "name": "Name",
    "total_count": "Total count",
    "gender_balance": "Gender balance",
}

PAGE_SIZES = [10, 20, 50, 100]


def country_flag(code: str) -> str:
    return COUNTRY_FLAGS.get(code, "🌐")


def countries_button_label(selected: Sequence[str]) -> str:
    """Collapsed label: "All countries", up to two flags, or two flags plus a count."""
    if not selected:
        return "All countries"
    flags = [COUNTRY_FLAGS.get(code, code) for code in selected]
    if len(flags) <= 2:
        return " ".join(flags)
    return f"{' '.join(flags[:2])} +{len(flags) - 2}"


def countries_selection_caption(selected: Sequence[str], total: int) -> str:
    if not selected:
        return "All countries selected"
    return f"{len(selected)} of {total} selected"


def render_countries_filter(countries: Sequence[Country], selected: Sequence[str]) -> list[str]:
    by_code = {c.code: c for c in countries}
    picked = st.multiselect(
        "🌍 Countries",
        options=list(by_code),
        default=[c for c in selected if c in by_code],
        format_func=lambda code: f"{country_flag(code)} {by_code[code].name}",
        placeholder="All countries",
    )
    st.caption(f"{countries_button_label(picked)} · {countries_selection_caption(picked, len(countries))}")
    return picked


def render_year_range(year_range: YearRange, value: Optional[tuple[int, int]] = None) -> tuple[int, int]:
    lo, hi = year_range.min_year, year_range.max_year
    if lo >= hi:
        st.caption(f"📅 Years: {lo}")
        return lo, hi
    start, end = value or (lo, hi)
    start, end = max(lo, start), min(hi, end)
    return st.slider("📅 Years", min_value=lo, max_value=hi, value=(start, end))


def render_gender_balance_slider(value: tuple[int, int] = (0, 100)) -> tuple[int, int]:
    """Scale: 0 = all female, 50 = neutral, 100 = all male."""
    lo, hi = st.slider("⚖️ Gender balance", min_value=0, max_value=100, value=value)
    st.caption(f"♀ More female · {lo}% – {hi}% · More male ♂")
    return lo, hi


def _popularity_input(state: PopularityFilter, field: str):
    editable = state.is_editable(field)
    is_driver = state.active_driver == field
    label = FIELD_LABELS[field] + (" ●" if is_driver else "")
    value = state.value(field)
    # Bounds only apply to user input; derived values are shown as returned.
    if field == "coverage_percent":
        kwargs = dict(min_value=0.0, max_value=100.0) if editable else {}
        return st.number_input(
            label,
            value=None if value is None else float(value),
            step=0.1,
            format="%.1f",
            placeholder="e.g. 80",
            disabled=not editable,
            **kwargs,
        )
    kwargs = dict(min_value=0 if field == "min_count" else 1) if editable else {}
    return st.number_input(
        label,
        value=None if value is None else int(value),
        step=1,
        placeholder="e.g. 100" if field == "min_count" else "e.g. 50",
        disabled=not editable,
        **kwargs,
    )


def render_popularity_trio(state: PopularityFilter) -> PopularityFilter:
    """
    Min count / Top N / Coverage %. Editing one makes it the driver; the
    other two turn read-only and show values derived from the last response.
    """
    st.markdown("**📈 Popularity**")
    cols = st.columns(len(POPULARITY_FIELDS))
    new_state = state
    for field, col in zip(POPULARITY_FIELDS, cols):
        with col:
            v = _popularity_input(state, field)
        if new_state is state and state.is_editable(field) and v != state.value(field):
            new_state = state.edit(field, v)

    hint = new_state.describe()
    if hint:
        c1, c2 = st.columns([4, 1])
        c1.caption(hint)
        if c2.button("Reset", key="popularity_reset", use_container_width=True):
            new_state = new_state.clear()
    return new_state


def render_search(value: str = "") -> str:
    return st.text_input("🔎 Search", value=value, placeholder="Type a name…")


def render_sort_controls(sort_by: str = "rank", sort_order: str = "asc") -> tuple[str, str]:
    c1, c2 = st.columns(2)
    by = c1.selectbox(
        "Sort by",
        list(SORT_FIELDS),
        index=list(SORT_FIELDS).index(sort_by),
        format_func=lambda f: SORT_LABELS[f],
    )
    order = c2.selectbox(
        "Order",
        list(SORT_ORDERS),
        index=list(SORT_ORDERS).index(sort_order),
        format_func=lambda o: "Ascending" if o == "asc" else "Descending",
    )
    return by, order


def render_page_size(value: int) -> int:
    options = sorted(set(PAGE_SIZES + [value]))
    return st.selectbox("Page size", options, index=options.index(value))
