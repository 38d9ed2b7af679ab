from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import streamlit as st

from config import AppConfig
from data.client import api_mode_label
from data.service import get_query_cache
from navigation import navigate, resolve_route


@dataclass(frozen=True)
class SidebarState:
    view: str
    use_mock: bool
    name: Optional[str] = None


NAV_ITEMS = [
    ("🏠 Main", "landing"),
    ("🔍 Explore names", "names"),
]


def render_sidebar(cfg: AppConfig) -> SidebarState:
    route = resolve_route(st.query_params)
    # The detail page lives under "Explore names" in the nav.
    nav_view = "names" if route.view == "name" else route.view

    with st.sidebar:
        st.markdown("### ✨ Affirm Name")
        st.caption("Explore names across countries and generations")

        labels = [l for l, _ in NAV_ITEMS]
        views = [v for _, v in NAV_ITEMS]
        idx = views.index(nav_view) if nav_view in views else 0

        label = st.radio(
            "Nav",
            labels,
            index=idx,
            label_visibility="collapsed",
        )
        selected = dict(NAV_ITEMS)[label]
        if selected != nav_view:
            navigate(selected)

        with st.expander("⚙️ Settings", expanded=False):
            use_mock = st.toggle(
                "Use mock data",
                value=st.session_state.get("use_mock", cfg.default_use_mock),
                help="When on, pages are served from bundled fixtures instead of the names API.",
            )
            st.session_state["use_mock"] = use_mock

            st.caption(f"Source: {api_mode_label(use_mock)}")
            st.markdown("**API base URL**")
            st.code(cfg.api_base_url, language="text")

            if st.button("Clear cached data", use_container_width=True):
                get_query_cache().invalidate()
                st.toast("Cached responses cleared")
    use_mock = st.session_state.get("use_mock", cfg.default_use_mock)

    return SidebarState(view=route.view, use_mock=use_mock, name=route.name)
