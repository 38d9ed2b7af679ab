from __future__ import annotations

from html import escape

import streamlit as st


def render_page_intro(title: str, subtitle: str | None = None) -> None:
    st.markdown(
        f"""
<div class="page-intro">
  <div class="page-intro-title">{escape(title)}</div>
  {f'<div class="page-intro-subtitle">{escape(subtitle)}</div>' if subtitle else ''}
</div>
        """,
        unsafe_allow_html=True,
    )


def render_status_banner(kind: str, text: str) -> None:
    """
    Inline status line above a data view.
    kind: "ok" | "loading" | "error"
    """
    icon = {"ok": "✓", "loading": "⟳", "error": "✗"}.get(kind, "")
    st.markdown(
        f'<div class="status-banner {kind}">{icon} {escape(text)}</div>',
        unsafe_allow_html=True,
    )


def render_empty_state(message: str, icon: str = "🔍", hint: str | None = None) -> None:
    st.markdown(
        f"""
<div class="empty-state">
  <div class="empty-state-icon">{icon}</div>
  <div>{escape(message)}</div>
  {f'<div class="filter-hint">{escape(hint)}</div>' if hint else ''}
</div>
        """,
        unsafe_allow_html=True,
    )
