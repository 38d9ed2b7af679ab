from __future__ import annotations

import streamlit as st

from config import AppConfig
from navigation import ROUTES, navigate


FEATURES = [
    ("🔍", "Explore thousands of names used for girls and boys alike, ranked by how often they are given."),
    ("🎯", "Filter by country, years, gender balance and popularity to find exactly the names you are looking for."),
    ("📊", "Follow each name through time and see how it is shared between girls and boys in every country."),
    ("✨", "Find a name that feels right, backed by real birth registration data."),
]


def render(cfg: AppConfig, use_mock: bool) -> None:
    # --- Hero ---
    st.markdown(
        """
<div class="hero">
  <div class="hero-title">Find a name that fits</div>
  <p class="hero-tagline">Gender-neutral names, their popularity and their history, across countries and generations.</p>
</div>
        """,
        unsafe_allow_html=True,
    )

    # --- Mission ---
    st.markdown('<div class="section-title">Our mission</div>', unsafe_allow_html=True)
    st.markdown(
        """
<div class="mission-card">
  <div class="mission-body">
    Choosing a name is personal. We gather official baby-name statistics from several countries and
    show how each name is shared between girls and boys, so anyone looking for an affirming name can
    see the full picture instead of a single ranking.
  </div>
</div>
        """,
        unsafe_allow_html=True,
    )

    # --- Features ---
    st.markdown('<div class="section-title">What you can do</div>', unsafe_allow_html=True)
    left, right = st.columns(2)
    for i, (icon, body) in enumerate(FEATURES):
        with left if i % 2 == 0 else right:
            st.markdown(
                f"""
<div class="feature-card">
  <div class="feature-icon">{icon}</div>
  <div class="feature-body">{body}</div>
</div>
                """,
                unsafe_allow_html=True,
            )

    # --- Call to action ---
    st.write("")
    _, mid, _ = st.columns([1, 1, 1])
    with mid:
        st.caption("Ready to start? Browse the full list with filters.")
        if st.button("Explore names →", type="primary", use_container_width=True):
            navigate(ROUTES["names"])
