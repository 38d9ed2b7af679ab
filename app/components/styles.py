from __future__ import annotations

import streamlit as st

from config import THEME


APP_TITLE = "Affirm Name Explorer"


def apply_theme() -> None:
    st.set_page_config(
        page_title=APP_TITLE,
        page_icon="✨",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    # Centralized theme tokens (config.py) -> CSS variables
    radius = int(THEME["radius_px"])
    css = """
<style>
@import url('https://fonts.googleapis.com/css2?family=DM+Sans:wght@400;500;600;700&display=swap');

:root{
  --accent-600: __ACCENT_600__;
  --accent-500: __ACCENT_500__;
  --navy-900: __NAVY_900__;
  --navy-800: __NAVY_800__;
  --female: __FEMALE__;
  --male: __MALE__;

  --bg-primary: __BG_PRIMARY__;
  --bg-secondary: __BG_SECONDARY__;
  --card-bg: __CARD_BG__;
  --card-border: __CARD_BORDER__;

  --text-primary: __TEXT_PRIMARY__;
  --text-secondary: __TEXT_SECONDARY__;
  --shadow: __SHADOW__;
  --radius: __RADIUS_PX__px;
}

/* Hide default Streamlit chrome */
#MainMenu { visibility: hidden; }
footer { visibility: hidden; }

html, body, [data-testid="stAppViewContainer"]{
  background: var(--bg-primary) !important;
  font-family: "DM Sans", system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif !important;
  color: var(--text-primary) !important;
}

[data-testid="stSidebar"]{
  background: var(--bg-secondary) !important;
  border-right: 1px solid var(--card-border) !important;
}

/* Sidebar nav */
[data-testid="stSidebar"] div[role="radiogroup"] > label{
  background: var(--card-bg) !important;
  border: 1px solid var(--card-border) !important;
  border-radius: 12px !important;
  padding: 10px 12px !important;
  margin: 0 0 10px 0 !important;
}
[data-testid="stSidebar"] div[role="radiogroup"] > label:has(input:checked){
  border-color: var(--accent-600) !important;
  box-shadow: 0 1px 3px rgba(139,92,246,0.20) !important;
}

.block-container{
  padding-top: 0.75rem !important;
  padding-bottom: 2rem !important;
}

/* Header */
.app-header{
  display:flex;
  align-items:center;
  justify-content:space-between;
  gap: 12px;
  background: var(--bg-secondary);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 10px 14px;
  margin: 0 0 14px 0;
}
.app-title{
  font-size: 20px;
  font-weight: 700;
  color: var(--navy-900);
  line-height: 1.1;
}
.app-subtitle{
  font-size: 14px;
  font-weight: 500;
  color: var(--text-secondary);
}
.pill{
  display:inline-flex;
  align-items:center;
  gap:6px;
  background: white;
  border: 1px solid var(--card-border);
  border-radius: 999px;
  padding: 6px 10px;
  font-size: 13px;
  font-weight: 600;
  color: var(--navy-800);
}
.pill .dot{
  width:8px;
  height:8px;
  border-radius:999px;
  background: var(--accent-600);
  display:inline-block;
}

/* Landing */
.hero{
  text-align: center;
  padding: 36px 18px 18px 18px;
}
.hero-title{
  font-size: 44px;
  font-weight: 700;
  color: var(--navy-900);
  line-height: 1.05;
  margin: 0 0 10px 0;
}
.hero-tagline{
  font-size: 20px;
  color: var(--text-secondary);
  margin: 0;
}
.section-title{
  font-size: 24px;
  font-weight: 600;
  color: var(--navy-900);
  margin: 18px 0 10px 0;
}
.feature-card, .mission-card{
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 16px;
  margin-bottom: 12px;
}
.feature-icon{ font-size: 24px; margin-bottom: 6px; }
.feature-body, .mission-body{
  font-size: 16px;
  color: var(--text-secondary);
  line-height: 1.5;
}

/* Page intro */
.page-intro{ margin: 0 0 14px 0; }
.page-intro-title{
  font-size: 34px;
  font-weight: 700;
  color: var(--navy-900);
}
.page-intro-subtitle{
  font-size: 16px;
  color: var(--text-secondary);
}

/* Status banners + empty state */
.status-banner{
  border-radius: var(--radius);
  padding: 10px 12px;
  margin: 0 0 12px 0;
  font-size: 14px;
  border: 1px solid var(--card-border);
}
.status-banner.ok{ background:#ECFDF3; border-color:#ABEFC6; color: __SUCCESS__; }
.status-banner.loading{ background:#EFF6FF; border-color:#BFDBFE; color:#1E40AF; }
.status-banner.error{ background:#FEF3F2; border-color:#FECDCA; color: __DANGER__; }
.empty-state{
  background: var(--card-bg);
  border: 2px dashed var(--card-border);
  border-radius: var(--radius);
  padding: 36px 18px;
  text-align: center;
  color: var(--text-secondary);
}
.empty-state-icon{ font-size: 36px; margin-bottom: 8px; }

/* Metric cards */
.metric-card{
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 12px 14px;
}
.metric-card.female{ border-top: 4px solid var(--female); }
.metric-card.male{ border-top: 4px solid var(--male); }
.metric-card.accent{ border-top: 4px solid var(--accent-600); }
.metric-label{
  font-size: 14px;
  font-weight: 500;
  color: var(--text-secondary);
  margin-bottom: 6px;
}
.metric-value{
  font-size: 24px;
  font-weight: 700;
  color: var(--text-primary);
  line-height: 1.2;
}
.metric-help{
  margin-top: 6px;
  font-size: 12px;
  color: var(--text-secondary);
}

/* Filters */
.filter-hint{
  font-size: 12px;
  color: var(--text-secondary);
  margin-top: -6px;
}

div.stButton > button{
  border-radius: 10px !important;
  font-weight: 600 !important;
}

div[data-testid="stPlotlyChart"]{
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 8px 10px;
}
</style>
"""

    tokens = {
        "__ACCENT_600__": str(THEME["accent_primary"]),
        "__ACCENT_500__": str(THEME["accent_secondary"]),
        "__NAVY_900__": str(THEME["navy_900"]),
        "__NAVY_800__": str(THEME["navy_800"]),
        "__FEMALE__": str(THEME["female"]),
        "__MALE__": str(THEME["male"]),
        "__BG_PRIMARY__": str(THEME["bg_primary"]),
        "__BG_SECONDARY__": str(THEME["bg_secondary"]),
        "__CARD_BG__": str(THEME["bg_card"]),
        "__CARD_BORDER__": str(THEME["border_color"]),
        "__TEXT_PRIMARY__": str(THEME["text_primary"]),
        "__TEXT_SECONDARY__": str(THEME["text_secondary"]),
        "__SHADOW__": str(THEME["shadow"]),
        "__RADIUS_PX__": str(radius),
        "__SUCCESS__": str(THEME["success"]),
        "__DANGER__": str(THEME["danger"]),
    }
    for k, v in tokens.items():
        css = css.replace(k, v)

    st.markdown(css, unsafe_allow_html=True)
