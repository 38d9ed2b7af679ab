from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


#
# Shared theme tokens
# - Centralized here so components/styles.py and the Plotly theme stay in sync.
#
THEME = {
    # Backgrounds
    "bg_primary": "#F8FAFC",     # page background
    "bg_secondary": "#FFFFFF",   # sidebar / top surfaces
    "bg_card": "#FFFFFF",        # card surface
    # Accents
    "accent_primary": "#8B5CF6",    # violet 500
    "accent_secondary": "#A78BFA",  # violet 400 (hover)
    "navy_900": "#111827",
    "navy_800": "#1F2937",
    # Series colors
    "female": "#EC4899",
    "male": "#3B82F6",
    "unknown": "#9CA3AF",
    # Text + borders
    "text_primary": "#111827",
    "text_secondary": "rgba(17, 24, 39, 0.68)",
    "border_color": "#E5E7EB",
    "grid": "rgba(17, 24, 39, 0.08)",
    "shadow": "0 1px 3px rgba(16,24,40,0.08)",
    "radius_px": 12,
    # Status colors
    "success": "#067647",
    "warning": "#F59E0B",
    "danger": "#B42318",
}

API_MODES = ("mock", "real")


@dataclass(frozen=True)
class AppConfig:
    # "mock" serves bundled fixtures, "real" calls the names API
    api_mode: str
    api_base_url: str

    mock_delay_ms: int
    api_timeout_seconds: float
    api_max_retries: int

    # Freshness window for names list / trend queries (meta queries never go stale)
    query_stale_seconds: float
    default_page_size: int

    log_level: str

    @property
    def default_use_mock(self) -> bool:
        return self.api_mode == "mock"


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _getint(name: str, default: int, minimum: int = 0) -> int:
    raw = _getenv(name)
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value >= minimum else default


def _getfloat(name: str, default: float) -> float:
    raw = _getenv(name)
    try:
        value = float(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value >= 0 else default


def get_config() -> AppConfig:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev)
    - Unknown API_MODE values fall back to mock
    """
    load_dotenv(override=False)

    mode = (_getenv("API_MODE", "mock") or "mock").lower()
    if mode not in API_MODES:
        mode = "mock"

    page_size = _getint("DEFAULT_PAGE_SIZE", 20, minimum=1)

    return AppConfig(
        api_mode=mode,
        api_base_url=(_getenv("API_BASE_URL", "http://localhost:8000") or "").rstrip("/"),
        mock_delay_ms=_getint("MOCK_DELAY_MS", 200),
        api_timeout_seconds=_getfloat("API_TIMEOUT_SECONDS", 30.0),
        api_max_retries=_getint("API_MAX_RETRIES", 3),
        query_stale_seconds=_getfloat("QUERY_STALE_SECONDS", 300.0),
        default_page_size=min(page_size, 100),
        log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler once; Streamlit reruns call this on every script run."""
    root = logging.getLogger()
    if not any(getattr(h, "_names_app", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        handler._names_app = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.INFO))
