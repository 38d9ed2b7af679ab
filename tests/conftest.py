"""
Pytest fixtures for the names explorer tests.

The app uses flat imports (`from config import ...`) rooted at app/, the same
way `streamlit run app/app.py` resolves them.
"""
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

APP_DIR = Path(__file__).resolve().parent.parent / "app"
if str(APP_DIR) not in sys.path:
    sys.path.insert(0, str(APP_DIR))

from config import AppConfig  # noqa: E402


def make_config(**overrides) -> AppConfig:
    values = dict(
        api_mode="real",
        api_base_url="http://api.test",
        mock_delay_ms=0,
        api_timeout_seconds=5.0,
        api_max_retries=0,
        query_stale_seconds=300.0,
        default_page_size=20,
        log_level="INFO",
    )
    values.update(overrides)
    return AppConfig(**values)


@pytest.fixture()
def cfg():
    return make_config()


@pytest.fixture()
def mock_cfg():
    return make_config(api_mode="mock")


def make_response(status=200, payload=None, reason="OK", json_error=False):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.reason = reason
    if json_error:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = payload
    return resp


@pytest.fixture()
def fake_session():
    """A requests.Session stand-in; set `.get.return_value` per test."""
    session = MagicMock()
    session.get.return_value = make_response(payload={})
    return session


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock():
    return FakeClock()
