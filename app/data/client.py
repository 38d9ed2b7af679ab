"""
Names API Client
================
Thin HTTP client for the names API with a mock mode that serves the bundled
fixtures after a simulated delay.

Endpoints:
- GET /api/meta/years
- GET /api/meta/countries
- GET /api/names?<filters>
- GET /api/names/{name}?<filters>
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping, Optional
from urllib.parse import quote, urlencode

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from config import AppConfig
from data import fixtures
from data.filters import NamesFilterParams, NameTrendParams
from data.models import (
    ApiErrorBody,
    CountriesResponse,
    MetaYearsResponse,
    NamesListResponse,
    NameTrendResponse,
)


logger = logging.getLogger(__name__)

RETRY_STATUSES = (502, 503, 504)


class ApiError(RuntimeError):
    """Any failure talking to the names API, with a message fit for display."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


def build_query_string(params: Mapping[str, Any]) -> str:
    """
    Serialize filter params; None is dropped and list values become repeated keys.

    >>> build_query_string({"page": 1, "countries": ["US", "UK"], "search": None})
    '?page=1&countries=US&countries=UK'
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for v in values:
            if v is None:
                continue
            pairs.append((key, str(v).lower() if isinstance(v, bool) else str(v)))
    qs = urlencode(pairs)
    return f"?{qs}" if qs else ""


def build_session(max_retries: int) -> requests.Session:
    retry = Retry(
        total=max_retries,
        backoff_factor=0.5,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=["GET"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session = requests.Session()
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def _error_from_response(resp: requests.Response) -> ApiError:
    body: Optional[ApiErrorBody] = None
    try:
        body = ApiErrorBody.from_dict(resp.json())
    except ValueError:
        body = None
    if body is None:
        return ApiError(f"HTTP {resp.status_code}: {resp.reason or ''}".rstrip(), status_code=resp.status_code)
    return ApiError(body.message, code=body.code, status_code=resp.status_code)


class NamesApiClient:
    """
    Names API client.

    In mock mode no network call is made: each fetch sleeps for the configured
    delay and returns a fixture snapshot.
    """

    def __init__(
        self,
        cfg: AppConfig,
        use_mock: bool,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.cfg = cfg
        self.use_mock = use_mock
        self._base_url = cfg.api_base_url.rstrip("/")
        self._session = session
        self._sleep = sleep

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = build_session(self.cfg.api_max_retries)
        return self._session

    @property
    def mode(self) -> str:
        return "mock" if self.use_mock else "real"

    def _mock_delay(self) -> None:
        if self.cfg.mock_delay_ms > 0:
            self._sleep(self.cfg.mock_delay_ms / 1000.0)

    def _get(self, endpoint: str) -> Any:
        url = f"{self._base_url}{endpoint}"
        logger.debug("GET %s", url)
        try:
            resp = self.session.get(url, timeout=self.cfg.api_timeout_seconds, headers={"Accept": "application/json"})
        except requests.RequestException as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise ApiError(f"Could not reach the names API: {type(e).__name__}", code="NETWORK_ERROR") from e

        if not resp.ok:
            err = _error_from_response(resp)
            logger.warning("GET %s -> %s %s", url, resp.status_code, err.message)
            raise err

        try:
            return resp.json()
        except ValueError as e:
            raise ApiError("The names API returned invalid JSON", code="INVALID_RESPONSE", status_code=resp.status_code) from e

    @staticmethod
    def _parse(parser: Callable[[Any], Any], payload: Any) -> Any:
        try:
            return parser(payload)
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError(f"Unexpected response shape: {e}", code="INVALID_RESPONSE") from e

    def fetch_meta_years(self) -> MetaYearsResponse:
        if self.use_mock:
            self._mock_delay()
            return fixtures.meta_years_fixture()
        return self._parse(MetaYearsResponse.from_dict, self._get("/api/meta/years"))

    def fetch_countries(self) -> CountriesResponse:
        if self.use_mock:
            self._mock_delay()
            return fixtures.countries_fixture()
        return self._parse(CountriesResponse.from_dict, self._get("/api/meta/countries"))

    def fetch_names(self, filters: Optional[NamesFilterParams] = None) -> NamesListResponse:
        filters = filters or NamesFilterParams()
        if self.use_mock:
            self._mock_delay()
            if filters.search and filters.search.lower() == fixtures.EMPTY_RESULTS_SEARCH:
                return fixtures.names_list_empty_fixture()
            return fixtures.names_list_fixture()

        qs = build_query_string(filters.to_query_params())
        return self._parse(NamesListResponse.from_dict, self._get(f"/api/names{qs}"))

    def fetch_name_trend(self, params: NameTrendParams) -> NameTrendResponse:
        if self.use_mock:
            self._mock_delay()
            return fixtures.name_detail_fixture()

        qs = build_query_string(params.to_query_params())
        return self._parse(NameTrendResponse.from_dict, self._get(f"/api/names/{quote(params.name, safe='')}{qs}"))


def get_api_client(cfg: AppConfig, use_mock: bool) -> NamesApiClient:
    return NamesApiClient(cfg=cfg, use_mock=use_mock)


def api_mode_label(use_mock: bool) -> str:
    return "Mock fixtures" if use_mock else "Live API"
