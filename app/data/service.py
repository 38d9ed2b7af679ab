from __future__ import annotations

from typing import Optional

import streamlit as st

from config import AppConfig
from data.client import NamesApiClient, get_api_client
from data.filters import NamesFilterParams, NameTrendParams
from data.models import CountriesResponse, MetaYearsResponse, NamesListResponse, NameTrendResponse
from data.query_cache import NEVER_STALE, QueryCache, QueryResult, QueryStatus


def _mode(use_mock: bool) -> str:
    return "mock" if use_mock else "real"


def get_query_cache() -> QueryCache:
    if "query_cache" not in st.session_state:
        st.session_state["query_cache"] = QueryCache()
    return st.session_state["query_cache"]


def get_client(cfg: AppConfig, use_mock: bool) -> NamesApiClient:
    # One client per mode per session so the HTTP connection pool is reused across reruns.
    slot = f"api_client_{_mode(use_mock)}"
    client = st.session_state.get(slot)
    if client is None or client.cfg != cfg:
        client = get_api_client(cfg, use_mock)
        st.session_state[slot] = client
    return client


def years_key(use_mock: bool) -> tuple:
    return (_mode(use_mock), "meta", "years")


def countries_key(use_mock: bool) -> tuple:
    return (_mode(use_mock), "meta", "countries")


def names_key(use_mock: bool, filters: NamesFilterParams) -> tuple:
    return (_mode(use_mock), "names", filters.cache_key())


def trend_key(use_mock: bool, params: NameTrendParams) -> tuple:
    return (_mode(use_mock), "names", "trend", params.cache_key())


def use_meta_years(
    cfg: AppConfig,
    use_mock: bool,
    cache: Optional[QueryCache] = None,
    client: Optional[NamesApiClient] = None,
) -> QueryResult[MetaYearsResponse]:
    """Year range; loaded once per session."""
    if cache is None:
        cache = get_query_cache()
    if client is None:
        client = get_client(cfg, use_mock)
    return cache.fetch(years_key(use_mock), client.fetch_meta_years, stale_time=NEVER_STALE)


def use_countries(
    cfg: AppConfig,
    use_mock: bool,
    cache: Optional[QueryCache] = None,
    client: Optional[NamesApiClient] = None,
) -> QueryResult[CountriesResponse]:
    """Country list; loaded once per session."""
    if cache is None:
        cache = get_query_cache()
    if client is None:
        client = get_client(cfg, use_mock)
    return cache.fetch(countries_key(use_mock), client.fetch_countries, stale_time=NEVER_STALE)


def peek_names(
    cfg: AppConfig,
    use_mock: bool,
    filters: NamesFilterParams,
    cache: Optional[QueryCache] = None,
) -> QueryResult[NamesListResponse]:
    """
    What the names list shows before `use_names` resolves: the cached page,
    or the previously loaded page as placeholder data.
    """
    if cache is None:
        cache = get_query_cache()
    key = names_key(use_mock, filters)
    if cache.is_fresh(key, cfg.query_stale_seconds):
        return cache.observe(key)
    # A stale entry is refetched, so render it as a placeholder rather than a final state.
    stale = cache.get_query_data(key)
    if stale is not None:
        return QueryResult(QueryStatus.LOADING, data=stale, is_placeholder_data=True)
    return cache.observe(key, keep_previous=True)


def use_names(
    cfg: AppConfig,
    use_mock: bool,
    filters: NamesFilterParams,
    cache: Optional[QueryCache] = None,
    client: Optional[NamesApiClient] = None,
) -> QueryResult[NamesListResponse]:
    if cache is None:
        cache = get_query_cache()
    if client is None:
        client = get_client(cfg, use_mock)
    return cache.fetch(
        names_key(use_mock, filters),
        lambda: client.fetch_names(filters),
        stale_time=cfg.query_stale_seconds,
        keep_previous=True,
    )


def use_name_trend(
    cfg: AppConfig,
    use_mock: bool,
    params: NameTrendParams,
    enabled: Optional[bool] = None,
    cache: Optional[QueryCache] = None,
    client: Optional[NamesApiClient] = None,
) -> QueryResult[NameTrendResponse]:
    """Trend for one name; idle (no request) when disabled or the name is blank."""
    if enabled is None:
        enabled = bool(params.name and params.name.strip())
    if not enabled:
        return QueryResult(QueryStatus.IDLE)
    if cache is None:
        cache = get_query_cache()
    if client is None:
        client = get_client(cfg, use_mock)
    return cache.fetch(
        trend_key(use_mock, params),
        lambda: client.fetch_name_trend(params),
        stale_time=cfg.query_stale_seconds,
    )
