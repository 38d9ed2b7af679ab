"""
Tests for the data hooks: app/data/service.py

A MagicMock stands in for NamesApiClient so call counts show exactly when a
hook goes to the network.
"""
from unittest.mock import MagicMock

import pytest

from data import fixtures
from data.client import ApiError
from data.filters import NamesFilterParams, NameTrendParams
from data.query_cache import QueryCache
from data.service import (
    names_key,
    peek_names,
    use_countries,
    use_meta_years,
    use_name_trend,
    use_names,
)


@pytest.fixture()
def cache(clock):
    return QueryCache(clock=clock)


@pytest.fixture()
def client():
    c = MagicMock()
    c.fetch_meta_years.side_effect = lambda: fixtures.meta_years_fixture()
    c.fetch_countries.side_effect = lambda: fixtures.countries_fixture()
    c.fetch_names.side_effect = lambda filters: fixtures.names_list_fixture()
    c.fetch_name_trend.side_effect = lambda params: fixtures.name_detail_fixture()
    return c


# ── Meta hooks ───────────────────────────────────────────────────────────────

class TestMetaHooks:
    def test_years_loaded_once_per_session(self, cfg, cache, client, clock):
        first = use_meta_years(cfg, False, cache=cache, client=client)
        clock.advance(24 * 3600)
        second = use_meta_years(cfg, False, cache=cache, client=client)
        assert first.is_success and second.is_success
        assert second.data is first.data
        assert client.fetch_meta_years.call_count == 1

    def test_countries_loaded_once_per_session(self, cfg, cache, client, clock):
        for _ in range(5):
            use_countries(cfg, False, cache=cache, client=client)
            clock.advance(3600)
        assert client.fetch_countries.call_count == 1

    def test_mode_is_part_of_the_key(self, cfg, cache, client):
        use_meta_years(cfg, True, cache=cache, client=client)
        use_meta_years(cfg, False, cache=cache, client=client)
        assert client.fetch_meta_years.call_count == 2

    def test_error_then_success(self, cfg, cache, client):
        client.fetch_countries.side_effect = [ApiError("HTTP 500: Internal Server Error"), fixtures.countries_fixture()]
        first = use_countries(cfg, False, cache=cache, client=client)
        assert first.is_error
        assert first.error == "HTTP 500: Internal Server Error"
        assert use_countries(cfg, False, cache=cache, client=client).is_success


# ── Names list ───────────────────────────────────────────────────────────────

class TestUseNames:
    def test_passes_filters_to_client(self, cfg, cache, client):
        filters = NamesFilterParams(search="al", top_n=10)
        use_names(cfg, False, filters, cache=cache, client=client)
        client.fetch_names.assert_called_once_with(filters)

    def test_same_filters_cached_within_stale_time(self, cfg, cache, client, clock):
        filters = NamesFilterParams()
        use_names(cfg, False, filters, cache=cache, client=client)
        clock.advance(cfg.query_stale_seconds - 1)
        use_names(cfg, False, filters, cache=cache, client=client)
        assert client.fetch_names.call_count == 1

    def test_refetch_after_stale_time(self, cfg, cache, client, clock):
        filters = NamesFilterParams()
        use_names(cfg, False, filters, cache=cache, client=client)
        clock.advance(cfg.query_stale_seconds)
        use_names(cfg, False, filters, cache=cache, client=client)
        assert client.fetch_names.call_count == 2

    def test_first_page_has_no_placeholder(self, cfg, cache):
        pending = peek_names(cfg, False, NamesFilterParams(), cache=cache)
        assert pending.is_loading
        assert pending.data is None

    def test_next_page_keeps_previous_until_resolved(self, cfg, cache, client):
        page1 = NamesFilterParams(page=1)
        page2 = page1.with_page(2)
        first = use_names(cfg, False, page1, cache=cache, client=client)

        pending = peek_names(cfg, False, page2, cache=cache)
        assert pending.is_loading
        assert pending.is_placeholder_data
        assert pending.data is first.data

        resolved = use_names(cfg, False, page2, cache=cache, client=client)
        assert resolved.is_success
        assert not resolved.is_placeholder_data
        assert resolved.data is not first.data
        assert names_key(False, page2) in cache

    def test_next_page_placeholder_is_the_page_on_screen(self, cfg, cache, client):
        a = NamesFilterParams(search="al")
        b = NamesFilterParams(search="jo")
        first_a = use_names(cfg, False, a, cache=cache, client=client)
        use_names(cfg, False, b, cache=cache, client=client)
        back_to_a = use_names(cfg, False, a, cache=cache, client=client)
        assert back_to_a.data is first_a.data
        pending = peek_names(cfg, False, a.with_page(2), cache=cache)
        assert pending.is_placeholder_data
        assert pending.data is first_a.data

    def test_cached_page_is_not_a_placeholder(self, cfg, cache, client):
        filters = NamesFilterParams()
        use_names(cfg, False, filters, cache=cache, client=client)
        pending = peek_names(cfg, False, filters, cache=cache)
        assert pending.is_success
        assert not pending.is_placeholder_data

    def test_stale_page_is_shown_as_placeholder(self, cfg, cache, client, clock):
        filters = NamesFilterParams()
        first = use_names(cfg, False, filters, cache=cache, client=client)
        clock.advance(cfg.query_stale_seconds + 1)
        pending = peek_names(cfg, False, filters, cache=cache)
        assert pending.is_loading
        assert pending.data is first.data

    def test_failed_next_page_keeps_previous_data(self, cfg, cache, client):
        first = use_names(cfg, False, NamesFilterParams(), cache=cache, client=client)
        client.fetch_names.side_effect = ApiError("Service unavailable")
        result = use_names(cfg, False, NamesFilterParams(page=2), cache=cache, client=client)
        assert result.is_error
        assert result.error == "Service unavailable"
        assert result.data is first.data

    def test_mock_sentinel_through_hook(self, mock_cfg, cache):
        from data.client import NamesApiClient

        real_client = NamesApiClient(mock_cfg, use_mock=True)
        empty = use_names(mock_cfg, True, NamesFilterParams(search="xyz123"), cache=cache, client=real_client)
        full = use_names(mock_cfg, True, NamesFilterParams(search="alex"), cache=cache, client=real_client)
        assert empty.data.is_empty
        assert len(full.data.names) > 0


# ── Name trend ───────────────────────────────────────────────────────────────

class TestUseNameTrend:
    def test_idle_without_name(self, cfg, cache, client):
        result = use_name_trend(cfg, False, NameTrendParams(name=""), cache=cache, client=client)
        assert result.is_idle
        assert result.data is None
        client.fetch_name_trend.assert_not_called()

    def test_idle_when_disabled(self, cfg, cache, client):
        result = use_name_trend(cfg, False, NameTrendParams(name="Alex"), enabled=False, cache=cache, client=client)
        assert result.is_idle
        client.fetch_name_trend.assert_not_called()

    def test_fetches_with_name(self, cfg, cache, client):
        params = NameTrendParams(name="Alex")
        result = use_name_trend(cfg, False, params, cache=cache, client=client)
        assert result.is_success
        client.fetch_name_trend.assert_called_once_with(params)

    def test_zero_years_is_success(self, cfg, cache, client):
        payload = fixtures.load_fixture("name-detail.json")
        payload["time_series"] = []
        from data.models import NameTrendResponse

        client.fetch_name_trend.side_effect = lambda params: NameTrendResponse.from_dict(payload)
        result = use_name_trend(cfg, False, NameTrendParams(name="Alex"), cache=cache, client=client)
        assert result.is_success
        assert result.data.time_series == ()

    def test_trend_does_not_use_list_placeholder(self, cfg, cache, client):
        use_names(cfg, False, NamesFilterParams(), cache=cache, client=client)
        client.fetch_name_trend.side_effect = ApiError("Name not found")
        result = use_name_trend(cfg, False, NameTrendParams(name="Zed"), cache=cache, client=client)
        assert result.is_error
        assert result.data is None
