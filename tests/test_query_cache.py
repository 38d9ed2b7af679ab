"""Tests for app/data/query_cache.py: freshness, placeholders and error states."""
from unittest.mock import MagicMock

from data.client import ApiError
from data.query_cache import NEVER_STALE, QueryCache, QueryStatus


class TestFetch:
    def test_first_fetch_calls_fn(self, clock):
        cache = QueryCache(clock=clock)
        fn = MagicMock(return_value="data")
        result = cache.fetch(("k", 1), fn)
        assert result.is_success
        assert result.data == "data"
        fn.assert_called_once()

    def test_fresh_entry_served_from_cache(self, clock):
        cache = QueryCache(clock=clock)
        fn = MagicMock(return_value="data")
        cache.fetch(("k", 1), fn, stale_time=60)
        clock.advance(59)
        assert cache.fetch(("k", 1), fn, stale_time=60).data == "data"
        assert fn.call_count == 1

    def test_stale_entry_refetched(self, clock):
        cache = QueryCache(clock=clock)
        fn = MagicMock(side_effect=["v1", "v2"])
        cache.fetch(("k", 1), fn, stale_time=60)
        clock.advance(60)
        assert cache.fetch(("k", 1), fn, stale_time=60).data == "v2"
        assert fn.call_count == 2

    def test_zero_stale_time_always_refetches(self, clock):
        cache = QueryCache(clock=clock)
        fn = MagicMock(return_value="x")
        cache.fetch(("k", 1), fn)
        cache.fetch(("k", 1), fn)
        assert fn.call_count == 2

    def test_never_stale(self, clock):
        cache = QueryCache(clock=clock)
        fn = MagicMock(return_value="x")
        cache.fetch(("k",), fn, stale_time=NEVER_STALE)
        clock.advance(10 ** 9)
        cache.fetch(("k",), fn, stale_time=NEVER_STALE)
        assert fn.call_count == 1

    def test_distinct_keys_fetch_separately(self, clock):
        cache = QueryCache(clock=clock)
        fn = MagicMock(return_value="x")
        cache.fetch(("k", 1), fn, stale_time=60)
        cache.fetch(("k", 2), fn, stale_time=60)
        assert fn.call_count == 2


class TestErrors:
    def test_api_error_becomes_error_result(self, clock):
        cache = QueryCache(clock=clock)
        result = cache.fetch(("k", 1), MagicMock(side_effect=ApiError("boom")))
        assert result.status == QueryStatus.ERROR
        assert result.error == "boom"
        assert result.data is None
        assert ("k", 1) not in cache

    def test_error_keeps_stale_data(self, clock):
        cache = QueryCache(clock=clock)
        cache.fetch(("k", 1), MagicMock(return_value="old"))
        result = cache.fetch(("k", 1), MagicMock(side_effect=ApiError("boom")))
        assert result.is_error
        assert result.data == "old"

    def test_failed_fetch_is_retried_next_time(self, clock):
        cache = QueryCache(clock=clock)
        fn = MagicMock(side_effect=[ApiError("boom"), "ok"])
        cache.fetch(("k",), fn, stale_time=NEVER_STALE)
        assert cache.fetch(("k",), fn, stale_time=NEVER_STALE).data == "ok"


class TestPlaceholder:
    def test_observe_unknown_key_is_loading(self, clock):
        result = QueryCache(clock=clock).observe(("names", 1))
        assert result.is_loading
        assert result.data is None

    def test_observe_keep_previous(self, clock):
        cache = QueryCache(clock=clock)
        cache.fetch(("names", 1), MagicMock(return_value="page1"))
        result = cache.observe(("names", 2), keep_previous=True)
        assert result.is_loading
        assert result.is_placeholder_data
        assert result.data == "page1"

    def test_placeholder_scoped_by_key_prefix(self, clock):
        cache = QueryCache(clock=clock)
        cache.fetch(("names", "trend", "Alex"), MagicMock(return_value="trend"))
        assert cache.observe(("names", 2), keep_previous=True).data is None

    def test_placeholder_follows_latest_success(self, clock):
        cache = QueryCache(clock=clock)
        cache.fetch(("names", 1), MagicMock(return_value="page1"))
        cache.fetch(("names", 2), MagicMock(return_value="page2"))
        assert cache.observe(("names", 3), keep_previous=True).data == "page2"

    def test_placeholder_follows_cache_hit(self, clock):
        cache = QueryCache(clock=clock)
        cache.fetch(("names", ("A", 1)), MagicMock(return_value="A page 1"), stale_time=300)
        cache.fetch(("names", ("B", 1)), MagicMock(return_value="B page 1"), stale_time=300)
        # Back to filter A: served from memory, and now on screen.
        hit = cache.fetch(("names", ("A", 1)), MagicMock(return_value="unused"), stale_time=300)
        assert hit.data == "A page 1"
        pending = cache.observe(("names", ("A", 2)), keep_previous=True)
        assert pending.data == "A page 1"


class TestInvalidate:
    def test_invalidate_prefix(self, clock):
        cache = QueryCache(clock=clock)
        cache.set_query_data(("mock", "meta", "years"), 1)
        cache.set_query_data(("real", "meta", "years"), 2)
        cache.invalidate(("mock",))
        assert ("mock", "meta", "years") not in cache
        assert ("real", "meta", "years") in cache

    def test_invalidate_all(self, clock):
        cache = QueryCache(clock=clock)
        cache.set_query_data(("a", 1), 1)
        cache.fetch(("names", 1), MagicMock(return_value="p"))
        cache.invalidate()
        assert len(cache) == 0
        assert cache.observe(("names", 2), keep_previous=True).data is None


class TestEviction:
    def test_size_is_bounded(self, clock):
        cache = QueryCache(clock=clock, maxsize=10)
        for i in range(50):
            cache.fetch(("names", i), MagicMock(return_value=i), stale_time=300)
            clock.advance(1)
        assert len(cache) == 10
        assert ("names", 49) in cache
        assert ("names", 0) not in cache

    def test_full_cache_evicts_soonest_expiring(self, clock):
        cache = QueryCache(clock=clock, maxsize=2)
        cache.set_query_data(("a",), 1, stale_time=60)
        clock.advance(1)
        cache.set_query_data(("b",), 2, stale_time=10)
        clock.advance(1)
        cache.set_query_data(("c",), 3, stale_time=60)
        assert ("a",) in cache
        assert ("b",) not in cache

    def test_stale_entries_collected_after_gc_time(self, clock):
        cache = QueryCache(clock=clock, maxsize=10_000, gc_time=100)
        for i in range(5000):
            cache.fetch(("names", i), MagicMock(return_value=i), stale_time=300)
            clock.advance(1)
        # Only entries that went stale within the last gc window survive.
        assert len(cache) == 400
        assert ("names", 4999) in cache

    def test_entries_kept_inside_gc_window(self, clock):
        cache = QueryCache(clock=clock, gc_time=100)
        cache.set_query_data(("a",), 1, stale_time=10)
        clock.advance(109)
        cache.set_query_data(("b",), 2)
        assert ("a",) in cache
        clock.advance(1)
        cache.set_query_data(("c",), 3)
        assert ("a",) not in cache

    def test_never_stale_entries_survive(self, clock):
        cache = QueryCache(clock=clock, maxsize=3, gc_time=1)
        cache.fetch(("meta", "years"), MagicMock(return_value="years"), stale_time=NEVER_STALE)
        for i in range(20):
            clock.advance(1000)
            cache.fetch(("names", i), MagicMock(return_value=i), stale_time=300)
        assert ("meta", "years") in cache

    def test_evicted_page_still_available_as_placeholder(self, clock):
        cache = QueryCache(clock=clock, maxsize=1)
        cache.fetch(("names", 1), MagicMock(return_value="page1"), stale_time=300)
        cache.set_query_data(("other",), "x")
        assert ("names", 1) not in cache
        assert cache.observe(("names", 2), keep_previous=True).data == "page1"
