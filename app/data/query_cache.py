"""
Per-session query cache.

Maps tuple keys to the last successful payload of a fetch. A key is fresh
while its age is below the caller's stale time; fresh keys are served from
memory, stale or missing keys are fetched again.

`keep_previous` lets a paginated query show the last payload of the same
query family (the key without its parameter tuple) while a new key loads.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Hashable, Optional, TypeVar

from data.client import ApiError


logger = logging.getLogger(__name__)

T = TypeVar("T")

NEVER_STALE = math.inf


class QueryStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    status: QueryStatus
    data: Optional[T] = None
    error: Optional[str] = None
    is_placeholder_data: bool = False

    @property
    def is_idle(self) -> bool:
        return self.status == QueryStatus.IDLE

    @property
    def is_loading(self) -> bool:
        return self.status == QueryStatus.LOADING

    @property
    def is_error(self) -> bool:
        return self.status == QueryStatus.ERROR

    @property
    def is_success(self) -> bool:
        return self.status == QueryStatus.SUCCESS


@dataclass(frozen=True)
class _Entry:
    data: Any
    updated_at: float
    stale_time: float = 0.0

    def expires_at(self, gc_time: float) -> float:
        # Past this point the entry is neither fresh nor worth keeping as a fallback.
        return self.updated_at + self.stale_time + gc_time


Key = tuple


def _scope(key: Key) -> Key:
    return key[:-1]


class QueryCache:
    """
    At most `maxsize` entries are kept. Entries that went stale more than
    `gc_time` seconds ago are dropped on the next write; when the cache is
    still full, the entry that expires soonest is evicted.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        maxsize: int = 256,
        gc_time: float = 600.0,
    ):
        self._clock = clock
        self._maxsize = maxsize
        self._gc_time = gc_time
        self._entries: dict[Key, _Entry] = {}
        self._latest_by_scope: dict[Key, Any] = {}

    def get_query_data(self, key: Key) -> Any:
        entry = self._entries.get(key)
        return entry.data if entry else None

    def is_fresh(self, key: Key, stale_time: float) -> bool:
        entry = self._entries.get(key)
        if entry is None:
            return False
        return (self._clock() - entry.updated_at) < stale_time

    def set_query_data(self, key: Key, data: Any, stale_time: float = 0.0) -> None:
        now = self._clock()
        self._collect(now)
        if key not in self._entries and len(self._entries) >= self._maxsize:
            oldest = min(self._entries, key=lambda k: self._entries[k].expires_at(self._gc_time))
            logger.debug("Evicting %s", oldest)
            del self._entries[oldest]
        self._entries[key] = _Entry(data=data, updated_at=now, stale_time=stale_time)
        self._latest_by_scope[_scope(key)] = data

    def _collect(self, now: float) -> None:
        expired = [k for k, e in self._entries.items() if e.expires_at(self._gc_time) <= now]
        for k in expired:
            del self._entries[k]

    def observe(self, key: Key, keep_previous: bool = False) -> QueryResult:
        """State of `key` without fetching."""
        entry = self._entries.get(key)
        if entry is not None:
            return QueryResult(QueryStatus.SUCCESS, data=entry.data)
        if keep_previous:
            previous = self._latest_by_scope.get(_scope(key))
            if previous is not None:
                return QueryResult(QueryStatus.LOADING, data=previous, is_placeholder_data=True)
        return QueryResult(QueryStatus.LOADING)

    def fetch(
        self,
        key: Key,
        fn: Callable[[], T],
        stale_time: float = 0.0,
        keep_previous: bool = False,
    ) -> QueryResult[T]:
        if self.is_fresh(key, stale_time):
            logger.debug("Cache hit %s", key)
            data = self.get_query_data(key)
            # The hit is what goes on screen, so it is what the next page holds up while loading.
            self._latest_by_scope[_scope(key)] = data
            return QueryResult(QueryStatus.SUCCESS, data=data)

        logger.debug("Fetching %s", key)
        try:
            data = fn()
        except ApiError as e:
            # Keep whatever was shown before so the view can still render it next to the error.
            previous = self.observe(key, keep_previous=keep_previous).data
            return QueryResult(QueryStatus.ERROR, data=previous, error=e.message)

        self.set_query_data(key, data, stale_time=stale_time)
        return QueryResult(QueryStatus.SUCCESS, data=data)

    def invalidate(self, prefix: Key = ()) -> None:
        """Drop entries whose key starts with `prefix` (everything by default)."""
        n = len(prefix)
        for k in [k for k in self._entries if k[:n] == prefix]:
            del self._entries[k]
        for k in [k for k in self._latest_by_scope if k[:n] == prefix]:
            del self._latest_by_scope[k]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries
