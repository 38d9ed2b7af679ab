from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional


SORT_FIELDS = ("name", "total_count", "gender_balance", "rank")
SORT_ORDERS = ("asc", "desc")
MAX_PAGE_SIZE = 100

POPULARITY_FIELDS = ("min_count", "top_n", "coverage_percent")


@dataclass(frozen=True)
class NamesFilterParams:
    """Query parameters for `/api/names`. `None` means "not sent"."""

    page: int = 1
    page_size: int = 20
    countries: tuple[str, ...] = ()
    year_min: Optional[int] = None
    year_max: Optional[int] = None
    gender_balance_min: Optional[float] = None
    gender_balance_max: Optional[float] = None
    min_count: Optional[int] = None
    top_n: Optional[int] = None
    coverage_percent: Optional[float] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None
    search: Optional[str] = None

    def __post_init__(self) -> None:
        # Accept any iterable of codes, store a tuple so the params stay hashable.
        object.__setattr__(self, "countries", tuple(self.countries or ()))

        if self.page < 1:
            raise ValueError("page must be >= 1")
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")
        if self.year_min is not None and self.year_max is not None and self.year_min > self.year_max:
            raise ValueError("year_min must be <= year_max")
        for v in (self.gender_balance_min, self.gender_balance_max):
            if v is not None and not 0 <= v <= 100:
                raise ValueError("gender balance bounds must be between 0 and 100")
        if (
            self.gender_balance_min is not None
            and self.gender_balance_max is not None
            and self.gender_balance_min > self.gender_balance_max
        ):
            raise ValueError("gender_balance_min must be <= gender_balance_max")
        set_popularity = [f for f in POPULARITY_FIELDS if getattr(self, f) is not None]
        if len(set_popularity) > 1:
            raise ValueError(f"only one popularity filter may be set, got {', '.join(set_popularity)}")
        if self.sort_by is not None and self.sort_by not in SORT_FIELDS:
            raise ValueError(f"sort_by must be one of {', '.join(SORT_FIELDS)}")
        if self.sort_order is not None and self.sort_order not in SORT_ORDERS:
            raise ValueError("sort_order must be 'asc' or 'desc'")

    def to_query_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "page": self.page,
            "page_size": self.page_size,
            "countries": list(self.countries) or None,
            "year_min": self.year_min,
            "year_max": self.year_max,
            "gender_balance_min": self.gender_balance_min,
            "gender_balance_max": self.gender_balance_max,
            "min_count": self.min_count,
            "top_n": self.top_n,
            "coverage_percent": self.coverage_percent,
            "sort_by": self.sort_by,
            "sort_order": self.sort_order,
            "search": self.search.strip() if self.search and self.search.strip() else None,
        }
        return {k: v for k, v in params.items() if v is not None}

    def cache_key(self) -> tuple:
        return tuple(sorted((k, tuple(v) if isinstance(v, list) else v) for k, v in self.to_query_params().items()))

    def with_page(self, page: int) -> "NamesFilterParams":
        return replace(self, page=page)


@dataclass(frozen=True)
class NameTrendParams:
    """Path + query parameters for `/api/names/{name}`."""

    name: str
    countries: tuple[str, ...] = ()
    year_min: Optional[int] = None
    year_max: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "countries", tuple(self.countries or ()))
        if self.year_min is not None and self.year_max is not None and self.year_min > self.year_max:
            raise ValueError("year_min must be <= year_max")

    def to_query_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "countries": list(self.countries) or None,
            "year_min": self.year_min,
            "year_max": self.year_max,
        }
        return {k: v for k, v in params.items() if v is not None}

    def cache_key(self) -> tuple:
        return (self.name,) + tuple(
            sorted((k, tuple(v) if isinstance(v, list) else v) for k, v in self.to_query_params().items())
        )
