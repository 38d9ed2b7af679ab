"""
Popularity filter trio.

Three mutually exclusive popularity filters: min count, top N and coverage
percent. Only one of them (the "driver") is under user control at a time;
the other two are read-only and show the values the API derived from the
driver on the last response.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from data.filters import POPULARITY_FIELDS
from data.models import PopularitySummary


Number = Union[int, float]

FIELD_LABELS = {
    "min_count": "Min count",
    "top_n": "Top N",
    "coverage_percent": "Coverage %",
}


class PopularityFilterError(ValueError):
    pass


def _validate(field: str, value: Optional[Number]) -> Optional[Number]:
    if field not in POPULARITY_FIELDS:
        raise PopularityFilterError(f"unknown popularity field: {field}")
    if value is None:
        return None
    if field == "min_count":
        if value < 0:
            raise PopularityFilterError("min count must be >= 0")
        return int(value)
    if field == "top_n":
        if value < 1:
            raise PopularityFilterError("top N must be >= 1")
        return int(value)
    if not 0 <= value <= 100:
        raise PopularityFilterError("coverage percent must be between 0 and 100")
    return float(value)


@dataclass(frozen=True)
class PopularityFilter:
    min_count: Optional[int] = None
    top_n: Optional[int] = None
    coverage_percent: Optional[float] = None
    active_driver: Optional[str] = None

    def __post_init__(self) -> None:
        if self.active_driver is not None and self.active_driver not in POPULARITY_FIELDS:
            raise PopularityFilterError(f"unknown popularity driver: {self.active_driver}")

    def is_editable(self, field: str) -> bool:
        return self.active_driver is None or self.active_driver == field

    def editable_fields(self) -> tuple[str, ...]:
        return tuple(f for f in POPULARITY_FIELDS if self.is_editable(f))

    def value(self, field: str) -> Optional[Number]:
        return getattr(self, field)

    def edit(self, field: str, value: Optional[Number]) -> "PopularityFilter":
        """Return a new filter with `field` set; a value makes `field` the driver, None on the driver releases it."""
        value = _validate(field, value)
        if not self.is_editable(field):
            raise PopularityFilterError(
                f"{FIELD_LABELS[field]} is derived from {FIELD_LABELS[self.active_driver]} and cannot be edited"
            )
        if value is None:
            return PopularityFilter()
        return replace(self, active_driver=field, **{field: value})

    def clear(self) -> "PopularityFilter":
        return PopularityFilter()

    def apply_summary(self, summary: PopularitySummary) -> "PopularityFilter":
        """Repopulate the non-driver fields from the derived values of a response."""
        if self.active_driver is None:
            return self
        derived = {
            "min_count": summary.derived_min_count,
            "top_n": summary.derived_top_n,
            "coverage_percent": summary.derived_coverage_percent,
        }
        derived.pop(self.active_driver)
        return replace(self, **derived)

    def query_params(self) -> dict[str, Number]:
        """Only the driver is client-authoritative."""
        if self.active_driver is None:
            return {}
        v = self.value(self.active_driver)
        return {} if v is None else {self.active_driver: v}

    def describe(self) -> Optional[str]:
        if self.active_driver is None:
            return None
        return f"Active filter: {FIELD_LABELS[self.active_driver]} • other values are derived from results"
