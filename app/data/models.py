"""
API response models.

Frozen dataclasses mirroring the names API contract. Each HTTP response (or
fixture read) is parsed once into a snapshot that is never mutated; list
fields are stored as tuples.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import pandas as pd


def _opt_float(v: Any) -> Optional[float]:
    return None if v is None else float(v)


@dataclass(frozen=True)
class MetaYearsResponse:
    min_year: int
    max_year: int

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "MetaYearsResponse":
        return cls(min_year=int(d["min_year"]), max_year=int(d["max_year"]))


# The year range is the only meta payload; views refer to it by this name.
YearRange = MetaYearsResponse


@dataclass(frozen=True)
class Country:
    code: str
    name: str
    data_source_name: str
    data_source_url: str
    data_source_description: Optional[str]
    data_source_requires_manual_download: bool

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Country":
        return cls(
            code=str(d["code"]),
            name=str(d["name"]),
            data_source_name=str(d.get("data_source_name") or ""),
            data_source_url=str(d.get("data_source_url") or ""),
            data_source_description=d.get("data_source_description"),
            data_source_requires_manual_download=bool(d.get("data_source_requires_manual_download", False)),
        )


@dataclass(frozen=True)
class CountriesResponse:
    countries: tuple[Country, ...]

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "CountriesResponse":
        return cls(countries=tuple(Country.from_dict(c) for c in d["countries"]))

    def by_code(self) -> dict[str, Country]:
        return {c.code: c for c in self.countries}


@dataclass(frozen=True)
class PopularitySummary:
    population_total: int
    active_driver: Optional[str]
    active_value: Optional[float]
    derived_min_count: int
    derived_top_n: int
    derived_coverage_percent: float

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "PopularitySummary":
        return cls(
            population_total=int(d["population_total"]),
            active_driver=d.get("active_driver"),
            active_value=_opt_float(d.get("active_value")),
            derived_min_count=int(d["derived_min_count"]),
            derived_top_n=int(d["derived_top_n"]),
            derived_coverage_percent=float(d["derived_coverage_percent"]),
        )


@dataclass(frozen=True)
class PaginationMeta:
    page: int
    page_size: int
    total_count: int
    total_pages: int
    db_start: int
    db_end: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


@dataclass(frozen=True)
class NamesListMeta(PaginationMeta):
    popularity_summary: PopularitySummary

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "NamesListMeta":
        return cls(
            page=int(d["page"]),
            page_size=int(d["page_size"]),
            total_count=int(d["total_count"]),
            total_pages=int(d["total_pages"]),
            db_start=int(d["db_start"]),
            db_end=int(d["db_end"]),
            popularity_summary=PopularitySummary.from_dict(d["popularity_summary"]),
        )


@dataclass(frozen=True)
class NameEntry:
    name: str
    total_count: int
    female_count: int
    male_count: int
    unknown_count: int
    gender_balance: Optional[float]
    has_unknown_data: bool
    rank: int
    cumulative_share: float
    name_start: int
    name_end: int
    countries: tuple[str, ...]

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "NameEntry":
        return cls(
            name=str(d["name"]),
            total_count=int(d["total_count"]),
            female_count=int(d["female_count"]),
            male_count=int(d["male_count"]),
            unknown_count=int(d.get("unknown_count", 0)),
            gender_balance=_opt_float(d.get("gender_balance")),
            has_unknown_data=bool(d.get("has_unknown_data", False)),
            rank=int(d["rank"]),
            cumulative_share=float(d["cumulative_share"]),
            name_start=int(d["name_start"]),
            name_end=int(d["name_end"]),
            countries=tuple(d.get("countries") or ()),
        )


@dataclass(frozen=True)
class NamesListResponse:
    meta: NamesListMeta
    names: tuple[NameEntry, ...]

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "NamesListResponse":
        return cls(
            meta=NamesListMeta.from_dict(d["meta"]),
            names=tuple(NameEntry.from_dict(n) for n in d["names"]),
        )

    @property
    def is_empty(self) -> bool:
        return len(self.names) == 0


@dataclass(frozen=True)
class TimeSeriesPoint:
    year: int
    total_count: int
    female_count: int
    male_count: int
    unknown_count: int
    gender_balance: Optional[float]

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "TimeSeriesPoint":
        return cls(
            year=int(d["year"]),
            total_count=int(d["total_count"]),
            female_count=int(d["female_count"]),
            male_count=int(d["male_count"]),
            unknown_count=int(d.get("unknown_count", 0)),
            gender_balance=_opt_float(d.get("gender_balance")),
        )


@dataclass(frozen=True)
class CountryStats:
    country_code: str
    country_name: str
    total_count: int
    female_count: int
    male_count: int
    unknown_count: int
    gender_balance: Optional[float]

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "CountryStats":
        return cls(
            country_code=str(d["country_code"]),
            country_name=str(d["country_name"]),
            total_count=int(d["total_count"]),
            female_count=int(d["female_count"]),
            male_count=int(d["male_count"]),
            unknown_count=int(d.get("unknown_count", 0)),
            gender_balance=_opt_float(d.get("gender_balance")),
        )


@dataclass(frozen=True)
class NameSummary:
    total_count: int
    female_count: int
    male_count: int
    unknown_count: int
    gender_balance: Optional[float]
    has_unknown_data: bool
    name_start: int
    name_end: int
    countries: tuple[str, ...]

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "NameSummary":
        return cls(
            total_count=int(d["total_count"]),
            female_count=int(d["female_count"]),
            male_count=int(d["male_count"]),
            unknown_count=int(d.get("unknown_count", 0)),
            gender_balance=_opt_float(d.get("gender_balance")),
            has_unknown_data=bool(d.get("has_unknown_data", False)),
            name_start=int(d["name_start"]),
            name_end=int(d["name_end"]),
            countries=tuple(d.get("countries") or ()),
        )


@dataclass(frozen=True)
class NameTrendMeta:
    db_start: int
    db_end: int


@dataclass(frozen=True)
class NameTrendResponse:
    name: str
    meta: NameTrendMeta
    summary: NameSummary
    time_series: tuple[TimeSeriesPoint, ...]
    by_country: tuple[CountryStats, ...]

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "NameTrendResponse":
        meta = d["meta"]
        return cls(
            name=str(d["name"]),
            meta=NameTrendMeta(db_start=int(meta["db_start"]), db_end=int(meta["db_end"])),
            summary=NameSummary.from_dict(d["summary"]),
            time_series=tuple(TimeSeriesPoint.from_dict(p) for p in d.get("time_series") or ()),
            by_country=tuple(CountryStats.from_dict(c) for c in d.get("by_country") or ()),
        )


@dataclass(frozen=True)
class ApiErrorBody:
    code: str
    message: str

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> Optional["ApiErrorBody"]:
        if not isinstance(d, Mapping) or not d.get("message"):
            return None
        return cls(code=str(d.get("code") or "UNKNOWN_ERROR"), message=str(d["message"]))


# --- DataFrame views (consumed by tables and charts) ---

NAME_COLUMNS = [
    "rank",
    "name",
    "total_count",
    "female_count",
    "male_count",
    "unknown_count",
    "gender_balance",
    "cumulative_share",
    "name_start",
    "name_end",
    "countries",
]

TIME_SERIES_COLUMNS = ["year", "total_count", "female_count", "male_count", "unknown_count", "gender_balance"]

COUNTRY_COLUMNS = [
    "country_code",
    "country_name",
    "total_count",
    "female_count",
    "male_count",
    "unknown_count",
    "gender_balance",
]


def names_to_frame(resp: NamesListResponse) -> pd.DataFrame:
    rows = [
        {
            "rank": n.rank,
            "name": n.name,
            "total_count": n.total_count,
            "female_count": n.female_count,
            "male_count": n.male_count,
            "unknown_count": n.unknown_count,
            "gender_balance": n.gender_balance,
            "cumulative_share": n.cumulative_share,
            "name_start": n.name_start,
            "name_end": n.name_end,
            "countries": ", ".join(n.countries),
        }
        for n in resp.names
    ]
    return pd.DataFrame(rows, columns=NAME_COLUMNS)


def time_series_to_frame(points: tuple[TimeSeriesPoint, ...]) -> pd.DataFrame:
    df = pd.DataFrame(
        [{c: getattr(p, c) for c in TIME_SERIES_COLUMNS} for p in points],
        columns=TIME_SERIES_COLUMNS,
    )
    return df.sort_values("year").reset_index(drop=True)


def by_country_to_frame(stats: tuple[CountryStats, ...]) -> pd.DataFrame:
    df = pd.DataFrame(
        [{c: getattr(s, c) for c in COUNTRY_COLUMNS} for s in stats],
        columns=COUNTRY_COLUMNS,
    )
    return df.sort_values("total_count", ascending=False).reset_index(drop=True)
