"""
Mock-mode fixtures.

Static JSON payloads shaped exactly like live API responses. Every call
parses the file again so callers always receive a fresh snapshot.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from data.models import CountriesResponse, MetaYearsResponse, NamesListResponse, NameTrendResponse


FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

# Search term that mock mode answers with the empty-result fixture.
EMPTY_RESULTS_SEARCH = "xyz123"


def load_fixture(filename: str) -> dict[str, Any]:
    with open(FIXTURES_DIR / filename, "r", encoding="utf-8") as f:
        return json.load(f)


def meta_years_fixture() -> MetaYearsResponse:
    return MetaYearsResponse.from_dict(load_fixture("meta-years.json"))


def countries_fixture() -> CountriesResponse:
    return CountriesResponse.from_dict(load_fixture("countries.json"))


def names_list_fixture() -> NamesListResponse:
    return NamesListResponse.from_dict(load_fixture("names-list.json"))


def names_list_empty_fixture() -> NamesListResponse:
    return NamesListResponse.from_dict(load_fixture("names-list-empty.json"))


def name_detail_fixture() -> NameTrendResponse:
    return NameTrendResponse.from_dict(load_fixture("name-detail.json"))
