"""
Navigation helpers.

Streamlit has a single script URL, so routes are carried as query params:
`?view=names` for the explorer and `?view=name&name=Alex` for a detail page.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Union
from urllib.parse import parse_qsl, urlencode

import streamlit as st


ROUTES = {
    "main": "landing",
    "names": "names",
    "name_detail": "name",
}

VIEWS = ("landing", "names", "name")


@dataclass(frozen=True)
class Route:
    view: str
    name: Optional[str] = None


def build_url_with_params(path: str, params: Optional[Mapping[str, Union[str, int, float, bool, None]]] = None) -> str:
    if not params:
        return path
    pairs = [(k, str(v).lower() if isinstance(v, bool) else str(v)) for k, v in params.items() if v is not None]
    qs = urlencode(pairs)
    return f"{path}?{qs}" if qs else path


def build_name_detail_url(name: str) -> str:
    return build_url_with_params("", {"view": ROUTES["name_detail"], "name": name})


def get_query_params(search: str) -> dict[str, str]:
    """Parse a `?a=1&b=2` string; later duplicates win."""
    return dict(parse_qsl(search.lstrip("?"), keep_blank_values=True))


def resolve_route(query_params: Mapping[str, str], default_view: str = "landing") -> Route:
    view = query_params.get("view") or default_view
    if view not in VIEWS:
        view = default_view
    if view == ROUTES["name_detail"]:
        name = (query_params.get("name") or "").strip()
        return Route(view=view, name=name or None)
    return Route(view=view)


def navigate(view: str, name: Optional[str] = None) -> None:
    """Switch route by rewriting the query params, then rerun the script."""
    st.query_params.clear()
    st.query_params["view"] = view
    if name:
        st.query_params["name"] = name
    st.rerun()


def navigate_to(url: str) -> None:
    """Follow an in-app link such as `build_name_detail_url(...)`."""
    route = resolve_route(get_query_params(url.partition("?")[2]))
    navigate(route.view, route.name)
