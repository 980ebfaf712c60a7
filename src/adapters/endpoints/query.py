"""Construcción de query strings y paths para los endpoints."""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote, urlencode


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(params: Mapping[str, Any]) -> str:
    """Render `params` as ``"?k=v&..."``, or ``""`` when nothing is left.

    - `None` values are dropped.
    - Lists and tuples repeat the key once per element, in order.
    - Everything else becomes a single ``key=value`` pair.
    """

    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _to_text(item)) for item in value)
            continue
        pairs.append((key, _to_text(value)))

    query = urlencode(pairs)
    return f"?{query}" if query else ""


def path_segment(value: str) -> str:
    """Percent-encode an identifier embedded in a URL path."""

    return quote(str(value), safe="")
