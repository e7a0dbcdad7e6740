"""Query-string parsing helpers shared by the routers."""
from __future__ import annotations

from typing import Iterable, Mapping, Optional


def parse_int(value: str | None, default: Optional[int] = None) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def parse_float(value: str | None, default: Optional[float] = None) -> Optional[float]:
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return default
    if number != number:  # NaN
        return default
    return number


def parse_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_csv(value: str | None) -> list[str]:
    return [part.strip() for part in (value or "").split(",") if part.strip()]


def wants_pagination(params: Mapping[str, str]) -> bool:
    return bool(params.get("page") or params.get("limit"))


def pagination_args(params: Mapping[str, str], default_limit: int) -> tuple[int, int]:
    """Return ``(page, limit)``; invalid or non-positive values fall back to defaults."""
    page = parse_int(params.get("page"), 1) or 1
    limit = parse_int(params.get("limit"), default_limit) or default_limit
    return (page if page > 0 else 1, limit if limit > 0 else default_limit)


def field_filter(params: Mapping[str, str], fields: Iterable[str] | Mapping[str, str]) -> dict:
    """
    Build an equality filter from the whitelisted query parameters.

    ``fields`` may map a query parameter name to a document field name
    (``{"businessId": "business"}``).
    """
    mapping = fields if isinstance(fields, Mapping) else {name: name for name in fields}
    filter_spec: dict = {}
    for param, field in mapping.items():
        value = params.get(param)
        if value not in (None, ""):
            filter_spec[field] = value
    return filter_spec
