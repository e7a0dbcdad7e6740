"""Conversion between stored JSON payloads and in-memory documents."""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional

from stockapi.domain.schema import Schema, date_fields, parse_datetime

TIMESTAMP_FIELDS = ("createdAt", "updatedAt")


def _encode(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _encode(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    return value


def encode_document(document: Mapping[str, Any]) -> dict:
    """Return a JSON-ready copy; temporal values become ISO-8601 text."""
    return {key: _encode(value) for key, value in document.items()}


def decode_document(raw: Mapping[str, Any], schema: Optional[Schema] = None) -> dict:
    """Rebuild a document read from storage, turning timestamp and date fields back into datetimes."""
    if not isinstance(raw, Mapping):
        raise TypeError(f"Stored document must be an object, got {type(raw).__name__}")
    if "_id" not in raw:
        raise ValueError("Stored document has no _id")
    document = dict(raw)
    for name in TIMESTAMP_FIELDS + date_fields(schema):
        if document.get(name) is not None:
            document[name] = parse_datetime(document[name])
    return document
