"""
Field schemas and the validation rules applied before a document is stored.

A schema is an ordered mapping ``field name -> FieldSpec``. Validation walks
the fields in declaration order and stops at the first failure.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field as dc_field
from datetime import date, datetime, timezone
from typing import Any, Iterable, Mapping, Optional

FIELD_TYPES = ("string", "number", "boolean", "array", "object", "date")


class ValidationError(ValueError):
    """Raised when a candidate document breaks a schema rule."""

    def __init__(self, field: str, rule: str, message: str):
        super().__init__(message)
        self.field = field
        self.rule = rule
        self.message = message


@dataclass(frozen=True)
class FieldSpec:
    type: Optional[str] = None
    required: bool = False
    enum: Optional[tuple] = None
    unique: bool = False
    default: Any = None
    of: Optional[Mapping[str, "FieldSpec"]] = dc_field(default=None, hash=False)

    def __post_init__(self) -> None:
        if self.type is not None and self.type not in FIELD_TYPES:
            raise ValueError(f"Unknown field type: {self.type}")
        if self.of is not None and self.type != "array":
            raise ValueError("Element schemas are only allowed on array fields")


Schema = Mapping[str, FieldSpec]


def date_fields(schema: Optional[Schema]) -> tuple[str, ...]:
    if not schema:
        return ()
    return tuple(name for name, spec in schema.items() if spec.type == "date")


def parse_datetime(value: Any) -> Any:
    """Parse ISO-8601 text into an aware UTC datetime; other values pass through."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        return value
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return value
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def cast_document(document: Mapping[str, Any], schema: Optional[Schema]) -> dict:
    """Return a copy with ``date`` fields parsed from text."""
    result = dict(document)
    for name in date_fields(schema):
        if name in result:
            result[name] = parse_datetime(result[name])
    return result


def apply_defaults(document: Mapping[str, Any], schema: Optional[Schema]) -> dict:
    result = dict(document)
    for name, spec in (schema or {}).items():
        if spec.default is not None and result.get(name) is None:
            result[name] = copy.deepcopy(spec.default)
    return result


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def _type_matches(expected: str, value: Any) -> bool:
    if expected == "string":
        return isinstance(value, str)
    if expected == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if expected == "boolean":
        return isinstance(value, bool)
    if expected == "array":
        return isinstance(value, list)
    if expected == "object":
        return isinstance(value, dict)
    if expected == "date":
        return isinstance(value, (datetime, date))
    return True


def _check_field(path: str, spec: FieldSpec, present: bool, value: Any) -> None:
    if spec.required and (not present or _is_empty(value)):
        raise ValidationError(path, "required", f"Path `{path}` is required.")
    if not present or value is None:
        return
    if spec.enum is not None and value not in spec.enum:
        allowed = ", ".join(map(str, spec.enum))
        raise ValidationError(path, "enum", f"`{value}` is not a valid value for `{path}` (allowed: {allowed}).")
    if spec.type is not None and not _type_matches(spec.type, value):
        raise ValidationError(path, "type", f"Path `{path}` must be of type {spec.type}.")
    if spec.of is not None:
        for index, element in enumerate(value):
            element_path = f"{path}[{index}]"
            if not isinstance(element, dict):
                raise ValidationError(element_path, "type", f"Path `{element_path}` must be of type object.")
            for name, sub_spec in spec.of.items():
                _check_field(f"{element_path}.{name}", sub_spec, name in element, element.get(name))


def validate(
    candidate: Mapping[str, Any],
    schema: Optional[Schema],
    existing: Iterable[Mapping[str, Any]] = (),
    exclude_id: Optional[str] = None,
) -> None:
    """Raise :class:`ValidationError` on the first field that breaks its rules."""
    if not schema:
        return
    others = None
    for name, spec in schema.items():
        present = name in candidate
        value = candidate.get(name)
        _check_field(name, spec, present, value)
        if not spec.unique or not present or value is None:
            continue
        if others is None:
            others = [doc for doc in existing if doc.get("_id") != exclude_id]
        for doc in others:
            if name in doc and doc[name] == value:
                raise ValidationError(name, "unique", f"Duplicate value for `{name}`: {value!r} already exists.")
