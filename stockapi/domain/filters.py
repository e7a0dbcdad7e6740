"""
Filter expressions for the document collections.

Filters use the familiar document-store shape::

    {"name": "Apple"}                       # equality
    {"tags": ["fruit", "fresh"]}            # list field contains every element
    {"unitPrice": {"$gte": 1, "$lte": 3}}   # operators, ANDed together

Specs are compiled into small immutable condition objects up front so an
unsupported operator is reported before any document is scanned.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

SUPPORTED_OPERATORS = ("$in", "$gt", "$gte", "$lt", "$lte", "$ne", "$regex", "$options")


class FilterError(ValueError):
    """Raised when a filter or update uses an unsupported construct."""


_MISSING = object()


def _ordered(op: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def compare(value: Any, operand: Any) -> bool:
        if value is _MISSING or value is None:
            return False
        try:
            return bool(op(value, operand))
        except TypeError:
            return False

    return compare


_COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    "$gt": _ordered(lambda a, b: a > b),
    "$gte": _ordered(lambda a, b: a >= b),
    "$lt": _ordered(lambda a, b: a < b),
    "$lte": _ordered(lambda a, b: a <= b),
}


@dataclass(frozen=True)
class Equals:
    field: str
    value: Any

    def test(self, value: Any) -> bool:
        return value is not _MISSING and value == self.value


@dataclass(frozen=True)
class ContainsAll:
    field: str
    values: tuple

    def test(self, value: Any) -> bool:
        if not isinstance(value, list):
            return False
        return all(item in value for item in self.values)


@dataclass(frozen=True)
class InSet:
    field: str
    values: tuple

    def test(self, value: Any) -> bool:
        if value is _MISSING:
            return False
        # list fields match when any element is in the set
        if isinstance(value, list):
            return any(item in self.values for item in value)
        return value in self.values


@dataclass(frozen=True)
class NotEqual:
    field: str
    value: Any

    def test(self, value: Any) -> bool:
        return value is _MISSING or value != self.value


@dataclass(frozen=True)
class Compare:
    field: str
    operator: str
    operand: Any

    def test(self, value: Any) -> bool:
        return _COMPARATORS[self.operator](value, self.operand)


@dataclass(frozen=True)
class Regex:
    field: str
    pattern: re.Pattern

    def test(self, value: Any) -> bool:
        return isinstance(value, str) and self.pattern.search(value) is not None


@dataclass(frozen=True)
class Filter:
    """A conjunction of field conditions."""

    conditions: tuple = ()

    def __call__(self, document: Mapping[str, Any]) -> bool:
        return self.matches(document)

    def matches(self, document: Mapping[str, Any]) -> bool:
        for condition in self.conditions:
            if not condition.test(document.get(condition.field, _MISSING)):
                return False
        return True

    @property
    def is_empty(self) -> bool:
        return not self.conditions


def _compile_regex(field: str, pattern: Any, options: Any) -> Regex:
    if not isinstance(pattern, str):
        raise FilterError(f"$regex for '{field}' must be a string")
    flags = 0
    for flag in options or "":
        if flag == "i":
            flags |= re.IGNORECASE
        elif flag == "m":
            flags |= re.MULTILINE
        elif flag == "s":
            flags |= re.DOTALL
        else:
            raise FilterError(f"Unsupported $options flag '{flag}' for '{field}'")
    try:
        return Regex(field, re.compile(pattern, flags))
    except re.error as exc:
        raise FilterError(f"Invalid $regex for '{field}': {exc}") from exc


def _compile_operators(field: str, operators: Mapping[str, Any]) -> list:
    unknown = [key for key in operators if key not in SUPPORTED_OPERATORS]
    if unknown:
        raise FilterError(f"Unsupported operator(s) for '{field}': {', '.join(sorted(unknown))}")
    if "$options" in operators and "$regex" not in operators:
        raise FilterError(f"$options for '{field}' requires $regex")
    conditions: list = []
    for key, operand in operators.items():
        if key == "$in":
            if not isinstance(operand, (list, tuple, set)):
                raise FilterError(f"$in for '{field}' must be a list")
            conditions.append(InSet(field, tuple(operand)))
        elif key == "$ne":
            conditions.append(NotEqual(field, operand))
        elif key == "$regex":
            conditions.append(_compile_regex(field, operand, operators.get("$options")))
        elif key in _COMPARATORS:
            conditions.append(Compare(field, key, operand))
    return conditions


def compile_filter(spec: Optional[Mapping[str, Any]] | Filter) -> Filter:
    """Turn a filter spec into a :class:`Filter`; ``None`` and ``{}`` match everything."""
    if isinstance(spec, Filter):
        return spec
    if not spec:
        return Filter()
    if not isinstance(spec, Mapping):
        raise FilterError("Filter must be a mapping of field names to conditions")
    conditions: list = []
    for field, value in spec.items():
        if not isinstance(field, str) or field.startswith("$"):
            raise FilterError(f"Unsupported filter key: {field!r}")
        if isinstance(value, (list, tuple)):
            conditions.append(ContainsAll(field, tuple(value)))
        elif isinstance(value, Mapping) and any(str(k).startswith("$") for k in value):
            conditions.extend(_compile_operators(field, value))
        else:
            conditions.append(Equals(field, value))
    return Filter(tuple(conditions))


def matches(document: Mapping[str, Any], spec: Optional[Mapping[str, Any]] | Filter) -> bool:
    return compile_filter(spec).matches(document)
