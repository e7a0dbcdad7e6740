"""
Document-store contract shared by the local-file and SQL backings.

``DocumentCollection`` implements every read/write operation on top of four
storage hooks. Subclasses decide where documents live; the base class owns
filtering, validation, id/timestamp assignment, sorting and pagination.

All operations on one collection are serialized with a re-entrant lock.
Documents handed back to callers are deep copies.
"""
from __future__ import annotations

import copy
import logging
import math
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from stockapi.domain.filters import Filter, FilterError, compile_filter
from stockapi.domain.ids import generate_object_id, is_object_id
from stockapi.domain.schema import (
    Schema,
    ValidationError,
    apply_defaults,
    cast_document,
    parse_datetime,
    validate,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
DEFAULT_SORT = {"createdAt": -1}
PROTECTED_FIELDS = ("_id", "createdAt", "updatedAt")


class StorageError(RuntimeError):
    """Raised when a collection cannot persist its state."""


@dataclass
class Page:
    items: list
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.page * self.limit < self.total

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def to_dict(self) -> dict:
        return {
            "items": self.items,
            "pagination": {
                "page": self.page,
                "limit": self.limit,
                "total": self.total,
                "totalPages": self.total_pages,
                "hasNext": self.has_next,
                "hasPrev": self.has_prev,
            },
        }


def normalize_page_args(page: Any, page_size: Any) -> tuple[int, int]:
    def _positive(value: Any, default: int) -> int:
        if isinstance(value, bool):
            return default
        try:
            number = int(value)
        except (TypeError, ValueError):
            return default
        return number if number > 0 else default

    return _positive(page, DEFAULT_PAGE), _positive(page_size, DEFAULT_PAGE_SIZE)


def _sort_key(value: Any) -> tuple:
    # missing values first, then numbers, strings, objects, arrays, booleans, dates
    if value is None:
        return (0, 0)
    if isinstance(value, bool):
        return (5, value)
    if isinstance(value, (int, float)):
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    if isinstance(value, (datetime, date)):
        return (6, parse_datetime(value))
    if isinstance(value, list):
        return (4, repr(value))
    return (3, repr(value))


def _direction(field: str, value: Any) -> bool:
    """Return True for descending order."""
    if value in (1, "1", "asc", "ascending"):
        return False
    if value in (-1, "-1", "desc", "descending"):
        return True
    raise FilterError(f"Invalid sort direction for '{field}': {value!r}")


def sort_documents(documents: Iterable[Mapping[str, Any]], sort: Optional[Mapping[str, Any]]) -> list:
    """Stable multi-key sort; the first key in ``sort`` has the highest priority."""
    ordered = list(documents)
    for field, direction in reversed(list((sort or {}).items())):
        descending = _direction(field, direction)
        ordered.sort(key=lambda doc: _sort_key(doc.get(field)), reverse=descending)
    return ordered


def _now() -> datetime:
    return datetime.now(timezone.utc)


class DocumentCollection(ABC):
    """Ordered documents of one entity kind."""

    def __init__(self, name: str, schema: Optional[Schema] = None) -> None:
        self.name = name
        self.schema = schema
        self._lock = threading.RLock()

    # -------------------------- storage hooks --------------------------
    @abstractmethod
    def _documents(self) -> list[dict]:
        """Current documents in insertion order. Callers never mutate them."""

    @abstractmethod
    def _commit_insert(self, documents: list[dict]) -> None:
        ...

    @abstractmethod
    def _commit_replace(self, documents: list[dict]) -> None:
        ...

    @abstractmethod
    def _commit_delete(self, ids: list[str]) -> None:
        ...

    # -------------------------- helpers --------------------------
    def _first(self, flt: Filter) -> Optional[dict]:
        for doc in self._documents():
            if flt.matches(doc):
                return doc
        return None

    def _by_id(self, doc_id: str) -> Optional[dict]:
        for doc in self._documents():
            if doc.get("_id") == doc_id:
                return doc
        return None

    def _prepare_new(self, data: Any, existing: list[dict], taken: set, now: datetime) -> dict:
        if not isinstance(data, Mapping):
            raise ValidationError("document", "type", "Document must be an object.")
        fields = copy.deepcopy(dict(data))
        supplied_id = fields.pop("_id", None)
        fields.pop("createdAt", None)
        fields.pop("updatedAt", None)
        fields = apply_defaults(cast_document(fields, self.schema), self.schema)
        validate(fields, self.schema, existing)

        if supplied_id is not None:
            if not is_object_id(supplied_id):
                raise ValidationError("_id", "type", f"`{supplied_id}` is not a valid identifier.")
            if supplied_id in taken:
                raise ValidationError("_id", "unique", f"Duplicate value for `_id`: {supplied_id!r} already exists.")
            doc_id = supplied_id
        else:
            doc_id = generate_object_id()
            while doc_id in taken:
                logger.warning("Identifier clash in %s; regenerating", self.name)
                doc_id = generate_object_id()
        return {"_id": doc_id, **fields, "createdAt": now, "updatedAt": now}

    def _clean_update(self, update: Any) -> dict:
        if not isinstance(update, Mapping):
            raise FilterError("Update must be a mapping of field names to values")
        operators = [key for key in update if str(key).startswith("$")]
        if operators:
            raise FilterError(f"Update operators are not supported: {', '.join(map(str, operators))}")
        changes = {key: value for key, value in update.items() if key not in PROTECTED_FIELDS}
        return cast_document(copy.deepcopy(changes), self.schema)

    def _merge(self, target: Mapping[str, Any], changes: Mapping[str, Any], now: datetime) -> dict:
        merged = copy.deepcopy(dict(target))
        merged.update(copy.deepcopy(dict(changes)))
        merged["_id"] = target["_id"]
        merged["createdAt"] = target["createdAt"]
        merged["updatedAt"] = now
        return merged

    def _apply_update(self, target: Optional[dict], update: Any, return_updated: bool) -> Optional[dict]:
        changes = self._clean_update(update)
        if target is None:
            return None
        merged = self._merge(target, changes, _now())
        validate(merged, self.schema, self._documents(), exclude_id=target["_id"])
        previous = copy.deepcopy(target)
        self._commit_replace([merged])
        return copy.deepcopy(merged) if return_updated else previous

    # -------------------------- reads --------------------------
    def find(self, filter: Optional[Mapping[str, Any]] = None) -> list[dict]:
        flt = compile_filter(filter)
        with self._lock:
            return [copy.deepcopy(doc) for doc in self._documents() if flt.matches(doc)]

    def find_one(self, filter: Optional[Mapping[str, Any]] = None) -> Optional[dict]:
        flt = compile_filter(filter)
        with self._lock:
            doc = self._first(flt)
            return copy.deepcopy(doc) if doc is not None else None

    def find_by_id(self, doc_id: str) -> Optional[dict]:
        with self._lock:
            doc = self._by_id(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def count_documents(self, filter: Optional[Mapping[str, Any]] = None) -> int:
        flt = compile_filter(filter)
        with self._lock:
            return sum(1 for doc in self._documents() if flt.matches(doc))

    def exists(self, filter: Optional[Mapping[str, Any]] = None) -> bool:
        flt = compile_filter(filter)
        with self._lock:
            return self._first(flt) is not None

    def find_with_pagination(
        self,
        filter: Optional[Mapping[str, Any]] = None,
        page: Any = DEFAULT_PAGE,
        page_size: Any = DEFAULT_PAGE_SIZE,
        sort: Optional[Mapping[str, Any]] = None,
    ) -> Page:
        flt = compile_filter(filter)
        page, page_size = normalize_page_args(page, page_size)
        with self._lock:
            matched = [doc for doc in self._documents() if flt.matches(doc)]
            ordered = sort_documents(matched, sort or DEFAULT_SORT)
            start = (page - 1) * page_size
            items = [copy.deepcopy(doc) for doc in ordered[start : start + page_size]]
        return Page(items=items, page=page, limit=page_size, total=len(matched))

    # -------------------------- writes --------------------------
    def create(self, data: Mapping[str, Any]) -> dict:
        with self._lock:
            existing = self._documents()
            taken = {doc["_id"] for doc in existing}
            doc = self._prepare_new(data, existing, taken, _now())
            self._commit_insert([doc])
            logger.debug("Created %s/%s", self.name, doc["_id"])
            return copy.deepcopy(doc)

    def insert_many(self, inputs: Iterable[Mapping[str, Any]]) -> list[dict]:
        """Validate every input before inserting any of them."""
        if isinstance(inputs, Mapping) or not isinstance(inputs, Iterable):
            raise ValidationError("documents", "type", "insert_many expects a list of documents.")
        with self._lock:
            existing = list(self._documents())
            taken = {doc["_id"] for doc in existing}
            now = _now()
            prepared: list[dict] = []
            for data in inputs:
                doc = self._prepare_new(data, existing + prepared, taken, now)
                taken.add(doc["_id"])
                prepared.append(doc)
            if prepared:
                self._commit_insert(prepared)
                logger.debug("Inserted %d documents into %s", len(prepared), self.name)
            return [copy.deepcopy(doc) for doc in prepared]

    def restore(self, documents: Iterable[Mapping[str, Any]]) -> int:
        """
        Insert documents exported from another backing as they are.

        Identifiers and timestamps are kept; documents whose ``_id`` is
        already present are skipped. Returns the number inserted.
        """
        with self._lock:
            taken = {doc["_id"] for doc in self._documents()}
            fresh: list[dict] = []
            for doc in documents:
                if doc.get("_id") in taken:
                    continue
                if not is_object_id(doc.get("_id")) or not all(doc.get(f) for f in ("createdAt", "updatedAt")):
                    raise ValidationError("_id", "type", "Restored documents need an identifier and timestamps.")
                fresh.append(copy.deepcopy(dict(doc)))
                taken.add(doc["_id"])
            if fresh:
                self._commit_insert(fresh)
            return len(fresh)

    def find_by_id_and_update(
        self, doc_id: str, update: Mapping[str, Any], return_updated: bool = True
    ) -> Optional[dict]:
        with self._lock:
            return self._apply_update(self._by_id(doc_id), update, return_updated)

    def find_one_and_update(
        self,
        filter: Optional[Mapping[str, Any]],
        update: Mapping[str, Any],
        return_updated: bool = True,
    ) -> Optional[dict]:
        flt = compile_filter(filter)
        with self._lock:
            return self._apply_update(self._first(flt), update, return_updated)

    def update_many(self, filter: Optional[Mapping[str, Any]], update: Mapping[str, Any]) -> int:
        """Merge ``update`` into every match; all merged documents must validate before any is stored."""
        flt = compile_filter(filter)
        with self._lock:
            changes = self._clean_update(update)
            current = {doc["_id"]: doc for doc in self._documents()}
            now = _now()
            updated: list[dict] = []
            for doc_id, doc in list(current.items()):
                if not flt.matches(doc):
                    continue
                merged = self._merge(doc, changes, now)
                validate(merged, self.schema, current.values(), exclude_id=doc_id)
                current[doc_id] = merged
                updated.append(merged)
            if updated:
                self._commit_replace(updated)
            return len(updated)

    def find_by_id_and_delete(self, doc_id: str) -> Optional[dict]:
        with self._lock:
            doc = self._by_id(doc_id)
            if doc is None:
                return None
            removed = copy.deepcopy(doc)
            self._commit_delete([doc_id])
            return removed

    def find_one_and_delete(self, filter: Optional[Mapping[str, Any]]) -> Optional[dict]:
        flt = compile_filter(filter)
        with self._lock:
            doc = self._first(flt)
            if doc is None:
                return None
            removed = copy.deepcopy(doc)
            self._commit_delete([doc["_id"]])
            return removed

    def delete_many(self, filter: Optional[Mapping[str, Any]] = None) -> int:
        flt = compile_filter(filter)
        with self._lock:
            ids = [doc["_id"] for doc in self._documents() if flt.matches(doc)]
            if ids:
                self._commit_delete(ids)
            return len(ids)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name!r}>"
