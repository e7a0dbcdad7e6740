"""Generic CRUD helpers shared by the entity repositories."""
from __future__ import annotations

import re
from typing import Any, Iterable, Mapping, Optional

from stockapi.db.collection import DEFAULT_SORT, DocumentCollection, Page


def name_pattern(search_term: str) -> dict:
    """Case-insensitive substring match on a text field."""
    return {"$regex": re.escape(search_term or ""), "$options": "i"}


class BaseRepository:
    """CRUD helpers wrapping one document collection."""

    def __init__(self, collection: DocumentCollection) -> None:
        self.collection = collection

    # -------------------------- reads --------------------------
    def find_all(self, filter: Optional[Mapping[str, Any]] = None) -> list[dict]:
        return self.collection.find(filter)

    def find_one(self, filter: Mapping[str, Any]) -> Optional[dict]:
        return self.collection.find_one(filter)

    def find_by_id(self, doc_id: str) -> Optional[dict]:
        return self.collection.find_by_id(doc_id)

    def count(self, filter: Optional[Mapping[str, Any]] = None) -> int:
        return self.collection.count_documents(filter)

    def exists(self, filter: Mapping[str, Any]) -> bool:
        return self.collection.exists(filter)

    def find_with_pagination(
        self,
        filter: Optional[Mapping[str, Any]] = None,
        page: int = 1,
        limit: int = 10,
        sort: Optional[Mapping[str, Any]] = None,
    ) -> Page:
        return self.collection.find_with_pagination(filter, page, limit, sort or DEFAULT_SORT)

    # -------------------------- writes --------------------------
    def create(self, data: Mapping[str, Any]) -> dict:
        return self.collection.create(data)

    def create_many(self, data: Iterable[Mapping[str, Any]]) -> list[dict]:
        return self.collection.insert_many(data)

    def update_by_id(self, doc_id: str, updates: Mapping[str, Any], *, return_updated: bool = True) -> Optional[dict]:
        return self.collection.find_by_id_and_update(doc_id, updates, return_updated=return_updated)

    def update_one(
        self, filter: Mapping[str, Any], updates: Mapping[str, Any], *, return_updated: bool = True
    ) -> Optional[dict]:
        return self.collection.find_one_and_update(filter, updates, return_updated=return_updated)

    def update_many(self, filter: Mapping[str, Any], updates: Mapping[str, Any]) -> int:
        return self.collection.update_many(filter, updates)

    def delete_by_id(self, doc_id: str) -> Optional[dict]:
        return self.collection.find_by_id_and_delete(doc_id)

    def delete_one(self, filter: Mapping[str, Any]) -> Optional[dict]:
        return self.collection.find_one_and_delete(filter)

    def delete_many(self, filter: Mapping[str, Any]) -> int:
        return self.collection.delete_many(filter)
