"""
JSON-file persistence for local development.

Each collection lives in ``<data_dir>/local-<name>.json`` as a JSON array.
The file is read once at startup and rewritten in full after every
successful mutation; the new state is adopted in memory only once the file
write went through.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from stockapi.db.codec import decode_document, encode_document
from stockapi.db.collection import DocumentCollection, StorageError
from stockapi.domain.schema import Schema

logger = logging.getLogger(__name__)


def collection_path(data_dir: str | os.PathLike, name: str) -> Path:
    return Path(data_dir) / f"local-{name}.json"


class LocalCollection(DocumentCollection):
    """Collection backed by a single JSON file."""

    def __init__(self, name: str, data_dir: str | os.PathLike, schema: Optional[Schema] = None) -> None:
        super().__init__(name, schema)
        self.path = collection_path(data_dir, name)
        self._docs: list[dict] = []
        self.load()

    def load(self) -> None:
        """(Re)read the backing file; unreadable files leave the collection empty."""
        with self._lock:
            try:
                if self.path.exists():
                    with self.path.open("r", encoding="utf-8") as f:
                        raw = json.load(f)
                    if not isinstance(raw, list):
                        raise ValueError(f"{self.path} does not contain a JSON array")
                    self._docs = self._decode_all(raw)
                else:
                    self._write([])
                    self._docs = []
            except (OSError, ValueError, TypeError, StorageError):
                logger.exception("Error loading collection %s from %s", self.name, self.path)
                self._docs = []

    def _decode_all(self, raw: list) -> list[dict]:
        docs: list[dict] = []
        for index, entry in enumerate(raw):
            try:
                docs.append(decode_document(entry, self.schema))
            except (TypeError, ValueError) as exc:
                logger.warning("Skipping record %d of %s: %s", index, self.path, exc)
        return docs

    def _write(self, docs: list[dict]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            payload = json.dumps([encode_document(doc) for doc in docs], ensure_ascii=False, indent=2)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Error saving collection %s to %s: %s", self.name, self.path, exc)
            if tmp_path.exists():
                try:
                    tmp_path.unlink()
                except OSError:
                    logger.warning("Could not remove temporary file %s", tmp_path)
            raise StorageError(f"Could not persist collection '{self.name}'") from exc

    def _commit(self, docs: list[dict]) -> None:
        self._write(docs)
        self._docs = docs

    # -------------------------- storage hooks --------------------------
    def _documents(self) -> list[dict]:
        return self._docs

    def _commit_insert(self, documents: list[dict]) -> None:
        self._commit(self._docs + list(documents))

    def _commit_replace(self, documents: list[dict]) -> None:
        replacements = {doc["_id"]: doc for doc in documents}
        self._commit([replacements.get(doc["_id"], doc) for doc in self._docs])

    def _commit_delete(self, ids: list[str]) -> None:
        removed = set(ids)
        self._commit([doc for doc in self._docs if doc["_id"] not in removed])
