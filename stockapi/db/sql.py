"""Document collections backed by SQLAlchemy."""
from __future__ import annotations

import logging
from typing import Callable, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockapi.db.codec import TIMESTAMP_FIELDS, decode_document, encode_document
from stockapi.db.collection import DocumentCollection, StorageError
from stockapi.db.models import DocumentRecord
from stockapi.db.session import get_session
from stockapi.domain.schema import Schema

logger = logging.getLogger(__name__)


def _payload(document: dict) -> dict:
    return encode_document({k: v for k, v in document.items() if k != "_id" and k not in TIMESTAMP_FIELDS})


class SqlCollection(DocumentCollection):
    """CRUD hooks wrapping the SQLAlchemy session; one row per document."""

    def __init__(self, name: str, session_factory: Callable[[], Session], schema: Optional[Schema] = None) -> None:
        super().__init__(name, schema)
        self._session_factory = session_factory

    def _to_document(self, row: DocumentRecord) -> dict:
        raw = {"_id": row.doc_id, **(row.data or {}), "createdAt": row.created_at, "updatedAt": row.updated_at}
        return decode_document(raw, self.schema)

    def _write(self, action: Callable[[Session], None]) -> None:
        with get_session(self._session_factory) as session:
            try:
                action(session)
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                logger.error("Error saving collection %s: %s", self.name, exc)
                raise StorageError(f"Could not persist collection '{self.name}'") from exc

    # -------------------------- storage hooks --------------------------
    def _documents(self) -> list[dict]:
        with get_session(self._session_factory) as session:
            stmt = select(DocumentRecord).where(DocumentRecord.collection == self.name).order_by(DocumentRecord.seq)
            rows = session.execute(stmt).scalars().all()
            return [self._to_document(row) for row in rows]

    def _commit_insert(self, documents: list[dict]) -> None:
        def action(session: Session) -> None:
            for doc in documents:
                session.add(
                    DocumentRecord(
                        collection=self.name,
                        doc_id=doc["_id"],
                        data=_payload(doc),
                        created_at=doc["createdAt"],
                        updated_at=doc["updatedAt"],
                    )
                )

        self._write(action)

    def _commit_replace(self, documents: list[dict]) -> None:
        def action(session: Session) -> None:
            for doc in documents:
                stmt = (
                    update(DocumentRecord)
                    .where(DocumentRecord.collection == self.name, DocumentRecord.doc_id == doc["_id"])
                    .values(data=_payload(doc), updated_at=doc["updatedAt"])
                )
                session.execute(stmt)

        self._write(action)

    def _commit_delete(self, ids: list[str]) -> None:
        def action(session: Session) -> None:
            session.execute(
                delete(DocumentRecord).where(DocumentRecord.collection == self.name, DocumentRecord.doc_id.in_(ids))
            )

        self._write(action)
