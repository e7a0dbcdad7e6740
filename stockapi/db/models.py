"""SQLAlchemy table holding documents for the SQL backing."""
from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    JSON,
    String,
    UniqueConstraint,
    func,
)

from .session import Base


class DocumentRecord(Base):
    """One document of one collection; entity fields live in ``data``."""

    __tablename__ = "documents"
    __table_args__ = (UniqueConstraint("collection", "doc_id", name="uq_documents_collection_doc_id"),)

    # insertion order within a collection
    seq = Column(Integer, primary_key=True, autoincrement=True)
    collection = Column(String(64), nullable=False, index=True)
    doc_id = Column(String(24), nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
