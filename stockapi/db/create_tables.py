"""Create the documents table on DATABASE_URL and report how many documents each collection holds."""
from __future__ import annotations

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from stockapi.db.models import DocumentRecord
from stockapi.db.session import Base, get_engine
from stockapi.domain.models import COLLECTION_SCHEMAS


def create_all(engine: Optional[Engine] = None) -> dict[str, int]:
    """Create missing tables; returns the document count per collection."""
    engine = engine or get_engine()
    Base.metadata.create_all(bind=engine)
    stmt = select(DocumentRecord.collection, func.count()).group_by(DocumentRecord.collection)
    with engine.connect() as conn:
        stored = {name: count for name, count in conn.execute(stmt)}
    counts = {name: 0 for name in COLLECTION_SCHEMAS}
    counts.update(stored)
    return counts


if __name__ == "__main__":
    try:
        counts = create_all()
    except (SQLAlchemyError, RuntimeError) as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    print("Documents table ready.")
    for name, count in counts.items():
        print(f"  {name}: {count}")
