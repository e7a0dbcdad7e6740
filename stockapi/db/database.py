"""
Database facade.

Chooses between local JSON files (development) and the SQL backend
(production) and exposes one collection per entity kind under a stable name:

    db = Database(get_settings()).connect()
    db.items.find({"tags": ["fruit"]})

Environment variables (see ``stockapi.core.config``):
- ``DB_MODE``: ``local`` | ``sql`` (explicit override)
- ``APP_ENV``: ``prod``/``production`` selects ``sql`` when DB_MODE is unset
- ``DATABASE_URL``: required in ``sql`` mode
- ``LOCAL_DATA_DIR``: directory for the ``local-<name>.json`` files
- ``SEED_DB``: ``true`` reseeds the local collections on connect
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from stockapi.core.config import Settings, get_settings
from stockapi.db.collection import DocumentCollection
from stockapi.db.create_tables import create_all
from stockapi.db.local import LocalCollection
from stockapi.db.session import create_db_engine, make_sessionmaker
from stockapi.db.sql import SqlCollection
from stockapi.domain.models import COLLECTION_SCHEMAS

logger = logging.getLogger(__name__)

COLLECTION_NAMES = tuple(COLLECTION_SCHEMAS)


class DbMode(str, Enum):
    LOCAL = "local"
    SQL = "sql"


def resolve_db_mode(settings: Settings) -> DbMode:
    explicit = (settings.db_mode or "").lower()
    if explicit == DbMode.SQL.value:
        return DbMode.SQL
    if explicit == DbMode.LOCAL.value:
        return DbMode.LOCAL
    if explicit:
        logger.warning("Unknown DB_MODE %r; deriving the mode from APP_ENV", explicit)
    if settings.is_production:
        return DbMode.SQL
    return DbMode.LOCAL


class Database:
    """Owns the collections for one process; construct at startup, close at shutdown."""

    def __init__(self, settings: Optional[Settings] = None, mode: Optional[DbMode] = None) -> None:
        self.settings = settings or get_settings()
        self.mode = DbMode(mode) if mode else resolve_db_mode(self.settings)
        self._collections: dict[str, DocumentCollection] = {}
        self._engine = None

    @property
    def is_connected(self) -> bool:
        return bool(self._collections)

    @property
    def is_local(self) -> bool:
        return self.mode is DbMode.LOCAL

    def connect(self) -> "Database":
        if self._collections:
            return self
        if self.is_local:
            data_dir = self.settings.data_dir
            logger.info("Using local JSON file storage in %s", data_dir)
            self._collections = {
                name: LocalCollection(name, data_dir, schema) for name, schema in COLLECTION_SCHEMAS.items()
            }
        else:
            logger.info("Connecting to SQL database")
            engine = create_db_engine(self.settings.database_url)
            counts = create_all(engine)
            logger.info("SQL collections ready: %s", counts)
            factory = make_sessionmaker(engine)
            self._engine = engine
            self._collections = {
                name: SqlCollection(name, factory, schema) for name, schema in COLLECTION_SCHEMAS.items()
            }
        if self.is_local and self.settings.seed_db:
            self.seed()
        return self

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
        self._collections = {}
        logger.info("Database closed")

    def collection(self, name: str) -> DocumentCollection:
        if not self._collections:
            raise RuntimeError("Database is not connected; call connect() first")
        try:
            return self._collections[name]
        except KeyError:
            raise KeyError(f"Unknown collection: {name}") from None

    def __getattr__(self, name: str) -> DocumentCollection:
        if name in COLLECTION_SCHEMAS:
            return self.collection(name)
        raise AttributeError(name)

    def seed(self) -> dict[str, int]:
        """Clear every collection and insert the sample dataset (local mode only)."""
        if not self.is_local:
            logger.info("Seeding is only available in local mode")
            return {}
        from stockapi.db.seed_data import sample_documents

        logger.info("Seeding local database with sample data")
        for name in COLLECTION_NAMES:
            self.collection(name).delete_many({})
        counts: dict[str, int] = {}
        for name, documents in sample_documents().items():
            counts[name] = len(self.collection(name).insert_many(documents))
            logger.info("Seeded %d %s", counts[name], name)
        return counts

    def __enter__(self) -> "Database":
        return self.connect()

    def __exit__(self, *exc_info) -> None:
        self.close()
