"""Persistence layer: document collections and the database facade."""

from .collection import DocumentCollection, Page, StorageError
from .database import Database, DbMode, resolve_db_mode
from .local import LocalCollection
from .session import Base, get_engine, get_session
from .sql import SqlCollection

__all__ = [
    "Base",
    "Database",
    "DbMode",
    "DocumentCollection",
    "LocalCollection",
    "Page",
    "SqlCollection",
    "StorageError",
    "get_engine",
    "get_session",
    "resolve_db_mode",
]
