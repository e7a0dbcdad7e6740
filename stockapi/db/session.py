"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import Callable, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from stockapi.core.config import get_settings

Base = declarative_base()


def create_db_engine(url: str | None) -> Engine:
    url = (url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    return create_engine(url, future=True, pool_pre_ping=True)


def make_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@lru_cache
def get_engine() -> Engine:
    """Engine for the configured DATABASE_URL (used by the maintenance scripts)."""
    return create_db_engine(get_settings().database_url)


@contextmanager
def get_session(factory: Callable[[], Session]) -> Iterator[Session]:
    session: Session = factory()
    try:
        yield session
    finally:
        session.close()
