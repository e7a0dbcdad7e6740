"""
Smoke tests for SqlCollection against a temporary SQLite database.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from stockapi.db.session import Base, create_db_engine, make_sessionmaker
from stockapi.db import models  # noqa: F401
from stockapi.db.sql import SqlCollection
from stockapi.domain.models import ITEM_SCHEMA, TRANSACTION_SCHEMA
from stockapi.domain.schema import ValidationError


@pytest.fixture()
def session_factory(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=engine)
    yield make_sessionmaker(engine)
    engine.dispose()


def _item(name: str, **overrides) -> dict:
    data = {"name": name, "unitPrice": 2.0, "quantity": 5, "unit": "kg", "storeHouse": "s1"}
    data.update(overrides)
    return data


def test_crud_round_trip(session_factory):
    items = SqlCollection("items", session_factory, ITEM_SCHEMA)
    doc = items.create(_item("Apple", tags=["fruit"]))
    assert items.find_by_id(doc["_id"]) == doc

    updated = items.find_by_id_and_update(doc["_id"], {"quantity": 9})
    assert updated["quantity"] == 9
    assert updated["createdAt"] == doc["createdAt"]

    assert items.find({"tags": {"$in": ["fruit"]}})[0]["_id"] == doc["_id"]
    assert items.find_by_id_and_delete(doc["_id"])["quantity"] == 9
    assert items.count_documents() == 0


def test_collections_share_the_table_without_mixing(session_factory):
    items = SqlCollection("items", session_factory, ITEM_SCHEMA)
    other = SqlCollection("archived-items", session_factory, ITEM_SCHEMA)
    items.create(_item("Apple"))
    other.create(_item("Apple"))
    assert items.count_documents() == 1
    assert other.count_documents() == 1


def test_unique_constraint_and_insert_many_atomicity(session_factory):
    items = SqlCollection("items", session_factory, ITEM_SCHEMA)
    items.create(_item("Apple"))
    with pytest.raises(ValidationError):
        items.insert_many([_item("Banana"), _item("Apple")])
    assert [doc["name"] for doc in items.find()] == ["Apple"]


def test_date_fields_come_back_as_datetimes(session_factory):
    transactions = SqlCollection("transactions", session_factory, TRANSACTION_SCHEMA)
    doc = transactions.create(
        {
            "clientId": "c1",
            "item": [{"itemId": "i1", "quantity": 2, "unitPrice": 1.5, "totalPrice": 3}],
            "totalPrice": 3,
            "status": "itemsDelivered",
            "itemsDeliveredDate": "2025-12-20",
        }
    )
    stored = transactions.find_by_id(doc["_id"])
    assert stored["itemsDeliveredDate"] == doc["itemsDeliveredDate"]
    assert stored["itemsDeliveredDate"].year == 2025
    assert stored["item"][0]["quantity"] == 2


def test_create_tables_uses_database_url(tmp_path, monkeypatch):
    from sqlalchemy import inspect

    from stockapi.core import config as core_config
    from stockapi.db import create_tables, session as db_session

    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'tables.db'}")
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    try:
        counts = create_tables.create_all()
        assert "documents" in inspect(db_session.get_engine()).get_table_names()
        assert counts["items"] == 0 and set(counts) >= {"users", "storehouses"}

        factory = make_sessionmaker(db_session.get_engine())
        SqlCollection("items", factory, ITEM_SCHEMA).create(_item("Apple"))
        assert create_tables.create_all()["items"] == 1
    finally:
        db_session.get_engine().dispose()
        db_session.get_engine.cache_clear()
        core_config.get_settings.cache_clear()
