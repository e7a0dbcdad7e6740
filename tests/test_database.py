"""
Database facade: mode resolution, connection and seeding.
"""
from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from stockapi.core import config as core_config
from stockapi.db.database import COLLECTION_NAMES, Database, DbMode, resolve_db_mode
from stockapi.db.local import LocalCollection
from stockapi.db.seed_data import ITEM_ID_APPLE, USER_ID_ADMIN
from stockapi.db.sql import SqlCollection


@pytest.fixture()
def env(tmp_path, monkeypatch):
    for name in ("APP_ENV", "DB_MODE", "DATABASE_URL", "SEED_DB"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LOCAL_DATA_DIR", str(tmp_path / "data"))
    core_config.get_settings.cache_clear()
    yield monkeypatch
    core_config.get_settings.cache_clear()


def _settings():
    core_config.get_settings.cache_clear()
    return core_config.get_settings()


@pytest.mark.parametrize(
    "app_env, db_mode, expected",
    [
        ("dev", "", DbMode.LOCAL),
        ("production", "", DbMode.SQL),
        ("prod", "local", DbMode.LOCAL),
        ("dev", "sql", DbMode.SQL),
        ("test", "mongo", DbMode.LOCAL),
    ],
)
def test_mode_resolution(env, app_env, db_mode, expected):
    env.setenv("APP_ENV", app_env)
    env.setenv("DB_MODE", db_mode)
    assert resolve_db_mode(_settings()) is expected


def test_local_connect_exposes_every_collection(env, tmp_path):
    with Database(_settings()) as db:
        assert db.is_local
        for name in COLLECTION_NAMES:
            assert isinstance(db.collection(name), LocalCollection)
            assert (tmp_path / "data" / f"local-{name}.json").exists()
        assert db.items is db.collection("items")
        with pytest.raises(KeyError):
            db.collection("cards")
    assert not db.is_connected


def test_collection_requires_connect(env):
    with pytest.raises(RuntimeError):
        Database(_settings()).collection("items")


def test_sql_mode_requires_database_url(env):
    env.setenv("DB_MODE", "sql")
    with pytest.raises(RuntimeError):
        Database(_settings()).connect()


def test_sql_mode_uses_sql_collections(env, tmp_path):
    env.setenv("DB_MODE", "sql")
    env.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'stock.db'}")
    with Database(_settings()) as db:
        assert isinstance(db.items, SqlCollection)
        assert db.seed() == {}
        assert db.items.count_documents() == 0


def test_seed_on_connect_inserts_sample_dataset(env):
    env.setenv("SEED_DB", "true")
    with Database(_settings()) as db:
        assert db.items.count_documents() == 4
        assert db.partners.count_documents() == 4
        assert db.businesses.count_documents() == 2
        assert db.storehouses.count_documents() == 2
        assert db.users.count_documents() == 2
        assert db.transactions.count_documents() == 3
        assert db.imports.count_documents() == 3
        assert db.items.find_by_id(ITEM_ID_APPLE)["name"] == "Apple"
        admin = db.users.find_by_id(USER_ID_ADMIN)
        assert admin["password"].startswith("argon2$")
        assert admin["birthDate"].year == 1990


def test_reseeding_replaces_existing_documents(env):
    with Database(_settings()) as db:
        db.items.create({"name": "Extra", "unitPrice": 1, "quantity": 1, "unit": "kg", "storeHouse": "s"})
        counts = db.seed()
        assert counts["items"] == 4
        assert not db.items.exists({"name": "Extra"})
        assert db.seed() == counts


def _load_script(name: str):
    path = ROOT / "scripts" / f"{name}.py"
    spec = importlib.util.spec_from_file_location(f"scripts_{name}", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_migration_copies_local_documents_into_sql(env, tmp_path):
    env.setenv("SEED_DB", "true")
    with Database(_settings()) as db:
        apple = db.items.find_by_id(ITEM_ID_APPLE)

    env.setenv("SEED_DB", "false")
    env.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'target.db'}")
    migrate = _load_script("migrate_local_to_sql").migrate
    copied = migrate(_settings())
    assert copied["items"] == 4 and copied["users"] == 2
    # running again skips documents that are already there
    assert set(migrate(_settings()).values()) == {0}

    with Database(_settings(), mode=DbMode.SQL) as target:
        assert target.items.find_by_id(ITEM_ID_APPLE) == apple
