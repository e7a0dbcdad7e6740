"""
HTTP layer: envelopes, status codes and list query parsing.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from stockapi.app import create_app
from stockapi.core import config as core_config
from stockapi.core.responses import ResponseCode
from stockapi.db.seed_data import BUSINESS_ID_GREEN_GROCER, ITEM_ID_APPLE, STOREHOUSE_ID_MAIN, USER_ID_ADMIN


def _configure(monkeypatch, tmp_path, app_env: str = "dev") -> None:
    for name in ("DB_MODE", "DATABASE_URL", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("APP_ENV", app_env)
    monkeypatch.setenv("DB_MODE", "local")
    monkeypatch.setenv("LOCAL_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SEED_DB", "true")
    core_config.get_settings.cache_clear()


@pytest.fixture()
def client(tmp_path, monkeypatch):
    _configure(monkeypatch, tmp_path)
    with TestClient(create_app()) as test_client:
        yield test_client
    core_config.get_settings.cache_clear()


def _new_item(**overrides) -> dict:
    data = {"name": "Pear", "unitPrice": 2.0, "quantity": 7, "unit": "kg", "storeHouse": STOREHOUSE_ID_MAIN}
    data.update(overrides)
    return data


def _names(response) -> list[str]:
    return sorted(doc["name"] for doc in response.json()["data"])


def test_health(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"isOk": True, "data": {"status": "ok", "env": "dev", "dbMode": "local"}}


def test_item_crud_round_trip(client):
    created = client.post("/api/item/", json=_new_item(tags=["fruit"]))
    assert created.status_code == 201
    body = created.json()
    assert body["isOk"] is True
    item_id = body["data"]["_id"]
    assert body["data"]["imageUrl"] == []

    fetched = client.get(f"/api/item/{item_id}")
    assert fetched.status_code == 200
    assert fetched.json()["data"]["name"] == "Pear"

    updated = client.put(f"/api/item/{item_id}", json={"quantity": 1})
    assert updated.status_code == 200
    assert updated.json()["data"]["quantity"] == 1
    assert updated.json()["data"]["createdAt"] == body["data"]["createdAt"]

    deleted = client.delete(f"/api/item/{item_id}")
    assert deleted.status_code == 200
    assert deleted.json()["data"]["message"] == "Item deleted successfully"
    assert deleted.json()["data"]["deleted"]["_id"] == item_id

    missing = client.get(f"/api/item/{item_id}")
    assert missing.status_code == 404
    assert missing.json()["isOk"] is False
    assert missing.json()["data"]["rcode"] == ResponseCode.ITEM_NOT_FOUND
    assert client.delete(f"/api/item/{item_id}").status_code == 404
    assert client.put(f"/api/item/{item_id}", json={"quantity": 2}).status_code == 404


def test_duplicate_name_is_a_conflict(client):
    response = client.post("/api/item/", json=_new_item(name="Apple"))
    assert response.status_code == 409
    data = response.json()["data"]
    assert data["rcode"] == ResponseCode.DATABASE_CREATION_CONFLICT
    assert data["debug"]["errorType"] == "ValidationError"


def test_missing_required_field_is_unprocessable(client):
    payload = _new_item()
    del payload["unit"]
    response = client.post("/api/item/", json=payload)
    assert response.status_code == 422
    data = response.json()["data"]
    assert data["rcode"] == ResponseCode.DATABASE_VALIDATION_ERROR
    assert data["debug"]["details"]["unit"] == "Path `unit` is required."


def test_update_operators_are_bad_queries(client):
    response = client.put(f"/api/item/{ITEM_ID_APPLE}", json={"$set": {"quantity": 1}})
    assert response.status_code == 400
    assert response.json()["data"]["rcode"] == ResponseCode.INVALID_QUERY_INPUT


def test_malformed_json_is_invalid_input(client):
    response = client.post("/api/item/", content=b"{oops", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json()["data"]["rcode"] == ResponseCode.INVALID_REQUEST_INPUT


def test_bulk_create_accepts_list_or_wrapped_list(client):
    response = client.post("/api/item/items", json=[_new_item(name="Kiwi"), _new_item(name="Lime")])
    assert response.status_code == 201
    assert [doc["name"] for doc in response.json()["data"]] == ["Kiwi", "Lime"]

    wrapped = client.post("/api/item/items", json={"items": [_new_item(name="Plum")]})
    assert wrapped.status_code == 201

    rejected = client.post("/api/item/items", json={"name": "Fig"})
    assert rejected.status_code == 400
    assert rejected.json()["data"]["rcode"] == ResponseCode.INVALID_REQUEST_INPUT


def test_bulk_create_failure_inserts_nothing(client):
    response = client.post("/api/item/items", json=[_new_item(name="Kiwi"), _new_item(name="Kiwi")])
    assert response.status_code == 409
    assert _names(client.get("/api/item/", params={"search": "kiwi"})) == []


def test_item_list_queries(client):
    assert len(client.get("/api/item/").json()["data"]) == 4
    assert _names(client.get("/api/item/", params={"search": "AN"})) == ["Banana", "Orange Juice"]
    assert _names(client.get("/api/item/", params={"minPrice": "abc", "maxPrice": "2"})) == ["Banana", "Milk"]
    assert _names(client.get("/api/item/", params={"minPrice": "3"})) == ["Orange Juice"]
    assert _names(client.get("/api/item/", params={"tags": "juice,organic"})) == ["Banana", "Orange Juice"]
    assert _names(client.get("/api/item/", params={"lowStock": "true", "threshold": "120"})) == [
        "Apple",
        "Orange Juice",
    ]
    assert _names(client.get("/api/item/", params={"lowStock": "true"})) == []


def test_item_pagination(client):
    response = client.get("/api/item/", params={"page": "2", "limit": "3"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["items"]) == 1
    assert data["pagination"] == {
        "page": 2,
        "limit": 3,
        "total": 4,
        "totalPages": 2,
        "hasNext": False,
        "hasPrev": True,
    }
    # invalid values fall back to page 1 and the item page size
    fallback = client.get("/api/item/", params={"page": "x", "limit": "-4"}).json()["data"]
    assert fallback["pagination"]["page"] == 1
    assert fallback["pagination"]["limit"] == 20


def test_item_stats_and_tags_are_not_ids(client):
    stats = client.get("/api/item/stats")
    assert stats.status_code == 200
    assert stats.json()["data"]["totalItems"] == 4
    tags = client.get("/api/item/tags")
    assert tags.status_code == 200
    assert {group["_id"] for group in tags.json()["data"]} >= {"fruit", "fresh", "dairy"}


def test_partner_filters(client):
    suppliers = client.get("/api/partner/", params={"partnerType": "supplier"}).json()["data"]
    assert len(suppliers) == 2
    found = client.get("/api/partner/", params={"search": "abc"}).json()["data"]
    assert [p["partnerName"] for p in found] == ["ABC Store"]
    paged = client.get("/api/partner/", params={"limit": "2"}).json()["data"]
    assert paged["pagination"]["total"] == 4


def test_partner_enum_is_enforced(client):
    response = client.post(
        "/api/partner/",
        json={"partnerType": "vendor", "partnerName": "New", "phoneNumber": "1", "address": "a"},
    )
    assert response.status_code == 422


def test_transaction_and_import_filters(client):
    pending = client.get("/api/transaction/", params={"status": "pending"}).json()["data"]
    assert len(pending) == 1
    done = client.get("/api/import/", params={"status": "done"}).json()["data"]
    assert len(done) == 2
    missing = client.get("/api/import/ffffffffffffffffffffffff")
    assert missing.json()["data"]["rcode"] == ResponseCode.IMPORT_NOT_FOUND


def test_transaction_line_items_are_validated(client):
    response = client.post(
        "/api/transaction/",
        json={"clientId": "c", "item": [{"itemId": "i"}], "totalPrice": 1, "status": "pending"},
    )
    assert response.status_code == 422
    assert "item[0].quantity" in response.json()["data"]["debug"]["details"]


def test_users_never_expose_passwords(client):
    created = client.post(
        "/api/user/",
        json={
            "name": "Sam",
            "email": "sam@example.com",
            "password": "s3cret",
            "birthDate": "2000-02-02",
            "business": BUSINESS_ID_GREEN_GROCER,
        },
    )
    assert created.status_code == 201
    assert "password" not in created.json()["data"]
    listed = client.get("/api/user/", params={"business": BUSINESS_ID_GREEN_GROCER}).json()["data"]
    assert {user["name"] for user in listed} == {"John Admin", "Sam"}
    assert all("password" not in user for user in listed)
    admin = client.get(f"/api/user/{USER_ID_ADMIN}").json()["data"]
    assert admin["appRole"] == "admin"
    assert "password" not in admin


def test_business_and_storehouse_routes(client):
    business = client.post(
        "/api/business/",
        json={"name": "Corner Shop", "address": "1 Road", "phoneNumber": "+1"},
    )
    assert business.status_code == 201
    business_id = business.json()["data"]["_id"]
    storehouse = client.post("/api/storehouse/", json={"name": "Back Room", "address": "1 Road", "business": business_id})
    assert storehouse.status_code == 201
    found = client.get("/api/storehouse/", params={"businessId": business_id}).json()["data"]
    assert [s["name"] for s in found] == ["Back Room"]
    assert [b["name"] for b in client.get("/api/business/", params={"search": "corner"}).json()["data"]] == ["Corner Shop"]
    bulk = client.post("/api/storehouse/storehouses", json={"storehouses": [{"address": "x", "business": business_id}]})
    assert bulk.status_code == 201


def test_production_hides_debug_details(tmp_path, monkeypatch):
    _configure(monkeypatch, tmp_path, app_env="production")
    with TestClient(create_app()) as client:
        response = client.post("/api/item/", json=_new_item(name="Apple"))
    core_config.get_settings.cache_clear()
    assert response.status_code == 409
    assert response.json() == {"isOk": False, "data": {"rcode": ResponseCode.DATABASE_CREATION_CONFLICT}}
