"""
Validation engine and identifier generator.
"""
from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from stockapi.domain.ids import generate_object_id, is_object_id
from stockapi.domain.models import ITEM_SCHEMA, PARTNER_SCHEMA, TRANSACTION_SCHEMA
from stockapi.domain.schema import ValidationError, apply_defaults, cast_document, parse_datetime, validate


def _item(**overrides):
    data = {"name": "Apple", "unitPrice": 2.5, "quantity": 10, "unit": "kg", "storeHouse": "s1"}
    data.update(overrides)
    return data


def test_valid_item_passes():
    validate(_item(), ITEM_SCHEMA)


def test_missing_required_field_names_the_path():
    data = _item()
    del data["unit"]
    with pytest.raises(ValidationError) as exc:
        validate(data, ITEM_SCHEMA)
    assert exc.value.field == "unit"
    assert exc.value.rule == "required"
    assert "`unit`" in exc.value.message


def test_empty_string_counts_as_missing():
    with pytest.raises(ValidationError) as exc:
        validate(_item(name=""), ITEM_SCHEMA)
    assert exc.value.rule == "required"


def test_type_checks_reject_booleans_as_numbers():
    with pytest.raises(ValidationError) as exc:
        validate(_item(quantity=True), ITEM_SCHEMA)
    assert (exc.value.field, exc.value.rule) == ("quantity", "type")
    with pytest.raises(ValidationError):
        validate(_item(unitPrice="2.5"), ITEM_SCHEMA)


def test_enum_violation():
    partner = {"partnerType": "vendor", "partnerName": "X", "phoneNumber": "1", "address": "a"}
    with pytest.raises(ValidationError) as exc:
        validate(partner, PARTNER_SCHEMA)
    assert exc.value.rule == "enum"


def test_unique_checks_other_documents_only():
    existing = [{"_id": "1", **_item()}]
    with pytest.raises(ValidationError) as exc:
        validate(_item(), ITEM_SCHEMA, existing)
    assert exc.value.rule == "unique"
    # the document being updated does not clash with itself
    validate(_item(), ITEM_SCHEMA, existing, exclude_id="1")
    # unique is case-sensitive
    validate(_item(name="apple"), ITEM_SCHEMA, existing)


def test_sparse_unique_allows_many_missing_values():
    existing = [{"_id": "1", "partnerType": "client", "partnerName": "A", "phoneNumber": "1", "address": "x"}]
    validate({"partnerType": "client", "partnerName": "B", "phoneNumber": "2", "address": "y"}, PARTNER_SCHEMA, existing)


def test_nested_line_items_report_index():
    transaction = {
        "clientId": "c1",
        "item": [
            {"itemId": "i1", "quantity": 1, "unitPrice": 2, "totalPrice": 2},
            {"itemId": "i2", "unitPrice": 2, "totalPrice": 2},
        ],
        "totalPrice": 4,
        "status": "pending",
    }
    with pytest.raises(ValidationError) as exc:
        validate(transaction, TRANSACTION_SCHEMA)
    assert exc.value.field == "item[1].quantity"


def test_dates_are_cast_from_iso_text():
    cast = cast_document({"itemsDeliveredDate": "2025-12-20T10:00:00Z"}, TRANSACTION_SCHEMA)
    assert cast["itemsDeliveredDate"] == datetime(2025, 12, 20, 10, tzinfo=timezone.utc)
    assert parse_datetime("2025-12-20") == datetime(2025, 12, 20, tzinfo=timezone.utc)
    assert parse_datetime("not a date") == "not a date"


def test_unparseable_date_fails_type_check():
    transaction = {
        "clientId": "c1",
        "item": [],
        "totalPrice": 0,
        "status": "pending",
        "itemsDeliveredDate": "someday",
    }
    with pytest.raises(ValidationError) as exc:
        validate(cast_document(transaction, TRANSACTION_SCHEMA), TRANSACTION_SCHEMA)
    assert (exc.value.field, exc.value.rule) == ("itemsDeliveredDate", "type")


def test_defaults_are_fresh_copies():
    first = apply_defaults({}, ITEM_SCHEMA)
    first["tags"].append("x")
    second = apply_defaults({}, ITEM_SCHEMA)
    assert second["tags"] == []


def test_generated_ids_are_24_hex_chars_and_distinct():
    ids = {generate_object_id() for _ in range(500)}
    assert len(ids) == 500
    assert all(is_object_id(value) for value in ids)
    assert not is_object_id("XYZ")
    assert not is_object_id(None)
