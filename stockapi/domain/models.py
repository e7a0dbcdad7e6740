"""Entity schemas for the inventory collections."""
from __future__ import annotations

from stockapi.domain.schema import FieldSpec, Schema

PARTNER_TYPES = ("client", "supplier")
TRANSACTION_STATUSES = ("pending", "itemsDelivered", "paymentCompleted", "cancelled")
IMPORT_STATUSES = ("pending", "done")
APP_ROLES = ("dev", "admin", "user")

LINE_ITEM_SCHEMA: Schema = {
    "itemId": FieldSpec(type="string"),
    "quantity": FieldSpec(type="number", required=True),
    "unitPrice": FieldSpec(type="number", required=True),
    "totalPrice": FieldSpec(type="number", required=True),
}

ITEM_SCHEMA: Schema = {
    "name": FieldSpec(type="string", required=True, unique=True),
    "description": FieldSpec(type="string"),
    "unitPrice": FieldSpec(type="number", required=True),
    "origin": FieldSpec(type="string"),
    "tags": FieldSpec(type="array", default=[]),
    "quantity": FieldSpec(type="number", required=True),
    "unit": FieldSpec(type="string", required=True),
    "imageUrl": FieldSpec(type="array", default=[]),
    "storeHouse": FieldSpec(type="string", required=True),
}

PARTNER_SCHEMA: Schema = {
    "partnerType": FieldSpec(type="string", required=True, enum=PARTNER_TYPES),
    "partnerName": FieldSpec(type="string", required=True, unique=True),
    "phoneNumber": FieldSpec(type="string", required=True),
    "email": FieldSpec(type="string", unique=True),
    "address": FieldSpec(type="string", required=True),
}

TRANSACTION_SCHEMA: Schema = {
    "clientId": FieldSpec(type="string", required=True),
    "item": FieldSpec(type="array", required=True, of=LINE_ITEM_SCHEMA),
    "totalPrice": FieldSpec(type="number", required=True),
    "itemsDeliveredDate": FieldSpec(type="date"),
    "paymentCompletedDate": FieldSpec(type="date"),
    "status": FieldSpec(type="string", required=True, enum=TRANSACTION_STATUSES),
}

IMPORT_SCHEMA: Schema = {
    "supplierId": FieldSpec(type="string", required=True),
    "item": FieldSpec(type="array", required=True, of=LINE_ITEM_SCHEMA),
    "totalPrice": FieldSpec(type="number", required=True),
    "status": FieldSpec(type="string", required=True, enum=IMPORT_STATUSES),
    "completedDate": FieldSpec(type="date"),
}

USER_SCHEMA: Schema = {
    "name": FieldSpec(type="string", required=True),
    "username": FieldSpec(type="string", unique=True),
    "email": FieldSpec(type="string", required=True, unique=True),
    "password": FieldSpec(type="string", required=True),
    "phoneNumber": FieldSpec(type="string"),
    "birthDate": FieldSpec(type="date", required=True),
    "business": FieldSpec(type="string", required=True),
    "storeHouses": FieldSpec(type="array", default=[]),
    "appRole": FieldSpec(type="string", enum=APP_ROLES, default="user"),
    "accessRole": FieldSpec(type="array", default=[]),
    "resetPasswordToken": FieldSpec(type="string"),
}

BUSINESS_SCHEMA: Schema = {
    "name": FieldSpec(type="string", required=True),
    "address": FieldSpec(type="string", required=True),
    "phoneNumber": FieldSpec(type="string", required=True),
    "email": FieldSpec(type="string", unique=True),
}

STOREHOUSE_SCHEMA: Schema = {
    "name": FieldSpec(type="string"),
    "address": FieldSpec(type="string", required=True),
    "phoneNumber": FieldSpec(type="string"),
    "email": FieldSpec(type="string"),
    "business": FieldSpec(type="string", required=True),
}

# collection name -> schema; the names are the stable handles on the Database facade
COLLECTION_SCHEMAS: dict[str, Schema] = {
    "items": ITEM_SCHEMA,
    "partners": PARTNER_SCHEMA,
    "transactions": TRANSACTION_SCHEMA,
    "imports": IMPORT_SCHEMA,
    "users": USER_SCHEMA,
    "businesses": BUSINESS_SCHEMA,
    "storehouses": STOREHOUSE_SCHEMA,
}
