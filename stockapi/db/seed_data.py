"""
Sample documents for local development.

Ids are fixed so references between collections line up
(items -> storehouses -> businesses, transactions/imports -> partners/items).
"""
from __future__ import annotations

from stockapi.core.security import hash_password

BUSINESS_ID_GREEN_GROCER = "6766f0001234567890abcdef"
BUSINESS_ID_DAILY_DAIRY = "6766f0001234567890abcdf0"

STOREHOUSE_ID_MAIN = "676700001234567890abcdef"
STOREHOUSE_ID_COLD = "676700001234567890abcdf0"

ITEM_ID_APPLE = "6766a0001234567890abcdef"
ITEM_ID_BANANA = "6766a0001234567890abcdf0"
ITEM_ID_ORANGE_JUICE = "6766a0001234567890abcdf1"
ITEM_ID_MILK = "6766a0001234567890abcdf2"

PARTNER_ID_ABC_STORE = "6766b0001234567890abcdef"
PARTNER_ID_XYZ_SUPERMARKET = "6766b0001234567890abcdf0"
PARTNER_ID_FRESH_FARMS = "6766b0001234567890abcdf1"
PARTNER_ID_GLOBAL_DIST = "6766b0001234567890abcdf2"

USER_ID_ADMIN = "6766c0001234567890abcdef"
USER_ID_JANE = "6766c0001234567890abcdf0"


def _line(item_id: str, quantity: int, unit_price: float) -> dict:
    return {
        "itemId": item_id,
        "quantity": quantity,
        "unitPrice": unit_price,
        "totalPrice": round(quantity * unit_price, 2),
    }


def sample_businesses() -> list[dict]:
    return [
        {
            "_id": BUSINESS_ID_GREEN_GROCER,
            "name": "Green Grocer Ltd.",
            "address": "12 Market Square, Boston, MA",
            "phoneNumber": "+1234567800",
            "email": "hello@greengrocer.com",
        },
        {
            "_id": BUSINESS_ID_DAILY_DAIRY,
            "name": "Daily Dairy Co.",
            "address": "88 Pasture Lane, Madison, WI",
            "phoneNumber": "+1234567801",
            "email": "office@dailydairy.com",
        },
    ]


def sample_storehouses() -> list[dict]:
    return [
        {
            "_id": STOREHOUSE_ID_MAIN,
            "name": "Main Warehouse",
            "address": "1 Dock Road, Boston, MA",
            "phoneNumber": "+1234567810",
            "email": "main@greengrocer.com",
            "business": BUSINESS_ID_GREEN_GROCER,
        },
        {
            "_id": STOREHOUSE_ID_COLD,
            "name": "Cold Storage",
            "address": "5 Frost Ave, Madison, WI",
            "phoneNumber": "+1234567811",
            "business": BUSINESS_ID_DAILY_DAIRY,
        },
    ]


def sample_items() -> list[dict]:
    return [
        {
            "_id": ITEM_ID_APPLE,
            "name": "Apple",
            "description": "Fresh red apples",
            "unitPrice": 2.5,
            "origin": "USA",
            "tags": ["fruit", "fresh"],
            "quantity": 100,
            "unit": "kg",
            "imageUrl": [],
            "storeHouse": STOREHOUSE_ID_MAIN,
        },
        {
            "_id": ITEM_ID_BANANA,
            "name": "Banana",
            "description": "Organic bananas",
            "unitPrice": 1.8,
            "origin": "Ecuador",
            "tags": ["fruit", "organic"],
            "quantity": 150,
            "unit": "kg",
            "imageUrl": [],
            "storeHouse": STOREHOUSE_ID_MAIN,
        },
        {
            "_id": ITEM_ID_ORANGE_JUICE,
            "name": "Orange Juice",
            "description": "100% fresh orange juice",
            "unitPrice": 3.5,
            "origin": "Brazil",
            "tags": ["beverage", "juice"],
            "quantity": 50,
            "unit": "liter",
            "imageUrl": [],
            "storeHouse": STOREHOUSE_ID_COLD,
        },
        {
            "_id": ITEM_ID_MILK,
            "name": "Milk",
            "description": "Whole milk",
            "unitPrice": 1.2,
            "origin": "Local",
            "tags": ["dairy", "fresh"],
            "quantity": 200,
            "unit": "liter",
            "imageUrl": [],
            "storeHouse": STOREHOUSE_ID_COLD,
        },
    ]


def sample_partners() -> list[dict]:
    return [
        {
            "_id": PARTNER_ID_ABC_STORE,
            "partnerType": "client",
            "partnerName": "ABC Store",
            "phoneNumber": "+1234567890",
            "email": "contact@abcstore.com",
            "address": "123 Main St, New York, NY",
        },
        {
            "_id": PARTNER_ID_XYZ_SUPERMARKET,
            "partnerType": "client",
            "partnerName": "XYZ Supermarket",
            "phoneNumber": "+1234567891",
            "email": "info@xyzsupermarket.com",
            "address": "456 Oak Ave, Los Angeles, CA",
        },
        {
            "_id": PARTNER_ID_FRESH_FARMS,
            "partnerType": "supplier",
            "partnerName": "Fresh Farms Co.",
            "phoneNumber": "+1234567892",
            "email": "sales@freshfarms.com",
            "address": "789 Farm Road, Texas, TX",
        },
        {
            "_id": PARTNER_ID_GLOBAL_DIST,
            "partnerType": "supplier",
            "partnerName": "Global Distributors Inc.",
            "phoneNumber": "+1234567893",
            "email": "orders@globaldist.com",
            "address": "321 Industry Blvd, Chicago, IL",
        },
    ]


def sample_users() -> list[dict]:
    return [
        {
            "_id": USER_ID_ADMIN,
            "name": "John Admin",
            "username": "admin",
            "email": "admin@storemanager.com",
            "password": hash_password("admin-password-123"),
            "phoneNumber": "+1234567894",
            "birthDate": "1990-01-01",
            "business": BUSINESS_ID_GREEN_GROCER,
            "storeHouses": [STOREHOUSE_ID_MAIN],
            "appRole": "admin",
            "accessRole": [],
        },
        {
            "_id": USER_ID_JANE,
            "name": "Jane User",
            "username": "janeuser",
            "email": "jane@storemanager.com",
            "password": hash_password("jane-password-456"),
            "phoneNumber": "+1234567895",
            "birthDate": "1995-05-15",
            "business": BUSINESS_ID_DAILY_DAIRY,
            "storeHouses": [STOREHOUSE_ID_COLD],
            "appRole": "user",
            "accessRole": [],
        },
    ]


def sample_transactions() -> list[dict]:
    return [
        {
            "_id": "6766d0001234567890abcdef",
            "clientId": PARTNER_ID_ABC_STORE,
            "item": [_line(ITEM_ID_APPLE, 20, 2.5), _line(ITEM_ID_BANANA, 15, 1.8)],
            "totalPrice": 77,
            "itemsDeliveredDate": "2025-12-20",
            "paymentCompletedDate": "2025-12-22",
            "status": "paymentCompleted",
        },
        {
            "_id": "6766d0001234567890abcdf0",
            "clientId": PARTNER_ID_XYZ_SUPERMARKET,
            "item": [_line(ITEM_ID_MILK, 50, 1.2), _line(ITEM_ID_ORANGE_JUICE, 10, 3.5)],
            "totalPrice": 95,
            "itemsDeliveredDate": "2025-12-21",
            "status": "itemsDelivered",
        },
        {
            "_id": "6766d0001234567890abcdf1",
            "clientId": PARTNER_ID_ABC_STORE,
            "item": [_line(ITEM_ID_BANANA, 25, 1.8)],
            "totalPrice": 45,
            "status": "pending",
        },
    ]


def sample_imports() -> list[dict]:
    return [
        {
            "_id": "6766e0001234567890abcdef",
            "supplierId": PARTNER_ID_FRESH_FARMS,
            "item": [_line(ITEM_ID_APPLE, 100, 1.5), _line(ITEM_ID_BANANA, 150, 1.0)],
            "totalPrice": 300,
            "status": "done",
            "completedDate": "2025-12-15",
        },
        {
            "_id": "6766e0001234567890abcdf0",
            "supplierId": PARTNER_ID_GLOBAL_DIST,
            "item": [_line(ITEM_ID_MILK, 200, 0.8), _line(ITEM_ID_ORANGE_JUICE, 50, 2.0)],
            "totalPrice": 260,
            "status": "done",
            "completedDate": "2025-12-18",
        },
        {
            "_id": "6766e0001234567890abcdf1",
            "supplierId": PARTNER_ID_FRESH_FARMS,
            "item": [_line(ITEM_ID_APPLE, 50, 1.5)],
            "totalPrice": 75,
            "status": "pending",
        },
    ]


def sample_documents() -> dict[str, list[dict]]:
    """Fresh copies of every sample set, keyed by collection name."""
    return {
        "businesses": sample_businesses(),
        "storehouses": sample_storehouses(),
        "items": sample_items(),
        "partners": sample_partners(),
        "users": sample_users(),
        "transactions": sample_transactions(),
        "imports": sample_imports(),
    }
