"""
Repositories: one thin class per entity over the document collections.

Routers depend on these classes rather than on the collections directly.
"""
from __future__ import annotations

from dataclasses import dataclass

from stockapi.db.database import Database
from stockapi.repositories.base import BaseRepository
from stockapi.repositories.business_repository import BusinessRepository
from stockapi.repositories.import_repository import ImportRepository
from stockapi.repositories.item_repository import ItemRepository
from stockapi.repositories.partner_repository import PartnerRepository
from stockapi.repositories.storehouse_repository import StoreHouseRepository
from stockapi.repositories.transaction_repository import TransactionRepository
from stockapi.repositories.user_repository import UserRepository, public_user


@dataclass(frozen=True)
class Repositories:
    items: ItemRepository
    partners: PartnerRepository
    transactions: TransactionRepository
    imports: ImportRepository
    users: UserRepository
    businesses: BusinessRepository
    storehouses: StoreHouseRepository

    @classmethod
    def from_database(cls, db: Database) -> "Repositories":
        return cls(
            items=ItemRepository(db.collection("items")),
            partners=PartnerRepository(db.collection("partners")),
            transactions=TransactionRepository(db.collection("transactions")),
            imports=ImportRepository(db.collection("imports")),
            users=UserRepository(db.collection("users")),
            businesses=BusinessRepository(db.collection("businesses")),
            storehouses=StoreHouseRepository(db.collection("storehouses")),
        )


__all__ = [
    "BaseRepository",
    "BusinessRepository",
    "ImportRepository",
    "ItemRepository",
    "PartnerRepository",
    "Repositories",
    "StoreHouseRepository",
    "TransactionRepository",
    "UserRepository",
    "public_user",
]
