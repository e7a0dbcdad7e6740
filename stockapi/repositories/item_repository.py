"""Item queries: tags, stock level, price range, name search and aggregates."""
from __future__ import annotations

import math
from collections import OrderedDict
from typing import Any, Iterable, Mapping, Optional

from stockapi.repositories.base import BaseRepository, name_pattern

DEFAULT_LOW_STOCK_THRESHOLD = 10


class ItemRepository(BaseRepository):
    def create_item(self, item_data: Mapping[str, Any]) -> dict:
        return self.create(item_data)

    def create_items(self, items_data: Iterable[Mapping[str, Any]]) -> list[dict]:
        return self.create_many(items_data)

    def find_items(self, queries: Optional[Mapping[str, Any]] = None) -> list[dict]:
        return self.find_all(queries)

    def find_by_tags(self, tags: Iterable[str]) -> list[dict]:
        """Items carrying at least one of ``tags``."""
        return self.find_all({"tags": {"$in": list(tags)}})

    def find_low_stock(self, threshold: float = DEFAULT_LOW_STOCK_THRESHOLD) -> list[dict]:
        return self.find_all({"quantity": {"$lt": threshold}})

    def find_by_price_range(self, min_price: float = 0, max_price: float = math.inf) -> list[dict]:
        return self.find_all({"unitPrice": {"$gte": min_price, "$lte": max_price}})

    def search_by_name(self, search_term: str) -> list[dict]:
        return self.find_all({"name": name_pattern(search_term)})

    def find_by_storehouse(self, storehouse_id: str) -> list[dict]:
        return self.find_all({"storeHouse": storehouse_id})

    def get_items_with_stats(self) -> dict:
        items = self.find_all()
        prices = [item.get("unitPrice") or 0 for item in items]
        quantities = [item.get("quantity") or 0 for item in items]
        return {
            "totalItems": len(items),
            "totalValue": sum(p * q for p, q in zip(prices, quantities)),
            "avgPrice": (sum(prices) / len(prices)) if prices else None,
            "totalQuantity": sum(quantities),
        }

    def get_items_by_tag(self) -> list[dict]:
        """Items grouped per tag, most used tags first."""
        groups: "OrderedDict[str, list[dict]]" = OrderedDict()
        for item in self.find_all():
            for tag in item.get("tags") or []:
                groups.setdefault(tag, []).append({"name": item.get("name"), "unitPrice": item.get("unitPrice")})
        result = [{"_id": tag, "count": len(entries), "items": entries} for tag, entries in groups.items()]
        result.sort(key=lambda group: group["count"], reverse=True)
        return result
