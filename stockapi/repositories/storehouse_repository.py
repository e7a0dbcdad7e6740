from __future__ import annotations

from stockapi.repositories.base import BaseRepository, name_pattern


class StoreHouseRepository(BaseRepository):
    def search_by_name(self, search_term: str) -> list[dict]:
        return self.find_all({"name": name_pattern(search_term)})

    def find_by_business(self, business_id: str) -> list[dict]:
        return self.find_all({"business": business_id})
