from __future__ import annotations

from stockapi.repositories.base import BaseRepository, name_pattern


class PartnerRepository(BaseRepository):
    def search_by_name(self, search_term: str) -> list[dict]:
        return self.find_all({"partnerName": name_pattern(search_term)})

    def find_by_type(self, partner_type: str) -> list[dict]:
        return self.find_all({"partnerType": partner_type})
