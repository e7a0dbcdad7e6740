from __future__ import annotations

from stockapi.repositories.base import BaseRepository


class ImportRepository(BaseRepository):
    def find_by_supplier(self, supplier_id: str) -> list[dict]:
        return self.find_all({"supplierId": supplier_id})

    def find_by_status(self, status: str) -> list[dict]:
        return self.find_all({"status": status})
