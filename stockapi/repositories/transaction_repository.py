from __future__ import annotations

from stockapi.repositories.base import BaseRepository


class TransactionRepository(BaseRepository):
    def find_by_client(self, client_id: str) -> list[dict]:
        return self.find_all({"clientId": client_id})

    def find_by_status(self, status: str) -> list[dict]:
        return self.find_all({"status": status})
