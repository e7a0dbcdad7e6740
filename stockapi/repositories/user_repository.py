"""Users: passwords are stored as argon2 hashes and stripped from public views."""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from stockapi.core.security import ensure_password_hash
from stockapi.repositories.base import BaseRepository

PRIVATE_FIELDS = ("password", "resetPasswordToken")


def public_user(user: Optional[Mapping[str, Any]]) -> Optional[dict]:
    if user is None:
        return None
    return {key: value for key, value in user.items() if key not in PRIVATE_FIELDS}


def _with_hashed_password(data: Any) -> Any:
    if not isinstance(data, Mapping) or "password" not in data:
        return data
    prepared = dict(data)
    if isinstance(prepared["password"], str):
        prepared["password"] = ensure_password_hash(prepared["password"])
    return prepared


class UserRepository(BaseRepository):
    def create(self, data: Mapping[str, Any]) -> dict:
        return super().create(_with_hashed_password(data))

    def create_many(self, data: Iterable[Mapping[str, Any]]) -> list[dict]:
        if isinstance(data, Mapping):
            return super().create_many(data)
        return super().create_many([_with_hashed_password(entry) for entry in data])

    def update_by_id(self, doc_id: str, updates: Mapping[str, Any], *, return_updated: bool = True) -> Optional[dict]:
        return super().update_by_id(doc_id, _with_hashed_password(updates), return_updated=return_updated)

    def update_one(
        self, filter: Mapping[str, Any], updates: Mapping[str, Any], *, return_updated: bool = True
    ) -> Optional[dict]:
        return super().update_one(filter, _with_hashed_password(updates), return_updated=return_updated)

    def update_many(self, filter: Mapping[str, Any], updates: Mapping[str, Any]) -> int:
        return super().update_many(filter, _with_hashed_password(updates))

    def find_by_email(self, email: str) -> Optional[dict]:
        return self.find_one({"email": (email or "").strip()})

    def find_by_business(self, business_id: str) -> list[dict]:
        return self.find_all({"business": business_id})

