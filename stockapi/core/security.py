"""Security helpers (password hashing)."""

from __future__ import annotations

from argon2 import PasswordHasher

_ph = PasswordHasher()
_PREFIX = "argon2$"


def hash_password(password: str) -> str:
    """Create an Argon2 hash with a prefix for detection."""
    hashed = _ph.hash(password)
    return f"{_PREFIX}{hashed}"


def is_password_hash(value: str | None) -> bool:
    return bool(value) and value.startswith(_PREFIX)


def ensure_password_hash(value: str | None) -> str | None:
    """Hash plain passwords; values that already carry the prefix are kept."""
    if not value or is_password_hash(value):
        return value
    return hash_password(value)

