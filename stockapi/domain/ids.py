"""Document identifier helpers."""
from __future__ import annotations

import re
import secrets
import time

OBJECT_ID_PATTERN = re.compile(r"[0-9a-f]{24}")


def generate_object_id(now: float | None = None) -> str:
    """Return a 24-char hex id: 8 chars of epoch seconds followed by 16 random chars."""
    seconds = int(now if now is not None else time.time())
    return f"{seconds:08x}"[-8:] + secrets.token_hex(8)


def is_object_id(value: object) -> bool:
    return isinstance(value, str) and bool(OBJECT_ID_PATTERN.fullmatch(value))
