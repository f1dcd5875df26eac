from __future__ import annotations

import secrets
import time

_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, 36)
        out.append(_ALPHABET[rem])
    return "".join(reversed(out))


def generate_tracking_id(prefix: str = "TRK", *, now_ms: int | None = None) -> str:
    """
    <PREFIX><epoch millis in base36><4 random base36 chars>, upper case.
    e.g. MEDLZ3K9Q2A0F7C
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    random_part = to_base36(secrets.randbelow(1_000_000)).rjust(4, "0")
    return f"{prefix}{to_base36(now_ms)}{random_part}".upper()
