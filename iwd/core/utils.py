"""
Utility helpers shared across services and seed data.
"""

from __future__ import annotations

from datetime import datetime, timezone


def now_ms() -> int:
    """Current time as epoch milliseconds (used as record id)."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def iso_from_ms(value: int) -> str:
    """Epoch milliseconds to an ISO-8601 UTC string, e.g. 2026-03-08T10:00:00.000Z."""
    moment = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso() -> str:
    return iso_from_ms(now_ms())
