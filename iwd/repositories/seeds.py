"""
Default content for collections that were never initialized (or got corrupted).

Seeds are time-relative: ids and dates are computed from the current clock,
but the number of records and their messages never change.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from iwd.core.utils import iso_from_ms, now_ms
from iwd.domain.records import PLEDGES, WISHES, Pledge, Record, Wish

DEFAULT_WISHES = (
    # (age in ms, message)
    (7_200_000, "Happy Women's Day to all the incredible women who inspire us daily!"),
    (3_600_000, "To my mom, sister, and all women in my life - thank you for your strength and love!"),
    (1_800_000, "Celebrating the achievements and resilience of women everywhere!"),
)

PLEDGE_TYPES = (
    ("mentor", "Mentor a Woman"),
    ("amplify", "Amplify Women's Voices"),
    ("educate", "Educate Yourself"),
    ("support", "Support Women-Owned Businesses"),
)

# 8 March
DEFAULT_PLEDGE_COUNT = 83
PLEDGE_SPACING_MS = 100_000


def default_wishes(now: int | None = None) -> List[Wish]:
    now = now_ms() if now is None else now
    wishes: List[Wish] = []
    for age, message in DEFAULT_WISHES:
        stamp = now - age
        wishes.append({"id": stamp, "message": message, "date": iso_from_ms(stamp)})
    return wishes


def default_pledges(now: int | None = None) -> List[Pledge]:
    now = now_ms() if now is None else now
    pledges: List[Pledge] = []
    for i in range(DEFAULT_PLEDGE_COUNT):
        pledge_id, text = PLEDGE_TYPES[i % len(PLEDGE_TYPES)]
        stamp = now - i * PLEDGE_SPACING_MS
        pledges.append({"id": stamp, "pledgeId": pledge_id, "text": text, "date": iso_from_ms(stamp)})
    return pledges


SEEDS: Dict[str, Callable[..., List[Record]]] = {
    WISHES: default_wishes,
    PLEDGES: default_pledges,
}


def default_records(collection: str, now: int | None = None) -> List[Record]:
    """Seed set for a collection; empty for anything without registered defaults."""
    factory = SEEDS.get(collection)
    if factory is None:
        return []
    return list(factory(now))
