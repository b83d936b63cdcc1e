"""Record shapes and per-collection rules for the tribute collections."""
from __future__ import annotations

from typing import Any, Dict, NotRequired, Tuple, TypedDict, Union

WISHES = "wishes"
PLEDGES = "pledges"
NOMINATIONS = "nominations"
POSTCARDS = "postcards"

COLLECTIONS: Tuple[str, ...] = (WISHES, PLEDGES, NOMINATIONS, POSTCARDS)

PLACEHOLDER_IMAGE_URL = "https://place-hold.it/400x300/e6e6fa/6a5acd?text=Inspiring+Woman&bold=true"

Record = Dict[str, Any]


class Wish(TypedDict):
    id: int
    message: str
    date: str


class Pledge(TypedDict):
    id: int
    pledgeId: str
    text: str
    date: str


class Nomination(TypedDict):
    id: Union[int, str]
    name: NotRequired[str]
    achievement: NotRequired[str]
    imageUrl: str
    date: str
    updated: NotRequired[str]


class Postcard(TypedDict):
    id: int
    greeting: str
    message: str
    signature: NotRequired[str]
    bg: NotRequired[str]
    timestamp: str


REQUIRED_FIELDS: Dict[str, Tuple[str, ...]] = {
    WISHES: ("message",),
    PLEDGES: ("pledgeId", "text"),
    NOMINATIONS: (),
    POSTCARDS: ("greeting", "message"),
}


def is_known_collection(name: str | None) -> bool:
    return name in COLLECTIONS


def missing_fields(collection: str, payload: Any) -> list[str]:
    """Return the required fields absent from payload (None and blank strings count as absent)."""
    required = REQUIRED_FIELDS.get(collection, ())
    if not isinstance(payload, dict):
        return list(required)
    missing = []
    for field in required:
        value = payload.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    return missing
