"""Collection use cases (validation, record construction, append/upsert)."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from iwd.core.utils import iso_from_ms, now_iso, now_ms
from iwd.domain.records import (
    NOMINATIONS,
    PLACEHOLDER_IMAGE_URL,
    PLEDGES,
    POSTCARDS,
    WISHES,
    Nomination,
    Pledge,
    Postcard,
    Record,
    Wish,
    missing_fields,
)
from iwd.repositories.collection_store import Collection, CollectionStore


class CollectionError(Exception):
    """Base exception for collection workflows."""


class InvalidPayloadError(CollectionError):
    """Raised when the request body is not a JSON object."""


class MissingFieldsError(CollectionError):
    """Raised when the request payload lacks required fields."""

    def __init__(self, collection: str, fields: List[str]) -> None:
        super().__init__(f"Missing required fields for {collection}: {', '.join(fields)}")
        self.collection = collection
        self.fields = fields


class StorageWriteError(CollectionError):
    """Raised when the new record could not be persisted."""

    def __init__(self, collection: str, reason: str | None = None) -> None:
        super().__init__(f"Failed to save {collection} ({reason or 'unknown'})")
        self.collection = collection
        self.reason = reason


def _supplied(payload: Mapping[str, Any], *fields: str) -> Dict[str, Any]:
    """Subset of payload holding only the fields the caller actually sent."""
    return {field: payload[field] for field in fields if field in payload}


class CollectionService:
    """List and create records of one collection."""

    name: str = ""
    label: str = "record"

    def __init__(self, store: CollectionStore) -> None:
        self.store = store
        self.collection: Collection[Any] = store.collection(self.name)

    def list_records(self) -> List[Record]:
        return self.collection.read().records

    def validate(self, payload: Any) -> Dict[str, Any]:
        if not isinstance(payload, dict):
            raise InvalidPayloadError(f"{self.name} payload must be an object")
        missing = missing_fields(self.name, payload)
        if missing:
            raise MissingFieldsError(self.name, missing)
        return dict(payload)

    def build(self, payload: Mapping[str, Any]) -> Record:
        raise NotImplementedError

    def create(self, payload: Any) -> Any:
        data = self.validate(payload)
        record = self.build(data)
        result = self.collection.append(record)
        if not result:
            raise StorageWriteError(self.name, result.reason.value)
        return record


class WishService(CollectionService):
    name = WISHES
    label = "wish"

    def build(self, payload: Mapping[str, Any]) -> Wish:
        stamp = now_ms()
        return {"id": stamp, "message": payload["message"], "date": iso_from_ms(stamp)}


class PledgeService(CollectionService):
    """Pledges answer with the running total alongside the new record."""

    name = PLEDGES
    label = "pledge"

    def build(self, payload: Mapping[str, Any]) -> Pledge:
        stamp = now_ms()
        return {
            "id": stamp,
            "pledgeId": payload["pledgeId"],
            "text": payload["text"],
            "date": iso_from_ms(stamp),
        }

    def create(self, payload: Any) -> Dict[str, Any]:
        record = self.build(self.validate(payload))

        def _push(records: List[Any]) -> int:
            records.append(record)
            return len(records)

        result = self.collection.update(_push)
        if not result:
            raise StorageWriteError(self.name, result.reason.value)
        return {"pledge": record, "totalPledges": result.value}


class NominationService(CollectionService):
    """
    Nominations are keyed by id: posting an id that already exists updates
    the stored nomination instead of adding a duplicate.
    """

    name = NOMINATIONS
    label = "nomination"

    def build(self, payload: Mapping[str, Any]) -> Nomination:
        stamp = now_ms()
        record: Nomination = {"id": payload.get("id") or f"nominated-{stamp}"}
        record.update(_supplied(payload, "name", "achievement"))
        record["imageUrl"] = payload.get("imageUrl") or PLACEHOLDER_IMAGE_URL
        record["date"] = iso_from_ms(stamp)
        return record

    def create(self, payload: Any) -> Nomination:
        data = self.validate(payload)
        candidate = self.build(data)

        def _upsert(records: List[Any]) -> Nomination:
            for index, existing in enumerate(records):
                if isinstance(existing, dict) and existing.get("id") == candidate["id"]:
                    merged = dict(existing)
                    merged.update(_supplied(data, "name", "achievement"))
                    merged["imageUrl"] = data.get("imageUrl") or existing.get("imageUrl") or PLACEHOLDER_IMAGE_URL
                    merged["updated"] = now_iso()
                    records[index] = merged
                    return merged
            records.append(candidate)
            return candidate

        result = self.collection.update(_upsert)
        if not result:
            raise StorageWriteError(self.name, result.reason.value)
        return result.value


class PostcardService(CollectionService):
    name = POSTCARDS
    label = "postcard"

    def build(self, payload: Mapping[str, Any]) -> Postcard:
        stamp = now_ms()
        record: Postcard = {"id": stamp, "greeting": payload["greeting"], "message": payload["message"]}
        record.update(_supplied(payload, "signature", "bg"))
        record["timestamp"] = iso_from_ms(stamp)
        return record


SERVICE_TYPES = {
    WISHES: WishService,
    PLEDGES: PledgeService,
    NOMINATIONS: NominationService,
    POSTCARDS: PostcardService,
}


def build_services(store: CollectionStore) -> Dict[str, CollectionService]:
    """One service per known collection, all sharing the same store."""
    return {name: factory(store) for name, factory in SERVICE_TYPES.items()}
