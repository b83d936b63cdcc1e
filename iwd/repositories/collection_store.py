"""
JSON-file persistence for the tribute collections.

Each collection (wishes, pledges, nominations, postcards) lives in its own
``<base_dir>/<name>.json`` file holding a pretty-printed JSON array. The store
creates missing files from seed data, repairs unreadable ones, and swaps new
content in through ``<file>.tmp`` + ``os.replace`` so readers never see a
half-written file.

No operation raises past this module: failures come back as result objects
(``ok`` / ``reason`` / ``error``) and are logged here.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar
import json
import logging
import os
import threading

from iwd.core.config import StoreConfig
from iwd.domain.records import COLLECTIONS, Record
from iwd.repositories.seeds import default_records

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


def _reject_constant(token: str) -> Any:
    # NaN and Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {token}")


class Reason(str, Enum):
    OK = "ok"
    SEEDED = "seeded"
    REPAIRED = "repaired"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    WRITE_FAILED = "write_failed"


@dataclass
class StoreResult:
    """Outcome of a store operation; truthy when it succeeded."""

    ok: bool = True
    reason: Reason = Reason.OK
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok


@dataclass
class ReadResult(StoreResult, Generic[RecordT]):
    """Records are always present, falling back to seed data on failure."""

    records: List[RecordT] = field(default_factory=list)


@dataclass
class WriteResult(StoreResult):
    value: Any = None


class CollectionStore:
    """Crash-safe, self-repairing store for named JSON-array collections."""

    def __init__(
        self,
        config: StoreConfig,
        seeds: Callable[[str], List[Record]] = default_records,
    ) -> None:
        self.config = config
        self._seeds = seeds
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    @property
    def base_dir(self) -> Path:
        return Path(self.config.base_dir)

    def path_for(self, name: str) -> Path:
        return self.base_dir / f"{name}.json"

    def collection(self, name: str) -> "Collection[Any]":
        return Collection(self, name)

    def ensure_ready(self) -> StoreResult:
        """Make sure the data directory exists (parents included)."""
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("Error creating data directory %s: %s", self.base_dir, exc)
            return StoreResult(ok=False, reason=Reason.STORAGE_UNAVAILABLE, error=str(exc))
        return StoreResult()

    def initialize(self, names: Iterable[str] = COLLECTIONS) -> Dict[str, ReadResult]:
        """Create or repair every collection file up front."""
        if self.ensure_ready():
            logger.debug("Data directory ready at %s", self.base_dir)
        results: Dict[str, ReadResult] = {}
        for name in names:
            result = self.read(name)
            if result.reason is Reason.OK:
                logger.info("%s validation successful", self.path_for(name).name)
            results[name] = result
        return results

    def _lock_for(self, name: str) -> threading.RLock:
        with self._locks_guard:
            lock = self._locks.get(name)
            if lock is None:
                lock = self._locks[name] = threading.RLock()
            return lock

    @contextmanager
    def locked(self, name: str) -> Iterator[None]:
        """Serialize access to one collection; re-entrant within a thread."""
        with self._lock_for(name):
            yield

    def read(self, name: str) -> ReadResult:
        """Return the collection's records, seeding or repairing the file when needed."""
        with self.locked(name):
            ready = self.ensure_ready()
            if not ready:
                return ReadResult(ok=False, reason=ready.reason, error=ready.error, records=self._seeds(name))

            path = self.path_for(name)
            try:
                raw = path.read_bytes()
            except FileNotFoundError:
                logger.info("Creating new %s file with default data", path.name)
                return self._reset(name, Reason.SEEDED)
            except OSError as exc:
                logger.error("Error reading JSON from %s: %s", path, exc)
                return ReadResult(
                    ok=False,
                    reason=Reason.STORAGE_UNAVAILABLE,
                    error=str(exc),
                    records=self._seeds(name),
                )

            if not raw.strip():
                logger.warning("File %s is empty, initializing with default data", path.name)
                return self._reset(name, Reason.REPAIRED)
            try:
                records = json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
            except (ValueError, RecursionError) as exc:
                logger.warning("Invalid JSON in %s, repairing with default data: %s", path.name, exc)
                return self._reset(name, Reason.REPAIRED, error=str(exc))
            if not isinstance(records, list):
                logger.warning("%s does not hold a JSON array, repairing with default data", path.name)
                return self._reset(name, Reason.REPAIRED, error="not a JSON array")
            return ReadResult(records=records)

    def reset(self, name: str) -> ReadResult:
        """Overwrite a collection with its seed data, discarding what was stored."""
        with self.locked(name):
            logger.info("Resetting %s to default data", self.path_for(name).name)
            return self._reset(name, Reason.SEEDED)

    def _reset(self, name: str, reason: Reason, error: Optional[str] = None) -> ReadResult:
        records = self._seeds(name)
        written = self.write(name, records)
        if not written:
            return ReadResult(ok=False, reason=written.reason, error=written.error, records=records)
        return ReadResult(reason=reason, error=error, records=records)

    def write(self, name: str, records: Iterable[Any]) -> WriteResult:
        """Replace the whole collection; the new content becomes visible only through the rename."""
        with self.locked(name):
            ready = self.ensure_ready()
            if not ready:
                return WriteResult(ok=False, reason=ready.reason, error=ready.error)

            path = self.path_for(name)
            tmp = path.with_name(path.name + ".tmp")
            try:
                payload = json.dumps(list(records), ensure_ascii=False, indent=2, allow_nan=False)
                with tmp.open("w", encoding="utf-8") as fh:
                    fh.write(payload)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp, path)
            except (OSError, TypeError, ValueError, RecursionError) as exc:
                logger.error("Error writing JSON to %s: %s", path, exc)
                self._discard(tmp)
                return WriteResult(ok=False, reason=Reason.WRITE_FAILED, error=str(exc))
            return WriteResult()

    @staticmethod
    def _discard(tmp: Path) -> None:
        try:
            tmp.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Could not remove temporary file %s: %s", tmp, exc)

    def update(self, name: str, mutate: Callable[[List[Any]], Any]) -> WriteResult:
        """
        Read the collection, let ``mutate`` edit the list in place, write it back.

        The whole sequence runs under the collection lock, so concurrent
        callers cannot overwrite each other's changes. Whatever ``mutate``
        returns is exposed as ``result.value``.
        """
        with self.locked(name):
            records = list(self.read(name).records)
            value = mutate(records)
            result = self.write(name, records)
            result.value = value
            return result

    def append(self, name: str, record: Any) -> WriteResult:
        def _push(records: List[Any]) -> Any:
            records.append(record)
            return record

        return self.update(name, _push)


class Collection(Generic[RecordT]):
    """Typed view of one named collection inside a CollectionStore."""

    def __init__(self, store: CollectionStore, name: str) -> None:
        self.store = store
        self.name = name

    @property
    def path(self) -> Path:
        return self.store.path_for(self.name)

    def read(self) -> ReadResult[RecordT]:
        return self.store.read(self.name)

    def records(self) -> List[RecordT]:
        return self.read().records

    def write(self, records: Iterable[RecordT]) -> WriteResult:
        return self.store.write(self.name, records)

    def append(self, record: RecordT) -> WriteResult:
        return self.store.append(self.name, record)

    def update(self, mutate: Callable[[List[RecordT]], Any]) -> WriteResult:
        return self.store.update(self.name, mutate)
