"""Client-side tracking session with optimistic writes.

A save lands in the local store immediately under a provisional id, then
goes to the persistence collaborator; the server's copy replaces the
provisional one when it comes back. If the collaborator fails, the local
change is rolled back and the error propagates.
"""

import logging
from datetime import datetime
from typing import Any, Optional, Protocol

from babydaily.engine import mutations
from babydaily.engine.clock import epoch_ms
from babydaily.engine.errors import NotFound
from babydaily.engine.store import KINDS, Record, RecordId, RecordStore

logger = logging.getLogger(__name__)

# Never sent to the collaborator; it owns these.
_SERVER_FIELDS = {"id", "baby_id", "created_at"}


class Persistence(Protocol):
    def list(self, baby_id: int, kind: str) -> list[dict]: ...

    def create(self, baby_id: int, kind: str, fields: dict) -> dict: ...

    def update(self, record_id: RecordId, kind: str, fields: dict) -> dict: ...

    def delete(self, record_id: RecordId, kind: str) -> None: ...


def _payload(record: Record) -> dict[str, Any]:
    return {k: v for k, v in record.model_dump().items() if k not in _SERVER_FIELDS}


class TrackerSession:
    def __init__(self, persistence: Persistence, baby_id: int, store: Optional[RecordStore] = None):
        self.persistence = persistence
        self.baby_id = baby_id
        self.store = store if store is not None else RecordStore()

    def refresh(self, kind: Optional[str] = None) -> RecordStore:
        """Reload one kind (or all) from the collaborator."""
        for k in (kind,) if kind else KINDS:
            store = self.store.with_records(k, ())
            for row in self.persistence.list(self.baby_id, k):
                store = mutations.upsert(store, k, row)
            self.store = store
        return self.store

    def save(self, kind: str, fields: dict[str, Any], now: datetime,
             record_id: Optional[RecordId] = None) -> Record:
        """Create (``record_id`` None) or update a record, optimistically."""
        if record_id is None:
            return self._create(kind, fields, now)
        return self._update(kind, record_id, fields)

    def _create(self, kind: str, fields: dict[str, Any], now: datetime) -> Record:
        provisional_id = mutations.local_id(now)
        record = mutations.build_record(kind, {
            "timestamp": epoch_ms(now),
            **fields,
            "id": provisional_id,
        })
        self.store = mutations.upsert(self.store, kind, record)
        try:
            saved = self.persistence.create(self.baby_id, kind, _payload(record))
        except Exception:
            logger.warning("Create of %s failed, rolling back %r", kind, provisional_id)
            self.store = mutations.remove(self.store, kind, provisional_id)
            raise
        saved_record = mutations.build_record(kind, saved)
        self.store = mutations.upsert(
            mutations.replace_id(self.store, kind, provisional_id, saved_record.id), kind, saved_record
        )
        logger.info("Created %s record %r (was %r)", kind, saved_record.id, provisional_id)
        return saved_record

    def _update(self, kind: str, record_id: RecordId, fields: dict[str, Any]) -> Record:
        previous = self.store.find(kind, record_id)
        if previous is None:
            raise NotFound(kind, record_id)
        record = mutations.build_record(kind, {
            **previous.model_dump(),
            **fields,
            "id": record_id,
        })
        self.store = mutations.update(self.store, kind, record)
        try:
            saved = self.persistence.update(record_id, kind, _payload(record))
        except Exception:
            logger.warning("Update of %s %r failed, restoring previous version", kind, record_id)
            self.store = mutations.upsert(self.store, kind, previous)
            raise
        saved_record = mutations.build_record(kind, saved)
        self.store = mutations.upsert(self.store, kind, saved_record)
        return saved_record

    def delete(self, kind: str, record_id: RecordId) -> None:
        """Remove locally, then remotely. Unknown ids are only forwarded."""
        previous = self.store.find(kind, record_id)
        self.store = mutations.remove(self.store, kind, record_id)
        try:
            self.persistence.delete(record_id, kind)
        except Exception:
            if previous is not None:
                self.store = mutations.upsert(self.store, kind, previous)
            raise
