"""Create / update / delete against a RecordStore.

Every function returns a new store and leaves its input untouched. After
any write the affected collection is re-sorted newest first, so the order
holds even when records arrive with out-of-sequence timestamps.
"""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ValidationError

from babydaily.engine.clock import epoch_ms
from babydaily.engine.errors import NotFound, ValidationFailure
from babydaily.engine.store import KIND_MODELS, Record, RecordId, RecordStore, check_kind

logger = logging.getLogger(__name__)


def build_record(kind: str, fields: Mapping[str, Any] | BaseModel) -> Record:
    """Validate raw fields into the stored model for ``kind``.

    Write-time normalisation happens here: diaper color dropped for pee,
    growth figures fixed to two decimals, sleep duration recomputed.
    """
    model, _ = KIND_MODELS[check_kind(kind)]
    if isinstance(fields, model):
        return fields
    data = fields.model_dump() if isinstance(fields, BaseModel) else dict(fields)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ValidationFailure.from_pydantic(kind, exc) from exc


def _sorted_newest_first(records) -> tuple[Record, ...]:
    return tuple(sorted(records, key=lambda r: r.timestamp, reverse=True))


def upsert(store: RecordStore, kind: str, record: Mapping[str, Any] | BaseModel) -> RecordStore:
    """Replace the record with the same id, or prepend it if new."""
    record = build_record(kind, record)
    existing = store.records(kind)
    if any(r.id == record.id for r in existing):
        records = [record if r.id == record.id else r for r in existing]
        logger.debug("Replaced %s record %r", kind, record.id)
    else:
        records = [record, *existing]
        logger.debug("Added %s record %r", kind, record.id)
    return store.with_records(kind, _sorted_newest_first(records))


def update(store: RecordStore, kind: str, record: Mapping[str, Any] | BaseModel) -> RecordStore:
    """Like :func:`upsert` but raises NotFound when the id is not present."""
    record = build_record(kind, record)
    if store.find(kind, record.id) is None:
        raise NotFound(kind, record.id)
    return upsert(store, kind, record)


def remove(store: RecordStore, kind: str, record_id: RecordId) -> RecordStore:
    """Drop the record with ``record_id``. Unknown ids are a no-op."""
    existing = store.records(kind)
    kept = tuple(r for r in existing if r.id != record_id)
    if len(kept) == len(existing):
        return store
    logger.debug("Removed %s record %r", kind, record_id)
    return store.with_records(kind, kept)


def replace_id(store: RecordStore, kind: str, old_id: RecordId, new_id: RecordId) -> RecordStore:
    """Swap a provisional id for the one the persistence layer assigned."""
    record = store.find(kind, old_id)
    if record is None:
        raise NotFound(kind, old_id)
    swapped = record.model_copy(update={"id": new_id})
    records = [r for r in store.records(kind) if r.id not in (old_id, new_id)]
    return store.with_records(kind, _sorted_newest_first([swapped, *records]))


def local_id(now: datetime) -> int:
    """Provisional identifier for a record created at ``now`` (epoch ms)."""
    return epoch_ms(now)
