"""Async CRUD for the four record tables (feedings, diapers, sleeps, growth).

One table per kind; the column list below is the only per-kind knowledge.
Every listing comes back newest first.
"""

import logging
from datetime import datetime

import aiosqlite
from pydantic import BaseModel

from babydaily.engine.clock import epoch_ms
from babydaily.engine.store import KIND_MODELS, KINDS, Record, RecordStore, check_kind

logger = logging.getLogger(__name__)

# kind -> writable columns, in insert order
COLUMNS: dict[str, tuple[str, ...]] = {
    "feedings": ("type", "volume", "time", "timestamp", "note"),
    "diapers": ("type", "sub", "time", "timestamp", "color"),
    "sleeps": ("start", "end", "duration", "timestamp"),
    "growth": ("weight", "height", "date", "timestamp"),
}


def _row_to_record(kind: str, row: aiosqlite.Row) -> Record:
    model, _ = KIND_MODELS[kind]
    return model.model_validate(dict(row))


def _values(kind: str, payload: BaseModel, fallback_timestamp: int | None = None) -> list:
    _, create_model = KIND_MODELS[kind]
    data = create_model.model_validate(payload.model_dump()).model_dump()
    if data.get("timestamp") is None:
        data["timestamp"] = (
            fallback_timestamp if fallback_timestamp is not None else epoch_ms(datetime.now())
        )
    return [data[c] for c in COLUMNS[kind]]


def _quoted(columns) -> str:
    return ", ".join(f'"{c}"' for c in columns)


async def get_record(db: aiosqlite.Connection, kind: str, record_id: int) -> Record | None:
    """Return a record by id, or None."""
    check_kind(kind)
    async with db.execute(f"SELECT * FROM {kind} WHERE id = ?", (record_id,)) as cur:
        row = await cur.fetchone()
    return _row_to_record(kind, row) if row else None


async def list_records(db: aiosqlite.Connection, kind: str, baby_id: int) -> list[Record]:
    """Return all records of ``kind`` for a baby, most recent first."""
    check_kind(kind)
    rows = await db.execute_fetchall(
        f"SELECT * FROM {kind} WHERE baby_id = ? ORDER BY timestamp DESC, id DESC",
        (baby_id,),
    )
    return [_row_to_record(kind, r) for r in rows]


async def add_record(
    db: aiosqlite.Connection, kind: str, baby_id: int, payload: BaseModel
) -> Record:
    """Insert a record and return it with its database id.

    A payload without a timestamp is stamped with the current time.
    """
    columns = COLUMNS[check_kind(kind)]
    placeholders = ", ".join("?" for _ in range(len(columns) + 1))
    cursor = await db.execute(
        f"INSERT INTO {kind} (baby_id, {_quoted(columns)}) VALUES ({placeholders})",
        (baby_id, *_values(kind, payload)),
    )
    await db.commit()
    logger.info("Added %s record %d for baby %d", kind, cursor.lastrowid, baby_id)
    return await get_record(db, kind, cursor.lastrowid)


async def update_record(
    db: aiosqlite.Connection, kind: str, record_id: int, payload: BaseModel
) -> Record | None:
    """Replace a record's fields. Keeps the stored timestamp if none is given."""
    current = await get_record(db, kind, record_id)
    if not current:
        return None

    columns = COLUMNS[kind]
    assignments = ", ".join(f'"{c}" = ?' for c in columns)
    await db.execute(
        f"UPDATE {kind} SET {assignments} WHERE id = ?",
        (*_values(kind, payload, fallback_timestamp=current.timestamp), record_id),
    )
    await db.commit()
    return await get_record(db, kind, record_id)


async def delete_record(db: aiosqlite.Connection, kind: str, record_id: int) -> bool:
    """Delete a record. Returns True if deleted."""
    check_kind(kind)
    cursor = await db.execute(f"DELETE FROM {kind} WHERE id = ?", (record_id,))
    await db.commit()
    return cursor.rowcount > 0


async def load_store(db: aiosqlite.Connection, baby_id: int) -> RecordStore:
    """Snapshot every collection for a baby into a RecordStore."""
    return RecordStore(**{kind: await list_records(db, kind, baby_id) for kind in KINDS})
