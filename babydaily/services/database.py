"""SQLite initialization and async connection management via aiosqlite."""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import aiosqlite

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "data/babydaily.db")

__all__ = [
    "DATABASE_URL", "SCHEMA", "create_tables", "create_schema", "get_db",
    "_CREATE_USERS", "_CREATE_BABIES", "_CREATE_FEEDINGS", "_CREATE_DIAPERS",
    "_CREATE_SLEEPS", "_CREATE_GROWTH",
]

_CREATE_USERS = """
CREATE TABLE IF NOT EXISTS users (
    id                INTEGER PRIMARY KEY AUTOINCREMENT,
    username          TEXT    NOT NULL UNIQUE,
    password_hash     TEXT    NOT NULL,
    security_q1_hash  TEXT    NOT NULL,
    security_q2_hash  TEXT    NOT NULL,
    security_q3_hash  TEXT    NOT NULL,
    created_at        TEXT    NOT NULL DEFAULT (datetime('now'))
)
"""

_CREATE_BABIES = """
CREATE TABLE IF NOT EXISTS babies (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id     INTEGER REFERENCES users(id) ON DELETE CASCADE,
    name        TEXT    NOT NULL,
    birth_date  TEXT    NOT NULL,
    created_at  TEXT    NOT NULL DEFAULT (datetime('now'))
)
"""

_CREATE_FEEDINGS = """
CREATE TABLE IF NOT EXISTS feedings (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    baby_id     INTEGER NOT NULL REFERENCES babies(id) ON DELETE CASCADE,
    type        TEXT    NOT NULL CHECK(type IN ('formula', 'breast')),
    volume      INTEGER NOT NULL CHECK(volume >= 0),
    time        TEXT    NOT NULL,
    timestamp   INTEGER NOT NULL,
    note        TEXT    NOT NULL DEFAULT '',
    created_at  TEXT    NOT NULL DEFAULT (datetime('now'))
)
"""

_CREATE_DIAPERS = """
CREATE TABLE IF NOT EXISTS diapers (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    baby_id     INTEGER NOT NULL REFERENCES babies(id) ON DELETE CASCADE,
    type        TEXT    NOT NULL CHECK(type IN ('pee', 'poo', 'mixed')),
    sub         TEXT    NOT NULL DEFAULT '',
    time        TEXT    NOT NULL,
    timestamp   INTEGER NOT NULL,
    color       TEXT,
    created_at  TEXT    NOT NULL DEFAULT (datetime('now'))
)
"""

_CREATE_SLEEPS = """
CREATE TABLE IF NOT EXISTS sleeps (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    baby_id     INTEGER NOT NULL REFERENCES babies(id) ON DELETE CASCADE,
    "start"     TEXT    NOT NULL,
    "end"       TEXT    NOT NULL,
    duration    TEXT    NOT NULL,
    timestamp   INTEGER NOT NULL,
    created_at  TEXT    NOT NULL DEFAULT (datetime('now'))
)
"""

_CREATE_GROWTH = """
CREATE TABLE IF NOT EXISTS growth (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    baby_id     INTEGER NOT NULL REFERENCES babies(id) ON DELETE CASCADE,
    weight      TEXT    NOT NULL,
    height      TEXT    NOT NULL,
    date        TEXT    NOT NULL,
    timestamp   INTEGER NOT NULL,
    created_at  TEXT    NOT NULL DEFAULT (datetime('now'))
)
"""

SCHEMA = (
    _CREATE_USERS,
    _CREATE_BABIES,
    _CREATE_FEEDINGS,
    _CREATE_DIAPERS,
    _CREATE_SLEEPS,
    _CREATE_GROWTH,
)


async def create_schema(db: aiosqlite.Connection) -> None:
    """Create every table on an open connection."""
    await db.execute("PRAGMA foreign_keys = ON")
    for statement in SCHEMA:
        await db.execute(statement)
    await db.commit()


async def create_tables(db_url: str = DATABASE_URL) -> None:
    """Create all application tables if they don't exist."""
    os.makedirs(os.path.dirname(db_url) if os.path.dirname(db_url) else ".", exist_ok=True)
    async with aiosqlite.connect(db_url) as db:
        await create_schema(db)
    logger.info("SQLite schema ready at %s", db_url)


@asynccontextmanager
async def get_db(db_url: str = DATABASE_URL) -> AsyncGenerator[aiosqlite.Connection, None]:
    """Context manager that provides a SQLite connection with foreign keys enabled."""
    async with aiosqlite.connect(db_url) as db:
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys = ON")
        yield db
