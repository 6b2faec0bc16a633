"""Shared fixtures across tests: in-memory SQLite via aiosqlite."""

import os

os.environ.setdefault("BABYDAILY_BCRYPT_ROUNDS", "4")  # fast hashing in tests

from datetime import date

import aiosqlite
import pytest
import pytest_asyncio

from babydaily.models.baby import BabyCreate
from babydaily.services.baby_service import create_baby
from babydaily.services.database import create_schema


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest_asyncio.fixture
async def db():
    """Fresh in-memory database with every table, closed after each test."""
    async with aiosqlite.connect(":memory:") as conn:
        conn.row_factory = aiosqlite.Row
        await create_schema(conn)
        yield conn


@pytest_asyncio.fixture
async def baby(db):
    return await create_baby(db, BabyCreate(name="Leo", birth_date=date(2024, 2, 1)))
