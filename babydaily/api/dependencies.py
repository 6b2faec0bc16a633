"""Reusable FastAPI dependencies."""

from collections.abc import AsyncGenerator
from datetime import datetime
from typing import Annotated, Optional

import aiosqlite
from fastapi import Depends, HTTPException, Query

from babydaily.models.baby import Baby
from babydaily.services import baby_service
from babydaily.services.database import get_db as _get_db


async def db_dependency() -> AsyncGenerator[aiosqlite.Connection, None]:
    """Provide a SQLite connection for the duration of the request."""
    async with _get_db() as conn:
        yield conn


DbDep = Annotated[aiosqlite.Connection, Depends(db_dependency)]


async def existing_baby(baby_id: int, db: DbDep) -> Baby:
    """Resolve ``baby_id`` from the path or answer 404."""
    baby = await baby_service.get_baby(db, baby_id)
    if not baby:
        raise HTTPException(status_code=404, detail=f"Baby {baby_id} not found")
    return baby


BabyDep = Annotated[Baby, Depends(existing_baby)]


def reference_time(
    now: Optional[datetime] = Query(
        None, description="Reference moment (ISO datetime). Default: server's current time."
    ),
) -> datetime:
    """The moment "today" and "this week" are measured from."""
    return now or datetime.now()


NowDep = Annotated[datetime, Depends(reference_time)]
