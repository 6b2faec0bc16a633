"""Healthcheck endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel

from babydaily.api.dependencies import DbDep

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    database: bool


@router.get("/health", response_model=HealthResponse)
async def health_check(db: DbDep) -> HealthResponse:
    """Service status and database reachability."""
    async with db.execute("SELECT 1") as cur:
        ok = await cur.fetchone() is not None
    return HealthResponse(status="ok", database=ok)
