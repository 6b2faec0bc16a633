"""Bulk export of every record as CSV."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from babydaily.api.dependencies import BabyDep, DbDep
from babydaily.engine.export import export_all, to_csv
from babydaily.services import record_service

router = APIRouter(prefix="/export", tags=["export"])


@router.get("/{baby_id}", response_class=PlainTextResponse)
async def export_records(baby: BabyDep, db: DbDep) -> PlainTextResponse:
    """Feedings, diapers, sleeps and growth as one CSV download."""
    store = await record_service.load_store(db, baby.id)
    return PlainTextResponse(
        to_csv(export_all(store)),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="baby-{baby.id}-records.csv"'},
    )
