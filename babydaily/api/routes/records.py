"""CRUD endpoints for feedings, diapers, sleeps and growth.

The four kinds share one shape, so each router is built from the same
template:

- ``GET    /{kind}/{baby_id}``  full history, newest first
- ``POST   /{kind}/{baby_id}``  record a new entry
- ``PUT    /{kind}/{record_id}`` replace an entry
- ``DELETE /{kind}/{record_id}`` remove an entry (idempotent)
"""

from fastapi import APIRouter, HTTPException, status

from babydaily.api.dependencies import BabyDep, DbDep
from babydaily.engine.store import KIND_MODELS
from babydaily.services import record_service

_LABELS = {"feedings": "Feeding", "diapers": "Diaper", "sleeps": "Sleep", "growth": "Growth"}


def build_router(kind: str) -> APIRouter:
    model, create_model = KIND_MODELS[kind]
    label = _LABELS[kind]
    router = APIRouter(prefix=f"/{kind}", tags=[kind])

    @router.get("/{baby_id}", response_model=list[model], name=f"list_{kind}",
                description=f"Return the {kind} history for a baby, newest first.")
    async def list_records(baby: BabyDep, db: DbDep):
        return await record_service.list_records(db, kind, baby.id)

    @router.post(
        "/{baby_id}", response_model=model, status_code=status.HTTP_201_CREATED, name=f"add_{kind}",
        description=f"Record a new {label.lower()} entry (timestamp defaults to now).",
    )
    async def add_record(payload: create_model, baby: BabyDep, db: DbDep):
        return await record_service.add_record(db, kind, baby.id, payload)

    @router.put("/{record_id}", response_model=model, name=f"update_{kind}",
                description=f"Replace a {label.lower()} entry.")
    async def update_record(record_id: int, payload: create_model, db: DbDep):
        record = await record_service.update_record(db, kind, record_id, payload)
        if not record:
            raise HTTPException(status_code=404, detail=f"{label} {record_id} not found")
        return record

    @router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT, name=f"delete_{kind}",
                   description=f"Delete a {label.lower()} entry. Unknown ids are a no-op.")
    async def delete_record(record_id: int, db: DbDep) -> None:
        await record_service.delete_record(db, kind, record_id)

    return router


feedings_router = build_router("feedings")
diapers_router = build_router("diapers")
sleeps_router = build_router("sleeps")
growth_router = build_router("growth")
