"""Derived views: what each screen shows, computed from a baby's records."""

import logging
from typing import Literal

from fastapi import APIRouter, Query

from babydaily.api.dependencies import BabyDep, DbDep, NowDep
from babydaily.engine import views
from babydaily.services import record_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/views", tags=["views"])


@router.get("/{baby_id}/feedings", response_model=views.FeedingView)
async def feeding_view(
    baby: BabyDep,
    db: DbDep,
    now: NowDep,
    scope: Literal["today", "week"] = Query("today", description="today | week"),
) -> views.FeedingView:
    """Feedings for today or the surrounding week, with the total volume."""
    store = await record_service.load_store(db, baby.id)
    logger.debug("Feeding view for baby %d (%s, now=%s)", baby.id, scope, now)
    return views.feeding_view(store, scope, now)


@router.get("/{baby_id}/diapers", response_model=views.DiaperView)
async def diaper_view(
    baby: BabyDep,
    db: DbDep,
    now: NowDep,
    type: Literal["all", "pee", "poo", "mixed"] = Query("all"),
    scope: Literal["today", "history"] = Query("today"),
) -> views.DiaperView:
    """Diaper log filtered by type and scope, plus the next-change prediction."""
    store = await record_service.load_store(db, baby.id)
    logger.debug("Diaper view for baby %d (type=%s, scope=%s)", baby.id, type, scope)
    return views.diaper_view(store, type, scope, now)


@router.get("/{baby_id}/sleeps", response_model=views.SleepView)
async def sleep_view(baby: BabyDep, db: DbDep, now: NowDep) -> views.SleepView:
    """Today's sleep sessions and their total duration."""
    store = await record_service.load_store(db, baby.id)
    logger.debug("Sleep view for baby %d (now=%s)", baby.id, now)
    return views.sleep_view(store, now)


@router.get("/{baby_id}/growth", response_model=views.GrowthView)
async def growth_view(
    baby: BabyDep,
    db: DbDep,
    field: Literal["weight", "height"] = Query("weight"),
) -> views.GrowthView:
    """Latest measurement and the normalised chart series for one field."""
    store = await record_service.load_store(db, baby.id)
    logger.debug("Growth view for baby %d (%s)", baby.id, field)
    return views.growth_view(store, field)
