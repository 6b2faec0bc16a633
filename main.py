"""BabyDaily API application entry point.

Run with ``uvicorn main:app --reload``.
"""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()  # load .env before anything reads os.getenv()

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from babydaily.api.routes import (
    auth_router, babies_router, diapers_router, export_router, feedings_router,
    growth_router, health_router, sleeps_router, users_router, views_router,
)
from babydaily.engine.errors import InvalidFormat, NotFound, ValidationFailure
from babydaily.services.database import DATABASE_URL, create_tables

logging.basicConfig(
    level=os.getenv("BABYDAILY_LOG_LEVEL", "INFO"),
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the SQLite schema at startup."""
    await create_tables(DATABASE_URL)
    logger.info("BabyDaily API started (database: %s)", DATABASE_URL)

    yield

    logger.info("BabyDaily API stopped")


app = FastAPI(
    title="BabyDaily API",
    description="Feeding, diaper, sleep and growth tracker for one baby profile.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(InvalidFormat)
async def invalid_format_handler(request: Request, exc: InvalidFormat) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(ValidationFailure)
async def validation_failure_handler(request: Request, exc: ValidationFailure) -> JSONResponse:
    errors = [{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors]
    return JSONResponse(status_code=422, content={"detail": errors})


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
    logger.warning("%s", exc)
    return JSONResponse(status_code=404, content={"detail": str(exc)})


app.include_router(health_router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(babies_router)
app.include_router(feedings_router)
app.include_router(diapers_router)
app.include_router(sleeps_router)
app.include_router(growth_router)
app.include_router(views_router)
app.include_router(export_router)
