from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.acquisition.logging_utils import configure_logging
from app.config import get_persistence_settings

logger = logging.getLogger(__name__)


def _check_db() -> bool:
    """Open a session and run SELECT 1. Returns False if the DB is unreachable."""
    from sqlalchemy import text
    from sqlalchemy.exc import SQLAlchemyError

    from db.session import SessionLocal

    try:
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
        finally:
            db.close()
    except (SQLAlchemyError, RuntimeError) as exc:
        logger.warning("Database unavailable, lookups will not be persisted: %s", exc)
        return False
    return True


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Report persistence readiness on boot. Lookups are served either way."""
    if get_persistence_settings().enabled and _check_db():
        logger.info("Database connectivity confirmed")
    yield


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    configure_logging()

    application = FastAPI(
        title="Summoner Insight API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import summoner_router

    application.include_router(summoner_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
