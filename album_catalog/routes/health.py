"""
Album Catalog: Health Check Route
===================================

What:  Health check endpoint for monitoring and container probes.
How:   Runs `SELECT 1` against the database and reports the memory store
       size alongside uptime.

Status levels:
    - healthy:   database reachable
    - unhealthy: database unreachable (the memory routes still work)
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from album_catalog import __version__
from album_catalog.database import engine
from album_catalog.schemas.album import HealthResponse
from album_catalog.services.memory_store import memory_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        memory_albums=len(memory_store),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
