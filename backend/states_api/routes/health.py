"""
States API Backend — Health Check Route
========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Runs SELECT 1 against the fun-facts database and reports how many
       states the in-memory catalog holds.

Status levels:
    - healthy:   database reachable and catalog loaded (HTTP 200)
    - unhealthy: either dependency missing (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request, Response
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from states_api import __version__
from states_api.database import engine
from states_api.schemas.state import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "A dependency is unavailable", "model": HealthResponse}},
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    catalog = getattr(request.app.state, "catalog", None)
    states_loaded = len(catalog) if catalog is not None else 0
    if states_loaded == 0:
        overall = "unhealthy"

    if overall != "healthy":
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        states_loaded=states_loaded,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
