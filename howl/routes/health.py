"""
Howl Backend — Health Check Route
===================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Runs `SELECT 1` through the application's Database and reports the result.
Who:   Called by container health checks and load balancers.

Status levels:
    - healthy:   database reachable
    - unhealthy: database unreachable or not yet connected
"""

import logging
import time

from fastapi import APIRouter, Request

from howl import __version__
from howl.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    """
    Probe the database and return aggregate status with uptime.

    The probe is a single `SELECT 1`; cheap enough to run every few seconds.
    """
    database = getattr(request.app.state, "database", None)
    connected = database is not None and await database.ping()
    if not connected:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
