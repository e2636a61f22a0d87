"""
Note Nexus Backend — Health & Root Routes
==========================================

GET /        plain liveness string, kept for existing uptime checks
GET /health  dependency status for load balancers and monitoring

Status levels:
    healthy:    database reachable and payment gateway configured
    degraded:   database reachable, gateway key missing (payments fail)
    unhealthy:  database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse

from notenexus import __version__
from notenexus.database import ping_database
from notenexus.schemas.common import HealthResponse
from notenexus.services.payment_gateway import payment_gateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    return "Note Nexus Server is running.."


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check():
    """
    Check database connectivity (SELECT 1) and gateway configuration.

    The gateway is not called; creating a probe intent would cost an API
    request every few seconds.
    """
    db_ok = await ping_database()
    gateway_ok = payment_gateway.is_configured

    if not db_ok:
        overall = "unhealthy"
    elif not gateway_ok:
        overall = "degraded"
    else:
        overall = "healthy"

    body = HealthResponse(
        status=overall,
        version=__version__,
        database="connected" if db_ok else "disconnected",
        payment_gateway="configured" if gateway_ok else "unconfigured",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if not db_ok:
        logger.warning("Health check: database unreachable")
        return JSONResponse(status_code=503, content=body.model_dump(by_alias=True))
    return body
