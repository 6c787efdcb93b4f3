"""
Health check endpoints.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ...core.config import get_settings
from ...core.utils.datetime_utils import utc_now
from ..schemas.common import ApiResponse
from ..utils.responses import ok

router = APIRouter(prefix="/health", tags=["health"])
logger = logging.getLogger("amrutam")


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    message: str
    timestamp: datetime
    version: str


@router.get("", response_model=HealthResponse)
@router.get("/", response_model=HealthResponse, include_in_schema=False)
async def health_check():
    """Report that the API process is up."""
    return HealthResponse(
        status="success",
        message="Amrutam Doctor Portal API is running",
        timestamp=utc_now(),
        version=get_settings().app_version,
    )


@router.get("/live", response_model=ApiResponse[dict])
async def liveness_check():
    return ok({"status": "alive", "timestamp": utc_now()}, message="OK")


@router.get("/ready", response_model=ApiResponse[dict])
async def readiness_check(request: Request):
    """
    Readiness check endpoint.

    Pings MongoDB when a client is attached to the app.
    """
    checks = {}
    all_ok = True

    client = getattr(request.app.state, "mongo_client", None)
    if client is None:
        checks["database"] = "not_configured"
    else:
        try:
            await client.admin.command("ping")
            checks["database"] = "ok"
        except Exception as e:
            logger.error(f"Database ping failed: {e}")
            checks["database"] = f"error: {str(e)[:50]}"
            all_ok = False

    return ok(
        {"status": "ready" if all_ok else "degraded", "timestamp": utc_now(), "checks": checks},
        message="OK" if all_ok else "Some services unavailable",
    )
