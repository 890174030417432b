"""Versioned liveness probe."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..core.config import settings
from ..core.observability import SERVICE_NAME
from ..schemas.health import HealthResponse, HealthStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/health", tags=["health"])

PING_VERSION = "1.0.0"


@router.post("/ping", response_model=HealthResponse)
async def health_ping() -> JSONResponse:
    """Report that the catalog API process is up, without touching the database."""
    pong = HealthResponse(
        status=HealthStatus.HEALTHY,
        service=SERVICE_NAME,
        environment=settings.environment,
        version=PING_VERSION,
        timestamp=datetime.now(timezone.utc),
    )
    logger.debug("Ping", extra={"environment": pong.environment})
    return JSONResponse(status_code=200, content=pong.model_dump(mode="json"))
