"""Liveness payloads."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    NOT_READY = "not_ready"


class HealthResponse(BaseModel):
    """Body of ``POST /v1/health/ping``."""

    status: HealthStatus
    service: str = Field(..., description="Service name reported to tracing and metrics")
    environment: str = Field(..., description="development, staging or production")
    version: str
    timestamp: datetime = Field(..., description="Server time in UTC (ISO 8601)")
