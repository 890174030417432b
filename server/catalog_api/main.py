"""Travel catalog API application."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from .core.config import settings
from .core.database import async_session_factory, close_db, engine, init_db
from .core.exceptions import (
    ProblemDetailsException,
    generic_exception_handler,
    problem_details_handler,
    request_validation_handler,
)
from .core.middleware import setup_middleware
from .core.observability import (
    SERVICE_NAME,
    instrument_fastapi,
    instrument_sqlalchemy,
    setup_structured_logging,
    setup_telemetry,
)
from .routers import destinations, fixed_departures, health, holiday_types, metrics, packages, search
from .schemas.health import HealthStatus

setup_structured_logging()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

CATALOG_ROUTERS = (
    packages.router,
    destinations.router,
    fixed_departures.router,
    holiday_types.router,
    search.router,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Set up telemetry and the schema on startup; release DB connections on shutdown."""
    logger.info(
        "Starting catalog API",
        extra={"environment": settings.environment, "debug": settings.debug}
    )

    try:
        setup_telemetry(SERVICE_NAME)
        instrument_sqlalchemy(engine)
        await init_db()
    except Exception as e:
        logger.error(f"Catalog API failed to start: {e}")
        raise

    logger.info("Catalog API ready to serve")

    yield

    try:
        await close_db()
    except Exception as e:
        logger.error(f"Error closing catalog database: {e}")

    logger.info("Catalog API stopped")


async def database_ready() -> bool:
    try:
        async with async_session_factory() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Catalog database not reachable", extra={"error": str(e)})
        return False
    return True


def register_probes(app: FastAPI) -> None:
    """Unversioned liveness, readiness and info endpoints used by deployments."""

    @app.get("/health", tags=["Health"], summary="Liveness", response_model=dict)
    async def health_check():
        return {
            "status": HealthStatus.HEALTHY.value,
            "service": SERVICE_NAME,
            "version": API_VERSION,
            "environment": settings.environment,
        }

    @app.get("/ready", tags=["Health"], summary="Readiness", response_model=dict)
    async def readiness_check():
        """Ready only when the catalog database answers a query; 503 otherwise."""
        if await database_ready():
            return {"status": "ready", "service": SERVICE_NAME, "checks": {"database": "ok"}}

        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": HealthStatus.NOT_READY.value,
                "service": SERVICE_NAME,
                "checks": {"database": "unavailable"},
            },
        )

    @app.get("/info", tags=["Info"], summary="Service information", response_model=dict)
    async def service_info():
        return {
            "service": SERVICE_NAME,
            "version": API_VERSION,
            "description": "Travel agency catalog backend",
            "environment": settings.environment,
            "collections": ["packages", "destinations", "fixed-departures", "holiday-types"],
            "features": {
                "slug_allocation": True,
                "suggestions": True,
                "tracing": bool(settings.otlp_endpoint),
            },
            "suggestions": {
                "result_limit": settings.suggest_result_limit,
                "combined_result_limit": settings.combined_result_limit,
            },
            "docs": "/docs" if settings.debug else None,
        }


def create_app() -> FastAPI:
    """Build the catalog API with its middleware, error handlers and routers."""
    app = FastAPI(
        title="Travel Catalog API",
        description="Catalog of holiday packages, destinations, fixed departures and holiday types with type-ahead search",
        version=API_VERSION,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "traceparent", "tracestate"],
    )
    setup_middleware(app, enable_logging=True)
    instrument_fastapi(app)

    app.add_exception_handler(ProblemDetailsException, problem_details_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    register_probes(app)
    app.include_router(health.router)
    for router in CATALOG_ROUTERS:
        app.include_router(router)
    app.include_router(metrics.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        proxy_headers=settings.is_production,
    )
