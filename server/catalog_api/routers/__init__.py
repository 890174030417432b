"""FastAPI routers package."""

from .destinations import router as destinations_router
from .fixed_departures import router as fixed_departures_router
from .health import router as health_router
from .holiday_types import router as holiday_types_router
from .metrics import router as metrics_router
from .packages import router as packages_router
from .search import router as search_router

__all__ = [
    "destinations_router",
    "fixed_departures_router",
    "health_router",
    "holiday_types_router",
    "metrics_router",
    "packages_router",
    "search_router",
]
