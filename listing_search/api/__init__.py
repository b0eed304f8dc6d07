"""API endpoints for the listing search service."""

from .search import router as search_router
from .services import router as services_router
from .listings import router as listings_router
from .health import router as health_router
from .metrics import router as metrics_router

__all__ = [
    "search_router",
    "services_router",
    "listings_router",
    "health_router",
    "metrics_router",
]
