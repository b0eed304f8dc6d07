"""Health check and monitoring API endpoints."""

import time
from datetime import datetime

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from ..models.response import HealthResponse
from ..config import get_settings

router = APIRouter(prefix="/api", tags=["health"])
settings = get_settings()

# Import the global instances
from ..engine_instance import listing_store, search_engine, search_stats

# Track application start time
app_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the search service"
)
async def health_check() -> HealthResponse:
    """
    Perform a health check on the search service.

    Runs a throwaway query through the engine and reports an empty
    store as degraded.
    """
    uptime = time.time() - app_start_time

    dependencies = {
        "search_engine": "healthy",
        "listing_store": "healthy",
        "lexicon": "healthy" if len(search_engine.lexicon) else "degraded"
    }

    try:
        search_engine.search("test")
    except Exception:
        dependencies["search_engine"] = "unhealthy"

    try:
        if listing_store.count() == 0:
            dependencies["listing_store"] = "degraded"
    except Exception:
        dependencies["listing_store"] = "unhealthy"

    if all(status == "healthy" for status in dependencies.values()):
        status = "healthy"
    elif any(status == "unhealthy" for status in dependencies.values()):
        status = "unhealthy"
    else:
        status = "degraded"

    return HealthResponse(
        status=status,
        version=settings.app_version,
        uptime=uptime,
        dependencies=dependencies
    )


@router.get(
    "/health/ready",
    summary="Readiness check",
    description="Check if the service is ready to accept requests"
)
async def readiness_check() -> JSONResponse:
    """
    Check if the service is ready to accept requests.

    The service is ready once a listing snapshot has been loaded.
    """
    try:
        store_stats = listing_store.get_stats()
    except Exception as e:
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "error": str(e),
                "timestamp": datetime.utcnow().isoformat()
            }
        )

    ready = store_stats["total_listings"] > 0
    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "not_ready",
            "timestamp": datetime.utcnow().isoformat(),
            "store_stats": store_stats
        }
    )


@router.get(
    "/health/live",
    summary="Liveness check",
    description="Check if the service is alive and responding"
)
async def liveness_check() -> JSONResponse:
    """Simple liveness check - just return current time."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "alive",
            "timestamp": datetime.utcnow().isoformat(),
            "uptime": time.time() - app_start_time
        }
    )


@router.get(
    "/status",
    summary="Service status",
    description="Get detailed status information about the service"
)
async def service_status() -> JSONResponse:
    """
    Get detailed status information about the service.

    Includes configuration, store statistics and query counters.
    """
    try:
        config_info = {
            "fuzzy_threshold": settings.fuzzy_threshold,
            "default_page_size": settings.default_page_size,
            "max_query_length": settings.max_query_length,
            "debug": settings.debug
        }

        return JSONResponse(
            status_code=200,
            content={
                "service": {
                    "name": settings.app_name,
                    "version": settings.app_version,
                    "status": "running",
                    "uptime": time.time() - app_start_time,
                    "start_time": datetime.fromtimestamp(app_start_time).isoformat()
                },
                "configuration": config_info,
                "store": listing_store.get_stats(),
                "lexicon": {
                    "locations": len(search_engine.lexicon.location_aliases),
                    "categories": len(search_engine.lexicon.category_synonyms)
                },
                "statistics": search_stats.snapshot(),
                "timestamp": datetime.utcnow().isoformat()
            }
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get service status: {str(e)}"
        )
