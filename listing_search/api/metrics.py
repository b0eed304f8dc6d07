"""Metrics and monitoring API endpoints."""

import psutil
from fastapi import APIRouter, HTTPException

from ..models.response import MetricsResponse

router = APIRouter(prefix="/api", tags=["metrics"])

# Import the global instances
from ..engine_instance import listing_store, search_stats


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Get search metrics",
    description="Query counters per search mode and process memory usage"
)
async def get_metrics() -> MetricsResponse:
    """
    Get search metrics.

    Counters are kept by the web layer; the engine itself holds no state
    between calls.
    """
    try:
        stats = search_stats.snapshot()

        memory_info = psutil.Process().memory_info()
        memory_usage_mb = memory_info.rss / (1024 * 1024)  # Convert to MB

        return MetricsResponse(
            total_queries=stats["total_queries"],
            queries_by_mode=stats["queries_by_mode"],
            empty_results=stats["empty_results"],
            failed_queries=stats["failed_queries"],
            average_response_time_ms=stats["average_response_time_ms"],
            error_rate=stats["error_rate"],
            total_listings=listing_store.count(),
            memory_usage_mb=memory_usage_mb
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get metrics: {str(e)}"
        )
