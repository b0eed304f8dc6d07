"""Search API endpoints."""

import time
from typing import List, Optional

import structlog
from fastapi import APIRouter, HTTPException, Query

from ..config import get_settings
from ..models.listing import ListingRecord
from ..models.request import SearchFilters
from ..models.response import SearchPage, SuggestionResponse

router = APIRouter(prefix="/api", tags=["search"])
settings = get_settings()
logger = structlog.get_logger(__name__)

# Import the global search engine instance
from ..engine_instance import search_engine, search_stats


def clip_query(query: Optional[str]) -> str:
    """Bound the query length instead of rejecting long input."""
    return (query or "")[:settings.max_query_length]


def build_filters(**params: Optional[str]) -> SearchFilters:
    """Validate raw query parameters into SearchFilters using service defaults."""
    if params.get("limit") is None:
        params["limit"] = str(settings.default_page_size)
    return SearchFilters.model_validate(params)


@router.get(
    "/search",
    response_model=List[ListingRecord],
    summary="Search listings",
    description="Keyword search over available listings, ranked by relevance"
)
async def search_listings(
    q: Optional[str] = Query(None, description="Free-text query; empty matches everything")
) -> List[ListingRecord]:
    """
    Simple search.

    Expands the query through the location and category tables and returns
    every matching available listing, best match first.
    """
    query = clip_query(q)
    start_time = time.time()
    try:
        results = search_engine.search(query)
    except Exception as e:
        search_stats.record_failure("simple")
        logger.error("Search failed", mode="simple", query=query, error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="Search failed")

    search_stats.record("simple", len(results), (time.time() - start_time) * 1000)
    return results


@router.get(
    "/search/advanced",
    response_model=SearchPage,
    summary="Advanced search",
    description="Filtered, sorted and paginated listing search"
)
async def advanced_search(
    q: Optional[str] = Query(None, description="Free-text query"),
    county: Optional[str] = Query(None, description="County substring"),
    city: Optional[str] = Query(None, description="City substring"),
    service_type: Optional[str] = Query(None, alias="serviceType", description="Exact service type"),
    available: Optional[str] = Query(None, description="Only available listings (default true)"),
    sort: Optional[str] = Query(None, description="relevance, newest or popular"),
    page: Optional[str] = Query(None, description="1-based page number"),
    limit: Optional[str] = Query(None, description="Page size")
) -> SearchPage:
    """
    Advanced search.

    Malformed pagination or sort values fall back to their defaults
    rather than failing the request.
    """
    query = clip_query(q)
    filters = build_filters(
        county=county,
        city=city,
        serviceType=service_type,
        available=available,
        sort=sort,
        page=page,
        limit=limit,
    )

    start_time = time.time()
    try:
        result = search_engine.advanced_search(query, filters)
    except Exception as e:
        search_stats.record_failure("advanced")
        logger.error("Search failed", mode="advanced", query=query, error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="Search failed")

    search_stats.record("advanced", result.total, (time.time() - start_time) * 1000)
    return result


@router.get(
    "/search/suggestions",
    response_model=SuggestionResponse,
    summary="Get search suggestions",
    description="Known place names and service types close to a misspelled query"
)
async def get_suggestions(
    q: Optional[str] = Query(None, description="The query to get suggestions for"),
    max_suggestions: Optional[int] = Query(None, ge=1, le=20, description="Maximum number of suggestions")
) -> SuggestionResponse:
    """
    Get suggestions for a query.

    Useful when a search came back empty and the user needs help
    with the spelling of a place or category.
    """
    query = clip_query(q)
    start_time = time.time()
    try:
        suggestions = search_engine.suggest(
            query, max_suggestions or settings.max_suggestions
        )
    except Exception as e:
        search_stats.record_failure("suggest")
        logger.error("Suggestions failed", query=query, error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to get suggestions")

    search_stats.record("suggest", len(suggestions), (time.time() - start_time) * 1000)
    return SuggestionResponse(query=query, suggestions=suggestions)
