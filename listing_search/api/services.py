"""Listing browse endpoints."""

import time
from typing import List, Optional

import structlog
from fastapi import APIRouter, HTTPException, Query

from ..config import get_settings
from ..models.listing import ListingRecord
from ..models.request import BrowseOptions
from ..models.response import SearchPage

router = APIRouter(prefix="/api", tags=["services"])
settings = get_settings()
logger = structlog.get_logger(__name__)

# Import the global search engine instance
from ..engine_instance import search_engine, search_stats


@router.get(
    "/services",
    response_model=SearchPage,
    summary="Browse listings",
    description="Paginated feed of available listings, optionally for one category"
)
async def browse_listings(
    category: Optional[str] = Query(None, description="Service type"),
    sort: Optional[str] = Query(None, description="newest, closest or popular"),
    page: Optional[str] = Query(None, description="1-based page number"),
    limit: Optional[str] = Query(None, description="Page size")
) -> SearchPage:
    """Browse available listings page by page."""
    options = BrowseOptions.model_validate({
        "category": category,
        "sort": sort,
        "page": page,
        "limit": limit if limit is not None else str(settings.default_page_size),
    })

    start_time = time.time()
    try:
        result = search_engine.browse(options)
    except Exception as e:
        search_stats.record_failure("browse")
        logger.error("Browse failed", category=category, error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to get services")

    search_stats.record("browse", result.total, (time.time() - start_time) * 1000)
    return result


@router.get(
    "/services/location",
    response_model=List[ListingRecord],
    summary="Listings by location",
    description="Available listings in a county and/or city, newest first"
)
async def listings_by_location(
    county: Optional[str] = Query(None, description="County, any known spelling"),
    city: Optional[str] = Query(None, description="City, any known spelling")
) -> List[ListingRecord]:
    """
    Browse by location.

    Spelling variants from the location alias table are honoured, so
    ``city=Tubman Burg`` finds listings in Tubmanburg.
    """
    start_time = time.time()
    try:
        results = search_engine.by_location(county=county, city=city)
    except Exception as e:
        search_stats.record_failure("location")
        logger.error("Location search failed", county=county, city=city, error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="Search failed")

    search_stats.record("location", len(results), (time.time() - start_time) * 1000)
    return results
