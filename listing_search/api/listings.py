"""Listing snapshot loading endpoint."""

from typing import Any, Dict, List

import structlog
from fastapi import APIRouter, HTTPException

from ..core.store import ListingStoreError
from ..models.response import LoadResponse

router = APIRouter(prefix="/api", tags=["listings"])
logger = structlog.get_logger(__name__)

# Import the global listing store instance
from ..engine_instance import listing_store


@router.post(
    "/listings",
    response_model=LoadResponse,
    summary="Load listings",
    description="Insert or replace listings in the in-memory store, keyed by id"
)
async def load_listings(listings: List[Dict[str, Any]]) -> LoadResponse:
    """
    Bulk load a listing snapshot.

    The batch is validated as a whole; nothing is stored if any record
    is invalid.
    """
    try:
        loaded = listing_store.load(listings)
    except ListingStoreError as e:
        logger.warning("Rejected listing snapshot", error=str(e))
        raise HTTPException(status_code=422, detail=str(e))

    logger.info("Listings loaded", loaded=loaded, total_listings=listing_store.count())
    return LoadResponse(
        message="Listings loaded successfully",
        loaded=loaded,
        total_listings=listing_store.count()
    )
