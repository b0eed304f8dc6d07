"""Response models for API endpoints."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .listing import ListingRecord


class SearchPage(BaseModel):
    """One page of an ordered listing result set."""

    model_config = ConfigDict(populate_by_name=True)

    results: List[ListingRecord] = Field(..., description="Listings on this page")
    total: int = Field(..., ge=0, description="Matches before pagination")
    page: int = Field(..., ge=1, description="1-based page number")
    total_pages: int = Field(..., ge=0, alias="totalPages", description="Number of pages")


class SuggestionResponse(BaseModel):
    """Spelling suggestions for a query."""

    query: str = Field(..., description="Original query")
    suggestions: List[str] = Field(..., description="Suggested terms, best first")


class LoadResponse(BaseModel):
    """Result of loading a listing snapshot."""

    message: str = Field(..., description="Outcome")
    loaded: int = Field(..., description="Records loaded by this request")
    total_listings: int = Field(..., description="Records held by the store")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    uptime: float = Field(..., description="Service uptime in seconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    dependencies: Dict[str, str] = Field(..., description="Dependency status")


class MetricsResponse(BaseModel):
    """Search metrics response."""

    total_queries: int = Field(..., description="Total queries processed")
    queries_by_mode: Dict[str, int] = Field(..., description="Queries per search mode")
    empty_results: int = Field(..., description="Queries that matched nothing")
    failed_queries: int = Field(..., description="Queries that raised an error")
    average_response_time_ms: float = Field(..., description="Average engine time")
    error_rate: float = Field(..., description="Failed queries as a fraction of all queries")
    total_listings: int = Field(..., description="Listings held by the store")
    memory_usage_mb: float = Field(..., description="Process resident memory in MB")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Metrics timestamp")
