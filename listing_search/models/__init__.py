"""Data models for the listing search service."""

from .listing import ListingRecord
from .request import BrowseOptions, BrowseSort, PageParams, SearchFilters, SortMode
from .response import (
    SearchPage,
    SuggestionResponse,
    LoadResponse,
    ErrorResponse,
    HealthResponse,
    MetricsResponse,
)

__all__ = [
    "ListingRecord",
    "BrowseOptions",
    "BrowseSort",
    "PageParams",
    "SearchFilters",
    "SortMode",
    "SearchPage",
    "SuggestionResponse",
    "LoadResponse",
    "ErrorResponse",
    "HealthResponse",
    "MetricsResponse",
]
