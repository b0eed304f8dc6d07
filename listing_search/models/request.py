"""Request models for search and browse operations."""

import re
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 12

_FALSE_VALUES = {"false", "0", "no", "off"}
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class SortMode(str, Enum):
    """Orderings available to advanced search."""

    RELEVANCE = "relevance"
    NEWEST = "newest"
    POPULAR = "popular"


class BrowseSort(str, Enum):
    """Orderings available to the listing feed."""

    NEWEST = "newest"
    CLOSEST = "closest"
    POPULAR = "popular"


def _coerce_positive_int(value: Any, default: int) -> int:
    """Parse the leading integer of a page/limit value, falling back to the default."""
    if value is None or isinstance(value, bool):
        return default
    match = _LEADING_INT.match(str(value))
    if not match:
        return default
    number = int(match.group(1))
    return number if number >= 1 else default


def _blank_to_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class PageParams(BaseModel):
    """Pagination parameters shared by paged operations.

    Malformed values never fail validation: they are replaced by the defaults
    so a bad query string degrades to the first page of twelve.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    page: int = Field(default=DEFAULT_PAGE, ge=1, description="1-based page number")
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, description="Page size")

    @field_validator("page", mode="before")
    @classmethod
    def coerce_page(cls, v: Any) -> int:
        return _coerce_positive_int(v, DEFAULT_PAGE)

    @field_validator("limit", mode="before")
    @classmethod
    def coerce_limit(cls, v: Any) -> int:
        return _coerce_positive_int(v, DEFAULT_LIMIT)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class SearchFilters(PageParams):
    """Structured filters for advanced search."""

    county: Optional[str] = Field(None, description="Case-insensitive county substring")
    city: Optional[str] = Field(None, description="Case-insensitive city substring")
    service_type: Optional[str] = Field(
        None, alias="serviceType", description="Exact service type"
    )
    available: bool = Field(
        default=True,
        description="Only available listings when true; no availability filter when false",
    )
    sort: SortMode = Field(default=SortMode.RELEVANCE, description="Result ordering")

    @field_validator("county", "city", "service_type", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Optional[str]:
        return _blank_to_none(v)

    @field_validator("available", mode="before")
    @classmethod
    def coerce_available(cls, v: Any) -> bool:
        if isinstance(v, bool):
            return v
        if v is None:
            return True
        # Anything unrecognised keeps the safe default.
        return str(v).strip().lower() not in _FALSE_VALUES

    @field_validator("sort", mode="before")
    @classmethod
    def coerce_sort(cls, v: Any) -> SortMode:
        if isinstance(v, SortMode):
            return v
        try:
            return SortMode(str(v).strip().lower())
        except ValueError:
            return SortMode.RELEVANCE


class BrowseOptions(PageParams):
    """Options for the paginated listing feed."""

    category: Optional[str] = Field(None, description="Service type to restrict to")
    sort: BrowseSort = Field(default=BrowseSort.NEWEST, description="Feed ordering")

    @field_validator("category", mode="before")
    @classmethod
    def strip_category(cls, v: Any) -> Optional[str]:
        return _blank_to_none(v)

    @field_validator("sort", mode="before")
    @classmethod
    def coerce_sort(cls, v: Any) -> BrowseSort:
        if isinstance(v, BrowseSort):
            return v
        try:
            return BrowseSort(str(v).strip().lower())
        except ValueError:
            return BrowseSort.NEWEST
