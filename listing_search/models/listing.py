"""Listing record model shared by the store, the engine and the API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ListingRecord(BaseModel):
    """A service listing as handed over by the listing store.

    Field names follow Python conventions; the JSON form uses the camelCase
    names of the listing schema (``serviceType``, ``viewCount`` ...). Extra
    columns such as ``phone`` or ``pricing`` are carried through untouched.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    id: int = Field(..., description="Listing identifier")
    service_type: str = Field(..., alias="serviceType", description="Service category")
    county: str = Field(..., description="County")
    city: str = Field(..., description="City or town")
    community: str = Field(..., description="Community or neighbourhood")
    name: str = Field(..., description="Listing name")
    description: Optional[str] = Field(None, description="Short description")
    detailed_description: Optional[str] = Field(
        None, alias="detailedDescription", description="Long-form description"
    )
    tags: Optional[str] = Field(None, description="Delimited search tags")
    features: Optional[str] = Field(None, description="Delimited feature list")
    available: bool = Field(default=True, description="Whether the listing is switched on")
    view_count: int = Field(default=0, ge=0, alias="viewCount", description="Total views")
    last_updated: Optional[str] = Field(
        None, alias="lastUpdated", description="Last update timestamp (ISO 8601)"
    )

    @field_validator("view_count", mode="before")
    @classmethod
    def default_view_count(cls, v):
        """Treat a missing view count as zero."""
        return 0 if v is None else v

    @field_validator("available", mode="before")
    @classmethod
    def coerce_available(cls, v):
        """Accept the integer on/off flag used by the listing table."""
        if v is None:
            return True
        if isinstance(v, int) and not isinstance(v, bool):
            return v != 0
        return v
