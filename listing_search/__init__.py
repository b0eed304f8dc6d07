"""
Listing Search - keyword search and ranking for a service listings directory.

This package expands free-text queries through location alias and service
category synonym tables, fuzzy-matches them against listing records and
returns scored, paginated rankings over an in-memory snapshot.
"""

__version__ = "1.0.0"

from .core.engine import SearchEngine
from .core.store import InMemoryListingStore
from .models.listing import ListingRecord
from .models.response import SearchPage

__all__ = [
    "SearchEngine",
    "InMemoryListingStore",
    "ListingRecord",
    "SearchPage",
]
