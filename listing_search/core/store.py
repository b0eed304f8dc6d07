"""Listing store collaborator and its in-memory implementation."""

import json
import time
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Union

from pydantic import ValidationError

from ..models.listing import ListingRecord


class ListingStoreError(Exception):
    """Raised when a listing snapshot cannot be loaded."""


class ListingStore(Protocol):
    """Read side of the listing store that the search engine depends on."""

    def all_listings(self) -> List[ListingRecord]:
        """Every listing, available or not."""
        ...

    def all_available(self) -> List[ListingRecord]:
        """Listings whose available flag is on."""
        ...


class InMemoryListingStore:
    """Listing store held in process memory, keyed by listing id."""

    def __init__(self, listings: Optional[Iterable[Union[ListingRecord, Mapping[str, Any]]]] = None) -> None:
        """Initialize the store, optionally with an initial snapshot."""
        self._listings: Dict[int, ListingRecord] = {}
        self._stats = {
            "total_listings": 0,
            "available_listings": 0,
            "last_updated": None
        }
        if listings is not None:
            self.load(listings)

    @classmethod
    def from_file(cls, path: str) -> "InMemoryListingStore":
        """Create a store from a JSON file holding a list of listings."""
        store = cls()
        store.load_file(path)
        return store

    def load_file(self, path: str) -> int:
        """
        Load listings from a JSON file holding a list of listings.

        Returns:
            Number of records loaded

        Raises:
            FileNotFoundError: If the file does not exist
            ListingStoreError: If the file is not a valid listing snapshot
        """
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ListingStoreError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(data, list):
            raise ListingStoreError(f"Expected a list of listings in {path}")

        return self.load(data)

    def load(self, records: Iterable[Union[ListingRecord, Mapping[str, Any]]]) -> int:
        """
        Insert or replace listings by id.

        The whole batch is validated before any record is stored.

        Args:
            records: Listing models or raw camelCase dictionaries

        Returns:
            Number of records loaded

        Raises:
            ListingStoreError: If any record fails validation
        """
        validated = []
        for record in records:
            if isinstance(record, ListingRecord):
                validated.append(record)
                continue
            try:
                validated.append(ListingRecord.model_validate(record))
            except ValidationError as e:
                raise ListingStoreError(f"Invalid listing record: {e}") from e

        for listing in validated:
            self._listings[listing.id] = listing

        self._update_stats()
        return len(validated)

    def get(self, listing_id: int) -> Optional[ListingRecord]:
        """Listing by id, or None."""
        return self._listings.get(listing_id)

    def all_listings(self) -> List[ListingRecord]:
        """Snapshot of every listing."""
        return list(self._listings.values())

    def all_available(self) -> List[ListingRecord]:
        """Snapshot of available listings."""
        return [listing for listing in self._listings.values() if listing.available]

    def count(self) -> int:
        """Number of listings held."""
        return len(self._listings)

    def clear(self) -> None:
        """Remove all listings."""
        self._listings.clear()
        self._update_stats()

    def get_stats(self) -> Dict[str, Any]:
        """Get store statistics."""
        return self._stats.copy()

    def _update_stats(self) -> None:
        self._stats["total_listings"] = len(self._listings)
        self._stats["available_listings"] = sum(
            1 for listing in self._listings.values() if listing.available
        )
        self._stats["last_updated"] = time.time()
