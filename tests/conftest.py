"""Shared listing fixtures for the test suites."""

import pytest

from listing_search.core.engine import SearchEngine
from listing_search.core.store import InMemoryListingStore

SCENARIO_LISTINGS = [
    {"id": 1, "serviceType": "Room", "name": "Sinkor Room", "county": "Montserrado",
     "city": "Monrovia", "community": "Sinkor", "description": "Clean room near the beach",
     "available": True},
    {"id": 2, "serviceType": "Restaurant", "name": "Bomi Grill", "county": "Bomi",
     "city": "Tubmanburg", "community": "Market Street", "description": "Palm butter and rice",
     "available": True},
    {"id": 3, "serviceType": "Room", "name": "Kakata Lodge", "county": "Margibi",
     "city": "Kakata", "community": "Main Street", "description": "Quiet room",
     "available": False},
]

DIRECTORY_LISTINGS = [
    {"id": 1, "serviceType": "Room", "name": "Bright Room in Sinkor", "county": "Montserrado",
     "city": "Monrovia", "community": "24th Street, Sinkor", "viewCount": 42,
     "lastUpdated": "2024-03-02T10:15:00Z", "available": 1},
    {"id": 2, "serviceType": "Restaurant", "name": "Family Restaurant", "county": "Montserrado",
     "city": "Paynesville", "community": "ELWA Junction", "viewCount": 87,
     "lastUpdated": "2024-03-05T18:40:00Z", "available": 1},
    {"id": 3, "serviceType": "Barbershop", "name": "Stylish Cuts", "county": "Montserrado",
     "city": "Monrovia", "community": "Broad Street", "viewCount": 15,
     "lastUpdated": "2024-02-20T09:00:00Z", "available": 1},
    {"id": 4, "serviceType": "Room", "name": "Furnished Room with AC", "county": "Montserrado",
     "city": "Monrovia", "community": "12th Street, Sinkor", "viewCount": 63,
     "lastUpdated": "2024-03-08T12:00:00Z", "available": 1},
    {"id": 5, "serviceType": "Room", "name": "Student Room", "county": "Montserrado",
     "city": "Monrovia", "community": "Sinkor", "viewCount": 12,
     "lastUpdated": "2024-01-11T08:30:00Z", "available": 0},
    {"id": 6, "serviceType": "Salon", "name": "Glamour Salon", "county": "Montserrado",
     "city": "Monrovia", "community": "Red Light Market", "viewCount": 30,
     "lastUpdated": "2024-02-28T15:20:00Z", "available": 1},
    {"id": 7, "serviceType": "Room", "name": "Congo Town Apartment", "county": "Montserrado",
     "city": "Monrovia", "community": "Congo Town", "viewCount": 120, "available": 1},
    {"id": 8, "serviceType": "Salon", "name": "Kakata Hair Studio", "county": "Margibi",
     "city": "Kakata", "community": "Main Street", "viewCount": 21,
     "lastUpdated": "2024-02-14T13:10:00Z", "available": 1},
    {"id": 9, "serviceType": "Room", "name": "Guest Rooms", "county": "Bomi",
     "city": "Tubmanburg", "community": "Vai Town", "viewCount": 8,
     "lastUpdated": "2024-03-03T16:00:00Z", "available": 1},
    {"id": 10, "serviceType": "Restaurant", "name": "Chop Shop", "county": "Bomi",
     "city": "Tubmanburg", "community": "Market Street", "viewCount": 17,
     "lastUpdated": "2024-03-05T18:40:00Z", "available": 1},
]


@pytest.fixture
def directory_listings():
    """Raw camelCase records of the ten-listing directory."""
    return [dict(record) for record in DIRECTORY_LISTINGS]


@pytest.fixture
def scenario_engine():
    """Engine over the three-listing scenario (one unavailable)."""
    return SearchEngine(InMemoryListingStore(SCENARIO_LISTINGS))


@pytest.fixture
def directory_engine():
    """Engine over a ten-listing directory (id 5 unavailable)."""
    return SearchEngine(InMemoryListingStore(DIRECTORY_LISTINGS))
