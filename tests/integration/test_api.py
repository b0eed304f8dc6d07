"""Integration tests for the API endpoints."""

import pytest
from fastapi.testclient import TestClient
from listing_search.engine_instance import listing_store, search_engine, search_stats
from listing_search.main import app


class FailingStore:
    """Store whose reads always fail."""

    def all_listings(self):
        raise RuntimeError("database unavailable")

    def all_available(self):
        raise RuntimeError("database unavailable")


def ids(listings):
    return [listing["id"] for listing in listings]


class TestAPI:
    """Integration tests for API endpoints."""

    @pytest.fixture
    def client(self, directory_listings):
        """Create a test client over the ten-listing directory."""
        with TestClient(app) as client:
            listing_store.clear()
            listing_store.load(directory_listings)
            search_stats.reset()
            yield client

    def test_root_endpoint(self, client):
        """Test the root endpoint."""
        response = client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["name"] == "Listing Search"
        assert data["version"] == "1.0.0"
        assert data["status"] == "running"
        assert "search" in data["endpoints"]

    def test_simple_search(self, client):
        """Test keyword search with category expansion."""
        response = client.get("/api/search", params={"q": "room"})
        assert response.status_code == 200

        assert sorted(ids(response.json())) == [1, 4, 7, 9]

    def test_search_uses_camel_case_fields(self, client):
        """Test that listings are returned with their stored field names."""
        response = client.get("/api/search", params={"q": "tubman burg"})

        data = response.json()
        assert ids(data) == [10, 9]
        assert data[0]["serviceType"] == "Restaurant"
        assert "viewCount" in data[0]
        assert "service_type" not in data[0]

    def test_search_without_query(self, client):
        """Test that a missing query returns every available listing."""
        response = client.get("/api/search")
        assert response.status_code == 200

        data = response.json()
        assert len(data) == 9
        assert 5 not in ids(data)

    def test_search_no_match(self, client):
        """Test search with no matches."""
        response = client.get("/api/search", params={"q": "xyzzy"})
        assert response.status_code == 200
        assert response.json() == []

    def test_long_query_is_truncated(self, client):
        """Test that an overlong query is clipped rather than rejected."""
        response = client.get("/api/search", params={"q": "x" * 500})
        assert response.status_code == 200
        assert response.json() == []

    def test_advanced_search_pagination(self, client):
        """Test county filter with paging."""
        response = client.get(
            "/api/search/advanced",
            params={"county": "Montserrado", "page": 1, "limit": 2}
        )
        assert response.status_code == 200

        data = response.json()
        assert data["total"] == 6
        assert data["totalPages"] == 3
        assert data["page"] == 1
        assert len(data["results"]) == 2

    def test_advanced_search_bad_pagination(self, client):
        """Test that malformed page and limit fall back to defaults."""
        response = client.get("/api/search/advanced", params={"page": "abc", "limit": "-5"})
        assert response.status_code == 200

        data = response.json()
        assert data["page"] == 1
        assert data["total"] == 9
        assert len(data["results"]) == 9

    def test_large_limit_is_honoured(self, client):
        """Test that page size is taken as requested on both paged endpoints."""
        advanced = client.get("/api/search/advanced", params={"limit": 150}).json()
        browse = client.get("/api/services", params={"limit": "150", "page": "1.0"}).json()

        for data in (advanced, browse):
            assert len(data["results"]) == 9
            assert data["totalPages"] == 1
            assert data["page"] == 1

    def test_advanced_search_service_type_and_sort(self, client):
        """Test service type filter with popularity ordering."""
        response = client.get(
            "/api/search/advanced",
            params={"serviceType": "Room", "sort": "popular"}
        )

        assert ids(response.json()["results"]) == [7, 4, 1, 9]

    def test_advanced_search_include_unavailable(self, client):
        """Test that available=false lifts the availability filter."""
        response = client.get(
            "/api/search/advanced",
            params={"serviceType": "Room", "available": "false"}
        )

        data = response.json()
        assert data["total"] == 5
        assert 5 in ids(data["results"])

    def test_advanced_search_unknown_sort(self, client):
        """Test that an unknown sort value is not an error."""
        response = client.get("/api/search/advanced", params={"q": "sinkor", "sort": "cheapest"})
        assert response.status_code == 200
        assert ids(response.json()["results"]) == [1, 4]

    def test_browse_category(self, client):
        """Test the listing feed for one category."""
        response = client.get("/api/services", params={"category": "Room"})
        assert response.status_code == 200

        data = response.json()
        assert data["total"] == 4
        assert ids(data["results"]) == [9, 7, 4, 1]

    def test_browse_closest(self, client):
        """Test the feed ordered by city and community."""
        response = client.get("/api/services", params={"sort": "closest", "limit": 3})

        data = response.json()
        assert ids(data["results"]) == [8, 4, 1]
        assert data["totalPages"] == 3

    def test_listings_by_location(self, client):
        """Test that city spelling variants resolve."""
        response = client.get("/api/services/location", params={"city": "Tubman Burg"})
        assert response.status_code == 200
        assert ids(response.json()) == [10, 9]

    def test_listings_by_county_and_city(self, client):
        """Test combined county and city."""
        response = client.get(
            "/api/services/location",
            params={"county": "montserrado", "city": "paynesville"}
        )
        assert ids(response.json()) == [2]

    def test_suggestions_endpoint(self, client):
        """Test suggestions for a misspelled place."""
        response = client.get("/api/search/suggestions", params={"q": "monrovai"})
        assert response.status_code == 200

        data = response.json()
        assert data["query"] == "monrovai"
        assert data["suggestions"][0] == "monrovia"

    def test_suggestions_limit(self, client):
        """Test the suggestion cap parameter."""
        response = client.get(
            "/api/search/suggestions",
            params={"q": "salon kakata market", "max_suggestions": 2}
        )
        assert len(response.json()["suggestions"]) <= 2

    def test_suggestions_invalid_limit(self, client):
        """Test parameter validation on the suggestion cap."""
        response = client.get("/api/search/suggestions", params={"q": "room", "max_suggestions": 0})
        assert response.status_code == 422

    def test_load_listings(self, client):
        """Test loading new listings."""
        listing = {
            "id": 11, "serviceType": "Barbershop", "name": "Gbarnga Fades",
            "county": "Bong", "city": "Gbarnga", "community": "Airfield",
            "available": 1, "viewCount": 3
        }

        response = client.post("/api/listings", json=[listing])
        assert response.status_code == 200

        data = response.json()
        assert data["message"] == "Listings loaded successfully"
        assert data["loaded"] == 1
        assert data["total_listings"] == 11

        search = client.get("/api/search", params={"q": "gbarnga"})
        assert ids(search.json()) == [11]

    def test_load_invalid_listings(self, client):
        """Test that an invalid batch is rejected as a whole."""
        response = client.post("/api/listings", json=[{"id": 12, "serviceType": "Room"}])
        assert response.status_code == 422
        assert listing_store.count() == 10

    def test_store_failure(self, client, monkeypatch):
        """Test that store errors become a generic 500."""
        monkeypatch.setattr(search_engine, "store", FailingStore())

        response = client.get("/api/search", params={"q": "room"})
        assert response.status_code == 500
        assert response.json()["detail"] == "Search failed"
        assert "database" not in response.text

        browse = client.get("/api/services")
        assert browse.status_code == 500
        assert browse.json()["detail"] == "Failed to get services"

    def test_health_check(self, client):
        """Test health check endpoint."""
        response = client.get("/api/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert "dependencies" in data

    def test_health_degraded_when_empty(self, client):
        """Test that an empty store reports degraded and not ready."""
        listing_store.clear()

        assert client.get("/api/health").json()["status"] == "degraded"
        assert client.get("/api/health/ready").status_code == 503

    def test_liveness_and_readiness(self, client):
        """Test the probe endpoints."""
        assert client.get("/api/health/live").json()["status"] == "alive"

        ready = client.get("/api/health/ready")
        assert ready.status_code == 200
        assert ready.json()["store_stats"]["total_listings"] == 10

    def test_status_endpoint(self, client):
        """Test the status endpoint."""
        response = client.get("/api/status")
        assert response.status_code == 200

        data = response.json()
        assert data["service"]["status"] == "running"
        assert data["store"]["available_listings"] == 9
        assert data["lexicon"]["locations"] > 0

    def test_metrics_endpoint(self, client, monkeypatch):
        """Test that query counters track each mode."""
        client.get("/api/search", params={"q": "room"})
        client.get("/api/search", params={"q": "xyzzy"})
        client.get("/api/services")
        monkeypatch.setattr(search_engine, "store", FailingStore())
        client.get("/api/search/advanced")

        response = client.get("/api/metrics")
        assert response.status_code == 200

        data = response.json()
        assert data["total_queries"] == 4
        assert data["queries_by_mode"] == {"simple": 2, "browse": 1, "advanced": 1}
        assert data["empty_results"] == 1
        assert data["failed_queries"] == 1
        assert data["error_rate"] == 0.25
        assert data["total_listings"] == 10
        assert data["memory_usage_mb"] > 0

    def test_cors_headers(self, client):
        """Test CORS headers are present."""
        response = client.get("/api/search", headers={"Origin": "http://localhost:3000"})
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_content_type_headers(self, client):
        """Test content type headers."""
        response = client.get("/api/search", params={"q": "room"})
        assert response.headers["content-type"] == "application/json"
