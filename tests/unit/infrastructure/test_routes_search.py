"""Tests for the HTTP API with the in-memory store."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from geosearch.adapters.memory.in_memory_store import InMemoryGeoStore
from geosearch.domain.geohash.codec import encode
from geosearch.infrastructure.api.dependencies import get_geo_store
from geosearch.main import create_app


class BrokenStore(InMemoryGeoStore):
    async def fetch_range(self, field, start, end):
        raise TimeoutError("store timed out")

    async def count(self):
        raise TimeoutError("store timed out")


@pytest.fixture
def store():
    return InMemoryGeoStore()


@pytest.fixture
def client(store):
    app = create_app()
    app.dependency_overrides[get_geo_store] = lambda: store
    return TestClient(app)


def _post_document(client, doc_id, lat, lon, **extra):
    response = client.post(
        "/api/documents",
        json={"id": doc_id, "latitude": lat, "longitude": lon, **extra},
    )
    assert response.status_code == 201
    return response.json()


def test_create_geo_data(client):
    response = client.post("/api/geodata", json={"latitude": 57.64911, "longitude": 10.40744})
    assert response.status_code == 200
    assert response.json() == {
        "geopoint": {"latitude": 57.64911, "longitude": 10.40744},
        "geohash": "u4pruydqq",
    }


def test_create_geo_data_rejects_out_of_range(client):
    response = client.post("/api/geodata", json={"latitude": 91, "longitude": 0})
    assert response.status_code == 422


def test_search_returns_nearest_first(client):
    _post_document(client, "far", 52.5650, 13.4050, properties={"name": "Far"})
    _post_document(client, "near", 52.5210, 13.4050, properties={"name": "Near"})
    _post_document(client, "mid", 52.5300, 13.4050, properties={"name": "Mid"})

    response = client.get("/api/search", params={"lat": 52.52, "lon": 13.405, "radius_km": 3})
    assert response.status_code == 200
    body = response.json()

    assert body["total"] == 2
    assert body["field"] == "location"
    assert [r["id"] for r in body["results"]] == ["near", "mid"]
    first = body["results"][0]
    assert first["name"] == "Near"
    assert first["location"]["geohash"] == encode(52.5210, 13.4050, 9)
    assert first["distance_km"] == pytest.approx(0.111, abs=0.001)


def test_search_nested_field(client):
    _post_document(client, "shop", 52.5210, 13.4050, geo_field="venue.location")

    response = client.get(
        "/api/search",
        params={"lat": 52.52, "lon": 13.405, "radius_km": 1, "field": "venue.location"},
    )
    assert response.status_code == 200
    results = response.json()["results"]
    assert [r["id"] for r in results] == ["shop"]
    assert "geopoint" in results[0]["venue"]["location"]


def test_search_empty_store(client):
    response = client.get("/api/search", params={"lat": 0, "lon": 0, "radius_km": 10})
    assert response.status_code == 200
    assert response.json()["results"] == []


def test_search_validates_query(client):
    assert client.get("/api/search", params={"lat": 100, "lon": 0, "radius_km": 1}).status_code == 422
    assert client.get("/api/search", params={"lat": 0, "lon": 0, "radius_km": -1}).status_code == 422
    assert client.get("/api/search", params={"lat": 0, "lon": 0}).status_code == 422


def test_search_store_failure_is_bad_gateway():
    app = create_app()
    app.dependency_overrides[get_geo_store] = lambda: BrokenStore()
    client = TestClient(app)

    response = client.get("/api/search", params={"lat": 0, "lon": 0, "radius_km": 1})
    assert response.status_code == 502
    assert "timed out" in response.json()["detail"]


def test_health(client):
    _post_document(client, "one", 1.0, 1.0)
    body = client.get("/api/health").json()
    assert body["status"] == "ok"
    assert body["documents"] == 1


def test_health_degraded():
    app = create_app()
    app.dependency_overrides[get_geo_store] = lambda: BrokenStore()
    body = TestClient(app).get("/api/health").json()
    assert body["status"] == "degraded"
