"""Tests for the seed tool, on SQLite."""

import csv
from pathlib import Path

import pytest

from geosearch.adapters.persistence.repositories import SqlGeoDocumentRepository
from geosearch.tools.seed_db import seed


def _write_places(path: Path, rows: list[dict]) -> Path:
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=rows[0].keys())
        writer.writeheader()
        writer.writerows(rows)
    return path


PLACES = [
    {"id": "cafe", "name": "Cafe", "latitude": "52.5200", "longitude": "13.4050"},
    {"id": "bar", "name": "Bar", "latitude": "48.8566", "longitude": "2.3522"},
    {"id": "broken", "name": "Nowhere", "latitude": "123.0", "longitude": "13.4"},
]


@pytest.mark.asyncio
async def test_seed_saves_places_under_field_path(tmp_path, sqlite_engine, sqlite_sessions):
    csv_path = _write_places(tmp_path / "places.csv", PLACES)

    counts = await seed(csv_path, field_path="venue.location", db_engine=sqlite_engine)

    assert counts == {"documents": 2, "skipped": 1}
    repo = SqlGeoDocumentRepository(sqlite_sessions)
    assert await repo.count() == 2
    records = await repo.fetch_range("venue.location.geohash", "", "~")
    cafe = next(r for r in records if r.id == "cafe")
    assert cafe.fields["name"] == "Cafe"
    assert cafe.fields["venue"]["location"].geopoint.latitude == 52.52


@pytest.mark.asyncio
async def test_seed_drop_replaces_existing_documents(tmp_path, sqlite_engine, sqlite_sessions):
    await seed(_write_places(tmp_path / "first.csv", PLACES), db_engine=sqlite_engine)
    second = _write_places(tmp_path / "second.csv", [
        {"id": "museum", "name": "Museum", "latitude": "51.5074", "longitude": "-0.1278"},
    ])

    await seed(second, drop=True, db_engine=sqlite_engine)

    records = await SqlGeoDocumentRepository(sqlite_sessions).fetch_range("location.geohash", "", "~")
    assert [r.id for r in records] == ["museum"]
