"""Pytest configuration and shared fixtures."""

import math

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from geosearch.adapters.persistence.database import Base
from geosearch.adapters.persistence.models import GeoDocumentModel  # noqa: F401  registers the table on Base.metadata
from geosearch.domain.policies.distance import EARTH_RADIUS_KM
from geosearch.domain.value_objects.geo_point import GeoPoint

# Degrees of latitude per km along a meridian
DEG_PER_KM = 180.0 / (math.pi * EARTH_RADIUS_KM)


@pytest.fixture
def north_of():
    """Factory: the point exactly ``km`` kilometers due north of ``origin``."""
    def _north_of(origin: GeoPoint, km: float) -> GeoPoint:
        return GeoPoint(latitude=origin.latitude + km * DEG_PER_KM, longitude=origin.longitude)
    return _north_of


@pytest.fixture
def berlin():
    return GeoPoint(latitude=52.5200, longitude=13.4050)


@pytest.fixture
def london():
    return GeoPoint(latitude=51.5074, longitude=-0.1278)


@pytest.fixture
def paris():
    return GeoPoint(latitude=48.8566, longitude=2.3522)


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path):
    """File-backed SQLite engine with the geo_documents table created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'geo.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def sqlite_sessions(sqlite_engine):
    return async_sessionmaker(sqlite_engine, expire_on_commit=False)
