"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

import logging

from fastapi import Depends

from geosearch.adapters.memory.in_memory_store import InMemoryGeoStore
from geosearch.adapters.persistence.database import async_session_factory
from geosearch.adapters.persistence.repositories import SqlGeoDocumentRepository
from geosearch.application.ports.geo_store_port import GeoDocumentRepository
from geosearch.application.use_cases.geo_search import GeoSearchUseCase
from geosearch.config import settings

logger = logging.getLogger(__name__)

# Process-wide stores, one per backend
_memory_store = InMemoryGeoStore()
_sql_store = SqlGeoDocumentRepository(async_session_factory)


def get_geo_store() -> GeoDocumentRepository:
    if settings.store_backend == "sql":
        return _sql_store
    return _memory_store


def get_geo_search_uc(
    store: GeoDocumentRepository = Depends(get_geo_store),
) -> GeoSearchUseCase:
    return GeoSearchUseCase(store=store, radius_buffer=settings.radius_buffer)
