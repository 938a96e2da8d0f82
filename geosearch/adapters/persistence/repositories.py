"""SQLAlchemy repository implementations."""

from __future__ import annotations

import copy
import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from geosearch.adapters.persistence.models import GeoDocumentModel
from geosearch.application.ports.geo_store_port import GeoDocumentRepository
from geosearch.domain.entities.geo_record import GeoRecord
from geosearch.domain.errors import InvalidInputError
from geosearch.domain.policies.field_path import set_nested_value
from geosearch.domain.value_objects.geo_data import GeoData
from geosearch.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

GEOHASH_SUFFIX = ".geohash"

# ─── Mappers ─────────────────────────────────────────────────────────


def _document_to_domain(m: GeoDocumentModel) -> GeoRecord:
    fields = copy.deepcopy(m.data) if m.data else {}
    geo_data = GeoData(
        geopoint=GeoPoint(latitude=m.latitude, longitude=m.longitude),
        geohash=m.geohash,
    )
    set_nested_value(fields, m.geo_field, geo_data)
    return GeoRecord(id=m.id, fields=fields)


def _split_geohash_field(field: str) -> str:
    if not field.endswith(GEOHASH_SUFFIX) or len(field) == len(GEOHASH_SUFFIX):
        raise InvalidInputError(f"Expected a '<path>{GEOHASH_SUFFIX}' field, got '{field}'")
    return field[: -len(GEOHASH_SUFFIX)]


# ─── Repositories ────────────────────────────────────────────────────


class SqlGeoDocumentRepository(GeoDocumentRepository):
    """Geo documents in a SQL table.

    Every call opens its own session from ``session_factory``, so the
    concurrent range queries of one search each run on their own connection.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def fetch_range(self, field: str, start: str, end: str) -> list[GeoRecord]:
        geo_field = _split_geohash_field(field)
        async with self._session_factory() as s:
            result = await s.execute(
                select(GeoDocumentModel)
                .where(
                    GeoDocumentModel.geo_field == geo_field,
                    GeoDocumentModel.geohash >= start,
                    GeoDocumentModel.geohash <= end,
                )
                .order_by(GeoDocumentModel.geohash)
            )
            return [_document_to_domain(m) for m in result.scalars().all()]

    async def save(
        self,
        record_id: str,
        fields: dict[str, Any],
        field_path: str,
        geo_data: GeoData,
    ) -> GeoRecord:
        """Insert or update a document; ``geo_data`` is stored under ``field_path``.

        ``fields`` must be JSON-serializable and must not contain the geo data itself.
        The write is committed before this returns.
        """
        async with self._session_factory.begin() as s:
            m = await s.get(GeoDocumentModel, record_id)
            if m is None:
                m = GeoDocumentModel(id=record_id)
                s.add(m)
            m.geo_field = field_path
            m.data = dict(fields)
            m.latitude = geo_data.geopoint.latitude
            m.longitude = geo_data.geopoint.longitude
            m.geohash = geo_data.geohash
            await s.flush()
            return _document_to_domain(m)

    async def count(self) -> int:
        async with self._session_factory() as s:
            result = await s.execute(select(func.count()).select_from(GeoDocumentModel))
            return result.scalar_one()
