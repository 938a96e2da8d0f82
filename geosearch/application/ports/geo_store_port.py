"""Port interface for the document store that serves geohash range queries."""

from abc import ABC, abstractmethod
from typing import Any

from geosearch.domain.entities.geo_record import GeoRecord
from geosearch.domain.value_objects.geo_data import GeoData


class GeoStorePort(ABC):
    @abstractmethod
    async def fetch_range(self, field: str, start: str, end: str) -> list[GeoRecord]:
        """Return all records whose ``field`` value lies in [start, end].

        ``field`` is a dotted path such as ``"location.geohash"``. Records are
        ordered ascending by that value; the bounds are inclusive.
        """
        ...


class GeoDocumentRepository(GeoStorePort):
    """A store that can also be written to (used for seeding and the write API)."""

    @abstractmethod
    async def save(
        self,
        record_id: str,
        fields: dict[str, Any],
        field_path: str,
        geo_data: GeoData,
    ) -> GeoRecord:
        """Insert or replace a record, keeping ``geo_data`` under ``field_path``."""
        ...

    @abstractmethod
    async def count(self) -> int:
        ...
