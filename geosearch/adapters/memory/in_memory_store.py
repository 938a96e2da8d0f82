"""In-memory geo store — implements GeoDocumentRepository over a dict of records."""

from __future__ import annotations

import copy
import logging
from typing import Any

from geosearch.application.ports.geo_store_port import GeoDocumentRepository
from geosearch.domain.entities.geo_record import GeoRecord
from geosearch.domain.policies.field_path import get_nested_value, set_nested_value
from geosearch.domain.value_objects.geo_data import GeoData

logger = logging.getLogger(__name__)


class InMemoryGeoStore(GeoDocumentRepository):
    """Ordered range queries over records held in process memory.

    Results are deep copies, so callers cannot mutate the stored documents
    through a search result.
    """

    def __init__(self):
        self._records: dict[str, GeoRecord] = {}

    def add(self, record_id: str, fields: dict[str, Any]) -> GeoRecord:
        """Insert or replace a record with a ready-made field map."""
        record = GeoRecord(id=record_id, fields=copy.deepcopy(fields))
        self._records[record_id] = record
        return record

    async def save(
        self,
        record_id: str,
        fields: dict[str, Any],
        field_path: str,
        geo_data: GeoData,
    ) -> GeoRecord:
        return self.add(record_id, set_nested_value(copy.deepcopy(fields), field_path, geo_data))

    async def count(self) -> int:
        return len(self._records)

    async def fetch_range(self, field: str, start: str, end: str) -> list[GeoRecord]:
        matches: list[tuple[str, GeoRecord]] = []
        for record in self._records.values():
            value = get_nested_value(record.fields, field)
            if isinstance(value, str) and start <= value <= end:
                matches.append((value, record))

        matches.sort(key=lambda m: m[0])
        logger.debug("Range [%s, %s] on '%s' → %d records", start, end, field, len(matches))
        return [GeoRecord(id=r.id, fields=copy.deepcopy(r.fields)) for _, r in matches]
