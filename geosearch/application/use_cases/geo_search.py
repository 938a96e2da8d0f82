"""GeoSearchUseCase — radius search: precision → 9 cells → fan-out → filter → sort."""

from __future__ import annotations

import asyncio
import logging

from geosearch.application.ports.geo_store_port import GeoStorePort
from geosearch.config import settings
from geosearch.domain.entities.geo_record import GeoRecord, SearchCandidate
from geosearch.domain.errors import CollaboratorFailureError, GeoSearchError
from geosearch.domain.geohash.codec import DEFAULT_HASH_LENGTH, RANGE_END_SENTINEL, encode
from geosearch.domain.geohash.neighbors import neighbors
from geosearch.domain.policies.field_path import resolve_geo_point
from geosearch.domain.policies.precision_selection import select_precision
from geosearch.domain.value_objects.geo_data import GeoData
from geosearch.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)


class GeoSearchUseCase:
    """Finds the records within a radius of a point, nearest first."""

    def __init__(
        self,
        store: GeoStorePort,
        radius_buffer: float | None = None,
    ):
        self._store = store
        if radius_buffer is None:
            radius_buffer = settings.radius_buffer
        self._radius_buffer = radius_buffer

    def create_geo_data(self, latitude: float, longitude: float) -> GeoData:
        """Build the (GeoPoint, geohash) pair a caller stores on write."""
        return GeoData.from_coordinates(latitude, longitude)

    async def execute(
        self,
        center: GeoPoint | tuple[float, float],
        radius_km: float,
        field_path: str | None = None,
    ) -> list[SearchCandidate]:
        """Search the store for records within ``radius_km`` of ``center``.

        Pipeline:
        1. Pick the geohash precision for the radius
        2. Hash the center and truncate it to that precision
        3. Expand to the center cell plus its 8 neighbors
        4. Query every cell concurrently (all-or-nothing)
        5. Flatten the results in cell order
        6. Keep the first occurrence of each id within radius × buffer
        7. Sort by distance (stable)
        """
        if not isinstance(center, GeoPoint):
            center = GeoPoint(latitude=float(center[0]), longitude=float(center[1]))
        field_path = field_path or settings.default_geo_field

        # Steps 1-3: cells to query
        precision = select_precision(radius_km)
        max_distance_km = radius_km * self._radius_buffer
        center_hash = encode(center.latitude, center.longitude, DEFAULT_HASH_LENGTH)[:precision]
        cells = neighbors(center_hash) + [center_hash]
        logger.info(
            "Geo search around (%f, %f), radius=%.3f km: precision=%d, cell=%s",
            center.latitude, center.longitude, radius_km, precision, center_hash,
        )

        # Steps 4-5: fan out and merge
        batches = await self._query_cells(cells, f"{field_path}.geohash")
        merged = [record for batch in batches for record in batch]

        # Step 6: dedupe + distance filter
        seen: set[str] = set()
        candidates: list[SearchCandidate] = []
        for record in merged:
            if record.id in seen:
                continue
            seen.add(record.id)

            point = resolve_geo_point(record.fields, field_path)
            if point is None:
                logger.debug("Record %s has no geo data at '%s', skipping", record.id, field_path)
                continue

            distance_km = center.haversine_km(point)
            if distance_km <= max_distance_km:
                candidates.append(SearchCandidate(record=record, distance_km=distance_km))

        # Step 7: nearest first
        candidates.sort(key=lambda c: c.distance_km)

        logger.info(
            "Geo search merged %d records (%d unique), %d within %.3f km",
            len(merged), len(seen), len(candidates), max_distance_km,
        )
        return candidates

    async def _query_cells(self, cells: list[str], field: str) -> list[list[GeoRecord]]:
        try:
            return await asyncio.gather(
                *(self._store.fetch_range(field, cell, cell + RANGE_END_SENTINEL) for cell in cells)
            )
        except GeoSearchError:
            raise
        except Exception as e:
            logger.exception("Geo store query failed for cells %s", cells)
            raise CollaboratorFailureError(f"Range query on '{field}' failed: {e}") from e
