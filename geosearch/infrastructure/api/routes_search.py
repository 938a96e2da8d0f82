"""Search endpoints — radius search, GeoData builder, document upload."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from geosearch.application.ports.geo_store_port import GeoDocumentRepository
from geosearch.application.use_cases.geo_search import GeoSearchUseCase
from geosearch.config import settings
from geosearch.domain.entities.geo_record import SearchCandidate
from geosearch.domain.errors import CollaboratorFailureError, InvalidInputError
from geosearch.domain.value_objects.geo_data import GeoData
from geosearch.domain.value_objects.geo_point import GeoPoint
from geosearch.infrastructure.api.dependencies import get_geo_search_uc, get_geo_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])


class GeoDataRequest(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class DocumentRequest(GeoDataRequest):
    id: str = Field(min_length=1, max_length=100)
    geo_field: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)


@router.get("/search")
async def search(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    radius_km: float = Query(..., ge=0),
    field: str | None = None,
    search_uc: GeoSearchUseCase = Depends(get_geo_search_uc),
):
    """Records within ``radius_km`` of (lat, lon), nearest first."""
    field = field or settings.default_geo_field
    try:
        candidates = await search_uc.execute(GeoPoint(latitude=lat, longitude=lon), radius_km, field)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except CollaboratorFailureError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return {
        "center": {"latitude": lat, "longitude": lon},
        "radius_km": radius_km,
        "field": field,
        "total": len(candidates),
        "results": [_serialize_candidate(c) for c in candidates],
    }


@router.post("/geodata")
async def create_geo_data(
    body: GeoDataRequest,
    search_uc: GeoSearchUseCase = Depends(get_geo_search_uc),
):
    """Build the GeoData a client should store with its document."""
    return search_uc.create_geo_data(body.latitude, body.longitude).to_dict()


@router.post("/documents", status_code=201)
async def save_document(
    body: DocumentRequest,
    store: GeoDocumentRepository = Depends(get_geo_store),
):
    """Store a document with GeoData derived from its coordinates."""
    field = body.geo_field or settings.default_geo_field
    geo_data = GeoData.from_coordinates(body.latitude, body.longitude)
    record = await store.save(body.id, body.properties, field, geo_data)
    logger.info("Stored document %s at %s (%s)", record.id, geo_data.geohash, field)
    return {"id": record.id, "fields": _serialize_value(record.fields)}


def _serialize_candidate(c: SearchCandidate) -> dict:
    """Record fields plus ``id`` and ``distance_km``, with geo values as plain dicts."""
    return _serialize_value(c.to_dict())


def _serialize_value(value: Any) -> Any:
    if isinstance(value, GeoData):
        return value.to_dict()
    if isinstance(value, GeoPoint):
        return {"latitude": value.latitude, "longitude": value.longitude}
    if isinstance(value, dict):
        return {k: _serialize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize_value(v) for v in value]
    return value
