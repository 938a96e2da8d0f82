"""Health check endpoint."""

from fastapi import APIRouter, Depends

from geosearch.application.ports.geo_store_port import GeoDocumentRepository
from geosearch.config import settings
from geosearch.infrastructure.api.dependencies import get_geo_store

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(store: GeoDocumentRepository = Depends(get_geo_store)):
    """Check API and store connectivity."""
    try:
        documents = await store.count()
        store_status = "connected"
    except Exception as e:
        documents = None
        store_status = f"error: {e}"

    return {
        "status": "ok" if store_status == "connected" else "degraded",
        "store": settings.store_backend,
        "store_status": store_status,
        "documents": documents,
        "service": "GeoSearch - geohash proximity search",
    }
