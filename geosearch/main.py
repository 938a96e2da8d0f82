"""GeoSearch — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geosearch.adapters.persistence.database import Base, engine
from geosearch.adapters.persistence.models import GeoDocumentModel  # noqa: F401  registers the table on Base.metadata
from geosearch.config import settings
from geosearch.infrastructure.api.routes_health import router as health_router
from geosearch.infrastructure.api.routes_search import router as search_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    if settings.store_backend == "sql":
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database connection established")
        except Exception as e:
            logger.warning("Database not available on startup: %s", e)
    else:
        logger.info("Using in-memory geo store")
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="GeoSearch",
        description="Geohash-backed proximity search over geotagged documents",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(search_router, prefix="/api")

    return app


app = create_app()
