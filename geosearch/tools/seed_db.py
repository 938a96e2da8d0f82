"""Seed the geo_documents table from a places CSV file.

Usage:
    python -m geosearch.tools.seed_db --file data/places.csv
    python -m geosearch.tools.seed_db --file data/places.csv --field venue.location
    python -m geosearch.tools.seed_db --file data/places.csv --drop  # drop existing data first
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from geosearch.adapters.csv_loader.loader import load_places
from geosearch.adapters.persistence.database import Base, engine
from geosearch.adapters.persistence.models import GeoDocumentModel
from geosearch.adapters.persistence.repositories import SqlGeoDocumentRepository
from geosearch.config import settings
from geosearch.domain.errors import InvalidInputError
from geosearch.domain.value_objects.geo_data import GeoData

logger = logging.getLogger(__name__)


async def _drop_data(session_factory: async_sessionmaker[AsyncSession]) -> None:
    async with session_factory.begin() as session:
        await session.execute(delete(GeoDocumentModel))
    logger.info("Dropped all existing documents")


async def seed(
    csv_path: Path,
    field_path: str | None = None,
    drop: bool = False,
    db_engine: AsyncEngine | None = None,
) -> dict[str, int]:
    """Main seed function. Returns counts of seeded and skipped rows.

    ``db_engine`` defaults to the engine built from ``DATABASE_URL``.
    """
    field_path = field_path or settings.default_geo_field
    db_engine = db_engine or engine
    session_factory = async_sessionmaker(db_engine, expire_on_commit=False)
    counts = {"documents": 0, "skipped": 0}

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    places = load_places(csv_path)

    if drop:
        await _drop_data(session_factory)

    repo = SqlGeoDocumentRepository(session_factory)
    for place in places:
        try:
            geo_data = GeoData.from_coordinates(place["latitude"], place["longitude"])
        except InvalidInputError as e:
            logger.warning("Place '%s': %s, skipping", place["id"], e)
            counts["skipped"] += 1
            continue

        await repo.save(place["id"], place["fields"], field_path, geo_data)
        counts["documents"] += 1

    logger.info(
        "Seed complete: %d documents under '%s' (%d skipped)",
        counts["documents"], field_path, counts["skipped"],
    )
    return counts


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the geosearch database from a places CSV")
    parser.add_argument("--file", type=Path, default=Path(settings.csv_data_path) / "places.csv")
    parser.add_argument("--field", default=None, help="Dotted field path for the geo data")
    parser.add_argument("--drop", action="store_true", help="Drop existing documents first")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")

    if not args.file.exists():
        logger.error("CSV file not found: %s", args.file)
        sys.exit(1)

    asyncio.run(seed(args.file, field_path=args.field, drop=args.drop))


if __name__ == "__main__":
    main()
