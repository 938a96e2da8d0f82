"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Float, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from geosearch.adapters.persistence.database import Base


class GeoDocumentModel(Base):
    """A stored document plus the GeoData kept under one of its field paths."""

    __tablename__ = "geo_documents"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    geo_field: Mapped[str] = mapped_column(String(200), nullable=False, default="location")
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    geohash: Mapped[str] = mapped_column(String(18), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (Index("idx_geo_documents_field_geohash", "geo_field", "geohash"),)
