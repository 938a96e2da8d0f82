"""GeoPoint value object — immutable (lat, lon) pair."""

import math
from dataclasses import dataclass

from geosearch.domain.errors import InvalidInputError
from geosearch.domain.policies.distance import haversine_km


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise InvalidInputError(
                f"Coordinates must be finite numbers, got ({self.latitude}, {self.longitude})"
            )
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidInputError(f"Latitude out of range [-90, 90]: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidInputError(f"Longitude out of range [-180, 180]: {self.longitude}")

    def haversine_km(self, other: "GeoPoint") -> float:
        """Calculate distance in km between two points using the Haversine formula."""
        return haversine_km(self.latitude, self.longitude, other.latitude, other.longitude)
