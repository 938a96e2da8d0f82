"""GeoData value object — the (GeoPoint, geohash) pair stored on a record."""

from __future__ import annotations

from dataclasses import dataclass

from geosearch.domain.errors import InvalidInputError
from geosearch.domain.geohash.codec import DEFAULT_HASH_LENGTH, encode
from geosearch.domain.value_objects.geo_point import GeoPoint


@dataclass(frozen=True)
class GeoData:
    """Full-precision geohash kept alongside the point it was derived from.

    Build it with ``from_coordinates`` and replace it with ``moved_to`` when
    the coordinates change; the hash is never set on its own.
    """

    geopoint: GeoPoint
    geohash: str

    def __post_init__(self) -> None:
        expected = encode(self.geopoint.latitude, self.geopoint.longitude, DEFAULT_HASH_LENGTH)
        if self.geohash != expected:
            raise InvalidInputError(
                f"Geohash {self.geohash!r} does not match point "
                f"({self.geopoint.latitude}, {self.geopoint.longitude})"
            )

    @classmethod
    def from_coordinates(cls, latitude: float, longitude: float) -> GeoData:
        point = GeoPoint(latitude=float(latitude), longitude=float(longitude))
        return cls(
            geopoint=point,
            geohash=encode(point.latitude, point.longitude, DEFAULT_HASH_LENGTH),
        )

    def moved_to(self, latitude: float, longitude: float) -> GeoData:
        return GeoData.from_coordinates(latitude, longitude)

    def to_dict(self) -> dict:
        return {
            "geopoint": {
                "latitude": self.geopoint.latitude,
                "longitude": self.geopoint.longitude,
            },
            "geohash": self.geohash,
        }
