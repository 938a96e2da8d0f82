"""BoundingBox and DecodedHash — the area and point a geohash stands for."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float

    @property
    def center(self) -> tuple[float, float]:
        return ((self.min_lat + self.max_lat) / 2, (self.min_lon + self.max_lon) / 2)

    @property
    def lat_error(self) -> float:
        """Half the box height in degrees."""
        return self.max_lat - self.center[0]

    @property
    def lon_error(self) -> float:
        """Half the box width in degrees."""
        return self.max_lon - self.center[1]

    def contains(self, latitude: float, longitude: float) -> bool:
        return (
            self.min_lat <= latitude <= self.max_lat
            and self.min_lon <= longitude <= self.max_lon
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_lat, self.min_lon, self.max_lat, self.max_lon)


@dataclass(frozen=True)
class DecodedHash:
    """Center of a geohash cell plus its positional uncertainty (half-widths)."""

    latitude: float
    longitude: float
    lat_error: float
    lon_error: float
