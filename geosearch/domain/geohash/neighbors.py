"""Neighbor finder — the eight cells surrounding a geohash.

    NW  N  NE       7 0 1
     W  x  E        6 x 2
    SW  S  SE       5 4 3
"""

from __future__ import annotations

from geosearch.domain.geohash.codec import decode, encode

# (lat_dir, lon_dir), clockwise from north
DIRECTIONS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
    (0, -1),
    (1, -1),
)


def neighbors(geohash: str) -> list[str]:
    """Return the hashes of the 8 adjacent cells: N, NE, E, SE, S, SW, W, NW.

    Each neighbor is found by stepping one full cell height/width from the
    center and re-encoding at the input's length. Past a pole the latitude is
    clamped, so a polar cell lists its own row as its northern (or southern)
    neighbors. Past the antimeridian the longitude wraps around to the other
    side. Duplicates are kept.
    """
    length = len(geohash)
    center = decode(geohash)
    cell_height = center.lat_error * 2
    cell_width = center.lon_error * 2

    result = []
    for lat_dir, lon_dir in DIRECTIONS:
        lat = _clamp_latitude(center.latitude + lat_dir * cell_height)
        lon = _wrap_longitude(center.longitude + lon_dir * cell_width)
        result.append(encode(lat, lon, length))
    return result


def _clamp_latitude(latitude: float) -> float:
    return max(-90.0, min(90.0, latitude))


def _wrap_longitude(longitude: float) -> float:
    if -180.0 <= longitude < 180.0:
        return longitude
    return (longitude + 180.0) % 360.0 - 180.0
