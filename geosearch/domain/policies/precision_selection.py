"""PrecisionSelection — pick the geohash length for a search radius."""

from __future__ import annotations

import math

from geosearch.domain.errors import InvalidInputError

# (max radius in km, inclusive) → geohash length.
# Approximate cell size per length:
#   1 ≤ 5,000km × 5,000km     4 ≤ 39.1km × 19.5km    7 ≤ 153m × 153m
#   2 ≤ 1,250km × 625km       5 ≤ 4.89km × 4.89km    8 ≤ 38.2m × 19.1m
#   3 ≤ 156km × 156km         6 ≤ 1.22km × 0.61km    9 ≤ 4.77m × 4.77m
RADIUS_PRECISION_TABLE: tuple[tuple[float, int], ...] = (
    (0.00477, 9),
    (0.0382, 8),
    (0.153, 7),
    (1.22, 6),
    (4.89, 5),
    (39.1, 4),
    (156.0, 3),
    (1250.0, 2),
)
COARSEST_PRECISION = 1


def select_precision(radius_km: float) -> int:
    """Return the geohash length to query with for a given radius.

    Smaller radius → longer, finer hash. The result is non-increasing in
    ``radius_km`` and always in [1, 9].

    Raises:
        InvalidInputError: if the radius is negative or not a number.
    """
    if isinstance(radius_km, bool) or not isinstance(radius_km, (int, float)):
        raise InvalidInputError(f"Radius must be a number, got {radius_km!r}")
    if math.isnan(radius_km) or radius_km < 0:
        raise InvalidInputError(f"Radius must be a non-negative number, got {radius_km}")

    for max_radius_km, length in RADIUS_PRECISION_TABLE:
        if radius_km <= max_radius_km:
            return length
    return COARSEST_PRECISION
