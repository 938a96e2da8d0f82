"""Great-circle distance on a spherical Earth (haversine formula)."""

from __future__ import annotations

import math

# Mean Earth radius (IUGG)
EARTH_RADIUS_KM = 6371.0088


def _to_radians(degrees: float) -> float:
    # fmod keeps the sign, so -190 becomes -190 + 360 only through the trig functions
    return math.radians(math.fmod(degrees, 360.0))


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate distance in km between two lat/lon pairs using the Haversine formula.

    Degree values outside one turn are reduced modulo 360 first. The
    intermediate ``a`` is clamped to [0, 1] so that floating-point overshoot on
    identical or antipodal points never reaches ``sqrt`` of a negative number.
    """
    phi1 = _to_radians(lat1)
    phi2 = _to_radians(lat2)
    dphi = _to_radians(lat2 - lat1)
    dlmb = _to_radians(lon2 - lon1)

    a = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    )
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c
