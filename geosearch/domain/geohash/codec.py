"""Geohash codec — interleaved binary bisection of longitude and latitude.

Each base-32 character carries 5 bits. Bits alternate longitude, latitude,
longitude, ... and the alternation runs straight across character
boundaries, so a hash that is a prefix of another always denotes the cell
that contains it.
"""

from __future__ import annotations

import math
from types import MappingProxyType

from geosearch.domain.errors import InvalidInputError
from geosearch.domain.value_objects.bounding_box import BoundingBox, DecodedHash
from geosearch.domain.value_objects.precision import (
    Precision,
    PrecisionStrategy,
    check_length,
)

BASE32 = "0123456789bcdefghjkmnpqrstuvwxyz"
BASE32_VALUES = MappingProxyType({char: value for value, char in enumerate(BASE32)})

DEFAULT_HASH_LENGTH = 9

# Sorts after every BASE32 symbol: [prefix, prefix + "~"] spans all hashes under prefix
RANGE_END_SENTINEL = "~"

# Minimum hash length that preserves N decimal digits of a coordinate.
# Derived from the error 45 / 2^(n-1) for n bits of latitude or longitude.
#           decimal digits: 0  1  2  3  4   5   6   7   8   9  10
SIGFIG_HASH_LENGTH = (0, 5, 7, 8, 11, 12, 13, 15, 16, 17, 18)


def encode(
    latitude: float | str,
    longitude: float | str,
    precision: int | Precision = DEFAULT_HASH_LENGTH,
) -> str:
    """Encode a coordinate pair into a geohash.

    Args:
        latitude: degrees in [-90, 90]; a numeric string is accepted too.
        longitude: degrees in [-180, 180]; a numeric string is accepted too.
        precision: hash length, or a ``Precision``. ``Precision.auto()``
            requires both coordinates as strings and derives the length from
            the longest written fractional part.

    Raises:
        InvalidInputError: on out-of-range or unparseable coordinates, an
            invalid length, or non-string input under auto precision.
    """
    if isinstance(precision, Precision):
        if precision.strategy == PrecisionStrategy.AUTO_FROM_DECIMAL_DIGITS:
            length = auto_length(latitude, longitude)
        else:
            length = precision.length
    else:
        length = check_length(precision)

    lat = _parse_coordinate(latitude, "Latitude", 90.0)
    lon = _parse_coordinate(longitude, "Longitude", 180.0)

    chars: list[str] = []
    bits = 0
    bits_total = 0
    hash_value = 0
    min_lat, max_lat = -90.0, 90.0
    min_lon, max_lon = -180.0, 180.0

    while len(chars) < length:
        if bits_total % 2 == 0:
            mid = (min_lon + max_lon) / 2
            if lon > mid:
                hash_value = (hash_value << 1) + 1
                min_lon = mid
            else:
                hash_value = hash_value << 1
                max_lon = mid
        else:
            mid = (min_lat + max_lat) / 2
            if lat > mid:
                hash_value = (hash_value << 1) + 1
                min_lat = mid
            else:
                hash_value = hash_value << 1
                max_lat = mid

        bits += 1
        bits_total += 1
        if bits == 5:
            chars.append(BASE32[hash_value])
            bits = 0
            hash_value = 0

    return "".join(chars)


def auto_length(latitude: object, longitude: object) -> int:
    """Hash length for textual coordinates, from their decimal digit count."""
    if not isinstance(latitude, str) or not isinstance(longitude, str):
        raise InvalidInputError("string notation required for auto precision")
    digits = max(_decimal_digits(latitude), _decimal_digits(longitude))
    return SIGFIG_HASH_LENGTH[min(digits, len(SIGFIG_HASH_LENGTH) - 1)]


def decode_bbox(geohash: str) -> BoundingBox:
    """Decode a geohash into the cell it denotes.

    An empty hash is the whole globe. Decoding is case-insensitive.
    """
    if not isinstance(geohash, str):
        raise InvalidInputError(f"Geohash must be a string, got {type(geohash).__name__}")

    is_lon = True
    min_lat, max_lat = -90.0, 90.0
    min_lon, max_lon = -180.0, 180.0

    for char in geohash.lower():
        value = BASE32_VALUES.get(char)
        if value is None:
            raise InvalidInputError(f"Invalid geohash character {char!r} in {geohash!r}")

        for shift in range(4, -1, -1):
            bit = (value >> shift) & 1
            if is_lon:
                mid = (min_lon + max_lon) / 2
                if bit:
                    min_lon = mid
                else:
                    max_lon = mid
            else:
                mid = (min_lat + max_lat) / 2
                if bit:
                    min_lat = mid
                else:
                    max_lat = mid
            is_lon = not is_lon

    return BoundingBox(min_lat=min_lat, min_lon=min_lon, max_lat=max_lat, max_lon=max_lon)


def decode(geohash: str) -> DecodedHash:
    """Decode a geohash into its cell center and half-width error bounds."""
    bbox = decode_bbox(geohash)
    lat, lon = bbox.center
    return DecodedHash(
        latitude=lat,
        longitude=lon,
        lat_error=bbox.lat_error,
        lon_error=bbox.lon_error,
    )


def _decimal_digits(value: str) -> int:
    _, sep, fraction = value.strip().partition(".")
    return len(fraction) if sep else 0


def _parse_coordinate(value: object, name: str, limit: float) -> float:
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be a number, got {value!r}")
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise InvalidInputError(f"{name} is not a number: {value!r}") from None
    elif isinstance(value, (int, float)):
        number = float(value)
    else:
        raise InvalidInputError(f"{name} must be a number, got {type(value).__name__}")

    if not math.isfinite(number) or not -limit <= number <= limit:
        raise InvalidInputError(f"{name} out of range [-{limit:g}, {limit:g}]: {value}")
    return number
