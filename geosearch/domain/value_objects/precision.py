"""Precision value object — how long a geohash should be."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from geosearch.domain.errors import InvalidInputError

MAX_HASH_LENGTH = 18


class PrecisionStrategy(str, Enum):
    FIXED = "fixed"
    AUTO_FROM_DECIMAL_DIGITS = "auto"


@dataclass(frozen=True)
class Precision:
    """Either a fixed hash length or "derive it from the input's decimal digits".

    The auto strategy only works on textual coordinates such as ``"57.649"``,
    where the number of written decimal digits is explicit.
    """

    strategy: PrecisionStrategy
    length: int | None = None

    def __post_init__(self) -> None:
        if self.strategy == PrecisionStrategy.FIXED:
            check_length(self.length)
        elif self.length is not None:
            raise InvalidInputError("auto precision does not take a length")

    @classmethod
    def fixed(cls, length: int) -> Precision:
        return cls(PrecisionStrategy.FIXED, length)

    @classmethod
    def auto(cls) -> Precision:
        return cls(PrecisionStrategy.AUTO_FROM_DECIMAL_DIGITS)


def check_length(length: object) -> int:
    """Validate a geohash length and return it."""
    if isinstance(length, bool) or not isinstance(length, int):
        raise InvalidInputError(f"Geohash length must be an integer, got {length!r}")
    if not 0 <= length <= MAX_HASH_LENGTH:
        raise InvalidInputError(
            f"Geohash length must be between 0 and {MAX_HASH_LENGTH}, got {length}"
        )
    return length
