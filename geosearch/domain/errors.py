"""Domain errors — the failures a geo search can surface to callers."""


class GeoSearchError(Exception):
    """Base class for all geosearch errors."""


class InvalidInputError(GeoSearchError, ValueError):
    """Malformed coordinates, geohash characters, radius or precision."""


class CollaboratorFailureError(GeoSearchError):
    """The document store failed while serving one of the cell queries."""


class MissingFieldError(GeoSearchError, KeyError):
    """A field path does not resolve to geo data on a record."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""
