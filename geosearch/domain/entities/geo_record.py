"""GeoRecord and SearchCandidate — stored documents as seen by a search."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class GeoRecord:
    """A document returned by the store: its identifier plus its field map."""

    id: str
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SearchCandidate:
    """A record that survived distance filtering, with its distance to the center."""

    record: GeoRecord
    distance_km: float

    @property
    def id(self) -> str:
        return self.record.id

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.record.id, **self.record.fields, "distance_km": self.distance_km}
