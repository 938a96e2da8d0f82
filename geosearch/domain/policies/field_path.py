"""Field path resolution — find the geo point stored under a dotted path."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from geosearch.domain.errors import MissingFieldError
from geosearch.domain.value_objects.geo_data import GeoData
from geosearch.domain.value_objects.geo_point import GeoPoint

_MISSING = object()


def get_nested_value(obj: Any, path: str, default: Any = None) -> Any:
    """Walk ``path`` ("a.b.c") through mappings (by key) and objects (by attribute)."""
    for part in path.split("."):
        if isinstance(obj, Mapping):
            obj = obj.get(part, _MISSING)
        elif obj is None or isinstance(obj, (str, bytes, int, float)):
            return default
        else:
            obj = getattr(obj, part, _MISSING)
        if obj is _MISSING:
            return default
    return obj


def set_nested_value(target: dict, path: str, value: Any) -> dict:
    """Store ``value`` under a dotted path, creating intermediate dicts."""
    *parents, leaf = path.split(".")
    node = target
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[leaf] = value
    return target


def resolve_geo_point(fields: Mapping[str, Any], path: str) -> GeoPoint | None:
    """Return the GeoPoint of the geo data under ``path``, or None.

    Accepted shapes at ``path``: a ``GeoData``; or a mapping whose ``geopoint``
    is a ``GeoPoint``, a ``{"latitude", "longitude"}`` mapping or a
    ``(lat, lon)`` pair.
    """
    value = get_nested_value(fields, path)
    if isinstance(value, GeoData):
        return value.geopoint
    if not isinstance(value, Mapping):
        return None

    point = value.get("geopoint")
    if isinstance(point, GeoPoint):
        return point
    try:
        if isinstance(point, Mapping):
            return GeoPoint(latitude=float(point["latitude"]), longitude=float(point["longitude"]))
        if isinstance(point, (tuple, list)) and len(point) == 2:
            return GeoPoint(latitude=float(point[0]), longitude=float(point[1]))
    except (KeyError, TypeError, ValueError):
        return None
    return None


def require_geo_point(fields: Mapping[str, Any], path: str) -> GeoPoint:
    """Like ``resolve_geo_point`` but raises MissingFieldError when absent."""
    point = resolve_geo_point(fields, path)
    if point is None:
        raise MissingFieldError(f"No geo data found at field path '{path}'")
    return point
