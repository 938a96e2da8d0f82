"""CSV column normalization — handles BOM, trailing spaces, encoding quirks."""

from __future__ import annotations

import re


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Strips leading/trailing whitespace
    - Removes BOM characters (\\ufeff)
    - Replaces multiple spaces / non-breaking spaces with single underscore
    - Lowercases
    - Strips non-alphanumeric characters (except underscore)
    """
    name = name.replace("\ufeff", "")
    name = name.strip()
    name = re.sub(r"[\s\u00a0]+", "_", name)
    name = name.lower()
    name = re.sub(r"[^\w]", "", name, flags=re.UNICODE)
    return name


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def parse_coordinate(raw: str | None) -> float | None:
    """Parse a coordinate like '52.52', ' 13,405 ' (decimal comma) or '' → None."""
    value = clean_string(raw)
    if value is None:
        return None
    try:
        return float(value.replace(",", "."))
    except ValueError:
        return None
