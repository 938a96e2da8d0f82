"""CSV loader — reads places files into rows ready to be geotagged."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from geosearch.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_coordinate,
)

logger = logging.getLogger(__name__)

ID_COLUMNS = ("id", "guid", "place_id")
LATITUDE_COLUMNS = ("latitude", "lat", "широта")
LONGITUDE_COLUMNS = ("longitude", "lon", "lng", "долгота")


def _sniff_dialect(sample: str) -> type[csv.Dialect]:
    """Detect the delimiter (comma/semicolon/tab) from the header line."""
    if not sample:
        return csv.excel

    first_line = sample.splitlines()[0]
    counts = {d: first_line.count(d) for d in (";", ",", "\t")}
    best_delim = max(counts, key=counts.get)

    if counts[best_delim] > 0:
        class DynamicDialect(csv.excel):
            delimiter = best_delim
        return DynamicDialect
    return csv.excel


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization.

    Args:
        file_path: path to the CSV file.
        encoding: file encoding (utf-8-sig strips BOM automatically).

    Returns:
        List of dicts with normalized column names.
    """
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = []
        for raw_row in reader:
            row = {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            rows.append(row)

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def _first(row: dict[str, str | None], columns: tuple[str, ...]) -> str | None:
    return next((row[c] for c in columns if row.get(c)), None)


def load_places(file_path: Path) -> list[dict]:
    """Load the places CSV.

    Expected columns (after normalization): id, latitude, longitude; every
    other column is kept as a document field. Rows without usable
    coordinates are skipped. Rows without an id get their 1-based row number.

    Returns:
        dicts with ``id``, ``latitude``, ``longitude`` and ``fields``.
    """
    rows = _read_csv(file_path)
    reserved = set(ID_COLUMNS + LATITUDE_COLUMNS + LONGITUDE_COLUMNS)
    places = []
    for index, row in enumerate(rows, start=1):
        latitude = parse_coordinate(_first(row, LATITUDE_COLUMNS))
        longitude = parse_coordinate(_first(row, LONGITUDE_COLUMNS))
        if latitude is None or longitude is None:
            logger.warning("Row %d in %s has no coordinates, skipping", index, file_path.name)
            continue

        places.append({
            "id": _first(row, ID_COLUMNS) or str(index),
            "latitude": latitude,
            "longitude": longitude,
            "fields": {k: v for k, v in row.items() if k not in reserved},
        })
    logger.info("Parsed %d places", len(places))
    return places
