"""
Loading tables from CSV files.

Files are read with Polars as all-text columns; each column listed in the
schema is then classified per its kind. Failures are logged and reported as
``None`` so callers can tell "no table" apart from "some table" without
handling I/O exceptions themselves.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import List, Optional, Tuple

import polars as pl
from polars.exceptions import PolarsError

from .model import Number, PropertyValue, Record, Table, Text
from .schema import DEFAULT_SCHEMA, ColumnSpec, SourceSchema, header_key, match_headers, normalize_extension

LOGGER = logging.getLogger(__name__)


def find_table_files(directory: Path, extension: str = ".csv") -> List[Path]:
    """Return the files directly inside ``directory`` with the given extension, sorted by name."""

    suffix = normalize_extension(extension)
    try:
        entries = list(Path(directory).iterdir())
    except OSError as exc:
        LOGGER.error("Failed to enumerate %s files in folder %s: %s", suffix, directory, exc)
        return []
    return sorted(p for p in entries if p.is_file() and p.suffix.lower() == suffix)


def _clean_cell(value: Optional[str]) -> str:
    if value is None:
        return ""
    return str(value).strip()


def classify_cell(spec: ColumnSpec, cell: str) -> PropertyValue:
    """Turn a non-blank cell into a property value; ValueError if it does not fit ``spec.kind``."""

    if spec.kind == "text":
        return Text(cell)
    try:
        return Number(_parse_number(cell))
    except ValueError:
        if spec.kind == "auto":
            return Text(cell)
        raise ValueError(f"column '{spec.column}' expects a number, got {cell!r}") from None


def _parse_number(cell: str) -> float:
    # float() also takes "1_000", "nan" and "inf"; a CSV number is finite decimal text.
    if "_" in cell:
        raise ValueError(cell)
    value = float(cell)
    if not math.isfinite(value):
        raise ValueError(cell)
    return value


def _resolve_columns(
    frame: pl.DataFrame, schema: SourceSchema, path: Path
) -> Optional[Tuple[str, str, List[Tuple[ColumnSpec, str]]]]:
    headers = match_headers(frame.columns)

    key_column = headers.get(header_key(schema.key_column))
    if key_column is None:
        LOGGER.error("Key column '%s' not found in %s (columns: %s)", schema.key_column, path, ", ".join(frame.columns))
        return None

    name_column = headers.get(header_key(schema.display_column))
    if name_column is None:
        LOGGER.warning("Name column '%s' not found in %s; using key column", schema.display_column, path)
        name_column = key_column

    property_columns: List[Tuple[ColumnSpec, str]] = []
    for spec in schema.properties:
        raw = headers.get(header_key(spec.column))
        if raw is None:
            LOGGER.warning("Property column '%s' not found in %s; property omitted", spec.column, path)
            continue
        property_columns.append((spec, raw))

    return key_column, name_column, property_columns


def read_table_from_csv(path: Path, schema: SourceSchema = DEFAULT_SCHEMA) -> Optional[Table]:
    """
    Read a table from a CSV file.

    Returns None if the file cannot be read or parsed, lacks the key column,
    or yields no usable rows. Rows with a blank key or a value that does not
    fit its column kind are skipped. Later rows repeating a key are dropped.
    """

    path = Path(path)
    try:
        frame = pl.read_csv(path, infer_schema_length=0)
    except (OSError, PolarsError) as exc:
        LOGGER.error("Failed to read CSV data table %s with error: %s", path, exc)
        return None

    resolved = _resolve_columns(frame, schema, path)
    if resolved is None:
        return None
    key_column, name_column, property_columns = resolved

    table = Table()
    skipped = 0
    duplicates = 0

    # Header is line 1, so data rows start at line 2.
    for line_no, row in enumerate(frame.iter_rows(named=True), start=2):
        key = _clean_cell(row[key_column])
        if not key:
            LOGGER.warning("%s:%d: blank '%s', row skipped", path.name, line_no, schema.key_column)
            skipped += 1
            continue
        name = _clean_cell(row[name_column]) or key

        pairs = []
        try:
            for spec, raw_column in property_columns:
                cell = _clean_cell(row[raw_column])
                if not cell:
                    continue
                pairs.append((spec.property_name, classify_cell(spec, cell)))
        except ValueError as exc:
            LOGGER.warning("%s:%d: %s, row skipped", path.name, line_no, exc)
            skipped += 1
            continue

        if not table.insert(Record.from_row(key, name, pairs)):
            duplicates += 1

    if not table:
        LOGGER.warning("No usable rows in %s (%d skipped)", path, skipped)
        return None

    LOGGER.info(
        "Loaded %d records from %s (%d skipped, %d duplicate keys ignored)",
        len(table),
        path,
        skipped,
        duplicates,
    )
    return table
