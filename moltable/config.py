"""YAML configuration describing how source files map onto tables.

Sample ``moltable.yaml``::

    file_extension: .csv
    key_column: Molecule
    # name_column defaults to key_column
    properties:
      - column: Solubility
        kind: numeric
      - column: Molecular Weight
        name: MolecularWeight
        kind: numeric
      - Melting Point          # shorthand for a numeric column
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .schema import VALUE_KINDS, ColumnSpec, SourceSchema

LOGGER = logging.getLogger(__name__)
CONFIG_ENV_KEY = "MOLTABLE_CONFIG"


class ConfigError(ValueError):
    """Raised when the YAML configuration is invalid."""


def resolve_config_path(value: Optional[Path]) -> Optional[Path]:
    """Explicit path first, then the MOLTABLE_CONFIG environment variable."""

    if value is not None:
        return Path(value)
    env_value = os.environ.get(CONFIG_ENV_KEY, "").strip()
    if env_value:
        return Path(env_value)
    return None


def _parse_column(entry: Any, position: int) -> ColumnSpec:
    if isinstance(entry, str):
        entry = {"column": entry}
    if not isinstance(entry, dict):
        raise ConfigError(f"properties[{position}] must be a column name or a mapping")

    column = str(entry.get("column") or "").strip()
    if not column:
        raise ConfigError(f"properties[{position}] is missing 'column'")

    kind = str(entry.get("kind", "numeric")).strip().lower()
    if kind not in VALUE_KINDS:
        raise ConfigError(
            f"properties[{position}] has unknown kind '{kind}' (expected one of {', '.join(VALUE_KINDS)})"
        )

    name = entry.get("name")
    return ColumnSpec(column=column, kind=kind, name=str(name).strip() if name else None)


def load_schema(path: Path) -> SourceSchema:
    """Load and validate a source schema from YAML."""

    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Configuration file {path} is not valid YAML: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping at the top level")

    key_column = str(raw.get("key_column") or "").strip()
    if not key_column:
        raise ConfigError("`key_column` is required")

    entries = raw.get("properties")
    if not isinstance(entries, list) or not entries:
        raise ConfigError("`properties` must be a non-empty list")

    columns: List[ColumnSpec] = []
    seen: Dict[str, int] = {}
    for position, entry in enumerate(entries):
        spec = _parse_column(entry, position)
        if spec.property_name in seen:
            raise ConfigError(
                f"Property '{spec.property_name}' is defined twice "
                f"(properties[{seen[spec.property_name]}] and properties[{position}])"
            )
        seen[spec.property_name] = position
        columns.append(spec)

    name_column = raw.get("name_column")
    try:
        schema = SourceSchema(
            key_column=key_column,
            properties=columns,
            name_column=str(name_column).strip() if name_column else None,
            file_extension=str(raw.get("file_extension") or ".csv"),
        )
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    LOGGER.debug(
        "Loaded schema from %s: key=%s, %d properties, extension=%s",
        path,
        schema.key_column,
        len(schema.properties),
        schema.file_extension,
    )
    return schema
