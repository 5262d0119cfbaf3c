"""Molecular data table demo.

Loads every table file found directly inside a directory, prints each one,
then prints the union, difference, symmetric difference and intersection of
the first two tables.

Usage::

    moltable ./data
    moltable ./data --config moltable.yaml -v
    python -m moltable ./data
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .algebra import SET_OPERATIONS
from .config import ConfigError, load_schema, resolve_config_path
from .datasource import find_table_files, read_table_from_csv
from .model import Table
from .printer import print_table
from .schema import DEFAULT_SCHEMA, SourceSchema

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2  # argparse exits with this on bad arguments
EXIT_CONFIG_ERROR = 3
EXIT_NO_FILES = 4
EXIT_LOAD_FAILED = 5
EXIT_TOO_FEW_TABLES = 6


def configure_logging(verbosity: int) -> None:
    level = logging.DEBUG if verbosity > 0 else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moltable",
        description="Molecular Data Table Demo: load tables and print set operations between them.",
    )
    parser.add_argument(
        "data_dir",
        type=Path,
        help="The directory to load the data table files from",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file describing the key/name/property columns (default: $MOLTABLE_CONFIG or built-in)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Enable debug logging.",
    )
    return parser


def _load_schema(config: Optional[Path]) -> SourceSchema:
    path = resolve_config_path(config)
    if path is None:
        return DEFAULT_SCHEMA
    LOGGER.info("Using configuration %s", path)
    return load_schema(path)


def run(args: argparse.Namespace) -> int:
    print("Running demo application")

    try:
        schema = _load_schema(args.config)
    except ConfigError as exc:
        LOGGER.error("Config error: %s", exc)
        return EXIT_CONFIG_ERROR

    file_paths = find_table_files(args.data_dir, schema.file_extension)
    if not file_paths:
        LOGGER.error("Failed to find any %s files in %s", schema.file_extension, args.data_dir)
        return EXIT_NO_FILES
    LOGGER.info("Found %d %s files", len(file_paths), schema.file_extension)

    tables: List[Tuple[Path, Table]] = []
    for file_path in file_paths:
        print(f"\nLoading table from {file_path}")
        table = read_table_from_csv(file_path, schema)
        if table is None:
            LOGGER.error("Failed to load table from %s", file_path)
            return EXIT_LOAD_FAILED
        tables.append((file_path, table))
        print_table(table)

    if len(tables) < 2:
        LOGGER.error("Fewer than 2 tables loaded, so set operations cannot run")
        return EXIT_TOO_FEW_TABLES

    (first_path, first), (second_path, second) = tables[:2]
    for title, operation in SET_OPERATIONS:
        print(f"\nWill print {title} of tables from: {first_path} and {second_path}\n")
        print("Table 1:")
        print_table(first)
        print("Table 2:")
        print_table(second)
        print(f"\nResulting table ({title})")
        print_table(operation(first, second))

    print("\nSuccessfully finished running demo application")
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
