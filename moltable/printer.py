"""Render tables as fixed-width ASCII grids with Rich."""

from __future__ import annotations

import io
import sys
from typing import List, Optional, TextIO

from rich import box
from rich.console import Console
from rich.table import Table as Grid
from rich.text import Text as Cell

from .formatting import format_value
from .model import Table

EMPTY_TABLE_TEXT = "Table is empty"


def _build_grid(table: Table) -> Grid:
    first = table.first()
    columns = first.properties.keys()

    grid = Grid(box=box.ASCII2, show_lines=True)
    for header in ["Key", "Name", *columns]:
        # Cells are Text objects so names like "[Fe]" are not read as markup.
        grid.add_column(Cell(header), no_wrap=True)

    for record in table:
        cells: List[str] = [record.key, record.name]
        for column in columns:
            prop = record.properties.get(column)
            cells.append(format_value(prop.value) if prop is not None else "")
        grid.add_row(*(Cell(cell) for cell in cells))
    return grid


def _grid_width(table: Table) -> int:
    columns = ["Key", "Name", *table.first().properties.keys()]
    widths = [len(column) for column in columns]
    for record in table:
        widths[0] = max(widths[0], len(record.key))
        widths[1] = max(widths[1], len(record.name))
        for i, column in enumerate(columns[2:], start=2):
            prop = record.properties.get(column)
            if prop is not None:
                widths[i] = max(widths[i], len(format_value(prop.value)))
    # One space of padding each side plus a border per column and the closing border.
    return sum(widths) + 3 * len(widths) + 1


def render_table(table: Table) -> str:
    """
    Lay out ``table`` as a grid with a Key and Name column followed by one
    column per property of the first record. Cells are looked up by property
    key, so a record missing one of those properties gets a blank cell.
    """

    if table.first() is None:
        return EMPTY_TABLE_TEXT

    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=_grid_width(table),
        color_system=None,
        highlight=False,
        emoji=False,
    )
    console.print(_build_grid(table))
    return buffer.getvalue().rstrip("\n")


def print_table(table: Table, stream: Optional[TextIO] = None) -> None:
    out = stream if stream is not None else sys.stdout
    out.write(render_table(table) + "\n")
