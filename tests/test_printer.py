import io

import pytest

from moltable.formatting import format_value
from moltable.model import Number, Record, Table, Text
from moltable.printer import EMPTY_TABLE_TEXT, print_table, render_table


@pytest.mark.parametrize(
    "value, expected",
    [
        (Number(3.3), "3.300000"),
        (Number(180.16), "180.160000"),
        (Number(-0.5), "-0.500000"),
        (Number(0), "0.000000"),
        (Number(1e20), "100000000000000000000.000000"),
        (Text("Aspirin"), "Aspirin"),
        (Text(""), ""),
    ],
)
def test_format_value(value, expected):
    assert format_value(value) == expected


def test_format_value_is_deterministic():
    value = Number(194.19)
    assert format_value(value) == format_value(value)


def test_format_value_rejects_raw_values():
    with pytest.raises(TypeError):
        format_value(3.3)


def test_render_empty_table():
    assert render_table(Table()) == EMPTY_TABLE_TEXT


def test_render_single_record_grid():
    table = Table.from_rows([("aspirin", "Aspirin", {"Solubility": 3.3, "Molecular Weight": 180.16})])

    expected = "\n".join(
        [
            "+---------+---------+------------------+------------+",
            "| Key     | Name    | Molecular Weight | Solubility |",
            "+---------+---------+------------------+------------+",
            "| aspirin | Aspirin | 180.160000       | 3.300000   |",
            "+---------+---------+------------------+------------+",
        ]
    )
    assert render_table(table) == expected


def test_render_uses_first_records_columns_and_blanks_missing_values():
    table = Table(
        [
            Record.from_row("a", "A", {"Solubility": 1.0, "Colour": "red"}),
            Record.from_row("b", "B", {"Solubility": 2.0, "Odour": "none"}),
        ]
    )

    lines = render_table(table).splitlines()

    assert lines[1] == "| Key | Name | Colour | Solubility |"
    assert lines[3] == "| a   | A    | red    | 1.000000   |"
    assert lines[5] == "| b   | B    |        | 2.000000   |"
    assert "none" not in render_table(table)


def test_print_table_writes_to_stream():
    buffer = io.StringIO()

    print_table(Table(), stream=buffer)

    assert buffer.getvalue() == EMPTY_TABLE_TEXT + "\n"


def test_print_table_defaults_to_stdout(capsys):
    print_table(Table([Record("x", "X")]))

    out = capsys.readouterr().out
    assert "| x   | X    |" in out
