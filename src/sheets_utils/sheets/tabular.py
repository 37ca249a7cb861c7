"""Pure helpers over tabular cell data."""

from __future__ import annotations

from typing import Any, Sequence

Cell = str | int | float | bool | None
Row = Sequence[Any]
Table = Sequence[Row]

# Separator written after every cell by data_to_string
FIELD_SEPARATOR = "\t"


def cell_to_string(value: Any) -> str:
    """Render a cell value the way row lookups compare it.

    None renders as an empty string, booleans as "true"/"false", and
    integral floats without a fractional part (2.0 -> "2").
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


def column_index(column: str) -> int:
    """Convert a column letter code to its 0-based index.

    Case-insensitive bijective base-26: "A" -> 0, "Z" -> 25, "AA" -> 26.

    Args:
        column: Column letters (A-Z only).

    Returns:
        The 0-based column index.
    """
    index = 0
    for char in column.upper():
        index = index * 26 + (ord(char) - ord("A") + 1)
    return index - 1


def find_row_number(data: Table, column: str, value: str) -> int:
    """Find the first row whose cell in ``column`` renders as ``value``.

    Rows too short to have the column are skipped. An empty column code
    matches nothing.

    Args:
        data: Rows to scan, in sheet order.
        column: Column letters (e.g., "A").
        value: Exact text to match (case-sensitive, no trimming).

    Returns:
        The 1-based row number of the first match, or -1 if none.
    """
    index = column_index(column)
    if index < 0:
        return -1
    for number, row in enumerate(data, start=1):
        if len(row) <= index:
            continue
        if cell_to_string(row[index]) == value:
            return number
    return -1


def data_to_string(data: Table) -> str:
    """Render rows as tab-separated text, one line per row.

    Every cell is followed by a separator, including the last one in a row.
    """
    lines = []
    for row in data:
        lines.append("".join(cell_to_string(cell) + FIELD_SEPARATOR for cell in row) + "\n")
    return "".join(lines)
