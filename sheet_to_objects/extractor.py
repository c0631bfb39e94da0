"""
Raw value extraction relative to a resolved header.
"""

from typing import Any, Optional, Sequence

from .errors import CellOutOfRange, NoValueFound
from .grid import GridModel, RowRange
from .schema import MISSING


def extract_column(grid: GridModel, col: int, ignore_empty: bool = True,
                   rows: Optional[RowRange] = None) -> list[str]:
    """Read column *col* below the header rows (or over *rows*)."""
    rows = rows if rows is not None else grid.data_rows
    values = [grid.cell(r, col) for r in rows]
    if ignore_empty:
        values = [v for v in values if v != ""]
    return values


def extract_row(grid: GridModel, row: int, ignore_empty: bool = True) -> list[str]:
    """Read row *row* to the right of the frozen header columns."""
    start = min(grid.frozen_cols, grid.col_count)
    values = [grid.cell(row, c) for c in range(start, grid.col_count)]
    if ignore_empty:
        values = [v for v in values if v != ""]
    return values


def extract_cell(grid: GridModel, col: int, row: int) -> str:
    if not grid.in_bounds(row, col):
        raise CellOutOfRange(row, col, grid.row_count, grid.col_count)
    return grid.cell(row, col)


def first_value(values: Sequence[str], key: str, default: Any = MISSING) -> Any:
    """Scalar view of an extracted sequence.

    Returns element 0, or *default* when the sequence is empty.
    """
    if values:
        return values[0]
    if default is MISSING:
        raise NoValueFound(f"No value found for '{key}'")
    return default
