"""
Immutable grid model: ordered rows of cell strings plus the frozen header
region.

Builders turn openpyxl worksheets and pandas DataFrames into a
:class:`GridModel`.  All of them normalise cell values to text through
:func:`cell_to_text` so the engine only ever sees strings.
"""

import datetime
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional

import numpy as np
import pandas as pd
from openpyxl.utils.cell import column_index_from_string, coordinate_from_string


# ---------------------------------------------------------------------------
# Cell normalisation
# ---------------------------------------------------------------------------

def cell_to_text(value: Any) -> str:
    """Render a raw cell value the way a spreadsheet displays it."""
    if value is None or value is pd.NaT or value is pd.NA:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (np.integer,)):
        value = int(value)
    elif isinstance(value, (np.floating,)):
        value = float(value)
    elif isinstance(value, (np.bool_,)):
        value = bool(value)

    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        # Spreadsheets display 15 significant digits
        return format(value, ".15g")
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


# ---------------------------------------------------------------------------
# Row ranges
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RowRange:
    """Half-open row interval ``[start, end)``."""
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid row range [{self.start}, {self.end})")

    def __len__(self):
        return self.end - self.start

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end))

    def __contains__(self, row):
        return self.start <= row < self.end


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GridModel:
    """One sheet of text cells.

    ``frozen_rows`` leading rows hold column headers and ``frozen_cols``
    leading columns hold row headers.  Rows may be ragged; missing trailing
    cells read as ``""``.
    """
    rows: tuple = field(default_factory=tuple)
    frozen_rows: int = 0
    frozen_cols: int = 0
    name: Optional[str] = None

    def __post_init__(self):
        if self.frozen_rows < 0 or self.frozen_cols < 0:
            raise ValueError("Frozen row/column counts must be >= 0")
        object.__setattr__(
            self, "rows",
            tuple(tuple(cell_to_text(v) for v in row) for row in self.rows),
        )

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Any]], frozen_rows: int = 0,
                  frozen_cols: int = 0, name: Optional[str] = None) -> "GridModel":
        return cls(tuple(tuple(r) for r in rows), frozen_rows, frozen_cols, name)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def col_count(self) -> int:
        return max((len(r) for r in self.rows), default=0)

    @property
    def data_rows(self) -> RowRange:
        """Rows below the frozen header region."""
        start = min(self.frozen_rows, self.row_count)
        return RowRange(start, self.row_count)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.row_count and 0 <= col < self.col_count

    def cell(self, row: int, col: int) -> str:
        """Padded lookup; positions past a short row or outside the grid read as ``""``."""
        if row < 0 or row >= self.row_count or col < 0:
            return ""
        cells = self.rows[row]
        return cells[col] if col < len(cells) else ""


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def _frozen_counts(ws, default_rows: int, default_cols: int) -> tuple[int, int]:
    """Return (frozen_rows, frozen_cols) from the worksheet's freeze panes."""
    anchor = getattr(ws, "freeze_panes", None)
    if not anchor:
        return default_rows, default_cols
    col_letter, row = coordinate_from_string(anchor)
    return row - 1, column_index_from_string(col_letter) - 1


def grid_from_worksheet(ws, default_frozen_rows: int = 1,
                        default_frozen_cols: int = 0) -> GridModel:
    """Build a grid from an openpyxl worksheet.

    Frozen counts come from ``ws.freeze_panes``; sheets without frozen
    panes fall back to the given defaults.
    """
    frozen_rows, frozen_cols = _frozen_counts(
        ws, default_frozen_rows, default_frozen_cols)

    rows = []
    for row in ws.iter_rows(values_only=True):
        rows.append(list(row))

    # Drop trailing blank rows openpyxl reports for styled-but-empty cells
    while rows and all(cell_to_text(v) == "" for v in rows[-1]):
        rows.pop()

    return GridModel.from_rows(rows, frozen_rows, frozen_cols, name=ws.title)


def grid_from_dataframe(df: pd.DataFrame, name: Optional[str] = None,
                        include_header: bool = True,
                        frozen_cols: int = 0) -> GridModel:
    """Build a grid from a DataFrame.

    With ``include_header`` the column labels become a single frozen
    header row.
    """
    rows = []
    if include_header:
        rows.append([cell_to_text(c) for c in df.columns])
    rows.extend(df.astype(object).values.tolist())
    return GridModel.from_rows(
        rows, 1 if include_header else 0, frozen_cols, name=name)
