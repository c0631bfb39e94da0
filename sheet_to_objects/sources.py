"""
Grid supply: fetchers that hand the binder one :class:`GridModel` per
sheet name.

* :class:`WorkbookFetcher` – ``.xlsx`` files via openpyxl; the spreadsheet
  id is the workbook path.
* :class:`CsvFetcher` – a directory of ``<sheet>.csv`` files via pandas;
  the spreadsheet id is the directory.
* :class:`StaticFetcher` – grids already held in memory.
"""

import logging
import os
from typing import Optional, Protocol

import pandas as pd
from openpyxl import load_workbook

from .errors import SheetNotFound
from .grid import GridModel, grid_from_worksheet

logger = logging.getLogger(__name__)


class SheetFetcher(Protocol):
    def get_sheet(self, spreadsheet_id: str,
                  sheet_name: Optional[str]) -> GridModel:
        """Return the named sheet; ``None`` means the first sheet.

        Raises:
            SheetNotFound
        """


# ---------------------------------------------------------------------------
# openpyxl
# ---------------------------------------------------------------------------

class WorkbookFetcher:
    """Reads sheets from ``.xlsx`` workbooks (cached values, not formulas)."""

    def __init__(self, default_frozen_rows: int = 1, default_frozen_cols: int = 0):
        self.default_frozen_rows = default_frozen_rows
        self.default_frozen_cols = default_frozen_cols

    def sheet_names(self, spreadsheet_id: str) -> list[str]:
        wb = self._open(spreadsheet_id)
        names = wb.sheetnames
        wb.close()
        return names

    def _open(self, spreadsheet_id: str):
        if not os.path.exists(spreadsheet_id):
            raise SheetNotFound(None, spreadsheet_id)
        return load_workbook(spreadsheet_id, data_only=True)

    def get_sheet(self, spreadsheet_id, sheet_name=None):
        wb = self._open(spreadsheet_id)
        try:
            if sheet_name is None:
                ws = wb.worksheets[0]
            elif sheet_name in wb.sheetnames:
                ws = wb[sheet_name]
            else:
                raise SheetNotFound(sheet_name, spreadsheet_id)
            grid = grid_from_worksheet(
                ws, self.default_frozen_rows, self.default_frozen_cols)
        finally:
            wb.close()
        logger.debug(f"Loaded sheet '{grid.name}' from {spreadsheet_id}: "
                     f"{grid.row_count} rows, frozen {grid.frozen_rows}x{grid.frozen_cols}")
        return grid


# ---------------------------------------------------------------------------
# pandas
# ---------------------------------------------------------------------------

class CsvFetcher:
    """Reads ``<spreadsheet_id>/<sheet_name>.csv``.

    CSV has no freeze panes, so the frozen counts are fixed per fetcher.
    """

    def __init__(self, frozen_rows: int = 1, frozen_cols: int = 0):
        self.frozen_rows = frozen_rows
        self.frozen_cols = frozen_cols

    def sheet_names(self, spreadsheet_id: str) -> list[str]:
        if not os.path.isdir(spreadsheet_id):
            return []
        return sorted(
            os.path.splitext(f)[0] for f in os.listdir(spreadsheet_id)
            if f.lower().endswith(".csv")
        )

    def get_sheet(self, spreadsheet_id, sheet_name=None):
        if sheet_name is None:
            names = self.sheet_names(spreadsheet_id)
            if not names:
                raise SheetNotFound(None, spreadsheet_id)
            sheet_name = names[0]
        path = os.path.join(spreadsheet_id, f"{sheet_name}.csv")
        if not os.path.exists(path):
            raise SheetNotFound(sheet_name, spreadsheet_id)

        try:
            df = pd.read_csv(path, header=None, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError:
            return GridModel.from_rows([], 0, 0, name=sheet_name)
        return GridModel.from_rows(
            df.values.tolist(), self.frozen_rows, self.frozen_cols, name=sheet_name)


# ---------------------------------------------------------------------------
# In-memory
# ---------------------------------------------------------------------------

class StaticFetcher:
    """Serves grids held in memory, keyed by sheet name.

    ``spreadsheet_id`` is accepted for interface compatibility and, when
    the fetcher was built with one, must match it.
    """

    def __init__(self, sheets: dict[str, GridModel],
                 spreadsheet_id: Optional[str] = None):
        self.sheets = dict(sheets)
        self.spreadsheet_id = spreadsheet_id
        self.requests: list[Optional[str]] = []

    def get_sheet(self, spreadsheet_id, sheet_name=None):
        self.requests.append(sheet_name)
        if self.spreadsheet_id is not None and spreadsheet_id != self.spreadsheet_id:
            raise SheetNotFound(sheet_name, spreadsheet_id)
        if sheet_name is None:
            if not self.sheets:
                raise SheetNotFound(None, spreadsheet_id)
            return next(iter(self.sheets.values()))
        try:
            return self.sheets[sheet_name]
        except KeyError:
            raise SheetNotFound(sheet_name, spreadsheet_id) from None
