"""
Header resolution inside the frozen region of a grid.

Column keys are looked up in the frozen header rows and resolve to a
column index.  Row keys are looked up in the frozen header columns and
resolve to a row index.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .errors import HeaderNotFound
from .grid import GridModel, RowRange
from .matching import MatchTier, find_match

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedHeader:
    index: int
    tier: MatchTier


def _column_candidates(grid: GridModel):
    # Ordered by column first so ties resolve to the lowest column index
    for col in range(grid.col_count):
        for row in range(min(grid.frozen_rows, grid.row_count)):
            text = grid.cell(row, col)
            if text:
                yield col, text


def _row_candidates(grid: GridModel, rows: RowRange):
    frozen_cols = min(grid.frozen_cols, grid.col_count)
    for row in rows:
        for col in range(frozen_cols):
            text = grid.cell(row, col)
            if text:
                yield row, text


def resolve(grid: GridModel, key: str, search_rows: bool = False,
            rows: Optional[RowRange] = None) -> ResolvedHeader:
    """Locate *key* in the grid's header region.

    With ``search_rows=False`` the key is a column header and the frozen
    rows are searched; the result index is a column.  With
    ``search_rows=True`` the key is a row header and the frozen columns of
    *rows* (default: every row of the grid) are searched; the result index
    is a row.

    Raises:
        HeaderNotFound: no tier matched.
    """
    if search_rows:
        rows = rows if rows is not None else RowRange(0, grid.row_count)
        candidates = _row_candidates(grid, rows)
    else:
        candidates = _column_candidates(grid)

    found = find_match(candidates, key)
    if found is None:
        raise HeaderNotFound(key, search_rows)

    index, tier = found
    logger.debug(f"Header '{key}' -> {'row' if search_rows else 'column'} "
                 f"{index} ({tier.name.lower()})")
    return ResolvedHeader(index, tier)


def header_names(grid: GridModel) -> list[str]:
    """Return the non-empty column headers of the frozen rows, in column order."""
    return [text for _, text in _column_candidates(grid)]
