"""
Segmentation of a row range into blocks keyed by a delimiter column.

Every non-empty delimiter cell starts a new block; empty delimiter cells
continue the current one.  Blocks therefore partition the range in row
order, and nested blocks are produced by segmenting a block's own range
again on another delimiter column.
"""

import logging
from dataclasses import dataclass

from .errors import BlockStructureError
from .grid import GridModel, RowRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Block:
    """Rows ``[start, end)`` of one repeated record."""
    start: int
    end: int
    delimiter: str

    @property
    def rows(self) -> RowRange:
        return RowRange(self.start, self.end)

    def __len__(self):
        return self.end - self.start


def segment(grid: GridModel, rows: RowRange, delimiter_col: int) -> list[Block]:
    """Split *rows* into blocks on column *delimiter_col*.

    Raises:
        BlockStructureError: the first row of a non-empty range has an
            empty delimiter cell.
    """
    if len(rows) == 0:
        return []

    first = grid.cell(rows.start, delimiter_col)
    if first == "":
        raise BlockStructureError(
            f"Row {rows.start} opens a block range but its delimiter cell "
            f"(column {delimiter_col}) is empty"
        )

    starts = [r for r in rows if grid.cell(r, delimiter_col) != ""]
    ends = starts[1:] + [rows.end]

    blocks = [
        Block(start, end, grid.cell(start, delimiter_col))
        for start, end in zip(starts, ends)
    ]
    logger.debug(f"Segmented rows {rows.start}-{rows.end} on column "
                 f"{delimiter_col} into {len(blocks)} blocks")
    return blocks
