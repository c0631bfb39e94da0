"""
Schema binder: walks a :class:`Schema`, pulls raw values out of the grids
supplied by a :class:`SheetFetcher`, converts them, and writes them into
the destination through a :class:`DestinationAdapter`.

Per-member failures are collected and binding continues, so the caller
always gets a best-effort object graph plus a list of diagnostics.
Only ``MissingSpreadsheetId`` and ``SheetNotFound`` abort a bind.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .adapters import DestinationAdapter, adapter_for
from .blocks import segment
from .converter import convert
from .errors import (
    BindError,
    BlockStructureError,
    MissingSpreadsheetId,
    NoValueFound,
    SheetBindingError,
    SheetNotFound,
)
from .extractor import extract_cell, extract_column, extract_row, first_value
from .grid import GridModel, RowRange
from .headers import resolve
from .schema import MISSING, BindingSpec, Mode, Schema
from .sources import SheetFetcher

logger = logging.getLogger(__name__)


@dataclass
class BindResult:
    destination: Any
    errors: list[BindError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def __iter__(self):
        # Allows ``destination, errors = bind(...)``
        return iter((self.destination, self.errors))


@dataclass(frozen=True)
class _Scope:
    """The sheet being bound and, inside a block, its row range."""
    sheet: Optional[str]
    rows: Optional[RowRange] = None


class _SingleGrid:
    """Fetcher over one grid that is already in hand."""

    def __init__(self, grid: GridModel, default_sheet: Optional[str]):
        self.grid = grid
        self.names = {None, default_sheet, grid.name}

    def get_sheet(self, spreadsheet_id, sheet_name=None):
        if sheet_name not in self.names:
            raise SheetNotFound(sheet_name, spreadsheet_id)
        return self.grid


# ---------------------------------------------------------------------------
# One bind call
# ---------------------------------------------------------------------------

class _BindRun:
    """State of a single bind call: grid cache and collected errors."""

    def __init__(self, fetcher: SheetFetcher, spreadsheet_id: Optional[str],
                 adapter: Optional[DestinationAdapter]):
        self.fetcher = fetcher
        self.spreadsheet_id = spreadsheet_id
        self.adapter = adapter
        self.errors: list[BindError] = []
        self._grids: dict[Optional[str], GridModel] = {}

    def grid(self, sheet: Optional[str]) -> GridModel:
        if sheet not in self._grids:
            self._grids[sheet] = self.fetcher.get_sheet(self.spreadsheet_id, sheet)
        return self._grids[sheet]

    def record(self, path: str, error: SheetBindingError):
        logger.warning(f"{path}: {error}")
        self.errors.append(BindError(path, error))

    # -- schema walk --------------------------------------------------------

    def bind_schema(self, schema: Schema, target: Any, scope: _Scope, path: str,
                    sheet_override: Optional[str] = None):
        adapter = self.adapter or adapter_for(target)
        if scope.rows is not None:
            # Block children read the block's sheet
            schema_sheet = scope.sheet
        else:
            schema_sheet = sheet_override or schema.default_sheet or scope.sheet

        for member, spec in schema:
            member_path = f"{path}.{member}" if path else member
            sheet = spec.sheet or schema_sheet
            if scope.rows is not None and sheet == scope.sheet:
                member_scope = _Scope(sheet, scope.rows)
            else:
                member_scope = _Scope(sheet, None)

            try:
                if spec.mode is Mode.SHEET:
                    self._bind_sheet(spec, adapter, target, member,
                                     member_scope, member_path)
                elif spec.mode is Mode.BLOCK:
                    self._bind_block(self.grid(sheet), spec, adapter, target,
                                     member, member_scope, member_path)
                else:
                    self._bind_value(self.grid(sheet), spec, adapter, target,
                                     member, member_scope, member_path)
            except SheetNotFound:
                raise
            except SheetBindingError as exc:
                self.record(member_path, exc)

    # -- value members ------------------------------------------------------

    def _raw_values(self, grid: GridModel, spec: BindingSpec,
                    rows: Optional[RowRange]) -> list[str]:
        if spec.mode is Mode.COLUMN:
            col = resolve(grid, spec.key).index
            return extract_column(grid, col, spec.ignore_empty_cells, rows)

        search = rows if rows is not None else RowRange(0, grid.row_count)
        if spec.mode is Mode.ROW:
            row = resolve(grid, spec.key, search_rows=True, rows=search).index
            return extract_row(grid, row, spec.ignore_empty_cells)

        col = resolve(grid, spec.key).index
        row = resolve(grid, spec.key2, search_rows=True, rows=search).index
        raw = extract_cell(grid, col, row)
        return [raw] if raw != "" or not spec.has_default else []

    def _bind_value(self, grid, spec, adapter, target, member, scope, path):
        values = self._raw_values(grid, spec, scope.rows)

        if spec.is_sequence:
            if not values and spec.has_default:
                adapter.set(target, member, list(spec.default))
                return
            converted = []
            for i, raw in enumerate(values):
                try:
                    converted.append(convert(raw, spec.kind))
                except SheetBindingError as exc:
                    self.record(f"{path}[{i}]", exc)
            adapter.set(target, member, converted)
            return

        if not values and spec.has_default:
            adapter.set(target, member, spec.default)
            return
        adapter.set(target, member, convert(first_value(values, spec.key), spec.kind))

    # -- nested members -----------------------------------------------------

    def _bind_block(self, grid, spec, adapter, target, member, scope, path):
        child = spec.schema
        if child.default_sheet not in (None, scope.sheet, grid.name):
            raise BlockStructureError(
                f"Block '{spec.key}' is read from sheet '{grid.name or scope.sheet}' "
                f"but its schema defaults to sheet '{child.default_sheet}'")

        delimiter = resolve(grid, spec.key).index
        rows = scope.rows if scope.rows is not None else grid.data_rows
        blocks = segment(grid, rows, delimiter)

        if not spec.is_sequence:
            if not blocks:
                raise NoValueFound(f"No '{spec.key}' block found")
            item = adapter.create(child.factory)
            self.bind_schema(child, item, _Scope(scope.sheet, blocks[0].rows), path)
            adapter.set(target, member, item)
            return

        adapter.set(target, member, [])
        for i, block in enumerate(blocks):
            item = adapter.create(child.factory)
            self.bind_schema(child, item, _Scope(scope.sheet, block.rows), f"{path}[{i}]")
            adapter.append(target, member, item)

    def _bind_sheet(self, spec, adapter, target, member, scope, path):
        item = adapter.get(target, member)
        if item is None:
            item = adapter.create(spec.schema.factory)
            adapter.set(target, member, item)
        self.bind_schema(spec.schema, item, _Scope(scope.sheet, None), path,
                         sheet_override=spec.sheet)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

class SchemaBinder:
    """Binds schemas against sheets from one fetcher.

    The binder keeps no per-call state, so one instance can serve
    concurrent binds as long as each call has its own destination.
    """

    def __init__(self, fetcher: SheetFetcher,
                 adapter: Optional[DestinationAdapter] = None):
        self.fetcher = fetcher
        self.adapter = adapter

    def spreadsheet_id_of(self, schema: Schema, destination: Any) -> Optional[str]:
        if not schema.spreadsheet_id:
            return None
        adapter = self.adapter or adapter_for(destination)
        return adapter.get(destination, schema.spreadsheet_id) or None

    def bind(self, schema: Schema, destination: Any = MISSING,
             spreadsheet_id: Optional[str] = None) -> BindResult:
        """Populate *destination* (a new ``schema.factory()`` by default).

        The document id is *spreadsheet_id* or, failing that, the value of
        the destination member named by ``schema.spreadsheet_id``.

        Raises:
            MissingSpreadsheetId: neither source yields a document id.
            SheetNotFound: a referenced sheet does not exist.
        """
        if destination is MISSING:
            destination = schema.factory()
        spreadsheet_id = spreadsheet_id or self.spreadsheet_id_of(schema, destination)
        if not spreadsheet_id:
            raise MissingSpreadsheetId(
                "No spreadsheet id given and the destination does not carry one")

        run = _BindRun(self.fetcher, spreadsheet_id, self.adapter)
        run.bind_schema(schema, destination, _Scope(None), "")
        logger.debug(f"Bound {len(schema)} members from {spreadsheet_id} "
                     f"with {len(run.errors)} errors")
        return BindResult(destination, run.errors)


def bind(source: Union[GridModel, SheetFetcher], schema: Schema,
         destination: Any = MISSING, spreadsheet_id: Optional[str] = None,
         adapter: Optional[DestinationAdapter] = None) -> BindResult:
    """Bind *schema* against a single grid or a fetcher.

    A bare :class:`GridModel` serves the schema's default sheet (and its
    own name); no spreadsheet id is needed in that case.
    """
    if isinstance(source, GridModel):
        fetcher = _SingleGrid(source, schema.default_sheet)
        spreadsheet_id = spreadsheet_id or source.name or "<grid>"
    else:
        fetcher = source
    return SchemaBinder(fetcher, adapter).bind(schema, destination, spreadsheet_id)
