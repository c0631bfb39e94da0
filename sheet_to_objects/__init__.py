"""Sheet-to-Objects binder.

Binds a grid of text cells (one spreadsheet sheet) to a typed object
graph described by a declarative :class:`Schema`:

  * **Column / Row / Cell** members read values under a header found in
    the frozen header rows or columns (exact, then case-insensitive, then
    whitespace-insensitive match).
  * **Block** members split rows into repeated records on a delimiter
    column, recursively, one nested instance per block.
  * Values are converted to ``str``/``int``/``float``/``bool``, enums and
    flag enums.

Failures local to one member are collected and returned alongside the
partially populated destination.
"""

from .adapters import AttributeAdapter, DestinationAdapter, MappingAdapter
from .binder import BindResult, SchemaBinder, bind
from .blocks import Block as RowBlock, segment
from .converter import convert, format_flag, parse_flag
from .errors import (
    BindError,
    BlockStructureError,
    CellOutOfRange,
    ConversionError,
    EnumValueNotFound,
    HeaderNotFound,
    MissingSpreadsheetId,
    NoValueFound,
    SheetBindingError,
    SheetNotFound,
)
from .grid import GridModel, RowRange, grid_from_dataframe, grid_from_worksheet
from .headers import ResolvedHeader, resolve
from .matching import MatchTier
from .schema import Block, Cardinality, Cell, Column, Mode, Row, Schema, SheetScope
from .schema_config import load_schema
from .sources import CsvFetcher, StaticFetcher, WorkbookFetcher

__all__ = [
    "AttributeAdapter",
    "BindError",
    "BindResult",
    "Block",
    "BlockStructureError",
    "Cardinality",
    "Cell",
    "CellOutOfRange",
    "Column",
    "ConversionError",
    "CsvFetcher",
    "DestinationAdapter",
    "EnumValueNotFound",
    "GridModel",
    "HeaderNotFound",
    "MappingAdapter",
    "MatchTier",
    "MissingSpreadsheetId",
    "Mode",
    "NoValueFound",
    "ResolvedHeader",
    "Row",
    "RowBlock",
    "RowRange",
    "Schema",
    "SchemaBinder",
    "SheetBindingError",
    "SheetNotFound",
    "SheetScope",
    "StaticFetcher",
    "WorkbookFetcher",
    "bind",
    "convert",
    "format_flag",
    "grid_from_dataframe",
    "grid_from_worksheet",
    "load_schema",
    "parse_flag",
    "resolve",
    "segment",
]
