"""
Declarative binding schemas.

A :class:`Schema` maps destination member ids to :class:`BindingSpec`
values in declaration order.  Specs are normally written with the builder
functions that mirror the sheet vocabulary::

    answer = Schema(Answer, {
        "text": Column("Answer"),
        "correct": Column("Correct", kind=bool, default=False),
    })
    question = Schema(Question, {
        "text": Column("Question"),
        "answers": Block("Answer", answer),
    })
    quiz = Schema(Quiz, {"questions": Block("Question", question)},
                  default_sheet="Quiz", spreadsheet_id="document")

Block and sheet-scope specs own a child schema, so nesting depth is
exactly the depth of the declared schema tree.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator, Mapping, Optional, Union


class _Missing:
    def __repr__(self):
        return "MISSING"

    def __bool__(self):
        return False


MISSING = _Missing()


class Mode(Enum):
    COLUMN = "column"
    ROW = "row"
    CELL = "cell"
    BLOCK = "block"
    SHEET = "sheet"


class Cardinality(Enum):
    SCALAR = "scalar"
    SEQUENCE = "sequence"


_KEYED = (Mode.COLUMN, Mode.ROW, Mode.CELL, Mode.BLOCK)
_NESTED = (Mode.BLOCK, Mode.SHEET)


@dataclass(frozen=True)
class BindingSpec:
    """How one destination member maps to grid data.

    ``key`` is the column key (Column, Cell), the row key (Row) or the
    delimiter column key (Block).  ``key2`` is the row key of a Cell.
    """
    mode: Mode
    key: Optional[str] = None
    key2: Optional[str] = None
    ignore_empty_cells: bool = True
    cardinality: Cardinality = Cardinality.SCALAR
    kind: Any = str
    default: Any = MISSING
    sheet: Optional[str] = None
    schema: Optional["Schema"] = None

    def __post_init__(self):
        if self.mode in _KEYED and not self.key:
            raise ValueError(f"{self.mode.name.title()} binding needs a key")
        if self.mode is Mode.CELL:
            if not self.key2:
                raise ValueError("Cell binding needs both a column and a row key")
            if self.cardinality is not Cardinality.SCALAR:
                raise ValueError("Cell binding is always scalar")
        if self.mode in _NESTED and self.schema is None:
            raise ValueError(f"{self.mode.name.title()} binding needs a child schema")

    @property
    def is_sequence(self) -> bool:
        return self.cardinality is Cardinality.SEQUENCE

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING


def _cardinality(many: bool) -> Cardinality:
    return Cardinality.SEQUENCE if many else Cardinality.SCALAR


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def Column(key: str, kind: Any = str, many: bool = False,
           ignore_empty_cells: bool = True, default: Any = MISSING,
           sheet: Optional[str] = None) -> BindingSpec:
    """Values below the column header *key*."""
    return BindingSpec(Mode.COLUMN, key, None, ignore_empty_cells,
                       _cardinality(many), kind, default, sheet)


def Row(key: str, kind: Any = str, many: bool = False,
        ignore_empty_cells: bool = True, default: Any = MISSING,
        sheet: Optional[str] = None) -> BindingSpec:
    """Values right of the row header *key*."""
    return BindingSpec(Mode.ROW, key, None, ignore_empty_cells,
                       _cardinality(many), kind, default, sheet)


def Cell(column_key: str, row_key: str, kind: Any = str,
         default: Any = MISSING, sheet: Optional[str] = None) -> BindingSpec:
    """The single cell where *column_key* and *row_key* intersect."""
    return BindingSpec(Mode.CELL, column_key, row_key, True,
                       Cardinality.SCALAR, kind, default, sheet)


def Block(delimiter_key: str, schema: "Schema", many: bool = True,
          sheet: Optional[str] = None) -> BindingSpec:
    """One nested instance per block delimited by column *delimiter_key*."""
    return BindingSpec(Mode.BLOCK, delimiter_key, None, True,
                       _cardinality(many), None, MISSING, sheet, schema)


def SheetScope(schema: "Schema", sheet: Optional[str] = None) -> BindingSpec:
    """A nested instance bound against the whole of a sheet."""
    return BindingSpec(Mode.SHEET, None, None, True, Cardinality.SCALAR,
                       None, MISSING, sheet, schema)


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

MemberSpecs = Union[Mapping[str, BindingSpec], list[tuple[str, BindingSpec]]]


class Schema:
    """Binding metadata for one destination shape.

    Args:
        factory: Callable creating a fresh destination instance; used for
            block elements and sheet-scope members.
        members: Member id -> spec, in binding order.
        default_sheet: Sheet used by members without their own ``sheet``.
            Nested schemas without one inherit the enclosing sheet.
        spreadsheet_id: Member of the destination that holds the document
            id when none is passed to ``bind``.
    """

    def __init__(self, factory: Callable[[], Any] = dict,
                 members: Optional[MemberSpecs] = None,
                 default_sheet: Optional[str] = None,
                 spreadsheet_id: Optional[str] = None):
        self.factory = factory
        self.members: dict[str, BindingSpec] = dict(members or {})
        self.default_sheet = default_sheet
        self.spreadsheet_id = spreadsheet_id

    def add(self, member: str, spec: BindingSpec) -> "Schema":
        if member in self.members:
            raise ValueError(f"Member '{member}' is already bound")
        self.members[member] = spec
        return self

    def __iter__(self) -> Iterator[tuple[str, BindingSpec]]:
        return iter(self.members.items())

    def __len__(self):
        return len(self.members)

    def __repr__(self):
        name = getattr(self.factory, "__name__", repr(self.factory))
        return f"Schema({name}, members={list(self.members)})"
