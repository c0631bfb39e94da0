"""
Error taxonomy for the binding engine.

Per-member failures (header, value, enum, conversion and block structure
errors) are collected into :class:`BindError` records so that binding can
continue with the remaining members.  ``MissingSpreadsheetId`` and
``SheetNotFound`` leave nothing to bind against and are raised out of
``bind`` instead.
"""

from dataclasses import dataclass


class SheetBindingError(Exception):
    """Base class for every error raised by the binding engine."""


class HeaderNotFound(SheetBindingError):
    def __init__(self, key: str, search_rows: bool):
        where = "frozen columns" if search_rows else "frozen rows"
        super().__init__(f"Header '{key}' not found in {where}")
        self.key = key
        self.search_rows = search_rows


class CellOutOfRange(SheetBindingError):
    def __init__(self, row: int, col: int, row_count: int, col_count: int):
        super().__init__(
            f"Cell (row={row}, col={col}) is outside the "
            f"{row_count}x{col_count} grid"
        )
        self.row = row
        self.col = col


class NoValueFound(SheetBindingError):
    pass


class BlockStructureError(SheetBindingError):
    pass


class EnumValueNotFound(SheetBindingError):
    def __init__(self, raw: str, enum_type: type):
        names = ", ".join(enum_type.__members__)
        super().__init__(
            f"'{raw}' is not a member of {enum_type.__name__} ({names})"
        )
        self.raw = raw
        self.enum_type = enum_type


class ConversionError(SheetBindingError):
    pass


class MissingSpreadsheetId(SheetBindingError):
    pass


class SheetNotFound(SheetBindingError):
    def __init__(self, sheet_name, spreadsheet_id=None):
        super().__init__(f"Sheet '{sheet_name}' not found in '{spreadsheet_id}'")
        self.sheet_name = sheet_name
        self.spreadsheet_id = spreadsheet_id


@dataclass
class BindError:
    """A collected per-member failure.

    ``member`` is the dotted path of the destination member, e.g.
    ``questions[0].answers[2].correct``.
    """
    member: str
    error: SheetBindingError

    @property
    def kind(self) -> str:
        return type(self.error).__name__

    @property
    def message(self) -> str:
        return str(self.error)

    def __str__(self):
        return f"{self.member}: {self.kind}: {self.message}"
