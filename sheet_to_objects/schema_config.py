"""
YAML schema definitions.

Builds a :class:`Schema` tree from a declarative document, so a binding can
be authored without writing Python.  Destinations are plain dicts.

Example::

    default_sheet: Quiz
    flags:
      Loot: [Sword, Armor, Shield]
    members:
      title:
        cell: {column: Value, row: Title}
      questions:
        block: Question
        members:
          text: {column: Question}
          answers:
            block: Answer
            members:
              text: {column: Answer}
              correct: {column: Correct, type: bool, default: false}
      rewards: {column: Reward, type: Loot, many: true}

A member with ``members`` but no ``block`` is a nested object bound
against a whole sheet.
"""

import os
from enum import Enum, Flag
from typing import Any, Union

import yaml

from .schema import MISSING, BindingSpec, Block, Cell, Column, Row, Schema, SheetScope

_BUILTIN_KINDS = {
    "str": str, "text": str, "string": str,
    "int": int, "integer": int,
    "float": float, "number": float,
    "bool": bool, "boolean": bool,
}

_VALUE_OPTIONS = {"type", "many", "ignore_empty_cells", "default", "sheet"}
_NESTED_OPTIONS = {"many", "sheet", "default_sheet", "members"}


def _load_document(source) -> dict:
    if isinstance(source, dict):
        return source
    if not os.path.exists(source):
        raise FileNotFoundError(f"Schema file not found: {source}")
    with open(source, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _declare_enums(doc: dict) -> dict[str, type]:
    kinds: dict[str, type] = dict(_BUILTIN_KINDS)
    for name, members in (doc.get("enums") or {}).items():
        kinds[name] = Enum(name, list(members))
    for name, members in (doc.get("flags") or {}).items():
        kinds[name] = Flag(name, list(members))
    return kinds


def _check_options(path: str, spec: dict, allowed: set, mode_key: str):
    unknown = set(spec) - allowed - {mode_key}
    if unknown:
        raise ValueError(f"{path}: unknown option(s) {sorted(unknown)}")


def _value_spec(path: str, spec: dict, kinds: dict) -> BindingSpec:
    type_name = spec.get("type", "str")
    if type_name not in kinds:
        raise ValueError(f"{path}: unknown type '{type_name}'")
    common = {
        "kind": kinds[type_name],
        "default": spec.get("default", MISSING),
        "sheet": spec.get("sheet"),
    }

    if "cell" in spec:
        _check_options(path, spec, {"type", "default", "sheet"}, "cell")
        cell = spec["cell"]
        if not isinstance(cell, dict) or "column" not in cell or "row" not in cell:
            raise ValueError(f"{path}: cell needs 'column' and 'row' keys")
        return Cell(str(cell["column"]), str(cell["row"]), **common)

    builder, key = (Column, "column") if "column" in spec else (Row, "row")
    _check_options(path, spec, _VALUE_OPTIONS, key)
    return builder(str(spec[key]), many=bool(spec.get("many", False)),
                   ignore_empty_cells=bool(spec.get("ignore_empty_cells", True)),
                   **common)


def _member_spec(path: str, spec: Any, kinds: dict) -> BindingSpec:
    if not isinstance(spec, dict):
        raise ValueError(f"{path}: expected a mapping, got {type(spec).__name__}")

    modes = [k for k in ("column", "row", "cell", "block") if k in spec]
    if len(modes) > 1:
        raise ValueError(f"{path}: more than one binding mode {modes}")

    if "block" in spec:
        _check_options(path, spec, _NESTED_OPTIONS, "block")
        child = _schema(path, spec, kinds)
        return Block(str(spec["block"]), child, many=bool(spec.get("many", True)),
                     sheet=spec.get("sheet"))
    if not modes:
        if "members" not in spec:
            raise ValueError(f"{path}: no binding mode given")
        _check_options(path, spec, _NESTED_OPTIONS - {"many"}, "members")
        return SheetScope(_schema(path, spec, kinds), sheet=spec.get("sheet"))
    return _value_spec(path, spec, kinds)


def _schema(path: str, doc: dict, kinds: dict) -> Schema:
    schema = Schema(dict, default_sheet=doc.get("default_sheet"),
                    spreadsheet_id=doc.get("spreadsheet_id"))
    for member, spec in (doc.get("members") or {}).items():
        member_path = f"{path}.{member}" if path else str(member)
        schema.add(str(member), _member_spec(member_path, spec, kinds))
    return schema


def load_schema(source: Union[str, os.PathLike, dict]) -> Schema:
    """Build a schema from a YAML file path or an already-parsed dict."""
    doc = _load_document(source)
    return _schema("", doc, _declare_enums(doc))
