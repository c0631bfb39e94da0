"""Tests for YAML schema definitions."""

import os
import sys
import textwrap

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sheet_to_objects.binder import bind
from sheet_to_objects.grid import GridModel
from sheet_to_objects.schema import Cardinality, Mode
from sheet_to_objects.schema_config import load_schema

SCHEMA_YAML = textwrap.dedent("""\
    default_sheet: Quiz
    spreadsheet_id: document
    enums:
      Level: [Easy, Hard]
    flags:
      Loot: [Sword, Armor, Shield]
    members:
      title:
        cell: {column: Answer, row: Title}
      questions:
        block: Question
        members:
          text: {column: Question}
          level: {column: Level, type: Level, default: null}
          answers:
            block: Answer
            members:
              text: {column: Answer}
              correct: {column: Correct, type: bool, default: false}
              loot: {column: Loot, type: Loot, many: true}
    """)

GRID = GridModel.from_rows(
    [
        ["Question", "Answer", "Correct", "Level", "Loot"],
        ["Title", "Metals", "", "", ""],
        ["Lightest metal?", "Aluminium", "Yes", "easy", "Sword | Armor"],
        ["", "Iron", "", "", ""],
        ["Nearest planet?", "Mercury", "yes", "", "Shield"],
    ],
    frozen_rows=2,
    frozen_cols=1,
    name="Quiz",
)


@pytest.fixture
def schema_path(tmp_path):
    path = tmp_path / "schema.yaml"
    path.write_text(SCHEMA_YAML, encoding="utf-8")
    return str(path)


def test_load_schema_tree(schema_path):
    schema = load_schema(schema_path)
    assert schema.default_sheet == "Quiz"
    assert schema.spreadsheet_id == "document"
    assert list(schema.members) == ["title", "questions"]

    questions = schema.members["questions"]
    assert questions.mode is Mode.BLOCK
    assert questions.cardinality is Cardinality.SEQUENCE
    answers = questions.schema.members["answers"]
    assert answers.key == "Answer"
    assert answers.schema.members["correct"].kind is bool
    assert answers.schema.members["loot"].is_sequence


def test_bind_with_yaml_schema(schema_path):
    schema = load_schema(schema_path)
    data = bind(GRID, schema).destination

    assert data["title"] == "Metals"
    assert [q["text"] for q in data["questions"]] == ["Lightest metal?", "Nearest planet?"]

    metals = data["questions"][0]
    assert metals["level"].name == "Easy"
    assert [a["correct"] for a in metals["answers"]] == [True, False]
    loot_type = schema.members["questions"].schema.members["answers"].schema.members["loot"].kind
    assert metals["answers"][0]["loot"] == [loot_type.Sword | loot_type.Armor]
    assert metals["answers"][1]["loot"] == []

    planet = data["questions"][1]
    assert planet["level"] is None
    assert planet["answers"][0]["correct"] is True


def test_enum_and_flag_types_are_declared(schema_path):
    schema = load_schema(schema_path)
    answer = schema.members["questions"].schema.members["answers"].schema
    loot_type = answer.members["loot"].kind
    assert [m.name for m in loot_type] == ["Sword", "Armor", "Shield"]


def test_load_from_dict():
    schema = load_schema({"members": {"name": {"row": "Name", "many": True}}})
    spec = schema.members["name"]
    assert spec.mode is Mode.ROW
    assert spec.is_sequence


@pytest.mark.parametrize("doc, message", [
    ({"members": {"x": {"column": "A", "row": "B"}}}, "more than one"),
    ({"members": {"x": {"column": "A", "type": "decimal"}}}, "unknown type"),
    ({"members": {"x": {"column": "A", "colour": "red"}}}, "unknown option"),
    ({"members": {"x": {"cell": {"column": "A"}}}}, "needs 'column' and 'row'"),
    ({"members": {"x": {"type": "int"}}}, "no binding mode"),
    ({"members": {"x": "A"}}, "expected a mapping"),
])
def test_invalid_schemas(doc, message):
    with pytest.raises(ValueError, match=message):
        load_schema(doc)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_schema(str(tmp_path / "nope.yaml"))

