"""Tests for header resolution and the three-tier name matching."""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sheet_to_objects.errors import HeaderNotFound
from sheet_to_objects.grid import GridModel, RowRange
from sheet_to_objects.headers import header_names, resolve
from sheet_to_objects.matching import MatchTier, find_match


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def settings_grid():
    return GridModel.from_rows(
        [
            ["Setting", "HardcoreMode", "Sound Volume"],
            ["Player", "TRUE", "0.5"],
            ["Music", "", "0.9"],
        ],
        frozen_rows=1,
        frozen_cols=1,
    )


# ---------------------------------------------------------------------------
# find_match
# ---------------------------------------------------------------------------

def test_exact_match_is_first_tier():
    assert find_match(enumerate(["Name", "name"]), "name") == (1, MatchTier.EXACT)


def test_exact_beats_lower_index_case_insensitive():
    # "name" at index 0 only matches case-insensitively; exact wins
    assert find_match(enumerate(["name", "Name"]), "Name") == (1, MatchTier.EXACT)


def test_tie_within_tier_takes_lowest_index():
    found = find_match(enumerate(["x", "NAME", "Name "]), "name")
    assert found == (1, MatchTier.CASE_INSENSITIVE)


def test_whitespace_tier_only_after_others_fail():
    found = find_match(enumerate(["Sound Volume"]), "SoundVolume")
    assert found == (0, MatchTier.WHITESPACE_INSENSITIVE)


def test_no_match():
    assert find_match(enumerate(["a", "b"]), "c") is None


# ---------------------------------------------------------------------------
# resolve
# ---------------------------------------------------------------------------

def test_column_header_case_insensitive(settings_grid):
    resolved = resolve(settings_grid, "hardcoremode")
    assert resolved.index == 1
    assert resolved.tier is MatchTier.CASE_INSENSITIVE


def test_column_header_whitespace_insensitive(settings_grid):
    resolved = resolve(settings_grid, "s Ou n D vo Lu mE")
    assert resolved.index == 2
    assert resolved.tier is MatchTier.WHITESPACE_INSENSITIVE


def test_column_header_exact(settings_grid):
    resolved = resolve(settings_grid, "Sound Volume")
    assert resolved.index == 2
    assert resolved.tier is MatchTier.EXACT


def test_row_header_search_uses_frozen_columns(settings_grid):
    resolved = resolve(settings_grid, "music", search_rows=True)
    assert resolved.index == 2
    assert resolved.tier is MatchTier.CASE_INSENSITIVE


def test_row_header_restricted_to_range(settings_grid):
    with pytest.raises(HeaderNotFound):
        resolve(settings_grid, "Music", search_rows=True, rows=RowRange(0, 2))


def test_data_cells_are_not_headers(settings_grid):
    # "0.5" lives below the frozen rows, so it is never a column header
    with pytest.raises(HeaderNotFound) as excinfo:
        resolve(settings_grid, "0.5")
    assert excinfo.value.key == "0.5"


def test_no_frozen_rows_means_no_column_headers():
    grid = GridModel.from_rows([["Name"], ["x"]], frozen_rows=0)
    with pytest.raises(HeaderNotFound):
        resolve(grid, "Name")


def test_multiple_frozen_rows_are_searched():
    grid = GridModel.from_rows(
        [["Group", "", ""], ["", "Low", "High"], ["a", "1", "2"]],
        frozen_rows=2,
    )
    assert resolve(grid, "High").index == 2
    assert resolve(grid, "group").index == 0


def test_header_names(settings_grid):
    assert header_names(settings_grid) == ["Setting", "HardcoreMode", "Sound Volume"]
