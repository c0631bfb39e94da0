"""Tests for the grid model and cell normalisation."""

import datetime
import os
import sys
import unittest

import numpy as np
import pandas as pd

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sheet_to_objects.grid import (
    GridModel,
    RowRange,
    cell_to_text,
    grid_from_dataframe,
)


class TestCellToText(unittest.TestCase):
    def test_none_is_empty(self):
        self.assertEqual(cell_to_text(None), "")

    def test_integral_float_drops_fraction(self):
        self.assertEqual(cell_to_text(3.0), "3")
        self.assertEqual(cell_to_text(0.8), "0.8")

    def test_float_shows_displayed_digits(self):
        self.assertEqual(cell_to_text(0.1 + 0.2), "0.3")
        self.assertEqual(cell_to_text(np.float64(1) / 3), "0.333333333333333")

    def test_numpy_scalars(self):
        self.assertEqual(cell_to_text(np.int64(7)), "7")
        self.assertEqual(cell_to_text(np.float64(2.5)), "2.5")
        self.assertEqual(cell_to_text(np.nan), "")

    def test_bool(self):
        self.assertEqual(cell_to_text(True), "TRUE")
        self.assertEqual(cell_to_text(False), "FALSE")

    def test_dates(self):
        self.assertEqual(cell_to_text(datetime.date(2024, 3, 1)), "2024-03-01")


class TestRowRange(unittest.TestCase):
    def test_len_and_iter(self):
        rng = RowRange(2, 5)
        self.assertEqual(len(rng), 3)
        self.assertEqual(list(rng), [2, 3, 4])
        self.assertIn(4, rng)
        self.assertNotIn(5, rng)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            RowRange(3, 2)


class TestGridModel(unittest.TestCase):
    def setUp(self):
        self.grid = GridModel.from_rows(
            [["A", "B", "C"], ["1"], ["2", "x", "y"]], frozen_rows=1)

    def test_counts(self):
        self.assertEqual(self.grid.row_count, 3)
        self.assertEqual(self.grid.col_count, 3)

    def test_ragged_rows_read_as_empty(self):
        self.assertEqual(self.grid.cell(1, 2), "")
        self.assertEqual(self.grid.cell(10, 0), "")

    def test_data_rows_skip_header(self):
        self.assertEqual(self.grid.data_rows, RowRange(1, 3))

    def test_frozen_rows_beyond_grid(self):
        grid = GridModel.from_rows([["only"]], frozen_rows=5)
        self.assertEqual(len(grid.data_rows), 0)

    def test_negative_frozen_counts_rejected(self):
        with self.assertRaises(ValueError):
            GridModel.from_rows([], frozen_rows=-1)

    def test_values_are_normalised(self):
        grid = GridModel.from_rows([[1, None, 2.0]])
        self.assertEqual(grid.rows, (("1", "", "2"),))

    def test_in_bounds(self):
        self.assertTrue(self.grid.in_bounds(2, 2))
        self.assertFalse(self.grid.in_bounds(3, 0))
        self.assertFalse(self.grid.in_bounds(0, 3))


class TestGridFromDataFrame(unittest.TestCase):
    def test_header_becomes_frozen_row(self):
        df = pd.DataFrame({"Name": ["a", "b"], "Score": [1, np.nan]})
        grid = grid_from_dataframe(df, name="Scores")
        self.assertEqual(grid.frozen_rows, 1)
        self.assertEqual(grid.rows[0], ("Name", "Score"))
        self.assertEqual(grid.rows[1], ("a", "1"))
        self.assertEqual(grid.rows[2], ("b", ""))
        self.assertEqual(grid.name, "Scores")

    def test_without_header(self):
        df = pd.DataFrame([["x", "y"]])
        grid = grid_from_dataframe(df, include_header=False)
        self.assertEqual(grid.frozen_rows, 0)
        self.assertEqual(grid.rows, (("x", "y"),))


if __name__ == "__main__":
    unittest.main()
