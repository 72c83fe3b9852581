from __future__ import annotations

import math
import unittest
from fractions import Fraction
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from records_tui.formatting import entity_title, format_cell, readable_message, truncate  # noqa: E402
from records_tui.layout import compute_column_widths, natural_widths, table_width  # noqa: E402

HEADERS = ["Name", "City"]
ROWS = [["Acme", "Leeds"]]


class ColumnWidthTests(unittest.TestCase):
    def test_natural_widths_include_padding(self):
        self.assertEqual(natural_widths(HEADERS, ROWS), [6, 7])

    def test_wide_terminal_caps_growth(self):
        self.assertEqual(compute_column_widths(HEADERS, ROWS, 80), [7, 8])

    def test_unknown_width_uses_default(self):
        self.assertEqual(compute_column_widths(HEADERS, ROWS, None), [7, 8])

    def test_exact_fit(self):
        self.assertEqual(compute_column_widths(HEADERS, ROWS, 14), [6, 7])

    def test_narrow_terminal_shrinks_proportionally(self):
        self.assertEqual(compute_column_widths(HEADERS, ROWS, 8), [3, 3])

    def test_shrink_is_exact_floor(self):
        self.assertEqual(compute_column_widths(["x" * 11, "y" * 24], [], 46), [15, 30])

    def test_width_properties_across_terminals(self):
        headers = ["x" * 11, "y" * 24, "Email"]
        rows = [["Acme Holdings", "someone@example.com", "a@b.c"]]
        natural = natural_widths(headers, rows)
        total = sum(natural)
        for terminal in range(10, 260):
            available = terminal - (len(headers) - 1)
            widths = compute_column_widths(headers, rows, terminal)
            adjustment = min(Fraction(6, 5), Fraction(available, total))
            self.assertEqual(widths, [max(0, math.floor(w * adjustment)) for w in natural], terminal)
            self.assertLessEqual(sum(widths), max(0, available), terminal)
            for w, n in zip(widths, natural):
                self.assertLessEqual(w * 5, n * 6, terminal)

    def test_no_columns(self):
        self.assertEqual(compute_column_widths([], [], 80), [])

    def test_table_width_counts_dividers(self):
        self.assertEqual(table_width([7, 8]), 16)
        self.assertEqual(table_width([]), 0)


class CellFormattingTests(unittest.TestCase):
    def test_pads_short_values(self):
        self.assertEqual(format_cell("Acme", 7), " Acme  ")

    def test_truncates_with_ellipsis(self):
        cell = format_cell("Leeds City", 8)
        self.assertEqual(cell, " Leeds… ")
        self.assertEqual(len(cell), 8)

    def test_tiny_width(self):
        self.assertEqual(format_cell("abc", 1), " ")
        self.assertEqual(format_cell("abc", 0), "")

    def test_truncate(self):
        self.assertEqual(truncate("abcdef", 4), "abc…")
        self.assertEqual(truncate("abc", 3), "abc")
        self.assertEqual(truncate("abc", 0), "")


class MessageTests(unittest.TestCase):
    def test_readable_message_breaks_sentences(self):
        self.assertEqual(readable_message("Bad request. Check input."), "Bad request.\nCheck input.")

    def test_entity_title(self):
        self.assertEqual(entity_title("Account"), "Accounts")
        self.assertEqual(entity_title("Records"), "Records")


if __name__ == "__main__":
    unittest.main()
