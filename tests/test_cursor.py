"""Tests for the page cursor."""
import unittest

import fitz

from dailylog_report.cursor import PageCursor
from dailylog_report.geometry import PageGeometry


class TestPageCursor(unittest.TestCase):
    """Test PageCursor page-break arithmetic."""

    def setUp(self):
        self.doc = fitz.open()
        self.geometry = PageGeometry()
        self.cursor = PageCursor(self.doc, self.geometry)

    def tearDown(self):
        self.doc.close()

    def test_begin_page_resets_to_top_margin(self):
        self.cursor.begin_page()
        self.cursor.skip(300)
        self.cursor.begin_page()
        self.assertEqual(self.cursor.y, self.geometry.top)
        self.assertEqual(self.cursor.page_count, 2)
        self.assertEqual(self.cursor.page_index, 1)
        self.assertEqual(self.cursor.page.rect, fitz.Rect(0, 0, 612, 792))

    def test_ensure_space_opens_first_page(self):
        self.assertTrue(self.cursor.ensure_space(10))
        self.assertEqual(self.cursor.page_count, 1)

    def test_ensure_space_no_break_when_it_fits(self):
        self.cursor.begin_page()
        self.cursor.place("row", 100)
        self.assertFalse(self.cursor.ensure_space(self.cursor.remaining()))
        self.assertEqual(self.cursor.page_count, 1)

    def test_ensure_space_breaks_when_it_does_not_fit(self):
        self.cursor.begin_page()
        self.cursor.place("row", 600)
        self.assertTrue(self.cursor.ensure_space(self.cursor.remaining() + 1))
        self.assertEqual(self.cursor.page_count, 2)
        self.assertEqual(self.cursor.y, self.geometry.top)

    def test_fresh_page_is_never_abandoned(self):
        self.cursor.begin_page()
        self.assertFalse(self.cursor.ensure_space(self.geometry.printable_height * 2))
        self.assertEqual(self.cursor.page_count, 1)

    def test_place_records_and_advances(self):
        self.cursor.begin_page()
        top = self.cursor.place("header", 18)
        self.assertEqual(top, self.geometry.top)
        self.assertEqual(self.cursor.y, self.geometry.top + 18)
        placement = self.cursor.placements[-1]
        self.assertEqual((placement.kind, placement.page_index), ("header", 0))
        self.assertEqual(placement.bottom, self.geometry.top + 18)


class TestPageGeometry(unittest.TestCase):

    def test_letter_defaults(self):
        geometry = PageGeometry()
        self.assertEqual((geometry.page_width, geometry.page_height), (612, 792))
        self.assertEqual(geometry.content_width, sum(geometry.column_widths))
        self.assertEqual(geometry.bottom, 742)
        self.assertEqual(geometry.column_offsets[0], geometry.content_left)
        self.assertEqual(geometry.column_offsets[3], 50 + 64 + 112 + 120)

    def test_column_widths_must_fill_content(self):
        with self.assertRaises(ValueError):
            PageGeometry(column_widths=(50, 50, 50, 50))

    def test_summary_columns_positive(self):
        with self.assertRaises(ValueError):
            PageGeometry(summary_columns=0)


if __name__ == "__main__":
    unittest.main()
