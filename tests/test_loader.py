"""Tests for the JSON loader and command-line entry point."""
import json
import shutil
import tempfile
import unittest
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from dailylog_report.cli import main
from dailylog_report.exceptions import RecordLoadError
from dailylog_report.loader import load_records, parse_timestamp

from support import page_texts, png_bytes


class TestLoader(unittest.TestCase):
    """Test load_records."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def write(self, data, name="records.json") -> Path:
        path = self.temp_dir / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def test_loads_and_sorts_newest_first(self):
        (self.temp_dir / "photo.png").write_bytes(png_bytes(10, 10))
        path = self.write([
            {"id": 1, "timestamp": "2026-10-14T09:00:00", "category": "meal",
             "subcategory": "Breakfast"},
            {"id": 2, "category": "bath"},
            {"id": 3, "timestamp": "2026-10-15T08:00:00", "category": "purchase",
             "amount": "12.50", "photo": "photo.png"},
        ])
        records = load_records(path)

        self.assertEqual([r.id for r in records], ["3", "1", "2"])
        self.assertEqual(records[0].amount, Decimal("12.50"))
        self.assertEqual(records[0].timestamp, datetime(2026, 10, 15, 8, 0))
        self.assertTrue(records[0].photo_bytes)
        self.assertIsNone(records[2].timestamp)

    def test_accepts_records_key(self):
        path = self.write({"records": [{"id": "x"}]})
        self.assertEqual([r.id for r in load_records(path)], ["x"])

    def test_bad_timestamp_raises(self):
        path = self.write([{"id": 1, "timestamp": "yesterday-ish"}])
        with self.assertRaises(RecordLoadError):
            load_records(path)

    def test_missing_id_raises(self):
        path = self.write([{"category": "meal"}])
        with self.assertRaises(RecordLoadError):
            load_records(path)

    def test_missing_photo_raises(self):
        path = self.write([{"id": 1, "photo": "nope.jpg"}])
        with self.assertRaises(RecordLoadError):
            load_records(path)

    def test_invalid_json_raises(self):
        path = self.temp_dir / "broken.json"
        path.write_text("[{", encoding="utf-8")
        with self.assertRaises(RecordLoadError):
            load_records(path)

    def test_non_string_category_raises(self):
        path = self.write([{"id": 1, "category": 5}])
        with self.assertRaises(RecordLoadError) as ctx:
            load_records(path)
        self.assertIn("category", str(ctx.exception))

    def test_non_string_note_raises(self):
        path = self.write([{"id": 1, "note": ["a", "b"]}])
        with self.assertRaises(RecordLoadError):
            load_records(path)

    def test_trailing_z_is_utc(self):
        self.assertEqual(parse_timestamp("2026-10-18T09:00:00Z"),
                         datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc))

    def test_mixed_offsets_sort_by_instant(self):
        """Naive timestamps sort as UTC alongside offset and Z timestamps."""
        path = self.write([
            {"id": "offset", "timestamp": "2026-10-18T09:00:00+02:00"},
            {"id": "naive", "timestamp": "2026-10-18T08:00:00"},
            {"id": "zulu", "timestamp": "2026-10-18T10:00:00Z"},
        ])
        records = load_records(path)
        self.assertEqual([r.id for r in records], ["zulu", "naive", "offset"])
        self.assertEqual(records[0].timestamp.utcoffset().total_seconds(), 0)


class TestCli(unittest.TestCase):
    """Test the dailylog-report command."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_writes_pdf(self):
        records = self.temp_dir / "records.json"
        records.write_text(json.dumps([
            {"id": 1, "timestamp": "2026-10-18T09:00:00", "category": "doctor",
             "note": "Checkup went well"},
        ]), encoding="utf-8")
        output = self.temp_dir / "out" / "report.pdf"

        code = main([str(records), "-o", str(output), "--generated-at", "2026-10-18T20:00:00",
                     "--title", "Weekly Report"])

        self.assertEqual(code, 0)
        text = page_texts(output.read_bytes())[0]
        self.assertIn("WEEKLY REPORT", text)
        self.assertIn("Doctor Visit", text)
        self.assertIn("Today", text)

    def test_load_error_exits_nonzero(self):
        records = self.temp_dir / "records.json"
        records.write_text("not json", encoding="utf-8")
        code = main([str(records), "-o", str(self.temp_dir / "report.pdf")])
        self.assertEqual(code, 1)
        self.assertFalse((self.temp_dir / "report.pdf").exists())

    def test_wrong_field_type_exits_nonzero(self):
        records = self.temp_dir / "records.json"
        records.write_text(json.dumps([{"id": 1, "category": 5}]), encoding="utf-8")
        code = main([str(records), "-o", str(self.temp_dir / "report.pdf")])
        self.assertEqual(code, 1)
        self.assertFalse((self.temp_dir / "report.pdf").exists())


if __name__ == "__main__":
    unittest.main()
