"""Shared builders for the test suite."""
from datetime import datetime, timedelta
from decimal import Decimal

import fitz

from dailylog_report.models import LogRecord

GENERATED_AT = datetime(2026, 10, 18, 20, 0)


def png_bytes(width: int, height: int) -> bytes:
    pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, width, height), False)
    pix.clear_with(180)
    return pix.tobytes("png")


def record(record_id, timestamp=None, category="activity", subcategory=None,
           note=None, amount=None, photo_bytes=None) -> LogRecord:
    if amount is not None:
        amount = Decimal(amount)
    return LogRecord(
        id=record_id,
        timestamp=timestamp,
        category=category,
        subcategory=subcategory,
        note=note,
        amount=amount,
        photo_bytes=photo_bytes,
    )


def same_day_records(count: int, day: datetime, note: str = "", prefix: str = "r") -> list:
    """count records on one day, newest first, a minute apart."""
    start = day.replace(hour=23, minute=0)
    return [
        record(f"{prefix}{i}", start - timedelta(minutes=i), category="meal",
               note=f"{note} entry {i}".strip())
        for i in range(count)
    ]


def page_texts(pdf_bytes: bytes) -> list:
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        return [page.get_text() for page in doc]
