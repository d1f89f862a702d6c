"""Per-category counts and the summary grid."""

from collections import Counter
from typing import Iterable, List

from .cursor import PageCursor
from .drawing import add_text, draw_glyph
from .geometry import COLORS, FONTS, GLYPH_SPACE
from .models import CategoryCount, LogCategory, LogRecord


class CategorySummaryBuilder:

    def __init__(self, columns: int):
        self.columns = columns

    def summarize(self, records: Iterable[LogRecord]) -> List[CategoryCount]:
        """Counts in canonical category order, unknown bucket last, zeros dropped."""
        counts = Counter(record.known_category for record in records)
        entries = [CategoryCount(category, counts[category])
                   for category in LogCategory if counts[category] > 0]
        if counts[None] > 0:
            entries.append(CategoryCount(None, counts[None]))
        return entries

    def rows(self, entries: List[CategoryCount]) -> List[List[CategoryCount]]:
        """Row-major grid, last row may be partial."""
        return [entries[i:i + self.columns] for i in range(0, len(entries), self.columns)]

    def draw(self, cursor: PageCursor, entries: List[CategoryCount]):
        geometry = cursor.geometry
        font = FONTS["summary"]
        cell_width = geometry.content_width / self.columns
        row_height = geometry.summary_row_height

        for row in self.rows(entries):
            cursor.ensure_space(row_height)
            top = cursor.place("summary_row", row_height)
            for col, entry in enumerate(row):
                x = geometry.content_left + col * cell_width
                draw_glyph(cursor.page, x, top + row_height / 2, entry.color)
                add_text(cursor.page, f"{entry.label}: {entry.count}",
                         x + GLYPH_SPACE, top + (row_height - font.size) / 2 - 1,
                         font, COLORS["text"])
