"""
Top-level report composition.

Builds the whole document in one pass: title block, category summary,
then the day-grouped timeline table. All layout state lives in objects
created inside render(), so concurrent renders share nothing.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

import fitz

from .cursor import PageCursor, Placement
from .drawing import add_lines, add_text, draw_rule
from .geometry import COLORS, FONTS, FOOTER_OFFSET, FontSpec, PageGeometry
from .grouping import DayGrouper, count_untimed, format_long_date
from .models import CategoryCount, DayGroup, LogRecord, timestamp_key
from .summary import CategorySummaryBuilder
from .table import TableRenderer
from .text import TextMeasurer

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Parenting Activity Report"
PRODUCER = "dailylog-report"

# Vertical spacing
TITLE_GAP = 8
META_GAP = 4
RULE_BLOCK = 32         # Rule drawn in the middle of this band
SECTION_GAP = 10
GROUP_GAP = 12


@dataclass
class RenderedReport:
    pdf_bytes: bytes
    page_count: int
    placements: List[Placement] = field(default_factory=list)
    groups: List[DayGroup] = field(default_factory=list)
    summary: List[CategoryCount] = field(default_factory=list)
    untimed_count: int = 0
    truncated_rows: List[str] = field(default_factory=list)

    def placements_on(self, page_index: int) -> List[Placement]:
        return [p for p in self.placements if p.page_index == page_index]

    def rows(self) -> List[Placement]:
        return [p for p in self.placements if p.kind == "row"]


class ReportComposer:

    def __init__(self, geometry: Optional[PageGeometry] = None, title: str = DEFAULT_TITLE):
        self.geometry = geometry or PageGeometry()
        self.title = title

    def compose(self, records: Iterable[LogRecord], generated_at: datetime) -> bytes:
        return self.render(records, generated_at).pdf_bytes

    def render(self, records: Iterable[LogRecord], generated_at: datetime) -> RenderedReport:
        """Lay out and serialise the report.

        Records must already be sorted newest first; they are not re-sorted.
        generated_at drives the metadata line and the Today/Yesterday labels.
        """
        records = list(records)
        doc = fitz.open()
        cursor = PageCursor(doc, self.geometry)
        measurer = TextMeasurer()

        cursor.begin_page()

        untimed = count_untimed(records)
        if untimed:
            logger.warning("%d record(s) have no timestamp and are left out of the timeline", untimed)
        self._draw_title_block(cursor, measurer, records, generated_at, untimed)
        self._draw_separator(cursor)

        summary_builder = CategorySummaryBuilder(self.geometry.summary_columns)
        summary = summary_builder.summarize(records)
        self._draw_block(cursor, measurer, "section", "Summary", FONTS["section"], gap=SECTION_GAP)
        self._draw_block(cursor, measurer, "meta", f"Total Activities: {len(records)}",
                         FONTS["body"], gap=META_GAP * 2)
        summary_builder.draw(cursor, summary)
        self._draw_separator(cursor)

        self._draw_block(cursor, measurer, "section", "Timeline", FONTS["section"], gap=SECTION_GAP)
        groups = DayGrouper(generated_at.date()).group(records)
        table = TableRenderer(cursor, measurer)
        if not groups:
            self._draw_block(cursor, measurer, "notice", "No activities recorded.",
                             FONTS["meta"], COLORS["muted"])
        for group in groups:
            table.render_group(group)
            cursor.skip(GROUP_GAP)

        self._draw_footers(doc, measurer)
        self._set_metadata(doc, generated_at)
        pdf_bytes = doc.tobytes(garbage=3, deflate=True, no_new_id=True)
        page_count = len(doc)
        doc.close()

        logger.info("Rendered %d record(s) in %d day group(s) onto %d page(s)",
                    len(records) - untimed, len(groups), page_count)
        return RenderedReport(
            pdf_bytes=pdf_bytes,
            page_count=page_count,
            placements=list(cursor.placements),
            groups=groups,
            summary=summary,
            untimed_count=untimed,
            truncated_rows=list(table.truncated_rows),
        )

    # -------------------------------------------------------------------------
    # Blocks
    # -------------------------------------------------------------------------

    def _draw_block(self, cursor: PageCursor, measurer: TextMeasurer, kind: str,
                    text: str, font: FontSpec, color: Tuple = COLORS["text"], gap: float = 0):
        """Full-width wrapped text followed by `gap`."""
        g = self.geometry
        lines = measurer.wrap(text, font, g.content_width)
        height = len(lines) * measurer.line_height(font)
        cursor.ensure_space(height)
        top = cursor.place(kind, height, label=text)
        add_lines(cursor.page, lines, g.content_left, top, font, color)
        cursor.skip(gap)

    def _draw_separator(self, cursor: PageCursor):
        cursor.ensure_space(RULE_BLOCK)
        top = cursor.place("rule", RULE_BLOCK)
        draw_rule(cursor.page, self.geometry, top + RULE_BLOCK / 2)

    def _draw_title_block(self, cursor: PageCursor, measurer: TextMeasurer,
                          records: List[LogRecord], generated_at: datetime, untimed: int):
        self._draw_block(cursor, measurer, "title", self.title.upper(), FONTS["title"],
                         gap=TITLE_GAP)
        self._draw_block(cursor, measurer, "meta", f"Generated: {format_long_date(generated_at)}",
                         FONTS["meta"], COLORS["muted"], gap=META_GAP)

        period = date_range(records)
        if period is not None:
            oldest, newest = period
            self._draw_block(cursor, measurer, "meta",
                             f"Period: {format_long_date(oldest)} - {format_long_date(newest)}",
                             FONTS["meta"], COLORS["muted"], gap=META_GAP)
        if untimed:
            noun = "entry" if untimed == 1 else "entries"
            self._draw_block(cursor, measurer, "notice",
                             f"{untimed} {noun} without a timestamp omitted from the timeline.",
                             FONTS["meta"], COLORS["muted"], gap=META_GAP)

    def _draw_footers(self, doc: fitz.Document, measurer: TextMeasurer):
        font = FONTS["footer"]
        total = len(doc)
        for page in doc:
            text = f"Page {page.number + 1} of {total}"
            x = (self.geometry.page_width - measurer.text_width(text, font)) / 2
            add_text(page, text, x, self.geometry.page_height - FOOTER_OFFSET - font.size,
                     font, COLORS["muted"])

    def _set_metadata(self, doc: fitz.Document, generated_at: datetime):
        stamp = f"D:{generated_at:%Y%m%d%H%M%S}"
        doc.set_metadata({
            "title": self.title,
            "creator": PRODUCER,
            "producer": PRODUCER,
            "creationDate": stamp,
            "modDate": stamp,
        })


def date_range(records: Iterable[LogRecord]) -> Optional[Tuple[datetime, datetime]]:
    """(oldest, newest) over records that have a timestamp."""
    stamps = [record.timestamp for record in records if record.timestamp is not None]
    if not stamps:
        return None
    return min(stamps, key=timestamp_key), max(stamps, key=timestamp_key)


def render_report(records: Iterable[LogRecord], generated_at: datetime,
                  geometry: Optional[PageGeometry] = None,
                  title: str = DEFAULT_TITLE) -> RenderedReport:
    return ReportComposer(geometry, title).render(records, generated_at)


def compose(records: Iterable[LogRecord], generated_at: datetime,
            geometry: Optional[PageGeometry] = None,
            title: str = DEFAULT_TITLE) -> bytes:
    """Render records (newest first) to PDF bytes."""
    return ReportComposer(geometry, title).compose(records, generated_at)
