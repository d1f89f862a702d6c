"""The four-column timeline table: time / activity / details / notes."""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import fitz

from .cursor import PageCursor
from .drawing import add_lines, add_text, draw_glyph, fill_band
from .geometry import COLORS, COLUMN_TITLES, FONTS, GLYPH_SPACE
from .grouping import format_time
from .models import DayGroup, LogRecord, details_text
from .text import TextMeasurer

logger = logging.getLogger(__name__)

COLUMN_FONTS = (FONTS["cell"], FONTS["activity"], FONTS["cell"], FONTS["note"])
COLUMN_COLORS = (COLORS["muted"], COLORS["text"], COLORS["text"], COLORS["note"])

NOTES = 3


@dataclass(frozen=True)
class Thumbnail:
    data: bytes
    width: float
    height: float


@dataclass
class TableRowLayout:
    """Wrapped cell lines and total height for one record."""

    record: LogRecord
    cells: List[List[str]]
    thumbnail: Optional[Thumbnail]
    height: float
    truncated: bool = False


class TableRenderer:
    """Draws day groups as table rows, breaking pages through the cursor."""

    def __init__(self, cursor: PageCursor, measurer: TextMeasurer):
        self.cursor = cursor
        self.measurer = measurer
        self.geometry = cursor.geometry
        self.truncated_rows: List[str] = []

    # -------------------------------------------------------------------------
    # Row layout
    # -------------------------------------------------------------------------

    def decode_thumbnail(self, photo_bytes: Optional[bytes]) -> Optional[Thumbnail]:
        """Scale the photo to fit the thumbnail box; None if absent or unreadable."""
        if not photo_bytes:
            return None
        try:
            pix = fitz.Pixmap(photo_bytes)
        except Exception as e:
            logger.warning("Skipping undecodable photo (%d bytes): %s", len(photo_bytes), e)
            return None
        if pix.width <= 0 or pix.height <= 0:
            return None

        box = self.geometry.thumbnail_max_dim
        scale = min(1.0, box / pix.width, box / pix.height)
        return Thumbnail(photo_bytes, pix.width * scale, pix.height * scale)

    def text_widths(self, thumbnail: Optional[Thumbnail]) -> Tuple[float, ...]:
        """Room for text in each column after padding, glyph and thumbnail."""
        pad = self.geometry.cell_padding
        widths = [w - 2 * pad for w in self.geometry.column_widths]
        widths[1] -= GLYPH_SPACE
        if thumbnail is not None:
            widths[NOTES] -= thumbnail.width + self.geometry.thumbnail_gap
        return tuple(widths)

    def max_row_height(self) -> float:
        """Tallest row that still fits a fresh page under the sticky chrome."""
        g = self.geometry
        return g.printable_height - g.day_bar_height - g.header_row_height

    def layout_row(self, record: LogRecord) -> TableRowLayout:
        texts = (
            format_time(record.timestamp),
            record.kind.info.label,
            details_text(record),
            (record.note or "").strip(),
        )
        thumbnail = self.decode_thumbnail(record.photo_bytes)
        widths = self.text_widths(thumbnail)
        cells = [self.measurer.wrap(text, font, width)
                 for text, font, width in zip(texts, COLUMN_FONTS, widths)]

        pad = self.geometry.cell_padding
        thumb_height = self.geometry.thumbnail_max_dim if thumbnail else 0
        content = max([self._cell_height(lines, font) for lines, font in zip(cells, COLUMN_FONTS)]
                      + [thumb_height])

        truncated = False
        room = self.max_row_height() - 2 * pad
        if content > room:
            truncated = True
            for col, font in enumerate(COLUMN_FONTS):
                max_lines = math.floor(room / self.measurer.line_height(font))
                cells[col] = self.measurer.truncate(cells[col], max_lines, font, widths[col])
            content = max([self._cell_height(lines, font) for lines, font in zip(cells, COLUMN_FONTS)]
                          + [thumb_height])
            logger.warning("Row %s is taller than a page; text cut to %.0fpt", record.id, content)

        return TableRowLayout(record, cells, thumbnail, content + 2 * pad, truncated)

    def _cell_height(self, lines: List[str], font) -> float:
        return len(lines) * self.measurer.line_height(font)

    # -------------------------------------------------------------------------
    # Chrome
    # -------------------------------------------------------------------------

    def draw_day_bar(self, label: str):
        g = self.geometry
        font = FONTS["day"]
        top = self.cursor.place("day_bar", g.day_bar_height, label=label)
        fill_band(self.cursor.page, g, top, g.day_bar_height, COLORS["day_bar"])
        add_text(self.cursor.page, label, g.content_left + g.cell_padding,
                 top + (g.day_bar_height - font.size) / 2 - 1, font, COLORS["text"])

    def draw_header(self):
        g = self.geometry
        font = FONTS["table_header"]
        top = self.cursor.place("header", g.header_row_height)
        fill_band(self.cursor.page, g, top, g.header_row_height, COLORS["header_bg"])
        for x, title in zip(g.column_offsets, COLUMN_TITLES):
            add_text(self.cursor.page, title.upper(), x + g.cell_padding,
                     top + (g.header_row_height - font.size) / 2 - 1, font, COLORS["header_text"])

    # -------------------------------------------------------------------------
    # Rows
    # -------------------------------------------------------------------------

    def draw_row(self, layout: TableRowLayout, index: int):
        g = self.geometry
        page = self.cursor.page
        pad = g.cell_padding
        top = self.cursor.place("row", layout.height, label=layout.record.id, index=index)

        if index % 2 == 1:
            fill_band(page, g, top, layout.height, COLORS["row_shade"])

        for col, (x, lines) in enumerate(zip(g.column_offsets, layout.cells)):
            x += pad
            y = top + pad
            if col == 1:
                line_height = self.measurer.line_height(COLUMN_FONTS[col])
                draw_glyph(page, x, y + line_height / 2, layout.record.kind.info.color)
                x += GLYPH_SPACE
            elif col == NOTES and layout.thumbnail is not None:
                self._draw_thumbnail(page, layout.thumbnail, x, y)
                x += layout.thumbnail.width + g.thumbnail_gap
            add_lines(page, lines, x, y, COLUMN_FONTS[col], COLUMN_COLORS[col])

        page.draw_line(fitz.Point(g.content_left, top + layout.height),
                       fitz.Point(g.content_right, top + layout.height),
                       color=COLORS["separator"], width=0.3)

    def _draw_thumbnail(self, page: fitz.Page, thumbnail: Thumbnail, x: float, y: float):
        rect = fitz.Rect(x, y, x + thumbnail.width, y + thumbnail.height)
        try:
            page.insert_image(rect, stream=thumbnail.data, keep_proportion=True)
        except Exception as e:
            logger.warning("Could not place thumbnail: %s", e)
            return
        page.draw_rect(rect, color=COLORS["thumb_border"], width=0.3)

    def render_group(self, group: DayGroup):
        """Day bar, header, then rows; chrome is repeated after any page break."""
        g = self.geometry
        layouts = [self.layout_row(record) for record in group.records]
        first_height = layouts[0].height if layouts else 0

        self.cursor.ensure_space(g.day_bar_height + g.header_row_height + first_height)
        self.draw_day_bar(group.label)
        self.draw_header()

        # Shading parity restarts with every day
        for index, layout in enumerate(layouts):
            if self.cursor.ensure_space(layout.height):
                self.draw_day_bar(f"{group.label} (continued)")
                self.draw_header()
            self.draw_row(layout, index)
            if layout.truncated:
                self.truncated_rows.append(layout.record.id)
