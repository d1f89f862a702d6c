"""
Page geometry, fonts and colours for the activity report.

All values are in PDF user-space units (1/72 inch). The defaults lay out a
US Letter page with a four-column timeline table.
"""

from dataclasses import dataclass
from typing import Tuple

# =============================================================================
# CONSTANTS
# =============================================================================

# US Letter
PAGE_WIDTH = 612
PAGE_HEIGHT = 792
MARGIN = 50

# Timeline table: time / activity / details / notes (sums to 512)
COLUMN_WIDTHS = (64, 112, 120, 216)
COLUMN_TITLES = ("Time", "Activity", "Details", "Notes")
CELL_PADDING = 5

# Thumbnails sit in a fixed square box at the start of the notes cell
THUMBNAIL_MAX_DIM = 48
THUMBNAIL_GAP = 6

# Fixed-height chrome
SUMMARY_COLUMNS = 3
SUMMARY_ROW_HEIGHT = 18
DAY_BAR_HEIGHT = 20
HEADER_ROW_HEIGHT = 18
FOOTER_OFFSET = 25          # Footer baseline distance from the page bottom

# Line height = font size * LINE_SPACING
LINE_SPACING = 1.35

# Category dot drawn in place of the emoji glyph (no bundled font has emoji)
GLYPH_RADIUS = 3
GLYPH_SPACE = 10

TRUNCATION_MARK = "..."
DETAILS_PLACEHOLDER = "-"

# =============================================================================
# FONTS (Noto Sans from pymupdf-fonts, CJK fallback built into MuPDF)
# =============================================================================


@dataclass(frozen=True)
class FontSpec:
    name: str
    size: float


FONT_REGULAR = "notos"
FONT_BOLD = "notosbo"
FALLBACK_FONT = "cjk"

FONTS = {
    "title": FontSpec(FONT_BOLD, 22),
    "section": FontSpec(FONT_BOLD, 16),
    "meta": FontSpec(FONT_REGULAR, 10),
    "body": FontSpec(FONT_REGULAR, 12),
    "summary": FontSpec(FONT_REGULAR, 10),
    "day": FontSpec(FONT_BOLD, 10),
    "table_header": FontSpec(FONT_BOLD, 8.5),
    "cell": FontSpec(FONT_REGULAR, 9),
    "activity": FontSpec(FONT_BOLD, 9),
    "note": FontSpec(FONT_REGULAR, 8.5),
    "footer": FontSpec(FONT_REGULAR, 8),
}

# =============================================================================
# COLORS
# =============================================================================

COLOR_WHITE = (1, 1, 1)

COLORS = {
    "text": (0.1, 0.1, 0.1),
    "muted": (0.45, 0.45, 0.45),
    "note": (0.3, 0.3, 0.3),
    "rule": (0.75, 0.75, 0.75),
    "separator": (0.85, 0.85, 0.85),
    "day_bar": (0.88, 0.90, 0.94),
    "header_bg": (0.22, 0.27, 0.35),
    "header_text": COLOR_WHITE,
    "row_shade": (0.96, 0.96, 0.97),
    "thumb_border": (0.8, 0.8, 0.8),
}


# =============================================================================
# PAGE GEOMETRY
# =============================================================================

@dataclass(frozen=True)
class PageGeometry:
    """Fixed geometry for one render. Raises ValueError if inconsistent."""

    page_width: float = PAGE_WIDTH
    page_height: float = PAGE_HEIGHT
    margin: float = MARGIN
    column_widths: Tuple[float, float, float, float] = COLUMN_WIDTHS
    cell_padding: float = CELL_PADDING
    thumbnail_max_dim: float = THUMBNAIL_MAX_DIM
    thumbnail_gap: float = THUMBNAIL_GAP
    summary_columns: int = SUMMARY_COLUMNS
    summary_row_height: float = SUMMARY_ROW_HEIGHT
    day_bar_height: float = DAY_BAR_HEIGHT
    header_row_height: float = HEADER_ROW_HEIGHT

    def __post_init__(self):
        if self.page_width <= 0 or self.page_height <= 0:
            raise ValueError("page dimensions must be positive")
        if self.margin < 0 or 2 * self.margin >= min(self.page_width, self.page_height):
            raise ValueError(f"margin {self.margin} leaves no printable area")
        if len(self.column_widths) != 4 or any(w <= 0 for w in self.column_widths):
            raise ValueError("exactly four positive column widths are required")
        if abs(sum(self.column_widths) - self.content_width) > 0.01:
            raise ValueError(
                f"column widths sum to {sum(self.column_widths)}, "
                f"content width is {self.content_width}"
            )
        if self.summary_columns < 1:
            raise ValueError("summary_columns must be at least 1")
        notes_text_room = (self.column_widths[3] - 2 * self.cell_padding
                           - self.thumbnail_max_dim - self.thumbnail_gap)
        if notes_text_room <= 0:
            raise ValueError("notes column is too narrow for the thumbnail box")

    @property
    def content_left(self) -> float:
        return self.margin

    @property
    def content_right(self) -> float:
        return self.page_width - self.margin

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def top(self) -> float:
        return self.margin

    @property
    def bottom(self) -> float:
        """Lowest y any content may reach."""
        return self.page_height - self.margin

    @property
    def printable_height(self) -> float:
        return self.bottom - self.top

    @property
    def column_offsets(self) -> Tuple[float, ...]:
        """Left x of each table column."""
        offsets = []
        x = self.content_left
        for width in self.column_widths:
            offsets.append(x)
            x += width
        return tuple(offsets)
