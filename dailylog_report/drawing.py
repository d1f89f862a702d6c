"""Low-level fitz drawing helpers shared by the report sections."""

from typing import List, Tuple

import fitz

from .geometry import COLORS, FontSpec, GLYPH_RADIUS, LINE_SPACING, PageGeometry
from .text import split_runs


def add_text(page: fitz.Page, text: str, x: float, y: float,
             font: FontSpec, color: Tuple = COLORS["text"]):
    """Add one line of text whose box starts at y, switching faces per glyph coverage."""
    if not text:
        return
    writer = fitz.TextWriter(page.rect)
    baseline = y + font.size
    for face, run in split_runs(text, font):
        writer.append(fitz.Point(x, baseline), run, font=face, fontsize=font.size)
        x += face.text_length(run, fontsize=font.size)
    writer.write_text(page, color=color)


def add_lines(page: fitz.Page, lines: List[str], x: float, y: float,
              font: FontSpec, color: Tuple = COLORS["text"]):
    """Add pre-wrapped lines top-down from y."""
    line_height = font.size * LINE_SPACING
    for i, line in enumerate(lines):
        if line:
            add_text(page, line, x, y + i * line_height, font, color)


def draw_glyph(page: fitz.Page, x: float, center_y: float, color: Tuple):
    """Filled category dot with its left edge at x."""
    page.draw_circle(fitz.Point(x + GLYPH_RADIUS, center_y), GLYPH_RADIUS,
                     color=None, fill=color)


def draw_rule(page: fitz.Page, geometry: PageGeometry, y: float,
              color: Tuple = COLORS["rule"], width: float = 0.5):
    page.draw_line(fitz.Point(geometry.content_left, y),
                   fitz.Point(geometry.content_right, y),
                   color=color, width=width)


def fill_band(page: fitz.Page, geometry: PageGeometry, top: float, height: float,
              fill: Tuple):
    """Full content-width filled rectangle."""
    page.draw_rect(fitz.Rect(geometry.content_left, top,
                             geometry.content_right, top + height),
                   color=None, fill=fill)
