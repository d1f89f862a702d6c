"""Wrapped-text measurement on embedded Unicode font metrics."""

from functools import lru_cache
from typing import List, Tuple

import fitz

from .geometry import FALLBACK_FONT, FontSpec, LINE_SPACING, TRUNCATION_MARK


@lru_cache(maxsize=None)
def get_font(name: str) -> fitz.Font:
    return fitz.Font(name)


@lru_cache(maxsize=4096)
def _font_for_char(name: str, char: str) -> str:
    """Primary font if it has the glyph, else the CJK fallback if that does."""
    if char.isspace() or get_font(name).has_glyph(ord(char)):
        return name
    if get_font(FALLBACK_FONT).has_glyph(ord(char)):
        return FALLBACK_FONT
    return name


def split_runs(text: str, font: FontSpec) -> List[Tuple[fitz.Font, str]]:
    """Cut text into runs that share one font face."""
    runs: List[Tuple[str, str]] = []
    for char in text:
        face = _font_for_char(font.name, char)
        if runs and runs[-1][0] == face:
            runs[-1] = (face, runs[-1][1] + char)
        else:
            runs.append((face, char))
    return [(get_font(face), run) for face, run in runs]


class TextMeasurer:
    """Measures and wraps text with fitz font metrics.

    Widths come from the same fitz.Font runs that drawing.add_text writes,
    and the lines returned by wrap() are the lines the table draws, so a
    drawn cell is exactly as wide and tall as measured.
    """

    def text_width(self, text: str, font: FontSpec) -> float:
        return sum(face.text_length(run, fontsize=font.size)
                   for face, run in split_runs(text, font))

    def line_height(self, font: FontSpec) -> float:
        return font.size * LINE_SPACING

    def measure(self, text: str, font: FontSpec, max_width: float) -> float:
        """Height of text wrapped to max_width. Empty text is 0."""
        return len(self.wrap(text, font, max_width)) * self.line_height(font)

    def wrap(self, text: str, font: FontSpec, max_width: float) -> List[str]:
        """Greedy word wrap; newlines force a break, long words split by character."""
        if not text:
            return []

        lines: List[str] = []
        for paragraph in text.split("\n"):
            words = paragraph.split()
            if not words:
                lines.append("")
                continue

            current = ""
            for word in words:
                for piece in self._split_word(word, font, max_width):
                    trial = f"{current} {piece}" if current else piece
                    if not current or self.text_width(trial, font) <= max_width:
                        current = trial
                    else:
                        lines.append(current)
                        current = piece
            lines.append(current)
        return lines

    def _split_word(self, word: str, font: FontSpec, max_width: float) -> List[str]:
        if self.text_width(word, font) <= max_width:
            return [word]

        pieces = []
        current = ""
        for char in word:
            if current and self.text_width(current + char, font) > max_width:
                pieces.append(current)
                current = char
            else:
                current += char
        pieces.append(current)
        return pieces

    def truncate(self, lines: List[str], max_lines: int,
                 font: FontSpec, max_width: float) -> List[str]:
        """Keep the first max_lines lines, marking the cut on the last one."""
        if len(lines) <= max_lines:
            return lines
        if max_lines <= 0:
            return []

        kept = lines[:max_lines]
        last = kept[-1].rstrip()
        while last and self.text_width(last + TRUNCATION_MARK, font) > max_width:
            last = last[:-1].rstrip()
        kept[-1] = last + TRUNCATION_MARK
        return kept
