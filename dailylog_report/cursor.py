"""Vertical write cursor and page-break decisions."""

import logging
from dataclasses import dataclass
from typing import List, Optional

import fitz

from .geometry import PageGeometry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    """A block of vertical space claimed on a page."""

    kind: str
    page_index: int
    top: float
    height: float
    label: str = ""
    index: int = -1

    @property
    def bottom(self) -> float:
        return self.top + self.height


class PageCursor:
    """Owns the current page and y position for one render.

    ensure_space() is the only place a page break is decided; it returns
    True when it opened a new page so the caller can redraw sticky chrome.
    """

    def __init__(self, doc: fitz.Document, geometry: PageGeometry):
        self.doc = doc
        self.geometry = geometry
        self.page: Optional[fitz.Page] = None
        self.y = geometry.top
        self.placements: List[Placement] = []

    @property
    def page_index(self) -> int:
        return len(self.doc) - 1

    @property
    def page_count(self) -> int:
        return len(self.doc)

    def begin_page(self) -> fitz.Page:
        self.page = self.doc.new_page(width=self.geometry.page_width,
                                      height=self.geometry.page_height)
        self.y = self.geometry.top
        logger.debug("Started page %d", self.page_count)
        return self.page

    def remaining(self) -> float:
        return self.geometry.bottom - self.y

    def ensure_space(self, needed: float) -> bool:
        """Break to a new page unless `needed` fits above the bottom margin.

        A page with nothing drawn on it yet is never abandoned, so content
        taller than the printable area overflows instead of looping.
        """
        if self.page is None:
            self.begin_page()
            return True
        if self.y + needed > self.geometry.bottom and self.y > self.geometry.top:
            self.begin_page()
            return True
        return False

    def place(self, kind: str, height: float, label: str = "", index: int = -1) -> float:
        """Claim `height` at the cursor, record it and return its top y."""
        top = self.y
        self.placements.append(Placement(kind, self.page_index, top, height, label, index))
        self.y += height
        return top

    def skip(self, gap: float):
        """Advance without drawing."""
        self.y += gap
