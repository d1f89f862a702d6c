"""Paginated PDF activity reports for journal records."""

from .composer import RenderedReport, ReportComposer, compose, render_report
from .geometry import PageGeometry
from .models import CategoryCount, DayGroup, LogCategory, LogRecord

__all__ = [
    "CategoryCount",
    "DayGroup",
    "LogCategory",
    "LogRecord",
    "PageGeometry",
    "RenderedReport",
    "ReportComposer",
    "compose",
    "render_report",
]

__version__ = "0.1.0"
