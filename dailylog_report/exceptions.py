"""Exceptions raised outside the rendering engine (input loading, CLI)."""


class DailyLogReportError(Exception):
    """Base exception for dailylog-report."""
    pass


class RecordLoadError(DailyLogReportError):
    """A records file could not be read or has an invalid entry."""
    pass
