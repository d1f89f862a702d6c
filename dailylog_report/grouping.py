"""Day bucketing and date/time labels."""

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from .models import DayGroup, LogRecord

logger = logging.getLogger(__name__)

MONTH_NAMES = ["January", "February", "March", "April", "May", "June",
               "July", "August", "September", "October", "November", "December"]
MONTH_ABBREVS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                 "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def format_long_date(value: datetime) -> str:
    """October 18, 2026"""
    return f"{MONTH_NAMES[value.month - 1]} {value.day}, {value.year}"


def format_medium_date(value: date) -> str:
    """Oct 18, 2026"""
    return f"{MONTH_ABBREVS[value.month - 1]} {value.day}, {value.year}"


def format_time(value: datetime) -> str:
    """9:05 AM"""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def format_day_label(value: datetime, today: Optional[date] = None) -> str:
    """Relative day label: Today, Yesterday, or a medium date."""
    day = value.date()
    if today is not None:
        if day == today:
            return "Today"
        if day == today - timedelta(days=1):
            return "Yesterday"
    return format_medium_date(day)


def count_untimed(records: Iterable[LogRecord]) -> int:
    return sum(1 for record in records if record.timestamp is None)


class DayGrouper:
    """Splits newest-first records into contiguous day buckets.

    Does not sort. A new group starts whenever the formatted day label
    changes, so the caller must pass records already ordered by timestamp.
    Records without a timestamp are skipped (see count_untimed).
    """

    def __init__(self, today: Optional[date] = None):
        self.today = today

    def label_for(self, record: LogRecord) -> str:
        return format_day_label(record.timestamp, self.today)

    def group(self, records: Iterable[LogRecord]) -> List[DayGroup]:
        groups: List[DayGroup] = []
        current: Optional[DayGroup] = None
        skipped = 0

        for record in records:
            if record.timestamp is None:
                skipped += 1
                continue
            label = self.label_for(record)
            if current is None or label != current.label:
                current = DayGroup(label=label, records=[])
                groups.append(current)
            current.records.append(record)

        if skipped:
            logger.debug("Skipped %d record(s) without a timestamp while grouping", skipped)
        return groups
