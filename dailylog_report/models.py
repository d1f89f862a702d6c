"""Record and category types consumed by the report engine."""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .geometry import DETAILS_PLACEHOLDER


# =============================================================================
# CATEGORIES
# =============================================================================

class LogCategory(Enum):
    MEAL = "meal"
    BATH = "bath"
    BEDTIME = "bedtime"
    PICKUP = "pickup"
    DOCTOR = "doctor"
    ACTIVITY = "activity"
    PURCHASE = "purchase"

    @classmethod
    def from_raw(cls, value: Optional[str]) -> Optional["LogCategory"]:
        """Map a stored category string to a variant, None if unrecognised."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @property
    def info(self) -> "CategoryInfo":
        return CATEGORY_INFO[self]


@dataclass(frozen=True)
class CategoryInfo:
    label: str
    glyph: str
    color: Tuple[float, float, float]
    subcategories: Tuple[str, ...] = ()


CATEGORY_INFO: Dict[LogCategory, CategoryInfo] = {
    LogCategory.MEAL: CategoryInfo(
        "Made Meal", "\U0001F373", (1.0, 0.58, 0.0),
        ("Breakfast", "Lunch", "Dinner", "Snack"),
    ),
    LogCategory.BATH: CategoryInfo("Bath Time", "\U0001F6C1", (0.2, 0.68, 0.9)),
    LogCategory.BEDTIME: CategoryInfo("Bedtime", "\U0001F4DA", (0.35, 0.34, 0.84)),
    LogCategory.PICKUP: CategoryInfo("Pickup/Dropoff", "\U0001F697", (0.2, 0.78, 0.35)),
    LogCategory.DOCTOR: CategoryInfo("Doctor Visit", "\U0001F3E5", (1.0, 0.23, 0.19)),
    LogCategory.ACTIVITY: CategoryInfo("Activity/Play", "\U0001F3A8", (0.69, 0.32, 0.87)),
    LogCategory.PURCHASE: CategoryInfo("Purchase", "\U0001F4B0", (1.0, 0.8, 0.0)),
}

# Display fallback for records whose category is missing or unknown
DEFAULT_CATEGORY = LogCategory.ACTIVITY

UNKNOWN_LABEL = "Uncategorized"
UNKNOWN_GLYPH = "?"
UNKNOWN_COLOR = (0.6, 0.6, 0.6)


# =============================================================================
# RECORDS
# =============================================================================

@dataclass(frozen=True)
class LogRecord:
    id: str
    timestamp: Optional[datetime] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    note: Optional[str] = None
    amount: Optional[Decimal] = None
    photo_bytes: Optional[bytes] = None

    @property
    def known_category(self) -> Optional[LogCategory]:
        return LogCategory.from_raw(self.category)

    @property
    def kind(self) -> LogCategory:
        """Category used for display."""
        return self.known_category or DEFAULT_CATEGORY


def timestamp_key(value: datetime) -> datetime:
    """Comparable form of a timestamp: aware values in UTC, naive ones taken as UTC."""
    if value.tzinfo is not None and value.utcoffset() is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.replace(tzinfo=None)


def format_amount(amount: Decimal) -> str:
    return f"${amount:,.2f}"


def details_text(record: LogRecord) -> str:
    """Subcategory and amount joined, or the placeholder when both are absent."""
    parts = []
    if record.subcategory and record.subcategory.strip():
        parts.append(record.subcategory.strip())
    if record.amount is not None and record.amount != 0:
        parts.append(format_amount(record.amount))
    return " | ".join(parts) if parts else DETAILS_PLACEHOLDER


@dataclass
class DayGroup:
    label: str
    records: List[LogRecord]


@dataclass(frozen=True)
class CategoryCount:
    """One summary cell. category is None for the unknown bucket."""

    category: Optional[LogCategory]
    count: int

    @property
    def label(self) -> str:
        return self.category.info.label if self.category else UNKNOWN_LABEL

    @property
    def glyph(self) -> str:
        return self.category.info.glyph if self.category else UNKNOWN_GLYPH

    @property
    def color(self) -> Tuple[float, float, float]:
        return self.category.info.color if self.category else UNKNOWN_COLOR
