"""Load journal records from a JSON export.

Expected shape: a list of objects with keys id, timestamp (ISO 8601),
category, subcategory, note, amount and photo (path relative to the
JSON file). Only id is required.
"""

import json
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import RecordLoadError
from .models import LogRecord, timestamp_key

TEXT_FIELDS = ("category", "subcategory", "note", "photo")


def parse_timestamp(value: str) -> datetime:
    """ISO 8601, accepting a trailing Z for UTC on every supported Python."""
    if isinstance(value, str) and value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def parse_record(raw: Dict[str, Any], base_dir: Path) -> LogRecord:
    if not isinstance(raw, dict):
        raise RecordLoadError(f"Record must be an object, got {type(raw).__name__}")
    if "id" not in raw:
        raise RecordLoadError("Record is missing an id")
    record_id = str(raw["id"])

    for key in TEXT_FIELDS:
        value = raw.get(key)
        if value is not None and not isinstance(value, str):
            raise RecordLoadError(
                f"Record {record_id}: {key} must be a string, got {type(value).__name__}")

    timestamp = None
    if raw.get("timestamp"):
        try:
            timestamp = parse_timestamp(raw["timestamp"])
        except (TypeError, ValueError) as e:
            raise RecordLoadError(f"Record {record_id}: bad timestamp {raw['timestamp']!r}") from e

    amount = None
    if raw.get("amount") is not None:
        try:
            amount = Decimal(str(raw["amount"]))
        except InvalidOperation as e:
            raise RecordLoadError(f"Record {record_id}: bad amount {raw['amount']!r}") from e

    photo_bytes = None
    if raw.get("photo"):
        photo_path = base_dir / raw["photo"]
        try:
            photo_bytes = photo_path.read_bytes()
        except OSError as e:
            raise RecordLoadError(f"Record {record_id}: cannot read photo {photo_path}") from e

    return LogRecord(
        id=record_id,
        timestamp=timestamp,
        category=raw.get("category"),
        subcategory=raw.get("subcategory"),
        note=raw.get("note"),
        amount=amount,
        photo_bytes=photo_bytes,
    )


def sort_newest_first(records: List[LogRecord]) -> List[LogRecord]:
    """Descending by timestamp, untimed records last, ties keep input order.

    Aware and naive timestamps are compared through timestamp_key.
    """
    timed = [r for r in records if r.timestamp is not None]
    untimed = [r for r in records if r.timestamp is None]
    return sorted(timed, key=lambda r: timestamp_key(r.timestamp), reverse=True) + untimed


def load_records(path: Path, base_dir: Optional[Path] = None) -> List[LogRecord]:
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise RecordLoadError(f"Cannot read records file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise RecordLoadError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("records")
    if not isinstance(data, list):
        raise RecordLoadError(f"{path} must contain a list of records")

    base_dir = base_dir or path.parent
    return sort_newest_first([parse_record(raw, base_dir) for raw in data])
