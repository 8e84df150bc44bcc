"""Common utilities for record normalization.

Submissions arrive from the document store with heterogeneous field types:
dates may be native datetimes, ISO strings, epoch milliseconds or timestamp
wrappers, and amounts may be numbers, formatted strings or missing entirely.
Every aggregator reads records through these helpers so that bad data
degrades to ``None`` / ``0`` instead of raising.
"""

import logging
import math
import re
from collections.abc import Mapping
from datetime import UTC, date, datetime
from typing import Any

logger = logging.getLogger(__name__)

UNKNOWN_MEMBER = "Unknown Member"
DEFAULT_WEEK_NUMBER = 1
MAX_WEEK_NUMBER = 5

# Zero-argument conversion methods exposed by timestamp wrappers
# (datetime-like SDK objects, protobuf Timestamp, JS-style snapshots).
_DATE_ACCESSORS = ("to_datetime", "ToDatetime", "toDate")

# Non-ISO formats accepted after fromisoformat fails
_DATE_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%Y/%m/%d",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%a %b %d %Y",
)

_CURRENCY_PREFIX = re.compile(r"^(?:ZMW|K|\$|£|€)\s*")
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def get_field(record: Any, name: str, default: Any = None) -> Any:
    """Read a field from a mapping or an attribute-style record.

    Args:
        record: Dict-like record or object, may be None.
        name: Field name.
        default: Value returned when the field is absent.

    Returns:
        Field value, or default.
    """
    if record is None:
        return default
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def _ensure_utc(dt: datetime) -> datetime:
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)


def _parse_date_string(text: str) -> datetime | None:
    text = text.strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    return None


def normalize_date(value: Any) -> datetime | None:
    """Normalize a submission date to a UTC datetime.

    Handles, in order: None, native datetime/date, timestamp wrappers with a
    zero-argument conversion method, strings (ISO 8601 first, then a fixed set
    of common formats) and epoch milliseconds.

    Args:
        value: Raw date value from a record.

    Returns:
        UTC datetime, or None if the value is missing or cannot be parsed.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return _ensure_utc(value)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)

    for accessor in _DATE_ACCESSORS:
        convert = getattr(value, accessor, None)
        if callable(convert):
            try:
                converted = convert()
            except Exception as e:
                logger.warning("Failed to convert timestamp via %s(): %s", accessor, e)
                return None
            if isinstance(converted, datetime | date):
                return normalize_date(converted)
            logger.debug("%s() returned unsupported type %s", accessor, type(converted).__name__)
            return None

    if isinstance(value, str):
        parsed = _parse_date_string(value)
        if parsed is None:
            logger.debug("Failed to parse date string '%s'", value)
            return None
        return _ensure_utc(parsed)

    if isinstance(value, int | float):
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError) as e:
            logger.debug("Failed to parse epoch value %r: %s", value, e)
            return None

    logger.debug("Unsupported date type %s", type(value).__name__)
    return None


def parse_amount(value: Any) -> float:
    """Parse a monetary amount, defaulting to 0.

    Numbers are used as-is; strings are stripped of surrounding whitespace,
    a leading currency symbol and thousands separators, then the leading
    numeric portion is parsed. Negative values are returned unchanged:
    rejecting them is a business rule enforced where receipts are issued.

    Args:
        value: Raw amount (number, string or None).

    Returns:
        Parsed amount, or 0.0 when missing, non-finite or unparseable.
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, int | float):
        amount = float(value)
    elif isinstance(value, str):
        text = _CURRENCY_PREFIX.sub("", value.strip()).replace(",", "")
        match = _LEADING_NUMBER.match(text)
        if match is None:
            return 0.0
        amount = float(match.group(0))
    else:
        return 0.0

    return amount if math.isfinite(amount) else 0.0


def parse_week_number(value: Any) -> int:
    """Parse a week-of-month number (1-5), defaulting to 1.

    Args:
        value: Raw week number (int, numeric string or None).

    Returns:
        Week number between 1 and 5.
    """
    if value is None or isinstance(value, bool):
        return DEFAULT_WEEK_NUMBER

    try:
        week = int(float(value)) if isinstance(value, str) else int(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_WEEK_NUMBER

    if week < 1 or week > MAX_WEEK_NUMBER:
        return DEFAULT_WEEK_NUMBER
    return week


def member_display_name(member: Any, unknown_label: str = UNKNOWN_MEMBER) -> str:
    """Build a member's display name from first and last name.

    Args:
        member: Member record.
        unknown_label: Label used when either name is missing.

    Returns:
        "First Last", or the unknown label.
    """
    first = get_field(member, "firstName")
    last = get_field(member, "lastName")
    if first and last:
        return f"{first} {last}"
    return unknown_label


def month_key(dt: datetime | date) -> str:
    """Return the zero-padded ``YYYY-MM`` key for a date."""
    return f"{dt.year:04d}-{dt.month:02d}"


def submission_total(submission: Any) -> float:
    """Return tithe plus offering for a submission."""
    return parse_amount(get_field(submission, "tithe")) + parse_amount(
        get_field(submission, "offering")
    )


def as_records(records: Any) -> list[Any]:
    """Coerce a top-level record collection to a list of non-null records.

    Args:
        records: List or tuple of records; anything else is treated as empty.

    Returns:
        List of records with None entries dropped.
    """
    if not isinstance(records, list | tuple):
        if records is not None:
            logger.warning("Expected a list of records, got %s", type(records).__name__)
        return []
    return [record for record in records if record is not None]


def filter_by_date_range(records: Any, start: date, end: date) -> list[Any]:
    """Keep records whose normalized date falls within [start, end].

    Records without a parseable date are dropped.

    Args:
        records: Raw records.
        start: First day of the range.
        end: Last day of the range (inclusive).

    Returns:
        Records dated within the range, in input order.
    """
    kept = []
    for record in as_records(records):
        dt = normalize_date(get_field(record, "date"))
        if dt is not None and start <= dt.date() <= end:
            kept.append(record)
    return kept
