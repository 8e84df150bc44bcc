"""Input validation predicates used when snapshots are loaded.

These never raise and never reject a record. Business rules that must reject
one (e.g. negative receipt amounts) are enforced where receipts are issued.
"""

import re
from typing import Any

from church_finance.normalize.common import normalize_date

_NON_NUMERIC = re.compile(r"[^0-9.\-]+")


def is_valid_currency(value: Any) -> bool:
    """Check that a value is a non-negative amount.

    Strings may carry currency symbols and thousands separators.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int | float):
        return value == value and value >= 0
    if isinstance(value, str):
        cleaned = _NON_NUMERIC.sub("", value)
        try:
            amount = float(cleaned or "0")
        except ValueError:
            return False
        return amount >= 0
    return False


def is_valid_date(value: Any) -> bool:
    """Check that a value normalizes to a date."""
    return normalize_date(value) is not None
