"""Normalizers for raw submission and member records.

- common: date, amount, week number and display name coercion
- weeks: week-of-month numbering and date ranges
"""

from church_finance.normalize.common import (
    as_records,
    filter_by_date_range,
    get_field,
    member_display_name,
    month_key,
    normalize_date,
    parse_amount,
    parse_week_number,
)
from church_finance.normalize.weeks import get_week_dates, get_week_number

__all__ = [
    "as_records",
    "filter_by_date_range",
    "get_field",
    "get_week_dates",
    "get_week_number",
    "member_display_name",
    "month_key",
    "normalize_date",
    "parse_amount",
    "parse_week_number",
]
