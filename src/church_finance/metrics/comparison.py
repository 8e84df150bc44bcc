"""Month-over-month comparison of giving totals.

The caller supplies pre-aggregated totals for the current and previous month
(see ``summarize_month``); this module only derives the growth triples.

Output shape:
    {
        "tithes": {"current": float, "previous": float, "growth": float},
        "offerings": {...},
        "total": {...},
    }
"""

import logging
from collections.abc import Sequence
from typing import Any

from church_finance.normalize.common import as_records, get_field, normalize_date, parse_amount

logger = logging.getLogger(__name__)

__all__ = [
    "calculate_growth_rate",
    "calculate_monthly_comparison",
    "previous_month",
    "summarize_month",
]


def calculate_growth_rate(current: float, previous: float) -> float:
    """Percentage change from previous to current.

    A zero (or missing) baseline yields 0.0 rather than an infinite rate.
    """
    if not previous:
        return 0.0
    return (current - previous) / previous * 100


def _growth_triple(current: float, previous: float) -> dict[str, float]:
    return {
        "current": current,
        "previous": previous,
        "growth": calculate_growth_rate(current, previous),
    }


def calculate_monthly_comparison(
    current: Any,
    previous: Any,
) -> dict[str, dict[str, float]]:
    """Compare two months of tithe and offering totals.

    Args:
        current: Totals for the current month ({totalTithes, totalOfferings}).
        previous: Totals for the previous month, same shape.

    Returns:
        Growth triples for tithes, offerings and their combined total.
    """
    current_tithes = parse_amount(get_field(current, "totalTithes"))
    current_offerings = parse_amount(get_field(current, "totalOfferings"))
    previous_tithes = parse_amount(get_field(previous, "totalTithes"))
    previous_offerings = parse_amount(get_field(previous, "totalOfferings"))

    return {
        "tithes": _growth_triple(current_tithes, previous_tithes),
        "offerings": _growth_triple(current_offerings, previous_offerings),
        "total": _growth_triple(
            current_tithes + current_offerings,
            previous_tithes + previous_offerings,
        ),
    }


def previous_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) of the month before, wrapping January to December."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def summarize_month(
    submissions: Sequence[Any] | None,
    year: int,
    month: int,
) -> dict[str, float]:
    """Total the tithes and offerings of submissions dated in one calendar month.

    Submissions without a parseable date are skipped.

    Args:
        submissions: Raw submission records.
        year: Calendar year.
        month: Calendar month (1-12).

    Returns:
        Dictionary with totalTithes and totalOfferings.
    """
    totals = {"totalTithes": 0.0, "totalOfferings": 0.0}

    for submission in as_records(submissions):
        dt = normalize_date(get_field(submission, "date"))
        if dt is None or dt.year != year or dt.month != month:
            continue
        totals["totalTithes"] += parse_amount(get_field(submission, "tithe"))
        totals["totalOfferings"] += parse_amount(get_field(submission, "offering"))

    return totals
