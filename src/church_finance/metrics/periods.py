"""Quarterly and weekly rollups.

Quarters are fixed calendar buckets (Q1 = Jan-Mar, ..., Q4 = Oct-Dec) and
are always emitted, even when empty. Weekly averages only cover the week
numbers actually present in the data.
"""

import logging
from collections.abc import Sequence
from typing import Any

from church_finance.normalize.common import (
    as_records,
    get_field,
    normalize_date,
    parse_amount,
    parse_week_number,
)

logger = logging.getLogger(__name__)

__all__ = ["QUARTERS", "calculate_quarterly_stats", "calculate_weekly_averages"]

# Quarter label -> calendar months (1-12)
QUARTERS: dict[str, tuple[int, int, int]] = {
    "Q1": (1, 2, 3),
    "Q2": (4, 5, 6),
    "Q3": (7, 8, 9),
    "Q4": (10, 11, 12),
}


def _quarter_for_month(month: int) -> str:
    return f"Q{(month - 1) // 3 + 1}"


def calculate_quarterly_stats(submissions: Sequence[Any] | None) -> list[dict[str, Any]]:
    """Sum tithes and offerings into the four calendar quarters.

    Submissions without a parseable date are skipped.

    Args:
        submissions: Raw submission records.

    Returns:
        Exactly four entries in Q1..Q4 order with quarter, tithes, offerings,
        total and percentage (share of the year's total, 0.0 when empty).
    """
    totals = {quarter: {"tithes": 0.0, "offerings": 0.0} for quarter in QUARTERS}

    skipped = 0
    for submission in as_records(submissions):
        dt = normalize_date(get_field(submission, "date"))
        if dt is None:
            skipped += 1
            continue
        bucket = totals[_quarter_for_month(dt.month)]
        bucket["tithes"] += parse_amount(get_field(submission, "tithe"))
        bucket["offerings"] += parse_amount(get_field(submission, "offering"))

    if skipped:
        logger.debug("Skipped %d submissions without a usable date", skipped)

    grand_total = sum(b["tithes"] + b["offerings"] for b in totals.values())

    stats = []
    for quarter, bucket in totals.items():
        total = bucket["tithes"] + bucket["offerings"]
        stats.append(
            {
                "quarter": quarter,
                "tithes": bucket["tithes"],
                "offerings": bucket["offerings"],
                "total": total,
                "percentage": total / grand_total * 100 if grand_total else 0.0,
            }
        )

    return stats


def calculate_weekly_averages(submissions: Sequence[Any] | None) -> list[dict[str, Any]]:
    """Average tithes and offerings per week-of-month.

    Week numbers default to 1 when missing or invalid. Dates are not needed,
    so undated submissions are included.

    Args:
        submissions: Raw submission records.

    Returns:
        One entry per observed week number, ascending, with week label,
        avgTithes, avgOfferings, totalContributions and contributionCount.
    """
    weekly: dict[int, dict[str, float]] = {}

    for submission in as_records(submissions):
        week = parse_week_number(get_field(submission, "weekNumber"))
        bucket = weekly.setdefault(week, {"tithes": 0.0, "offerings": 0.0, "count": 0})
        bucket["tithes"] += parse_amount(get_field(submission, "tithe"))
        bucket["offerings"] += parse_amount(get_field(submission, "offering"))
        bucket["count"] += 1

    return [
        {
            "week": f"Week {week}",
            "avgTithes": data["tithes"] / data["count"],
            "avgOfferings": data["offerings"] / data["count"],
            "totalContributions": data["tithes"] + data["offerings"],
            "contributionCount": int(data["count"]),
        }
        for week, data in sorted(weekly.items())
    ]
