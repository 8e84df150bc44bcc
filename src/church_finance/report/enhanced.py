"""Enhanced report assembly.

Combines a list of submission records and a date-range descriptor into a
summary plus detail rows:

    {
        "summary": {
            "totalTithes", "totalOfferings", "totalContributions",
            "averageContribution", "numberOfContributions",
        },
        "details": [{date, memberName, tithe, offering, weekNumber}, ...],
        "dateRange": {"start": str, "end": str},
    }
"""

import logging
from typing import Any

from church_finance.normalize.common import (
    UNKNOWN_MEMBER,
    get_field,
    normalize_date,
    parse_amount,
    parse_week_number,
)

logger = logging.getLogger(__name__)

__all__ = ["empty_report", "generate_enhanced_report"]


def _date_range_or_default(date_range: dict[str, str] | None) -> dict[str, str]:
    return date_range or {"start": "", "end": ""}


def empty_report(date_range: dict[str, str] | None = None) -> dict[str, Any]:
    """Build a zero-valued report for the given range."""
    return {
        "summary": {
            "totalTithes": 0.0,
            "totalOfferings": 0.0,
            "totalContributions": 0.0,
            "averageContribution": 0.0,
            "numberOfContributions": 0,
        },
        "details": [],
        "dateRange": _date_range_or_default(date_range),
    }


def generate_enhanced_report(
    data: Any,
    date_range: dict[str, str] | None,
    unknown_label: str = UNKNOWN_MEMBER,
) -> dict[str, Any]:
    """Summarize contributions and build per-entry detail rows.

    Entries lacking both a tithe and an offering value are left out of the
    summary and the details.

    Args:
        data: List of submission records.
        date_range: {start, end} ISO date strings describing the period.
        unknown_label: Member name used when an entry has none.

    Returns:
        Report dictionary with summary, details and dateRange. Non-list input
        yields a zero-valued summary with no details.
    """
    if not isinstance(data, list | tuple):
        logger.warning(
            "Invalid data provided to generate_enhanced_report: %s", type(data).__name__
        )
        return empty_report(date_range)

    valid = [
        item
        for item in data
        if item is not None and (get_field(item, "tithe") or get_field(item, "offering"))
    ]

    total_tithes = 0.0
    total_offerings = 0.0
    details = []

    for item in valid:
        tithe = parse_amount(get_field(item, "tithe"))
        offering = parse_amount(get_field(item, "offering"))
        total_tithes += tithe
        total_offerings += offering
        details.append(
            {
                "date": normalize_date(get_field(item, "date")),
                "memberName": get_field(item, "memberName") or unknown_label,
                "tithe": tithe,
                "offering": offering,
                "weekNumber": parse_week_number(get_field(item, "weekNumber")),
            }
        )

    count = len(valid)
    total_contributions = total_tithes + total_offerings

    logger.debug("Enhanced report: %d of %d entries retained", count, len(data))

    return {
        "summary": {
            "totalTithes": total_tithes,
            "totalOfferings": total_offerings,
            "totalContributions": total_contributions,
            "averageContribution": total_contributions / count if count > 0 else 0.0,
            "numberOfContributions": count,
        },
        "details": details,
        "dateRange": _date_range_or_default(date_range),
    }
