"""Monthly trend series for charts.

Both series are keyed by the zero-padded ``YYYY-MM`` month key and sorted
ascending, which is chronological order for that format.

Yearly trend point:
    month, tithes, offerings, total

Growth trend point:
    month, tithes, offerings, total, contributorCount, growthRate, retentionRate
"""

import logging
from collections import defaultdict
from collections.abc import Hashable, Mapping, Sequence
from typing import Any

from church_finance.metrics.comparison import calculate_growth_rate
from church_finance.normalize.common import (
    as_records,
    get_field,
    month_key,
    normalize_date,
    parse_amount,
)

logger = logging.getLogger(__name__)

__all__ = ["analyze_growth_trends", "bucket_monthly_totals", "calculate_yearly_trends"]


def bucket_monthly_totals(submissions: Sequence[Any] | None) -> dict[str, dict[str, float]]:
    """Bucket submissions into per-month tithe and offering totals.

    Produces the mapping consumed by ``calculate_yearly_trends``. Submissions
    without a parseable date are skipped.

    Args:
        submissions: Raw submission records.

    Returns:
        Mapping of month key to {totalTithes, totalOfferings}.
    """
    buckets: dict[str, dict[str, float]] = defaultdict(
        lambda: {"totalTithes": 0.0, "totalOfferings": 0.0}
    )

    for submission in as_records(submissions):
        dt = normalize_date(get_field(submission, "date"))
        if dt is None:
            continue
        bucket = buckets[month_key(dt)]
        bucket["totalTithes"] += parse_amount(get_field(submission, "tithe"))
        bucket["totalOfferings"] += parse_amount(get_field(submission, "offering"))

    return dict(buckets)


def calculate_yearly_trends(monthly_totals: Mapping[str, Any] | None) -> list[dict[str, Any]]:
    """Convert per-month totals into a sorted trend series.

    Args:
        monthly_totals: Mapping of month key to {totalTithes, totalOfferings}.

    Returns:
        One point per month key, sorted ascending by the key as text.
    """
    if not isinstance(monthly_totals, Mapping):
        return []

    trends = []
    for month in sorted(monthly_totals, key=str):
        data = monthly_totals[month]
        tithes = parse_amount(get_field(data, "totalTithes"))
        offerings = parse_amount(get_field(data, "totalOfferings"))
        trends.append(
            {
                "month": month,
                "tithes": tithes,
                "offerings": offerings,
                "total": tithes + offerings,
            }
        )

    return trends


def analyze_growth_trends(submissions: Sequence[Any] | None) -> list[dict[str, Any]]:
    """Group submissions by month with distinct-contributor counts.

    Each point also carries the month-over-month growth of the total and the
    retention rate: the percentage of the previous point's contributors who
    gave again. Both are 0.0 for the first point.

    Args:
        submissions: Raw submission records.

    Returns:
        Growth trend points sorted ascending by month key.
    """
    monthly: dict[str, dict[str, Any]] = {}

    for submission in as_records(submissions):
        dt = normalize_date(get_field(submission, "date"))
        if dt is None:
            continue

        key = month_key(dt)
        if key not in monthly:
            monthly[key] = {"tithes": 0.0, "offerings": 0.0, "contributors": set()}

        data = monthly[key]
        data["tithes"] += parse_amount(get_field(submission, "tithe"))
        data["offerings"] += parse_amount(get_field(submission, "offering"))
        member_id = get_field(submission, "memberId")
        if member_id and isinstance(member_id, Hashable):
            data["contributors"].add(member_id)
        elif member_id:
            logger.debug("Ignoring unhashable memberId of type %s", type(member_id).__name__)

    trends: list[dict[str, Any]] = []
    previous_total = 0.0
    previous_contributors: set[Any] = set()

    for key in sorted(monthly):
        data = monthly[key]
        total = data["tithes"] + data["offerings"]
        contributors: set[Any] = data["contributors"]

        if previous_contributors:
            retained = len(contributors & previous_contributors)
            retention_rate = retained / len(previous_contributors) * 100
        else:
            retention_rate = 0.0

        trends.append(
            {
                "month": key,
                "tithes": data["tithes"],
                "offerings": data["offerings"],
                "total": total,
                "contributorCount": len(contributors),
                "growthRate": calculate_growth_rate(total, previous_total),
                "retentionRate": retention_rate,
            }
        )

        previous_total = total
        previous_contributors = contributors

    logger.debug("Built %d growth trend points", len(trends))
    return trends
