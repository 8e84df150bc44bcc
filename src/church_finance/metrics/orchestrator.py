"""Orchestrator for analytics calculation.

Runs every aggregator over one snapshot of submissions and members and
assembles the dashboard payload.
"""

import logging
from datetime import UTC, date, datetime
from typing import Any

from church_finance.config import Config, default_config
from church_finance.metrics.comparison import (
    calculate_monthly_comparison,
    previous_month,
    summarize_month,
)
from church_finance.metrics.contributions import analyze_contribution_patterns
from church_finance.metrics.periods import calculate_quarterly_stats, calculate_weekly_averages
from church_finance.metrics.trends import (
    analyze_growth_trends,
    bucket_monthly_totals,
    calculate_yearly_trends,
)
from church_finance.normalize.common import as_records

logger = logging.getLogger(__name__)


def run_analytics(
    submissions: Any,
    members: Any,
    today: date | None = None,
    config: Config | None = None,
) -> dict[str, Any]:
    """Run all aggregators over a snapshot.

    Args:
        submissions: Submission records.
        members: Member records.
        today: Reference date for the month-over-month comparison.
            Defaults to the current UTC date.
        config: Application configuration.

    Returns:
        Dictionary with keys:
        - monthlyComparison: growth triples for the reference month
        - yearlyTrends: per-month totals
        - contributionPatterns: per-member rollups
        - quarterlyStats: Q1..Q4 totals
        - weeklyAverages: per-week averages
        - growthTrends: per-month totals with contributor counts
    """
    config = config or default_config()
    today = today or datetime.now(UTC).date()

    submission_list = as_records(submissions)
    member_list = as_records(members)

    logger.info(
        "Running analytics over %d submissions and %d members",
        len(submission_list),
        len(member_list),
    )

    prev_year, prev_month = previous_month(today.year, today.month)
    monthly_comparison = calculate_monthly_comparison(
        summarize_month(submission_list, today.year, today.month),
        summarize_month(submission_list, prev_year, prev_month),
    )

    analytics = {
        "monthlyComparison": monthly_comparison,
        "yearlyTrends": calculate_yearly_trends(bucket_monthly_totals(submission_list)),
        "contributionPatterns": analyze_contribution_patterns(
            submission_list,
            member_list,
            unknown_label=config.report.unknown_member_label,
        ),
        "quarterlyStats": calculate_quarterly_stats(submission_list),
        "weeklyAverages": calculate_weekly_averages(submission_list),
        "growthTrends": analyze_growth_trends(submission_list),
    }

    logger.info(
        "Analytics complete: %d months, %d contributors, %d weeks",
        len(analytics["yearlyTrends"]),
        len(analytics["contributionPatterns"]),
        len(analytics["weeklyAverages"]),
    )

    return analytics
