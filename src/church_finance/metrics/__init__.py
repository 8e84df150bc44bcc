"""Aggregators for comparisons, trends, contribution patterns and period rollups."""

from church_finance.metrics.comparison import (
    calculate_growth_rate,
    calculate_monthly_comparison,
    summarize_month,
)
from church_finance.metrics.contributions import analyze_contribution_patterns
from church_finance.metrics.orchestrator import run_analytics
from church_finance.metrics.periods import calculate_quarterly_stats, calculate_weekly_averages
from church_finance.metrics.trends import (
    analyze_growth_trends,
    bucket_monthly_totals,
    calculate_yearly_trends,
)

__all__ = [
    "analyze_contribution_patterns",
    "analyze_growth_trends",
    "bucket_monthly_totals",
    "calculate_growth_rate",
    "calculate_monthly_comparison",
    "calculate_quarterly_stats",
    "calculate_weekly_averages",
    "calculate_yearly_trends",
    "run_analytics",
    "summarize_month",
]
