"""Format reports and analytics into spreadsheet grids.

Each grid is a list of rows, each row a list of display-ready cell values.
Styling, sheet registration and file output belong to the workbook writer;
nothing here touches the filesystem.

Sheet layouts:
    summary: title, generation timestamp, period, blank, key metrics
    details: title, header row, one row per transaction
    analytics sheets: title, generation timestamp, period, header row (row 4),
        data rows
"""

import logging
from datetime import UTC, datetime
from typing import Any

from church_finance.config import Config, default_config
from church_finance.normalize.common import get_field, normalize_date, parse_amount
from church_finance.report.currency import format_currency, format_percentage

logger = logging.getLogger(__name__)

__all__ = [
    "NO_DATA",
    "format_analytics_sheets",
    "format_enhanced_report_for_excel",
]

NO_DATA = "No data available"

Grid = list[list[Any]]


def _period_line(date_range: Any) -> str:
    start = get_field(date_range, "start") or ""
    end = get_field(date_range, "end") or ""
    return f"{start} to {end}"


def _format_date(value: Any, config: Config) -> str:
    dt = normalize_date(value)
    return dt.strftime(config.report.date_format) if dt is not None else "N/A"


def _sheet_preamble(title: str, generated: str, date_range: Any) -> Grid:
    return [
        [title],
        ["Generated on:", generated],
        ["Period:", _period_line(date_range)],
    ]


def format_enhanced_report_for_excel(
    report: Any,
    generated_at: datetime | None = None,
    config: Config | None = None,
) -> dict[str, Grid]:
    """Render an enhanced report as summary and detail grids.

    Args:
        report: Output of generate_enhanced_report.
        generated_at: Timestamp printed on the summary sheet. Defaults to now.
        config: Application configuration (church name, currency, formats).

    Returns:
        Dictionary with "summary" and "details" grids. A report without a
        summary yields single-cell placeholder grids.
    """
    summary = get_field(report, "summary")
    if not summary:
        logger.warning("Report has no summary, exporting placeholder sheets")
        return {"summary": [[NO_DATA]], "details": [[NO_DATA]]}

    config = config or default_config()
    generated_at = generated_at or datetime.now(UTC)

    def money(key: str) -> str:
        return format_currency(get_field(summary, key), config)

    summary_sheet: Grid = [
        [f"{config.church.name} - Summary Report"],
        ["Generated on:", generated_at.strftime(config.report.datetime_format)],
        ["Period:", _period_line(get_field(report, "dateRange"))],
        [""],
        ["Key Metrics"],
        ["Total Contributions:", money("totalContributions")],
        ["Total Tithes:", money("totalTithes")],
        ["Total Offerings:", money("totalOfferings")],
        ["Average Contribution:", money("averageContribution")],
        ["Number of Contributions:", get_field(summary, "numberOfContributions", 0)],
    ]

    details_sheet: Grid = [
        ["Detailed Transactions"],
        ["Date", "Member Name", "Tithe", "Offering", "Total", "Week"],
    ]
    for item in get_field(report, "details") or []:
        tithe = parse_amount(get_field(item, "tithe"))
        offering = parse_amount(get_field(item, "offering"))
        details_sheet.append(
            [
                _format_date(get_field(item, "date"), config),
                get_field(item, "memberName"),
                format_currency(tithe, config),
                format_currency(offering, config),
                format_currency(tithe + offering, config),
                get_field(item, "weekNumber"),
            ]
        )

    return {"summary": summary_sheet, "details": details_sheet}


def format_analytics_sheets(
    analytics: dict[str, Any],
    date_range: Any,
    generated_at: datetime | None = None,
    config: Config | None = None,
) -> dict[str, Grid]:
    """Render the dashboard analytics as additional workbook sheets.

    Args:
        analytics: Output of run_analytics.
        date_range: {start, end} descriptor printed on every sheet.
        generated_at: Timestamp printed on every sheet. Defaults to now.
        config: Application configuration.

    Returns:
        Ordered mapping of sheet name to grid: Quarterly Analysis,
        Weekly Trends, Growth Analysis, Contributor Stats.
    """
    config = config or default_config()
    generated_at = generated_at or datetime.now(UTC)
    generated = generated_at.strftime(config.report.datetime_format)

    def money(value: Any) -> str:
        return format_currency(value, config)

    quarterly = _sheet_preamble("Quarterly Analysis", generated, date_range)
    quarterly.append(["Quarter", "Tithes", "Offerings", "Total", "Share of Year"])
    for stat in analytics.get("quarterlyStats", []):
        quarterly.append(
            [
                stat["quarter"],
                money(stat["tithes"]),
                money(stat["offerings"]),
                money(stat["total"]),
                format_percentage(stat.get("percentage", 0.0)),
            ]
        )

    weekly = _sheet_preamble("Weekly Trends", generated, date_range)
    weekly.append(["Week", "Average Tithes", "Average Offerings", "Total", "Contributions"])
    for week in analytics.get("weeklyAverages", []):
        weekly.append(
            [
                week["week"],
                money(week["avgTithes"]),
                money(week["avgOfferings"]),
                money(week["totalContributions"]),
                week["contributionCount"],
            ]
        )

    growth = _sheet_preamble("Growth Analysis", generated, date_range)
    growth.append(["Month", "Total", "Tithes", "Contributors", "Growth Rate", "Retention Rate"])
    for point in analytics.get("growthTrends", []):
        growth.append(
            [
                point["month"],
                money(point["total"]),
                money(point["tithes"]),
                point["contributorCount"],
                format_percentage(point.get("growthRate", 0.0)),
                format_percentage(point.get("retentionRate", 0.0)),
            ]
        )

    contributors = _sheet_preamble("Contributor Statistics", generated, date_range)
    contributors.append(
        ["Member", "Total Contributions", "Frequency", "Average Amount", "Last Contribution"]
    )
    for pattern in analytics.get("contributionPatterns", []):
        contributors.append(
            [
                pattern["memberName"],
                money(pattern["totalContributions"]),
                pattern["frequency"],
                money(pattern["averageAmount"]),
                _format_date(pattern["lastContribution"], config),
            ]
        )

    return {
        "Quarterly Analysis": quarterly,
        "Weekly Trends": weekly,
        "Growth Analysis": growth,
        "Contributor Stats": contributors,
    }
