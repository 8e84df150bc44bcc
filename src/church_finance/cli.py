"""CLI entry point for church-finance.

Commands:
- analyze: Run the dashboard analytics over a snapshot and write JSON
- export: Build the financial report workbook for a date range
- receipt: Validate a submission and prepare its receipt values
"""

import json
from datetime import UTC, date, datetime
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from church_finance import __version__
from church_finance.config import DateRangeConfig, load_config
from church_finance.logging import setup_logging
from church_finance.metrics.orchestrator import run_analytics
from church_finance.normalize.common import filter_by_date_range
from church_finance.receipts import (
    find_submission,
    generate_receipt_number,
    validate_receipt_submission,
)
from church_finance.report.currency import format_currency
from church_finance.report.enhanced import generate_enhanced_report
from church_finance.report.export import (
    format_analytics_sheets,
    format_enhanced_report_for_excel,
)
from church_finance.report.workbook import workbook_filename, write_workbook
from church_finance.storage.snapshot import load_members, load_submissions

console = Console()


def _print_error(ctx: click.Context, e: Exception) -> None:
    console.print(f"\n[bold red]Error:[/bold red] {e}")
    if ctx.obj.get("verbose"):
        import traceback

        console.print("\n[dim]Traceback:[/dim]")
        console.print(traceback.format_exc())


@click.group()
@click.version_option(version=__version__, prog_name="church-finance")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output")
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Emit log lines as JSON objects",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, log_json: bool) -> None:
    """Church Finance Analytics and Report Export.

    Turn tithe and offering submission snapshots into monthly comparisons,
    trend series, contributor patterns and spreadsheet reports.

    \b
    Quick Start:
        1. Dashboard analytics: church-finance analyze --config config.yaml
        2. Excel report: church-finance export -c config.yaml --start 2024-01-01 --end 2024-12-31
        3. Receipt: church-finance receipt -c config.yaml --id <submission id>
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose=verbose, json_format=log_json)


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to config.yaml file",
)
@click.option(
    "--today",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Reference date for the month-over-month comparison (default: today)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output JSON path (default: <report.output_dir>/analytics.json)",
)
@click.pass_context
def analyze(
    ctx: click.Context,
    config: Path,
    today: datetime | None,
    output: Path | None,
) -> None:
    """Run dashboard analytics and write them as JSON.

    Output keys: monthlyComparison, yearlyTrends, contributionPatterns,
    quarterlyStats, weeklyAverages, growthTrends.
    """
    try:
        cfg = load_config(config)
        submissions = load_submissions(cfg.input.submissions)
        members = load_members(cfg.input.members)

        reference = today.date() if today is not None else datetime.now(UTC).date()
        analytics = run_analytics(submissions, members, today=reference, config=cfg)

        output = output or cfg.report.output_dir / "analytics.json"
        output.parent.mkdir(parents=True, exist_ok=True)
        with output.open("w") as f:
            json.dump(analytics, f, indent=2, default=str)

    except Exception as e:
        _print_error(ctx, e)
        raise click.Abort() from e

    comparison = analytics["monthlyComparison"]
    table = Table(title=f"{reference:%B %Y} vs previous month")
    table.add_column("Metric")
    table.add_column("Current", justify="right")
    table.add_column("Previous", justify="right")
    table.add_column("Growth", justify="right")
    for label, key in (("Tithes", "tithes"), ("Offerings", "offerings"), ("Total", "total")):
        triple = comparison[key]
        table.add_row(
            label,
            format_currency(triple["current"], cfg),
            format_currency(triple["previous"], cfg),
            f"{triple['growth']:.1f}%",
        )

    console.print(table)
    console.print()
    console.print("[bold green]Analytics complete![/bold green]")
    console.print(f"  Submissions: {len(submissions)}")
    console.print(f"  Members: {len(members)}")
    console.print(f"  Output: {output}")


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to config.yaml file",
)
@click.option(
    "--start",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="First day of the report period (default: config date_range.start)",
)
@click.option(
    "--end",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Last day of the report period (default: config date_range.end)",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the workbook (default: report.output_dir)",
)
@click.pass_context
def export(
    ctx: click.Context,
    config: Path,
    start: datetime | None,
    end: datetime | None,
    output_dir: Path | None,
) -> None:
    """Export the financial report workbook for a date range.

    Sheets: Executive Summary, Transactions, Quarterly Analysis,
    Weekly Trends, Growth Analysis, Contributor Stats.
    """
    try:
        cfg = load_config(config)

        period = _resolve_period(cfg.date_range, start, end)
        date_range = period.as_descriptor()

        submissions = filter_by_date_range(
            load_submissions(cfg.input.submissions), period.start, period.end
        )
        members = load_members(cfg.input.members)

        console.print(
            f"[bold]Exporting {len(submissions)} submissions "
            f"({date_range['start']} to {date_range['end']})[/bold]"
        )

        generated_at = datetime.now(UTC)
        report = generate_enhanced_report(
            submissions, date_range, unknown_label=cfg.report.unknown_member_label
        )
        formatted = format_enhanced_report_for_excel(report, generated_at=generated_at, config=cfg)
        analytics = run_analytics(submissions, members, today=period.end, config=cfg)

        sheets = {
            "Executive Summary": formatted["summary"],
            "Transactions": formatted["details"],
            **format_analytics_sheets(
                analytics, date_range, generated_at=generated_at, config=cfg
            ),
        }

        target_dir = output_dir or cfg.report.output_dir
        path = write_workbook(sheets, target_dir / workbook_filename(date_range))

    except click.UsageError:
        raise
    except Exception as e:
        _print_error(ctx, e)
        raise click.Abort() from e

    console.print()
    console.print("[bold green]Export complete![/bold green]")
    console.print(f"  Sheets: {len(sheets)}")
    total = format_currency(report["summary"]["totalContributions"], cfg)
    console.print(f"  Total contributions: {total}")
    console.print(f"  Output: {path}")


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to config.yaml file",
)
@click.option("--id", "submission_id", required=True, help="Submission id to receipt")
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Also write the receipt values as JSON to this path",
)
@click.pass_context
def receipt(
    ctx: click.Context,
    config: Path,
    submission_id: str,
    output: Path | None,
) -> None:
    """Validate a submission and print its receipt values.

    Submissions with negative amounts, no amount at all, or a missing id,
    date or member name are refused.
    """
    try:
        cfg = load_config(config)
        submission = find_submission(load_submissions(cfg.input.submissions), submission_id)
        if submission is None:
            msg = f"Submission not found: {submission_id}"
            raise LookupError(msg)

        data = validate_receipt_submission(submission)
        number = generate_receipt_number()

        if output is not None:
            output.parent.mkdir(parents=True, exist_ok=True)
            payload = {
                "receiptNumber": number,
                "submissionId": data.submission_id,
                "date": data.date.isoformat(),
                "memberName": data.member_name,
                "tithe": data.tithe,
                "offering": data.offering,
                "total": data.total,
                "weekNumber": data.week_number,
            }
            with output.open("w") as f:
                json.dump(payload, f, indent=2)

    except Exception as e:
        _print_error(ctx, e)
        raise click.Abort() from e

    week_start, week_end = data.week_range
    date_format = cfg.report.date_format

    table = Table(title=f"{cfg.church.name} - Contribution Receipt")
    table.add_column("Field")
    table.add_column("Value", justify="right")
    table.add_row("Receipt No.", number)
    table.add_row("Date", data.date.strftime(date_format))
    table.add_row("Member", data.member_name)
    table.add_row(
        "Week",
        f"{data.week_number} ({week_start.strftime(date_format)} - "
        f"{week_end.strftime(date_format)})",
    )
    table.add_row("Tithe", format_currency(data.tithe, cfg))
    table.add_row("Offering", format_currency(data.offering, cfg))
    table.add_row("Total", format_currency(data.total, cfg))

    console.print(table)
    console.print()
    console.print("[bold green]Receipt ready![/bold green]")
    console.print(f"  Receipt number: {number}")


def _resolve_period(
    configured: DateRangeConfig | None,
    start: datetime | None,
    end: datetime | None,
) -> DateRangeConfig:
    """Combine command-line dates with the configured range.

    Raises:
        click.UsageError: If neither source provides a start and end.
    """
    start_date: date | None = configured.start if configured else None
    end_date: date | None = configured.end if configured else None
    if start is not None:
        start_date = start.date()
    if end is not None:
        end_date = end.date()

    if start_date is None or end_date is None:
        msg = "A report period is required: pass --start/--end or set date_range in the config"
        raise click.UsageError(msg)

    return DateRangeConfig(start=start_date, end=end_date)
