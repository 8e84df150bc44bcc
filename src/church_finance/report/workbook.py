"""Write formatted grids to an Excel workbook."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)

__all__ = ["COLUMN_WIDTH", "HEADER_ROWS", "workbook_filename", "write_workbook"]

COLUMN_WIDTH = 15

# Sheet name -> zero-based index of the column header row
HEADER_ROWS: dict[str, int] = {
    "Executive Summary": 4,
    "Transactions": 1,
    "Quarterly Analysis": 3,
    "Weekly Trends": 3,
    "Growth Analysis": 3,
    "Contributor Stats": 3,
}


def workbook_filename(date_range: Mapping[str, str]) -> str:
    """Build the report file name for a date range.

    Args:
        date_range: {start, end} ISO date strings.

    Returns:
        File name such as "Church_Financial_Report_2024-01-01_to_2024-03-31.xlsx".
    """
    start = (date_range.get("start") or "start").replace("/", "-")
    end = (date_range.get("end") or "end").replace("/", "-")
    return f"Church_Financial_Report_{start}_to_{end}.xlsx"


def write_workbook(
    sheets: Mapping[str, list[list[Any]]],
    output_path: Path,
    header_rows: Mapping[str, int] | None = None,
) -> Path:
    """Write each grid to its own worksheet.

    The title row and the column header row of every sheet are bolded and
    every used column is set to a fixed width.

    Args:
        sheets: Ordered mapping of sheet name to grid of cell values.
        output_path: Destination .xlsx path.
        header_rows: Sheet name to header row index. Defaults to HEADER_ROWS.

    Returns:
        The output path.
    """
    header_rows = HEADER_ROWS if header_rows is None else header_rows
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with pd.ExcelWriter(output_path, engine="xlsxwriter") as writer:
        bold = writer.book.add_format({"bold": True})
        header = writer.book.add_format(
            {"bold": True, "font_color": "#FFFFFF", "bg_color": "#4F46E5", "border": 1}
        )

        for sheet_name, grid in sheets.items():
            df = pd.DataFrame(grid)
            df.to_excel(writer, sheet_name=sheet_name, header=False, index=False)

            worksheet = writer.sheets[sheet_name]
            if grid:
                worksheet.set_row(0, None, bold)
            header_row = header_rows.get(sheet_name)
            if header_row is not None and header_row < len(grid):
                worksheet.set_row(header_row, None, header)
            if df.shape[1]:
                worksheet.set_column(0, df.shape[1] - 1, COLUMN_WIDTH)

            logger.debug("Wrote sheet %s (%d rows)", sheet_name, len(grid))

    logger.info("Wrote workbook with %d sheets to %s", len(sheets), output_path)
    return output_path
