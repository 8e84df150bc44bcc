"""Report assembly and spreadsheet export.

Modules:
    enhanced: summary + detail report assembly
    export: grid formatting for spreadsheet sheets
    currency: currency and percentage display formatting
    workbook: .xlsx output via pandas
"""

from .currency import format_currency, format_percentage
from .enhanced import generate_enhanced_report
from .export import format_analytics_sheets, format_enhanced_report_for_excel
from .workbook import workbook_filename, write_workbook

__all__ = [
    "format_analytics_sheets",
    "format_currency",
    "format_enhanced_report_for_excel",
    "format_percentage",
    "generate_enhanced_report",
    "workbook_filename",
    "write_workbook",
]
