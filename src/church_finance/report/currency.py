"""Currency and percentage formatting for display cells."""

from typing import Any

from church_finance.config import Config, default_config
from church_finance.normalize.common import parse_amount

__all__ = ["format_currency", "format_percentage"]


def format_currency(amount: Any, config: Config | None = None) -> str:
    """Format an amount with the configured currency symbol.

    Args:
        amount: Amount to format; None and unparseable values render as zero.
        config: Application configuration (currency symbol).

    Returns:
        String such as "K1,234.50" or "-K20.00".
    """
    config = config or default_config()
    value = parse_amount(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}{config.currency.symbol}{abs(value):,.2f}"


def format_percentage(value: Any) -> str:
    """Format a percentage with one decimal place, e.g. "12.5%"."""
    return f"{parse_amount(value):.1f}%"
