"""Week-of-month helpers.

Services are counted by Sunday: week 1 starts on the first Sunday of the
month, and anything past the fifth week is folded into week 5.
"""

from datetime import date, datetime, timedelta

from church_finance.normalize.common import MAX_WEEK_NUMBER

SUNDAY = 6  # date.weekday()


def _first_sunday(year: int, month: int) -> date:
    first = date(year, month, 1)
    return first + timedelta(days=(SUNDAY - first.weekday()) % 7)


def get_week_number(d: date | datetime) -> int:
    """Get the week-of-month number for a date.

    Days before the month's first Sunday belong to week 1.

    Args:
        d: Input date.

    Returns:
        Week number between 1 and 5.
    """
    day = d.date() if isinstance(d, datetime) else d
    first_sunday = _first_sunday(day.year, day.month)
    week = (day - first_sunday).days // 7 + 1
    return max(1, min(week, MAX_WEEK_NUMBER))


def get_week_dates(week_number: int, month: int, year: int) -> tuple[date, date]:
    """Get the Sunday-to-Saturday range for a week of the month.

    Args:
        week_number: Week of month (1-based).
        month: Calendar month (1-12).
        year: Calendar year.

    Returns:
        Tuple of (start, end) dates, end being six days after start.
    """
    start = _first_sunday(year, month) + timedelta(weeks=week_number - 1)
    return start, start + timedelta(days=6)
