"""Receipt data preparation.

Validates a submission before a receipt is issued and derives the values
printed on it. Layout and rendering are handled elsewhere.
"""

import logging
import random
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any

from church_finance.normalize.common import (
    as_records,
    get_field,
    normalize_date,
    parse_amount,
    parse_week_number,
)
from church_finance.normalize.weeks import get_week_dates, get_week_number

logger = logging.getLogger(__name__)


class ReceiptValidationError(ValueError):
    """Raised when a submission cannot be receipted."""


@dataclass(frozen=True)
class ReceiptData:
    """Values printed on a contribution receipt."""

    submission_id: str
    date: datetime
    member_name: str
    tithe: float
    offering: float
    week_number: int

    @property
    def total(self) -> float:
        return self.tithe + self.offering

    @property
    def week_range(self) -> tuple[date, date]:
        """Sunday-to-Saturday dates of the service week."""
        return get_week_dates(self.week_number, self.date.month, self.date.year)


def validate_receipt_submission(submission: Any) -> ReceiptData:
    """Validate a submission for receipt generation.

    Args:
        submission: Submission record.

    Returns:
        ReceiptData with parsed amounts. The week number is derived from the
        date when the submission has none.

    Raises:
        ReceiptValidationError: If id, date or member name is missing, the date
            is unparseable, either amount is negative, or both amounts are zero.
    """
    submission_id = get_field(submission, "id")
    raw_date = get_field(submission, "date")
    member_name = get_field(submission, "memberName")

    if not submission_id or not raw_date or not member_name:
        msg = "Missing required submission data"
        raise ReceiptValidationError(msg)

    tithe = parse_amount(get_field(submission, "tithe"))
    offering = parse_amount(get_field(submission, "offering"))

    if tithe < 0 or offering < 0:
        msg = "Invalid amount: Negative values are not allowed"
        raise ReceiptValidationError(msg)
    if tithe == 0 and offering == 0:
        msg = "Invalid amount: No valid contribution found"
        raise ReceiptValidationError(msg)

    submitted_at = normalize_date(raw_date)
    if submitted_at is None:
        msg = "Invalid submission date"
        raise ReceiptValidationError(msg)

    raw_week = get_field(submission, "weekNumber")
    week_number = (
        get_week_number(submitted_at) if raw_week is None else parse_week_number(raw_week)
    )

    return ReceiptData(
        submission_id=str(submission_id),
        date=submitted_at,
        member_name=str(member_name),
        tithe=tithe,
        offering=offering,
        week_number=week_number,
    )


def find_submission(submissions: Any, submission_id: str) -> Any | None:
    """Return the first submission whose id matches, compared as text."""
    for submission in as_records(submissions):
        if str(get_field(submission, "id")) == submission_id:
            return submission
    return None


def generate_receipt_number(
    when: datetime | None = None,
    rng: random.Random | None = None,
) -> str:
    """Generate a receipt number of the form ``RCP-YYMM-NNNN``.

    Args:
        when: Issue date. Defaults to now.
        rng: Random source for the serial suffix.

    Returns:
        Receipt number string.
    """
    when = when or datetime.now(UTC)
    rng = rng or random.Random()
    serial = rng.randrange(10000)
    number = f"RCP-{when:%y%m}-{serial:04d}"
    logger.debug("Generated receipt number %s", number)
    return number
