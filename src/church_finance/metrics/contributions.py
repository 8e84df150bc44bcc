"""Per-member contribution patterns.

Every member with an id gets a pattern entry, even with no contributions.
Submissions only count towards a pattern when their memberId matches a known
member; unmatched submissions are ignored here but still count in the other
aggregations.
"""

import logging
from collections.abc import Hashable, Sequence
from typing import Any

from church_finance.normalize.common import (
    UNKNOWN_MEMBER,
    as_records,
    get_field,
    member_display_name,
    normalize_date,
    submission_total,
)

logger = logging.getLogger(__name__)

__all__ = ["analyze_contribution_patterns"]


def analyze_contribution_patterns(
    submissions: Sequence[Any] | None,
    members: Sequence[Any] | None,
    unknown_label: str = UNKNOWN_MEMBER,
) -> list[dict[str, Any]]:
    """Roll up contribution total, frequency and recency per member.

    Args:
        submissions: Raw submission records.
        members: Raw member records.
        unknown_label: Display name for members without a full name.

    Returns:
        List of patterns {memberId, memberName, totalContributions, frequency,
        averageAmount, lastContribution}, sorted by totalContributions
        descending. Ties keep member order.
    """
    patterns: dict[Any, dict[str, Any]] = {}

    for member in as_records(members):
        member_id = get_field(member, "id")
        if not member_id:
            continue
        if not isinstance(member_id, Hashable):
            logger.debug("Skipping member with unhashable id of type %s", type(member_id).__name__)
            continue
        patterns[member_id] = {
            "memberId": member_id,
            "memberName": member_display_name(member, unknown_label),
            "totalContributions": 0.0,
            "frequency": 0,
            "averageAmount": 0.0,
            "lastContribution": None,
        }

    unmatched = 0
    for submission in as_records(submissions):
        member_id = get_field(submission, "memberId")
        known = member_id and isinstance(member_id, Hashable)
        pattern = patterns.get(member_id) if known else None
        if pattern is None:
            unmatched += 1
            continue

        pattern["totalContributions"] += submission_total(submission)
        pattern["frequency"] += 1

        submitted_at = normalize_date(get_field(submission, "date"))
        last = pattern["lastContribution"]
        if submitted_at is not None and (last is None or submitted_at > last):
            pattern["lastContribution"] = submitted_at

    if unmatched:
        logger.debug("%d submissions had no matching member", unmatched)

    results = []
    for pattern in patterns.values():
        frequency = pattern["frequency"]
        average = pattern["totalContributions"] / frequency if frequency > 0 else 0.0
        results.append({**pattern, "averageAmount": average})

    results.sort(key=lambda p: p["totalContributions"], reverse=True)
    return results
