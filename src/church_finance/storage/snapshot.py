"""Read submission and member snapshots exported from the document store.

Two layouts are accepted:

- ``.json``: a list of records, or an object whose ``data`` field is the list
- ``.jsonl``: one record per line, optionally wrapped in an envelope
  ``{"timestamp": ..., "source": ..., "data": {...}}``

Records are shape-checked against the record models and returned as plain
dicts holding the fields present in the file. Submissions without a week
number get one derived from their date.
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from church_finance.models import Member, Submission
from church_finance.normalize.common import normalize_date
from church_finance.normalize.weeks import get_week_number
from church_finance.validation import is_valid_currency, is_valid_date

logger = logging.getLogger(__name__)

__all__ = ["load_members", "load_submissions", "read_json_records", "read_jsonl_data"]


def read_jsonl_data(path: Path) -> Iterator[dict[str, Any]]:
    """Read records from a JSONL file.

    Enveloped lines yield their ``data`` field; bare objects are yielded as-is.

    Args:
        path: Path to JSONL file.

    Yields:
        Record dictionaries.

    Raises:
        FileNotFoundError: If file doesn't exist.
    """
    if not path.exists():
        msg = f"File not found: {path}"
        raise FileNotFoundError(msg)

    with path.open() as f:
        for line_num, line in enumerate(f, 1):
            if not line.strip():
                continue
            try:
                payload = json.loads(line)
            except json.JSONDecodeError as e:
                logger.warning("Failed to parse JSON at %s:%d: %s", path, line_num, e)
                continue

            if not isinstance(payload, dict):
                logger.warning("Expected an object at %s:%d", path, line_num)
                continue

            record = payload["data"] if "data" in payload else payload
            if isinstance(record, dict):
                yield record
            else:
                logger.warning("Invalid 'data' field in envelope at %s:%d", path, line_num)


def read_json_records(path: Path) -> list[dict[str, Any]]:
    """Read records from a JSON or JSONL file.

    Args:
        path: Path to .json or .jsonl file.

    Returns:
        List of record dictionaries.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If a .json file is not a list or {"data": [...]} object.
    """
    if path.suffix == ".jsonl":
        return list(read_jsonl_data(path))

    if not path.exists():
        msg = f"File not found: {path}"
        raise FileNotFoundError(msg)

    with path.open() as f:
        payload = json.load(f)

    if isinstance(payload, dict):
        payload = payload.get("data")

    if not isinstance(payload, list):
        msg = f"Expected a list of records in {path}"
        raise ValueError(msg)

    records = [record for record in payload if isinstance(record, dict)]
    if len(records) != len(payload):
        logger.warning("Skipped %d non-object entries in %s", len(payload) - len(records), path)
    return records


def _validate(
    records: list[dict[str, Any]],
    model: type[BaseModel],
    path: Path,
) -> list[dict[str, Any]]:
    valid: list[dict[str, Any]] = []
    for index, record in enumerate(records):
        try:
            valid.append(model.model_validate(record).model_dump(exclude_unset=True))
        except ValidationError as e:
            logger.warning(
                "Skipping invalid %s record %d in %s: %s",
                model.__name__,
                index,
                path,
                e.errors()[0]["msg"],
            )
    return valid


def _fill_week_numbers(submissions: list[dict[str, Any]]) -> int:
    filled = 0
    for submission in submissions:
        if submission.get("weekNumber") is not None:
            continue
        dt = normalize_date(submission.get("date"))
        if dt is not None:
            submission["weekNumber"] = get_week_number(dt)
            filled += 1
    return filled


def _log_data_quality(submissions: list[dict[str, Any]], path: Path) -> None:
    undated = sum(1 for s in submissions if not is_valid_date(s.get("date")))
    negative = sum(
        1
        for s in submissions
        if any(
            isinstance(s.get(field), int | float | str)
            and not isinstance(s.get(field), bool)
            and not is_valid_currency(s.get(field))
            for field in ("tithe", "offering")
        )
    )
    if undated:
        logger.warning("%d submissions in %s have no parseable date", undated, path)
    if negative:
        logger.warning("%d submissions in %s carry negative amounts", negative, path)


def load_submissions(path: Path) -> list[dict[str, Any]]:
    """Load submission records.

    Field values are passed through unchanged for the aggregators to coerce,
    except that a missing week number is derived from the submission date.
    Undated submissions and negative amounts are reported but kept.

    Args:
        path: Path to submissions snapshot.

    Returns:
        List of submission dictionaries.
    """
    submissions = _validate(read_json_records(path), Submission, path)
    filled = _fill_week_numbers(submissions)
    if filled:
        logger.debug("Derived week numbers for %d submissions from their dates", filled)
    _log_data_quality(submissions, path)
    logger.info("Loaded %d submissions from %s", len(submissions), path)
    return submissions


def load_members(path: Path | None) -> list[dict[str, Any]]:
    """Load and validate member records.

    Args:
        path: Path to members snapshot, or None when no member data is used.

    Returns:
        List of member dictionaries (empty when path is None).
    """
    if path is None:
        return []
    members = _validate(read_json_records(path), Member, path)
    logger.info("Loaded %d members from %s", len(members), path)
    return members
