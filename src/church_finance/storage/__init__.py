"""Snapshot storage for submission and member records."""

from church_finance.storage.snapshot import (
    load_members,
    load_submissions,
    read_json_records,
    read_jsonl_data,
)

__all__ = ["load_members", "load_submissions", "read_json_records", "read_jsonl_data"]
