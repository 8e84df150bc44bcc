"""Test fixtures for church-finance.

Provides fixtures for:
- Sample submission and member snapshots
- Snapshot files and config files on disk for CLI tests
"""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest


class FakeTimestamp:
    """Document-store timestamp wrapper exposing a conversion accessor."""

    def __init__(self, value: datetime) -> None:
        self._value = value

    def to_datetime(self) -> datetime:
        return self._value


@pytest.fixture
def sample_members() -> list[dict[str, Any]]:
    """Three members, one without a last name."""
    return [
        {"id": "m1", "firstName": "Grace", "lastName": "Banda"},
        {"id": "m2", "firstName": "Peter", "lastName": "Phiri"},
        {"id": "m3", "firstName": "Ruth"},
    ]


@pytest.fixture
def sample_submissions() -> list[dict[str, Any]]:
    """Submissions spanning Feb-Apr 2024 with mixed date and amount types."""
    return [
        {
            "id": "s1",
            "date": "2024-02-04T09:00:00Z",
            "tithe": 100,
            "offering": 20,
            "memberId": "m1",
            "memberName": "Grace Banda",
            "weekNumber": 1,
        },
        {
            "id": "s2",
            "date": FakeTimestamp(datetime(2024, 2, 11, 9, 0, tzinfo=UTC)),
            "tithe": "50.50",
            "offering": "10",
            "memberId": "m2",
            "memberName": "Peter Phiri",
            "weekNumber": "2",
        },
        {
            "id": "s3",
            "date": datetime(2024, 3, 3, 9, 0, tzinfo=UTC),
            "tithe": 200,
            "offering": None,
            "memberId": "m1",
            "memberName": "Grace Banda",
            "weekNumber": 1,
        },
        {
            "id": "s4",
            "date": "2024-04-07",
            "tithe": 0,
            "offering": 40,
            "memberId": "unknown",
            "weekNumber": 1,
        },
        {
            "id": "s5",
            "date": "not a date",
            "tithe": 30,
            "offering": 0,
            "memberId": "m2",
            "memberName": "Peter Phiri",
        },
    ]


@pytest.fixture
def snapshot_dir(tmp_path: Path) -> Path:
    """Write JSON snapshots of submissions and members to a temp directory."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()

    submissions = [
        {
            "id": "s1",
            "date": "2024-01-07T09:00:00Z",
            "tithe": 100,
            "offering": 25,
            "memberId": "m1",
            "memberName": "Grace Banda",
            "weekNumber": 1,
        },
        {
            "id": "s2",
            "date": "2024-02-04T09:00:00Z",
            "tithe": "150",
            "offering": "50",
            "memberId": "m1",
            "memberName": "Grace Banda",
            "weekNumber": 1,
        },
        {
            "id": "s3",
            "date": "2024-02-11T09:00:00Z",
            "tithe": 80,
            "offering": 0,
            "memberId": "m2",
            "memberName": "Peter Phiri",
            "weekNumber": 2,
        },
        {
            "id": "s4",
            "date": "2024-06-02T09:00:00Z",
            "tithe": 60,
            "offering": 15,
            "memberId": "m2",
            "memberName": "Peter Phiri",
            "weekNumber": 1,
        },
    ]
    members = [
        {"id": "m1", "firstName": "Grace", "lastName": "Banda"},
        {"id": "m2", "firstName": "Peter", "lastName": "Phiri"},
    ]

    (data_dir / "submissions.json").write_text(json.dumps(submissions))
    (data_dir / "members.json").write_text(json.dumps({"data": members}))
    return data_dir


@pytest.fixture
def config_file(tmp_path: Path, snapshot_dir: Path) -> Path:
    """Create a config file pointing at the snapshot directory."""
    config_content = """church:
  name: "Grace Chapel"
currency:
  code: ZMW
  symbol: "K"
input:
  submissions: {submissions}
  members: {members}
report:
  output_dir: {output_dir}
date_range:
  start: "2024-01-01"
  end: "2024-03-31"
"""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        config_content.format(
            submissions=str(snapshot_dir / "submissions.json"),
            members=str(snapshot_dir / "members.json"),
            output_dir=str(tmp_path / "reports"),
        )
    )
    return config_path
