"""Record models for snapshots read from disk.

The aggregators accept raw records and coerce every field themselves, so
these models only check record shape: a submission may carry any value in
any field, and a member must have an id. Unknown fields are kept.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class Submission(BaseModel):
    """One recorded contribution event."""

    model_config = ConfigDict(extra="allow")

    id: Any = None
    date: Any = None
    tithe: Any = None
    offering: Any = None
    memberId: Any = None  # noqa: N815
    memberName: Any = None  # noqa: N815
    weekNumber: Any = None  # noqa: N815


class Member(BaseModel):
    """Church member record."""

    model_config = ConfigDict(extra="allow")

    id: str | int
    firstName: Any = None  # noqa: N815
    lastName: Any = None  # noqa: N815
