"""
Typed lifecycle requests.

One immutable request type per lifecycle operation.  The authorizer and
the transition table dispatch on the request *type*, so every operation
has exactly one rule in each table and an unknown request type is
rejected instead of falling through on whatever fields happen to exist.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass


@dataclass(frozen=True)
class FileCaseRequest:
    """A citizen files a new complaint with a station."""

    victim_id: int
    station_id: int
    description: str
    incident_date: datetime.date | None = None
    incident_location: str = ""
    complain_date: datetime.date | None = None


@dataclass(frozen=True)
class AssignOfficerRequest:
    """
    Put an officer on a case.

    ``reassign`` states that the caller knowingly replaces an existing
    assignment; without it an already-assigned case is left untouched.
    """

    officer_id: int
    reassign: bool = False


@dataclass(frozen=True)
class AdvanceStatusRequest:
    """Move the case forward to ``target_status``."""

    target_status: str


@dataclass(frozen=True)
class CloseCaseRequest:
    """Close a case that is under review or resolved."""


@dataclass(frozen=True)
class ReopenCaseRequest:
    """Reopen a closed case."""


@dataclass(frozen=True)
class LinkCriminalRequest:
    """Attach the case to a criminal record."""

    criminal_id: int


CaseRequest = (
    AssignOfficerRequest
    | AdvanceStatusRequest
    | CloseCaseRequest
    | ReopenCaseRequest
    | LinkCriminalRequest
)
