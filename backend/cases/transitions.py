"""
The case state machine.

Stages move forward along ``LIFECYCLE_ORDER``::

    submitted → assigned → investigating → evidence_collection
              → under_review → resolved

Any forward jump is legal (the officer portal steps one stage at a time,
the station portal picks a stage directly).  A separate ``closed`` flag
is layered on top: it may only be raised from ``under_review`` or
``resolved`` and raising it forces ``status = resolved``.  ``reopen`` is
the one backwards move: it lowers ``closed`` and parks the case in the
``reopened`` marker, which ranks with ``submitted`` so every later stage
is reachable again.

Each ``plan_*`` function validates one request against a case snapshot
and returns the field changes it implies.  An empty dict means the
request is already satisfied and nothing needs writing.
"""

from __future__ import annotations

from typing import Any, Callable

from core.domain.exceptions import InvalidState

from .models import Case, CaseAction, CaseStatus
from .requests import (
    AdvanceStatusRequest,
    AssignOfficerRequest,
    CaseRequest,
    CloseCaseRequest,
    LinkCriminalRequest,
    ReopenCaseRequest,
)

LIFECYCLE_ORDER: tuple[str, ...] = (
    CaseStatus.SUBMITTED,
    CaseStatus.ASSIGNED,
    CaseStatus.INVESTIGATING,
    CaseStatus.EVIDENCE_COLLECTION,
    CaseStatus.UNDER_REVIEW,
    CaseStatus.RESOLVED,
)

_RANK: dict[str, int] = {status: index for index, status in enumerate(LIFECYCLE_ORDER)}
_RANK[CaseStatus.REOPENED] = _RANK[CaseStatus.SUBMITTED]

#: Stages from which a case may be closed.
CLOSEABLE_STATUSES: frozenset[str] = frozenset({
    CaseStatus.UNDER_REVIEW,
    CaseStatus.RESOLVED,
})

#: Stages in which an assignment also moves the case to ``assigned``.
ENTRY_STATUSES: frozenset[str] = frozenset({
    CaseStatus.SUBMITTED,
    CaseStatus.REOPENED,
})


def rank(status: str) -> int:
    """Position of ``status`` in the forward order."""
    try:
        return _RANK[status]
    except KeyError:
        raise InvalidState(f"Unknown case status '{status}'.")


def forward_targets(status: str) -> tuple[str, ...]:
    """Every stage strictly ahead of ``status``."""
    current = rank(status)
    return tuple(s for s in LIFECYCLE_ORDER if _RANK[s] > current)


def is_forward(current: str, target: str) -> bool:
    return target in forward_targets(current)


# ── Planners ────────────────────────────────────────────────────────


def plan_assignment(case: Case, request: AssignOfficerRequest) -> dict[str, Any]:
    if case.closed:
        raise InvalidState(
            current=case.status,
            target=CaseStatus.ASSIGNED,
            reason="a closed case cannot be assigned",
        )
    if case.officer_id is not None and not request.reassign:
        raise InvalidState(
            f"FIR #{case.pk} is already assigned to officer #{case.officer_id}."
        )

    changes: dict[str, Any] = {}
    if case.officer_id != request.officer_id:
        changes["officer_id"] = request.officer_id
    if case.status in ENTRY_STATUSES:
        changes["status"] = CaseStatus.ASSIGNED
    return changes


def plan_advance(case: Case, request: AdvanceStatusRequest) -> dict[str, Any]:
    target = request.target_status
    if target not in _RANK or target in ENTRY_STATUSES:
        raise InvalidState(
            current=case.status,
            target=target,
            reason="not a stage a case can be advanced to",
        )
    if case.officer_id is None:
        raise InvalidState(
            current=case.status,
            target=target,
            reason="no officer is assigned",
        )
    if not is_forward(case.status, target):
        raise InvalidState(
            current=case.status,
            target=target,
            reason="status may only move forward",
        )
    # Resolving does not close: closing is its own request.
    return {"status": target}


def plan_close(case: Case, request: CloseCaseRequest) -> dict[str, Any]:
    if case.closed:
        raise InvalidState(f"FIR #{case.pk} is already closed.")
    if case.status not in CLOSEABLE_STATUSES:
        raise InvalidState(
            current=case.status,
            target="closed",
            reason="case must be under review or resolved",
        )
    return {"closed": True, "status": CaseStatus.RESOLVED}


def plan_reopen(case: Case, request: ReopenCaseRequest) -> dict[str, Any]:
    if not case.closed:
        raise InvalidState(
            current=case.status,
            target=CaseStatus.REOPENED,
            reason="only a closed case can be reopened",
        )
    return {"closed": False, "status": CaseStatus.REOPENED}


def plan_link_criminal(case: Case, request: LinkCriminalRequest) -> dict[str, Any]:
    if case.criminal_id == request.criminal_id:
        return {}
    return {"criminal_id": request.criminal_id}


_PLANNERS: dict[type, Callable[[Case, Any], dict[str, Any]]] = {
    AssignOfficerRequest: plan_assignment,
    AdvanceStatusRequest: plan_advance,
    CloseCaseRequest: plan_close,
    ReopenCaseRequest: plan_reopen,
    LinkCriminalRequest: plan_link_criminal,
}


def plan(case: Case, request: CaseRequest) -> dict[str, Any]:
    """
    Validate ``request`` against ``case`` and return the field changes.

    Raises
    ------
    InvalidState
        If the request is not legal from the case's current state.
    TypeError
        If ``request`` is not a lifecycle request type.
    """
    try:
        planner = _PLANNERS[type(request)]
    except KeyError:
        raise TypeError(f"Unsupported lifecycle request: {type(request).__name__}")
    return planner(case, request)


def action_for(case: Case, request: CaseRequest) -> str:
    """Audit-log action describing ``request`` applied to ``case``."""
    if isinstance(request, AssignOfficerRequest):
        return CaseAction.REASSIGN if case.officer_id is not None else CaseAction.ASSIGN
    return {
        AdvanceStatusRequest: CaseAction.ADVANCE,
        CloseCaseRequest: CaseAction.CLOSE,
        ReopenCaseRequest: CaseAction.REOPEN,
        LinkCriminalRequest: CaseAction.LINK_CRIMINAL,
    }[type(request)]
