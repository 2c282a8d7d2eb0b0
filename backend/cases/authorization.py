"""
Role authorizer for case lifecycle requests.

``authorize(principal, request, case)`` answers *may this principal ask
for this change on this case?*  It never looks at whether the change is
legal from the case's current stage; that is the transition table's job.

Rules
-----
┌────────────────────┬──────────────────────────────────────────────────┐
│ Request            │ Allowed principals                               │
├────────────────────┼──────────────────────────────────────────────────┤
│ FileCase           │ citizen, for their own victim id                 │
│ AssignOfficer      │ station-admin of the case's station (any officer │
│                    │ of the station, may reassign); officer assigning │
│                    │ themselves to an unassigned case                 │
│ AdvanceStatus      │ the assigned officer; station-admin of station   │
│ CloseCase          │ the assigned officer; station-admin of station   │
│ ReopenCase         │ station-admin of station; system-admin           │
│ LinkCriminal       │ officer of station; station-admin of station     │
└────────────────────┴──────────────────────────────────────────────────┘

Principals backed by an unapproved officer or station record are denied
everything.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from accounts.services import Principal
from core.domain.exceptions import PermissionDenied

from .models import Case
from .requests import (
    AdvanceStatusRequest,
    AssignOfficerRequest,
    CloseCaseRequest,
    FileCaseRequest,
    LinkCriminalRequest,
    ReopenCaseRequest,
)


@dataclass(frozen=True)
class Decision:
    """Outcome of an authorization check."""

    allowed: bool
    reason: str = ""

    @classmethod
    def allow(cls) -> Decision:
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> Decision:
        return cls(allowed=False, reason=reason)


def _runs_station(principal: Principal, case: Case) -> bool:
    return principal.is_station_admin and principal.station_id == case.station_id


def _is_assigned_officer(principal: Principal, case: Case) -> bool:
    return (
        principal.is_officer
        and case.officer_id is not None
        and principal.officer_id == case.officer_id
    )


def _file_rule(principal: Principal, request: FileCaseRequest, case: Case | None) -> Decision:
    if not principal.is_citizen:
        return Decision.deny("Only citizens can file a complaint.")
    if request.victim_id != principal.user_id:
        return Decision.deny("Citizens may only file complaints on their own behalf.")
    return Decision.allow()


def _assign_rule(principal: Principal, request: AssignOfficerRequest, case: Case) -> Decision:
    from .assignment import AssignmentPolicy

    return AssignmentPolicy.authorize_assigner(principal, request, case)


def _work_rule(principal: Principal, request: Any, case: Case) -> Decision:
    if _is_assigned_officer(principal, case) or _runs_station(principal, case):
        return Decision.allow()
    return Decision.deny(
        "Only the assigned officer or the station administrator may change this case."
    )


def _reopen_rule(principal: Principal, request: ReopenCaseRequest, case: Case) -> Decision:
    if principal.is_system_admin or _runs_station(principal, case):
        return Decision.allow()
    return Decision.deny("Only a station or system administrator may reopen a case.")


def _link_rule(principal: Principal, request: LinkCriminalRequest, case: Case) -> Decision:
    if (principal.is_officer or principal.is_station_admin) and principal.station_id == case.station_id:
        return Decision.allow()
    return Decision.deny(
        "Only officers or the administrator of the owning station may link criminal records."
    )


_RULES: dict[type, Callable[[Principal, Any, Any], Decision]] = {
    FileCaseRequest: _file_rule,
    AssignOfficerRequest: _assign_rule,
    AdvanceStatusRequest: _work_rule,
    CloseCaseRequest: _work_rule,
    ReopenCaseRequest: _reopen_rule,
    LinkCriminalRequest: _link_rule,
}


def authorize(principal: Principal, request: Any, case: Case | None = None) -> Decision:
    """
    Decide whether ``principal`` may issue ``request`` against ``case``.

    ``case`` is ``None`` only for ``FileCaseRequest``.  Unknown request
    types are denied.
    """
    rule = _RULES.get(type(request))
    if rule is None:
        return Decision.deny(f"Unsupported request: {type(request).__name__}.")
    if not principal.approved:
        return Decision.deny("Your officer or station record is not approved.")
    if case is None and not isinstance(request, FileCaseRequest):
        return Decision.deny("A case is required for this request.")
    return rule(principal, request, case)


def enforce(principal: Principal, request: Any, case: Case | None = None) -> None:
    """
    Raise ``PermissionDenied`` unless ``authorize`` allows the request.
    """
    decision = authorize(principal, request, case)
    if not decision.allowed:
        raise PermissionDenied(decision.reason)
