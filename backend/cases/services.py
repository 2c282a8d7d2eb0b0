"""
Cases app Service Layer.

This module is the **single source of truth** for the case lifecycle.
Every portal (citizen, officer, station administrator, system
administrator) goes through the same service calls; views only parse
input, call a service and serialize the result.

Architecture
------------
- ``CaseLifecycleService`` — filing plus the five mutating transitions
  (assign, advance, close, reopen, link criminal).
- ``CaseQueryService``     — role-scoped reads, work-queue views,
  search and ordering.
- ``CaseTrackingService``  — citizen-facing progress summary built from
  the audit log.

Each mutating call is one bounded read-validate-write cycle:

    1. ``CaseStore.get``         — snapshot with version.
    2. ``authorization.enforce`` — may this principal ask for this?
    3. ``AssignmentPolicy``      — (assign only) is the officer eligible?
       ``CriminalService``       — (link only) does the record exist?
    4. ``transitions.plan``      — is it legal from here; what changes?
    5. ``CaseStore.put``         — conditional write + audit row.

A lost race at step 5 restarts the cycle from step 1 up to
``settings.CASE_LIFECYCLE["CONFLICT_RETRIES"]`` times before ``Conflict``
is raised.  A denial or validation failure at any step writes nothing.
"""

from __future__ import annotations

import logging
from typing import Any

from django.conf import settings
from django.db.models import Q, QuerySet

from accounts.services import Principal
from core.domain.access import ScopeRules, apply_role_scope
from core.domain.exceptions import InvalidStation, NotFound
from core.domain.transactions import StaleWrite, retry_on_conflict, run_in_atomic
from criminals.services import CriminalService
from stations.services import StationQueryService

from . import transitions
from .assignment import AssignmentPolicy
from .authorization import enforce
from .models import Case, CaseAction, CaseStatus, CaseStatusLog
from .requests import (
    AdvanceStatusRequest,
    AssignOfficerRequest,
    CaseRequest,
    CloseCaseRequest,
    FileCaseRequest,
    LinkCriminalRequest,
    ReopenCaseRequest,
)
from .store import CaseStore

logger = logging.getLogger(__name__)

_DEFAULT_CONFLICT_RETRIES = 3


def _conflict_retries() -> int:
    config = getattr(settings, "CASE_LIFECYCLE", {})
    return int(config.get("CONFLICT_RETRIES", _DEFAULT_CONFLICT_RETRIES))


def _describe(request: CaseRequest) -> str:
    """Audit-log message for a committed request."""
    if isinstance(request, AssignOfficerRequest):
        return f"Officer #{request.officer_id} assigned."
    if isinstance(request, AdvanceStatusRequest):
        return f"Status advanced to {request.target_status}."
    if isinstance(request, CloseCaseRequest):
        return "Case closed."
    if isinstance(request, ReopenCaseRequest):
        return "Case reopened."
    if isinstance(request, LinkCriminalRequest):
        return f"Linked to criminal record #{request.criminal_id}."
    return ""


# ═══════════════════════════════════════════════════════════════════
#  Case Lifecycle Service
# ═══════════════════════════════════════════════════════════════════


class CaseLifecycleService:
    """
    The lifecycle engine.

    Stateless between calls; all durable state lives in the case store.
    Resolving a case and closing it are two separate calls: advancing to
    ``resolved`` leaves ``closed`` untouched.
    """

    @staticmethod
    def file_case(
        citizen_id: int,
        station_id: int,
        payload: dict[str, Any],
        principal: Principal,
    ) -> Case:
        """
        **Citizen files a complaint.**

        Parameters
        ----------
        citizen_id : int
            The filing citizen (becomes ``victim``).
        station_id : int
            The station that will own the case.
        payload : dict
            ``description`` (required), ``incident_date``,
            ``incident_location``, ``complain_date``.
        principal : Principal
            Must be the citizen ``citizen_id``.

        Returns
        -------
        Case
            New case with ``status=submitted``, no officer, ``closed=False``.

        Raises
        ------
        PermissionDenied
            If the principal is not that citizen.
        NotFound
            If the station does not exist.
        InvalidStation
            If the station is not approved.
        """
        request = FileCaseRequest(
            victim_id=citizen_id,
            station_id=station_id,
            description=payload.get("description", ""),
            incident_date=payload.get("incident_date"),
            incident_location=payload.get("incident_location", ""),
            complain_date=payload.get("complain_date"),
        )
        enforce(principal, request)

        station = StationQueryService.get_station(station_id)
        if not station.approval:
            raise InvalidStation(f"Station #{station_id} is not approved to receive complaints.")

        case = run_in_atomic(
            CaseStore.create,
            victim_id=request.victim_id,
            station_id=station.sid,
            payload={
                "description": request.description,
                "incident_date": request.incident_date,
                "incident_location": request.incident_location,
                "complain_date": request.complain_date,
            },
            actor_id=principal.user_id,
        )

        logger.info(
            "FIR #%d filed by citizen #%d at station #%d",
            case.pk,
            citizen_id,
            station.sid,
        )
        return case

    @staticmethod
    def assign_officer(
        case_id: int,
        officer_id: int,
        principal: Principal,
        *,
        reassign: bool = False,
    ) -> Case:
        """
        **Put an officer on a case.**

        A ``submitted`` (or ``reopened``) case moves to ``assigned`` in the
        same write; a case further along keeps its status and only the
        officer changes.

        Raises
        ------
        PermissionDenied
            Officer assigning someone else, officer reassigning, or an
            administrator of another station.
        NotFound
            Unknown case or officer.
        OfficerNotEligible
            Officer unapproved or from another station.
        InvalidState
            Case closed, or already assigned and ``reassign`` not set.
        Conflict
            Concurrent writers exhausted the retry budget.
        """
        request = AssignOfficerRequest(officer_id=officer_id, reassign=reassign)
        return CaseLifecycleService.execute(case_id, request, principal)

    @staticmethod
    def advance_status(case_id: int, target_status: str, principal: Principal) -> Case:
        """
        **Move a case forward to ``target_status``.**

        Any forward stage is accepted, not only the next one.  Reaching
        ``resolved`` does not close the case; call ``close_case`` as well.

        Raises
        ------
        PermissionDenied
            Not the assigned officer nor the station administrator.
        InvalidState
            Target not ahead of the current stage, or no officer assigned.
        """
        request = AdvanceStatusRequest(target_status=target_status)
        return CaseLifecycleService.execute(case_id, request, principal)

    @staticmethod
    def close_case(case_id: int, principal: Principal) -> Case:
        """
        **Close a case.**  Sets ``closed=True`` and ``status=resolved``.

        Raises
        ------
        InvalidState
            Case not under review / resolved, or already closed.
        """
        return CaseLifecycleService.execute(case_id, CloseCaseRequest(), principal)

    @staticmethod
    def reopen_case(case_id: int, principal: Principal) -> Case:
        """
        **Reopen a closed case.**  Sets ``closed=False`` and
        ``status=reopened``.

        Raises
        ------
        PermissionDenied
            Caller is neither the station's administrator nor a system
            administrator.
        InvalidState
            Case is not closed.
        """
        return CaseLifecycleService.execute(case_id, ReopenCaseRequest(), principal)

    @staticmethod
    def link_criminal(case_id: int, criminal_id: int, principal: Principal) -> Case:
        """
        **Attach a criminal record to a case.**  Linking the record the
        case already points at writes nothing; a different record
        replaces the current link.

        Raises
        ------
        PermissionDenied
            Not an officer nor the administrator of the owning station.
        NotFound
            Unknown case or criminal record.
        """
        request = LinkCriminalRequest(criminal_id=criminal_id)
        return CaseLifecycleService.execute(case_id, request, principal)

    @staticmethod
    def execute(case_id: int, request: CaseRequest, principal: Principal) -> Case:
        """
        Run one lifecycle request through the read-validate-write cycle.

        Returns
        -------
        Case
            The case as committed (or the unchanged snapshot when the
            request was already satisfied).
        """
        label = f"FIR #{case_id}"
        outcome: dict[str, Any] = {}

        def _attempt() -> Case:
            snapshot = CaseStore.get(case_id)
            enforce(principal, request, snapshot)

            if isinstance(request, AssignOfficerRequest):
                officer = StationQueryService.get_officer(request.officer_id)
                AssignmentPolicy.check_officer(officer, snapshot)
            elif isinstance(request, LinkCriminalRequest):
                CriminalService.get_criminal(request.criminal_id)

            changes = transitions.plan(snapshot, request)
            outcome["changes"] = changes
            if not changes:
                return snapshot

            written = CaseStore.put(
                snapshot,
                snapshot.version,
                changes,
                action=transitions.action_for(snapshot, request),
                actor_id=principal.user_id,
                message=_describe(request),
            )
            if not written:
                raise StaleWrite(label)
            return CaseStore.get(case_id)

        case = retry_on_conflict(_attempt, attempts=_conflict_retries(), label=label)

        if outcome.get("changes"):
            logger.info(
                "%s: %s by user #%d (%s) → status=%s closed=%s officer=%s",
                label,
                type(request).__name__,
                principal.user_id,
                principal.role,
                case.status,
                case.closed,
                case.officer_id,
            )
        else:
            logger.info(
                "%s: %s by user #%d was already satisfied; nothing written",
                label,
                type(request).__name__,
                principal.user_id,
            )
        return case


# ═══════════════════════════════════════════════════════════════════
#  Case Query Service
# ═══════════════════════════════════════════════════════════════════

#: Role → visible cases.
CASE_SCOPE_RULES: ScopeRules = {
    "system_admin": lambda qs, p: qs,
    "station_admin": lambda qs, p: qs.filter(station_id=p.station_id),
    "officer": lambda qs, p: qs.filter(station_id=p.station_id),
    "citizen": lambda qs, p: qs.filter(victim_id=p.user_id),
}

#: Allowed ``ordering`` values for case lists.
ORDERINGS: tuple[str, ...] = ("complain_date", "-complain_date")


class CaseQueryService:
    """
    Read-only projections over cases.

    None of these methods writes; each returns a lazily evaluated
    queryset that can be narrowed further by the caller.
    """

    @staticmethod
    def visible_cases(principal: Principal) -> QuerySet[Case]:
        """Cases the principal may see at all."""
        if not principal.approved:
            return CaseStore.list_all().none()
        return apply_role_scope(
            CaseStore.list_all(),
            principal,
            scope_rules=CASE_SCOPE_RULES,
        )

    @staticmethod
    def pending_for(station_id: int, queryset: QuerySet[Case] | None = None) -> QuerySet[Case]:
        """Submitted, unassigned cases waiting at a station."""
        qs = CaseStore.list_all() if queryset is None else queryset
        return qs.filter(
            station_id=station_id,
            status=CaseStatus.SUBMITTED,
            officer__isnull=True,
        )

    @staticmethod
    def active_for(officer_id: int, queryset: QuerySet[Case] | None = None) -> QuerySet[Case]:
        """Open cases on an officer's desk."""
        qs = CaseStore.list_all() if queryset is None else queryset
        return qs.filter(officer_id=officer_id, closed=False)

    @staticmethod
    def resolved_for(officer_id: int, queryset: QuerySet[Case] | None = None) -> QuerySet[Case]:
        """Closed cases an officer worked."""
        qs = CaseStore.list_all() if queryset is None else queryset
        return qs.filter(officer_id=officer_id, closed=True)

    @staticmethod
    def search(queryset: QuerySet[Case], term: str) -> QuerySet[Case]:
        """
        Case-insensitive match on location and description; a numeric
        term also matches the case id.
        """
        term = term.strip()
        if not term:
            return queryset
        condition = Q(incident_location__icontains=term) | Q(description__icontains=term)
        if term.isdigit():
            condition |= Q(pk=int(term))
        return queryset.filter(condition)

    @staticmethod
    def sort_by_complain_date(queryset: QuerySet[Case], *, descending: bool = True) -> QuerySet[Case]:
        if descending:
            return queryset.order_by("-complain_date", "-id")
        return queryset.order_by("complain_date", "id")

    @staticmethod
    def get_filtered_queryset(principal: Principal, filters: dict[str, Any]) -> QuerySet[Case]:
        """
        Build the list-endpoint queryset.

        Parameters
        ----------
        principal : Principal
            Role scoping is applied before any filter.
        filters : dict
            Cleaned query params from ``CaseFilterSerializer``:

            - ``view``     : ``pending`` | ``active`` | ``resolved``
            - ``station``  : int — station for ``pending`` (defaults to the
              principal's station)
            - ``officer``  : int — officer for ``active`` / ``resolved``
              (defaults to the principal's officer id)
            - ``status``   : exact status match
            - ``search``   : free text
            - ``ordering`` : ``complain_date`` | ``-complain_date``
        """
        qs = CaseQueryService.visible_cases(principal)

        view = filters.get("view")
        if view == "pending":
            station_id = filters.get("station") or principal.station_id
            qs = CaseQueryService.pending_for(station_id, qs) if station_id else qs.none()
        elif view in ("active", "resolved"):
            officer_id = filters.get("officer") or principal.officer_id
            if officer_id is None:
                qs = qs.none()
            elif view == "active":
                qs = CaseQueryService.active_for(officer_id, qs)
            else:
                qs = CaseQueryService.resolved_for(officer_id, qs)

        if filters.get("status"):
            qs = qs.filter(status=filters["status"])

        if filters.get("search"):
            qs = CaseQueryService.search(qs, filters["search"])

        ordering = filters.get("ordering", "-complain_date")
        return CaseQueryService.sort_by_complain_date(
            qs, descending=ordering.startswith("-"),
        )

    @staticmethod
    def get_case_detail(principal: Principal, case_id: int) -> Case:
        """
        Return one case if the principal can see it.

        Raises
        ------
        NotFound
            If the case does not exist or is outside the principal's scope.
        """
        try:
            return CaseQueryService.visible_cases(principal).get(pk=case_id)
        except (Case.DoesNotExist, ValueError):
            raise NotFound(f"FIR #{case_id} does not exist.")

    @staticmethod
    def get_status_log(principal: Principal, case_id: int) -> QuerySet[CaseStatusLog]:
        case = CaseQueryService.get_case_detail(principal, case_id)
        return case.status_logs.select_related("changed_by").order_by("created_at", "id")


# ═══════════════════════════════════════════════════════════════════
#  Case Tracking Service
# ═══════════════════════════════════════════════════════════════════

_TIMELINE_LABELS: dict[str, str] = {
    CaseAction.FILE: "Submitted",
    CaseAction.ASSIGN: "Assigned",
    CaseAction.REASSIGN: "Reassigned",
    CaseAction.CLOSE: "Closed",
    CaseAction.REOPEN: "Reopened",
    CaseAction.LINK_CRIMINAL: "Criminal Record Linked",
}


class CaseTrackingService:
    """Citizen-facing progress view of a single case."""

    @staticmethod
    def display_status(case: Case) -> str:
        """
        Coarse progress label shown to complainants.

        ``Closed`` → ``Resolved`` → ``Reopened`` → ``In Progress`` →
        ``Pending``, first match wins.
        """
        if case.closed:
            return "Closed"
        if case.status == CaseStatus.RESOLVED:
            return "Resolved"
        if case.status == CaseStatus.REOPENED:
            return "Reopened"
        if case.officer_id is not None:
            return "In Progress"
        return "Pending"

    @staticmethod
    def track(principal: Principal, case_id: int) -> dict[str, Any]:
        """
        Summary plus chronological timeline for one visible case.

        Returns
        -------
        dict
            ``{"id", "status", "status_display", "display_status",
            "closed", "complain_date", "station", "officer_assigned",
            "timeline": [{"at", "status", "remarks"}, ...]}``
        """
        case = CaseQueryService.get_case_detail(principal, case_id)
        timeline = []
        for entry in case.status_logs.order_by("created_at", "id"):
            if entry.action == CaseAction.ADVANCE:
                label = CaseStatus(entry.to_status).label
            else:
                label = _TIMELINE_LABELS.get(entry.action, entry.get_action_display())
            timeline.append({
                "at": entry.created_at,
                "status": label,
                "remarks": entry.message,
            })

        return {
            "id": case.pk,
            "status": case.status,
            "status_display": case.get_status_display(),
            "display_status": CaseTrackingService.display_status(case),
            "closed": case.closed,
            "complain_date": case.complain_date,
            "station": case.station_id,
            "officer_assigned": case.officer_id is not None,
            "timeline": timeline,
        }
