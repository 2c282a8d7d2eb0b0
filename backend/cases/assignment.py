"""
Assignment policy.

Two questions decide whether an officer may be put on a case:

* *Who is asking?*  A station administrator may place any officer of
  their own station and may replace an existing assignment.  An officer
  may only take an unassigned case for themselves.
* *Who is being assigned?*  The officer must be approved and must belong
  to the station that owns the case.
"""

from __future__ import annotations

from accounts.services import Principal
from core.domain.exceptions import OfficerNotEligible
from stations.models import Officer

from .authorization import Decision
from .models import Case
from .requests import AssignOfficerRequest


class AssignmentPolicy:
    """Stateless assignment rules used by the authorizer and the engine."""

    @staticmethod
    def authorize_assigner(
        principal: Principal,
        request: AssignOfficerRequest,
        case: Case,
    ) -> Decision:
        if principal.is_station_admin:
            if principal.station_id != case.station_id:
                return Decision.deny(
                    "Station administrators may only assign officers to their own station's cases."
                )
            return Decision.allow()

        if principal.is_officer:
            if request.reassign:
                return Decision.deny("Only a station administrator can reassign a case.")
            if request.officer_id != principal.officer_id:
                return Decision.deny("Officers may only assign cases to themselves.")
            if case.officer_id is not None:
                return Decision.deny(
                    "This case is already assigned; ask the station administrator to reassign it."
                )
            return Decision.allow()

        return Decision.deny("Only officers and station administrators can assign cases.")

    @staticmethod
    def check_officer(officer: Officer, case: Case) -> None:
        """
        Raise ``OfficerNotEligible`` unless ``officer`` can work ``case``.
        """
        if not officer.approval:
            raise OfficerNotEligible(f"Officer #{officer.hrms} is not approved.")
        if officer.station_id != case.station_id:
            raise OfficerNotEligible(
                f"Officer #{officer.hrms} belongs to station #{officer.station_id}, "
                f"but FIR #{case.pk} is owned by station #{case.station_id}."
            )
