"""
Unit tests for the role authorizer (``cases.authorization``).

Every (role, request) pair that is not explicitly allowed must be denied.
No database access: principals and cases are plain in-memory objects.
"""

from __future__ import annotations

import pytest

from accounts.services import Principal
from cases.authorization import authorize, enforce
from cases.models import Case, CaseStatus
from cases.requests import (
    AdvanceStatusRequest,
    AssignOfficerRequest,
    CloseCaseRequest,
    FileCaseRequest,
    LinkCriminalRequest,
    ReopenCaseRequest,
)
from core.domain.exceptions import PermissionDenied

STATION = 10
OTHER_STATION = 20

CITIZEN = Principal(user_id=1, role="citizen")
OFFICER_7 = Principal(user_id=2, role="officer", officer_id=7, station_id=STATION)
OFFICER_8 = Principal(user_id=3, role="officer", officer_id=8, station_id=STATION)
FOREIGN_OFFICER = Principal(user_id=4, role="officer", officer_id=9, station_id=OTHER_STATION)
STATION_ADMIN = Principal(user_id=5, role="station_admin", station_id=STATION)
FOREIGN_ADMIN = Principal(user_id=6, role="station_admin", station_id=OTHER_STATION)
SYSTEM_ADMIN = Principal(user_id=7, role="system_admin")
UNAPPROVED_OFFICER = Principal(
    user_id=8, role="officer", officer_id=11, station_id=STATION, approved=False,
)


def make_case(**overrides) -> Case:
    fields = {
        "pk": 1,
        "status": CaseStatus.ASSIGNED,
        "closed": False,
        "station_id": STATION,
        "officer_id": 7,
        "victim_id": CITIZEN.user_id,
    }
    fields.update(overrides)
    return Case(**fields)


class TestFiling:

    def test_citizen_files_for_self(self):
        request = FileCaseRequest(victim_id=CITIZEN.user_id, station_id=STATION, description="x")
        assert authorize(CITIZEN, request).allowed

    def test_citizen_cannot_file_for_someone_else(self):
        request = FileCaseRequest(victim_id=999, station_id=STATION, description="x")
        assert not authorize(CITIZEN, request).allowed

    @pytest.mark.parametrize("principal", [OFFICER_7, STATION_ADMIN, SYSTEM_ADMIN])
    def test_staff_cannot_file(self, principal):
        request = FileCaseRequest(victim_id=principal.user_id, station_id=STATION, description="x")
        assert not authorize(principal, request).allowed


class TestAssignment:

    def test_station_admin_assigns_any_officer(self):
        case = make_case(status=CaseStatus.SUBMITTED, officer_id=None)
        assert authorize(STATION_ADMIN, AssignOfficerRequest(officer_id=8), case).allowed

    def test_station_admin_may_reassign(self):
        request = AssignOfficerRequest(officer_id=8, reassign=True)
        assert authorize(STATION_ADMIN, request, make_case()).allowed

    def test_foreign_station_admin_is_denied(self):
        case = make_case(status=CaseStatus.SUBMITTED, officer_id=None)
        assert not authorize(FOREIGN_ADMIN, AssignOfficerRequest(officer_id=8), case).allowed

    def test_officer_self_assigns_unassigned_case(self):
        case = make_case(status=CaseStatus.SUBMITTED, officer_id=None)
        assert authorize(OFFICER_7, AssignOfficerRequest(officer_id=7), case).allowed

    def test_officer_cannot_assign_colleague(self):
        case = make_case(status=CaseStatus.SUBMITTED, officer_id=None)
        decision = authorize(OFFICER_7, AssignOfficerRequest(officer_id=8), case)
        assert not decision.allowed
        assert "themselves" in decision.reason

    def test_officer_cannot_take_assigned_case(self):
        assert not authorize(OFFICER_8, AssignOfficerRequest(officer_id=8), make_case()).allowed

    def test_officer_cannot_reassign(self):
        request = AssignOfficerRequest(officer_id=7, reassign=True)
        assert not authorize(OFFICER_7, request, make_case(officer_id=None)).allowed

    def test_foreign_officer_self_assign_passes_authorization(self):
        case = make_case(status=CaseStatus.SUBMITTED, officer_id=None)
        assert authorize(FOREIGN_OFFICER, AssignOfficerRequest(officer_id=9), case).allowed

    @pytest.mark.parametrize("principal", [CITIZEN, SYSTEM_ADMIN])
    def test_non_staff_cannot_assign(self, principal):
        case = make_case(status=CaseStatus.SUBMITTED, officer_id=None)
        assert not authorize(principal, AssignOfficerRequest(officer_id=7), case).allowed


class TestWork:

    @pytest.mark.parametrize("request_obj", [
        AdvanceStatusRequest(CaseStatus.INVESTIGATING),
        CloseCaseRequest(),
    ])
    def test_assigned_officer_and_station_admin_allowed(self, request_obj):
        case = make_case()
        assert authorize(OFFICER_7, request_obj, case).allowed
        assert authorize(STATION_ADMIN, request_obj, case).allowed

    @pytest.mark.parametrize("principal", [
        CITIZEN, OFFICER_8, FOREIGN_OFFICER, FOREIGN_ADMIN, SYSTEM_ADMIN,
    ])
    @pytest.mark.parametrize("request_obj", [
        AdvanceStatusRequest(CaseStatus.INVESTIGATING),
        CloseCaseRequest(),
    ])
    def test_everyone_else_denied(self, principal, request_obj):
        assert not authorize(principal, request_obj, make_case()).allowed


class TestReopen:

    @pytest.mark.parametrize("principal", [STATION_ADMIN, SYSTEM_ADMIN])
    def test_admins_may_reopen(self, principal):
        case = make_case(status=CaseStatus.RESOLVED, closed=True)
        assert authorize(principal, ReopenCaseRequest(), case).allowed

    @pytest.mark.parametrize("principal", [CITIZEN, OFFICER_7, FOREIGN_ADMIN])
    def test_others_may_not_reopen(self, principal):
        case = make_case(status=CaseStatus.RESOLVED, closed=True)
        assert not authorize(principal, ReopenCaseRequest(), case).allowed


class TestLinkCriminal:

    @pytest.mark.parametrize("principal", [OFFICER_7, OFFICER_8, STATION_ADMIN])
    def test_station_staff_may_link(self, principal):
        assert authorize(principal, LinkCriminalRequest(criminal_id=5), make_case()).allowed

    @pytest.mark.parametrize("principal", [CITIZEN, FOREIGN_OFFICER, FOREIGN_ADMIN, SYSTEM_ADMIN])
    def test_others_may_not_link(self, principal):
        assert not authorize(principal, LinkCriminalRequest(criminal_id=5), make_case()).allowed


class TestGate:

    @pytest.mark.parametrize("request_obj", [
        AssignOfficerRequest(officer_id=11),
        AdvanceStatusRequest(CaseStatus.INVESTIGATING),
        CloseCaseRequest(),
        LinkCriminalRequest(criminal_id=5),
    ])
    def test_unapproved_principal_is_denied_everything(self, request_obj):
        case = make_case(officer_id=11 if not isinstance(request_obj, AssignOfficerRequest) else None)
        assert not authorize(UNAPPROVED_OFFICER, request_obj, case).allowed

    def test_unknown_request_type_is_denied(self):
        assert not authorize(SYSTEM_ADMIN, object(), make_case()).allowed

    def test_missing_case_is_denied(self):
        assert not authorize(STATION_ADMIN, CloseCaseRequest()).allowed

    def test_enforce_raises_permission_denied_with_reason(self):
        with pytest.raises(PermissionDenied, match="assigned officer"):
            enforce(CITIZEN, CloseCaseRequest(), make_case())
