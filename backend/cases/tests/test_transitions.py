"""
Unit tests for the case state machine (``cases.transitions``).

No database access: every test works on unsaved ``Case`` instances.
"""

from __future__ import annotations

import pytest

from cases import transitions
from cases.models import Case, CaseAction, CaseStatus
from cases.requests import (
    AdvanceStatusRequest,
    AssignOfficerRequest,
    CloseCaseRequest,
    FileCaseRequest,
    LinkCriminalRequest,
    ReopenCaseRequest,
)
from core.domain.exceptions import InvalidState


def make_case(**overrides) -> Case:
    fields = {
        "pk": 1,
        "status": CaseStatus.SUBMITTED,
        "closed": False,
        "station_id": 10,
        "officer_id": None,
        "criminal_id": None,
        "version": 0,
    }
    fields.update(overrides)
    return Case(**fields)


class TestOrdering:

    def test_forward_targets_from_submitted_excludes_submitted(self):
        assert transitions.forward_targets(CaseStatus.SUBMITTED) == (
            CaseStatus.ASSIGNED,
            CaseStatus.INVESTIGATING,
            CaseStatus.EVIDENCE_COLLECTION,
            CaseStatus.UNDER_REVIEW,
            CaseStatus.RESOLVED,
        )

    def test_reopened_ranks_with_submitted(self):
        assert transitions.forward_targets(CaseStatus.REOPENED) == (
            transitions.forward_targets(CaseStatus.SUBMITTED)
        )

    def test_nothing_is_ahead_of_resolved(self):
        assert transitions.forward_targets(CaseStatus.RESOLVED) == ()

    def test_unknown_status_is_invalid_state(self):
        with pytest.raises(InvalidState):
            transitions.rank("archived")


class TestAssignmentPlan:

    def test_submitted_case_moves_to_assigned(self):
        changes = transitions.plan(make_case(), AssignOfficerRequest(officer_id=7))
        assert changes == {"officer_id": 7, "status": CaseStatus.ASSIGNED}

    def test_reopened_case_moves_to_assigned(self):
        case = make_case(status=CaseStatus.REOPENED)
        changes = transitions.plan(case, AssignOfficerRequest(officer_id=7))
        assert changes["status"] == CaseStatus.ASSIGNED

    def test_reassign_keeps_later_status(self):
        case = make_case(status=CaseStatus.INVESTIGATING, officer_id=3)
        changes = transitions.plan(case, AssignOfficerRequest(officer_id=5, reassign=True))
        assert changes == {"officer_id": 5}

    def test_plain_assign_on_assigned_case_is_rejected(self):
        case = make_case(status=CaseStatus.ASSIGNED, officer_id=3)
        with pytest.raises(InvalidState, match="already assigned"):
            transitions.plan(case, AssignOfficerRequest(officer_id=5))

    def test_closed_case_cannot_be_assigned(self):
        case = make_case(status=CaseStatus.RESOLVED, closed=True, officer_id=3)
        with pytest.raises(InvalidState):
            transitions.plan(case, AssignOfficerRequest(officer_id=5, reassign=True))

    def test_reassigning_same_officer_writes_nothing(self):
        case = make_case(status=CaseStatus.INVESTIGATING, officer_id=3)
        assert transitions.plan(case, AssignOfficerRequest(officer_id=3, reassign=True)) == {}


class TestAdvancePlan:

    @pytest.mark.parametrize("target", [
        CaseStatus.INVESTIGATING,
        CaseStatus.UNDER_REVIEW,
        CaseStatus.RESOLVED,
    ])
    def test_any_forward_jump_is_allowed(self, target):
        case = make_case(status=CaseStatus.ASSIGNED, officer_id=7)
        assert transitions.plan(case, AdvanceStatusRequest(target)) == {"status": target}

    def test_resolving_does_not_close(self):
        case = make_case(status=CaseStatus.UNDER_REVIEW, officer_id=7)
        changes = transitions.plan(case, AdvanceStatusRequest(CaseStatus.RESOLVED))
        assert "closed" not in changes

    @pytest.mark.parametrize("target", [
        CaseStatus.ASSIGNED,
        CaseStatus.INVESTIGATING,
    ])
    def test_backward_or_same_target_is_rejected(self, target):
        case = make_case(status=CaseStatus.INVESTIGATING, officer_id=7)
        with pytest.raises(InvalidState) as exc_info:
            transitions.plan(case, AdvanceStatusRequest(target))
        assert exc_info.value.current == CaseStatus.INVESTIGATING
        assert exc_info.value.target == target

    @pytest.mark.parametrize("target", [CaseStatus.SUBMITTED, CaseStatus.REOPENED, "closed", ""])
    def test_non_stage_targets_are_rejected(self, target):
        case = make_case(status=CaseStatus.ASSIGNED, officer_id=7)
        with pytest.raises(InvalidState):
            transitions.plan(case, AdvanceStatusRequest(target))

    def test_unassigned_case_cannot_advance(self):
        with pytest.raises(InvalidState, match="no officer"):
            transitions.plan(make_case(), AdvanceStatusRequest(CaseStatus.INVESTIGATING))

    def test_reopened_case_can_jump_to_investigating(self):
        case = make_case(status=CaseStatus.REOPENED, officer_id=7)
        changes = transitions.plan(case, AdvanceStatusRequest(CaseStatus.INVESTIGATING))
        assert changes == {"status": CaseStatus.INVESTIGATING}


class TestClosePlan:

    @pytest.mark.parametrize("status", [CaseStatus.UNDER_REVIEW, CaseStatus.RESOLVED])
    def test_close_forces_resolved(self, status):
        case = make_case(status=status, officer_id=7)
        assert transitions.plan(case, CloseCaseRequest()) == {
            "closed": True,
            "status": CaseStatus.RESOLVED,
        }

    @pytest.mark.parametrize("status", [
        CaseStatus.SUBMITTED,
        CaseStatus.ASSIGNED,
        CaseStatus.INVESTIGATING,
        CaseStatus.EVIDENCE_COLLECTION,
        CaseStatus.REOPENED,
    ])
    def test_close_before_review_is_rejected(self, status):
        with pytest.raises(InvalidState):
            transitions.plan(make_case(status=status, officer_id=7), CloseCaseRequest())

    def test_closing_twice_is_rejected_not_toggled(self):
        case = make_case(status=CaseStatus.RESOLVED, closed=True, officer_id=7)
        with pytest.raises(InvalidState, match="already closed"):
            transitions.plan(case, CloseCaseRequest())


class TestReopenAndLinkPlans:

    def test_reopen_clears_closed_and_parks_in_reopened(self):
        case = make_case(status=CaseStatus.RESOLVED, closed=True, officer_id=7)
        assert transitions.plan(case, ReopenCaseRequest()) == {
            "closed": False,
            "status": CaseStatus.REOPENED,
        }

    def test_reopen_open_case_is_rejected(self):
        case = make_case(status=CaseStatus.RESOLVED, officer_id=7)
        with pytest.raises(InvalidState):
            transitions.plan(case, ReopenCaseRequest())

    def test_linking_same_criminal_is_a_no_op(self):
        case = make_case(criminal_id=42)
        assert transitions.plan(case, LinkCriminalRequest(criminal_id=42)) == {}

    def test_linking_different_criminal_replaces(self):
        case = make_case(criminal_id=42)
        assert transitions.plan(case, LinkCriminalRequest(criminal_id=43)) == {"criminal_id": 43}

    def test_link_does_not_touch_status(self):
        case = make_case(status=CaseStatus.RESOLVED, closed=True, officer_id=7)
        assert transitions.plan(case, LinkCriminalRequest(criminal_id=1)) == {"criminal_id": 1}


class TestDispatch:

    def test_filing_request_is_not_a_transition(self):
        request = FileCaseRequest(victim_id=1, station_id=10, description="x")
        with pytest.raises(TypeError):
            transitions.plan(make_case(), request)

    def test_action_for_distinguishes_assign_and_reassign(self):
        assert transitions.action_for(make_case(), AssignOfficerRequest(7)) == CaseAction.ASSIGN
        assert (
            transitions.action_for(make_case(officer_id=3), AssignOfficerRequest(7, reassign=True))
            == CaseAction.REASSIGN
        )
        assert transitions.action_for(make_case(), CloseCaseRequest()) == CaseAction.CLOSE
