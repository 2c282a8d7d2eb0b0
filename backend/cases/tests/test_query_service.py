"""
Tests for the read side: role-scoped lists, work-queue views, search,
ordering and the citizen tracking summary.
"""

from __future__ import annotations

import datetime

import pytest

from accounts.models import UserRole
from accounts.services import PrincipalService
from cases.models import CaseStatus
from cases.services import CaseLifecycleService, CaseQueryService, CaseTrackingService
from core.domain.exceptions import NotFound

pytestmark = pytest.mark.django_db


@pytest.fixture()
def setup(create_user, create_station, create_officer):
    admin = create_user(username="sa", role=UserRole.STATION_ADMIN)
    station = create_station(sid=1, admin=admin)
    other = create_station(sid=2)
    officer = create_officer(station=station, hrms=7)
    alice = create_user(username="alice")
    bob = create_user(username="bob")

    p = {
        "admin": PrincipalService.for_user(admin),
        "officer": PrincipalService.for_user(officer.user),
        "alice": PrincipalService.for_user(alice),
        "bob": PrincipalService.for_user(bob),
        "root": PrincipalService.for_user(create_user(username="root", is_superuser=True)),
    }

    def file(principal, station_sid, description, location="", complain_date=None):
        return CaseLifecycleService.file_case(
            principal.user_id,
            station_sid,
            {
                "description": description,
                "incident_location": location,
                "complain_date": complain_date,
            },
            principal,
        )

    cases = {
        "old": file(p["alice"], 1, "Wallet stolen", "Market Road", datetime.date(2024, 1, 5)),
        "new": file(p["alice"], 1, "Car window smashed", "Park Lane", datetime.date(2024, 3, 1)),
        "bob": file(p["bob"], 1, "Phone snatched", "Station Square", datetime.date(2024, 2, 10)),
        "elsewhere": file(p["bob"], 2, "Graffiti", "Harbour", datetime.date(2024, 2, 20)),
    }
    return p, cases


def ids(qs) -> list[int]:
    return [c.pk for c in qs]


class TestScoping:

    def test_citizen_sees_only_own_cases(self, setup):
        p, cases = setup
        visible = CaseQueryService.get_filtered_queryset(p["alice"], {})
        assert set(ids(visible)) == {cases["old"].pk, cases["new"].pk}

    def test_station_staff_see_their_station(self, setup):
        p, cases = setup
        expected = {cases["old"].pk, cases["new"].pk, cases["bob"].pk}
        assert set(ids(CaseQueryService.get_filtered_queryset(p["admin"], {}))) == expected
        assert set(ids(CaseQueryService.get_filtered_queryset(p["officer"], {}))) == expected

    def test_superuser_sees_everything(self, setup):
        p, cases = setup
        assert len(ids(CaseQueryService.get_filtered_queryset(p["root"], {}))) == 4

    def test_invisible_case_is_not_found(self, setup):
        p, cases = setup
        with pytest.raises(NotFound):
            CaseQueryService.get_case_detail(p["alice"], cases["bob"].pk)


class TestViewsAndSearch:

    def test_pending_view_lists_unassigned_submissions(self, setup):
        p, cases = setup
        CaseLifecycleService.assign_officer(cases["bob"].pk, 7, p["admin"])

        pending = CaseQueryService.get_filtered_queryset(p["admin"], {"view": "pending"})
        assert set(ids(pending)) == {cases["old"].pk, cases["new"].pk}

    def test_active_and_resolved_views_follow_closed_flag(self, setup):
        p, cases = setup
        pk = cases["old"].pk
        CaseLifecycleService.assign_officer(pk, 7, p["officer"])
        CaseLifecycleService.assign_officer(cases["new"].pk, 7, p["officer"])
        CaseLifecycleService.advance_status(pk, CaseStatus.UNDER_REVIEW, p["officer"])
        CaseLifecycleService.close_case(pk, p["officer"])

        active = CaseQueryService.get_filtered_queryset(p["officer"], {"view": "active"})
        resolved = CaseQueryService.get_filtered_queryset(p["officer"], {"view": "resolved"})
        assert ids(active) == [cases["new"].pk]
        assert ids(resolved) == [pk]

    def test_search_matches_location_description_and_id(self, setup):
        p, cases = setup
        by_location = CaseQueryService.get_filtered_queryset(p["admin"], {"search": "park"})
        by_text = CaseQueryService.get_filtered_queryset(p["admin"], {"search": "WALLET"})
        by_id = CaseQueryService.get_filtered_queryset(p["admin"], {"search": str(cases["bob"].pk)})

        assert ids(by_location) == [cases["new"].pk]
        assert ids(by_text) == [cases["old"].pk]
        assert cases["bob"].pk in ids(by_id)

    def test_ordering_by_complain_date(self, setup):
        p, cases = setup
        newest_first = CaseQueryService.get_filtered_queryset(p["alice"], {"ordering": "-complain_date"})
        oldest_first = CaseQueryService.get_filtered_queryset(p["alice"], {"ordering": "complain_date"})

        assert ids(newest_first) == [cases["new"].pk, cases["old"].pk]
        assert ids(oldest_first) == [cases["old"].pk, cases["new"].pk]


class TestTracking:

    @pytest.mark.parametrize("steps, expected", [
        ([], "Pending"),
        (["assign"], "In Progress"),
        (["assign", "resolve"], "Resolved"),
        (["assign", "resolve", "close"], "Closed"),
        (["assign", "resolve", "close", "reopen"], "Reopened"),
    ])
    def test_display_status(self, setup, steps, expected):
        p, cases = setup
        pk = cases["old"].pk
        actions = {
            "assign": lambda: CaseLifecycleService.assign_officer(pk, 7, p["admin"]),
            "resolve": lambda: CaseLifecycleService.advance_status(pk, CaseStatus.RESOLVED, p["admin"]),
            "close": lambda: CaseLifecycleService.close_case(pk, p["admin"]),
            "reopen": lambda: CaseLifecycleService.reopen_case(pk, p["admin"]),
        }
        for step in steps:
            actions[step]()

        summary = CaseTrackingService.track(p["alice"], pk)
        assert summary["display_status"] == expected

    def test_timeline_follows_audit_log(self, setup):
        p, cases = setup
        pk = cases["old"].pk
        CaseLifecycleService.assign_officer(pk, 7, p["admin"])
        CaseLifecycleService.advance_status(pk, CaseStatus.INVESTIGATING, p["officer"])

        summary = CaseTrackingService.track(p["alice"], pk)

        assert [entry["status"] for entry in summary["timeline"]] == [
            "Submitted",
            "Assigned",
            "Investigating",
        ]
        assert summary["officer_assigned"] is True

    def test_other_citizen_cannot_track(self, setup):
        p, cases = setup
        with pytest.raises(NotFound):
            CaseTrackingService.track(p["bob"], cases["old"].pk)
