"""
Integration tests — current user (Me) endpoint.

Endpoint under test:  GET /api/accounts/me/   (named URL: accounts:me)
Access:               Authenticated only (IsAuthenticated permission class)
Response:             {"user": {...}, "principal": {"user_id", "role",
                       "officer_id", "station_id", "approved"}}
"""

from __future__ import annotations

import pytest
from django.urls import reverse
from rest_framework import status

from accounts.models import UserRole

pytestmark = pytest.mark.django_db


@pytest.fixture()
def me_url() -> str:
    return reverse("accounts:me")


def test_me_requires_authentication(api_client, me_url):
    resp = api_client.get(me_url)
    assert resp.status_code == status.HTTP_401_UNAUTHORIZED


def test_citizen_principal(api_client, auth_header, create_user, me_url):
    user = create_user(username="me_citizen")
    api_client.credentials(HTTP_AUTHORIZATION=auth_header(user=user)["Authorization"])

    resp = api_client.get(me_url)

    assert resp.status_code == status.HTTP_200_OK
    assert resp.data["user"]["username"] == "me_citizen"
    assert resp.data["principal"] == {
        "user_id": user.pk,
        "role": UserRole.CITIZEN,
        "officer_id": None,
        "station_id": None,
        "approved": True,
    }


def test_officer_principal_carries_station(api_client, auth_header, create_station, create_officer, me_url):
    station = create_station(sid=5)
    officer = create_officer(station=station, hrms=77)
    api_client.credentials(HTTP_AUTHORIZATION=auth_header(user=officer.user)["Authorization"])

    resp = api_client.get(me_url)

    principal = resp.data["principal"]
    assert principal["role"] == UserRole.OFFICER
    assert principal["officer_id"] == 77
    assert principal["station_id"] == 5
    assert principal["approved"] is True


def test_station_admin_of_unapproved_station_is_unapproved(
    api_client, auth_header, create_user, create_station, me_url,
):
    admin = create_user(username="pending_admin", role=UserRole.STATION_ADMIN)
    create_station(sid=6, approval=False, admin=admin)
    api_client.credentials(HTTP_AUTHORIZATION=auth_header(user=admin)["Authorization"])

    resp = api_client.get(me_url)

    assert resp.data["principal"]["station_id"] == 6
    assert resp.data["principal"]["approved"] is False


def test_superuser_acts_as_system_admin(api_client, auth_header, create_user, me_url):
    root = create_user(username="root", is_superuser=True, is_staff=True)
    api_client.credentials(HTTP_AUTHORIZATION=auth_header(user=root)["Authorization"])

    resp = api_client.get(me_url)

    assert resp.data["user"]["role"] == UserRole.SYSTEM_ADMIN
    assert resp.data["principal"]["role"] == UserRole.SYSTEM_ADMIN
