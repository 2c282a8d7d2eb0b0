"""
Root conftest.py — shared fixtures for the entire test suite.

Provides:
  - ``api_client`` fixture returning a DRF ``APIClient``.
  - ``create_user`` factory fixture for creating test users.
  - ``auth_header`` fixture for authenticated requests (JWT).
  - ``create_station`` / ``create_officer`` factories for the stations app.
  - ``create_criminal`` factory for criminal records.
"""

from __future__ import annotations

import itertools

import pytest
from rest_framework.test import APIClient


@pytest.fixture()
def api_client() -> APIClient:
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture()
def create_user(db):
    """
    Factory fixture that creates a user with sensible defaults.

    Usage::

        def test_something(create_user):
            user = create_user(username="alice")
            # or with all fields:
            user = create_user(
                username="bob",
                password="Str0ng!Pass",
                email="bob@example.com",
                phone_number="09121234567",
                role="station_admin",
            )
    """
    from accounts.models import User, UserRole

    _counter = 0

    def _factory(
        *,
        username: str | None = None,
        password: str = "TestPass123!",
        email: str | None = None,
        phone_number: str | None = None,
        role: str = UserRole.CITIZEN,
        is_active: bool = True,
        **kwargs,
    ) -> User:
        nonlocal _counter
        _counter += 1
        if username is None:
            username = f"testuser{_counter}"
        if email is None:
            email = f"{username}@test.local"
        if phone_number is None:
            phone_number = f"0912{_counter:07d}"

        return User.objects.create_user(
            username=username,
            password=password,
            email=email,
            phone_number=phone_number,
            role=role,
            is_active=is_active,
            **kwargs,
        )

    return _factory


@pytest.fixture()
def create_station(db):
    """
    Factory fixture for ``Station`` rows.

    Usage::

        station = create_station(admin=user)            # approved by default
        pending = create_station(approval=False)
    """
    from stations.models import Station

    sids = itertools.count(101)

    def _factory(*, sid: int | None = None, name: str | None = None, approval: bool = True, admin=None, **kwargs) -> Station:
        sid = sid if sid is not None else next(sids)
        return Station.objects.create(
            sid=sid,
            name=name or f"Station {sid}",
            approval=approval,
            admin=admin,
            **kwargs,
        )

    return _factory


@pytest.fixture()
def create_officer(db, create_user):
    """
    Factory fixture for ``Officer`` rows, creating the backing user too.

    Usage::

        officer = create_officer(station=station, hrms=7)
    """
    from accounts.models import UserRole
    from stations.models import Officer

    numbers = itertools.count(1)

    def _factory(*, station, hrms: int | None = None, approval: bool = True, user=None, **kwargs) -> Officer:
        hrms = hrms if hrms is not None else 1000 + next(numbers)
        if user is None:
            user = create_user(username=f"officer{hrms}", role=UserRole.OFFICER)
        return Officer.objects.create(
            hrms=hrms,
            user=user,
            station=station,
            approval=approval,
            **kwargs,
        )

    return _factory


@pytest.fixture()
def auth_header(create_user, api_client):
    """
    Returns a helper function that builds an ``Authorization`` header dict
    with a valid JWT access token.  Pass ``user=`` to reuse an existing
    user, otherwise one is created from the remaining keyword arguments.

    Usage::

        def test_protected(auth_header, api_client):
            header = auth_header(username="alice")
            api_client.credentials(HTTP_AUTHORIZATION=header["Authorization"])
            resp = api_client.get("/api/fir/")
            assert resp.status_code != 401

    The returned dict looks like::

        {"Authorization": "Bearer eyJ..."}
    """
    from rest_framework_simplejwt.tokens import AccessToken

    def _make(*, user=None, **user_kwargs) -> dict[str, str]:
        if user is None:
            user = create_user(**user_kwargs)
        token = AccessToken.for_user(user)
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture()
def create_criminal(db):
    """
    Factory fixture for ``Criminal`` rows.

    Usage::

        criminal = create_criminal(pk=42, station=station)
    """
    from criminals.models import Criminal

    def _factory(*, name: str | None = None, **kwargs) -> Criminal:
        return Criminal.objects.create(name=name or "John Doe", **kwargs)

    return _factory
