"""
Accounts Service Layer.

Resolves *who is acting*: every request that reaches the case lifecycle
is carried out on behalf of a ``Principal`` derived from the
authenticated ``User`` and the officer / station records that qualify
them.

Architecture
------------
- ``Principal``          — immutable description of the acting party.
- ``PrincipalService``   — builds a ``Principal`` from a ``User``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .models import UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """
    The acting party of a lifecycle request.

    Attributes
    ----------
    user_id : int
        PK of the authenticated user (a citizen's ``victim`` id).
    role : str
        One of ``UserRole`` values.
    officer_id : int | None
        The officer's ``hrms`` when ``role == officer``.
    station_id : int | None
        The officer's station, or the station a station-admin runs.
    approved : bool
        Whether the officer / station record backing this principal is
        approved.  Citizens and system administrators are always approved.
    """

    user_id: int
    role: str
    officer_id: int | None = None
    station_id: int | None = None
    approved: bool = True

    @property
    def is_officer(self) -> bool:
        return self.role == UserRole.OFFICER

    @property
    def is_station_admin(self) -> bool:
        return self.role == UserRole.STATION_ADMIN

    @property
    def is_system_admin(self) -> bool:
        return self.role == UserRole.SYSTEM_ADMIN

    @property
    def is_citizen(self) -> bool:
        return self.role == UserRole.CITIZEN


class PrincipalService:
    """Stateless helper turning authenticated users into principals."""

    @staticmethod
    def for_user(user: Any) -> Principal:
        """
        Build the ``Principal`` for ``user``.

        - Officers take ``officer_id``, ``station_id`` and ``approved``
          from their ``Officer`` record; an officer user without one is
          returned unapproved.
        - Station administrators take the station they administer and
          that station's approval flag.
        - Citizens and system administrators carry no station.
        """
        from stations.models import Officer, Station

        role = user.effective_role

        if role == UserRole.OFFICER:
            officer = Officer.objects.filter(user=user).first()
            if officer is None:
                logger.warning("Officer user %s has no officer record", user)
                return Principal(user_id=user.pk, role=role, approved=False)
            return Principal(
                user_id=user.pk,
                role=role,
                officer_id=officer.hrms,
                station_id=officer.station_id,
                approved=officer.approval,
            )

        if role == UserRole.STATION_ADMIN:
            station = Station.objects.filter(admin=user).first()
            if station is None:
                logger.warning("Station admin %s administers no station", user)
                return Principal(user_id=user.pk, role=role, approved=False)
            return Principal(
                user_id=user.pk,
                role=role,
                station_id=station.sid,
                approved=station.approval,
            )

        return Principal(user_id=user.pk, role=role)
