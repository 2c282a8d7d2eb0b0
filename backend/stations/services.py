"""
Stations app Service Layer.

Read-side access to the Station / Officer records the case lifecycle
depends on.  Approval workflows (registering, approving and suspending
stations and officers) are run by operators through the Django admin
and are not exposed here.

Architecture
------------
- ``StationQueryService`` — station listing / retrieval and the
  officer roster used by the assignment picker.
"""

from __future__ import annotations

import logging

from django.db.models import QuerySet

from accounts.services import Principal
from core.domain.access import require_role
from core.domain.exceptions import NotFound, PermissionDenied

from .models import Officer, Station

logger = logging.getLogger(__name__)


class StationQueryService:
    """Read helpers over stations and their officers."""

    @staticmethod
    def list_approved_stations() -> QuerySet[Station]:
        """Stations that may currently receive complaints."""
        return Station.objects.filter(approval=True).order_by("name")

    @staticmethod
    def get_station(sid: int) -> Station:
        """
        Return the station with ``sid``.

        Raises
        ------
        NotFound
            If no such station exists.
        """
        try:
            return Station.objects.get(pk=sid)
        except (Station.DoesNotExist, ValueError):
            raise NotFound(f"Station #{sid} does not exist.")

    @staticmethod
    def get_officer(hrms: int) -> Officer:
        """
        Return the officer with ``hrms``.

        Raises
        ------
        NotFound
            If no such officer exists.
        """
        try:
            return Officer.objects.select_related("station").get(pk=hrms)
        except Officer.DoesNotExist:
            raise NotFound(f"Officer #{hrms} does not exist.")

    @staticmethod
    def list_station_officers(sid: int, principal: Principal) -> QuerySet[Officer]:
        """
        Approved officers of station ``sid`` (the assignment picker).

        Only the administrator of that station or a system administrator
        may read the roster.

        Raises
        ------
        NotFound
            If the station does not exist.
        PermissionDenied
            If the principal does not run this station.
        """
        station = StationQueryService.get_station(sid)
        require_role(principal, "station_admin", "system_admin")
        if principal.is_station_admin and principal.station_id != station.sid:
            raise PermissionDenied(
                "Station administrators may only list their own station's officers."
            )
        return (
            Officer.objects
            .filter(station=station, approval=True)
            .select_related("user")
            .order_by("hrms")
        )
