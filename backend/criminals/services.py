"""
Criminals app Service Layer.

Criminal records are police-side data: citizens never see them.  The
case lifecycle only needs ``get_criminal`` to resolve the record a case
is being linked to; the remaining calls back the criminal endpoints.

Architecture
------------
- ``CriminalService`` — listing, retrieval and registration of records.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import transaction
from django.db.models import Q, QuerySet

from accounts.services import Principal
from core.domain.access import require_role
from core.domain.exceptions import InvalidStation, NotFound, PermissionDenied
from stations.services import StationQueryService

from .models import Criminal

logger = logging.getLogger(__name__)

STAFF_ROLES: tuple[str, ...] = ("officer", "station_admin", "system_admin")


def _require_staff(principal: Principal) -> None:
    require_role(
        principal,
        *STAFF_ROLES,
        message="Criminal records are available to police staff only.",
    )
    if not principal.approved:
        raise PermissionDenied("Your account is awaiting approval.")


class CriminalService:
    """Read and registration helpers over criminal records."""

    @staticmethod
    def get_criminal(criminal_id: int) -> Criminal:
        """
        Return the criminal record with ``criminal_id``.

        Raises
        ------
        NotFound
            If no such record exists.
        """
        try:
            return Criminal.objects.select_related("station").get(pk=criminal_id)
        except (Criminal.DoesNotExist, ValueError):
            raise NotFound(f"Criminal record #{criminal_id} does not exist.")

    @staticmethod
    def list_criminals(principal: Principal, filters: dict[str, Any]) -> QuerySet[Criminal]:
        """
        Criminal records, optionally narrowed by ``station``, ``status``
        and a ``search`` term matched against name and identification marks.
        """
        _require_staff(principal)
        qs = Criminal.objects.select_related("station")
        if filters.get("station"):
            qs = qs.filter(station_id=filters["station"])
        if filters.get("status"):
            qs = qs.filter(status=filters["status"])
        term = (filters.get("search") or "").strip()
        if term:
            qs = qs.filter(Q(name__icontains=term) | Q(identification_marks__icontains=term))
        return qs.order_by("name", "id")

    @staticmethod
    def get_criminal_for(principal: Principal, criminal_id: int) -> Criminal:
        _require_staff(principal)
        return CriminalService.get_criminal(criminal_id)

    @staticmethod
    def register_criminal(principal: Principal, data: dict[str, Any]) -> Criminal:
        """
        Create a criminal record.

        Officers and station administrators register records for their
        own station; a system administrator may name any station or none.

        Raises
        ------
        PermissionDenied
            Not police staff, or a station other than the caller's own.
        NotFound
            Unknown station.
        InvalidStation
            Station not approved.
        """
        _require_staff(principal)
        payload = dict(data)
        station_id = payload.pop("station", None)
        if station_id is None and not principal.is_system_admin:
            station_id = principal.station_id
        if (
            station_id is not None
            and not principal.is_system_admin
            and station_id != principal.station_id
        ):
            raise PermissionDenied("Records can only be registered for your own station.")

        station = None
        if station_id is not None:
            station = StationQueryService.get_station(station_id)
            if not station.approval:
                raise InvalidStation(f"Station #{station_id} is not approved.")

        with transaction.atomic():
            criminal = Criminal.objects.create(
                station=station,
                registered_by_id=principal.user_id,
                **payload,
            )

        logger.info(
            "Criminal record #%d registered by user #%d (%s)",
            criminal.pk,
            principal.user_id,
            principal.role,
        )
        return criminal
