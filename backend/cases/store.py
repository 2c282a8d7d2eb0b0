"""
Case Store — durable access to case records.

The lifecycle service touches case rows only through the primitives
below, so every write to ``status`` / ``closed`` / ``officer`` /
``criminal_id`` is a conditional write against the version that was read:

- ``get(id)``                                — snapshot including ``version``
- ``put(snapshot, expected_version, changes)`` — compare-and-swap update
- ``list_all()``                              — bulk read
- ``create(...)``                             — insert a freshly filed case
"""

from __future__ import annotations

import logging
from typing import Any

from django.db.models import QuerySet

from core.domain.exceptions import NotFound
from core.domain.transactions import conditional_update

from .models import Case, CaseAction, CaseStatus, CaseStatusLog

logger = logging.getLogger(__name__)


class CaseStore:
    """Thin persistence wrapper over the ``Case`` model."""

    @staticmethod
    def get(case_id: int) -> Case:
        """
        Read the current snapshot of a case.

        Raises
        ------
        NotFound
            If no case has this id.
        """
        try:
            return Case.objects.select_related("station", "officer").get(pk=case_id)
        except (Case.DoesNotExist, ValueError):
            raise NotFound(f"FIR #{case_id} does not exist.")

    @staticmethod
    def list_all() -> QuerySet[Case]:
        return Case.objects.select_related("station", "officer", "officer__user", "victim")

    @staticmethod
    def create(
        *,
        victim_id: int,
        station_id: int,
        payload: dict[str, Any],
        actor_id: int,
    ) -> Case:
        """
        Insert a new case in ``submitted`` state with its opening audit row.

        Must run inside ``transaction.atomic``.
        """
        fields = {k: v for k, v in payload.items() if v is not None}
        case = Case.objects.create(
            victim_id=victim_id,
            station_id=station_id,
            status=CaseStatus.SUBMITTED,
            closed=False,
            officer=None,
            **fields,
        )
        CaseStatusLog.objects.create(
            case=case,
            action=CaseAction.FILE,
            from_status="",
            to_status=CaseStatus.SUBMITTED,
            changed_by_id=actor_id,
            message="Complaint filed.",
        )
        return case

    @staticmethod
    def put(
        snapshot: Case,
        expected_version: int,
        changes: dict[str, Any],
        *,
        action: str,
        actor_id: int,
        message: str = "",
    ) -> bool:
        """
        Write ``changes`` if the case is still at ``expected_version``.

        On success the audit row is written too; the caller's surrounding
        ``transaction.atomic`` block makes both land or neither.

        Returns
        -------
        bool
            ``False`` when another writer committed first.
        """
        if not conditional_update(
            model_class=Case,
            pk=snapshot.pk,
            expected_version=expected_version,
            changes=changes,
        ):
            return False

        CaseStatusLog.objects.create(
            case_id=snapshot.pk,
            action=action,
            from_status=snapshot.status,
            to_status=changes.get("status", snapshot.status),
            changed_by_id=actor_id,
            message=message,
        )
        return True
