"""
Cases app models.

Covers the complaint (FIR) lifecycle — from a citizen's filing, through
officer assignment and investigation stages, to resolution, closure and
an explicit reopen.
"""

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

from core.models import TimeStampedModel


# ────────────────────────────────────────────────────────────────────
# Choice enumerations
# ────────────────────────────────────────────────────────────────────

class CaseStatus(models.TextChoices):
    """
    Lifecycle stages, in forward order, plus the ``reopened`` marker set
    by an explicit reopen.
    """

    SUBMITTED = "submitted", "Submitted"
    ASSIGNED = "assigned", "Assigned"
    INVESTIGATING = "investigating", "Investigating"
    EVIDENCE_COLLECTION = "evidence_collection", "Evidence Collection"
    UNDER_REVIEW = "under_review", "Under Review"
    RESOLVED = "resolved", "Resolved"
    REOPENED = "reopened", "Reopened"


class CaseAction(models.TextChoices):
    """Kind of committed mutation recorded in the audit log."""

    FILE = "file", "Filed"
    ASSIGN = "assign", "Officer Assigned"
    REASSIGN = "reassign", "Officer Reassigned"
    ADVANCE = "advance", "Status Advanced"
    CLOSE = "close", "Closed"
    REOPEN = "reopen", "Reopened"
    LINK_CRIMINAL = "link_criminal", "Criminal Linked"


# ────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────

class Case(TimeStampedModel):
    """
    A filed complaint (FIR).

    * ``id`` is issued by the database on filing.
    * ``status`` is the sole authority for where the case is; ``closed``
      is kept as a column but written only by the lifecycle service, and
      the database refuses ``closed`` without ``status == resolved``.
    * ``version`` increments on every committed mutation and guards the
      conditional writes made by ``cases.store.CaseStore``.
    """

    status = models.CharField(
        max_length=30,
        choices=CaseStatus.choices,
        default=CaseStatus.SUBMITTED,
        verbose_name="Current Status",
        db_index=True,
    )
    closed = models.BooleanField(
        default=False,
        verbose_name="Closed",
        db_index=True,
    )
    station = models.ForeignKey(
        "stations.Station",
        on_delete=models.PROTECT,
        related_name="cases",
        verbose_name="Owning Station",
    )
    officer = models.ForeignKey(
        "stations.Officer",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="cases",
        verbose_name="Assigned Officer",
    )
    victim = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="filed_cases",
        verbose_name="Complainant",
    )
    criminal = models.ForeignKey(
        "criminals.Criminal",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="cases",
        verbose_name="Linked Criminal Record",
    )

    # ── Descriptive payload (immutable after filing) ────────────────
    complain_date = models.DateField(
        default=timezone.localdate,
        verbose_name="Complaint Date",
    )
    incident_date = models.DateField(
        null=True,
        blank=True,
        verbose_name="Incident Date",
    )
    incident_location = models.CharField(
        max_length=500,
        blank=True,
        default="",
        verbose_name="Incident Location",
    )
    description = models.TextField(
        verbose_name="Description",
    )

    version = models.PositiveIntegerField(
        default=0,
        verbose_name="Version",
    )

    class Meta:
        verbose_name = "FIR"
        verbose_name_plural = "FIRs"
        ordering = ["-complain_date", "-id"]
        indexes = [
            models.Index(fields=["station", "status"], name="case_station_status_idx"),
            models.Index(fields=["officer", "closed"], name="case_officer_closed_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(closed=False) | Q(status=CaseStatus.RESOLVED),
                name="case_closed_implies_resolved",
            ),
        ]

    def __str__(self):
        return f"FIR #{self.pk} ({self.status})"


class CaseStatusLog(TimeStampedModel):
    """
    Append-only audit trail of every committed mutation of a case.

    Written in the same atomic block as the conditional case update, so a
    row exists if and only if the change it describes committed.
    """

    case = models.ForeignKey(
        Case,
        on_delete=models.CASCADE,
        related_name="status_logs",
        verbose_name="Case",
    )
    action = models.CharField(
        max_length=20,
        choices=CaseAction.choices,
        verbose_name="Action",
    )
    from_status = models.CharField(
        max_length=30,
        choices=CaseStatus.choices,
        blank=True,
        default="",
        verbose_name="Previous Status",
    )
    to_status = models.CharField(
        max_length=30,
        choices=CaseStatus.choices,
        verbose_name="New Status",
    )
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="case_status_changes",
        verbose_name="Changed By",
    )
    message = models.TextField(
        blank=True,
        default="",
        verbose_name="Message",
    )

    class Meta:
        verbose_name = "Case Status Log"
        verbose_name_plural = "Case Status Logs"
        ordering = ["created_at", "id"]

    def __str__(self):
        return (
            f"FIR #{self.case_id}: {self.action} "
            f"{self.from_status or '—'} → {self.to_status}"
        )
