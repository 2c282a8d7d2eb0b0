"""
Cases app serializers.

Contains all Request and Response serializers for the FIR API.
Serializers handle field definitions, read/write constraints, and field-level
validation only.  **No lifecycle rules live here** — those belong in
``transitions.py`` and ``services.py``.

Structure
---------
1. Filter / query-param serializers
2. Case read serializers
3. Case write serializers (filing, assignment, linking)
4. Audit / tracking serializers
"""

from __future__ import annotations

from typing import Any

from django.utils import timezone
from rest_framework import serializers

from core.models import MAX_DB_ID

from .models import Case, CaseStatus, CaseStatusLog
from .services import ORDERINGS


# ═══════════════════════════════════════════════════════════════════
#  1. Filter / Query-Parameter Serializers
# ═══════════════════════════════════════════════════════════════════


class CaseFilterSerializer(serializers.Serializer):
    """
    Validates and cleans query-parameter filters for ``GET /api/fir/``.

    All fields are optional.  The view passes the validated dict directly
    to ``CaseQueryService.get_filtered_queryset``.

    Query Parameters
    ----------------
    ``view``      : str — ``pending`` | ``active`` | ``resolved``
    ``station``   : int — station for the ``pending`` view
    ``officer``   : int — officer for the ``active`` / ``resolved`` views
    ``status``    : str — one of ``CaseStatus`` values
    ``search``    : str — case id, location or description
    ``ordering``  : str — ``complain_date`` | ``-complain_date``
    """

    view = serializers.ChoiceField(
        choices=[("pending", "Pending"), ("active", "Active"), ("resolved", "Resolved")],
        required=False,
        help_text="Work-queue view: 'pending' (unassigned at a station), 'active' or 'resolved' (an officer's cases).",
    )
    station = serializers.IntegerField(required=False, min_value=1, max_value=MAX_DB_ID, help_text="Station id for the 'pending' view.")
    officer = serializers.IntegerField(required=False, min_value=1, max_value=MAX_DB_ID, help_text="Officer HRMS number for 'active' / 'resolved'.")
    status = serializers.ChoiceField(
        choices=CaseStatus.choices,
        required=False,
        help_text="Filter by case status. Options: " + ", ".join([c[0] for c in CaseStatus.choices]) + ".",
    )
    search = serializers.CharField(
        required=False,
        max_length=255,
        allow_blank=False,
        help_text="Free-text search against case id, incident location and description.",
    )
    ordering = serializers.ChoiceField(
        choices=[(o, o) for o in ORDERINGS],
        required=False,
        default="-complain_date",
        help_text="Sort by complaint date; prefix with '-' for newest first.",
    )


# ═══════════════════════════════════════════════════════════════════
#  2. Case Read Serializers
# ═══════════════════════════════════════════════════════════════════


class CaseSerializer(serializers.ModelSerializer):
    """Full representation of a case as returned by every FIR endpoint."""

    status_display = serializers.CharField(source="get_status_display", read_only=True)
    station_name = serializers.CharField(source="station.name", read_only=True)
    officer_name = serializers.SerializerMethodField()

    class Meta:
        model = Case
        fields = [
            "id",
            "status",
            "status_display",
            "closed",
            "station",
            "station_name",
            "officer",
            "officer_name",
            "victim",
            "criminal",
            "complain_date",
            "incident_date",
            "incident_location",
            "description",
            "version",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_officer_name(self, obj: Case) -> str | None:
        if obj.officer is None:
            return None
        return obj.officer.user.get_full_name() or obj.officer.user.username


# ═══════════════════════════════════════════════════════════════════
#  3. Case Write Serializers
# ═══════════════════════════════════════════════════════════════════


class FileCaseSerializer(serializers.Serializer):
    """
    Request body for ``POST /api/fir/``.

    The complainant is always the authenticated user; only the station
    and the incident details are accepted from the body.
    """

    station = serializers.IntegerField(min_value=1, max_value=MAX_DB_ID, help_text="Id of the station receiving the complaint.")
    description = serializers.CharField(help_text="What happened.")
    incident_date = serializers.DateField(required=False, allow_null=True)
    incident_location = serializers.CharField(required=False, allow_blank=True, max_length=500, default="")
    complain_date = serializers.DateField(required=False, allow_null=True)

    def validate_description(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Description cannot be blank.")
        return value

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        """Neither date may lie in the future, and the incident precedes the complaint."""
        today = timezone.localdate()
        incident = attrs.get("incident_date")
        complained = attrs.get("complain_date")
        if incident and incident > today:
            raise serializers.ValidationError({"incident_date": "Incident date cannot be in the future."})
        if complained and complained > today:
            raise serializers.ValidationError({"complain_date": "Complaint date cannot be in the future."})
        if incident and complained and incident > complained:
            raise serializers.ValidationError(
                "incident_date must be on or before complain_date."
            )
        return attrs


class AssignOfficerSerializer(serializers.Serializer):
    """Optional body for ``POST /api/fir/{id}/assign/{officer_id}/``."""

    reassign = serializers.BooleanField(
        required=False,
        default=False,
        help_text="Replace an existing assignment (station administrators only).",
    )


class LinkCriminalSerializer(serializers.Serializer):
    """Request body for ``POST /api/fir/{id}/link-criminal/``."""

    criminal_id = serializers.IntegerField(min_value=1, max_value=MAX_DB_ID, help_text="Criminal record id.")


# ═══════════════════════════════════════════════════════════════════
#  4. Audit / Tracking Serializers
# ═══════════════════════════════════════════════════════════════════


class CaseStatusLogSerializer(serializers.ModelSerializer):
    """Read-only serializer for the case audit trail."""

    changed_by_name = serializers.SerializerMethodField()

    class Meta:
        model = CaseStatusLog
        fields = [
            "id",
            "action",
            "from_status",
            "to_status",
            "changed_by",
            "changed_by_name",
            "message",
            "created_at",
        ]
        read_only_fields = fields

    def get_changed_by_name(self, obj: CaseStatusLog) -> str | None:
        """Return full name of the actor or None."""
        if obj.changed_by is None:
            return None
        return (
            f"{obj.changed_by.first_name} {obj.changed_by.last_name}"
        ).strip() or obj.changed_by.username


class _TimelineEntrySerializer(serializers.Serializer):
    at = serializers.DateTimeField()
    status = serializers.CharField()
    remarks = serializers.CharField(allow_blank=True)


class CaseTrackingSerializer(serializers.Serializer):
    """Shape of ``CaseTrackingService.track``."""

    id = serializers.IntegerField()
    status = serializers.CharField()
    status_display = serializers.CharField()
    display_status = serializers.ChoiceField(
        choices=[(s, s) for s in ("Pending", "In Progress", "Resolved", "Closed", "Reopened")],
    )
    closed = serializers.BooleanField()
    complain_date = serializers.DateField()
    station = serializers.IntegerField()
    officer_assigned = serializers.BooleanField()
    timeline = _TimelineEntrySerializer(many=True)

