"""
Criminals app serializers.
"""

from __future__ import annotations

from rest_framework import serializers

from core.models import MAX_DB_ID

from .models import Criminal, CriminalStatus


class CriminalFilterSerializer(serializers.Serializer):
    """Query parameters for ``GET /api/criminals/``."""

    station = serializers.IntegerField(required=False, min_value=1, max_value=MAX_DB_ID)
    status = serializers.ChoiceField(choices=CriminalStatus.choices, required=False)
    search = serializers.CharField(required=False, max_length=255, allow_blank=False)


class CriminalSerializer(serializers.ModelSerializer):
    """Full criminal record."""

    status_display = serializers.CharField(source="get_status_display", read_only=True)
    station_name = serializers.CharField(source="station.name", read_only=True, default=None)

    class Meta:
        model = Criminal
        fields = [
            "id",
            "name",
            "age",
            "gender",
            "phone_number",
            "email",
            "address",
            "identification_marks",
            "status",
            "status_display",
            "station",
            "station_name",
            "registered_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class RegisterCriminalSerializer(serializers.ModelSerializer):
    """Request body for ``POST /api/criminals/``."""

    station = serializers.IntegerField(
        required=False,
        min_value=1,
        max_value=MAX_DB_ID,
        help_text="Registering station; defaults to the caller's station.",
    )

    class Meta:
        model = Criminal
        fields = [
            "name",
            "age",
            "gender",
            "phone_number",
            "email",
            "address",
            "identification_marks",
            "status",
            "station",
        ]
