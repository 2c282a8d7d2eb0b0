"""
Stations app serializers.

Read-only representations of stations and officers.
"""

from __future__ import annotations

from rest_framework import serializers

from .models import Officer, Station


class StationSerializer(serializers.ModelSerializer):
    """Public station representation (filing form station picker)."""

    incharge_name = serializers.SerializerMethodField()

    class Meta:
        model = Station
        fields = [
            "sid",
            "name",
            "address",
            "phone_number",
            "approval",
            "incharge",
            "incharge_name",
        ]
        read_only_fields = fields

    def get_incharge_name(self, obj: Station) -> str | None:
        if obj.incharge is None:
            return None
        return obj.incharge.user.get_full_name() or obj.incharge.user.username


class OfficerSerializer(serializers.ModelSerializer):
    """Officer roster entry."""

    name = serializers.SerializerMethodField()

    class Meta:
        model = Officer
        fields = ["hrms", "name", "rank", "station", "approval"]
        read_only_fields = fields

    def get_name(self, obj: Officer) -> str:
        return obj.user.get_full_name() or obj.user.username
