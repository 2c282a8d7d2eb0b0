"""
Stations app ViewSets.

Views are intentionally thin: they delegate to ``StationQueryService``
and serialize the result.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from accounts.services import PrincipalService

from .serializers import OfficerSerializer, StationSerializer
from .services import StationQueryService


class StationViewSet(viewsets.ViewSet):
    """
    Read-only station endpoints.

    - ``GET /api/stations/``                 — approved stations
    - ``GET /api/stations/{sid}/``           — one station
    - ``GET /api/stations/{sid}/officers/``  — approved officers (station staff only)
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List approved stations",
        responses={200: OpenApiResponse(response=StationSerializer(many=True))},
        tags=["Stations"],
    )
    def list(self, request: Request) -> Response:
        qs = StationQueryService.list_approved_stations().select_related("incharge__user")
        return Response(StationSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Retrieve a station",
        responses={
            200: OpenApiResponse(response=StationSerializer),
            404: OpenApiResponse(description="Station not found."),
        },
        tags=["Stations"],
    )
    def retrieve(self, request: Request, pk: int = None) -> Response:
        station = StationQueryService.get_station(pk)
        return Response(StationSerializer(station).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["get"], url_path="officers")
    @extend_schema(
        summary="List a station's approved officers",
        responses={
            200: OpenApiResponse(response=OfficerSerializer(many=True)),
            403: OpenApiResponse(description="Not this station's administrator."),
            404: OpenApiResponse(description="Station not found."),
        },
        tags=["Stations"],
    )
    def officers(self, request: Request, pk: int = None) -> Response:
        principal = PrincipalService.for_user(request.user)
        qs = StationQueryService.list_station_officers(pk, principal)
        return Response(OfficerSerializer(qs, many=True).data, status=status.HTTP_200_OK)
