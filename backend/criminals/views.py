"""
Criminals app ViewSets.

Thin views over ``CriminalService``; role checks live in the service.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from accounts.services import PrincipalService

from .serializers import (
    CriminalFilterSerializer,
    CriminalSerializer,
    RegisterCriminalSerializer,
)
from .services import CriminalService


class CriminalViewSet(viewsets.ViewSet):
    """
    Criminal record endpoints (police staff only).

    - ``GET  /api/criminals/``       — list, filterable by station / status / name
    - ``POST /api/criminals/``       — register a record
    - ``GET  /api/criminals/{id}/``  — one record
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List criminal records",
        parameters=[
            OpenApiParameter(name="station", type=int, location=OpenApiParameter.QUERY, description="Registering station."),
            OpenApiParameter(name="status", type=str, location=OpenApiParameter.QUERY, description="Record status."),
            OpenApiParameter(name="search", type=str, location=OpenApiParameter.QUERY, description="Match name or identification marks."),
        ],
        responses={
            200: OpenApiResponse(response=CriminalSerializer(many=True)),
            403: OpenApiResponse(description="Not police staff."),
        },
        tags=["Criminals"],
    )
    def list(self, request: Request) -> Response:
        filter_serializer = CriminalFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        principal = PrincipalService.for_user(request.user)
        qs = CriminalService.list_criminals(principal, filter_serializer.validated_data)
        return Response(CriminalSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Register a criminal record",
        request=RegisterCriminalSerializer,
        responses={
            201: OpenApiResponse(response=CriminalSerializer),
            400: OpenApiResponse(description="Validation error."),
            403: OpenApiResponse(description="Not police staff, or another station."),
            404: OpenApiResponse(description="Station not found."),
            422: OpenApiResponse(description="InvalidStation — station not approved."),
        },
        tags=["Criminals"],
    )
    def create(self, request: Request) -> Response:
        serializer = RegisterCriminalSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        principal = PrincipalService.for_user(request.user)
        criminal = CriminalService.register_criminal(principal, serializer.validated_data)
        return Response(CriminalSerializer(criminal).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Retrieve a criminal record",
        responses={
            200: OpenApiResponse(response=CriminalSerializer),
            403: OpenApiResponse(description="Not police staff."),
            404: OpenApiResponse(description="Record not found."),
        },
        tags=["Criminals"],
    )
    def retrieve(self, request: Request, pk: int = None) -> Response:
        principal = PrincipalService.for_user(request.user)
        criminal = CriminalService.get_criminal_for(principal, pk)
        return Response(CriminalSerializer(criminal).data, status=status.HTTP_200_OK)
