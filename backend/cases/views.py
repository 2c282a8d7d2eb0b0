"""
Cases app ViewSets.

Architecture: Views are intentionally thin.
Every view follows the strict three-step pattern:

    1. Parse / validate input via a serializer.
    2. Delegate all lifecycle logic to the appropriate service class.
    3. Serialize the result and return a DRF ``Response``.

No database queries, transition rules or authorization decisions live
here.  Domain errors raised by the services propagate to
``core.domain.exception_handler`` which renders ``{"kind", "message"}``.

ViewSets
--------
- ``CaseViewSet`` — The single ViewSet for all FIR endpoints.
  Custom @action methods expose each lifecycle operation as its own
  resource-level RPC.
"""

from __future__ import annotations

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from accounts.services import Principal, PrincipalService

from .serializers import (
    AssignOfficerSerializer,
    CaseFilterSerializer,
    CaseSerializer,
    CaseStatusLogSerializer,
    CaseTrackingSerializer,
    FileCaseSerializer,
    LinkCriminalSerializer,
)
from .services import CaseLifecycleService, CaseQueryService, CaseTrackingService

_ERRORS = {
    403: OpenApiResponse(description="PermissionDenied — caller may not perform this action."),
    404: OpenApiResponse(description="NotFound — unknown case or officer."),
    409: OpenApiResponse(description="InvalidState / Conflict."),
}


class CaseViewSet(viewsets.ViewSet):
    """
    Central ViewSet for the cases app.

    Uses ``viewsets.ViewSet`` (not ``ModelViewSet``) so every action is
    explicitly defined; there is no generic update or delete route and
    every mutation goes through ``CaseLifecycleService``.

    Permission Strategy
    -------------------
    The base permission is ``IsAuthenticated``.  Role and ownership
    checks are enforced exclusively inside the service layer.
    """

    permission_classes = [IsAuthenticated]

    # ── Helpers ──────────────────────────────────────────────────────

    def _principal(self, request: Request) -> Principal:
        return PrincipalService.for_user(request.user)

    def _case_response(self, case, *, http_status: int = status.HTTP_200_OK) -> Response:
        return Response(CaseSerializer(case).data, status=http_status)

    # ── Standard endpoints ───────────────────────────────────────────
    @extend_schema(
        summary="List FIRs",
        description=(
            "List cases visible to the authenticated user.  Citizens see their own "
            "complaints, officers and station administrators see their station's "
            "cases and system administrators see everything."
        ),
        parameters=[
            OpenApiParameter(name="view", type=str, location=OpenApiParameter.QUERY, description="'pending', 'active' or 'resolved'."),
            OpenApiParameter(name="station", type=int, location=OpenApiParameter.QUERY, description="Station for the 'pending' view."),
            OpenApiParameter(name="officer", type=int, location=OpenApiParameter.QUERY, description="Officer for the 'active' / 'resolved' views."),
            OpenApiParameter(name="status", type=str, location=OpenApiParameter.QUERY, description="Filter by case status."),
            OpenApiParameter(name="search", type=str, location=OpenApiParameter.QUERY, description="Match case id, location or description."),
            OpenApiParameter(name="ordering", type=str, location=OpenApiParameter.QUERY, description="'complain_date' or '-complain_date'."),
        ],
        responses={200: OpenApiResponse(response=CaseSerializer(many=True))},
        tags=["FIR"],
    )
    def list(self, request: Request) -> Response:
        """
        GET /api/fir/
        """
        filter_serializer = CaseFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        qs = CaseQueryService.get_filtered_queryset(
            self._principal(request), filter_serializer.validated_data,
        )
        return Response(CaseSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="File a complaint",
        description="A citizen files a new FIR with an approved station.",
        request=FileCaseSerializer,
        responses={
            201: OpenApiResponse(response=CaseSerializer, description="Case filed."),
            400: OpenApiResponse(description="Validation error."),
            403: OpenApiResponse(description="Only citizens can file."),
            404: OpenApiResponse(description="Station not found."),
            422: OpenApiResponse(description="InvalidStation — station not approved."),
        },
        tags=["FIR"],
    )
    def create(self, request: Request) -> Response:
        """
        POST /api/fir/
        """
        serializer = FileCaseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        station_id = data.pop("station")

        case = CaseLifecycleService.file_case(
            request.user.pk, station_id, data, self._principal(request),
        )
        return self._case_response(case, http_status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Retrieve an FIR",
        responses={
            200: OpenApiResponse(response=CaseSerializer),
            404: OpenApiResponse(description="Case not found or not visible."),
        },
        tags=["FIR"],
    )
    def retrieve(self, request: Request, pk: int = None) -> Response:
        case = CaseQueryService.get_case_detail(self._principal(request), pk)
        return self._case_response(case)

    # ── Lifecycle @actions ───────────────────────────────────────────

    @action(detail=True, methods=["post"], url_path=r"assign/(?P<officer_id>\d+)")
    @extend_schema(
        summary="Assign an officer",
        description=(
            "Put an officer of the owning station on the case.  Officers may take "
            "an unassigned case for themselves; station administrators may assign "
            "anyone from their station and, with ``reassign=true``, replace an "
            "existing assignment."
        ),
        request=AssignOfficerSerializer,
        responses={
            200: OpenApiResponse(response=CaseSerializer),
            422: OpenApiResponse(description="OfficerNotEligible."),
            **_ERRORS,
        },
        tags=["FIR"],
    )
    def assign(self, request: Request, pk: int = None, officer_id: str = None) -> Response:
        serializer = AssignOfficerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        case = CaseLifecycleService.assign_officer(
            pk,
            int(officer_id),
            self._principal(request),
            reassign=serializer.validated_data["reassign"],
        )
        return self._case_response(case)

    @action(detail=True, methods=["post"], url_path=r"status/(?P<target_status>[a-z_]+)")
    @extend_schema(
        summary="Advance the status",
        description="Move the case forward to the given stage.  Resolving does not close.",
        request=None,
        responses={200: OpenApiResponse(response=CaseSerializer), **_ERRORS},
        tags=["FIR"],
    )
    def advance(self, request: Request, pk: int = None, target_status: str = None) -> Response:
        case = CaseLifecycleService.advance_status(pk, target_status, self._principal(request))
        return self._case_response(case)

    @action(detail=True, methods=["post"], url_path="close")
    @extend_schema(
        summary="Close the case",
        request=None,
        responses={200: OpenApiResponse(response=CaseSerializer), **_ERRORS},
        tags=["FIR"],
    )
    def close(self, request: Request, pk: int = None) -> Response:
        case = CaseLifecycleService.close_case(pk, self._principal(request))
        return self._case_response(case)

    @action(detail=True, methods=["post"], url_path="reopen")
    @extend_schema(
        summary="Reopen a closed case",
        request=None,
        responses={200: OpenApiResponse(response=CaseSerializer), **_ERRORS},
        tags=["FIR"],
    )
    def reopen(self, request: Request, pk: int = None) -> Response:
        case = CaseLifecycleService.reopen_case(pk, self._principal(request))
        return self._case_response(case)

    @action(detail=True, methods=["post"], url_path="link-criminal")
    @extend_schema(
        summary="Link a criminal record",
        request=LinkCriminalSerializer,
        responses={200: OpenApiResponse(response=CaseSerializer), **_ERRORS},
        tags=["FIR"],
    )
    def link_criminal(self, request: Request, pk: int = None) -> Response:
        serializer = LinkCriminalSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        case = CaseLifecycleService.link_criminal(
            pk, serializer.validated_data["criminal_id"], self._principal(request),
        )
        return self._case_response(case)

    # ── Read-only sub-resources ──────────────────────────────────────

    @action(detail=True, methods=["get"], url_path="status-log")
    @extend_schema(
        summary="Audit trail",
        responses={
            200: OpenApiResponse(response=CaseStatusLogSerializer(many=True)),
            404: OpenApiResponse(description="Case not found or not visible."),
        },
        tags=["FIR"],
    )
    def status_log(self, request: Request, pk: int = None) -> Response:
        logs = CaseQueryService.get_status_log(self._principal(request), pk)
        return Response(CaseStatusLogSerializer(logs, many=True).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["get"], url_path="track")
    @extend_schema(
        summary="Track complaint progress",
        responses={
            200: OpenApiResponse(response=CaseTrackingSerializer),
            404: OpenApiResponse(description="Case not found or not visible."),
        },
        tags=["FIR"],
    )
    def track(self, request: Request, pk: int = None) -> Response:
        summary = CaseTrackingService.track(self._principal(request), pk)
        return Response(CaseTrackingSerializer(summary).data, status=status.HTTP_200_OK)
