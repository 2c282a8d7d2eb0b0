"""
Accounts app views.

All views follow the **Thin View** pattern: validate input via
serializers, delegate to the service layer, and return the result
wrapped in a DRF ``Response``.

View Map
--------
- ``LoginView``  — POST /auth/login/
- ``MeView``     — GET /me/
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import (
    CustomTokenObtainPairSerializer,
    LoginRequestSerializer,
    MeResponseSerializer,
    PrincipalSerializer,
    TokenResponseSerializer,
    UserDetailSerializer,
)
from .services import PrincipalService


class LoginView(APIView):
    """
    POST /api/accounts/auth/login/

    Public endpoint.  Authenticates a user via username, email or phone
    number plus password and returns a JWT pair.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Log in",
        description=(
            "Authenticate with any of username / email / phone number plus "
            "password. Unapproved officers cannot log in."
        ),
        request=LoginRequestSerializer,
        responses={
            200: OpenApiResponse(response=TokenResponseSerializer, description="Token pair issued."),
            400: OpenApiResponse(description="Invalid credentials."),
        },
        tags=["Accounts"],
    )
    def post(self, request: Request) -> Response:
        serializer = CustomTokenObtainPairSerializer(
            data=request.data,
            context={"request": request},
        )
        serializer.is_valid(raise_exception=True)

        payload = serializer.validated_data
        payload["user"] = UserDetailSerializer(serializer.user).data

        return Response(payload, status=status.HTTP_200_OK)


class MeView(APIView):
    """
    GET /api/accounts/me/

    Returns the authenticated user together with the principal the
    case lifecycle will see them as (role, officer id, station, approval).
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Current user",
        responses={200: OpenApiResponse(response=MeResponseSerializer)},
        tags=["Accounts"],
    )
    def get(self, request: Request) -> Response:
        principal = PrincipalService.for_user(request.user)
        return Response(
            {
                "user": UserDetailSerializer(request.user).data,
                "principal": PrincipalSerializer(principal).data,
            },
            status=status.HTTP_200_OK,
        )
