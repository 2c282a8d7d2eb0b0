"""
Accounts app serializers.

Contains the Request and Response serializers for login and the
current-user endpoint.  **No business logic** lives here.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth import authenticate, get_user_model
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

User = get_user_model()


class LoginRequestSerializer(serializers.Serializer):
    """
    Accepts multi-field login credentials.

    The client sends ``identifier`` (which may be a username, email or
    phone number) together with ``password``.
    """

    identifier = serializers.CharField(
        help_text="Username, Email, or Phone Number.",
    )
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
        help_text="User account password.",
    )


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Custom SimpleJWT serializer that:

    1. Accepts ``identifier`` + ``password`` instead of
       ``username`` + ``password``.
    2. Resolves the user via the ``MultiFieldAuthBackend``.
    3. Injects the ``role`` claim into the JWT access token payload.
    """

    username_field = "identifier"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields.pop(self.username_field, None)
        self.fields["identifier"] = serializers.CharField(
            help_text="Username, Email, or Phone Number.",
        )

    @classmethod
    def get_token(cls, user) -> Any:
        token = super().get_token(user)
        token["role"] = user.effective_role
        return token

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        """
        Authenticate using the custom ``MultiFieldAuthBackend``.

        Returns a dict containing ``access`` and ``refresh``.
        """
        user = authenticate(
            request=self.context.get("request"),
            identifier=attrs.get("identifier"),
            password=attrs.get("password"),
        )

        if user is None:
            raise serializers.ValidationError(
                {"detail": "Invalid credentials."},
                code="authentication",
            )

        self.user = user
        refresh = self.get_token(user)
        return {
            "refresh": str(refresh),
            "access": str(refresh.access_token),
        }


class UserDetailSerializer(serializers.ModelSerializer):
    """Read representation of a user."""

    role = serializers.CharField(source="effective_role", read_only=True)
    role_display = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "phone_number",
            "first_name",
            "last_name",
            "role",
            "role_display",
        ]
        read_only_fields = fields

    def get_role_display(self, obj) -> str:
        from .models import UserRole

        return UserRole(obj.effective_role).label


class PrincipalSerializer(serializers.Serializer):
    """Read-only rendering of an ``accounts.services.Principal``."""

    user_id = serializers.IntegerField()
    role = serializers.CharField()
    officer_id = serializers.IntegerField(allow_null=True)
    station_id = serializers.IntegerField(allow_null=True)
    approved = serializers.BooleanField()


class TokenResponseSerializer(serializers.Serializer):
    """Response shape of a successful login (documentation only)."""

    access = serializers.CharField()
    refresh = serializers.CharField()
    user = UserDetailSerializer()


class MeResponseSerializer(serializers.Serializer):
    """Response shape of ``GET /me/`` (documentation only)."""

    user = UserDetailSerializer()
    principal = PrincipalSerializer()
