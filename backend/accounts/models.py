"""
Accounts app models.

Defines the custom User model.  Every user acts in exactly one role:
citizens file complaints, officers investigate them, station
administrators supervise their station's queue and system administrators
oversee the whole deployment.
"""

from django.contrib.auth.models import AbstractUser
from django.db import models


class UserRole(models.TextChoices):
    """Acting role of a user (the *principal* kind)."""

    CITIZEN = "citizen", "Citizen"
    OFFICER = "officer", "Police Officer"
    STATION_ADMIN = "station_admin", "Station Administrator"
    SYSTEM_ADMIN = "system_admin", "System Administrator"


class User(AbstractUser):
    """
    Custom user model.

    Login is supported via *any one* of username / email / phone_number
    together with the password (see ``accounts.backends``).

    Officers and station administrators are further described by records
    in the ``stations`` app (``Officer.user`` and ``Station.admin``);
    those records carry the approval flags that gate their work.
    """

    email = models.EmailField(
        unique=True,
        verbose_name="Email Address",
    )
    phone_number = models.CharField(
        max_length=15,
        unique=True,
        verbose_name="Phone Number",
        db_index=True,
    )
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.CITIZEN,
        verbose_name="Role",
        db_index=True,
    )

    REQUIRED_FIELDS = ["email", "phone_number"]

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"

    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"

    @property
    def effective_role(self) -> str:
        """Superusers always act as system administrators."""
        if self.is_superuser:
            return UserRole.SYSTEM_ADMIN
        return self.role
