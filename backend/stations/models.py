"""
Stations app models.

A ``Station`` is an administrative policing unit that owns officers and
cases.  An ``Officer`` is an investigator attached to exactly one
station.  Both carry an ``approval`` flag maintained by the system
administrator: unapproved stations cannot receive complaints and
unapproved officers can neither log in nor be assigned work.
"""

from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


class Station(TimeStampedModel):
    """Police station."""

    sid = models.BigIntegerField(
        primary_key=True,
        verbose_name="Station ID",
    )
    name = models.CharField(
        max_length=255,
        verbose_name="Station Name",
    )
    address = models.CharField(
        max_length=500,
        blank=True,
        default="",
        verbose_name="Address",
    )
    phone_number = models.CharField(
        max_length=15,
        blank=True,
        default="",
        verbose_name="Phone Number",
    )
    approval = models.BooleanField(
        default=False,
        verbose_name="Approved",
        db_index=True,
    )
    admin = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="administered_station",
        verbose_name="Station Administrator",
    )
    incharge = models.ForeignKey(
        "stations.Officer",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="Station In-charge",
    )

    class Meta:
        verbose_name = "Station"
        verbose_name_plural = "Stations"
        ordering = ["name"]

    def __str__(self):
        return f"Station #{self.sid} — {self.name}"


class Officer(TimeStampedModel):
    """Police officer attached to one station."""

    hrms = models.BigIntegerField(
        primary_key=True,
        verbose_name="HRMS Number",
    )
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="officer_profile",
        verbose_name="User Account",
    )
    station = models.ForeignKey(
        Station,
        on_delete=models.PROTECT,
        related_name="officers",
        verbose_name="Station",
    )
    rank = models.CharField(
        max_length=100,
        blank=True,
        default="",
        verbose_name="Rank",
    )
    approval = models.BooleanField(
        default=False,
        verbose_name="Approved",
        db_index=True,
    )

    class Meta:
        verbose_name = "Officer"
        verbose_name_plural = "Officers"
        ordering = ["hrms"]

    def __str__(self):
        return f"Officer #{self.hrms} ({self.user.get_full_name() or self.user.username})"
