"""
Criminals app models.

A ``Criminal`` is a person on record with the police.  Cases point at a
criminal record through ``Case.criminal`` once an investigation has
identified a suspect.
"""

from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


class CriminalStatus(models.TextChoices):
    ARRESTED = "arrested", "Arrested"
    WANTED = "wanted", "Wanted"
    RELEASED = "released", "Released"
    IN_TRIAL = "in_trial", "In Trial"
    CONVICTED = "convicted", "Convicted"


class Gender(models.TextChoices):
    MALE = "male", "Male"
    FEMALE = "female", "Female"
    OTHER = "other", "Other"


class Criminal(TimeStampedModel):
    """Criminal record."""

    name = models.CharField(
        max_length=255,
        verbose_name="Full Name",
    )
    age = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        verbose_name="Age",
    )
    gender = models.CharField(
        max_length=10,
        choices=Gender.choices,
        blank=True,
        default="",
        verbose_name="Gender",
    )
    phone_number = models.CharField(
        max_length=15,
        blank=True,
        default="",
        verbose_name="Phone Number",
    )
    email = models.EmailField(
        blank=True,
        default="",
        verbose_name="Email",
    )
    address = models.CharField(
        max_length=500,
        blank=True,
        default="",
        verbose_name="Address",
    )
    identification_marks = models.TextField(
        blank=True,
        default="",
        verbose_name="Identification Marks",
    )
    status = models.CharField(
        max_length=20,
        choices=CriminalStatus.choices,
        default=CriminalStatus.ARRESTED,
        verbose_name="Status",
        db_index=True,
    )
    station = models.ForeignKey(
        "stations.Station",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="criminals",
        verbose_name="Registering Station",
    )
    registered_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="registered_criminals",
        verbose_name="Registered By",
    )

    class Meta:
        verbose_name = "Criminal"
        verbose_name_plural = "Criminals"
        ordering = ["name", "id"]

    def __str__(self):
        return f"Criminal #{self.pk} ({self.name})"
