"""
Core app models.

Provides abstract base models shared across the project.
"""

from django.db import models

#: Largest value a 64-bit integer key column can hold.
MAX_DB_ID = 2**63 - 1


class TimeStampedModel(models.Model):
    """
    Abstract base model that provides self-updating ``created_at`` and
    ``updated_at`` timestamp fields for every concrete child model.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created At",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name="Updated At",
    )

    class Meta:
        abstract = True
