"""
core.domain.transactions — Helpers for safe, optimistic state transitions.

Every mutating service call follows the same read-validate-write cycle:

    1. Read a snapshot of the record (including its ``version``).
    2. Validate the requested change against the snapshot.
    3. Write the change back **conditioned on the version being
       unchanged** (compare-and-swap) inside ``transaction.atomic``.
    4. If another writer got there first, start again from step 1, up to
       a bounded number of attempts.

Usage::

    from core.domain.transactions import StaleWrite, conditional_update, retry_on_conflict

    def _attempt():
        snapshot = Case.objects.get(pk=case_id)
        ...
        if not conditional_update(
            model_class=Case,
            pk=snapshot.pk,
            expected_version=snapshot.version,
            changes={"status": "investigating"},
        ):
            raise StaleWrite(f"Case #{case_id}")
        return snapshot

    result = retry_on_conflict(_attempt, attempts=3, label=f"Case #{case_id}")
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from django.db import OperationalError, models, transaction
from django.db.models import F
from django.utils import timezone

from core.domain.exceptions import Conflict

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StaleWrite(Exception):
    """
    Raised by an attempt function when its conditional write matched no
    row because the record's version moved on since it was read.

    Internal signal for ``retry_on_conflict``; never leaves the service
    layer.
    """


def is_lock_contention(exc: OperationalError) -> bool:
    """``True`` for the database's "locked" / "busy" errors."""
    message = str(exc).lower()
    return "locked" in message or "busy" in message


def conditional_update(
    *,
    model_class: type[models.Model],
    pk: Any,
    expected_version: int,
    changes: dict[str, Any],
    version_field: str = "version",
) -> bool:
    """
    Apply ``changes`` to one row only if its version still equals
    ``expected_version``; bump the version on success.

    Executed as a single ``UPDATE ... WHERE pk = %s AND version = %s``,
    so the check and the write are one atomic statement.

    Args:
        model_class:      The Django model class.
        pk:               Primary key of the row.
        expected_version: Version read together with the snapshot.
        changes:          Field name → new value.
        version_field:    Name of the integer version column.

    Returns:
        ``True`` if the row was updated, ``False`` if the version no
        longer matched (or the row vanished).
    """
    values = dict(changes)
    values[version_field] = F(version_field) + 1
    if any(f.name == "updated_at" for f in model_class._meta.concrete_fields):
        values["updated_at"] = timezone.now()

    updated = (
        model_class.objects
        .filter(pk=pk, **{version_field: expected_version})
        .update(**values)
    )
    return updated == 1


def retry_on_conflict(
    attempt: Callable[[], T],
    *,
    attempts: int,
    label: str = "record",
) -> T:
    """
    Run ``attempt`` until it completes without raising ``StaleWrite``.

    Each call runs inside its own ``transaction.atomic()`` block so that
    side rows written alongside the conditional update (audit entries)
    roll back together with a stale attempt.  A lock-contention
    ``OperationalError`` (another writer held the database past the lock
    timeout) counts as a lost race too.

    Args:
        attempt:  Zero-argument callable performing one read-validate-write.
        attempts: Maximum number of tries (values below 1 are treated as 1).
        label:    Human-readable record name for logs and the error message.

    Returns:
        Whatever ``attempt`` returns on its first non-stale run.

    Raises:
        Conflict: If every attempt hit a stale write.
        Any other exception raised by ``attempt`` propagates unchanged.
    """
    budget = max(1, attempts)
    for number in range(1, budget + 1):
        try:
            with transaction.atomic():
                return attempt()
        except StaleWrite:
            logger.warning(
                "Concurrent modification of %s (attempt %d/%d)",
                label,
                number,
                budget,
            )
        except OperationalError as exc:
            if not is_lock_contention(exc):
                raise
            logger.warning(
                "%s is locked by another writer (attempt %d/%d): %s",
                label,
                number,
                budget,
                exc,
            )
    raise Conflict(
        f"{label} was modified concurrently {budget} time(s); please retry."
    )


def run_in_atomic(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Execute ``fn(*args, **kwargs)`` inside ``transaction.atomic()``.

    Raises:
        Any exception raised by ``fn`` — the transaction is rolled back.
    """
    with transaction.atomic():
        return fn(*args, **kwargs)
