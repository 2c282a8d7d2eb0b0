"""
core.domain.exceptions — Domain-specific exception hierarchy.

These exceptions represent business-rule violations inside service layers.
They are deliberately **not** DRF exceptions so that the domain layer stays
framework-agnostic.  The global DRF exception handler
(``core.domain.exception_handler``) maps them to HTTP responses of the
shape ``{"kind": ..., "message": ...}``.

Mapping cheatsheet
------------------
┌─────────────────────┬──────────────────────────────────────┬──────┐
│ Domain Exception    │ Meaning                              │ Code │
├─────────────────────┼──────────────────────────────────────┼──────┤
│ DomainError         │ generic business-rule violation      │ 400  │
│ PermissionDenied    │ actor not allowed this transition    │ 403  │
│ NotFound            │ case / officer / station id unknown  │ 404  │
│ InvalidState        │ transition illegal from current state│ 409  │
│ Conflict            │ concurrent-write retries exhausted   │ 409  │
│ OfficerNotEligible  │ officer unapproved or wrong station  │ 422  │
│ InvalidStation      │ station unapproved                   │ 422  │
└─────────────────────┴──────────────────────────────────────┴──────┘

Recommended usage inside a service::

    from core.domain.exceptions import InvalidState

    if target not in forward_targets(case.status):
        raise InvalidState(
            current=case.status,
            target=target,
            reason="Status may only move forward.",
        )
"""

from __future__ import annotations


class DomainError(Exception):
    """
    Base class for all domain / business-rule errors.

    ``kind`` is the machine-readable error name returned to API callers.
    """

    kind = "DomainError"

    def __init__(self, message: str = "A business rule was violated.") -> None:
        self.message = message
        super().__init__(self.message)


class PermissionDenied(DomainError):
    """
    The acting principal is not authorized for the requested transition.

    Maps to HTTP 403.
    """

    kind = "PermissionDenied"

    def __init__(self, message: str = "You do not have permission to perform this action.") -> None:
        super().__init__(message)


class NotFound(DomainError):
    """
    The requested case, officer or station does not exist (or is not
    visible to the requesting principal).

    Maps to HTTP 404.
    """

    kind = "NotFound"

    def __init__(self, message: str = "The requested resource was not found.") -> None:
        super().__init__(message)


class Conflict(DomainError):
    """
    A concurrent writer changed the record between read and write more
    times than the retry budget allows.

    Maps to HTTP 409.
    """

    kind = "Conflict"

    def __init__(self, message: str = "The record was modified concurrently; please retry.") -> None:
        super().__init__(message)


class InvalidState(DomainError):
    """
    The requested transition is not legal from the case's current
    ``status`` / ``closed`` combination.

    Maps to HTTP 409.

    Example::

        raise InvalidState(
            current="investigating",
            target="closed",
            reason="Case must be under review or resolved before closing.",
        )
    """

    kind = "InvalidState"

    def __init__(
        self,
        message: str | None = None,
        *,
        current: str | None = None,
        target: str | None = None,
        reason: str | None = None,
    ) -> None:
        if message is None:
            parts = ["Invalid state transition"]
            if current and target:
                parts.append(f"from '{current}' to '{target}'")
            if reason:
                parts.append(f"({reason})")
            message = " ".join(parts) + "."
        super().__init__(message)
        self.current = current
        self.target = target
        self.reason = reason


class OfficerNotEligible(DomainError):
    """
    The target officer is unapproved or belongs to a different station
    than the case.

    Maps to HTTP 422.
    """

    kind = "OfficerNotEligible"

    def __init__(self, message: str = "The officer is not eligible for this case.") -> None:
        super().__init__(message)


class InvalidStation(DomainError):
    """
    The target station exists but has not been approved.

    Maps to HTTP 422.
    """

    kind = "InvalidStation"

    def __init__(self, message: str = "The station is not approved to receive complaints.") -> None:
        super().__init__(message)
