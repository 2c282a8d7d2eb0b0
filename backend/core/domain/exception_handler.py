"""
core.domain.exception_handler — DRF-compatible global exception handler.

Maps domain exceptions from ``core.domain.exceptions`` to DRF ``Response``
objects of the shape ``{"kind": ..., "message": ...}`` so that views
don't need per-endpoint try/except boilerplate.

Registered in ``settings.py``::

    REST_FRAMEWORK = {
        ...
        'EXCEPTION_HANDLER': 'core.domain.exception_handler.domain_exception_handler',
    }
"""

from __future__ import annotations

import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_default_handler

from core.domain.exceptions import (
    Conflict,
    DomainError,
    InvalidState,
    InvalidStation,
    NotFound,
    OfficerNotEligible,
    PermissionDenied,
)

logger = logging.getLogger(__name__)

# Domain exception → HTTP status code
_STATUS_MAP: dict[type, int] = {
    PermissionDenied:   403,
    NotFound:           404,
    InvalidState:       409,
    Conflict:           409,
    OfficerNotEligible: 422,
    InvalidStation:     422,
    DomainError:        400,  # catch-all base class last
}


def domain_error_payload(exc: DomainError) -> dict[str, str]:
    """Structured error body returned for every domain failure."""
    return {"kind": exc.kind, "message": str(exc)}


def domain_exception_handler(exc: Exception, context: dict) -> Response | None:
    """
    DRF exception handler that also handles ``core.domain.exceptions``.

    The default DRF handler is called first.  If it returns ``None``
    (meaning DRF doesn't recognise the exception), we check whether
    it's one of our domain exceptions and return an appropriate response.
    """
    response = drf_default_handler(exc, context)
    if response is not None:
        return response

    for exc_class, status_code in _STATUS_MAP.items():
        if isinstance(exc, exc_class):
            logger.warning(
                "Domain exception [%s] in %s: %s",
                exc.kind,
                context.get("view", "unknown"),
                exc,
            )
            return Response(domain_error_payload(exc), status=status_code)

    # Not a domain exception; let it propagate
    return None
