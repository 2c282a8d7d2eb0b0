"""
core.domain — Shared domain utilities for cross-app service layers.

Modules
-------
exceptions         Domain-specific exceptions that map cleanly to HTTP responses.
exception_handler  DRF handler rendering domain exceptions as ``{kind, message}``.
transactions       Compare-and-swap writes with a bounded conflict retry.
access             Role-scoped queryset selectors and role guards.

Usage from any app::

    from core.domain.exceptions import DomainError, InvalidState
    from core.domain.transactions import conditional_update, retry_on_conflict
    from core.domain.access import apply_role_scope
"""
