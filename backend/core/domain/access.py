"""
core.domain.access — Role-scoped queryset selectors (shared patterns).

This module provides shared utilities that each app's service layer
calls to obtain querysets filtered by the acting principal's role.

╔══════════════════════════════════════════════════════════════════╗
║  IMPORTANT — Per-app scoping logic does NOT live here.         ║
║  Each app's ``services.py`` owns its own scope-rule table.     ║
║  This module provides:                                         ║
║    1) ``apply_role_scope`` — role-keyed queryset dispatch.     ║
║    2) ``require_role`` — guard that checks the principal role. ║
╚══════════════════════════════════════════════════════════════════╝

Usage in an app's service layer::

    from core.domain.access import apply_role_scope

    CASE_SCOPE_RULES = {
        "system_admin":  lambda qs, p: qs,
        "station_admin": lambda qs, p: qs.filter(station_id=p.station_id),
        "citizen":       lambda qs, p: qs.filter(victim_id=p.user_id),
    }

    qs = apply_role_scope(Case.objects.all(), principal, scope_rules=CASE_SCOPE_RULES)
"""

from __future__ import annotations

from typing import Any, Callable

from django.db.models import QuerySet

from core.domain.exceptions import PermissionDenied

# Takes (queryset, principal) and returns a filtered queryset.
ScopeFilter = Callable[[QuerySet, Any], QuerySet]

# Role name → filter function.
ScopeRules = dict[str, ScopeFilter]


def apply_role_scope(
    queryset: QuerySet,
    principal: Any,
    *,
    scope_rules: ScopeRules,
    default: str = "none",
) -> QuerySet:
    """
    Apply the scope filter registered for the principal's role.

    Args:
        queryset:    Base (unfiltered) queryset.
        principal:   Object exposing a ``role`` attribute.
        scope_rules: Role name → ``filter_fn(queryset, principal)``.
        default:     What to do when the role has no rule.
                     ``"none"`` (default) → empty queryset.
                     ``"all"`` → return unfiltered.

    Returns:
        The (possibly filtered) queryset.
    """
    filter_fn = scope_rules.get(principal.role)
    if filter_fn is not None:
        return filter_fn(queryset, principal)

    if default == "none":
        return queryset.none()
    return queryset


def require_role(principal: Any, *allowed_roles: str, message: str = "") -> None:
    """
    Guard that raises ``PermissionDenied`` if the principal's role is not
    among ``allowed_roles``.

    Example::

        require_role(principal, "station_admin", "system_admin")
    """
    if principal.role not in allowed_roles:
        raise PermissionDenied(
            message
            or (
                f"Role '{principal.role}' is not permitted for this operation. "
                f"Required: {', '.join(allowed_roles)}."
            )
        )
