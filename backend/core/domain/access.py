"""
core.domain.access — Role guards shared by every service layer.

Authorization is a **capability check performed by the service** before
any mutating operation, independent of how the principal was resolved.
Views may add a DRF permission class as an early exit, but the service
call is the authoritative check.

Architecture overview
---------------------

    ┌─────────┐      ┌────────────────┐      ┌──────────────────┐
    │  View   │─────▶│  App service   │─────▶│ core.domain      │
    │ (thin)  │      │ (owns logic)   │      │   .access        │
    └─────────┘      └────────────────┘      │ (shared guards)  │
                                             └──────────────────┘

Usage in an app's service layer::

    from core.domain.access import require_role

    class CaseService:
        @staticmethod
        def remove_case(case_id, actor):
            require_role(actor, Role.ADMIN)
            ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.domain.exceptions import PermissionDenied, Unauthenticated

if TYPE_CHECKING:
    from core.domain.principal import Principal


def get_role_name(principal: Principal | None) -> str | None:
    """
    Return the principal's role, or ``None`` for anonymous callers.

    Informational helper used for logging and response payloads.
    """
    if principal is None or not getattr(principal, "is_authenticated", False):
        return None
    return getattr(principal, "role", None)


def require_authenticated(principal: Principal | None) -> Principal:
    """
    Guard that raises ``Unauthenticated`` for a missing/anonymous principal.

    Returns the principal unchanged so callers can chain it.
    """
    if get_role_name(principal) is None:
        raise Unauthenticated()
    return principal


def require_role(principal: Principal | None, *allowed_roles: str) -> Principal:
    """
    Guard that raises ``PermissionDenied`` if the principal's role is not
    among ``allowed_roles``.

    Args:
        principal:     The resolved principal (``request.user``).
        *allowed_roles: One or more role values (OR-logic).

    Raises:
        Unauthenticated:  No principal at all.
        PermissionDenied: Principal holds another role.

    Example::

        require_role(actor, Role.ADMIN)
        require_role(actor, Role.ADMIN, Role.POLICE)
    """
    require_authenticated(principal)
    if principal.role not in allowed_roles:
        if allowed_roles == ("admin",):
            raise PermissionDenied("Access denied. Admins only.")
        raise PermissionDenied(
            f"Role '{principal.role}' is not permitted for this operation. "
            f"Required: {', '.join(allowed_roles)}."
        )
    return principal
