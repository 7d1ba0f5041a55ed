"""
DRF permission classes keyed on the principal's role.

These are an early exit at the HTTP edge; services repeat the check
with ``core.domain.access.require_role``.
"""

from __future__ import annotations

from rest_framework.permissions import BasePermission

from .models import Role


class HasRole(BasePermission):
    """Allow authenticated principals whose role is in ``allowed_roles``."""

    allowed_roles: tuple[str, ...] = ()
    message = "You do not have permission to perform this action."

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not (user and user.is_authenticated):
            return False
        return getattr(user, "role", None) in self.allowed_roles


class IsAdminRole(HasRole):
    allowed_roles = (Role.ADMIN,)
    message = "Access denied. Admins only."


class IsAdminOrPolice(HasRole):
    allowed_roles = (Role.ADMIN, Role.POLICE)
