"""
core.domain.principal — The per-request authenticated identity.

A ``Principal`` is derived from the bearer credential on every request
and handed to services as an explicit argument.  It is never stored in a
session or cached between requests; the server is stateless.

DRF treats it as ``request.user`` (see
``accounts.authentication.PrincipalAuthentication``), which is why it
exposes ``is_authenticated`` / ``is_anonymous``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """Resolved ``(user_id, role)`` pair for one request."""

    user_id: int
    role: str

    is_authenticated = True
    is_anonymous = False

    @property
    def pk(self) -> int:
        return self.user_id

    def has_role(self, *roles: str) -> bool:
        return self.role in roles

    def __str__(self) -> str:
        return f"user #{self.user_id} ({self.role})"
