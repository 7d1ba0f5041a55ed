"""
core.domain.exceptions — Domain-specific exception hierarchy.

These exceptions represent business-rule violations inside service layers.
They are deliberately **not** DRF exceptions so that the domain layer stays
framework-agnostic.  The global DRF exception handler
(``core.domain.exception_handler``) maps them to HTTP responses.

Mapping cheatsheet
------------------
┌─────────────────────┬──────────────────────────────┬──────┐
│ Domain Exception    │ Meaning                      │ Code │
├─────────────────────┼──────────────────────────────┼──────┤
│ DomainError         │ generic business-rule error  │ 400  │
│ ValidationError     │ missing / malformed fields   │ 400  │
│ Unauthenticated     │ no credential supplied       │ 401  │
│ InvalidCredential   │ bad / expired credential     │ 401  │
│ PermissionDenied    │ valid principal, wrong role  │ 403  │
│ NotFound            │ referenced id absent         │ 404  │
│ Conflict            │ duplicate / state conflict   │ 409  │
│ StoreUnavailable    │ persistence failure          │ 500  │
└─────────────────────┴──────────────────────────────┴──────┘

Recommended usage inside a service::

    from core.domain.exceptions import NotFound

    try:
        case = Case.objects.get(pk=case_id)
    except Case.DoesNotExist:
        raise NotFound(f"Case with id {case_id} not found.")
"""

from __future__ import annotations


class DomainError(Exception):
    """
    Base class for all domain / business-rule errors.

    Catch this at the view boundary and convert to a 400 Bad Request.
    """

    def __init__(self, message: str = "A business rule was violated.") -> None:
        self.message = message
        super().__init__(self.message)


class ValidationError(DomainError):
    """
    Required input is missing or malformed.

    ``fields`` optionally names the offending inputs so callers can
    render a per-field message.  Maps to HTTP 400.
    """

    def __init__(
        self,
        message: str = "The submitted data is invalid.",
        *,
        fields: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.fields = fields or []


class Unauthenticated(DomainError):
    """
    No credential accompanied a request that requires one.

    Maps to HTTP 401.
    """

    def __init__(self, message: str = "Access denied. No token provided.") -> None:
        super().__init__(message)


class InvalidCredential(DomainError):
    """
    A credential was supplied but could not be verified: malformed,
    expired, signature mismatch, or (at login) wrong email/password.

    Maps to HTTP 401.
    """

    def __init__(self, message: str = "Invalid token.") -> None:
        super().__init__(message)


class PermissionDenied(DomainError):
    """
    The authenticated principal does not hold the role required
    for this operation.

    Maps to HTTP 403.
    """

    def __init__(self, message: str = "You do not have permission to perform this action.") -> None:
        super().__init__(message)


# Alias matching the taxonomy used in API docs.
Forbidden = PermissionDenied


class NotFound(DomainError):
    """
    The requested resource does not exist.

    Maps to HTTP 404.
    """

    def __init__(self, message: str = "The requested resource was not found.") -> None:
        super().__init__(message)


class Conflict(DomainError):
    """
    The operation conflicts with the current state of the resource.

    Typical usage: duplicate creation attempt, optimistic-lock failure.
    Maps to HTTP 409.
    """

    def __init__(self, message: str = "The operation conflicts with the current state.") -> None:
        super().__init__(message)


class StoreUnavailable(DomainError):
    """
    The underlying persistence layer failed.

    Surfaced to clients as a generic 500 without internals; the
    original error is logged by the exception handler.
    """

    def __init__(self, message: str = "Server error.") -> None:
        super().__init__(message)
