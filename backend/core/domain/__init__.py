"""
core.domain — Shared domain utilities for cross-app service layers.

Modules
-------
exceptions        Domain-specific exceptions that map cleanly to HTTP responses.
exception_handler DRF handler that renders those exceptions.
principal         The per-request ``(user_id, role)`` identity.
access            Role guards (``require_role``).
alerts            Alert creation + targeted read surface.
transactions      ``select_for_update`` locking and best-effort savepoints.

Usage from any app::

    from core.domain.exceptions import DomainError, NotFound
    from core.domain.alerts import AlertDispatcher
    from core.domain.transactions import lock_for_update, best_effort
    from core.domain.access import require_role
"""
