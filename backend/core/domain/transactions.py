"""
core.domain.transactions — Helpers for safe state transitions.

Wraps ``transaction.atomic`` and ``select_for_update`` into reusable
patterns so that every service layer follows the same concurrency-safe
approach.

Design goals
------------
* State-transition reads always lock the row first
  (``select_for_update``) so two concurrent writers to the same row are
  serialized for the whole read-modify-write.
* Side effects that must not roll back the primary write (alerts) run in
  their own savepoint via ``best_effort``.

Usage::

    from core.domain.transactions import lock_for_update

    with transaction.atomic():
        case = lock_for_update(Case, case_id)
        ...

    from core.domain.transactions import best_effort

    best_effort("raise new_report alert", AlertDispatcher.raise_alert, ...)
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from django.db import DatabaseError, models, transaction

from core.domain.exceptions import NotFound

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=models.Model)


def lock_for_update(model_class: type[M], pk: Any, *, label: str | None = None) -> M:
    """
    Acquire a row-level lock on the given model instance.

    Convenience wrapper around ``select_for_update().get(pk=pk)``
    that must be called inside an ``atomic()`` block.

    Args:
        model_class: The Django model class.
        pk:          Primary key value.
        label:       Human name used in the ``NotFound`` message.

    Returns:
        The locked model instance.

    Raises:
        NotFound: If no row with that PK exists.
    """
    try:
        return model_class.objects.select_for_update().get(pk=pk)
    except (model_class.DoesNotExist, ValueError, TypeError):
        name = label or model_class.__name__
        raise NotFound(f"{name} with id {pk} not found.")


def best_effort(description: str, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T | None:
    """
    Run ``fn`` in its own savepoint; log and absorb store failures.

    Used for secondary writes whose loss must not fail the primary
    operation.  Only ``DatabaseError`` is absorbed; programming errors
    still propagate.

    Returns:
        Whatever ``fn`` returns, or ``None`` if the store failed.
    """
    try:
        with transaction.atomic():
            return fn(*args, **kwargs)
    except DatabaseError:
        logger.exception("Best-effort step failed: %s", description)
        return None
