"""
core.domain.alerts — Alert creation and targeted read surface.

Centralises alert persistence so every app uses one consistent
entry-point rather than directly constructing ``Alert`` objects.  The
dispatcher is the only writer of the ``alerts`` table; the case service
calls it explicitly after a lifecycle event.

Design decisions
----------------
* **Targeting at read time** — an alert row carries an optional
  ``role_target`` and/or ``user_target``.  Nothing is fanned out to
  per-user inboxes on write; ``visible_to`` filters rows against the
  requesting principal instead.  Writes stay a single INSERT; reads scan
  a bounded table (alert volume follows case events, not user traffic).
* **No target validation** — an unknown role or user id is stored as-is
  and simply never matches.
* **Synchronous** — the INSERT happens in the calling thread.  Callers
  that must not fail on alert loss wrap the call in
  ``core.domain.transactions.best_effort``.

Usage::

    from core.domain.alerts import AlertDispatcher

    AlertDispatcher.raise_alert(
        type=AlertType.NEW_REPORT,
        message=AlertDispatcher.render("new_report", name=case.name, case_id=case.pk),
        related_person_id=case.pk,
    )
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from django.db.models import F, Q, QuerySet

from core.domain.exceptions import NotFound

if TYPE_CHECKING:
    from core.domain.principal import Principal
    from core.models import Alert

logger = logging.getLogger(__name__)

# ── Event-type → message templates ──────────────────────────────────
# Extend this dict as new event types are introduced in app services.
_MESSAGE_TEMPLATES: dict[str, str] = {
    "new_report": "New case reported: {name} (case #{case_id})",
    "status":     "Case #{case_id} status updated to {status}",
    "resolved":   "Case #{case_id} status updated to {status}",
}


class AlertDispatcher:
    """
    Stateless helper for creating and querying ``Alert`` records.

    All methods are classmethods — no instance state is needed.
    """

    @classmethod
    def render(cls, alert_type: str, **context: Any) -> str:
        """
        Build the message for ``alert_type`` from its template.

        Unknown types fall back to a generic ``"Event: <type>"`` line.
        """
        template = _MESSAGE_TEMPLATES.get(alert_type)
        if template is None:
            return f"Event: {alert_type}"
        return template.format(**context)

    @classmethod
    def raise_alert(
        cls,
        *,
        type: str,
        message: str,
        related_person_id: int | None = None,
        role_target: str | None = None,
        user_target_id: int | None = None,
    ) -> Alert:
        """
        Append one alert row.

        Args:
            type:              Alert type (``AlertType`` value or a new one).
            message:           Human-readable text shown in the feed.
            related_person_id: Optional ``Case`` PK the alert refers to.
            role_target:       Optional role that may see the alert.
            user_target_id:    Optional user PK that may see the alert.

        Returns:
            The created ``Alert``.
        """
        from core.models import Alert  # lazy import

        alert = Alert.objects.create(
            type=type,
            message=message,
            related_person_id=related_person_id,
            role_target=role_target,
            user_target_id=user_target_id,
        )
        logger.info(
            "Raised alert #%s [%s] case=%s role_target=%s user_target=%s",
            alert.pk,
            type,
            related_person_id,
            role_target,
            user_target_id,
        )
        return alert

    @classmethod
    def visible_to(cls, principal: Principal) -> QuerySet:
        """
        Return every alert the principal may observe.

        An alert is visible iff its ``role_target`` equals the principal's
        role, OR its ``user_target`` is the principal, OR it has neither
        target (broadcast).
        """
        from core.models import Alert

        return Alert.objects.filter(
            Q(role_target=principal.role)
            | Q(user_target_id=principal.user_id)
            | Q(role_target__isnull=True, user_target_id__isnull=True)
        )

    @classmethod
    def list_for(cls, principal: Principal) -> QuerySet:
        """Visible alerts, newest first, annotated with ``person_name``."""
        return (
            cls.visible_to(principal)
            .annotate(person_name=F("related_person__name"))
            .order_by("-created_at", "-id")
        )

    @classmethod
    def unseen_count_for(cls, principal: Principal) -> int:
        """Number of visible alerts whose ``seen`` flag is still false."""
        return cls.visible_to(principal).filter(seen=False).count()

    @classmethod
    def mark_seen(cls, alert_id: int) -> Alert:
        """
        Flip ``seen`` to true.  Idempotent: a second call is a no-op that
        returns the same record.

        Raises:
            NotFound: If no alert has that id.
        """
        from core.models import Alert

        try:
            alert = Alert.objects.get(pk=alert_id)
        except (Alert.DoesNotExist, ValueError, TypeError):
            raise NotFound("Alert not found.")

        if not alert.seen:
            Alert.objects.filter(pk=alert.pk, seen=False).update(seen=True)
            alert.seen = True
        return alert
