"""
Core app services — **Service Layer**.

Contains cross-app aggregation logic and the alert feed queries.  Views
delegate all business logic to the service classes defined here, keeping
views thin and ensuring testability.

╔══════════════════════════════════════════════════════════════════════╗
║  CROSS-APP IMPORT RULEBOOK                                         ║
║                                                                    ║
║  The core app is the ONLY app allowed to aggregate over models     ║
║  from other apps.  To prevent circular imports at module load:     ║
║                                                                    ║
║  1. NEVER import models from other apps at the **module level**.   ║
║     Always resolve them inside the method that needs them:         ║
║       Case = apps.get_model("cases", "Case")                      ║
║                                                                    ║
║  2. Prefer ``.aggregate()`` and ``.values().annotate()`` over      ║
║     Python-side loops.                                             ║
╚══════════════════════════════════════════════════════════════════════╝
"""

from __future__ import annotations

import logging
from typing import Any

from django.apps import apps
from django.db.models import Count, QuerySet

from core.constants import (
    HOMEPAGE_RECENT_CASES_LIMIT,
    RECENT_CASES_LIMIT,
    RESOLVED_STATUS,
    TOP_TIPPED_CASES_LIMIT,
)
from core.domain.access import require_authenticated, require_role
from core.domain.alerts import AlertDispatcher
from core.domain.principal import Principal

logger = logging.getLogger(__name__)


# ════════════════════════════════════════════════════════════════════
#  Tip Statistics (admin)
# ════════════════════════════════════════════════════════════════════

class TipStatsService:
    """
    Produces the admin tip dashboard consumed by ``TipStatsSerializer``.

    Response shape::

        {
            "total_tips": 42,
            "top_tipped_cases": [
                {"id": 7, "name": "Jane Doe", "tip_count": 12},
                ...
            ]
        }
    """

    #: Maximum number of cases returned in ``top_tipped_cases``.
    TOP_LIMIT: int = TOP_TIPPED_CASES_LIMIT

    @classmethod
    def get_stats(cls, actor: Principal) -> dict[str, Any]:
        """Return tip totals.  Admin only."""
        from accounts.models import Role

        require_role(actor, Role.ADMIN)

        Tip = apps.get_model("cases", "Tip")
        Case = apps.get_model("cases", "Case")

        top = (
            Case.objects
            .annotate(tip_count=Count("tips"))
            .order_by("-tip_count", "id")
            .values("id", "name", "tip_count")[: cls.TOP_LIMIT]
        )
        return {
            "total_tips": Tip.objects.count(),
            "top_tipped_cases": list(top),
        }


# ════════════════════════════════════════════════════════════════════
#  Homepage (public)
# ════════════════════════════════════════════════════════════════════

class HomepageStatsService:
    """
    Public counters for the landing page.

    * ``reports_submitted``  — every case ever reported.
    * ``people_found``       — cases whose status is "Resolved"
                               (case-insensitive).
    * ``volunteers_helping`` — users holding the ``volunteer`` role.
    """

    @staticmethod
    def get_stats() -> dict[str, Any]:
        from accounts.models import Role, User

        Case = apps.get_model("cases", "Case")

        return {
            "reports_submitted": Case.objects.count(),
            "people_found": Case.objects.filter(status__iexact=RESOLVED_STATUS).count(),
            "volunteers_helping": User.objects.filter(role=Role.VOLUNTEER).count(),
        }


class RecentCasesService:
    """Short case lists for the landing page widgets."""

    @staticmethod
    def recent_activity(limit: int = RECENT_CASES_LIMIT) -> QuerySet:
        """Cases most recently touched (``updated_at`` desc, nulls last)."""
        from cases.services import CaseStore

        return CaseStore.recent_cases(limit)

    @staticmethod
    def latest_missing(limit: int = HOMEPAGE_RECENT_CASES_LIMIT) -> QuerySet:
        """Cases ordered by the date the person went missing, newest first."""
        from cases.services import CaseStore

        return CaseStore.latest_by_date(limit)


# ════════════════════════════════════════════════════════════════════
#  Alerts
# ════════════════════════════════════════════════════════════════════

class AlertService:
    """
    Alert feed for the authenticated principal.

    Thin wrapper over ``AlertDispatcher`` that adds the authentication
    guard; the dispatcher itself stays principal-agnostic for writes.
    """

    def __init__(self, principal: Principal) -> None:
        self.principal = require_authenticated(principal)

    def list_alerts(self) -> QuerySet:
        """Visible alerts, newest first."""
        return AlertDispatcher.list_for(self.principal)

    def unseen_count(self) -> int:
        return AlertDispatcher.unseen_count_for(self.principal)

    def mark_seen(self, alert_id: Any):
        """
        Mark an alert as seen.

        Any authenticated principal may mark any existing alert; the
        ``seen`` flag is shared by every viewer of the alert.
        """
        alert = AlertDispatcher.mark_seen(alert_id)
        logger.debug("Alert #%s marked seen by %s", alert.pk, self.principal)
        return alert
