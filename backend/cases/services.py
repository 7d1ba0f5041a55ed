"""
Cases app Service Layer.

This module is the **single source of truth** for all business logic
in the ``cases`` app.  Views must remain thin: validate input via
serializers, call a service method, and return the result wrapped in
a DRF ``Response``.

Architecture
------------
- ``CaseStore``    — Persistence of ``Case`` and ``StatusHistory``.
                     Owns those two tables exclusively.
- ``CaseService``  — Orchestration: role checks, store calls, and the
                     alerts each lifecycle event raises.
- ``TipService``   — Tip submission and per-case listing.

Case Lifecycle
--------------
Status values are an open set with no enforced transition graph::

    Missing ⇄ Under Investigation ⇄ Resolved ⇄ <any new status>

* Any administrator may move any case to any status, including
  reopening a resolved case.
* Every transition writes one ``StatusHistory`` row in the same
  transaction as the status update, under a row lock.
* Every transition (and every new report) raises one broadcast alert
  via ``core.domain.alerts.AlertDispatcher``.  Alerts are best-effort:
  the case row is the durable source of truth and an alert failure is
  logged, never surfaced as the operation's failure.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import transaction
from django.db.models import F, Q, QuerySet

from accounts.models import Role
from core.domain.access import require_authenticated, require_role
from core.domain.alerts import AlertDispatcher
from core.domain.exceptions import NotFound, ValidationError
from core.domain.principal import Principal
from core.domain.transactions import best_effort, lock_for_update
from core.models import AlertType

from .models import Case, StatusHistory, Tip

logger = logging.getLogger(__name__)

#: Fields a report must carry; everything else is optional.
REQUIRED_CASE_FIELDS: tuple[str, ...] = ("name", "age", "status", "last_seen", "date")

#: Fields a caller may set on creation.
_WRITABLE_CASE_FIELDS: frozenset[str] = frozenset({
    "name",
    "age",
    "status",
    "last_seen",
    "date",
    "image",
    "additional_info",
    "last_seen_lat",
    "last_seen_lng",
})


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


# ═══════════════════════════════════════════════════════════════════
#  Case Store
# ═══════════════════════════════════════════════════════════════════


class CaseStore:
    """
    Reads and writes ``Case`` / ``StatusHistory`` rows.

    No role checks happen here; callers (``CaseService``) authorize
    first.  Alerts are never written from this class.
    """

    @staticmethod
    def _base_queryset() -> QuerySet:
        return Case.objects.select_related("reported_by")

    @staticmethod
    @transaction.atomic
    def create_case(validated_data: dict[str, Any], reporter_id: int | None) -> Case:
        """
        Persist a new case.

        Parameters
        ----------
        validated_data : dict
            Required: ``name``, ``age``, ``status``, ``last_seen``,
            ``date``.  Optional: ``image``, ``additional_info``,
            ``last_seen_lat``, ``last_seen_lng``.  Unknown keys are
            ignored.
        reporter_id : int
            PK of the reporting user.

        Returns
        -------
        Case
            The saved case with generated id and timestamps.

        Raises
        ------
        ValidationError
            If any required field is absent or blank.
        """
        missing = [f for f in REQUIRED_CASE_FIELDS if _is_blank(validated_data.get(f))]
        if missing:
            raise ValidationError("Missing required fields", fields=missing)

        data = {k: v for k, v in validated_data.items() if k in _WRITABLE_CASE_FIELDS}
        if data.get("additional_info") is None:
            data.pop("additional_info", None)

        case = Case.objects.create(reported_by_id=reporter_id, **data)
        logger.info("Created case #%s (%s) reported by user %s", case.pk, case.status, reporter_id)
        return case

    @staticmethod
    def get_case(case_id: Any) -> Case:
        """
        Return one case with its reporter joined.

        Raises
        ------
        NotFound
            If no case has that id.
        """
        try:
            return CaseStore._base_queryset().get(pk=case_id)
        except (Case.DoesNotExist, ValueError, TypeError):
            raise NotFound("Person not found")

    @staticmethod
    def list_cases(filters: dict[str, Any] | None = None) -> QuerySet:
        """
        Return cases, newest report first.

        Supported filters
        -----------------
        ``status``      : case-insensitive exact match.
        ``reported_by`` : reporter PK.
        ``search``      : substring of ``name`` or ``last_seen``.
        """
        qs = CaseStore._base_queryset()
        filters = filters or {}

        status = filters.get("status")
        if status:
            qs = qs.filter(status__iexact=status)
        reported_by = filters.get("reported_by")
        if reported_by:
            qs = qs.filter(reported_by_id=reported_by)
        search = filters.get("search")
        if search:
            qs = qs.filter(Q(name__icontains=search) | Q(last_seen__icontains=search))

        return qs.order_by("-created_at", "-id")

    @staticmethod
    def recent_cases(limit: int) -> QuerySet:
        """Most recently active cases: ``updated_at`` desc (nulls last), then ``date`` desc."""
        return (
            CaseStore._base_queryset()
            .order_by(F("updated_at").desc(nulls_last=True), "-date", "-id")[:limit]
        )

    @staticmethod
    def latest_by_date(limit: int) -> QuerySet:
        """Cases whose person went missing most recently."""
        return CaseStore._base_queryset().order_by("-date", "-id")[:limit]

    @staticmethod
    def update_status(case_id: Any, new_status: str, changed_by_id: int | None) -> Case:
        """
        Record and apply a status transition.

        Steps performed inside ``transaction.atomic()``:
            1. Lock the case row (``select_for_update``).
            2. Read the current status.
            3. Insert a ``StatusHistory`` row (previous → new).
            4. Update ``status`` and ``updated_at``.

        The row lock serializes concurrent updates to the same case, so
        each history row's ``previous_status`` is the status actually
        replaced.  Readers never observe one write without the other.

        Raises
        ------
        ValidationError
            If ``new_status`` is blank.
        NotFound
            If the case does not exist.
        """
        if _is_blank(new_status):
            raise ValidationError("Status is required.", fields=["status"])
        new_status = new_status.strip()

        with transaction.atomic():
            case = lock_for_update(Case, case_id, label="Person")
            previous_status = case.status

            StatusHistory.objects.create(
                person=case,
                previous_status=previous_status,
                new_status=new_status,
                changed_by_id=changed_by_id,
            )
            case.status = new_status
            case.save(update_fields=["status", "updated_at"])

        logger.info(
            "Case #%s status %s -> %s by user %s",
            case.pk,
            previous_status,
            new_status,
            changed_by_id,
        )
        return CaseStore.get_case(case.pk)

    @staticmethod
    def delete_case(case_id: Any) -> None:
        """
        Remove a case.

        ``StatusHistory`` and ``Tip`` rows cascade; ``Alert.related_person``
        is set to NULL by the FK's ``on_delete``.

        Raises
        ------
        NotFound
            If the case does not exist.
        """
        with transaction.atomic():
            case = lock_for_update(Case, case_id, label="Person")
            pk = case.pk
            case.delete()
        logger.info("Deleted case #%s", pk)

    @staticmethod
    def status_history(case_id: Any) -> QuerySet:
        """
        Transition log for a case, newest first.

        Raises
        ------
        NotFound
            If the case does not exist.
        """
        case = CaseStore.get_case(case_id)
        return (
            StatusHistory.objects
            .filter(person=case)
            .select_related("changed_by")
            .order_by("-changed_at", "-id")
        )


# ═══════════════════════════════════════════════════════════════════
#  Case Service
# ═══════════════════════════════════════════════════════════════════


class CaseService:
    """
    Orchestrates case mutations.

    Design Pattern: Command + side-effect
    -------------------------------------
    Each operation is ``authorize → store write → raise alert``.  The
    store write commits on its own; the alert runs afterwards in its own
    savepoint via ``best_effort`` so a failed alert cannot undo it.
    """

    @staticmethod
    def submit_report(validated_data: dict[str, Any], reporter: Principal) -> Case:
        """
        Create a case for ``reporter`` and broadcast a ``new_report`` alert.

        Any authenticated principal may report.

        Raises
        ------
        Unauthenticated
            If ``reporter`` is missing.
        ValidationError
            If required fields are missing.
        """
        require_authenticated(reporter)
        case = CaseStore.create_case(validated_data, reporter.user_id)

        best_effort(
            f"new_report alert for case #{case.pk}",
            AlertDispatcher.raise_alert,
            type=AlertType.NEW_REPORT,
            message=AlertDispatcher.render(
                AlertType.NEW_REPORT, name=case.name, case_id=case.pk,
            ),
            related_person_id=case.pk,
        )
        return case

    @staticmethod
    def change_status(case_id: Any, new_status: str, actor: Principal) -> Case:
        """
        Move a case to ``new_status`` (admin only).

        The alert type is ``resolved`` when the new status equals
        "resolved" case-insensitively, otherwise ``status``.

        Raises
        ------
        PermissionDenied
            If ``actor`` is not an administrator.  Nothing is written.
        ValidationError
            If ``new_status`` is blank.
        NotFound
            If the case does not exist.
        """
        require_role(actor, Role.ADMIN)
        case = CaseStore.update_status(case_id, new_status, actor.user_id)

        alert_type = AlertType.RESOLVED if case.is_resolved else AlertType.STATUS
        best_effort(
            f"{alert_type} alert for case #{case.pk}",
            AlertDispatcher.raise_alert,
            type=alert_type,
            message=AlertDispatcher.render(
                alert_type, status=case.status, case_id=case.pk, name=case.name,
            ),
            related_person_id=case.pk,
        )
        return case

    @staticmethod
    def remove_case(case_id: Any, actor: Principal) -> None:
        """
        Delete a case (admin only).

        Raises
        ------
        PermissionDenied
            If ``actor`` is not an administrator.
        NotFound
            If the case does not exist.
        """
        require_role(actor, Role.ADMIN)
        CaseStore.delete_case(case_id)

    @staticmethod
    def history(case_id: Any, actor: Principal) -> QuerySet:
        """Status audit trail for a case (admin only)."""
        require_role(actor, Role.ADMIN)
        return CaseStore.status_history(case_id)


# ═══════════════════════════════════════════════════════════════════
#  Tip Service
# ═══════════════════════════════════════════════════════════════════


class TipService:
    """
    Tips are free-text leads attached to a case.  They raise no alerts;
    admins see them through the tip statistics and per-case listing.
    """

    @staticmethod
    def submit_tip(case_id: Any, content: str, submitter: Principal) -> Tip:
        """
        Attach a tip to a case.

        Raises
        ------
        ValidationError
            If ``content`` is blank.
        NotFound
            If the case does not exist.
        """
        require_authenticated(submitter)
        if _is_blank(content):
            raise ValidationError("Tip content is required.", fields=["content"])

        case = CaseStore.get_case(case_id)
        tip = Tip.objects.create(
            person=case,
            content=content.strip(),
            submitted_by_id=submitter.user_id,
        )
        logger.info("Tip #%s submitted on case #%s by %s", tip.pk, case.pk, submitter)
        return tip

    @staticmethod
    def list_tips(case_id: Any, actor: Principal) -> QuerySet:
        """Tips for a case, newest first (admin or police)."""
        require_role(actor, Role.ADMIN, Role.POLICE)
        case = CaseStore.get_case(case_id)
        return Tip.objects.filter(person=case).order_by("-created_at", "-id")
