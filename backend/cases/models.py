"""
Cases app models.

Covers the missing-person case record, its append-only status audit
trail, and the tips citizens submit against a case.
"""

import os
import time

from django.conf import settings
from django.db import models

from core.constants import CASE_IMAGE_UPLOAD_DIR
from core.models import TimeStampedModel


# ────────────────────────────────────────────────────────────────────
# Choice enumerations
# ────────────────────────────────────────────────────────────────────

class CaseStatus(models.TextChoices):
    """
    Well-known case statuses.

    Status is an **open** string set: this list documents the values the
    UI knows about, but the ``Case.status`` column carries no ``choices``
    so administrators may introduce new statuses without a migration.
    Contrast with ``accounts.models.Role``, which is closed.
    """

    MISSING = "Missing", "Missing"
    UNDER_INVESTIGATION = "Under Investigation", "Under Investigation"
    RESOLVED = "Resolved", "Resolved"


def case_image_upload_to(instance, filename: str) -> str:
    """Store uploads as ``uploads/<epoch-millis><ext>``."""
    _, ext = os.path.splitext(filename)
    return f"{CASE_IMAGE_UPLOAD_DIR}/{int(time.time() * 1000)}{ext.lower()}"


# ────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────

class Case(TimeStampedModel):
    """
    A missing-person report.

    * Created by any authenticated user submitting a report.
    * ``status`` is changed only by an administrator, and every change
      is preceded by a ``StatusHistory`` row (see
      ``cases.services.CaseStore.update_status``).
    * Hard-deleted only by an administrator; history and tips cascade,
      alerts keep their text with ``related_person`` set to NULL.
    """

    name = models.CharField(
        max_length=255,
        verbose_name="Name",
    )
    age = models.PositiveSmallIntegerField(
        verbose_name="Age",
    )
    status = models.CharField(
        max_length=50,
        default=CaseStatus.MISSING,
        db_index=True,
        verbose_name="Current Status",
    )
    reported_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reported_cases",
        verbose_name="Reported By",
    )

    # ── When / where the person was last seen ───────────────────────
    last_seen = models.CharField(
        max_length=500,
        verbose_name="Last Seen Location",
    )
    date = models.DateField(
        verbose_name="Date Last Seen",
        db_index=True,
    )
    last_seen_lat = models.DecimalField(
        max_digits=9,
        decimal_places=6,
        null=True,
        blank=True,
        verbose_name="Last Seen Latitude",
    )
    last_seen_lng = models.DecimalField(
        max_digits=9,
        decimal_places=6,
        null=True,
        blank=True,
        verbose_name="Last Seen Longitude",
    )

    image = models.ImageField(
        upload_to=case_image_upload_to,
        null=True,
        blank=True,
        verbose_name="Photo",
    )
    additional_info = models.TextField(
        blank=True,
        default="",
        verbose_name="Additional Information",
    )

    class Meta:
        db_table = "persons"
        verbose_name = "Case"
        verbose_name_plural = "Cases"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["updated_at", "date"], name="persons_updated_date_idx"),
        ]

    def __str__(self):
        return f"Case #{self.pk} — {self.name} ({self.status})"

    @property
    def reported_by_name(self) -> str | None:
        return self.reported_by.name if self.reported_by_id else None

    @property
    def is_resolved(self) -> bool:
        return self.status.strip().lower() == CaseStatus.RESOLVED.lower()


class StatusHistory(models.Model):
    """
    Immutable audit trail of every status transition for a case.

    Exactly one row per transition, written in the same transaction as
    the status update.  Rows are never edited.
    """

    person = models.ForeignKey(
        Case,
        on_delete=models.CASCADE,
        related_name="status_history",
        verbose_name="Case",
    )
    previous_status = models.CharField(
        max_length=50,
        verbose_name="Previous Status",
    )
    new_status = models.CharField(
        max_length=50,
        verbose_name="New Status",
    )
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="case_status_changes",
        verbose_name="Changed By",
    )
    changed_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Changed At",
    )

    class Meta:
        db_table = "status_history"
        verbose_name = "Status History"
        verbose_name_plural = "Status History"
        ordering = ["-changed_at", "-id"]

    def __str__(self):
        return (
            f"Case #{self.person_id}: "
            f"{self.previous_status} → {self.new_status}"
        )


class Tip(models.Model):
    """
    Information a user submits about a case.

    Feeds the admin tip statistics.
    """

    person = models.ForeignKey(
        Case,
        on_delete=models.CASCADE,
        related_name="tips",
        verbose_name="Case",
    )
    content = models.TextField(verbose_name="Content")
    submitted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="tips",
        verbose_name="Submitted By",
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created At",
    )

    class Meta:
        db_table = "tips"
        verbose_name = "Tip"
        verbose_name_plural = "Tips"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Tip #{self.pk} on Case #{self.person_id}"
