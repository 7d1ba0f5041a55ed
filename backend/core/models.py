"""
Core app models.

Provides the abstract timestamp base shared by every app and the
``Alert`` feed that case-lifecycle events write into.
"""

from django.db import models


class TimeStampedModel(models.Model):
    """
    Abstract base model that provides self-updating ``created_at`` and
    ``updated_at`` timestamp fields for every concrete child model.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created At",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name="Updated At",
    )

    class Meta:
        abstract = True


class AlertType(models.TextChoices):
    """
    Well-known alert types.  The ``type`` column is not constrained to
    these values so new event kinds need no migration.
    """

    NEW_REPORT = "new_report", "New Report"
    STATUS = "status", "Status Changed"
    RESOLVED = "resolved", "Case Resolved"


class Alert(TimeStampedModel):
    """
    Notification produced by a case-lifecycle event.

    Targeting is resolved **at read time** against the requesting
    principal (see ``core.domain.alerts.AlertDispatcher.visible_to``):

    * ``role_target`` set   → every principal holding that role;
    * ``user_target_id`` set → that single user (no FK; an unknown id matches nobody);
    * both ``NULL``         → broadcast to everyone.

    ``role_target`` is not validated against the role enumeration; an
    unknown value simply never matches anybody.
    """

    type = models.CharField(
        max_length=30,
        db_index=True,
        verbose_name="Alert Type",
    )
    message = models.TextField(verbose_name="Message")
    related_person = models.ForeignKey(
        "cases.Case",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="alerts",
        verbose_name="Related Case",
        help_text="Nullified when the case is deleted; the message keeps the case id.",
    )
    role_target = models.CharField(
        max_length=20,
        null=True,
        blank=True,
        verbose_name="Role Target",
    )
    user_target_id = models.PositiveBigIntegerField(
        null=True,
        blank=True,
        verbose_name="User Target",
        help_text="User PK; not a foreign key, so an unknown id never matches.",
    )
    seen = models.BooleanField(default=False, verbose_name="Seen")

    class Meta:
        db_table = "alerts"
        verbose_name = "Alert"
        verbose_name_plural = "Alerts"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["role_target", "seen"], name="alerts_role_seen_idx"),
            models.Index(fields=["user_target_id", "seen"], name="alerts_user_seen_idx"),
        ]

    def __str__(self):
        return f"[{self.type}] {self.message}"

    @property
    def is_broadcast(self) -> bool:
        return self.role_target is None and self.user_target_id is None
