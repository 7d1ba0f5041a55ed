"""
Core app serializers.

**Response-only** serializers for the aggregated endpoints and the alert
feed served by the core app.  They do **not** accept input data.

Architectural note
------------------
Aggregation serializers work exclusively with plain Python dicts
produced by the service layer, keeping the core app decoupled from the
concrete models in ``cases`` and ``accounts``.  Case lists reuse
``cases.serializers.CaseSerializer`` so every endpoint renders a case
the same way.
"""

from __future__ import annotations

from rest_framework import serializers


# ════════════════════════════════════════════════════════════════════
#  Tip Statistics
# ════════════════════════════════════════════════════════════════════

class TopTippedCaseSerializer(serializers.Serializer):
    """One entry of the ``top_tipped_cases`` ranking."""

    id = serializers.IntegerField(help_text="Case PK.")
    name = serializers.CharField(help_text="Name of the missing person.")
    tip_count = serializers.IntegerField(help_text="Number of tips received.")


class TipStatsSerializer(serializers.Serializer):
    """
    Response serializer for ``GET /api/tip-stats/``.

    Response shape::

        {
            "total_tips": 42,
            "top_tipped_cases": [{"id": 7, "name": "Jane Doe", "tip_count": 12}]
        }
    """

    total_tips = serializers.IntegerField(help_text="Tips across every case.")
    top_tipped_cases = TopTippedCaseSerializer(
        many=True,
        help_text="Cases with the most tips, highest first.",
    )


# ════════════════════════════════════════════════════════════════════
#  Homepage
# ════════════════════════════════════════════════════════════════════

class HomepageStatsSerializer(serializers.Serializer):
    reports_submitted = serializers.IntegerField(help_text="Total cases reported.")
    people_found = serializers.IntegerField(help_text="Cases marked Resolved.")
    volunteers_helping = serializers.IntegerField(help_text="Users with the volunteer role.")


# ════════════════════════════════════════════════════════════════════
#  Alerts
# ════════════════════════════════════════════════════════════════════

class AlertSerializer(serializers.Serializer):
    """
    Read-only serializer for ``Alert`` instances.

    ``person_name`` comes from an annotation added by
    ``AlertDispatcher.list_for``; it is ``None`` when the alert is not
    annotated or its case was deleted.
    """

    id = serializers.IntegerField(read_only=True, help_text="Alert PK.")
    type = serializers.CharField(read_only=True, help_text="new_report, status or resolved.")
    message = serializers.CharField(read_only=True, help_text="Alert text.")
    related_person = serializers.IntegerField(
        source="related_person_id",
        read_only=True,
        allow_null=True,
        help_text="PK of the case the alert refers to (if any).",
    )
    person_name = serializers.CharField(
        read_only=True,
        default=None,
        allow_null=True,
        help_text="Name on the related case.",
    )
    role_target = serializers.CharField(read_only=True, allow_null=True)
    user_target = serializers.IntegerField(
        source="user_target_id",
        read_only=True,
        allow_null=True,
    )
    seen = serializers.BooleanField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)


class UnseenCountSerializer(serializers.Serializer):
    unseen_count = serializers.IntegerField(help_text="Visible alerts not yet seen.")
