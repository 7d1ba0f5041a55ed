"""
Cases app serializers.

Contains all Request and Response serializers for the Cases API.
Serializers handle field definitions, read/write constraints, and field-level
validation only.  **No business logic or status transitions live here**;
those belong in ``services.py``.

Structure
---------
1. Filter / query-param serializers
2. Case read serializers
3. Case write serializers (report, status update)
4. Sub-resource serializers (status history, tips)
"""

from __future__ import annotations

import os
from typing import Any

from rest_framework import serializers

from core.constants import (
    CASE_IMAGE_CONTENT_TYPES,
    CASE_IMAGE_EXTENSIONS,
    CASE_IMAGE_MAX_BYTES,
)

from .models import Case, StatusHistory, Tip


# ═══════════════════════════════════════════════════════════════════
#  1. Filter / Query-Parameter Serializers
# ═══════════════════════════════════════════════════════════════════


class CaseFilterSerializer(serializers.Serializer):
    """
    Validates and cleans query-parameter filters for ``GET /api/persons/``.

    All fields are optional.  The view passes the validated dict directly
    to ``CaseStore.list_cases``.

    Query Parameters
    ----------------
    ``status``       : str — case-insensitive exact match (open set)
    ``reported_by``  : int — PK of the reporting user
    ``search``       : str — substring of name or last-seen location
    """

    status = serializers.CharField(
        required=False,
        max_length=50,
        help_text="Filter by case status, e.g. 'Missing' or 'Resolved'.",
    )
    reported_by = serializers.IntegerField(
        required=False,
        min_value=1,
        help_text="PK of the reporting user.",
    )
    search = serializers.CharField(
        required=False,
        max_length=255,
        allow_blank=False,
        help_text="Free-text search against name and last-seen location.",
    )


# ═══════════════════════════════════════════════════════════════════
#  2. Case Read Serializers
# ═══════════════════════════════════════════════════════════════════


class CaseSerializer(serializers.ModelSerializer):
    """
    Full case representation used by every read endpoint.

    ``reported_by_name`` is resolved through ``select_related`` in
    ``CaseStore`` so listing does not issue one query per row.
    """

    reported_by_name = serializers.CharField(read_only=True)

    class Meta:
        model = Case
        fields = [
            "id",
            "name",
            "age",
            "status",
            "reported_by",
            "reported_by_name",
            "last_seen",
            "date",
            "image",
            "additional_info",
            "last_seen_lat",
            "last_seen_lng",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


# ═══════════════════════════════════════════════════════════════════
#  3. Case Write Serializers
# ═══════════════════════════════════════════════════════════════════


class CaseImageField(serializers.ImageField):
    """
    ``ImageField`` restricted to JPEG / PNG uploads up to
    ``CASE_IMAGE_MAX_BYTES``.

    Extension and *declared* content type are checked before Pillow
    inspects the file, since Django replaces ``content_type`` with the
    detected format during its own validation.
    """

    default_error_messages = {
        "extension": "Only .jpg, .jpeg and .png images are allowed.",
        "content_type": "Only JPEG and PNG images are allowed.",
        "max_size": "Image exceeds the {max_mb} MB limit.",
    }

    def to_internal_value(self, data):
        name = getattr(data, "name", None)
        size = getattr(data, "size", None)
        if name is not None and size is not None:
            _, ext = os.path.splitext(name)
            if ext.lower().lstrip(".") not in CASE_IMAGE_EXTENSIONS:
                self.fail("extension")

            content_type = getattr(data, "content_type", None)
            if content_type and content_type.lower() not in CASE_IMAGE_CONTENT_TYPES:
                self.fail("content_type")

            if size > CASE_IMAGE_MAX_BYTES:
                self.fail("max_size", max_mb=CASE_IMAGE_MAX_BYTES // (1024 * 1024))

        return super().to_internal_value(data)


class CaseCreateSerializer(serializers.ModelSerializer):
    """
    Request body for ``POST /api/persons/`` (multipart or JSON).

    Required: ``name``, ``age``, ``status``, ``last_seen``, ``date``.
    Optional: ``image``, ``additional_info``, ``last_seen_lat``,
    ``last_seen_lng``.

    ``reported_by`` is never accepted from the client; the service sets
    it from the authenticated principal.
    """

    status = serializers.CharField(max_length=50)
    image = CaseImageField(required=False, allow_null=True)
    additional_info = serializers.CharField(required=False, allow_blank=True, default="")
    last_seen_lat = serializers.DecimalField(
        max_digits=9, decimal_places=6, required=False, allow_null=True,
        min_value=-90, max_value=90,
    )
    last_seen_lng = serializers.DecimalField(
        max_digits=9, decimal_places=6, required=False, allow_null=True,
        min_value=-180, max_value=180,
    )

    class Meta:
        model = Case
        fields = [
            "name",
            "age",
            "status",
            "last_seen",
            "date",
            "image",
            "additional_info",
            "last_seen_lat",
            "last_seen_lng",
        ]


class CaseStatusUpdateSerializer(serializers.Serializer):
    """
    Request body for ``PUT /api/persons/{id}/status/``.

    Any non-blank status is accepted; the status set is open.
    """

    status = serializers.CharField(
        max_length=50,
        error_messages={
            "required": "Status is required.",
            "blank": "Status is required.",
        },
        help_text="New status, e.g. 'Under Investigation' or 'Resolved'.",
    )


# ═══════════════════════════════════════════════════════════════════
#  4. Sub-Resource Serializers
# ═══════════════════════════════════════════════════════════════════


class StatusHistorySerializer(serializers.ModelSerializer):
    """Read-only representation of one status transition."""

    changed_by_name = serializers.SerializerMethodField()

    class Meta:
        model = StatusHistory
        fields = [
            "id",
            "person",
            "previous_status",
            "new_status",
            "changed_by",
            "changed_by_name",
            "changed_at",
        ]
        read_only_fields = fields

    def get_changed_by_name(self, obj: StatusHistory) -> str | None:
        return obj.changed_by.name if obj.changed_by_id else None


class TipCreateSerializer(serializers.Serializer):
    """Request body for ``POST /api/persons/{id}/tips/``."""

    content = serializers.CharField(
        max_length=5000,
        error_messages={"blank": "Tip content is required."},
    )


class TipSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tip
        fields = ["id", "person", "content", "submitted_by", "created_at"]
        read_only_fields = fields
