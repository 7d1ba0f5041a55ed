"""
Cases app ViewSets.

Architecture: Views are intentionally thin.
Every view follows the strict three-step pattern:

    1. Parse / validate input via a serializer.
    2. Delegate all business logic to the appropriate service class.
    3. Serialize the result and return a DRF ``Response``.

No database queries or status logic live here.

ViewSets
--------
- ``CaseViewSet`` — The single ViewSet for all case-related endpoints.
  Custom @action methods handle status changes, the audit trail and
  tips so the URL structure stays under ``/api/persons/``.
"""

from __future__ import annotations

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from accounts.permissions import IsAdminOrPolice, IsAdminRole

from .serializers import (
    CaseCreateSerializer,
    CaseFilterSerializer,
    CaseSerializer,
    CaseStatusUpdateSerializer,
    StatusHistorySerializer,
    TipCreateSerializer,
    TipSerializer,
)
from .services import CaseService, CaseStore, TipService


class CaseViewSet(viewsets.ViewSet):
    """
    Central ViewSet for the cases app.

    Uses ``viewsets.ViewSet`` (not ``ModelViewSet``) so every action is
    explicitly defined, preventing accidental exposure of unintended
    CRUD operations.

    Permission Strategy
    -------------------
    ``list`` / ``retrieve`` are public.  Reporting and tipping need a
    bearer token.  Status changes, history and deletion are admin-only;
    reading tips is admin or police.  The permission classes are an
    early exit: the service layer repeats every role check.
    """

    parser_classes = [JSONParser, MultiPartParser, FormParser]

    _ADMIN_ACTIONS = frozenset({"destroy", "update_status", "history"})

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [AllowAny()]
        if self.action in self._ADMIN_ACTIONS:
            return [IsAdminRole()]
        if self.action == "tips" and self.request.method == "GET":
            return [IsAdminOrPolice()]
        return [IsAuthenticated()]

    # ── Standard CRUD ────────────────────────────────────────────────

    @extend_schema(
        summary="List cases",
        description="List all reported cases, newest first, with optional filtering. Public.",
        parameters=[
            OpenApiParameter(name="status", type=str, location=OpenApiParameter.QUERY, description="Filter by status (case-insensitive)."),
            OpenApiParameter(name="reported_by", type=int, location=OpenApiParameter.QUERY, description="Filter by reporter PK."),
            OpenApiParameter(name="search", type=str, location=OpenApiParameter.QUERY, description="Free-text search on name/last-seen location."),
        ],
        responses={
            200: OpenApiResponse(response=CaseSerializer(many=True), description="Filtered list of cases."),
        },
        tags=["Cases"],
    )
    def list(self, request: Request) -> Response:
        """GET /api/persons/"""
        filter_serializer = CaseFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        qs = CaseStore.list_cases(filter_serializer.validated_data)
        serializer = CaseSerializer(qs, many=True, context={"request": request})
        return Response(serializer.data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Report a missing person",
        description=(
            "Create a new case.  Accepts multipart form data so a photo "
            "(JPEG/PNG, up to 5 MB) can be attached.  Broadcasts a "
            "``new_report`` alert.  Requires authentication."
        ),
        request={
            "multipart/form-data": CaseCreateSerializer,
            "application/json": CaseCreateSerializer,
        },
        responses={
            201: OpenApiResponse(response=CaseSerializer, description="Case created."),
            400: OpenApiResponse(description="Missing required fields or invalid image."),
            401: OpenApiResponse(description="No or invalid token."),
        },
        tags=["Cases"],
    )
    def create(self, request: Request) -> Response:
        """
        POST /api/persons/

        Steps
        -----
        1. Validate with ``CaseCreateSerializer`` (image checks included).
        2. Delegate to ``CaseService.submit_report``.
        3. Return HTTP 201 with ``CaseSerializer`` payload.
        """
        serializer = CaseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        case = CaseService.submit_report(serializer.validated_data, request.user)
        out = CaseSerializer(case, context={"request": request})
        return Response(out.data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Retrieve a case",
        responses={
            200: OpenApiResponse(response=CaseSerializer, description="Case detail."),
            404: OpenApiResponse(description="Person not found."),
        },
        tags=["Cases"],
    )
    def retrieve(self, request: Request, pk: str = None) -> Response:
        """GET /api/persons/{id}/"""
        case = CaseStore.get_case(pk)
        serializer = CaseSerializer(case, context={"request": request})
        return Response(serializer.data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Delete a case",
        description=(
            "Hard-delete a case.  Status history and tips are deleted with "
            "it; alerts keep their text with the case reference cleared.  "
            "Admin only."
        ),
        responses={
            200: OpenApiResponse(description="Person deleted successfully."),
            403: OpenApiResponse(description="Admins only."),
            404: OpenApiResponse(description="Person not found."),
        },
        tags=["Cases"],
    )
    def destroy(self, request: Request, pk: str = None) -> Response:
        """DELETE /api/persons/{id}/"""
        CaseService.remove_case(pk, request.user)
        return Response(
            {"message": "Person deleted successfully"},
            status=status.HTTP_200_OK,
        )

    # ── Status @actions ──────────────────────────────────────────────

    @extend_schema(
        summary="Change case status",
        description=(
            "Move a case to any status.  Writes one status-history row and "
            "broadcasts a ``status`` (or ``resolved``) alert.  Admin only."
        ),
        request=CaseStatusUpdateSerializer,
        responses={
            200: OpenApiResponse(response=CaseSerializer, description="Status updated."),
            400: OpenApiResponse(description="Status is required."),
            403: OpenApiResponse(description="Admins only."),
            404: OpenApiResponse(description="Person not found."),
        },
        tags=["Cases"],
    )
    @action(detail=True, methods=["put"], url_path="status", url_name="status")
    def update_status(self, request: Request, pk: str = None) -> Response:
        """
        PUT /api/persons/{id}/status/

        Steps
        -----
        1. Validate with ``CaseStatusUpdateSerializer``.
        2. Delegate to ``CaseService.change_status``.
        3. Return HTTP 200 with the updated case.
        """
        serializer = CaseStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        case = CaseService.change_status(
            pk, serializer.validated_data["status"], request.user,
        )
        out = CaseSerializer(case, context={"request": request})
        return Response(out.data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Get case status history",
        description="Immutable status-transition audit trail, newest first.  Admin only.",
        responses={
            200: OpenApiResponse(response=StatusHistorySerializer(many=True), description="Status transition log."),
            403: OpenApiResponse(description="Admins only."),
            404: OpenApiResponse(description="Person not found."),
        },
        tags=["Cases"],
    )
    @action(detail=True, methods=["get"], url_path="history")
    def history(self, request: Request, pk: str = None) -> Response:
        """GET /api/persons/{id}/history/"""
        rows = CaseService.history(pk, request.user)
        serializer = StatusHistorySerializer(rows, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    # ── Sub-resource @actions — Tips ─────────────────────────────────

    @extend_schema(
        methods=["GET"],
        summary="List tips for a case",
        responses={
            200: OpenApiResponse(response=TipSerializer(many=True), description="Tips, newest first."),
            403: OpenApiResponse(description="Admin or police only."),
            404: OpenApiResponse(description="Person not found."),
        },
        tags=["Tips"],
    )
    @extend_schema(
        methods=["POST"],
        summary="Submit a tip",
        request=TipCreateSerializer,
        responses={
            201: OpenApiResponse(response=TipSerializer, description="Tip recorded."),
            400: OpenApiResponse(description="Tip content is required."),
            404: OpenApiResponse(description="Person not found."),
        },
        tags=["Tips"],
    )
    @action(detail=True, methods=["get", "post"], url_path="tips")
    def tips(self, request: Request, pk: str = None) -> Response:
        """
        GET  /api/persons/{id}/tips/  — admin or police.
        POST /api/persons/{id}/tips/  — any authenticated user.
        """
        if request.method == "GET":
            rows = TipService.list_tips(pk, request.user)
            return Response(TipSerializer(rows, many=True).data, status=status.HTTP_200_OK)

        serializer = TipCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tip = TipService.submit_tip(pk, serializer.validated_data["content"], request.user)
        return Response(TipSerializer(tip).data, status=status.HTTP_201_CREATED)
