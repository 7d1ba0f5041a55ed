"""
Core app views — **Thin Views**.

Each view delegates all business logic to the corresponding service in
``core.services``.  Views are responsible only for:

1. Extracting the principal from the request.
2. Calling the service.
3. Serialising the result and returning an HTTP ``Response``.

No model imports, no aggregation logic, no cross-app queries.
"""

from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from drf_spectacular.utils import OpenApiResponse, extend_schema

from accounts.permissions import IsAdminRole
from cases.serializers import CaseSerializer

from .serializers import (
    AlertSerializer,
    HomepageStatsSerializer,
    TipStatsSerializer,
    UnseenCountSerializer,
)
from .services import (
    AlertService,
    HomepageStatsService,
    RecentCasesService,
    TipStatsService,
)


# ════════════════════════════════════════════════════════════════════
#  Statistics
# ════════════════════════════════════════════════════════════════════

class TipStatsView(APIView):
    """
    **GET /api/tip-stats/**

    Total tip count and the most-tipped cases.

    **Authentication**: Bearer token, admin role.

    **Error Responses**:
        - ``401 Unauthorized``: Missing or invalid credentials.
        - ``403 Forbidden``: Not an administrator.
    """

    permission_classes = [IsAdminRole]

    @extend_schema(
        summary="Tip statistics",
        responses={
            200: OpenApiResponse(response=TipStatsSerializer, description="Tip totals."),
            403: OpenApiResponse(description="Admins only."),
        },
        tags=["Statistics"],
    )
    def get(self, request: Request) -> Response:
        data = TipStatsService.get_stats(request.user)
        return Response(TipStatsSerializer(data).data, status=status.HTTP_200_OK)


class HomepageStatsView(APIView):
    """
    **GET /api/homepage-stats/**

    Public landing-page counters.  No authentication required; no
    user-specific data is returned.
    """

    permission_classes = [AllowAny]
    authentication_classes = []  # No authentication required

    @extend_schema(
        summary="Homepage statistics",
        responses={200: OpenApiResponse(response=HomepageStatsSerializer, description="Public counters.")},
        tags=["Statistics"],
    )
    def get(self, request: Request) -> Response:
        data = HomepageStatsService.get_stats()
        return Response(HomepageStatsSerializer(data).data, status=status.HTTP_200_OK)


class RecentCasesView(APIView):
    """
    **GET /api/recent-cases/**

    The three most recently updated cases.  Public.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Recently active cases",
        responses={200: OpenApiResponse(response=CaseSerializer(many=True), description="Up to 3 cases.")},
        tags=["Statistics"],
    )
    def get(self, request: Request) -> Response:
        cases = RecentCasesService.recent_activity()
        serializer = CaseSerializer(cases, many=True, context={"request": request})
        return Response(serializer.data, status=status.HTTP_200_OK)


class HomepageRecentCasesView(APIView):
    """
    **GET /api/homepage-recent-cases/**

    The six cases whose person went missing most recently.  Public.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Latest missing persons",
        responses={200: OpenApiResponse(response=CaseSerializer(many=True), description="Up to 6 cases.")},
        tags=["Statistics"],
    )
    def get(self, request: Request) -> Response:
        cases = RecentCasesService.latest_missing()
        serializer = CaseSerializer(cases, many=True, context={"request": request})
        return Response(serializer.data, status=status.HTTP_200_OK)


# ════════════════════════════════════════════════════════════════════
#  Alerts
# ════════════════════════════════════════════════════════════════════

class AlertViewSet(viewsets.ViewSet):
    """
    **Alert API** — the targeted feed for the authenticated principal.

    Endpoints
    ---------
    GET  /api/alerts/                 → alerts visible to the caller
    GET  /api/alerts/unseen-count/    → ``{"unseen_count": n}``
    PUT  /api/alerts/{id}/seen/       → mark an alert as seen

    **Authentication**: Required (``IsAuthenticated``).
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List alerts",
        description=(
            "Return alerts targeted at the caller's role, at the caller "
            "directly, or at nobody (broadcast), newest first."
        ),
        responses={200: OpenApiResponse(response=AlertSerializer(many=True), description="Alert feed.")},
        tags=["Alerts"],
    )
    def list(self, request: Request) -> Response:
        alerts = AlertService(request.user).list_alerts()
        serializer = AlertSerializer(alerts, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Unseen alert count",
        description="Number of alerts in the caller's feed that are not yet seen.",
        responses={200: OpenApiResponse(response=UnseenCountSerializer, description="Badge count.")},
        tags=["Alerts"],
    )
    @action(detail=False, methods=["get"], url_path="unseen-count", url_name="unseen-count")
    def unseen_count(self, request: Request) -> Response:
        count = AlertService(request.user).unseen_count()
        return Response(
            UnseenCountSerializer({"unseen_count": count}).data,
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        summary="Mark alert as seen",
        description="Idempotent: marking an already-seen alert returns it unchanged.",
        request=None,
        responses={
            200: OpenApiResponse(response=AlertSerializer, description="Updated alert."),
            404: OpenApiResponse(description="Alert not found."),
        },
        tags=["Alerts"],
    )
    @action(detail=True, methods=["put"], url_path="seen", url_name="seen")
    def mark_seen(self, request: Request, pk: str = None) -> Response:
        alert = AlertService(request.user).mark_seen(pk)
        return Response(AlertSerializer(alert).data, status=status.HTTP_200_OK)
