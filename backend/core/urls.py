"""
Core app URL configuration.

Provides the alert feed and the cross-app aggregation endpoints that
serve the admin dashboard and the public landing page.

URL prefix (registered in ``backend/urls.py``)::

    path('api/', include('core.urls'))

Endpoint summary
----------------
GET  /api/alerts/                    — Alerts visible to the caller.
GET  /api/alerts/unseen-count/       — Unseen badge count.
PUT  /api/alerts/{id}/seen/          — Mark an alert as seen.
GET  /api/tip-stats/                 — Tip totals (admin).
GET  /api/homepage-stats/            — Public counters.
GET  /api/recent-cases/              — 3 most recently updated cases.
GET  /api/homepage-recent-cases/     — 6 most recently missing persons.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

app_name = "core"

# ── Router for ViewSet-based endpoints ───────────────────────────────
router = DefaultRouter()
router.include_root_view = False
router.register(
    prefix=r"alerts",
    viewset=views.AlertViewSet,
    basename="alert",
)

urlpatterns = [
    # ── Statistics ───────────────────────────────────────────────────
    path(
        "tip-stats/",
        views.TipStatsView.as_view(),
        name="tip-stats",
    ),
    path(
        "homepage-stats/",
        views.HomepageStatsView.as_view(),
        name="homepage-stats",
    ),

    # ── Landing-page case widgets ────────────────────────────────────
    path(
        "recent-cases/",
        views.RecentCasesView.as_view(),
        name="recent-cases",
    ),
    path(
        "homepage-recent-cases/",
        views.HomepageRecentCasesView.as_view(),
        name="homepage-recent-cases",
    ),

    # ── Alerts (router-generated URLs) ───────────────────────────────
    path("", include(router.urls)),
]
