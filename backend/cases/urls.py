"""
Cases app URL configuration.

All routes are registered under the ``/api/persons/`` prefix.

Route Hierarchy
---------------
  /api/persons/                       → list (public) / create (bearer)
  /api/persons/{id}/                  → retrieve (public) / destroy (admin)

  ── Status @actions ─────────────────────────────────────────────
  PUT  /api/persons/{id}/status/      → admin changes status
  GET  /api/persons/{id}/history/     → admin reads the audit trail

  ── Sub-resource @actions ───────────────────────────────────────
  GET  /api/persons/{id}/tips/        → admin / police
  POST /api/persons/{id}/tips/        → any authenticated user
"""

from rest_framework.routers import DefaultRouter

from .views import CaseViewSet

router = DefaultRouter()
router.include_root_view = False
router.register(
    prefix=r"persons",
    viewset=CaseViewSet,
    basename="person",
)

urlpatterns = router.urls
