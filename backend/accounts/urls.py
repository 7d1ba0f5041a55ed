"""
Accounts app URL configuration.

Included in the project-level ``urls.py`` as::

    path('api/', include('accounts.urls')),

Endpoint Map
------------
Authentication
    POST   /register/             → RegisterView
    POST   /login/                → LoginView

User Management (admin)
    GET    /users/                → UserViewSet.list
    PUT    /users/{id}/role/      → UserViewSet.change_role
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import LoginView, RegisterView, UserViewSet

app_name = "accounts"

router = DefaultRouter()
router.include_root_view = False
router.register(r"users", UserViewSet, basename="user")

urlpatterns = [
    # ── Authentication ───────────────────────────────────────────────
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),

    # ── Router-registered viewsets (users/) ──────────────────────────
    path("", include(router.urls)),
]
