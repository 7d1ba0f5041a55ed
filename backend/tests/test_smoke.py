"""
Smoke tests — verify that Django boots, URL routing resolves, and
the core domain modules behave as documented.

These tests do NOT require real data; they just prove the plumbing
works.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from django.db import DatabaseError
from django.urls import resolve, reverse


# ════════════════════════════════════════════════════════════════════
#  URL Routing Smoke Tests
# ════════════════════════════════════════════════════════════════════

class TestURLRouting:
    """Ensure every named route reverses to its documented path."""

    EXPECTED_URLS = [
        # (url_name, kwargs, expected_path)
        ("accounts:register",          {},          "/api/register/"),
        ("accounts:login",             {},          "/api/login/"),
        ("accounts:user-list",         {},          "/api/users/"),
        ("accounts:user-change-role",  {"pk": 1},   "/api/users/1/role/"),
        ("person-list",                {},          "/api/persons/"),
        ("person-detail",              {"pk": 1},   "/api/persons/1/"),
        ("person-status",              {"pk": 1},   "/api/persons/1/status/"),
        ("person-history",             {"pk": 1},   "/api/persons/1/history/"),
        ("person-tips",                {"pk": 1},   "/api/persons/1/tips/"),
        ("core:alert-list",            {},          "/api/alerts/"),
        ("core:alert-unseen-count",    {},          "/api/alerts/unseen-count/"),
        ("core:alert-seen",            {"pk": 1},   "/api/alerts/1/seen/"),
        ("core:tip-stats",             {},          "/api/tip-stats/"),
        ("core:homepage-stats",        {},          "/api/homepage-stats/"),
        ("core:recent-cases",          {},          "/api/recent-cases/"),
        ("core:homepage-recent-cases", {},          "/api/homepage-recent-cases/"),
    ]

    @pytest.mark.parametrize("url_name,kwargs,expected", EXPECTED_URLS)
    def test_url_reverses(self, url_name: str, kwargs: dict, expected: str):
        assert reverse(url_name, kwargs=kwargs) == expected

    @pytest.mark.parametrize("url_name,kwargs,expected", EXPECTED_URLS)
    def test_path_resolves_to_view(self, url_name: str, kwargs: dict, expected: str):
        assert resolve(expected).func is not None


@pytest.mark.django_db
def test_openapi_schema_renders(api_client):
    resp = api_client.get("/api/schema/")

    assert resp.status_code == 200


# ════════════════════════════════════════════════════════════════════
#  Exception Handler
# ════════════════════════════════════════════════════════════════════

class TestDomainExceptionHandler:
    """Each domain exception maps to one HTTP status."""

    @pytest.mark.parametrize(
        "exc_name,code",
        [
            ("ValidationError", 400),
            ("Unauthenticated", 401),
            ("InvalidCredential", 401),
            ("PermissionDenied", 403),
            ("NotFound", 404),
            ("Conflict", 409),
            ("StoreUnavailable", 500),
            ("DomainError", 400),
        ],
    )
    def test_status_mapping(self, exc_name: str, code: int):
        from core.domain import exceptions
        from core.domain.exception_handler import domain_exception_handler

        exc = getattr(exceptions, exc_name)("boom")
        resp = domain_exception_handler(exc, {"view": MagicMock()})

        assert resp.status_code == code
        assert resp.data == {"detail": "boom"}

    def test_401_carries_challenge(self):
        from core.domain.exception_handler import domain_exception_handler
        from core.domain.exceptions import Unauthenticated

        resp = domain_exception_handler(Unauthenticated(), {})

        assert resp["WWW-Authenticate"].startswith("Bearer")

    def test_database_error_is_masked(self):
        from core.domain.exception_handler import domain_exception_handler

        resp = domain_exception_handler(DatabaseError("relation persons does not exist"), {})

        assert resp.status_code == 500
        assert resp.data == {"detail": "Server error."}

    def test_unknown_exception_propagates(self):
        from core.domain.exception_handler import domain_exception_handler

        assert domain_exception_handler(RuntimeError("x"), {}) is None


# ════════════════════════════════════════════════════════════════════
#  Access Helper Unit Tests
# ════════════════════════════════════════════════════════════════════

class TestAccessHelpers:
    """Unit tests for core.domain.access helpers."""

    def test_anonymous_has_no_role(self):
        from core.domain.access import get_role_name

        assert get_role_name(None) is None

    def test_require_authenticated_rejects_none(self):
        from core.domain.access import require_authenticated
        from core.domain.exceptions import Unauthenticated

        with pytest.raises(Unauthenticated):
            require_authenticated(None)

    def test_require_role_allows_any_listed_role(self):
        from core.domain.access import require_role
        from core.domain.principal import Principal

        principal = Principal(user_id=3, role="police")

        assert require_role(principal, "admin", "police") is principal

    def test_require_role_admin_only_message(self):
        from core.domain.access import require_role
        from core.domain.exceptions import PermissionDenied
        from core.domain.principal import Principal

        with pytest.raises(PermissionDenied, match="Admins only"):
            require_role(Principal(user_id=3, role="volunteer"), "admin")

    def test_render_unknown_alert_type(self):
        from core.domain.alerts import AlertDispatcher

        assert AlertDispatcher.render("escalated") == "Event: escalated"
