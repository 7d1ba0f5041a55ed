"""
Root conftest.py — shared fixtures for the entire test suite.

Provides:
  - ``api_client`` fixture returning a DRF ``APIClient``.
  - ``create_user`` factory fixture for creating test users.
  - ``auth_header`` fixture for authenticated requests (bearer token).
  - ``media_root`` fixture redirecting uploads to a temp directory.
"""

from __future__ import annotations

import pytest
from rest_framework.test import APIClient


@pytest.fixture()
def api_client() -> APIClient:
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture()
def create_user(db):
    """
    Factory fixture that creates a user with sensible defaults.

    Usage::

        def test_something(create_user):
            user = create_user(name="Alice")
            # or with all fields:
            user = create_user(
                name="Bob",
                email="bob@example.com",
                password="Str0ng!Pass",
                role="police",
            )
    """
    from accounts.models import Role, User

    _counter = 0

    def _factory(
        *,
        name: str | None = None,
        email: str | None = None,
        password: str = "TestPass123!",
        role: str = Role.USER,
        **kwargs,
    ) -> User:
        nonlocal _counter
        _counter += 1
        if name is None:
            name = f"Test User {_counter}"
        if email is None:
            email = f"user{_counter}@test.local"

        return User.objects.create_user(
            email=email,
            password=password,
            name=name,
            role=role,
            **kwargs,
        )

    return _factory


@pytest.fixture()
def auth_header(create_user):
    """
    Returns a helper function that creates a user and returns an
    ``Authorization`` header dict with a valid bearer token.

    Usage::

        def test_protected(auth_header, api_client):
            header = auth_header(role="admin")
            api_client.credentials(HTTP_AUTHORIZATION=header["Authorization"])
            resp = api_client.get("/api/tip-stats/")
            assert resp.status_code == 200

    The returned dict looks like::

        {"Authorization": "Bearer eyJ..."}
    """
    from accounts.authentication import PrincipalResolver

    def _make(*, role: str = "user", **user_kwargs) -> dict[str, str]:
        user = create_user(role=role, **user_kwargs)
        return {"Authorization": f"Bearer {PrincipalResolver.issue(user)}"}

    return _make


@pytest.fixture()
def media_root(settings, tmp_path):
    """Store uploaded files under a per-test temporary directory."""
    settings.MEDIA_ROOT = tmp_path / "media"
    return settings.MEDIA_ROOT
