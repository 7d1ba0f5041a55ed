"""
Unit tests for ``accounts.authentication.PrincipalResolver`` and the
DRF authentication class that wraps it.

Covers the credential failure taxonomy:
  - no header            → ``Unauthenticated``        (401)
  - wrong scheme / shape → ``InvalidCredential``      (401)
  - expired              → ``InvalidCredential``      (401)
  - tampered signature   → ``InvalidCredential``      (401)
  - missing role claim   → ``InvalidCredential``      (401)
"""

from __future__ import annotations

from datetime import timedelta

import pytest
from rest_framework_simplejwt.tokens import AccessToken

from accounts.authentication import PrincipalResolver
from core.domain.exceptions import InvalidCredential, Unauthenticated
from core.domain.principal import Principal


# ════════════════════════════════════════════════════════════════════
#  Resolver
# ════════════════════════════════════════════════════════════════════

class TestPrincipalResolver:

    def test_resolves_issued_token(self, create_user):
        user = create_user(role="police")
        token = PrincipalResolver.issue(user)

        principal, _ = PrincipalResolver.resolve(f"Bearer {token}")

        assert principal == Principal(user_id=user.pk, role="police")
        assert principal.is_authenticated
        assert principal.has_role("admin", "police")

    def test_bare_token_is_accepted(self, create_user):
        user = create_user()
        token = PrincipalResolver.issue(user)

        principal, _ = PrincipalResolver.resolve(token)

        assert principal.user_id == user.pk

    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_missing_header_is_unauthenticated(self, header):
        with pytest.raises(Unauthenticated):
            PrincipalResolver.resolve(header)

    @pytest.mark.parametrize("header", ["Basic abc def", "Token abc", "Bearer a b"])
    def test_malformed_header_is_invalid(self, header):
        with pytest.raises(InvalidCredential):
            PrincipalResolver.resolve(header)

    def test_garbage_token_is_invalid(self):
        with pytest.raises(InvalidCredential):
            PrincipalResolver.resolve("Bearer not-a-jwt")

    def test_expired_token_is_invalid(self, create_user):
        user = create_user()
        token = AccessToken.for_user(user)
        token["role"] = user.role
        token.set_exp(lifetime=-timedelta(seconds=1))

        with pytest.raises(InvalidCredential):
            PrincipalResolver.resolve(f"Bearer {token}")

    def test_tampered_payload_is_invalid(self, create_user):
        victim = create_user(role="admin")
        attacker = create_user(role="user")
        header, _, signature = PrincipalResolver.issue(attacker).split(".")
        _, admin_payload, _ = PrincipalResolver.issue(victim).split(".")

        with pytest.raises(InvalidCredential):
            PrincipalResolver.resolve(f"Bearer {header}.{admin_payload}.{signature}")

    def test_token_without_role_claim_is_invalid(self, create_user):
        user = create_user()
        token = AccessToken.for_user(user)

        with pytest.raises(InvalidCredential):
            PrincipalResolver.resolve(f"Bearer {token}")

    def test_token_with_unknown_role_is_invalid(self, create_user):
        user = create_user()
        token = AccessToken.for_user(user)
        token["role"] = "superhero"

        with pytest.raises(InvalidCredential):
            PrincipalResolver.resolve(f"Bearer {token}")

    def test_role_comes_from_token_not_database(self, create_user):
        user = create_user(role="police")
        token = PrincipalResolver.issue(user)
        user.role = "user"
        user.save(update_fields=["role"])

        principal, _ = PrincipalResolver.resolve(f"Bearer {token}")

        assert principal.role == "police"


# ════════════════════════════════════════════════════════════════════
#  HTTP edge
# ════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestBearerAuthenticationOverHttp:

    def test_protected_endpoint_without_token_is_401(self, api_client):
        resp = api_client.get("/api/alerts/")

        assert resp.status_code == 401
        assert resp["WWW-Authenticate"].startswith("Bearer")

    def test_protected_endpoint_with_bad_token_is_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-jwt")

        resp = api_client.get("/api/alerts/")

        assert resp.status_code == 401

    def test_bad_token_on_public_endpoint_is_still_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-jwt")

        resp = api_client.get("/api/persons/")

        assert resp.status_code == 401

    def test_valid_token_reaches_view(self, api_client, auth_header):
        api_client.credentials(HTTP_AUTHORIZATION=auth_header()["Authorization"])

        resp = api_client.get("/api/alerts/")

        assert resp.status_code == 200
