"""
Bearer-token authentication.

``PrincipalResolver`` is the only place a raw credential is parsed.  It
verifies a SimpleJWT access token (signature, expiry, token type) and
returns a ``core.domain.principal.Principal`` built purely from the
token claims; no database lookup happens on the request path.

``PrincipalAuthentication`` plugs the resolver into DRF.  It is
registered as the sole ``DEFAULT_AUTHENTICATION_CLASSES`` entry, so
``request.user`` is either a ``Principal`` or ``None`` (anonymous).
"""

from __future__ import annotations

import logging
from typing import Any

from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

from core.domain.exceptions import InvalidCredential, Unauthenticated
from core.domain.principal import Principal

from .models import Role

logger = logging.getLogger(__name__)

AUTH_KEYWORD = "Bearer"
ROLE_CLAIM = "role"
USER_ID_CLAIM = "user_id"


class PrincipalResolver:
    """
    Issues and verifies the signed, time-limited bearer credential.

    Token claims
    ------------
    ``user_id`` : int   — PK of the ``User``.
    ``role``    : str   — one of ``Role`` values at issue time.
    ``exp``     : int   — expiry (``SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"]``).
    """

    @staticmethod
    def issue(user: Any) -> str:
        """Sign an access token carrying ``user_id`` and ``role``."""
        token = AccessToken.for_user(user)
        token[ROLE_CLAIM] = user.role
        return str(token)

    @staticmethod
    def extract_token(authorization_header: str | None) -> str:
        """
        Pull the raw token out of an ``Authorization`` header value.

        ``Bearer <token>`` is the documented form; a bare token is also
        accepted.

        Raises:
            Unauthenticated:   Header missing or blank.
            InvalidCredential: Header has an unexpected scheme or shape.
        """
        if authorization_header is None or not authorization_header.strip():
            raise Unauthenticated()

        parts = authorization_header.split()
        if len(parts) == 1:
            return parts[0]
        if len(parts) == 2 and parts[0] == AUTH_KEYWORD:
            return parts[1]
        raise InvalidCredential("Invalid token.")

    @classmethod
    def resolve(cls, authorization_header: str | None) -> tuple[Principal, AccessToken]:
        """
        Verify the credential and return the principal it names.

        Raises:
            Unauthenticated:   No credential.
            InvalidCredential: Malformed, expired, tampered, or carries
                               claims that do not describe a principal.
        """
        raw = cls.extract_token(authorization_header)
        try:
            token = AccessToken(raw)
        except TokenError as exc:
            raise InvalidCredential(f"Invalid token: {exc}")

        user_id = token.get(USER_ID_CLAIM)
        role = token.get(ROLE_CLAIM)
        if user_id is None or role not in Role.values:
            raise InvalidCredential("Invalid token: missing or unknown claims.")

        try:
            user_id = int(user_id)
        except (TypeError, ValueError):
            raise InvalidCredential("Invalid token: malformed user id.")

        return Principal(user_id=user_id, role=role), token


class PrincipalAuthentication(BaseAuthentication):
    """
    DRF authentication class backed by ``PrincipalResolver``.

    * No ``Authorization`` header → ``None`` (anonymous; public endpoints
      still work, protected ones answer 401 via ``IsAuthenticated``).
    * Header present but unverifiable → ``AuthenticationFailed`` (401).
    """

    www_authenticate_realm = "api"

    def authenticate(self, request):
        header = request.META.get("HTTP_AUTHORIZATION")
        if not header:
            return None
        try:
            return PrincipalResolver.resolve(header)
        except (InvalidCredential, Unauthenticated) as exc:
            logger.info("Rejected bearer credential: %s", exc)
            raise exceptions.AuthenticationFailed(str(exc))

    def authenticate_header(self, request) -> str:
        return f'{AUTH_KEYWORD} realm="{self.www_authenticate_realm}"'
