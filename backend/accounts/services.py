"""
Accounts Service Layer.

This module is the **single source of truth** for all business logic
within the ``accounts`` app.  Views must remain *thin*: they validate
input through serializers, call a service function / method, and
return the result wrapped in a DRF ``Response``.

Architecture
------------
- ``UserRegistrationService``  — handles new-user creation flow.
- ``AuthenticationService``    — e-mail login + bearer-token issuance.
- ``UserManagementService``    — admin listing and role changes.
"""

from __future__ import annotations

import logging
from typing import Any

from django.contrib.auth import authenticate as django_authenticate
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import QuerySet

from core.domain.access import require_role
from core.domain.exceptions import InvalidCredential, NotFound, ValidationError
from core.domain.principal import Principal

from .authentication import PrincipalResolver
from .models import Role

User = get_user_model()
logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  Registration Service
# ═══════════════════════════════════════════════════════════════════


class UserRegistrationService:
    """
    Encapsulates the self-service registration flow.
    """

    @staticmethod
    def register_user(validated_data: dict[str, Any]) -> User:
        """
        Create a new user.

        Parameters
        ----------
        validated_data : dict
            Cleaned data from ``RegisterRequestSerializer`` containing
            ``name``, ``email``, ``password`` and optionally ``role``.

        Returns
        -------
        User
            The newly created (and saved) ``User`` instance.

        Notes
        -----
        - ``User.objects.create_user()`` hashes the password.
        - ``role`` defaults to ``user``; any supplied value has already
          been checked against ``Role`` by the serializer, and is checked
          again here so the service is safe to call directly.

        Raises
        ------
        core.domain.exceptions.ValidationError
            If the e-mail address is already registered (including a
            concurrent registration caught by the unique index) or
            ``role`` is outside the closed role set.
        """
        data = dict(validated_data)
        password = data.pop("password")
        role = data.pop("role", None) or Role.USER

        if role not in Role.values:
            raise ValidationError("Invalid role", fields=["role"])

        email = User.objects.normalize_email(data.get("email", ""))
        if User.objects.filter(email__iexact=email).exists():
            raise ValidationError("Email already in use", fields=["email"])

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    email=email,
                    password=password,
                    name=data["name"],
                    role=role,
                )
        except IntegrityError:
            raise ValidationError("Email already in use", fields=["email"])

        logger.info("Registered user #%s with role %s", user.pk, user.role)
        return user


# ═══════════════════════════════════════════════════════════════════
#  Authentication Service
# ═══════════════════════════════════════════════════════════════════


class AuthenticationService:
    """
    Handles e-mail login and bearer-token generation.
    """

    @staticmethod
    def authenticate(email: str, password: str, request: Any = None) -> User:
        """
        Validate credentials and return the user.

        Django's ``ModelBackend`` resolves the user by ``USERNAME_FIELD``
        (``email``), checks the password hash and rejects inactive
        accounts.

        Raises
        ------
        InvalidCredential
            Unknown e-mail, wrong password, or inactive account.
        """
        user = django_authenticate(request=request, email=email, password=password)
        if user is None:
            raise InvalidCredential("Invalid credentials")
        return user

    @staticmethod
    def login(email: str, password: str, request: Any = None) -> dict[str, Any]:
        """
        Authenticate and issue a token.

        Returns
        -------
        dict
            ``{"token": "<jwt>", "role": "<role>", "user": <User>}``.
        """
        user = AuthenticationService.authenticate(email, password, request=request)
        token = PrincipalResolver.issue(user)
        logger.info("User #%s logged in", user.pk)
        return {"token": token, "role": user.role, "user": user}


# ═══════════════════════════════════════════════════════════════════
#  User Management Service
# ═══════════════════════════════════════════════════════════════════


class UserManagementService:
    """
    Administrative operations on users: listing and role changes.

    Every method takes the acting ``Principal`` and checks it is an
    administrator before touching any row.
    """

    @staticmethod
    def list_users(actor: Principal, *, role: str | None = None) -> QuerySet[User]:
        """
        Return all users, optionally filtered by ``role``.

        Raises
        ------
        PermissionDenied
            If ``actor`` is not an administrator.
        """
        require_role(actor, Role.ADMIN)
        qs = User.objects.all().order_by("id")
        if role:
            qs = qs.filter(role=role)
        return qs

    @staticmethod
    def get_user(user_id: int) -> User:
        """Retrieve a single user by PK or raise ``NotFound``."""
        try:
            return User.objects.get(pk=user_id)
        except (User.DoesNotExist, ValueError, TypeError):
            raise NotFound("User not found")

    @staticmethod
    def change_role(*, user_id: int, role: str, performed_by: Principal) -> User:
        """
        Assign a new role to a user.

        Steps
        -----
        1. Require ``performed_by`` to be an administrator.
        2. Validate ``role`` against the closed ``Role`` set.
        3. Fetch the target user (``NotFound`` when absent).
        4. Persist the new role and return the user.

        Notes
        -----
        Tokens already issued keep the role they were signed with until
        they expire (one hour); the change applies from the next login.
        """
        require_role(performed_by, Role.ADMIN)

        if role not in Role.values:
            raise ValidationError("Invalid role", fields=["role"])

        target_user = UserManagementService.get_user(user_id)
        previous = target_user.role
        target_user.role = role
        target_user.save(update_fields=["role"])

        logger.info(
            "User #%s role %s -> %s by %s",
            target_user.pk,
            previous,
            role,
            performed_by,
        )
        return target_user
