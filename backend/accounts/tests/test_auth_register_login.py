"""
Integration tests — registration and e-mail login.

Endpoints under test:
    POST /api/register/   (named URL: accounts:register)
    POST /api/login/      (named URL: accounts:login)

Login success response:  HTTP 200 ``{"token": "...", "role": "...", "user": {...}}``
Login failure response:  HTTP 401 ``{"detail": "Invalid credentials"}``
"""

from __future__ import annotations

from unittest import mock

from django.contrib.auth import get_user_model
from django.db import IntegrityError
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from accounts.authentication import PrincipalResolver
from accounts.models import Role
from accounts.services import UserRegistrationService
from core.domain.exceptions import ValidationError

User = get_user_model()

_PASSWORD = "Str0ng!Pass99"


class TestRegistration(TestCase):
    """New users register with name, e-mail and password."""

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("accounts:register")

    def _register(self, **overrides):
        payload = {
            "name": "Jane Reporter",
            "email": "jane@example.com",
            "password": _PASSWORD,
        }
        payload.update(overrides)
        return self.client.post(self.url, payload, format="json")

    def test_register_defaults_to_user_role(self):
        resp = self._register()

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, msg=resp.data)
        self.assertEqual(resp.data["message"], "User registered successfully")
        self.assertEqual(resp.data["user"]["role"], Role.USER)
        self.assertNotIn("password", resp.data["user"])

        user = User.objects.get(email="jane@example.com")
        self.assertTrue(user.check_password(_PASSWORD))
        self.assertEqual(user.name, "Jane Reporter")

    def test_register_with_explicit_role(self):
        resp = self._register(email="vol@example.com", role="volunteer")

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, msg=resp.data)
        self.assertEqual(User.objects.get(email="vol@example.com").role, Role.VOLUNTEER)

    def test_register_rejects_unknown_role(self):
        resp = self._register(role="superhero")

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("role", resp.data)
        self.assertFalse(User.objects.filter(email="jane@example.com").exists())

    def test_register_duplicate_email_is_400(self):
        self._register()
        resp = self._register(name="Someone Else", email="JANE@example.com")

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", resp.data)
        self.assertEqual(User.objects.filter(email__iexact="jane@example.com").count(), 1)

    def test_register_missing_fields_is_400(self):
        resp = self.client.post(self.url, {"email": "x@example.com"}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("name", resp.data)
        self.assertIn("password", resp.data)

    def test_register_short_password_is_400(self):
        resp = self._register(password="abc")

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", resp.data)
        self.assertFalse(User.objects.filter(email="jane@example.com").exists())

    def test_service_duplicate_email_is_validation_error(self):
        self._register()

        with self.assertRaises(ValidationError) as ctx:
            UserRegistrationService.register_user(
                {"name": "Twin", "email": "Jane@Example.com", "password": _PASSWORD},
            )

        self.assertEqual(ctx.exception.fields, ["email"])

    def test_concurrent_duplicate_is_400(self):
        # The unique index wins a race the pre-check missed.
        with mock.patch.object(User.objects, "create_user", side_effect=IntegrityError):
            resp = self._register()

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data, {"detail": "Email already in use"})


class TestLogin(TestCase):
    """E-mail + password login returns a one-hour bearer token."""

    @classmethod
    def setUpTestData(cls):
        cls.user = User.objects.create_user(
            email="police@example.com",
            password=_PASSWORD,
            name="Officer Dana",
            role=Role.POLICE,
        )

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("accounts:login")

    def test_login_returns_token_role_and_user(self):
        resp = self.client.post(
            self.url,
            {"email": "police@example.com", "password": _PASSWORD},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertEqual(resp.data["role"], Role.POLICE)
        self.assertEqual(resp.data["user"]["email"], "police@example.com")

        principal, _ = PrincipalResolver.resolve(f"Bearer {resp.data['token']}")
        self.assertEqual(principal.user_id, self.user.pk)
        self.assertEqual(principal.role, Role.POLICE)

    def test_login_wrong_password_is_401(self):
        resp = self.client.post(
            self.url,
            {"email": "police@example.com", "password": "wrong-password"},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(resp.data["detail"], "Invalid credentials")

    def test_login_unknown_email_is_401(self):
        resp = self.client.post(
            self.url,
            {"email": "nobody@example.com", "password": _PASSWORD},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_login_missing_password_is_400(self):
        resp = self.client.post(self.url, {"email": "police@example.com"}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_inactive_user_cannot_login(self):
        User.objects.create_user(
            email="gone@example.com",
            password=_PASSWORD,
            name="Gone",
            is_active=False,
        )
        resp = self.client.post(
            self.url,
            {"email": "gone@example.com", "password": _PASSWORD},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
