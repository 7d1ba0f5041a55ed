"""
Integration tests — administrative user management.

Endpoints under test:
    GET /api/users/             (named URL: accounts:user-list)
    PUT /api/users/{id}/role/   (named URL: accounts:user-change-role)

Only administrators may list users or change a role.  Roles are a closed
set: anything outside ``admin / user / police / volunteer`` is rejected.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from accounts.authentication import PrincipalResolver
from accounts.models import Role
from accounts.services import UserManagementService
from core.domain.exceptions import NotFound, PermissionDenied, ValidationError
from core.domain.principal import Principal

User = get_user_model()


class TestChangeRole(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = User.objects.create_user(
            email="admin@example.com", password="Adm1n!Pass", name="Admin", role=Role.ADMIN,
        )
        cls.citizen = User.objects.create_user(
            email="citizen@example.com", password="C1tizen!Pass", name="Citizen",
        )

    def setUp(self):
        self.client = APIClient()

    def _auth(self, user):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {PrincipalResolver.issue(user)}")

    def _url(self, user_id):
        return reverse("accounts:user-change-role", kwargs={"pk": user_id})

    def test_admin_promotes_user_to_police(self):
        self._auth(self.admin)

        resp = self.client.put(self._url(self.citizen.pk), {"role": "police"}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertEqual(resp.data["message"], "Role updated successfully")
        self.assertEqual(resp.data["user"]["role"], Role.POLICE)
        self.citizen.refresh_from_db()
        self.assertEqual(self.citizen.role, Role.POLICE)

    def test_invalid_role_is_400_and_nothing_changes(self):
        self._auth(self.admin)

        resp = self.client.put(self._url(self.citizen.pk), {"role": "sheriff"}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.citizen.refresh_from_db()
        self.assertEqual(self.citizen.role, Role.USER)

    def test_unknown_user_is_404(self):
        self._auth(self.admin)

        resp = self.client.put(self._url(999999), {"role": "police"}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_non_admin_is_403(self):
        self._auth(self.citizen)

        resp = self.client.put(self._url(self.citizen.pk), {"role": "admin"}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.citizen.refresh_from_db()
        self.assertEqual(self.citizen.role, Role.USER)

    def test_anonymous_is_401(self):
        resp = self.client.put(self._url(self.citizen.pk), {"role": "admin"}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_list_users_filters_by_role(self):
        User.objects.create_user(
            email="vol@example.com", password="V0l!Pass", name="Vol", role=Role.VOLUNTEER,
        )
        self._auth(self.admin)

        resp = self.client.get(reverse("accounts:user-list"), {"role": "volunteer"})

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual([u["email"] for u in resp.data], ["vol@example.com"])


class TestUserManagementService(TestCase):
    """The service repeats the role check independently of the view."""

    @classmethod
    def setUpTestData(cls):
        cls.target = User.objects.create_user(
            email="target@example.com", password="T4rget!Pass", name="Target",
        )

    def test_service_rejects_non_admin(self):
        with self.assertRaises(PermissionDenied):
            UserManagementService.change_role(
                user_id=self.target.pk,
                role=Role.POLICE,
                performed_by=Principal(user_id=self.target.pk, role=Role.POLICE),
            )

    def test_service_rejects_unknown_role(self):
        with self.assertRaises(ValidationError):
            UserManagementService.change_role(
                user_id=self.target.pk,
                role="janitor",
                performed_by=Principal(user_id=1, role=Role.ADMIN),
            )

    def test_service_missing_user(self):
        with self.assertRaises(NotFound):
            UserManagementService.change_role(
                user_id=424242,
                role=Role.POLICE,
                performed_by=Principal(user_id=1, role=Role.ADMIN),
            )
