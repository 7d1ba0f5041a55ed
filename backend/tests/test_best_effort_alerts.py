"""
Cross-app tests — alert failures never undo the case write.

The alert INSERT runs in its own savepoint after the primary write; a
store error there is logged and absorbed.
"""

from __future__ import annotations

from datetime import date
from unittest import mock

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from accounts.authentication import PrincipalResolver
from accounts.models import Role
from cases.models import Case, StatusHistory
from core.domain.alerts import AlertDispatcher
from core.domain.transactions import best_effort
from core.models import Alert

User = get_user_model()

_REPORT = {
    "name": "Jane Doe",
    "age": 34,
    "status": "Missing",
    "last_seen": "Central Park",
    "date": "2024-01-01",
}


class TestBestEffortAlerts(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = User.objects.create_user(
            email="admin@example.com", password="Adm1n!Pass", name="Admin", role=Role.ADMIN,
        )

    def setUp(self):
        self.client = APIClient()
        self.client.credentials(
            HTTP_AUTHORIZATION=f"Bearer {PrincipalResolver.issue(self.admin)}",
        )

    def test_report_survives_alert_failure(self):
        with mock.patch.object(
            AlertDispatcher, "raise_alert", side_effect=DatabaseError("alerts table locked"),
        ):
            with self.assertLogs("core.domain.transactions", level="ERROR"):
                resp = self.client.post("/api/persons/", _REPORT, format="json")

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, msg=resp.data)
        self.assertTrue(Case.objects.filter(pk=resp.data["id"]).exists())
        self.assertFalse(Alert.objects.exists())

    def test_status_change_survives_alert_failure(self):
        case = Case.objects.create(
            name="John Roe", age=51, status="Missing", last_seen="Harbour", date=date(2024, 3, 3),
        )

        with mock.patch.object(
            AlertDispatcher, "raise_alert", side_effect=DatabaseError("alerts table locked"),
        ):
            with self.assertLogs("core.domain.transactions", level="ERROR"):
                resp = self.client.put(
                    f"/api/persons/{case.pk}/status/", {"status": "Resolved"}, format="json",
                )

        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        case.refresh_from_db()
        self.assertEqual(case.status, "Resolved")
        history = StatusHistory.objects.get(person=case)
        self.assertEqual((history.previous_status, history.new_status), ("Missing", "Resolved"))
        self.assertFalse(Alert.objects.exists())

    def test_programming_errors_still_propagate(self):
        def broken():
            raise KeyError("template")

        with self.assertRaises(KeyError):
            best_effort("broken step", broken)

    def test_returns_value_on_success(self):
        self.assertEqual(best_effort("noop", lambda: 7), 7)
