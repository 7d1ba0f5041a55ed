"""
Integration tests — tips on a case.

    POST /api/persons/{id}/tips/   any authenticated user
    GET  /api/persons/{id}/tips/   admin or police
"""

from __future__ import annotations

from datetime import date

import pytest

from cases.models import Case, Tip
from cases.services import TipService
from core.domain.exceptions import NotFound, PermissionDenied, ValidationError
from core.domain.principal import Principal


@pytest.fixture()
def case(create_user):
    reporter = create_user(name="Reporter")
    return Case.objects.create(
        name="Jane Doe",
        age=34,
        status="Missing",
        last_seen="Central Park",
        date=date(2024, 1, 1),
        reported_by=reporter,
    )


def _url(case_id) -> str:
    return f"/api/persons/{case_id}/tips/"


@pytest.mark.django_db
class TestSubmitTip:

    def test_user_submits_tip(self, api_client, auth_header, case):
        api_client.credentials(HTTP_AUTHORIZATION=auth_header()["Authorization"])

        resp = api_client.post(_url(case.pk), {"content": "  Seen at the pier  "}, format="json")

        assert resp.status_code == 201, resp.data
        assert resp.data["person"] == case.pk
        assert resp.data["content"] == "Seen at the pier"
        assert Tip.objects.filter(person=case).count() == 1

    def test_blank_tip_is_400(self, api_client, auth_header, case):
        api_client.credentials(HTTP_AUTHORIZATION=auth_header()["Authorization"])

        resp = api_client.post(_url(case.pk), {"content": "   "}, format="json")

        assert resp.status_code == 400
        assert not Tip.objects.exists()

    def test_tip_on_unknown_case_is_404(self, api_client, auth_header):
        api_client.credentials(HTTP_AUTHORIZATION=auth_header()["Authorization"])

        resp = api_client.post(_url(999999), {"content": "hello"}, format="json")

        assert resp.status_code == 404

    def test_anonymous_tip_is_401(self, api_client, case):
        resp = api_client.post(_url(case.pk), {"content": "hello"}, format="json")

        assert resp.status_code == 401

    def test_service_rejects_blank_content(self, case):
        with pytest.raises(ValidationError):
            TipService.submit_tip(case.pk, "", Principal(user_id=case.reported_by_id, role="user"))

    def test_service_unknown_case(self, case):
        with pytest.raises(NotFound):
            TipService.submit_tip(424242, "hello", Principal(user_id=case.reported_by_id, role="user"))


@pytest.mark.django_db
class TestListTips:

    @pytest.mark.parametrize("role", ["admin", "police"])
    def test_admin_and_police_can_list(self, api_client, auth_header, case, role):
        Tip.objects.create(person=case, content="first")
        Tip.objects.create(person=case, content="second")
        api_client.credentials(HTTP_AUTHORIZATION=auth_header(role=role)["Authorization"])

        resp = api_client.get(_url(case.pk))

        assert resp.status_code == 200
        assert {t["content"] for t in resp.data} == {"first", "second"}

    @pytest.mark.parametrize("role", ["user", "volunteer"])
    def test_other_roles_cannot_list(self, api_client, auth_header, case, role):
        api_client.credentials(HTTP_AUTHORIZATION=auth_header(role=role)["Authorization"])

        resp = api_client.get(_url(case.pk))

        assert resp.status_code == 403

    def test_service_guard(self, case):
        with pytest.raises(PermissionDenied):
            TipService.list_tips(case.pk, Principal(user_id=1, role="volunteer"))
