import pytest
from django.core import mail

from managers.models import Manager
from users.models import User

pytestmark = pytest.mark.django_db


def test_manager_creates_manager_who_must_confirm(manager_client):
    resp = manager_client.post(
        "/api/managers/",
        {
            "email": "boss@example.com",
            "document": "M-1",
            "first_name": "Marta",
            "last_name": "Soto",
            "password": "abc123",
        },
        format="json",
    )

    assert resp.status_code == 201
    created = Manager.objects.get(pk=resp.data["id"])
    assert created.user.role == User.MANAGER
    assert created.user.email_confirmed is False
    assert mail.outbox[0].to == ["boss@example.com"]


def test_owner_cannot_reach_managers(owner_client):
    assert owner_client.get("/api/managers/").status_code == 403


def test_list_web(manager_client, manager):
    resp = manager_client.get("/api/managers/list-web/0/10/")

    assert resp.data["is_success"] is True
    assert resp.data["total"] == 1
    assert resp.data["result"][0]["user"]["email"] == manager.user.email


def test_delete_web_removes_user(manager_client):
    other = Manager.objects.create(
        user=User.objects.create_user(
            email="other.boss@example.com", password="abc123",
            first_name="O", last_name="B", document="X", role=User.MANAGER,
        )
    )

    resp = manager_client.get(f"/api/managers/delete-web/{other.pk}/")

    assert resp.data["is_success"] is True
    assert not User.objects.filter(email="other.boss@example.com").exists()


def test_superuser_bypasses_role_matrix(api_client):
    admin = User.objects.create_superuser(
        email="root@example.com", password="abc123", first_name="R", last_name="T", document="0",
        role=User.OWNER,
    )
    api_client.force_authenticate(user=admin)

    assert api_client.get("/api/managers/").status_code == 200
