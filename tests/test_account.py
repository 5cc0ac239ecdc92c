import pytest
from django.core import mail

from lessees.models import Lessee
from owners.models import Owner
from users.models import AccountToken, User

from .factories import PASSWORD, make_user

pytestmark = pytest.mark.django_db


def register_payload(**overrides):
    payload = {
        "email": "New.Person@Example.com",
        "document": "CC1020",
        "first_name": "Ana",
        "last_name": "Lopez",
        "address": "Cra 7 # 1-2",
        "phone": "3001234567",
        "password": "abc123",
        "role_id": 1,
    }
    payload.update(overrides)
    return payload


# ---------- registration ----------

def test_register_owner_creates_profile_and_sends_confirmation(api_client):
    resp = api_client.post("/api/account/", register_payload(), format="json")

    assert resp.status_code == 200
    assert resp.data["is_success"] is True
    user = User.objects.get(email="new.person@example.com")
    assert user.role == User.OWNER
    assert user.email_confirmed is False
    assert Owner.objects.filter(user=user).exists()
    assert AccountToken.objects.filter(user=user, purpose=AccountToken.CONFIRM_EMAIL).count() == 1
    assert len(mail.outbox) == 1
    assert mail.outbox[0].to == ["new.person@example.com"]


def test_register_role_two_creates_lessee(api_client):
    resp = api_client.post("/api/account/", register_payload(role_id=2), format="json")

    assert resp.status_code == 200
    user = User.objects.get(email="new.person@example.com")
    assert user.role == User.LESSEE
    assert Lessee.objects.filter(user=user).exists()
    assert not Owner.objects.filter(user=user).exists()


def test_register_rejects_duplicate_email(api_client):
    make_user(User.OWNER, email="taken@example.com")

    resp = api_client.post("/api/account/", register_payload(email="TAKEN@example.com"), format="json")

    assert resp.status_code == 400
    assert resp.data["is_success"] is False
    assert resp.data["message"] == "This email is already registered."


def test_register_rejects_short_password(api_client):
    resp = api_client.post("/api/account/", register_payload(password="abc"), format="json")

    assert resp.status_code == 400
    assert "password" in resp.data["errors"]


def test_register_web_reports_duplicate_in_envelope(api_client):
    make_user(User.OWNER, email="taken@example.com")

    resp = api_client.post("/api/account/register-web/", register_payload(email="taken@example.com"), format="json")

    assert resp.status_code == 200
    assert resp.data["is_success"] is False
    assert resp.data["message"] == "This email is already registered."


def test_register_web_validation_error_in_envelope(api_client):
    resp = api_client.post("/api/account/register-web/", register_payload(password="abc"), format="json")

    assert resp.status_code == 200
    assert resp.data["is_success"] is False
    assert resp.data["message"].startswith("password:")


def test_register_web_uses_same_role_ids(api_client):
    resp = api_client.post("/api/account/register-web/", register_payload(role_id=1), format="json")

    assert resp.data["is_success"] is True
    assert User.objects.get(email="new.person@example.com").role == User.OWNER


def test_roles_list_is_public(api_client):
    resp = api_client.get("/api/account/roles/")

    assert resp.status_code == 200
    assert resp.data == [{"id": 1, "name": "Owner"}, {"id": 2, "name": "Lessee"}]


# ---------- confirmation + login ----------

def test_login_blocked_until_email_confirmed(api_client):
    api_client.post("/api/account/", register_payload(), format="json")

    resp = api_client.post(
        "/api/account/token/", {"email": "new.person@example.com", "password": "abc123"}, format="json"
    )

    assert resp.status_code == 401


def test_confirm_email_then_login_returns_token_claims(api_client):
    api_client.post("/api/account/", register_payload(), format="json")
    user = User.objects.get(email="new.person@example.com")
    token = AccountToken.objects.get(user=user, purpose=AccountToken.CONFIRM_EMAIL)

    confirm = api_client.post(
        "/api/account/confirm-email/", {"user_id": user.pk, "token": token.token}, format="json"
    )
    assert confirm.status_code == 200

    resp = api_client.post(
        "/api/account/token/", {"email": "new.person@example.com", "password": "abc123"}, format="json"
    )
    assert resp.status_code == 200
    assert resp.data["token"] == resp.data["access"]
    assert resp.data["refresh"]
    assert resp.data["user_id"] == user.pk
    assert resp.data["role"] == User.OWNER
    assert resp.data["role_id"] == 1
    assert resp.data["expiration"]


def test_confirm_token_is_single_use(api_client):
    api_client.post("/api/account/", register_payload(), format="json")
    user = User.objects.get(email="new.person@example.com")
    token = AccountToken.objects.get(user=user, purpose=AccountToken.CONFIRM_EMAIL)
    body = {"user_id": user.pk, "token": token.token}

    api_client.post("/api/account/confirm-email/", body, format="json")
    again = api_client.post("/api/account/confirm-email/", body, format="json")

    assert again.status_code == 400
    assert again.data["message"] == "Invalid token."


def test_login_accepts_username_key(api_client):
    user = make_user(User.LESSEE)

    resp = api_client.post(
        "/api/account/token/", {"username": user.email, "password": PASSWORD}, format="json"
    )

    assert resp.status_code == 200
    assert resp.data["role_id"] == 2


def test_login_wrong_password(api_client):
    user = make_user(User.OWNER)

    resp = api_client.post("/api/account/token/", {"email": user.email, "password": "nope123"}, format="json")

    assert resp.status_code == 401


def test_bearer_token_authenticates_requests(api_client):
    user = make_user(User.OWNER)
    login = api_client.post("/api/account/token/", {"email": user.email, "password": PASSWORD}, format="json")

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
    resp = api_client.get("/api/account/me/")

    assert resp.status_code == 200
    assert resp.data["email"] == user.email


# ---------- password recovery ----------

def test_recover_password_unknown_email(api_client):
    resp = api_client.post("/api/account/recover-password/", {"email": "ghost@example.com"}, format="json")

    assert resp.status_code == 400
    assert resp.data["message"] == "This email is not assigned to any user."


def test_recover_then_reset_password(api_client):
    user = make_user(User.OWNER)

    resp = api_client.post("/api/account/recover-password/", {"email": user.email}, format="json")
    assert resp.status_code == 200
    assert len(mail.outbox) == 1

    token = AccountToken.objects.get(user=user, purpose=AccountToken.RESET_PASSWORD)
    assert token.token in mail.outbox[0].body

    reset = api_client.post(
        "/api/account/reset-password/", {"token": token.token, "password": "fresh99"}, format="json"
    )
    assert reset.status_code == 200
    user.refresh_from_db()
    assert user.check_password("fresh99")


def test_recover_password_web_unknown_email_is_200(api_client):
    resp = api_client.post("/api/account/recover-password-web/", {"email": "ghost@example.com"}, format="json")

    assert resp.status_code == 200
    assert resp.data["is_success"] is False


def test_expired_reset_token_is_refused(api_client):
    user = make_user(User.OWNER)
    token = AccountToken.issue(user, AccountToken.RESET_PASSWORD, ttl_minutes=-1)

    resp = api_client.post(
        "/api/account/reset-password/", {"token": token.token, "password": "fresh99"}, format="json"
    )

    assert resp.status_code == 400
    assert resp.data["message"] == "Token expired."


# ---------- change password / profile ----------

def test_change_password(owner, owner_client):
    resp = owner_client.post(
        "/api/account/change-password/",
        {"email": owner.user.email, "old_password": PASSWORD, "new_password": "other123"},
        format="json",
    )

    assert resp.status_code == 200
    assert resp.data["message"] == "The password was changed successfully!"
    owner.user.refresh_from_db()
    assert owner.user.check_password("other123")


def test_change_password_wrong_current(owner, owner_client):
    resp = owner_client.post(
        "/api/account/change-password/",
        {"email": owner.user.email, "old_password": "wrong12", "new_password": "other123"},
        format="json",
    )

    assert resp.status_code == 400


def test_change_password_requires_auth(api_client, owner):
    resp = api_client.post(
        "/api/account/change-password/",
        {"email": owner.user.email, "old_password": PASSWORD, "new_password": "other123"},
        format="json",
    )

    assert resp.status_code == 401


def test_change_password_web_for_someone_else(owner_client, other_owner):
    resp = owner_client.post(
        "/api/account/change-password-web/",
        {"email": other_owner.user.email, "old_password": PASSWORD, "new_password": "other123"},
        format="json",
    )

    assert resp.status_code == 200
    assert resp.data["is_success"] is False


def test_put_account_updates_own_profile(owner, owner_client):
    resp = owner_client.put(
        "/api/account/",
        {
            "email": owner.user.email,
            "document": "NEWDOC",
            "first_name": "Maria",
            "last_name": "Gomez",
            "address": "Av 1",
            "phone": "555",
        },
        format="json",
    )

    assert resp.status_code == 200
    assert resp.data["full_name"] == "Maria Gomez"
    assert resp.data["full_name_with_document"] == "Maria Gomez - NEWDOC"
    assert resp.data["phone"] == "555"


def test_put_account_for_other_user_is_forbidden(owner_client, other_owner):
    resp = owner_client.put(
        "/api/account/",
        {
            "email": other_owner.user.email,
            "document": "X",
            "first_name": "X",
            "last_name": "Y",
        },
        format="json",
    )

    assert resp.status_code == 403


def test_change_user_web_unknown_user(manager_client):
    resp = manager_client.post(
        "/api/account/change-user-web/",
        {"id": 999999, "email": "a@b.com", "document": "1", "first_name": "A", "last_name": "B"},
        format="json",
    )

    assert resp.status_code == 200
    assert resp.data["is_success"] is False
    assert resp.data["message"] == "User not found."


def test_change_user_web_by_manager(manager_client, owner):
    resp = manager_client.post(
        "/api/account/change-user-web/",
        {
            "id": owner.user.pk,
            "email": owner.user.email,
            "document": "99",
            "first_name": "Renamed",
            "last_name": "Owner",
        },
        format="json",
    )

    assert resp.data["is_success"] is True
    owner.user.refresh_from_db()
    assert owner.user.first_name == "Renamed"
