import pytest

from owners.models import Owner
from properties.models import Property
from users.models import User

from .factories import make_property

pytestmark = pytest.mark.django_db


def owner_payload(**overrides):
    payload = {
        "email": "owner.new@example.com",
        "document": "OWN-1",
        "first_name": "Olga",
        "last_name": "Ruiz",
        "address": "Calle 1",
        "phone": "311",
        "password": "abc123",
    }
    payload.update(overrides)
    return payload


# ---------- REST ----------

def test_manager_lists_owners(manager_client, owner, other_owner):
    resp = manager_client.get("/api/owners/")

    assert resp.status_code == 200
    ids = {row["id"] for row in resp.data}
    assert {owner.pk, other_owner.pk} <= ids


def test_owner_cannot_list_owners(owner_client):
    resp = owner_client.get("/api/owners/")

    assert resp.status_code == 403
    assert resp.data["is_success"] is False


def test_owner_detail_nests_properties_and_contracts(manager_client, owner, contract):
    resp = manager_client.get(f"/api/owners/{owner.pk}/")

    assert resp.status_code == 200
    assert resp.data["user"]["email"] == owner.user.email
    assert [p["id"] for p in resp.data["properties"]] == [contract.property_id]
    assert resp.data["properties"][0]["property_type"]["name"] == "Penthouse"
    assert [c["id"] for c in resp.data["contracts"]] == [contract.pk]
    assert resp.data["contracts"][0]["lessee"]["id"] == contract.lessee_id


def test_manager_creates_owner(manager_client):
    resp = manager_client.post("/api/owners/", owner_payload(), format="json")

    assert resp.status_code == 201
    owner = Owner.objects.get(pk=resp.data["id"])
    assert owner.user.role == User.OWNER
    assert owner.user.email == "owner.new@example.com"
    assert resp.data["properties"] == []


def test_manager_updates_owner(manager_client, owner):
    resp = manager_client.put(
        f"/api/owners/{owner.pk}/",
        {"email": owner.user.email, "document": "D-2", "first_name": "New", "last_name": "Name"},
        format="json",
    )

    assert resp.status_code == 200
    assert resp.data["user"]["full_name"] == "New Name"


def test_delete_owner_without_properties(manager_client, other_owner):
    user_pk = other_owner.user.pk

    resp = manager_client.delete(f"/api/owners/{other_owner.pk}/")

    assert resp.status_code == 204
    assert not Owner.objects.filter(pk=other_owner.pk).exists()
    assert not User.objects.filter(pk=user_pk).exists()


def test_delete_owner_with_properties_is_refused(manager_client, owner, prop):
    resp = manager_client.delete(f"/api/owners/{owner.pk}/")

    assert resp.status_code == 400
    assert resp.data["message"] == "The owner can't be deleted because it has properties."
    assert Owner.objects.filter(pk=owner.pk).exists()


def test_unknown_owner_is_404(manager_client):
    resp = manager_client.get("/api/owners/999999/")

    assert resp.status_code == 404


# ---------- mobile ----------

def test_get_by_email_owner_shape(owner_client, owner, contract):
    resp = owner_client.post("/api/owners/get-by-email/", {"email": owner.user.email}, format="json")

    assert resp.status_code == 200
    assert resp.data["role_id"] == 1
    assert resp.data["first_name"] == owner.user.first_name
    assert resp.data["full_name"] == owner.user.full_name
    prop = resp.data["properties"][0]
    assert prop["property_type"] == "Penthouse"
    assert prop["first_image"] == "http://testserver/static/images/noImage.png"
    assert prop["contracts"][0]["lessee"]["email"] == contract.lessee.user.email


def test_get_by_email_lessee_sees_available_catalogue(lessee_client, lessee, owner, property_type):
    available = make_property(owner, property_type)
    make_property(owner, property_type, is_available=False)

    resp = lessee_client.post("/api/owners/get-by-email/", {"email": lessee.user.email}, format="json")

    assert resp.status_code == 200
    assert resp.data["role_id"] == 2
    assert [p["id"] for p in resp.data["properties"]] == [available.pk]


def test_get_by_email_someone_else_is_forbidden(owner_client, other_owner):
    resp = owner_client.post("/api/owners/get-by-email/", {"email": other_owner.user.email}, format="json")

    assert resp.status_code == 403


def test_get_by_email_unknown(manager_client):
    resp = manager_client.post("/api/owners/get-by-email/", {"email": "nobody@example.com"}, format="json")

    assert resp.status_code == 404
    assert resp.data["message"] == "User not found."


def test_available_properties_for_lessee(lessee_client, owner, property_type):
    shown = make_property(owner, property_type)
    make_property(owner, property_type, is_available=False)

    resp = lessee_client.get("/api/owners/available-properties/")

    assert resp.status_code == 200
    assert [p["id"] for p in resp.data] == [shown.pk]


# ---------- web ----------

def test_list_web_pages_and_totals(manager_client, owner, other_owner):
    resp = manager_client.get("/api/owners/list-web/0/1/")

    assert resp.status_code == 200
    assert resp.data["is_success"] is True
    assert resp.data["total"] == 2
    assert len(resp.data["result"]) == 1


def test_all_web_envelope(manager_client, owner):
    resp = manager_client.get("/api/owners/all-web/")

    assert resp.data["is_success"] is True
    assert resp.data["total"] == 1
    assert resp.data["result"][0]["id"] == owner.pk


def test_details_web_missing_owner_is_200(manager_client):
    resp = manager_client.get("/api/owners/details-web/999999/")

    assert resp.status_code == 200
    assert resp.data["is_success"] is False
    assert resp.data["message"] == "Owner not found."


def test_create_web_duplicate_email(manager_client, owner):
    resp = manager_client.post("/api/owners/create-web/", owner_payload(email=owner.user.email), format="json")

    assert resp.status_code == 200
    assert resp.data["is_success"] is False
    assert resp.data["message"] == "This email is already registered."


def test_create_web_validation_message(manager_client):
    resp = manager_client.post("/api/owners/create-web/", owner_payload(email="not-an-email"), format="json")

    assert resp.status_code == 200
    assert resp.data["is_success"] is False
    assert resp.data["message"].startswith("email:")


def test_edit_web(manager_client, owner):
    resp = manager_client.post(
        "/api/owners/edit-web/",
        {"id": owner.pk, "email": owner.user.email, "document": "E-1", "first_name": "Eva", "last_name": "Diaz"},
        format="json",
    )

    assert resp.data["is_success"] is True
    assert resp.data["result"]["user"]["full_name_with_document"] == "Eva Diaz - E-1"


def test_delete_web_refused_with_properties(manager_client, owner, prop):
    resp = manager_client.delete(f"/api/owners/delete-web/{owner.pk}/")

    assert resp.status_code == 200
    assert resp.data["is_success"] is False
    assert "properties" in resp.data["message"]


def test_delete_web_via_get(manager_client, other_owner):
    resp = manager_client.get(f"/api/owners/delete-web/{other_owner.pk}/")

    assert resp.data["is_success"] is True
    assert not Owner.objects.filter(pk=other_owner.pk).exists()


def test_web_actions_forbidden_for_lessee(lessee_client):
    resp = lessee_client.get("/api/owners/all-web/")

    assert resp.status_code == 403


def test_add_and_update_property_web(manager_client, owner, property_type):
    body = {
        "owner_id": owner.pk,
        "property_type_id": property_type.pk,
        "neighborhood": "Laureles",
        "address": "Cra 70 # 1-1",
        "price": "950.50",
        "square_meters": 60,
        "rooms": 2,
        "stratum": 3,
    }
    created = manager_client.post("/api/owners/add-property-web/", body, format="json")

    assert created.data["is_success"] is True
    prop_id = created.data["result"]["id"]
    assert created.data["result"]["owner"]["id"] == owner.pk

    body.update(id=prop_id, rooms=4)
    updated = manager_client.post("/api/owners/update-property-web/", body, format="json")

    assert updated.data["is_success"] is True
    assert Property.objects.get(pk=prop_id).rooms == 4


def test_add_property_web_bad_type(manager_client, owner):
    resp = manager_client.post(
        "/api/owners/add-property-web/",
        {
            "owner_id": owner.pk,
            "property_type_id": 999999,
            "neighborhood": "N",
            "address": "A",
            "price": "1",
            "square_meters": 1,
            "rooms": 1,
            "stratum": 1,
        },
        format="json",
    )

    assert resp.data["is_success"] is False
    assert resp.data["message"] == "Not valid property type."


def test_delete_property_web_refused_with_contracts(manager_client, contract):
    resp = manager_client.get(f"/api/owners/delete-property-web/{contract.property_id}/")

    assert resp.data["is_success"] is False
    assert Property.objects.filter(pk=contract.property_id).exists()


def test_details_property_web(manager_client, prop):
    resp = manager_client.get(f"/api/owners/details-property-web/{prop.pk}/")

    assert resp.data["is_success"] is True
    assert resp.data["result"]["price"] == "1200.00"


def test_image_web_add_then_delete(manager_client, prop):
    added = manager_client.post(
        "/api/owners/add-image-web/",
        {"property_id": prop.pk, "image_array": "ZmFrZS1qcGVnLWJ5dGVz"},
        format="json",
    )

    assert added.data["is_success"] is True
    image_id = added.data["result"]["id"]
    assert added.data["result"]["image_url"].startswith("/media/properties/")

    removed = manager_client.get(f"/api/owners/delete-image-web/{image_id}/")

    assert removed.data["is_success"] is True
    assert removed.data["result"] == {"id": image_id, "property_id": prop.pk}
    assert not prop.property_images.exists()


def test_contract_web_through_owner(manager_client, owner, lessee, prop):
    body = {
        "owner_id": owner.pk,
        "lessee_id": lessee.pk,
        "property_id": prop.pk,
        "price": "1000.00",
        "remarks": "",
        "start_date": "2026-01-01T00:00:00Z",
        "end_date": "2027-01-01T00:00:00Z",
    }
    created = manager_client.post("/api/owners/add-contract-web/", body, format="json")

    assert created.data["is_success"] is True
    contract_id = created.data["result"]["id"]
    assert created.data["result"]["property"]["id"] == prop.pk

    flat = manager_client.get(f"/api/owners/contract-web/{contract_id}/")
    assert flat.data["result"]["lessee_id"] == lessee.pk

    deleted = manager_client.get(f"/api/owners/delete-contract-web/{contract_id}/")
    assert deleted.data["is_success"] is True
    assert not owner.contracts.exists()



def test_update_property_web_keeps_owner_of_contracted_property(manager_client, other_owner, contract):
    prop = contract.property
    body = {
        "id": prop.pk,
        "owner_id": other_owner.pk,
        "property_type_id": prop.property_type_id,
        "neighborhood": prop.neighborhood,
        "address": prop.address,
        "price": "1200.00",
        "square_meters": 80,
        "rooms": 3,
        "stratum": 4,
    }

    resp = manager_client.post("/api/owners/update-property-web/", body, format="json")

    assert resp.status_code == 200
    assert resp.data["is_success"] is False
    assert Property.objects.get(pk=prop.pk).owner_id == contract.owner_id
