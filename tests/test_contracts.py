from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from contracts.models import Contract

from .factories import make_contract, make_lessee, make_property

pytestmark = pytest.mark.django_db


def contract_payload(owner, lessee, prop, **overrides):
    payload = {
        "owner_id": owner.pk,
        "lessee_id": lessee.pk,
        "property_id": prop.pk,
        "price": "1500.00",
        "remarks": "Furnished",
        "start_date": "2026-02-01T05:00:00Z",
        "end_date": "2027-02-01T05:00:00Z",
        "is_active": True,
    }
    payload.update(overrides)
    return payload


def test_manager_creates_contract(manager_client, owner, lessee, prop):
    resp = manager_client.post("/api/contracts/", contract_payload(owner, lessee, prop), format="json")

    assert resp.status_code == 201
    assert resp.data["price"] == "1500.00"
    assert resp.data["owner"]["id"] == owner.pk
    assert resp.data["lessee"]["user"]["email"] == lessee.user.email
    assert resp.data["property"]["id"] == prop.pk
    assert resp.data["start_date"] == "2026-02-01T05:00:00Z"
    # Bogota is UTC-5
    assert resp.data["start_date_local"].startswith("2026-02-01T00:00:00")


def test_legacy_property_type_id_carries_the_property(manager_client, owner, lessee, prop):
    body = contract_payload(owner, lessee, prop)
    body["property_type_id"] = body.pop("property_id")

    resp = manager_client.post("/api/contracts/", body, format="json")

    assert resp.status_code == 201
    assert Contract.objects.get(pk=resp.data["id"]).property_id == prop.pk


def test_missing_property(manager_client, owner, lessee, prop):
    body = contract_payload(owner, lessee, prop)
    del body["property_id"]

    resp = manager_client.post("/api/contracts/", body, format="json")

    assert resp.status_code == 400
    assert "property_id" in resp.data["errors"]


def test_end_before_start(manager_client, owner, lessee, prop):
    body = contract_payload(owner, lessee, prop, end_date="2025-01-01T00:00:00Z")

    resp = manager_client.post("/api/contracts/", body, format="json")

    assert resp.status_code == 400
    assert "end_date" in resp.data["errors"]


def test_property_of_another_owner(manager_client, other_owner, lessee, prop):
    resp = manager_client.post("/api/contracts/", contract_payload(other_owner, lessee, prop), format="json")

    assert resp.status_code == 400
    assert resp.data["message"] == "The property belongs to a different owner."


def test_unknown_lessee(manager_client, owner, lessee, prop):
    resp = manager_client.post(
        "/api/contracts/", contract_payload(owner, lessee, prop, lessee_id=999999), format="json"
    )

    assert resp.status_code == 400
    assert resp.data["message"] == "Not valid lessee."


def test_owner_cannot_create(owner_client, owner, lessee, prop):
    resp = owner_client.post("/api/contracts/", contract_payload(owner, lessee, prop), format="json")

    assert resp.status_code == 403


def test_scoping_by_role(owner_client, lessee_client, manager_client, contract, other_owner, property_type):
    stranger = make_lessee()
    foreign = make_contract(other_owner, stranger, make_property(other_owner, property_type))

    owner_ids = [c["id"] for c in owner_client.get("/api/contracts/").data]
    lessee_ids = [c["id"] for c in lessee_client.get("/api/contracts/").data]
    manager_ids = {c["id"] for c in manager_client.get("/api/contracts/").data}

    assert owner_ids == [contract.pk]
    assert lessee_ids == [contract.pk]
    assert manager_ids == {contract.pk, foreign.pk}


def test_update_and_patch(manager_client, owner, lessee, prop, contract):
    body = contract_payload(owner, lessee, prop, price="1750.00", is_active=False)

    put = manager_client.put(f"/api/contracts/{contract.pk}/", body, format="json")
    assert put.status_code == 200
    assert put.data["price"] == "1750.00"
    assert put.data["is_active"] is False

    patch = manager_client.patch(f"/api/contracts/{contract.pk}/", {"price": "10.00"}, format="json")
    assert patch.status_code == 400


def test_delete(manager_client, contract):
    resp = manager_client.delete(f"/api/contracts/{contract.pk}/")

    assert resp.status_code == 204
    assert not Contract.objects.filter(pk=contract.pk).exists()


def test_lessee_cannot_see_foreign_contract(lessee_client, other_owner, property_type):
    foreign = make_contract(other_owner, make_lessee(), make_property(other_owner, property_type))

    resp = lessee_client.get(f"/api/contracts/{foreign.pk}/")

    assert resp.status_code == 404


def test_filter_by_active(manager_client, owner, lessee, prop, contract):
    inactive = make_contract(owner, lessee, prop, is_active=False)

    resp = manager_client.get("/api/contracts/", {"is_active": "false"})

    assert [c["id"] for c in resp.data] == [inactive.pk]


def test_local_dates_use_project_time_zone(owner, lessee, prop):
    start = datetime(2026, 3, 1, 5, 0, tzinfo=dt_timezone.utc)
    contract = make_contract(owner, lessee, prop, start_date=start, end_date=start + timedelta(days=30))

    assert contract.start_date_local == start
    assert contract.start_date_local.hour == 0
    assert contract.start_date_local.utcoffset() == timedelta(hours=-5)
    assert contract.end_date_local.date().isoformat() == "2026-03-31"
