"""Shared fixtures: one confirmed user per role, authenticated API clients,
and a small inventory (property type, property, contract) owned by `owner`.
"""
import pytest
from rest_framework.test import APIClient

from managers.models import Manager
from properties.models import PropertyType
from users.models import User

from .factories import client_for, make_contract, make_lessee, make_owner, make_property, make_user


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def manager(db):
    return Manager.objects.create(user=make_user(User.MANAGER))


@pytest.fixture
def owner(db):
    return make_owner()


@pytest.fixture
def other_owner(db):
    return make_owner()


@pytest.fixture
def lessee(db):
    return make_lessee()


@pytest.fixture
def manager_client(manager):
    return client_for(manager.user)


@pytest.fixture
def owner_client(owner):
    return client_for(owner.user)


@pytest.fixture
def lessee_client(lessee):
    return client_for(lessee.user)


@pytest.fixture
def property_type(db):
    return PropertyType.objects.create(name="Penthouse")


@pytest.fixture
def prop(owner, property_type):
    return make_property(owner, property_type)


@pytest.fixture
def contract(owner, lessee, prop):
    return make_contract(owner, lessee, prop)
