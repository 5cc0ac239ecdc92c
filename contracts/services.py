"""
Contract create/update/delete. The owner and lessee web screens and the
REST contract endpoint share these functions.
"""
import logging

from django.db import transaction

from common.exceptions import BusinessRuleError, NotFoundError
from lessees.models import Lessee
from owners.models import Owner
from properties.models import Property

from .models import Contract

logger = logging.getLogger(__name__)


def get_contract(contract_id) -> Contract:
    contract = (
        Contract.objects.select_related(
            "owner__user", "lessee__user", "property__property_type"
        )
        .prefetch_related("property__property_images")
        .filter(pk=contract_id)
        .first()
    )
    if contract is None:
        raise NotFoundError("Contract not found.")
    return contract


def _resolve_relateds(data: dict):
    owner = Owner.objects.filter(pk=data.get("owner_id")).first()
    if owner is None:
        raise BusinessRuleError("Not valid owner.")
    lessee = Lessee.objects.filter(pk=data.get("lessee_id")).first()
    if lessee is None:
        raise BusinessRuleError("Not valid lessee.")
    prop = Property.objects.filter(pk=data.get("property_id")).first()
    if prop is None:
        raise BusinessRuleError("Not valid property.")
    if prop.owner_id != owner.pk:
        raise BusinessRuleError("The property belongs to a different owner.")
    return owner, lessee, prop


def _copy_fields(contract: Contract, data: dict) -> None:
    contract.price = data["price"]
    contract.remarks = data.get("remarks", "")
    contract.start_date = data["start_date"]
    contract.end_date = data["end_date"]
    contract.is_active = data.get("is_active", True)


@transaction.atomic
def create_contract(data: dict) -> Contract:
    owner, lessee, prop = _resolve_relateds(data)
    contract = Contract(owner=owner, lessee=lessee, property=prop)
    _copy_fields(contract, data)
    contract.save()
    logger.info("Created contract %s (property %s, lessee %s)", contract.pk, prop.pk, lessee.pk)
    return contract


@transaction.atomic
def update_contract(contract: Contract, data: dict) -> Contract:
    contract.owner, contract.lessee, contract.property = _resolve_relateds(data)
    _copy_fields(contract, data)
    contract.save()
    logger.info("Updated contract %s", contract.pk)
    return contract


def delete_contract(contract: Contract) -> None:
    pk = contract.pk
    contract.delete()
    logger.info("Deleted contract %s", pk)
