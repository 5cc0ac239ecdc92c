"""
Property, property image and property type operations.

The mobile endpoints, the owner web screens and the property web screens
all go through these functions.
"""
import base64
import binascii
import logging
import os
import uuid

from django.core.files.base import ContentFile
from django.db import transaction

from common.exceptions import BusinessRuleError, NotFoundError
from owners.models import Owner

from .models import Property, PropertyImage, PropertyType

logger = logging.getLogger(__name__)

PROPERTY_FIELDS = (
    "neighborhood",
    "address",
    "price",
    "square_meters",
    "rooms",
    "stratum",
    "has_parking_lot",
    "is_available",
    "remarks",
    "latitude",
    "longitude",
)


def get_property(property_id) -> Property:
    try:
        return Property.objects.select_related("owner__user", "property_type").get(pk=property_id)
    except Property.DoesNotExist:
        raise NotFoundError("Property not found.")


def _owner(owner_id) -> Owner:
    owner = Owner.objects.select_related("user").filter(pk=owner_id).first()
    if owner is None:
        raise BusinessRuleError("Not valid owner.")
    return owner


def _property_type(property_type_id) -> PropertyType:
    property_type = PropertyType.objects.filter(pk=property_type_id).first()
    if property_type is None:
        raise BusinessRuleError("Not valid property type.")
    return property_type


@transaction.atomic
def create_property(data: dict) -> Property:
    prop = Property(
        owner=_owner(data.get("owner_id")),
        property_type=_property_type(data.get("property_type_id")),
    )
    for field in PROPERTY_FIELDS:
        if field in data:
            setattr(prop, field, data[field])
    prop.save()
    logger.info("Created property %s for owner %s", prop.pk, prop.owner_id)
    return prop


@transaction.atomic
def update_property(prop: Property, data: dict) -> Property:
    """
    Copies the request fields onto the existing row. A property with contracts
    keeps its owner.
    """
    if data.get("owner_id") is not None and data["owner_id"] != prop.owner_id:
        if prop.contracts.exists():
            logger.warning("Refused to move property %s: it has contracts", prop.pk)
            raise BusinessRuleError("The owner of a property with contracts can't be changed.")
        prop.owner = _owner(data["owner_id"])
    if data.get("property_type_id") is not None:
        prop.property_type = _property_type(data["property_type_id"])
    for field in PROPERTY_FIELDS:
        if field in data:
            setattr(prop, field, data[field])
    prop.save()
    logger.info("Updated property %s", prop.pk)
    return prop


@transaction.atomic
def delete_property(prop: Property) -> None:
    if prop.contracts.exists():
        logger.warning("Refused to delete property %s: it has contracts", prop.pk)
        raise BusinessRuleError("The property can't be deleted because it has contracts.")
    for image in prop.property_images.all():
        _remove_image_file(image)
    pk = prop.pk
    prop.delete()
    logger.info("Deleted property %s", pk)


def available_properties():
    return (
        Property.objects.filter(is_available=True)
        .select_related("property_type", "owner__user")
        .prefetch_related("property_images", "contracts__lessee__user")
    )


def last_property_for_owner(owner_id) -> Property:
    if not Owner.objects.filter(pk=owner_id).exists():
        raise NotFoundError("Owner not found.")
    prop = (
        Property.objects.filter(owner_id=owner_id)
        .select_related("property_type", "owner__user")
        .prefetch_related("property_images", "contracts__lessee__user")
        .order_by("-id")
        .first()
    )
    if prop is None:
        raise NotFoundError("The owner has no properties.")
    return prop


# ---------- images ----------

def decode_image_array(raw: str) -> bytes:
    """Accepts plain base64 or a data URL (data:image/jpeg;base64,...)."""
    if "," in raw and raw.lstrip().startswith("data:"):
        raw = raw.split(",", 1)[1]
    try:
        return base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError):
        raise BusinessRuleError("The image is not valid base64 data.")


@transaction.atomic
def add_image(property_id, image_bytes: bytes | None = None, upload=None) -> PropertyImage:
    prop = get_property(property_id)
    image = PropertyImage(property=prop)
    if upload is not None:
        ext = os.path.splitext(upload.name)[1].lower() or ".jpg"
        image.image.save(f"{uuid.uuid4()}{ext}", upload, save=False)
    elif image_bytes:
        image.image.save(f"{uuid.uuid4()}.jpg", ContentFile(image_bytes), save=False)
    else:
        raise BusinessRuleError("An image is required.")
    image.save()
    logger.info("Added image %s to property %s", image.pk, prop.pk)
    return image


def _remove_image_file(image: PropertyImage) -> None:
    if image.image:
        image.image.delete(save=False)


@transaction.atomic
def delete_image(image_id) -> PropertyImage:
    image = PropertyImage.objects.select_related("property").filter(pk=image_id).first()
    if image is None:
        raise NotFoundError("Image not found.")
    _remove_image_file(image)
    image.delete()
    logger.info("Deleted image %s from property %s", image_id, image.property_id)
    return image


# ---------- property types ----------

def create_property_type(name: str) -> PropertyType:
    name = (name or "").strip()
    if PropertyType.objects.filter(name__iexact=name).exists():
        raise BusinessRuleError("There is already a property type with this name.")
    property_type = PropertyType.objects.create(name=name)
    logger.info("Created property type %s (%s)", property_type.pk, name)
    return property_type


def update_property_type(property_type_id, name: str) -> PropertyType:
    property_type = PropertyType.objects.filter(pk=property_type_id).first()
    if property_type is None:
        raise NotFoundError("Property type not found.")
    name = (name or "").strip()
    if PropertyType.objects.filter(name__iexact=name).exclude(pk=property_type.pk).exists():
        raise BusinessRuleError("There is already a property type with this name.")
    property_type.name = name
    property_type.save(update_fields=["name"])
    logger.info("Renamed property type %s to %s", property_type.pk, name)
    return property_type


def delete_property_type(property_type: PropertyType) -> None:
    if property_type.properties.exists():
        logger.warning("Refused to delete property type %s: in use", property_type.pk)
        raise BusinessRuleError("The property type can't be deleted because it has properties.")
    pk = property_type.pk
    property_type.delete()
    logger.info("Deleted property type %s", pk)
