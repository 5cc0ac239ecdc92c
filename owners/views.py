from django.db.models import Prefetch
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from common.exceptions import NotFoundError
from common.responses import ok, web_action
from contracts.mixins import CONTRACT_ACTION_OPS, ContractWebMixin
from contracts.models import Contract
from lessees.models import Lessee
from properties import services as property_services
from properties.models import Property
from properties.serializers import (
    ImageRequestSerializer,
    PropertyImageSerializer,
    PropertyRequestSerializer,
    PropertyResponseSerializer,
)
from users.models import User
from users.permissions_matrix_guard import RoleActionPermission
from users.profiles import PROFILE_ACTION_OPS, ProfileViewSetMixin
from users.scoping import can_act_for
from users.serializers import EmailRequestSerializer

from . import services
from .models import Owner
from .serializers import (
    MobileLesseeSerializer,
    MobileOwnerSerializer,
    MobilePropertySerializer,
    OwnerDetailSerializer,
)

PermOwners = RoleActionPermission.for_module("owners")

CONTRACTS_QS = Contract.objects.select_related("owner__user", "lessee__user")
PROPERTIES_QS = (
    Property.objects.select_related("property_type", "owner__user")
    .prefetch_related("property_images", Prefetch("contracts", queryset=CONTRACTS_QS))
)


class OwnerViewSet(ContractWebMixin, ProfileViewSetMixin, viewsets.ModelViewSet):
    """
    Owners: REST CRUD, the mobile lookups, and the web owner screens
    (owner profile, its properties, images and contracts).
    """
    role = User.OWNER
    profile_model = Owner
    serializer_class = OwnerDetailSerializer
    permission_classes = [IsAuthenticated, PermOwners]

    action_ops = {
        **PROFILE_ACTION_OPS,
        **CONTRACT_ACTION_OPS,
        "add_property_web": "manage_properties",
        "update_property_web": "manage_properties",
        "details_property_web": "list",
        "delete_property_web": "manage_properties",
        "add_image_web": "manage_properties",
        "delete_image_web": "manage_properties",
    }

    def get_queryset(self):
        return (
            Owner.objects.select_related("user")
            .prefetch_related(
                Prefetch("properties", queryset=PROPERTIES_QS),
                Prefetch("contracts", queryset=CONTRACTS_QS),
            )
            .order_by(*self.ordering)
        )

    def delete_profile(self, profile):
        services.delete_owner(profile)

    # ---------- Mobile ----------

    @action(
        detail=False,
        methods=["post"],
        url_path="get-by-email",
        permission_classes=[IsAuthenticated, PermOwners.action("by_email")],
    )
    def get_by_email(self, request):
        """
        Owner → role_id 1 with its properties and contracts.
        Lessee → role_id 2 with every available property and its contracts.
        """
        ser = EmailRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        user = User.objects.filter(email__iexact=ser.validated_data["email"]).first()
        if user is None:
            raise NotFoundError("User not found.")
        if not can_act_for(request.user, user):
            raise PermissionDenied("You can only look up your own account.")

        ctx = self.get_serializer_context()
        owner = self.get_queryset().filter(user=user).first()
        if owner is not None:
            return Response(MobileOwnerSerializer(owner, context=ctx).data)

        lessee = (
            Lessee.objects.select_related("user")
            .prefetch_related(Prefetch("contracts", queryset=CONTRACTS_QS))
            .filter(user=user)
            .first()
        )
        if lessee is not None:
            ctx["available_properties"] = property_services.available_properties()
            return Response(MobileLesseeSerializer(lessee, context=ctx).data)

        raise NotFoundError("User not found.")

    @action(
        detail=False,
        methods=["get"],
        url_path="available-properties",
        permission_classes=[IsAuthenticated, PermOwners.action("available_properties")],
    )
    def available_properties(self, request):
        qs = property_services.available_properties()
        return Response(MobilePropertySerializer(qs, many=True, context=self.get_serializer_context()).data)

    # ---------- Web: properties of an owner ----------

    def _property_data(self, prop_id):
        prop = PROPERTIES_QS.filter(pk=prop_id).first()
        if prop is None:
            raise NotFoundError("Property not found.")
        return PropertyResponseSerializer(prop, context=self.get_serializer_context()).data

    @action(detail=False, methods=["post"], url_path="add-property-web")
    @web_action
    def add_property_web(self, request):
        ser = PropertyRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        prop = property_services.create_property(ser.validated_data)
        return ok(self._property_data(prop.pk), "Property created.")

    @action(detail=False, methods=["post"], url_path="update-property-web")
    @web_action
    def update_property_web(self, request):
        ser = PropertyRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        prop = property_services.get_property(ser.validated_data.get("id"))
        property_services.update_property(prop, ser.validated_data)
        return ok(self._property_data(prop.pk), "Property updated.")

    @action(detail=False, methods=["get"], url_path=r"details-property-web/(?P<property_id>\d+)")
    @web_action
    def details_property_web(self, request, property_id=None):
        return ok(self._property_data(property_id))

    @action(detail=False, methods=["get", "delete"], url_path=r"delete-property-web/(?P<property_id>\d+)")
    @web_action
    def delete_property_web(self, request, property_id=None):
        property_services.delete_property(property_services.get_property(property_id))
        return ok(message="Property deleted.")

    @action(detail=False, methods=["post"], url_path="add-image-web")
    @web_action
    def add_image_web(self, request):
        ser = ImageRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        image = property_services.add_image(
            ser.validated_data["property_id"],
            image_bytes=ser.validated_data.get("image_bytes"),
            upload=ser.validated_data.get("image_file"),
        )
        return ok(PropertyImageSerializer(image, context=self.get_serializer_context()).data, "Image added.")

    @action(detail=False, methods=["get", "delete"], url_path=r"delete-image-web/(?P<image_id>\d+)")
    @web_action
    def delete_image_web(self, request, image_id=None):
        image = property_services.delete_image(image_id)
        return ok({"id": int(image_id), "property_id": image.property_id}, "Image deleted.")
