from django.db.models import Prefetch
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from common.exceptions import BusinessRuleError, NotFoundError
from common.responses import ok, page, web_action
from contracts.models import Contract
from owners.serializers import MobilePropertySerializer
from users.models import User
from users.permissions_matrix_guard import RoleActionPermission
from users.scoping import is_manager

from . import services
from .models import Property, PropertyImage, PropertyType
from .serializers import (
    ImageIdRequestSerializer,
    ImageRequestSerializer,
    PropertyImageSerializer,
    PropertyRequestSerializer,
    PropertyResponseSerializer,
    PropertySummarySerializer,
    PropertyTypeSerializer,
)


PermProps = RoleActionPermission.for_module("properties")
PermPropertyTypes = RoleActionPermission.for_module("property_types")


def scope_properties(user, qs):
    """Managers see everything, owners their own, lessees the available catalogue."""
    if is_manager(user):
        return qs
    if getattr(user, "role", None) == User.OWNER:
        return qs.filter(owner__user=user)
    return qs.filter(is_available=True)


class PropertyViewSet(viewsets.ModelViewSet):
    serializer_class = PropertyResponseSerializer
    permission_classes = [IsAuthenticated, PermProps]

    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ["owner", "property_type", "is_available", "has_parking_lot", "rooms", "stratum"]
    search_fields = ["neighborhood", "address", "remarks", "property_type__name"]
    ordering_fields = ["id", "price", "square_meters", "rooms", "created_at"]
    ordering = ["-id"]

    action_ops = {
        "add_image": "images",
        "delete_image": "images",
        "last_by_owner": "list",
        "properties_web": "list",
        "details_property_web": "list",
    }

    def get_queryset(self):
        contracts = Contract.objects.select_related("owner__user", "lessee__user")
        qs = (
            Property.objects.select_related("owner__user", "property_type")
            .prefetch_related("property_images", Prefetch("contracts", queryset=contracts))
        )
        return scope_properties(self.request.user, qs).order_by(*self.ordering)

    # ---------- helpers ----------
    def _check_owner(self, owner_id):
        """Owners may only place properties under their own profile."""
        user = self.request.user
        if is_manager(user):
            return
        owner = getattr(user, "owner", None)
        if owner is None or owner.pk != owner_id:
            raise PermissionDenied("You cannot manage properties of another owner.")

    def _scoped_property(self, property_id) -> Property:
        prop = self.get_queryset().filter(pk=property_id).first()
        if prop is None:
            raise NotFoundError("Property not found.")
        return prop

    # ---------- mobile / REST ----------
    def create(self, request, *args, **kwargs):
        ser = PropertyRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        self._check_owner(ser.validated_data["owner_id"])
        services.create_property(ser.validated_data)
        return Response(True, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        body_id = request.data.get("id")
        if body_id is not None and str(body_id) != str(kwargs.get("pk")):
            raise BusinessRuleError("The property id does not match the route.")
        prop = self.get_object()
        ser = PropertyRequestSerializer(data=request.data, partial=kwargs.pop("partial", False))
        ser.is_valid(raise_exception=True)
        if "owner_id" in ser.validated_data:
            self._check_owner(ser.validated_data["owner_id"])
        services.update_property(prop, ser.validated_data)
        return Response(True)

    def destroy(self, request, *args, **kwargs):
        services.delete_property(self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["post"], url_path="add-image")
    def add_image(self, request):
        ser = ImageRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        prop = self._scoped_property(ser.validated_data["property_id"])
        self._check_owner(prop.owner_id)
        image = services.add_image(
            prop.pk,
            image_bytes=ser.validated_data.get("image_bytes"),
            upload=ser.validated_data.get("image_file"),
        )
        return Response(PropertyImageSerializer(image, context=self.get_serializer_context()).data,
                        status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"], url_path="delete-image")
    def delete_image(self, request):
        ser = ImageIdRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        image = PropertyImage.objects.select_related("property").filter(pk=ser.validated_data["id"]).first()
        if image is None:
            raise NotFoundError("Image not found.")
        self._check_owner(image.property.owner_id)
        data = PropertyImageSerializer(image, context=self.get_serializer_context()).data
        services.delete_image(image.pk)
        return Response(data)

    @action(detail=False, methods=["get"], url_path=r"last-by-owner/(?P<owner_id>\d+)")
    def last_by_owner(self, request, owner_id=None):
        self._check_owner(int(owner_id))
        prop = services.last_property_for_owner(owner_id)
        return Response(MobilePropertySerializer(prop, context=self.get_serializer_context()).data)

    # ---------- Web (SPA) ----------
    # The public catalogue: no bearer token needed
    @action(detail=False, methods=["get"], url_path=r"list-properties-web/(?P<index>\d+)/(?P<count>\d+)",
            permission_classes=[AllowAny])
    @web_action
    def list_properties_web(self, request, index=None, count=None):
        qs = (
            Property.objects.filter(is_available=True)
            .select_related("property_type")
            .prefetch_related("property_images")
            .order_by("-id")
        )
        rows, total = page(qs, index, count)
        return ok(PropertySummarySerializer(rows, many=True, context=self.get_serializer_context()).data, total=total)

    @action(detail=False, methods=["get"], url_path=r"property-web/(?P<property_id>\d+)",
            permission_classes=[AllowAny])
    @web_action
    def property_web(self, request, property_id=None):
        prop = self._scoped_property(property_id)
        return ok(PropertySummarySerializer(prop, context=self.get_serializer_context()).data)

    @action(detail=False, methods=["get"], url_path=r"properties-web/(?P<index>\d+)/(?P<count>\d+)")
    @web_action
    def properties_web(self, request, index=None, count=None):
        rows, total = page(self.filter_queryset(self.get_queryset()), index, count)
        return ok(self.get_serializer(rows, many=True).data, total=total)

    @action(detail=False, methods=["get"], url_path=r"details-property-web/(?P<property_id>\d+)")
    @web_action
    def details_property_web(self, request, property_id=None):
        return ok(self.get_serializer(self._scoped_property(property_id)).data)


class PropertyTypeViewSet(viewsets.ModelViewSet):
    """Property types, ordered by name. A type in use can't be deleted."""
    serializer_class = PropertyTypeSerializer
    permission_classes = [IsAuthenticated, PermPropertyTypes]
    queryset = PropertyType.objects.all().order_by("name")

    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["name"]
    ordering = ["name"]

    action_ops = {
        "property_types_web": "list",
        "create_web": "create",
        "edit_web": "update",
        "delete_web": "delete",
    }

    def perform_create(self, serializer):
        serializer.instance = services.create_property_type(serializer.validated_data["name"])

    def perform_update(self, serializer):
        serializer.instance = services.update_property_type(
            serializer.instance.pk, serializer.validated_data.get("name", serializer.instance.name)
        )

    def perform_destroy(self, instance):
        services.delete_property_type(instance)

    @action(detail=False, methods=["get"], url_path="property-types-web")
    @web_action
    def property_types_web(self, request):
        qs = self.get_queryset()
        return ok(self.get_serializer(qs, many=True).data, total=qs.count())

    @action(detail=False, methods=["post"], url_path="create-web")
    @web_action
    def create_web(self, request):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        property_type = services.create_property_type(ser.validated_data["name"])
        return ok(self.get_serializer(property_type).data, "Property type created.")

    @action(detail=False, methods=["post"], url_path="edit-web")
    @web_action
    def edit_web(self, request):
        property_type = PropertyType.objects.filter(pk=request.data.get("id")).first()
        if property_type is None:
            raise NotFoundError("Property type not found.")
        ser = self.get_serializer(property_type, data=request.data)
        ser.is_valid(raise_exception=True)
        property_type = services.update_property_type(property_type.pk, ser.validated_data["name"])
        return ok(self.get_serializer(property_type).data, "Property type updated.")

    @action(detail=False, methods=["get", "delete"], url_path=r"delete-web/(?P<type_id>\d+)")
    @web_action
    def delete_web(self, request, type_id=None):
        property_type = PropertyType.objects.filter(pk=type_id).first()
        if property_type is None:
            raise NotFoundError("Property type not found.")
        services.delete_property_type(property_type)
        return ok(message="Property type deleted.")
