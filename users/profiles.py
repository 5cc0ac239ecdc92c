"""
Shared CRUD for the role profiles (owners, lessees, managers).

A profile is a thin row 1:1 with a User, so create/edit/delete are really
account operations. The viewset using this mixin sets `role`, `profile_model`
and `serializer_class`, and may override `delete_profile` to add its own
refusal rules.
"""
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, status
from rest_framework.decorators import action
from rest_framework.response import Response

from common.exceptions import NotFoundError
from common.responses import ok, page, web_action

from . import services
from .serializers import AddUserRequestSerializer, EditUserRequestSerializer

PROFILE_ACTION_OPS = {
    "list_web": "list",
    "all_web": "list",
    "details_web": "list",
    "create_web": "create",
    "edit_web": "update",
    "delete_web": "delete",
}


class ProfileViewSetMixin:
    role: str = ""
    profile_model = None

    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["user__first_name", "user__last_name", "user__email", "user__document"]
    ordering_fields = ["id", "user__first_name", "user__last_name", "user__document"]
    ordering = ["user__first_name", "user__last_name"]

    action_ops = PROFILE_ACTION_OPS

    # ---------- helpers ----------
    def get_profile(self, pk):
        profile = self.get_queryset().filter(pk=pk).first()
        if profile is None:
            raise NotFoundError(f"{self.profile_model.__name__} not found.")
        return profile

    def detail_data(self, profile):
        profile = self.get_queryset().get(pk=profile.pk)
        return self.get_serializer(profile).data

    def create_profile(self, data):
        return services.register_user(data, self.role)

    def edit_profile(self, profile, data):
        services.update_user(profile.user, data)
        return profile

    def delete_profile(self, profile):
        services.delete_profile(profile)

    # ---------- REST ----------
    def create(self, request, *args, **kwargs):
        ser = AddUserRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        profile = self.create_profile(ser.validated_data)
        return Response(self.detail_data(profile), status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        profile = self.get_object()
        partial = kwargs.pop("partial", False)
        ser = EditUserRequestSerializer(data=request.data, partial=partial)
        ser.is_valid(raise_exception=True)
        self.edit_profile(profile, ser.validated_data)
        return Response(self.detail_data(profile))

    def destroy(self, request, *args, **kwargs):
        self.delete_profile(self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ---------- Web (SPA) ----------
    @action(detail=False, methods=["get"], url_path=r"list-web/(?P<index>\d+)/(?P<count>\d+)")
    @web_action
    def list_web(self, request, index=None, count=None):
        rows, total = page(self.filter_queryset(self.get_queryset()), index, count)
        return ok(self.get_serializer(rows, many=True).data, total=total)

    @action(detail=False, methods=["get"], url_path="all-web")
    @web_action
    def all_web(self, request):
        qs = self.get_queryset().order_by("user__first_name", "user__last_name", "user__document")
        return ok(self.get_serializer(qs, many=True).data, total=qs.count())

    @action(detail=False, methods=["get"], url_path=r"details-web/(?P<profile_id>\d+)")
    @web_action
    def details_web(self, request, profile_id=None):
        return ok(self.get_serializer(self.get_profile(profile_id)).data)

    @action(detail=False, methods=["post"], url_path="create-web")
    @web_action
    def create_web(self, request):
        ser = AddUserRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        profile = self.create_profile(ser.validated_data)
        return ok(self.detail_data(profile), f"{self.profile_model.__name__} created.")

    @action(detail=False, methods=["post"], url_path="edit-web")
    @web_action
    def edit_web(self, request):
        ser = EditUserRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        profile = self.get_profile(ser.validated_data.get("id"))
        self.edit_profile(profile, ser.validated_data)
        return ok(self.detail_data(profile), f"{self.profile_model.__name__} updated.")

    @action(detail=False, methods=["get", "delete"], url_path=r"delete-web/(?P<profile_id>\d+)")
    @web_action
    def delete_web(self, request, profile_id=None):
        self.delete_profile(self.get_profile(profile_id))
        return ok(message=f"{self.profile_model.__name__} deleted.")
