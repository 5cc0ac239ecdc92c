from django.db.models import Prefetch
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from common.responses import ok, web_action
from contracts.mixins import CONTRACT_ACTION_OPS, ContractWebMixin
from contracts.models import Contract
from users.models import User
from users.permissions_matrix_guard import RoleActionPermission
from users.profiles import PROFILE_ACTION_OPS, ProfileViewSetMixin

from . import services
from .models import Lessee
from .serializers import LesseeDetailSerializer, LesseeUserSerializer

PermLessees = RoleActionPermission.for_module("lessees")


class LesseeViewSet(ContractWebMixin, ProfileViewSetMixin, viewsets.ModelViewSet):
    role = User.LESSEE
    profile_model = Lessee
    serializer_class = LesseeDetailSerializer
    permission_classes = [IsAuthenticated, PermLessees]

    action_ops = {
        **PROFILE_ACTION_OPS,
        **CONTRACT_ACTION_OPS,
        "lessee_web": "list",
    }

    def get_queryset(self):
        contracts = (
            Contract.objects.select_related("owner__user", "lessee__user", "property__property_type")
            .prefetch_related("property__property_images")
        )
        return (
            Lessee.objects.select_related("user")
            .prefetch_related(Prefetch("contracts", queryset=contracts))
            .order_by(*self.ordering)
        )

    def get_serializer_class(self):
        # combo source only needs the person, not the contract history
        if getattr(self, "action", None) == "all_web":
            return LesseeUserSerializer
        return super().get_serializer_class()

    def delete_profile(self, profile):
        services.delete_lessee(profile)

    @action(detail=False, methods=["get"], url_path=r"lessee-web/(?P<profile_id>\d+)")
    @web_action
    def lessee_web(self, request, profile_id=None):
        return ok(LesseeUserSerializer(self.get_profile(profile_id)).data)
