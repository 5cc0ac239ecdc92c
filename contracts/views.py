# contracts/views.py
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, filters, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from users.permissions_matrix_guard import RoleActionPermission
from users.scoping import owner_scope_qs
from . import services
from .models import Contract
from .serializers import ContractDetailSerializer, ContractRequestSerializer


PermContracts = RoleActionPermission.for_module("contracts")


class ContractViewSet(viewsets.ModelViewSet):
    """
    Contracts with nested owner / lessee / property on read.
    Owners see the contracts on their properties, lessees their own.
    Writes take an AddContractRequest and go through contracts.services.
    """
    serializer_class = ContractDetailSerializer
    permission_classes = [IsAuthenticated, PermContracts]

    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ["owner", "lessee", "property", "is_active"]
    search_fields = [
        "remarks",
        "property__address",
        "property__neighborhood",
        "lessee__user__first_name",
        "lessee__user__last_name",
        "lessee__user__document",
    ]
    ordering_fields = ["id", "start_date", "end_date", "price"]
    ordering = ["-start_date", "-id"]

    queryset = (
        Contract.objects
        .select_related("owner__user", "lessee__user", "property__property_type")
        .prefetch_related("property__property_images")
        .all()
    )

    # ---------- scoping ----------
    def get_queryset(self):
        return owner_scope_qs(self.request.user, super().get_queryset(), lessee_field="lessee")

    # ---------- create/update ----------
    def create(self, request, *args, **kwargs):
        ser = ContractRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        contract = services.create_contract(ser.validated_data)
        out = self.get_serializer(services.get_contract(contract.pk))
        return Response(out.data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        ser = ContractRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        services.update_contract(instance, ser.validated_data)
        return Response(self.get_serializer(services.get_contract(instance.pk)).data)

    def partial_update(self, request, *args, **kwargs):
        # Every field of the request DTO is needed to re-validate the relationships
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        services.delete_contract(self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)
