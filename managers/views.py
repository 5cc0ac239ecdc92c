from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from users.models import User
from users.permissions_matrix_guard import RoleActionPermission
from users.profiles import ProfileViewSetMixin

from .models import Manager
from .serializers import ManagerSerializer


class ManagerViewSet(ProfileViewSetMixin, viewsets.ModelViewSet):
    """
    Managers administer the whole system. Created managers still confirm
    their email before the first login.
    """
    role = User.MANAGER
    profile_model = Manager
    serializer_class = ManagerSerializer
    permission_classes = [IsAuthenticated, RoleActionPermission.for_module("managers")]

    def get_queryset(self):
        return Manager.objects.select_related("user").order_by(*self.ordering)
