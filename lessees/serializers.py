from rest_framework import serializers

from contracts.serializers import ContractDetailSerializer
from users.serializers import UserResponseSerializer
from .models import Lessee


class LesseeDetailSerializer(serializers.ModelSerializer):
    user = UserResponseSerializer(read_only=True)
    contracts = ContractDetailSerializer(many=True, read_only=True)

    class Meta:
        model = Lessee
        fields = ["id", "user", "contracts"]


class LesseeUserSerializer(serializers.ModelSerializer):
    """Lessee without contracts, for edit forms and combos."""
    user = UserResponseSerializer(read_only=True)

    class Meta:
        model = Lessee
        fields = ["id", "user"]
