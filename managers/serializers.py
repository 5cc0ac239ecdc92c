from rest_framework import serializers

from users.serializers import UserResponseSerializer
from .models import Manager


class ManagerSerializer(serializers.ModelSerializer):
    user = UserResponseSerializer(read_only=True)

    class Meta:
        model = Manager
        fields = ["id", "user"]
