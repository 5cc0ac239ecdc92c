from datetime import timezone as dt_timezone

from rest_framework import serializers

from contracts.models import Contract
from contracts.serializers import ContractSummarySerializer
from properties.models import Property, PropertyImage
from properties.serializers import PROPERTY_BASE_FIELDS, PropertyResponseSerializer, absolute_url
from users.models import ROLE_ID_OWNER, ROLE_ID_LESSEE
from users.serializers import UserResponseSerializer
from .models import Owner


# ---------- Web ----------
class OwnerDetailSerializer(serializers.ModelSerializer):
    user = UserResponseSerializer(read_only=True)
    properties = PropertyResponseSerializer(many=True, read_only=True)
    contracts = ContractSummarySerializer(many=True, read_only=True)

    class Meta:
        model = Owner
        fields = ["id", "user", "properties", "contracts"]


# ---------- Mobile ----------
# The app reads flat profile fields instead of a nested `user`.

class MobileProfileSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    first_name = serializers.CharField(source="user.first_name", read_only=True)
    last_name = serializers.CharField(source="user.last_name", read_only=True)
    document = serializers.CharField(source="user.document", read_only=True)
    address = serializers.CharField(source="user.address", read_only=True)
    phone_number = serializers.CharField(source="user.phone_number", read_only=True)
    email = serializers.CharField(source="user.email", read_only=True)
    full_name = serializers.CharField(source="user.full_name", read_only=True)


class MobileImageSerializer(serializers.ModelSerializer):
    image_url = serializers.SerializerMethodField()

    class Meta:
        model = PropertyImage
        fields = ["id", "image_url"]

    def get_image_url(self, obj):
        return absolute_url(self.context.get("request"), obj.image_url)


class MobileContractSerializer(serializers.ModelSerializer):
    start_date = serializers.DateTimeField(read_only=True, default_timezone=dt_timezone.utc)
    end_date = serializers.DateTimeField(read_only=True, default_timezone=dt_timezone.utc)
    start_date_local = serializers.DateTimeField(read_only=True)
    end_date_local = serializers.DateTimeField(read_only=True)
    lessee = MobileProfileSerializer(read_only=True)

    class Meta:
        model = Contract
        fields = [
            "id",
            "remarks",
            "price",
            "start_date",
            "end_date",
            "is_active",
            "start_date_local",
            "end_date_local",
            "lessee",
        ]


class MobilePropertySerializer(serializers.ModelSerializer):
    property_type = serializers.CharField(source="property_type.name", read_only=True)
    property_images = MobileImageSerializer(many=True, read_only=True)
    contracts = MobileContractSerializer(many=True, read_only=True)
    first_image = serializers.SerializerMethodField()

    class Meta:
        model = Property
        fields = PROPERTY_BASE_FIELDS + ["property_type", "property_images", "contracts", "first_image"]

    def get_first_image(self, obj):
        return absolute_url(self.context.get("request"), obj.first_image)


class MobileOwnerSerializer(MobileProfileSerializer):
    role_id = serializers.SerializerMethodField()
    properties = MobilePropertySerializer(many=True, read_only=True)
    contracts = MobileContractSerializer(many=True, read_only=True)

    def get_role_id(self, obj):
        return ROLE_ID_OWNER


class MobileLesseeSerializer(MobileProfileSerializer):
    """Lessees get the catalogue of available properties plus their own contracts."""
    role_id = serializers.SerializerMethodField()
    properties = serializers.SerializerMethodField()
    contracts = MobileContractSerializer(many=True, read_only=True)

    def get_role_id(self, obj):
        return ROLE_ID_LESSEE

    def get_properties(self, obj):
        available = self.context.get("available_properties", [])
        return MobilePropertySerializer(available, many=True, context=self.context).data

