from rest_framework import serializers

from common.exceptions import BusinessRuleError
from users.serializers import ProfileSummarySerializer
from .models import Property, PropertyImage, PropertyType
from .services import decode_image_array


def absolute_url(request, url: str) -> str:
    if not url:
        return url
    if request is None or url.startswith(("http://", "https://")):
        return url
    return request.build_absolute_uri(url)


# ---------- Property types ----------
class PropertyTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = PropertyType
        fields = ["id", "name"]

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("The name is required.")
        return value


# ---------- Images ----------
class PropertyImageSerializer(serializers.ModelSerializer):
    image_url = serializers.ReadOnlyField()
    image_full_path = serializers.SerializerMethodField()

    class Meta:
        model = PropertyImage
        fields = ["id", "image_url", "image_full_path"]

    def get_image_full_path(self, obj):
        return absolute_url(self.context.get("request"), obj.image_url)


class ImageRequestSerializer(serializers.Serializer):
    """Base64 `image_array` (mobile/web JSON) or multipart `image_file`."""
    id = serializers.IntegerField(required=False)
    property_id = serializers.IntegerField()
    image_array = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)
    image_file = serializers.FileField(required=False, allow_null=True)

    def validate(self, attrs):
        raw = attrs.pop("image_array", "") or ""
        if raw:
            try:
                attrs["image_bytes"] = decode_image_array(raw)
            except BusinessRuleError as e:
                raise serializers.ValidationError({"image_array": e.message})
        if not attrs.get("image_bytes") and not attrs.get("image_file"):
            raise serializers.ValidationError({"image_array": "An image is required."})
        return attrs


class ImageIdRequestSerializer(serializers.Serializer):
    id = serializers.IntegerField()


# ---------- Properties ----------
PROPERTY_BASE_FIELDS = [
    "id",
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
]


class PropertySummarySerializer(serializers.ModelSerializer):
    """Property with its type and pictures (no owner / contracts)."""
    property_type = PropertyTypeSerializer(read_only=True)
    property_images = PropertyImageSerializer(many=True, read_only=True)
    first_image = serializers.ReadOnlyField()

    class Meta:
        model = Property
        fields = PROPERTY_BASE_FIELDS + ["property_type", "property_images", "first_image"]


class PropertyResponseSerializer(PropertySummarySerializer):
    owner = ProfileSummarySerializer(read_only=True)
    contracts = serializers.SerializerMethodField()

    class Meta(PropertySummarySerializer.Meta):
        fields = PropertySummarySerializer.Meta.fields + ["owner", "contracts"]

    def get_contracts(self, obj):
        # contracts.serializers imports this module
        from contracts.serializers import ContractSummarySerializer
        return ContractSummarySerializer(obj.contracts.all(), many=True, context=self.context).data


class PropertyRequestSerializer(serializers.Serializer):
    """PropertyRequest (mobile) / AddPropertyRequest (web)."""
    id = serializers.IntegerField(required=False)
    owner_id = serializers.IntegerField()
    property_type_id = serializers.IntegerField()
    neighborhood = serializers.CharField(max_length=50)
    address = serializers.CharField(max_length=50)
    price = serializers.DecimalField(max_digits=18, decimal_places=2, min_value=0)
    square_meters = serializers.IntegerField(min_value=0)
    rooms = serializers.IntegerField(min_value=0)
    stratum = serializers.IntegerField(min_value=0)
    has_parking_lot = serializers.BooleanField(required=False, default=False)
    is_available = serializers.BooleanField(required=False, default=True)
    remarks = serializers.CharField(required=False, allow_blank=True, default="")
    # Web only; left out of the mobile body, omitted values keep what is stored
    latitude = serializers.FloatField(required=False)
    longitude = serializers.FloatField(required=False)
