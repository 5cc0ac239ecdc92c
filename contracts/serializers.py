from datetime import timezone as dt_timezone

from rest_framework import serializers

from properties.serializers import PropertySummarySerializer
from users.serializers import ProfileSummarySerializer
from .models import Contract


class ContractSummarySerializer(serializers.ModelSerializer):
    # Stored dates come back in UTC; the *_local twins use settings.TIME_ZONE
    start_date = serializers.DateTimeField(read_only=True, default_timezone=dt_timezone.utc)
    end_date = serializers.DateTimeField(read_only=True, default_timezone=dt_timezone.utc)
    start_date_local = serializers.DateTimeField(read_only=True)
    end_date_local = serializers.DateTimeField(read_only=True)

    owner = ProfileSummarySerializer(read_only=True)
    lessee = ProfileSummarySerializer(read_only=True)

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
            "owner",
            "lessee",
        ]


class ContractDetailSerializer(ContractSummarySerializer):
    property = PropertySummarySerializer(read_only=True)

    class Meta(ContractSummarySerializer.Meta):
        fields = ContractSummarySerializer.Meta.fields + ["property"]


class ContractFlatSerializer(ContractSummarySerializer):
    """Contract with plain ids next to the summaries (edit forms)."""
    owner_id = serializers.IntegerField(read_only=True)
    lessee_id = serializers.IntegerField(read_only=True)
    property_id = serializers.IntegerField(read_only=True)

    class Meta(ContractSummarySerializer.Meta):
        fields = ContractSummarySerializer.Meta.fields + ["owner_id", "lessee_id", "property_id"]


class ContractRequestSerializer(serializers.Serializer):
    """
    AddContractRequest. Older web builds send the property id in
    `property_type_id`; it is used when `property_id` is missing.
    """
    id = serializers.IntegerField(required=False)
    price = serializers.DecimalField(max_digits=18, decimal_places=2, min_value=0)
    remarks = serializers.CharField(required=False, allow_blank=True, default="")
    start_date = serializers.DateTimeField()
    end_date = serializers.DateTimeField()
    is_active = serializers.BooleanField(required=False, default=True)
    owner_id = serializers.IntegerField()
    lessee_id = serializers.IntegerField()
    property_id = serializers.IntegerField(required=False)
    property_type_id = serializers.IntegerField(required=False, write_only=True)

    def validate(self, data):
        legacy = data.pop("property_type_id", None)
        if data.get("property_id") is None:
            if legacy is None:
                raise serializers.ValidationError({"property_id": "This field is required."})
            data["property_id"] = legacy

        if data["end_date"] <= data["start_date"]:
            raise serializers.ValidationError({"end_date": "The end date must be after the start date."})
        return data
