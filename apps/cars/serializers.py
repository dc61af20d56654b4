"""Serializers for car listings."""

from __future__ import annotations

from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserSummarySerializer

from .models import Car


class CarSummarySerializer(serializers.ModelSerializer):
    """Car fields embedded in booking responses."""

    owner_id = serializers.ReadOnlyField()

    class Meta:
        model = Car
        fields = ["id", "make", "model", "year", "plate_number", "daily_rate", "location", "owner_id"]
        read_only_fields = fields


class CarSerializer(serializers.ModelSerializer):
    owner = UserSummarySerializer(read_only=True)

    class Meta:
        model = Car
        fields = [
            "id",
            "owner",
            "make",
            "model",
            "year",
            "color",
            "plate_number",
            "vin",
            "fuel_type",
            "transmission",
            "seats",
            "category",
            "daily_rate",
            "description",
            "features",
            "location",
            "latitude",
            "longitude",
            "is_available",
            "is_verified",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CarWriteSerializer(serializers.ModelSerializer):
    """Create/update payload. Uniqueness is enforced by the database."""

    features = serializers.ListField(child=serializers.CharField(max_length=100), required=False)

    class Meta:
        model = Car
        fields = [
            "make",
            "model",
            "year",
            "color",
            "plate_number",
            "vin",
            "fuel_type",
            "transmission",
            "seats",
            "category",
            "daily_rate",
            "description",
            "features",
            "location",
            "latitude",
            "longitude",
            "is_available",
        ]
        extra_kwargs = {
            "plate_number": {"validators": []},
            "vin": {"validators": [], "required": False},
        }

    def validate_year(self, value: int) -> int:
        if value > timezone.now().year + 1:
            raise serializers.ValidationError("Year cannot be in the future.")
        return value

    def to_representation(self, instance):  # type: ignore
        return CarSerializer(instance, context=self.context).data


class AvailabilityQuerySerializer(serializers.Serializer):
    start = serializers.DateTimeField()
    end = serializers.DateTimeField()

    def validate(self, attrs):  # type: ignore
        if attrs["end"] <= attrs["start"]:
            raise serializers.ValidationError({"end": "End date must be after start date."})
        return attrs
