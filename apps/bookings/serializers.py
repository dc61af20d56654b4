"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.cars.serializers import CarSummarySerializer
from apps.users.serializers import UserSummarySerializer

from .models import Booking


class BookingCreateSerializer(serializers.Serializer):
    """Booking request from a renter. Business rules are checked by BookingService."""

    car_id = serializers.IntegerField(min_value=1)
    start_date = serializers.DateTimeField()
    end_date = serializers.DateTimeField()
    pickup_location = serializers.CharField(max_length=255, required=False, allow_null=True, allow_blank=True)
    dropoff_location = serializers.CharField(max_length=255, required=False, allow_null=True, allow_blank=True)
    special_requests = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class BookingUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Booking.Status.choices, required=False)
    pickup_location = serializers.CharField(max_length=255, required=False, allow_null=True, allow_blank=True)
    dropoff_location = serializers.CharField(max_length=255, required=False, allow_null=True, allow_blank=True)
    special_requests = serializers.CharField(required=False, allow_null=True, allow_blank=True)

    def validate(self, attrs):  # type: ignore
        if not attrs:
            raise serializers.ValidationError("Nothing to update.")
        return attrs


class BookingSerializer(serializers.ModelSerializer):
    """Detailed booking representation."""

    car = CarSummarySerializer(read_only=True)
    renter = UserSummarySerializer(read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "car",
            "renter",
            "start_date",
            "end_date",
            "total_amount",
            "status",
            "pickup_location",
            "dropoff_location",
            "special_requests",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
