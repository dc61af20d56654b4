"""Serializers for payments."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    booking_id = serializers.ReadOnlyField()

    class Meta:
        model = Payment
        fields = [
            "id",
            "booking_id",
            "reference",
            "amount",
            "status",
            "payment_method",
            "paid_at",
            "created_at",
        ]
        read_only_fields = fields


class PaymentCreateSerializer(serializers.Serializer):
    booking_id = serializers.IntegerField(min_value=1)
    reference = serializers.CharField(max_length=100)
    payment_method = serializers.ChoiceField(choices=Payment.Method.choices, required=False, allow_null=True)
