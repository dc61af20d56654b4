"""Serializers for reviews.

Provide both read and write serializers for the ``Review`` model. The
reviewer is inferred from the request in the view.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserSummarySerializer

from .models import Review


class ReviewCreateSerializer(serializers.Serializer):
    """Serializer for creating a new review."""

    booking_id = serializers.IntegerField(min_value=1)
    reviewed_id = serializers.IntegerField(min_value=1, required=False)
    rating = serializers.IntegerField()
    comment = serializers.CharField(required=False, allow_blank=True, default='')
    review_type = serializers.ChoiceField(choices=Review.ReviewType.choices)

    def validate_rating(self, value: int) -> int:  # type: ignore
        if value < 1 or value > 5:
            raise serializers.ValidationError('Rating must be between 1 and 5.')
        return value


class ReviewSerializer(serializers.ModelSerializer):
    """Read serializer for reviews including both participants."""

    booking_id = serializers.ReadOnlyField()
    reviewer = UserSummarySerializer(read_only=True)
    reviewed = UserSummarySerializer(read_only=True)

    class Meta:
        model = Review
        fields = [
            'id',
            'booking_id',
            'reviewer',
            'reviewed',
            'rating',
            'comment',
            'review_type',
            'created_at',
        ]
        read_only_fields = fields
