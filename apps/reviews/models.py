"""Models for the review domain.

Defines the ``Review`` entity: feedback left after a completed booking.
The renter reviews the car owner (``owner_review``) and the owner
reviews the renter (``renter_review``). Each participant can leave at
most one review of each type per booking.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Review(models.Model):
    """A rating left by one booking participant about the other."""

    class ReviewType(models.TextChoices):
        RENTER_REVIEW = 'renter_review', _('Review of the renter')
        OWNER_REVIEW = 'owner_review', _('Review of the car owner')

    booking = models.ForeignKey(
        'bookings.Booking', on_delete=models.CASCADE, related_name='reviews'
    )
    reviewer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='reviews_written'
    )
    reviewed = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='reviews_received'
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text=_('Rating from 1 to 5')
    )
    comment = models.TextField(blank=True)
    review_type = models.CharField(max_length=20, choices=ReviewType.choices)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['booking', 'reviewer', 'review_type'],
                name='reviews_one_per_booking_and_type',
            ),
        ]
        indexes = [
            models.Index(fields=['booking'], name='reviews_booking_idx'),
            models.Index(fields=['reviewed'], name='reviews_reviewed_idx'),
        ]

    def __str__(self) -> str:
        return f"Review by {self.reviewer_id} of {self.reviewed_id} (Rating: {self.rating})"
