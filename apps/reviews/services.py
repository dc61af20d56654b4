"""Review creation rules."""

from __future__ import annotations

from typing import Optional

import structlog
from django.db import IntegrityError, transaction  # type: ignore

from apps.bookings.models import Booking
from apps.users.identity import Actor
from shared.domain.errors import DuplicateKey, Forbidden, NotFound, ValidationError

from .models import Review

logger = structlog.get_logger(__name__)


def create_review(
    actor: Actor,
    booking_id: int,
    review_type: str,
    rating: int,
    comment: str = "",
    reviewed_id: Optional[int] = None,
) -> Review:
    """
    Leave a review for a completed booking.

    The renter writes ``owner_review`` about the car owner; the owner
    writes ``renter_review`` about the renter. The reviewed user is taken
    from the booking; a mismatching ``reviewed_id`` is rejected.
    """
    booking = Booking.objects.select_related("car").filter(pk=booking_id).first()
    if booking is None:
        raise NotFound("Booking not found", code="BOOKING_NOT_FOUND")
    if booking.status != Booking.Status.COMPLETED:
        raise ValidationError("Can only review completed bookings", code="BOOKING_NOT_COMPLETED")

    if review_type == Review.ReviewType.OWNER_REVIEW:
        if actor.id != booking.renter_id:
            raise Forbidden("Only the renter can review the car owner")
        expected_reviewed = booking.car.owner_id
    elif review_type == Review.ReviewType.RENTER_REVIEW:
        if actor.id != booking.car.owner_id:
            raise Forbidden("Only the car owner can review the renter")
        expected_reviewed = booking.renter_id
    else:
        raise ValidationError(f"Unknown review type: {review_type}", code="INVALID_REVIEW_TYPE")

    if reviewed_id is not None and reviewed_id != expected_reviewed:
        raise ValidationError("Invalid reviewed user for this review", code="INVALID_REVIEWED_USER")

    try:
        with transaction.atomic():
            review = Review.objects.create(
                booking=booking,
                reviewer_id=actor.id,
                reviewed_id=expected_reviewed,
                rating=rating,
                comment=comment or "",
                review_type=review_type,
            )
    except IntegrityError as exc:
        raise DuplicateKey("You have already reviewed this booking", code="REVIEW_ALREADY_EXISTS") from exc

    logger.info("review.created", review_id=review.pk, booking_id=booking.pk, review_type=review_type)
    return review
