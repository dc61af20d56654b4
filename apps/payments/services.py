"""Payment workflows: registering a charge and applying gateway webhooks."""

from __future__ import annotations

from typing import Callable, Optional

import structlog
from django.conf import settings  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.models import Booking
from apps.bookings.services import BookingService
from apps.users.identity import SYSTEM_ACTOR, Actor
from shared.domain.errors import DomainError, DuplicateKey, Forbidden, NotFound, ValidationError
from shared.domain.value_objects import Money

from . import paystack
from .models import Payment

logger = structlog.get_logger(__name__)


def payments_visible_to(actor: Actor, queryset=None):
    if queryset is None:
        queryset = Payment.objects.all()
    if actor.is_admin:
        return queryset
    return queryset.filter(booking__renter_id=actor.id)


def register_payment(
    actor: Actor,
    booking_id: int,
    reference: str,
    payment_method: Optional[str] = None,
) -> Payment:
    """Record a pending payment for a pending booking of the renter."""
    booking = Booking.objects.filter(pk=booking_id).first()
    if booking is None:
        raise NotFound("Booking not found", code="BOOKING_NOT_FOUND")
    if not actor.is_admin and booking.renter_id != actor.id:
        raise Forbidden("Only the renter can pay for a booking")
    if booking.status != Booking.Status.PENDING:
        raise ValidationError("Only pending bookings can be paid", code="BOOKING_NOT_PAYABLE")

    try:
        with transaction.atomic():
            payment = Payment.objects.create(
                booking=booking,
                reference=reference,
                amount=booking.total_amount,
                payment_method=payment_method,
                status=Payment.Status.PENDING,
            )
    except IntegrityError as exc:
        raise DuplicateKey("Payment reference already exists", code="DUPLICATE_REFERENCE") from exc

    logger.info("payment.registered", payment_id=payment.pk, booking_id=booking.pk, reference=reference)
    return payment


class PaystackWebhookHandler:
    """
    Applies Paystack charge events to payments and bookings.

    ``charge.success`` marks the payment successful and confirms the
    booking through the booking service as the system actor, so the
    availability re-check still applies. Unknown events are ignored.
    """

    def __init__(self, booking_service: Optional[BookingService] = None, clock: Optional[Callable] = None):
        self.booking_service = booking_service or BookingService()
        self._now = clock or timezone.now

    def handle(self, event: paystack.PaystackEvent) -> Optional[Payment]:
        if event.event == paystack.CHARGE_SUCCESS:
            return self.charge_success(event)
        if event.event == paystack.CHARGE_FAILED:
            return self.charge_failed(event)
        logger.info("paystack.unhandled_event", event_type=event.event)
        return None

    def _find_payment(self, event: paystack.PaystackEvent) -> Optional[Payment]:
        payment = Payment.objects.select_related("booking").filter(reference=event.reference).first()
        if payment is None:
            logger.warning("paystack.payment_not_found", reference=event.reference, event_type=event.event)
        return payment

    def charge_success(self, event: paystack.PaystackEvent) -> Optional[Payment]:
        payment = self._find_payment(event)
        if payment is None:
            return None

        if event.amount is not None:
            currency = getattr(settings, "BOOKING_CURRENCY", "NGN")
            paid = Money.from_minor_units(event.amount, currency)
            if paid.amount != payment.amount:
                logger.warning(
                    "paystack.amount_mismatch",
                    reference=payment.reference,
                    expected=str(payment.amount),
                    received=str(paid.amount),
                )

        payment.status = Payment.Status.SUCCESS
        payment.paid_at = self._now()
        payment.save(update_fields=["status", "paid_at", "updated_at"])

        try:
            self.booking_service.update_booking(
                SYSTEM_ACTOR,
                payment.booking_id,
                {"status": Booking.Status.CONFIRMED},
            )
        except DomainError as exc:
            logger.warning(
                "paystack.booking_not_confirmed",
                booking_id=payment.booking_id,
                reference=payment.reference,
                code=exc.code,
                error=exc.message,
            )
        else:
            logger.info("paystack.booking_confirmed", booking_id=payment.booking_id, reference=payment.reference)
        return payment

    def charge_failed(self, event: paystack.PaystackEvent) -> Optional[Payment]:
        payment = self._find_payment(event)
        if payment is None:
            return None
        payment.status = Payment.Status.FAILED
        payment.save(update_fields=["status", "updated_at"])
        logger.info("paystack.payment_failed", booking_id=payment.booking_id, reference=payment.reference)
        return payment
