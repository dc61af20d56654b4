"""Domain services for booking workflows."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping, Optional

import structlog
from django.db import transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.cars.models import Car
from apps.users.identity import Actor
from shared.application.uow import DjangoUnitOfWork
from shared.domain.errors import DatesNotAvailable, Forbidden, NotFound, ValidationError

from .domain import availability, pricing, state_machine
from .domain.availability import BLOCKING_STATUSES
from .domain.events import BookingCreated, BookingDeleted, BookingStatusChanged
from .models import Booking

logger = structlog.get_logger(__name__)

UPDATABLE_FIELDS = frozenset({"status", "pickup_location", "dropoff_location", "special_requests"})


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def bookings_visible_to(actor: Actor, queryset=None):
    """Admins see every booking; everyone else sees rentals they take or give."""
    if queryset is None:
        queryset = Booking.objects.all()
    if actor.is_admin:
        return queryset
    return queryset.filter(Q(renter_id=actor.id) | Q(car__owner_id=actor.id))


class BookingService:
    """
    Booking lifecycle: create, update (status and details), delete.

    Every write runs inside one ``DjangoUnitOfWork`` with the car row
    locked, so the overlap check and the write that depends on it are
    atomic. ``clock`` returns the current aware datetime.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._now = clock or timezone.now

    # ----- Availability -----

    def is_available(
        self,
        car_id: int,
        start_date: datetime,
        end_date: datetime,
        exclude_booking_id: Optional[int] = None,
    ) -> bool:
        """True if no confirmed/active booking of the car overlaps the period (inclusive)."""
        candidates = _lock_queryset_if_possible(
            Booking.objects.filter(car_id=car_id, status__in=BLOCKING_STATUSES).only(
                "pk", "status", "start_date", "end_date"
            )
        )
        return not availability.conflicting(candidates, start_date, end_date, exclude_booking_id)

    def _ensure_available(self, car_id: int, start_date, end_date, exclude_booking_id=None) -> None:
        if not self.is_available(car_id, start_date, end_date, exclude_booking_id):
            raise DatesNotAvailable()

    # ----- Queries -----

    def get_booking(self, actor: Actor, booking_id: int) -> Booking:
        booking = (
            Booking.objects.select_related("car", "car__owner", "renter").filter(pk=booking_id).first()
        )
        if booking is None:
            raise NotFound("Booking not found", code="BOOKING_NOT_FOUND")
        state_machine.ensure_stakeholder(booking.roles_of(actor))
        return booking

    # ----- Commands -----

    def create_booking(
        self,
        renter: Actor,
        car_id: int,
        start_date: datetime,
        end_date: datetime,
        pickup_location: Optional[str] = None,
        dropoff_location: Optional[str] = None,
        special_requests: Optional[str] = None,
    ) -> Booking:
        if start_date < self._now():
            raise ValidationError("Start date cannot be in the past", code="INVALID_START_DATE")
        if end_date <= start_date:
            raise ValidationError("End date must be after start date", code="INVALID_DATE_RANGE")

        with DjangoUnitOfWork() as uow:
            car = _lock_queryset_if_possible(Car.objects.filter(pk=car_id)).first()
            if car is None:
                raise NotFound("Car not found", code="CAR_NOT_FOUND")
            if not car.is_available:
                raise ValidationError("Car is not available for booking", code="CAR_NOT_AVAILABLE")
            if not car.is_verified:
                raise ValidationError("Car is not verified yet", code="CAR_NOT_VERIFIED")
            if car.owner_id == renter.id:
                raise ValidationError("You cannot book your own car", code="CANNOT_BOOK_OWN_CAR")
            self._ensure_available(car.pk, start_date, end_date)

            booking = Booking.objects.create(
                car=car,
                renter_id=renter.id,
                start_date=start_date,
                end_date=end_date,
                total_amount=pricing.calculate_amount(start_date, end_date, car.daily_rate),
                status=Booking.Status.PENDING,
                pickup_location=pickup_location,
                dropoff_location=dropoff_location,
                special_requests=special_requests,
            )
            uow.add_event(
                BookingCreated(
                    aggregate_id=booking.pk,
                    booking_id=booking.pk,
                    car_id=car.pk,
                    renter_id=renter.id,
                    start_date=start_date,
                    end_date=end_date,
                    total_amount=booking.total_amount,
                )
            )

        logger.info(
            "booking.created",
            booking_id=booking.pk,
            car_id=car.pk,
            renter_id=renter.id,
            total_amount=str(booking.total_amount),
        )
        return booking

    def update_booking(self, actor: Actor, booking_id: int, changes: Mapping[str, Any]) -> Booking:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Fields cannot be updated: {', '.join(sorted(unknown))}",
                code="INVALID_UPDATE_FIELDS",
            )

        with DjangoUnitOfWork() as uow:
            booking = _lock_queryset_if_possible(
                Booking.objects.select_related("car").filter(pk=booking_id)
            ).first()
            if booking is None:
                raise NotFound("Booking not found", code="BOOKING_NOT_FOUND")

            roles = booking.roles_of(actor)
            state_machine.ensure_stakeholder(roles)

            old_status = booking.status
            status_change = "status" in changes
            new_status = changes.get("status")
            if status_change:
                if new_status not in state_machine.STATUSES:
                    raise ValidationError(f"Unknown status: {new_status}", code="INVALID_STATUS")
                state_machine.ensure_transition(roles, old_status, new_status)
                if new_status == Booking.Status.CONFIRMED:
                    _lock_queryset_if_possible(Car.objects.filter(pk=booking.car_id)).first()
                    self._ensure_available(
                        booking.car_id,
                        booking.start_date,
                        booking.end_date,
                        exclude_booking_id=booking.pk,
                    )

            for field, value in changes.items():
                setattr(booking, field, value)
            booking.save()

            if status_change:
                uow.add_event(
                    BookingStatusChanged(
                        aggregate_id=booking.pk,
                        booking_id=booking.pk,
                        old_status=old_status,
                        new_status=new_status,
                        actor_id=actor.id,
                    )
                )

        logger.info(
            "booking.updated",
            booking_id=booking.pk,
            actor_id=actor.id,
            fields=sorted(changes),
            status=booking.status,
        )
        return booking

    def delete_booking(self, actor: Actor, booking_id: int) -> None:
        with DjangoUnitOfWork() as uow:
            booking = _lock_queryset_if_possible(
                Booking.objects.select_related("car").filter(pk=booking_id)
            ).first()
            if booking is None:
                raise NotFound("Booking not found", code="BOOKING_NOT_FOUND")

            roles = booking.roles_of(actor)
            if not roles & {state_machine.RENTER, state_machine.ADMIN}:
                raise Forbidden("Only the renter or an administrator can delete a booking")
            if not booking.is_deletable:
                raise ValidationError(
                    "Only pending or cancelled bookings can be deleted",
                    code="CANNOT_DELETE_BOOKING",
                )

            status = booking.status
            booking.delete()
            uow.add_event(
                BookingDeleted(aggregate_id=booking_id, booking_id=booking_id, status=status, actor_id=actor.id)
            )

        logger.info("booking.deleted", booking_id=booking_id, actor_id=actor.id)
