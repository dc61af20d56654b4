"""Tests for the booking lifecycle service."""

from __future__ import annotations

import itertools
import random
from datetime import timedelta
from decimal import Decimal
from unittest import mock

import pytest
from django.db import DatabaseError

from apps.bookings.domain import availability
from apps.bookings.models import Booking
from apps.bookings.services import BookingService, bookings_visible_to
from apps.cars.tests.factories import aware, make_admin, make_booking, make_car, make_seller, make_user
from apps.users.identity import actor_from_user
from shared.domain.errors import (
    DatesNotAvailable,
    Forbidden,
    InvalidStatusTransition,
    NotFound,
    ValidationError,
)

pytestmark = pytest.mark.django_db

NOW = aware(2024, 1, 15, 9)


@pytest.fixture
def service():
    return BookingService(clock=lambda: NOW)


@pytest.fixture
def owner():
    return make_seller()


@pytest.fixture
def renter():
    return make_user()


@pytest.fixture
def car(owner):
    return make_car(owner=owner, daily_rate=Decimal("15000.00"))


def create(service, renter, car, start, end, **extra):
    return service.create_booking(actor_from_user(renter), car.pk, start, end, **extra)


# ----- create_booking -----


def test_overlapping_confirmed_booking_rejects_new_request(service, renter, car):
    make_booking(car, make_user(), aware(2024, 2, 1), aware(2024, 2, 5), status=Booking.Status.CONFIRMED)

    with pytest.raises(DatesNotAvailable) as exc:
        create(service, renter, car, aware(2024, 2, 3), aware(2024, 2, 7))

    assert exc.value.status_code == 409
    assert Booking.objects.count() == 1


def test_free_period_creates_pending_booking_with_amount(service, renter, car):
    booking = create(
        service,
        renter,
        car,
        aware(2024, 3, 1),
        aware(2024, 3, 5),
        pickup_location="Ikeja",
    )

    booking.refresh_from_db()
    assert booking.status == Booking.Status.PENDING
    assert booking.total_amount == Decimal("60000.00")
    assert booking.renter_id == renter.pk
    assert booking.pickup_location == "Ikeja"
    assert booking.dropoff_location is None


def test_start_in_the_past_is_rejected_before_availability(service, renter, car):
    with mock.patch.object(BookingService, "is_available") as is_available:
        with pytest.raises(ValidationError) as exc:
            create(service, renter, car, aware(2024, 1, 1), aware(2024, 1, 3))

    assert exc.value.code == "INVALID_START_DATE"
    is_available.assert_not_called()


def test_end_before_start_is_rejected(service, renter, car):
    with pytest.raises(ValidationError) as exc:
        create(service, renter, car, aware(2024, 3, 5), aware(2024, 3, 5))
    assert exc.value.code == "INVALID_DATE_RANGE"


def test_unknown_car(service, renter):
    with pytest.raises(NotFound) as exc:
        service.create_booking(actor_from_user(renter), 999999, aware(2024, 3, 1), aware(2024, 3, 2))
    assert exc.value.code == "CAR_NOT_FOUND"


def test_unavailable_car(service, renter, owner):
    car = make_car(owner=owner, is_available=False)
    with pytest.raises(ValidationError) as exc:
        create(service, renter, car, aware(2024, 3, 1), aware(2024, 3, 2))
    assert exc.value.code == "CAR_NOT_AVAILABLE"


def test_unverified_car(service, renter, owner):
    car = make_car(owner=owner, is_verified=False)
    with pytest.raises(ValidationError) as exc:
        create(service, renter, car, aware(2024, 3, 1), aware(2024, 3, 2))
    assert exc.value.code == "CAR_NOT_VERIFIED"


def test_owner_cannot_book_own_car(service, owner, car):
    with pytest.raises(ValidationError) as exc:
        create(service, owner, car, aware(2024, 3, 1), aware(2024, 3, 2))
    assert exc.value.code == "CANNOT_BOOK_OWN_CAR"


def test_touching_boundary_counts_as_overlap(service, renter, car):
    make_booking(car, make_user(), aware(2024, 2, 1), aware(2024, 2, 5, 10), status=Booking.Status.ACTIVE)

    with pytest.raises(DatesNotAvailable):
        create(service, renter, car, aware(2024, 2, 5, 10), aware(2024, 2, 8))


def test_pending_and_cancelled_bookings_do_not_block(service, renter, car):
    other = make_user()
    make_booking(car, other, aware(2024, 2, 1), aware(2024, 2, 5), status=Booking.Status.PENDING)
    make_booking(car, other, aware(2024, 2, 1), aware(2024, 2, 5), status=Booking.Status.CANCELLED)

    booking = create(service, renter, car, aware(2024, 2, 2), aware(2024, 2, 4))
    assert booking.status == Booking.Status.PENDING


def test_failed_insert_leaves_nothing_behind(service, renter, car):
    with mock.patch.object(Booking.objects, "create", side_effect=DatabaseError("disk full")):
        with pytest.raises(DatabaseError):
            create(service, renter, car, aware(2024, 3, 1), aware(2024, 3, 2))
    assert Booking.objects.count() == 0


# ----- is_available -----


def test_is_available_is_idempotent_and_honours_exclusion(service, car):
    booking = make_booking(car, make_user(), aware(2024, 2, 1), aware(2024, 2, 5), status=Booking.Status.CONFIRMED)

    first = service.is_available(car.pk, aware(2024, 2, 4), aware(2024, 2, 6))
    second = service.is_available(car.pk, aware(2024, 2, 4), aware(2024, 2, 6))
    assert first is False and second is False
    assert service.is_available(car.pk, aware(2024, 2, 4), aware(2024, 2, 6), exclude_booking_id=booking.pk)
    assert service.is_available(car.pk, aware(2024, 2, 5, 0, 1), aware(2024, 2, 6))


# ----- update_booking -----


def test_renter_cancels_then_cannot_confirm(service, renter, car):
    booking = make_booking(car, renter, aware(2024, 3, 1), aware(2024, 3, 5))
    actor = actor_from_user(renter)

    updated = service.update_booking(actor, booking.pk, {"status": "cancelled"})
    assert updated.status == Booking.Status.CANCELLED

    with pytest.raises(InvalidStatusTransition):
        service.update_booking(actor, booking.pk, {"status": "confirmed"})


def test_owner_confirms_and_stranger_is_forbidden(service, renter, owner, car):
    booking = make_booking(car, renter, aware(2024, 3, 1), aware(2024, 3, 5))

    updated = service.update_booking(actor_from_user(owner), booking.pk, {"status": "confirmed"})
    assert updated.status == Booking.Status.CONFIRMED

    with pytest.raises(Forbidden):
        service.update_booking(actor_from_user(make_user()), booking.pk, {"status": "active"})


def test_renter_cannot_confirm(service, renter, car):
    booking = make_booking(car, renter, aware(2024, 3, 1), aware(2024, 3, 5))
    with pytest.raises(Forbidden):
        service.update_booking(actor_from_user(renter), booking.pk, {"status": "confirmed"})
    booking.refresh_from_db()
    assert booking.status == Booking.Status.PENDING


def test_owner_cannot_cancel_pending(service, renter, owner, car):
    booking = make_booking(car, renter, aware(2024, 3, 1), aware(2024, 3, 5))
    with pytest.raises(Forbidden):
        service.update_booking(actor_from_user(owner), booking.pk, {"status": "cancelled"})


def test_renter_cannot_start_rental(service, renter, car):
    booking = make_booking(car, renter, aware(2024, 3, 1), aware(2024, 3, 5), status=Booking.Status.CONFIRMED)
    with pytest.raises(Forbidden):
        service.update_booking(actor_from_user(renter), booking.pk, {"status": "active"})


def test_same_status_is_an_invalid_transition(service, renter, owner, car):
    booking = make_booking(car, renter, aware(2024, 3, 1), aware(2024, 3, 5))
    with pytest.raises(InvalidStatusTransition):
        service.update_booking(actor_from_user(owner), booking.pk, {"status": "pending"})


def test_admin_walks_full_lifecycle(service, renter, car):
    booking = make_booking(car, renter, aware(2024, 3, 1), aware(2024, 3, 5))
    admin = actor_from_user(make_admin())

    for status in ("confirmed", "active", "completed"):
        booking = service.update_booking(admin, booking.pk, {"status": status})
    assert booking.status == Booking.Status.COMPLETED


def test_confirming_rechecks_availability(service, renter, owner, car):
    make_booking(car, make_user(), aware(2024, 3, 2), aware(2024, 3, 3), status=Booking.Status.CONFIRMED)
    booking = make_booking(car, renter, aware(2024, 3, 1), aware(2024, 3, 5))

    with pytest.raises(DatesNotAvailable):
        service.update_booking(actor_from_user(owner), booking.pk, {"status": "confirmed"})
    booking.refresh_from_db()
    assert booking.status == Booking.Status.PENDING


def test_details_can_be_edited_by_stakeholders(service, renter, car):
    booking = make_booking(car, renter, aware(2024, 3, 1), aware(2024, 3, 5))
    updated = service.update_booking(
        actor_from_user(renter),
        booking.pk,
        {"pickup_location": "Airport", "special_requests": "Child seat"},
    )
    assert updated.pickup_location == "Airport"
    assert updated.special_requests == "Child seat"
    assert updated.status == Booking.Status.PENDING


def test_unknown_fields_are_rejected(service, renter, car):
    booking = make_booking(car, renter, aware(2024, 3, 1), aware(2024, 3, 5))
    with pytest.raises(ValidationError):
        service.update_booking(actor_from_user(renter), booking.pk, {"total_amount": "1.00"})


def test_update_missing_booking(service, renter):
    with pytest.raises(NotFound) as exc:
        service.update_booking(actor_from_user(renter), 424242, {"status": "cancelled"})
    assert exc.value.code == "BOOKING_NOT_FOUND"


# ----- delete_booking -----


def test_renter_deletes_pending_booking(service, renter, car):
    booking = make_booking(car, renter, aware(2024, 3, 1), aware(2024, 3, 5))
    service.delete_booking(actor_from_user(renter), booking.pk)
    assert not Booking.objects.filter(pk=booking.pk).exists()


def test_confirmed_booking_cannot_be_deleted(service, renter, car):
    booking = make_booking(car, renter, aware(2024, 3, 1), aware(2024, 3, 5), status=Booking.Status.CONFIRMED)
    with pytest.raises(ValidationError) as exc:
        service.delete_booking(actor_from_user(renter), booking.pk)
    assert exc.value.code == "CANNOT_DELETE_BOOKING"


def test_owner_cannot_delete_booking(service, renter, owner, car):
    booking = make_booking(car, renter, aware(2024, 3, 1), aware(2024, 3, 5), status=Booking.Status.CANCELLED)
    with pytest.raises(Forbidden):
        service.delete_booking(actor_from_user(owner), booking.pk)


def test_admin_deletes_cancelled_booking(service, renter, car):
    booking = make_booking(car, renter, aware(2024, 3, 1), aware(2024, 3, 5), status=Booking.Status.CANCELLED)
    service.delete_booking(actor_from_user(make_admin()), booking.pk)
    assert Booking.objects.count() == 0


# ----- visibility -----


def test_visibility_scopes(renter, owner, car):
    booking = make_booking(car, renter, aware(2024, 3, 1), aware(2024, 3, 5))
    stranger = make_user()

    assert list(bookings_visible_to(actor_from_user(renter))) == [booking]
    assert list(bookings_visible_to(actor_from_user(owner))) == [booking]
    assert list(bookings_visible_to(actor_from_user(stranger))) == []
    assert list(bookings_visible_to(actor_from_user(make_admin()))) == [booking]


def test_status_none_is_rejected_before_saving(service, renter, car):
    booking = make_booking(car, renter, aware(2024, 3, 1), aware(2024, 3, 5))
    with pytest.raises(ValidationError) as exc:
        service.update_booking(actor_from_user(renter), booking.pk, {"status": None})
    assert exc.value.code == "INVALID_STATUS"
    booking.refresh_from_db()
    assert booking.status == Booking.Status.PENDING


# ----- overlap rules used by the service -----


def test_is_available_checks_only_blocking_bookings_of_the_car(service, car):
    confirmed = make_booking(car, make_user(), aware(2024, 2, 1), aware(2024, 2, 5), status=Booking.Status.CONFIRMED)
    make_booking(car, make_user(), aware(2024, 2, 1), aware(2024, 2, 5))
    make_booking(make_car(), make_user(), aware(2024, 2, 1), aware(2024, 2, 5), status=Booking.Status.ACTIVE)

    with mock.patch("apps.bookings.services.availability.conflicting", wraps=availability.conflicting) as check:
        assert service.is_available(car.pk, aware(2024, 2, 3), aware(2024, 2, 4)) is False

    candidates, start, end, exclude = check.call_args.args
    assert [booking.pk for booking in candidates] == [confirmed.pk]
    assert (start, end, exclude) == (aware(2024, 2, 3), aware(2024, 2, 4), None)


def test_random_creates_and_confirms_never_double_book(service, owner, car):
    rng = random.Random(20240115)
    renters = [actor_from_user(make_user()) for _ in range(5)]
    owner_actor = actor_from_user(owner)

    for _ in range(150):
        start = aware(2024, 2, 1) + timedelta(hours=rng.randrange(0, 24 * 60))
        end = start + timedelta(hours=rng.randrange(1, 24 * 5))
        try:
            booking = service.create_booking(rng.choice(renters), car.pk, start, end)
        except DatesNotAvailable:
            continue
        if rng.random() < 0.8:
            try:
                service.update_booking(owner_actor, booking.pk, {"status": Booking.Status.CONFIRMED})
            except DatesNotAvailable:
                pass

    blocking = list(Booking.objects.filter(car=car, status__in=Booking.BLOCKING_STATUSES))
    assert blocking
    for first, second in itertools.combinations(blocking, 2):
        assert not (first.start_date <= second.end_date and second.start_date <= first.end_date), (first.pk, second.pk)
