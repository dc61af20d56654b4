"""Builders for users, cars and bookings used across the test suites."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal
from itertools import count

from django.utils import timezone

from apps.bookings.models import Booking
from apps.cars.models import Car
from apps.users.models import User

_seq = count(1)


def make_user(role: str = User.RoleChoices.BUYER, **extra) -> User:
    n = next(_seq)
    extra.setdefault("email", f"user{n}@example.com")
    extra.setdefault("first_name", f"First{n}")
    extra.setdefault("last_name", f"Last{n}")
    return User.objects.create_user(password="StrongPass123", role=role, **extra)


def make_seller(**extra) -> User:
    return make_user(User.RoleChoices.SELLER, **extra)


def make_admin(**extra) -> User:
    return make_user(User.RoleChoices.ADMIN, **extra)


def make_car(owner: User | None = None, **extra) -> Car:
    n = next(_seq)
    fields = {
        "make": "Toyota",
        "model": "Corolla",
        "year": 2020,
        "color": "Silver",
        "plate_number": f"LAG-{n:04d}",
        "fuel_type": Car.FuelType.PETROL,
        "transmission": Car.Transmission.AUTOMATIC,
        "seats": 5,
        "category": Car.Category.COMPACT,
        "daily_rate": Decimal("100.00"),
        "location": "Lagos",
        "is_available": True,
        "is_verified": True,
    }
    fields.update(extra)
    return Car.objects.create(owner=owner or make_seller(), **fields)


def make_booking(
    car: Car,
    renter: User,
    start: datetime,
    end: datetime,
    status: str = Booking.Status.PENDING,
    **extra,
) -> Booking:
    return Booking.objects.create(
        car=car,
        renter=renter,
        start_date=start,
        end_date=end,
        status=status,
        total_amount=extra.pop("total_amount", Decimal("100.00")),
        **extra,
    )


def aware(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=dt_timezone.utc)


def days_from_now(days: int) -> datetime:
    return (timezone.now() + timedelta(days=days)).replace(microsecond=0)
