"""Booking models for the car rental marketplace."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain import state_machine
from .domain.availability import BLOCKING_STATUSES


class Booking(models.Model):
    """A car rented for the period from pickup to return."""

    class Status(models.TextChoices):
        PENDING = state_machine.PENDING, _("Pending")
        CONFIRMED = state_machine.CONFIRMED, _("Confirmed")
        ACTIVE = state_machine.ACTIVE, _("Active")
        COMPLETED = state_machine.COMPLETED, _("Completed")
        CANCELLED = state_machine.CANCELLED, _("Cancelled")

    BLOCKING_STATUSES = BLOCKING_STATUSES
    DELETABLE_STATUSES = (Status.PENDING, Status.CANCELLED)

    car = models.ForeignKey(
        "cars.Car",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    renter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="rentals",
    )
    start_date = models.DateTimeField(help_text=_("Pickup instant."))
    end_date = models.DateTimeField(help_text=_("Return instant."))
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Daily rate at booking time times the billable days."),
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    pickup_location = models.CharField(max_length=255, blank=True, null=True)
    dropoff_location = models.CharField(max_length=255, blank=True, null=True)
    special_requests = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gt=models.F("start_date")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["car"], name="bookings_car_idx"),
            models.Index(fields=["renter"], name="bookings_renter_idx"),
            models.Index(fields=["status"], name="bookings_status_idx"),
            models.Index(fields=["car", "start_date", "end_date"], name="bookings_car_period_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} for car {self.car_id} ({self.status})"

    @property
    def is_deletable(self) -> bool:
        return self.status in self.DELETABLE_STATUSES

    def roles_of(self, actor):  # type: ignore
        return state_machine.booking_roles(actor, self.renter_id, self.car.owner_id)
