"""Car listing models."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Car(models.Model):
    """A car listed for daily rental by its owner."""

    class FuelType(models.TextChoices):
        PETROL = "petrol", _("Petrol")
        DIESEL = "diesel", _("Diesel")
        HYBRID = "hybrid", _("Hybrid")
        ELECTRIC = "electric", _("Electric")

    class Transmission(models.TextChoices):
        MANUAL = "manual", _("Manual")
        AUTOMATIC = "automatic", _("Automatic")

    class Category(models.TextChoices):
        ECONOMY = "economy", _("Economy")
        COMPACT = "compact", _("Compact")
        MID_SIZE = "mid-size", _("Mid-size")
        FULL_SIZE = "full-size", _("Full-size")
        LUXURY = "luxury", _("Luxury")
        SUV = "suv", _("SUV")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cars",
    )
    make = models.CharField(max_length=50)
    model = models.CharField(max_length=50)
    year = models.PositiveSmallIntegerField(validators=[MinValueValidator(1900)])
    color = models.CharField(max_length=30)
    plate_number = models.CharField(max_length=20, unique=True)
    vin = models.CharField(max_length=17, unique=True, null=True, blank=True)
    fuel_type = models.CharField(max_length=20, choices=FuelType.choices)
    transmission = models.CharField(max_length=20, choices=Transmission.choices)
    seats = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(20)])
    category = models.CharField(max_length=20, choices=Category.choices)
    daily_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    description = models.TextField(blank=True)
    features = models.JSONField(default=list, blank=True)
    location = models.CharField(max_length=255, help_text=_("City or area of pickup."))
    latitude = models.DecimalField(max_digits=10, decimal_places=8, null=True, blank=True)
    longitude = models.DecimalField(max_digits=11, decimal_places=8, null=True, blank=True)
    is_available = models.BooleanField(default=True)
    is_verified = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Car")
        verbose_name_plural = _("Cars")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["owner"], name="cars_owner_idx"),
            models.Index(fields=["location"], name="cars_location_idx"),
            models.Index(fields=["is_available"], name="cars_available_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.year} {self.make} {self.model} ({self.plate_number})"

    @property
    def is_bookable(self) -> bool:
        return self.is_available and self.is_verified

    def has_blocking_bookings(self) -> bool:
        from apps.bookings.models import Booking  # Local import to prevent circular dependency

        return self.bookings.filter(status__in=Booking.BLOCKING_STATUSES).exists()
