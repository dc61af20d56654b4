"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "car",
        "renter",
        "status",
        "start_date",
        "end_date",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "start_date", "end_date")
    search_fields = ("car__plate_number", "car__make", "renter__email")
    raw_id_fields = ("car", "renter")
    readonly_fields = ("created_at", "updated_at", "total_amount")
