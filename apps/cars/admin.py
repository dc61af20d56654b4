"""Admin registrations for the cars app."""

from __future__ import annotations

from django.contrib import admin

from .models import Car


@admin.register(Car)
class CarAdmin(admin.ModelAdmin):
    list_display = (
        "plate_number",
        "make",
        "model",
        "year",
        "category",
        "daily_rate",
        "location",
        "is_available",
        "is_verified",
        "owner",
    )
    list_filter = ("is_verified", "is_available", "category", "fuel_type", "transmission")
    search_fields = ("plate_number", "vin", "make", "model", "owner__email")
    readonly_fields = ("created_at", "updated_at")
    actions = ("mark_verified",)

    @admin.action(description="Mark selected cars as verified")
    def mark_verified(self, request, queryset):  # type: ignore
        queryset.update(is_verified=True)
