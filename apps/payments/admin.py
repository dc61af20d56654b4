from django.contrib import admin

from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "booking",
        "reference",
        "amount",
        "payment_method",
        "status",
        "paid_at",
        "created_at",
    )
    search_fields = ("booking__id", "reference")
    list_filter = ("status", "payment_method")
    readonly_fields = ("created_at", "updated_at", "paid_at")
