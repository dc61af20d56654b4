"""Admin registration for reviews."""

from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('id', 'booking', 'reviewer', 'reviewed', 'review_type', 'rating', 'created_at')
    list_filter = ('review_type', 'rating')
    search_fields = ('reviewer__email', 'reviewed__email', 'comment')
    raw_id_fields = ('booking', 'reviewer', 'reviewed')
