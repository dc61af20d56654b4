"""FilterSet definitions for car search and listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Car


class CarFilterSet(django_filters.FilterSet):
    """Filters used by the public car listing."""

    location = django_filters.CharFilter(field_name="location", lookup_expr="icontains")
    category = django_filters.ChoiceFilter(field_name="category", choices=Car.Category.choices)
    min_price = django_filters.NumberFilter(field_name="daily_rate", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="daily_rate", lookup_expr="lte")
    available = django_filters.BooleanFilter(field_name="is_available")
    seats = django_filters.NumberFilter(field_name="seats", lookup_expr="gte")

    class Meta:
        model = Car
        fields = [
            "location",
            "category",
            "fuel_type",
            "transmission",
        ]
