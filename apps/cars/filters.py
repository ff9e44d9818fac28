"""FilterSet definitions for vehicle search."""

from __future__ import annotations

import django_filters  # type: ignore

from apps.bookings.filters import filter_json_list_contains_all

from .models import Vehicle
from .services import vehicles_available_between


class VehicleFilterSet(django_filters.FilterSet):
    city = django_filters.CharFilter(field_name="city", lookup_expr="icontains")
    country = django_filters.CharFilter(field_name="country", lookup_expr="icontains")
    category = django_filters.CharFilter(field_name="category")
    transmission = django_filters.CharFilter(field_name="transmission")
    fuel_type = django_filters.CharFilter(field_name="fuel_type")
    min_seats = django_filters.NumberFilter(field_name="seats", lookup_expr="gte")
    min_price = django_filters.NumberFilter(field_name="daily_rate", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="daily_rate", lookup_expr="lte")
    features = django_filters.CharFilter(method="filter_features")
    pickup_date = django_filters.DateFilter(method="filter_noop")
    return_date = django_filters.DateFilter(method="filter_noop")

    class Meta:
        model = Vehicle
        fields = ["city", "country", "category", "transmission", "fuel_type"]

    def filter_noop(self, queryset, name, value):  # type: ignore
        return queryset

    def filter_features(self, queryset, name, value):  # type: ignore
        return filter_json_list_contains_all(queryset, "features", value)

    def filter_queryset(self, queryset):  # type: ignore
        queryset = super().filter_queryset(queryset)
        pickup = self.form.cleaned_data.get("pickup_date")
        return_ = self.form.cleaned_data.get("return_date")
        if pickup and return_ and return_ > pickup:
            queryset = vehicles_available_between(queryset, pickup, return_)
        return queryset
