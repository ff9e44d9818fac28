"""FilterSet definitions for transfer vehicle search."""

from __future__ import annotations

import django_filters  # type: ignore

from apps.bookings.filters import filter_json_list_contains_all

from .models import TransferVehicle


class TransferVehicleFilterSet(django_filters.FilterSet):
    city = django_filters.CharFilter(field_name="city", lookup_expr="icontains")
    country = django_filters.CharFilter(field_name="country", lookup_expr="icontains")
    airport_code = django_filters.CharFilter(field_name="airport_code", lookup_expr="iexact")
    category = django_filters.CharFilter(field_name="category")
    passengers = django_filters.NumberFilter(field_name="max_passengers", lookup_expr="gte")
    luggage = django_filters.NumberFilter(field_name="max_luggage", lookup_expr="gte")
    features = django_filters.CharFilter(method="filter_features")

    class Meta:
        model = TransferVehicle
        fields = ["city", "country", "airport_code", "category"]

    def filter_features(self, queryset, name, value):  # type: ignore
        return filter_json_list_contains_all(queryset, "features", value)
