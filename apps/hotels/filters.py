"""FilterSet definitions for hotel search and listing."""

from __future__ import annotations

from datetime import date

import django_filters  # type: ignore
from django.db.models import F  # type: ignore

from apps.bookings.filters import filter_json_list_contains_all

from .models import HotelProperty, Room
from .services import properties_with_availability


class HotelPropertyFilterSet(django_filters.FilterSet):
    """Property search: location, type, rating, amenities and dates."""

    city = django_filters.CharFilter(field_name="city", lookup_expr="icontains")
    country = django_filters.CharFilter(field_name="country", lookup_expr="icontains")
    property_type = django_filters.CharFilter(field_name="property_type", lookup_expr="exact")
    min_rating = django_filters.NumberFilter(field_name="average_rating", lookup_expr="gte")
    star_rating = django_filters.NumberFilter(field_name="star_rating", lookup_expr="gte")

    # CSV of amenity names, requires all selected amenities
    amenities = django_filters.CharFilter(method="filter_amenities")

    # Availability search
    check_in = django_filters.DateFilter(method="filter_noop")
    check_out = django_filters.DateFilter(method="filter_noop")
    guests = django_filters.NumberFilter(method="filter_noop")
    min_price = django_filters.NumberFilter(method="filter_noop")
    max_price = django_filters.NumberFilter(method="filter_noop")

    class Meta:
        model = HotelProperty
        fields = ["city", "country", "property_type"]

    def filter_noop(self, queryset, name, value):  # type: ignore
        # Applied together in filter_queryset
        return queryset

    def filter_amenities(self, queryset, name, value):  # type: ignore
        return filter_json_list_contains_all(queryset, "amenities", value)

    def filter_queryset(self, queryset):  # type: ignore
        queryset = super().filter_queryset(queryset)
        data = self.form.cleaned_data
        check_in: date | None = data.get("check_in")
        check_out: date | None = data.get("check_out")
        if check_in and check_out and check_out > check_in:
            queryset = properties_with_availability(
                queryset,
                check_in,
                check_out,
                guests=int(data.get("guests") or 1),
                min_price=data.get("min_price"),
                max_price=data.get("max_price"),
            )
        return queryset


class RoomFilterSet(django_filters.FilterSet):
    property = django_filters.NumberFilter(field_name="property_id")
    room_type = django_filters.CharFilter(field_name="room_type")
    guests = django_filters.NumberFilter(method="filter_guests")
    price_min = django_filters.NumberFilter(field_name="base_price", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="base_price", lookup_expr="lte")

    class Meta:
        model = Room
        fields = ["property", "room_type", "pricing_unit"]

    def filter_guests(self, queryset, name, value):  # type: ignore
        return queryset.annotate(
            guest_capacity=F("capacity_adults") + F("capacity_children")
        ).filter(guest_capacity__gte=int(value))
