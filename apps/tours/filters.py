"""FilterSet definitions for the tour listing."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Tour


def _csv(value) -> list[str]:
    return [item.strip() for item in str(value).split(",") if item.strip()]


class TourFilterSet(django_filters.FilterSet):
    locations = django_filters.CharFilter(method="filter_locations")
    tour_types = django_filters.CharFilter(method="filter_tour_types")
    durations = django_filters.CharFilter(method="filter_durations")
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    exclude_slug = django_filters.CharFilter(method="filter_exclude_slug")

    class Meta:
        model = Tour
        fields = ["is_active"]

    def filter_locations(self, queryset, name, value):  # type: ignore
        query = Q()
        for location in _csv(value):
            query |= Q(location__icontains=location)
        return queryset.filter(query)

    def filter_tour_types(self, queryset, name, value):  # type: ignore
        return queryset.filter(tour_type__in=_csv(value))

    def filter_durations(self, queryset, name, value):  # type: ignore
        return queryset.filter(duration__in=_csv(value))

    def filter_exclude_slug(self, queryset, name, value):  # type: ignore
        return queryset.exclude(slug=value)
