"""Filter helpers shared by the inventory listings."""

from __future__ import annotations


def filter_json_list_contains_all(queryset, field_name: str, value):
    """Keep rows whose JSON list field holds every item of a CSV value (case-insensitive)."""

    wanted = {item.strip().lower() for item in str(value).split(",") if item.strip()}
    if not wanted:
        return queryset
    ids = [
        pk
        for pk, items in queryset.values_list("pk", field_name)
        if wanted <= {str(item).lower() for item in (items or [])}
    ]
    return queryset.filter(pk__in=ids)
