"""Domain services shared by the booking verticals."""

from __future__ import annotations

import logging
from datetime import date

from django.db import transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from shared.domain.value_objects import DateRange

from .domain.inventory import Inventory
from .exceptions import BookingRuleError

logger = logging.getLogger(__name__)


def lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def lock_inventory_item(instance):
    """Row-lock the booked item so its reservations are checked one at a time.

    Holds even for the first reservation of an item, when there are no
    overlapping rows to lock yet.
    """

    lock_queryset_if_possible(type(instance)._default_manager.filter(pk=instance.pk)).get()


def overlap_filter(start_field: str, end_field: str, start, end) -> Q:
    """Half-open overlap: existing.start < end and existing.end > start."""
    return Q(**{f"{start_field}__lt": end}) & Q(**{f"{end_field}__gt": start})


def validate_future_range(start: date, end: date) -> DateRange:
    if start < timezone.localdate():
        raise BookingRuleError("Start date cannot be in the past.")
    if end <= start:
        raise BookingRuleError("End date must be after start date.")
    return DateRange(start, end)


def blocking_reservations(queryset, start_field: str, end_field: str, start, end, *, exclude_pk=None):
    """Reservations in a blocking status that overlap the period, locked when possible."""

    model = queryset.model
    qs = queryset.filter(status__in=model.BLOCKING_STATUSES).filter(
        overlap_filter(start_field, end_field, start, end)
    )
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    return lock_queryset_if_possible(qs)


def build_inventory(capacity: int, reservations, start_field: str, end_field: str) -> Inventory:
    ranges = [
        DateRange(getattr(r, start_field), getattr(r, end_field))
        for r in reservations
    ]
    return Inventory.from_ranges(capacity, ranges)
