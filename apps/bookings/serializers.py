"""Serializer helpers shared by the booking verticals."""

from __future__ import annotations

from contextlib import contextmanager

from rest_framework import serializers  # type: ignore

from .exceptions import BookingError

RESERVATION_FIELDS = [
    "id",
    "booking_code",
    "guest_id",
    "status",
    "payment_status",
    "currency",
    "total_price",
    "special_requests",
    "expires_at",
    "paid_at",
    "cancelled_at",
    "cancellation_reason",
    "created_at",
    "updated_at",
]

RESERVATION_READ_ONLY_FIELDS = [
    field for field in RESERVATION_FIELDS if field != "special_requests"
]


@contextmanager
def domain_errors_as_validation():
    """Report booking rule violations as `{"non_field_errors": [...]}`."""
    try:
        yield
    except BookingError as exc:
        raise serializers.ValidationError({"non_field_errors": [str(exc)]})


class ReservationSerializer(serializers.ModelSerializer):
    """Base for the read serializers of every vertical."""

    guest_id = serializers.ReadOnlyField(source="guest.id")


class CancelSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, max_length=255, default="")
