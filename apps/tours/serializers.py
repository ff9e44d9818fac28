"""Serializers for the tours domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.bookings.serializers import RESERVATION_FIELDS, ReservationSerializer, domain_errors_as_validation

from .models import Tour, TourBooking
from .services import create_tour_booking


class TourSerializer(serializers.ModelSerializer):
    operator_id = serializers.ReadOnlyField(source="operator.id")

    class Meta:
        model = Tour
        fields = [
            "id",
            "operator_id",
            "name",
            "slug",
            "description",
            "location",
            "tour_type",
            "duration",
            "price",
            "currency",
            "max_participants",
            "meeting_point",
            "itinerary",
            "inclusions",
            "exclusions",
            "is_active",
            "average_rating",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "operator_id", "slug", "average_rating", "created_at", "updated_at"]


class TourQuoteQuerySerializer(serializers.Serializer):
    adults = serializers.IntegerField(min_value=0, default=1)
    children = serializers.IntegerField(min_value=0, default=0)
    seniors = serializers.IntegerField(min_value=0, default=0)
    tour_date = serializers.DateField(required=False)


class TourBookingCreateSerializer(serializers.ModelSerializer):
    tour = serializers.SlugRelatedField(slug_field="slug", queryset=Tour.objects.all())

    class Meta:
        model = TourBooking
        fields = [
            "tour",
            "tour_date",
            "tour_time",
            "adults",
            "children",
            "seniors",
            "contact_name",
            "contact_email",
            "contact_phone",
            "dietary_restrictions",
            "accessibility_needs",
            "special_requests",
        ]

    def create(self, validated_data):  # type: ignore
        data = dict(validated_data)
        with domain_errors_as_validation():
            return create_tour_booking(
                guest=self.context["request"].user,
                tour=data.pop("tour"),
                tour_date=data.pop("tour_date"),
                **data,
            )


class TourBookingSerializer(ReservationSerializer):
    tour_slug = serializers.ReadOnlyField(source="tour.slug")
    tour_name = serializers.ReadOnlyField(source="tour.name")

    class Meta:
        model = TourBooking
        fields = RESERVATION_FIELDS + [
            "tour_slug",
            "tour_name",
            "tour_date",
            "tour_time",
            "adults",
            "children",
            "seniors",
            "total_participants",
            "adult_price",
            "child_price",
            "senior_price",
            "subtotal",
            "tax_amount",
            "contact_name",
            "contact_email",
            "contact_phone",
            "dietary_restrictions",
            "accessibility_needs",
        ]
        read_only_fields = fields
