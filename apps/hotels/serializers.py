"""Serializers for the hotels domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.bookings.serializers import (
    RESERVATION_FIELDS,
    RESERVATION_READ_ONLY_FIELDS,
    ReservationSerializer,
    domain_errors_as_validation,
)

from .models import HotelBooking, HotelProperty, Room
from .services import create_hotel_booking


class RoomSerializer(serializers.ModelSerializer):
    max_guests = serializers.ReadOnlyField()

    class Meta:
        model = Room
        fields = [
            "id",
            "property",
            "name",
            "room_type",
            "description",
            "capacity_adults",
            "capacity_children",
            "capacity_infants",
            "max_guests",
            "amenities",
            "base_price",
            "currency",
            "pricing_unit",
            "tax_rate",
            "cleaning_fee",
            "extra_guest_fee",
            "total_units",
            "minimum_stay",
            "maximum_stay",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_property(self, value):  # type: ignore
        user = self.context["request"].user
        if not user.is_admin() and value.owner_id != user.id:
            raise serializers.ValidationError("You can only add rooms to your own properties.")
        return value

    def validate(self, attrs):  # type: ignore
        minimum = attrs.get("minimum_stay", getattr(self.instance, "minimum_stay", 1))
        maximum = attrs.get("maximum_stay", getattr(self.instance, "maximum_stay", None))
        if maximum and maximum < minimum:
            raise serializers.ValidationError({"maximum_stay": "Maximum stay cannot be shorter than minimum stay."})
        return attrs


class HotelPropertySerializer(serializers.ModelSerializer):
    owner_id = serializers.ReadOnlyField(source="owner.id")
    rooms = RoomSerializer(many=True, read_only=True)

    class Meta:
        model = HotelProperty
        fields = [
            "id",
            "owner_id",
            "name",
            "slug",
            "description",
            "property_type",
            "address",
            "city",
            "country",
            "star_rating",
            "amenities",
            "check_in_time",
            "check_out_time",
            "cancellation_policy",
            "status",
            "average_rating",
            "rooms",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "owner_id", "slug", "average_rating", "rooms", "created_at", "updated_at"]


class AvailabilityQuerySerializer(serializers.Serializer):
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    adults = serializers.IntegerField(min_value=1, default=1)
    children = serializers.IntegerField(min_value=0, default=0)

    def validate(self, attrs):  # type: ignore
        if attrs["check_out"] <= attrs["check_in"]:
            raise serializers.ValidationError("Check-out date must be after check-in date.")
        return attrs


class HotelBookingCreateSerializer(serializers.ModelSerializer):
    """A guest holds a room for a stay."""

    room = serializers.PrimaryKeyRelatedField(queryset=Room.objects.select_related("property"))
    check_in_date = serializers.DateField()
    check_out_date = serializers.DateField()
    adults = serializers.IntegerField(min_value=1, default=1)
    children = serializers.IntegerField(min_value=0, default=0)
    infants = serializers.IntegerField(min_value=0, default=0)

    class Meta:
        model = HotelBooking
        fields = [
            "room",
            "check_in_date",
            "check_out_date",
            "adults",
            "children",
            "infants",
            "guest_name",
            "guest_email",
            "guest_phone",
            "special_requests",
        ]
        extra_kwargs = {
            "guest_name": {"required": False, "allow_blank": True},
            "guest_email": {"required": False, "allow_blank": True},
            "guest_phone": {"required": False, "allow_blank": True},
            "special_requests": {"required": False, "allow_blank": True},
        }

    def validate(self, attrs):  # type: ignore
        if attrs["check_in_date"] >= attrs["check_out_date"]:
            raise serializers.ValidationError("Check-out date must be after check-in date.")
        return attrs

    def create(self, validated_data):  # type: ignore
        data = dict(validated_data)
        with domain_errors_as_validation():
            return create_hotel_booking(
                guest=self.context["request"].user,
                room=data.pop("room"),
                check_in=data.pop("check_in_date"),
                check_out=data.pop("check_out_date"),
                **data,
            )


class HotelBookingSerializer(ReservationSerializer):
    room_name = serializers.ReadOnlyField(source="room.name")
    property_name = serializers.ReadOnlyField(source="property.name")

    class Meta:
        model = HotelBooking
        fields = RESERVATION_FIELDS + [
            "room",
            "room_name",
            "property",
            "property_name",
            "check_in_date",
            "check_out_date",
            "nights",
            "adults",
            "children",
            "infants",
            "guest_name",
            "guest_email",
            "guest_phone",
            "room_price",
            "tax_amount",
            "cleaning_fee",
            "extra_guest_fee",
            "price_description",
        ]
        read_only_fields = fields
