"""Serializers for the transfers domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.bookings.serializers import RESERVATION_FIELDS, ReservationSerializer, domain_errors_as_validation

from .models import TransferBooking, TransferVehicle
from .services import create_transfer_booking


class TransferVehicleSerializer(serializers.ModelSerializer):
    owner_id = serializers.ReadOnlyField(source="owner.id")

    class Meta:
        model = TransferVehicle
        fields = [
            "id",
            "owner_id",
            "category",
            "make",
            "model",
            "max_passengers",
            "max_luggage",
            "features",
            "city",
            "country",
            "airport_code",
            "currency",
            "base_price",
            "price_per_km",
            "price_per_hour",
            "airport_surcharge",
            "night_surcharge",
            "waiting_time_fee",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "owner_id", "created_at", "updated_at"]


class PickupQuerySerializer(serializers.Serializer):
    pickup_date = serializers.DateField()
    pickup_time = serializers.TimeField(input_formats=["%H:%M", "%H:%M:%S"])


class TransferBookingCreateSerializer(serializers.ModelSerializer):
    vehicle = serializers.PrimaryKeyRelatedField(queryset=TransferVehicle.objects.all())

    class Meta:
        model = TransferBooking
        fields = [
            "vehicle",
            "transfer_type",
            "pickup_address",
            "pickup_city",
            "dropoff_address",
            "dropoff_city",
            "flight_number",
            "pickup_date",
            "pickup_time",
            "estimated_duration_minutes",
            "estimated_distance_km",
            "waiting_minutes",
            "passengers",
            "luggage",
            "child_seats",
            "wheelchair_accessible",
            "contact_name",
            "contact_email",
            "contact_phone",
            "special_requests",
        ]

    def validate(self, attrs):  # type: ignore
        if attrs.get("transfer_type") != "hourly" and not attrs.get("dropoff_address"):
            raise serializers.ValidationError({"dropoff_address": "Drop-off address is required."})
        return attrs

    def create(self, validated_data):  # type: ignore
        data = dict(validated_data)
        with domain_errors_as_validation():
            return create_transfer_booking(
                guest=self.context["request"].user,
                vehicle=data.pop("vehicle"),
                transfer_type=data.pop("transfer_type"),
                pickup_date=data.pop("pickup_date"),
                pickup_time=data.pop("pickup_time"),
                **data,
            )


class TransferBookingSerializer(ReservationSerializer):
    vehicle_name = serializers.SerializerMethodField()

    class Meta:
        model = TransferBooking
        fields = RESERVATION_FIELDS + [
            "vehicle",
            "vehicle_name",
            "transfer_type",
            "pickup_address",
            "pickup_city",
            "dropoff_address",
            "dropoff_city",
            "flight_number",
            "pickup_date",
            "pickup_time",
            "estimated_duration_minutes",
            "estimated_distance_km",
            "waiting_minutes",
            "passengers",
            "luggage",
            "child_seats",
            "wheelchair_accessible",
            "contact_name",
            "contact_email",
            "contact_phone",
            "driver_name",
            "driver_phone",
            "base_price",
            "distance_charge",
            "time_charge",
            "airport_surcharge",
            "night_surcharge",
            "waiting_fee",
        ]
        read_only_fields = fields

    def get_vehicle_name(self, obj) -> str:  # type: ignore
        return str(obj.vehicle)


class AssignDriverSerializer(serializers.Serializer):
    driver_name = serializers.CharField(max_length=255)
    driver_phone = serializers.CharField(max_length=30, required=False, allow_blank=True, default="")
