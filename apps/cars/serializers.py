"""Serializers for the cars domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.bookings.serializers import RESERVATION_FIELDS, ReservationSerializer, domain_errors_as_validation

from .models import CarRental, Vehicle
from .services import create_car_rental


class VehicleSerializer(serializers.ModelSerializer):
    owner_id = serializers.ReadOnlyField(source="owner.id")

    class Meta:
        model = Vehicle
        fields = [
            "id",
            "owner_id",
            "make",
            "model",
            "year",
            "category",
            "transmission",
            "fuel_type",
            "seats",
            "doors",
            "color",
            "license_plate",
            "description",
            "features",
            "city",
            "country",
            "pickup_address",
            "currency",
            "daily_rate",
            "weekly_rate",
            "monthly_rate",
            "deposit",
            "insurance_fee",
            "mileage_limit",
            "extra_mileage_fee",
            "status",
            "average_rating",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "owner_id", "average_rating", "created_at", "updated_at"]


class RentalPeriodQuerySerializer(serializers.Serializer):
    pickup_date = serializers.DateField()
    return_date = serializers.DateField()

    def validate(self, attrs):  # type: ignore
        if attrs["return_date"] <= attrs["pickup_date"]:
            raise serializers.ValidationError("Return date must be after pickup date.")
        return attrs


class CarRentalCreateSerializer(serializers.ModelSerializer):
    vehicle = serializers.PrimaryKeyRelatedField(queryset=Vehicle.objects.all())

    class Meta:
        model = CarRental
        fields = [
            "vehicle",
            "pickup_date",
            "return_date",
            "pickup_time",
            "return_time",
            "pickup_location",
            "return_location",
            "driver_name",
            "driver_email",
            "driver_phone",
            "driver_license_number",
            "driver_license_expiry",
            "driver_date_of_birth",
            "special_requests",
        ]
        extra_kwargs = {
            "driver_license_expiry": {"required": True, "allow_null": False},
            "driver_date_of_birth": {"required": True, "allow_null": False},
        }

    def validate(self, attrs):  # type: ignore
        if attrs["return_date"] <= attrs["pickup_date"]:
            raise serializers.ValidationError("Return date must be after pickup date.")
        return attrs

    def create(self, validated_data):  # type: ignore
        data = dict(validated_data)
        with domain_errors_as_validation():
            return create_car_rental(
                renter=self.context["request"].user,
                vehicle=data.pop("vehicle"),
                pickup_date=data.pop("pickup_date"),
                return_date=data.pop("return_date"),
                **data,
            )


class CarRentalSerializer(ReservationSerializer):
    vehicle_name = serializers.SerializerMethodField()

    class Meta:
        model = CarRental
        fields = RESERVATION_FIELDS + [
            "vehicle",
            "vehicle_name",
            "pickup_date",
            "return_date",
            "pickup_time",
            "return_time",
            "pickup_location",
            "return_location",
            "number_of_days",
            "rate_type",
            "daily_rate",
            "subtotal",
            "insurance_fee",
            "deposit",
            "driver_name",
            "driver_email",
            "driver_phone",
            "driver_license_number",
            "driver_license_expiry",
            "driver_date_of_birth",
            "mileage_start",
            "mileage_end",
            "mileage_charge",
            "deposit_refunded",
            "deposit_refunded_at",
        ]
        read_only_fields = fields

    def get_vehicle_name(self, obj) -> str:  # type: ignore
        return str(obj.vehicle)


class ActivateRentalSerializer(serializers.Serializer):
    mileage_start = serializers.IntegerField(min_value=0, required=False)


class CompleteRentalSerializer(serializers.Serializer):
    mileage_end = serializers.IntegerField(min_value=0, required=False)
