"""Admin registration for cars."""

from __future__ import annotations

from django.contrib import admin

from apps.bookings.admin import ReservationAdmin

from .models import CarRental, Vehicle


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ("__str__", "category", "city", "daily_rate", "status", "owner")
    list_filter = ("status", "category", "transmission", "fuel_type")
    search_fields = ("make", "model", "license_plate", "owner__email")


@admin.register(CarRental)
class CarRentalAdmin(ReservationAdmin):
    list_display = ReservationAdmin.list_display + ("vehicle", "pickup_date", "return_date", "deposit_refunded")
    list_filter = ReservationAdmin.list_filter + ("deposit_refunded",)
    search_fields = ReservationAdmin.search_fields + ("driver_name", "vehicle__license_plate")
