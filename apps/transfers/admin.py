"""Admin registration for transfers."""

from __future__ import annotations

from django.contrib import admin

from apps.bookings.admin import ReservationAdmin

from .models import TransferBooking, TransferVehicle


@admin.register(TransferVehicle)
class TransferVehicleAdmin(admin.ModelAdmin):
    list_display = ("__str__", "city", "airport_code", "max_passengers", "base_price", "status", "owner")
    list_filter = ("status", "category")
    search_fields = ("make", "model", "city", "owner__email")


@admin.register(TransferBooking)
class TransferBookingAdmin(ReservationAdmin):
    list_display = ReservationAdmin.list_display + ("transfer_type", "pickup_date", "pickup_time", "driver_name")
    list_filter = ReservationAdmin.list_filter + ("transfer_type",)
    search_fields = ReservationAdmin.search_fields + ("flight_number", "contact_name")
