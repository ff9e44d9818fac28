"""Admin registration for tours."""

from __future__ import annotations

from django.contrib import admin

from apps.bookings.admin import ReservationAdmin

from .models import Tour, TourBooking


@admin.register(Tour)
class TourAdmin(admin.ModelAdmin):
    list_display = ("name", "location", "tour_type", "price", "max_participants", "is_active", "operator")
    list_filter = ("is_active", "tour_type")
    search_fields = ("name", "location", "operator__email")
    prepopulated_fields = {"slug": ("name",)}


@admin.register(TourBooking)
class TourBookingAdmin(ReservationAdmin):
    list_display = ReservationAdmin.list_display + ("tour", "tour_date", "total_participants")
    list_filter = ReservationAdmin.list_filter + ("tour_date",)
    search_fields = ReservationAdmin.search_fields + ("tour__name", "contact_name")
