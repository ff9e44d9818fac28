"""Admin registration for hotels."""

from __future__ import annotations

from django.contrib import admin

from apps.bookings.admin import ReservationAdmin

from .models import HotelBooking, HotelProperty, Room


class RoomInline(admin.TabularInline):
    model = Room
    extra = 0
    fields = ("name", "room_type", "base_price", "pricing_unit", "total_units", "is_active")


@admin.register(HotelProperty)
class HotelPropertyAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "country", "property_type", "status", "owner", "created_at")
    list_filter = ("status", "property_type", "country")
    search_fields = ("name", "city", "owner__email")
    prepopulated_fields = {"slug": ("name",)}
    inlines = [RoomInline]


@admin.register(HotelBooking)
class HotelBookingAdmin(ReservationAdmin):
    list_display = ReservationAdmin.list_display + ("room", "check_in_date", "check_out_date")
    list_filter = ReservationAdmin.list_filter + ("check_in_date",)
    search_fields = ReservationAdmin.search_fields + ("property__name", "guest_name")
