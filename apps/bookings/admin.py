"""Admin helpers shared by the reservation admins of every vertical."""

from __future__ import annotations

from django.contrib import admin


class ReservationAdmin(admin.ModelAdmin):
    list_display = (
        "booking_code",
        "guest",
        "status",
        "payment_status",
        "total_price",
        "currency",
        "created_at",
    )
    list_filter = ("status", "payment_status")
    search_fields = ("booking_code", "guest__email")
    readonly_fields = (
        "booking_code",
        "total_price",
        "paid_at",
        "cancelled_at",
        "created_at",
        "updated_at",
    )
