"""URL routing for the hotels domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import HotelBookingViewSet, HotelPropertyViewSet, RoomViewSet

router = DefaultRouter()
router.register(r"properties", HotelPropertyViewSet, basename="hotel-property")
router.register(r"rooms", RoomViewSet, basename="hotel-room")
router.register(r"bookings", HotelBookingViewSet, basename="hotel-booking")

urlpatterns = [
    path("", include(router.urls)),
]
