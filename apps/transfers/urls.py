"""URL routing for the transfers domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import TransferBookingViewSet, TransferVehicleViewSet

router = DefaultRouter()
router.register(r"vehicles", TransferVehicleViewSet, basename="transfer-vehicle")
router.register(r"bookings", TransferBookingViewSet, basename="transfer-booking")

urlpatterns = [
    path("", include(router.urls)),
]
