"""URL routing for the cars domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import CarRentalViewSet, VehicleViewSet

router = DefaultRouter()
router.register(r"vehicles", VehicleViewSet, basename="car-vehicle")
router.register(r"rentals", CarRentalViewSet, basename="car-rental")

urlpatterns = [
    path("", include(router.urls)),
]
