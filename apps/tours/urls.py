"""URL routing for the tours domain.

Bookings are registered first so ``bookings/`` is never read as a tour slug.
"""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import TourBookingViewSet, TourViewSet

router = SimpleRouter()
router.register(r"bookings", TourBookingViewSet, basename="tour-booking")
router.register(r"", TourViewSet, basename="tour")

urlpatterns = [
    path("", include(router.urls)),
]
