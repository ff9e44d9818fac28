"""Car rental API views."""

from __future__ import annotations

from django.shortcuts import get_object_or_404  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.permissions import IsInventoryOwnerOrAdmin
from apps.bookings.serializers import domain_errors_as_validation
from apps.bookings.services import validate_future_range
from apps.bookings.views import ReservationViewSet

from .filters import VehicleFilterSet
from .models import CarRental, Vehicle
from .serializers import (
    ActivateRentalSerializer,
    CarRentalCreateSerializer,
    CarRentalSerializer,
    CompleteRentalSerializer,
    RentalPeriodQuerySerializer,
    VehicleSerializer,
)
from .services import activate_rental, check_vehicle_availability, complete_rental, quote_rental


class VehicleViewSet(viewsets.ModelViewSet):
    """Rental fleet. Public read, car owners manage their own vehicles."""

    queryset = Vehicle.objects.select_related("owner")
    serializer_class = VehicleSerializer
    permission_classes = [IsInventoryOwnerOrAdmin]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = VehicleFilterSet
    ordering_fields = ["daily_rate", "year", "average_rating", "created_at"]
    vertical = "cars"

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        user = self.request.user
        if user.is_authenticated and user.is_admin():
            return qs
        if user.is_authenticated and self.action not in {"list", "retrieve", "availability"}:
            return qs.filter(owner=user)
        return qs.exclude(status=Vehicle.Status.INACTIVE)

    def perform_create(self, serializer):  # type: ignore
        serializer.save(owner=self.request.user)

    @action(detail=True, methods=["get"], permission_classes=[permissions.AllowAny])
    def availability(self, request, pk=None):  # type: ignore
        """Whether the vehicle is free for `?pickup_date&return_date`, with the rental quote."""
        # Bypass the list filters: they hide vehicles busy in the requested range
        vehicle: Vehicle = get_object_or_404(self.get_queryset(), pk=pk)
        self.check_object_permissions(request, vehicle)
        query = RentalPeriodQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        pickup, return_ = query.validated_data["pickup_date"], query.validated_data["return_date"]
        with domain_errors_as_validation():
            validate_future_range(pickup, return_)

        result = check_vehicle_availability(vehicle, pickup, return_)
        return Response(
            {
                "vehicle": vehicle.pk,
                "pickup_date": pickup,
                "return_date": return_,
                "available": result.available,
                "reason": result.reason,
                "quote": quote_rental(vehicle, pickup, return_).as_dict(),
                "mileage_limit": vehicle.mileage_limit,
                "extra_mileage_fee": vehicle.extra_mileage_fee,
            }
        )


class CarRentalViewSet(ReservationViewSet):
    """Rentals: renters hold and cancel, vehicle owners confirm, hand over and close them."""

    queryset = CarRental.objects.select_related("vehicle", "vehicle__owner", "guest")
    serializer_class = CarRentalSerializer
    create_serializer_class = CarRentalCreateSerializer

    def get_serializer_class(self):  # type: ignore
        if self.action == "activate":
            return ActivateRentalSerializer
        if self.action == "complete":
            return CompleteRentalSerializer
        return super().get_serializer_class()

    @action(detail=True, methods=["post"])
    def confirm(self, request, pk=None):  # type: ignore
        return self._change_status(request, CarRental.Status.CONFIRMED)

    @action(detail=True, methods=["post"])
    def activate(self, request, pk=None):  # type: ignore
        rental = self.get_object()
        if not rental.is_managed_by(request.user):
            return Response(status=status.HTTP_403_FORBIDDEN)
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with domain_errors_as_validation():
            activate_rental(rental, serializer.validated_data.get("mileage_start"))
        return self._respond(rental)

    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):  # type: ignore
        rental = self.get_object()
        if not rental.is_managed_by(request.user):
            return Response(status=status.HTTP_403_FORBIDDEN)
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with domain_errors_as_validation():
            complete_rental(rental, serializer.validated_data.get("mileage_end"))
        return self._respond(rental)
