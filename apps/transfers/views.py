"""Transfer API views."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.permissions import IsInventoryOwnerOrAdmin
from apps.bookings.serializers import domain_errors_as_validation
from apps.bookings.views import ReservationViewSet

from .filters import TransferVehicleFilterSet
from .models import TransferBooking, TransferVehicle
from .serializers import (
    AssignDriverSerializer,
    PickupQuerySerializer,
    TransferBookingCreateSerializer,
    TransferBookingSerializer,
    TransferVehicleSerializer,
)
from .services import assign_driver, check_transfer_availability, pickup_moment


class TransferVehicleViewSet(viewsets.ModelViewSet):
    queryset = TransferVehicle.objects.select_related("owner")
    serializer_class = TransferVehicleSerializer
    permission_classes = [IsInventoryOwnerOrAdmin]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = TransferVehicleFilterSet
    ordering_fields = ["base_price", "price_per_km", "max_passengers", "created_at"]
    vertical = "transfers"

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        user = self.request.user
        if user.is_authenticated and user.is_admin():
            return qs
        if user.is_authenticated and self.action not in {"list", "retrieve", "availability"}:
            return qs.filter(owner=user)
        return qs.exclude(status=TransferVehicle.Status.INACTIVE)

    def perform_create(self, serializer):  # type: ignore
        serializer.save(owner=self.request.user)

    @action(detail=True, methods=["get"], permission_classes=[permissions.AllowAny])
    def availability(self, request, pk=None):  # type: ignore
        """Whether the vehicle is free for `?pickup_date&pickup_time`."""
        vehicle: TransferVehicle = self.get_object()
        query = PickupQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        result = check_transfer_availability(vehicle, pickup_moment(params["pickup_date"], params["pickup_time"]))
        return Response(
            {
                "vehicle": vehicle.pk,
                "pickup_date": params["pickup_date"],
                "pickup_time": params["pickup_time"],
                "available": result.available,
                "reason": result.reason,
                "max_passengers": vehicle.max_passengers,
                "max_luggage": vehicle.max_luggage,
            }
        )


class TransferBookingViewSet(ReservationViewSet):
    """Ride bookings: providers confirm, assign a driver, start and complete them."""

    queryset = TransferBooking.objects.select_related("vehicle", "vehicle__owner", "guest")
    serializer_class = TransferBookingSerializer
    create_serializer_class = TransferBookingCreateSerializer

    def get_serializer_class(self):  # type: ignore
        if self.action == "assign":
            return AssignDriverSerializer
        return super().get_serializer_class()

    @action(detail=True, methods=["post"])
    def confirm(self, request, pk=None):  # type: ignore
        return self._change_status(request, TransferBooking.Status.CONFIRMED)

    @action(detail=True, methods=["post"])
    def assign(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        if not booking.is_managed_by(request.user):
            return Response(status=status.HTTP_403_FORBIDDEN)
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with domain_errors_as_validation():
            assign_driver(booking, **serializer.validated_data)
        return self._respond(booking)

    @action(detail=True, methods=["post"])
    def start(self, request, pk=None):  # type: ignore
        return self._change_status(request, TransferBooking.Status.IN_PROGRESS)

    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):  # type: ignore
        return self._change_status(request, TransferBooking.Status.COMPLETED)
