"""Hotel API views."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.permissions import IsInventoryOwnerOrAdmin
from apps.bookings.serializers import domain_errors_as_validation
from apps.bookings.views import ReservationViewSet

from .filters import HotelPropertyFilterSet, RoomFilterSet
from .models import HotelBooking, HotelProperty, Room
from .serializers import (
    AvailabilityQuerySerializer,
    HotelBookingCreateSerializer,
    HotelBookingSerializer,
    HotelPropertySerializer,
    RoomSerializer,
)
from .services import check_room_availability, quote_room_stay, validate_stay


class HotelPropertyViewSet(viewsets.ModelViewSet):
    """Hotel listings. Public read, property owners manage their own."""

    queryset = HotelProperty.objects.select_related("owner").prefetch_related("rooms")
    serializer_class = HotelPropertySerializer
    permission_classes = [IsInventoryOwnerOrAdmin]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = HotelPropertyFilterSet
    ordering_fields = ["average_rating", "star_rating", "created_at", "name"]
    vertical = "hotels"

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        user = self.request.user
        if user.is_authenticated and user.is_admin():
            return qs
        if user.is_authenticated and self.action not in {"list", "retrieve"}:
            return qs.filter(owner=user)
        return qs.filter(status=HotelProperty.Status.ACTIVE)

    def perform_create(self, serializer):  # type: ignore
        serializer.save(owner=self.request.user)


class RoomViewSet(viewsets.ModelViewSet):
    queryset = Room.objects.select_related("property", "property__owner")
    serializer_class = RoomSerializer
    permission_classes = [IsInventoryOwnerOrAdmin]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = RoomFilterSet
    ordering_fields = ["base_price", "capacity_adults"]
    vertical = "hotels"
    owner_path = "property.owner_id"

    @action(detail=True, methods=["get"], permission_classes=[permissions.AllowAny])
    def availability(self, request, pk=None):  # type: ignore
        """Free units and the price quote for `?check_in&check_out[&adults&children]`."""
        room: Room = self.get_object()
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        result = check_room_availability(room, params["check_in"], params["check_out"])
        data = {
            "room": room.pk,
            "check_in": params["check_in"],
            "check_out": params["check_out"],
            "available": result.available,
            "available_units": result.available_units,
            "total_units": result.total_units,
            "reason": result.reason,
        }
        with domain_errors_as_validation():
            validate_stay(room, params["check_in"], params["check_out"], params["adults"], params["children"])
        data["quote"] = quote_room_stay(
            room, params["check_in"], params["check_out"], params["adults"], params["children"]
        ).as_dict()
        return Response(data)


class HotelBookingViewSet(ReservationViewSet):
    """Room reservations: guests hold and cancel, owners confirm and check guests in and out."""

    queryset = HotelBooking.objects.select_related("room", "property", "guest")
    serializer_class = HotelBookingSerializer
    create_serializer_class = HotelBookingCreateSerializer

    @action(detail=True, methods=["post"])
    def confirm(self, request, pk=None):  # type: ignore
        return self._change_status(request, HotelBooking.Status.CONFIRMED)

    @action(detail=True, methods=["post"])
    def check_in(self, request, pk=None):  # type: ignore
        return self._change_status(request, HotelBooking.Status.CHECKED_IN)

    @action(detail=True, methods=["post"])
    def check_out(self, request, pk=None):  # type: ignore
        return self._change_status(request, HotelBooking.Status.CHECKED_OUT)
