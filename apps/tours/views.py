"""Tour API views."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter, SearchFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.permissions import IsInventoryOwnerOrAdmin
from apps.bookings.serializers import domain_errors_as_validation
from apps.bookings.views import ReservationViewSet

from .filters import TourFilterSet
from .models import Tour, TourBooking
from .serializers import TourBookingCreateSerializer, TourBookingSerializer, TourQuoteQuerySerializer, TourSerializer
from .services import quote_tour, remaining_capacity, tour_filter_options


class TourViewSet(viewsets.ModelViewSet):
    """Tour catalogue looked up by slug. Public read, tour operators manage their own."""

    queryset = Tour.objects.select_related("operator")
    serializer_class = TourSerializer
    permission_classes = [IsInventoryOwnerOrAdmin]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = TourFilterSet
    search_fields = ["name", "description", "location"]
    ordering_fields = ["price", "average_rating", "created_at"]
    lookup_field = "slug"
    vertical = "tours"
    owner_path = "operator_id"

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        user = self.request.user
        if user.is_authenticated and user.is_admin():
            return qs
        if user.is_authenticated and self.action in {"update", "partial_update", "destroy"}:
            return qs.filter(operator=user)
        return qs.filter(is_active=True)

    def perform_create(self, serializer):  # type: ignore
        serializer.save(operator=self.request.user)

    @action(detail=False, methods=["get"], url_path="filter-options", permission_classes=[permissions.AllowAny])
    def filter_options(self, request):  # type: ignore
        return Response(tour_filter_options(self.get_queryset()))

    @action(detail=True, methods=["get"], permission_classes=[permissions.AllowAny])
    def quote(self, request, slug=None):  # type: ignore
        """Price for `?adults&children&seniors`, with seats left when `tour_date` is given."""
        tour: Tour = self.get_object()
        query = TourQuoteQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        with domain_errors_as_validation():
            quote = quote_tour(tour, params["adults"], params["children"], params["seniors"])
        data = quote.as_dict()
        if params.get("tour_date"):
            data["tour_date"] = params["tour_date"]
            data["remaining_capacity"] = remaining_capacity(tour, params["tour_date"])
        return Response(data)


class TourBookingViewSet(ReservationViewSet):
    queryset = TourBooking.objects.select_related("tour", "tour__operator", "guest")
    serializer_class = TourBookingSerializer
    create_serializer_class = TourBookingCreateSerializer

    @action(detail=True, methods=["post"])
    def confirm(self, request, pk=None):  # type: ignore
        return self._change_status(request, TourBooking.Status.CONFIRMED)

    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):  # type: ignore
        return self._change_status(request, TourBooking.Status.COMPLETED)
