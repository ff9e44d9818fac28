"""API views shared by the booking verticals."""

from __future__ import annotations

import logging

from django.db import transaction  # type: ignore
from django.db.models import Q  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .models import Reservation
from .permissions import IsReservationStakeholder
from .serializers import CancelSerializer, domain_errors_as_validation
from .services import lock_queryset_if_possible

logger = logging.getLogger(__name__)


class ReservationViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Create, list and move reservations through their lifecycle.

    Subclasses set ``queryset``, ``serializer_class`` and
    ``create_serializer_class``. Status changes only happen through the
    actions below, never through a generic update.
    """

    permission_classes = [permissions.IsAuthenticated, IsReservationStakeholder]
    create_serializer_class = None

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return self.create_serializer_class
        if self.action == "cancel":
            return CancelSerializer
        return self.serializer_class

    def get_queryset(self):  # type: ignore
        user = self.request.user
        qs = super().get_queryset()
        if user.is_admin():
            return qs
        provider_lookup = qs.model.PROVIDER_LOOKUP
        return qs.filter(Q(guest=user) | Q(**{provider_lookup: user}))

    def _respond(self, reservation):
        data = self.serializer_class(reservation, context=self.get_serializer_context()).data
        return Response(data)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reservation = serializer.save()
        logger.info(
            f"{reservation._meta.label} {reservation.booking_code} held for guest {request.user.pk} "
            f"until {reservation.expires_at}"
        )
        data = self.serializer_class(reservation, context=self.get_serializer_context()).data
        return Response(data, status=status.HTTP_201_CREATED, headers=self.get_success_headers(data))

    def _change_status(self, request, new_status: str):
        """Provider-side transition (confirm, check in, start, complete...)."""
        reservation = self.get_object()
        if not reservation.is_managed_by(request.user):
            return Response(status=status.HTTP_403_FORBIDDEN)
        with domain_errors_as_validation():
            reservation.transition_to(new_status)
        return self._respond(reservation)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        reservation = self.get_object()
        user = request.user
        if reservation.guest_id != user.id and not user.is_admin():
            return Response(status=status.HTTP_403_FORBIDDEN)
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with domain_errors_as_validation():
            reservation.mark_cancelled(serializer.validated_data["reason"])
        return self._respond(reservation)

    @action(detail=True, methods=["post"])
    def confirm_payment(self, request, pk=None):  # type: ignore
        reservation = self.get_object()
        if reservation.guest_id != request.user.id and not request.user.is_admin():
            return Response(status=status.HTTP_403_FORBIDDEN)

        with transaction.atomic():
            # Lock against the expiry sweep
            reservation = lock_queryset_if_possible(type(reservation).objects.filter(pk=reservation.pk)).get()
            if reservation.payment_status == Reservation.PaymentStatus.PAID:
                return Response({"detail": "Payment is already confirmed."}, status=status.HTTP_400_BAD_REQUEST)
            if reservation.status != Reservation.PENDING and reservation.status != Reservation.CONFIRMED:
                return Response(
                    {"detail": "Only pending or confirmed reservations can be paid."},
                    status=status.HTTP_400_BAD_REQUEST,
                )
            if reservation.should_expire():
                return Response(
                    {"detail": "The payment window for this reservation has closed."},
                    status=status.HTTP_400_BAD_REQUEST,
                )
            reservation.mark_paid()

            from apps.notifications.tasks import notify_reservation_confirmed

            label, pk_value = reservation._meta.label, reservation.pk
            transaction.on_commit(lambda: notify_reservation_confirmed.delay(label, pk_value))
        return self._respond(reservation)
