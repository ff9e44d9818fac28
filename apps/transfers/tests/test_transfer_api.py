"""Integration tests for transfer availability and bookings."""

from __future__ import annotations

from datetime import datetime, time, timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.transfers.models import TransferBooking, TransferVehicle
from apps.transfers.services import check_transfer_availability
from apps.users.models import User


class TransferBookingAPITests(APITestCase):
    def setUp(self) -> None:
        self.provider = User.objects.create_user(
            email="rides@example.com",
            password="ProviderPass123",
            role=User.RoleChoices.TRANSFER_PROVIDER,
        )
        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        self.vehicle = TransferVehicle.objects.create(
            owner=self.provider,
            make="Toyota",
            model="Hiace",
            category=TransferVehicle.Category.VAN,
            max_passengers=8,
            max_luggage=6,
            city="Dar es Salaam",
            country="Tanzania",
            airport_code="DAR",
            base_price=Decimal("15.00"),
            price_per_km=Decimal("1.00"),
            airport_surcharge=Decimal("10.00"),
        )
        self.pickup_date = timezone.localdate() + timedelta(days=3)
        self.list_url = reverse("transfer-booking-list")
        self.client.force_authenticate(self.guest)

    def _payload(self, pickup_time: str, **extra) -> dict:
        payload = {
            "vehicle": self.vehicle.pk,
            "transfer_type": "airport_to_city",
            "pickup_address": "Julius Nyerere International Airport",
            "dropoff_address": "Slipway, Msasani",
            "flight_number": "KQ484",
            "pickup_date": str(self.pickup_date),
            "pickup_time": pickup_time,
            "estimated_distance_km": "20.00",
            "passengers": 2,
            "luggage": 3,
        }
        payload.update(extra)
        return payload

    def test_guest_books_airport_transfer(self) -> None:
        response = self.client.post(self.list_url, self._payload("14:00"), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        booking = TransferBooking.objects.get()
        self.assertEqual(booking.distance_charge, Decimal("20.00"))
        self.assertEqual(booking.airport_surcharge, Decimal("10.00"))
        self.assertEqual(booking.total_price, Decimal("45.00"))
        self.assertEqual(booking.contact_email, "guest@example.com")

    def test_buffer_blocks_nearby_pickups(self) -> None:
        self.client.post(self.list_url, self._payload("14:00"), format="json")

        close = self.client.post(self.list_url, self._payload("16:30"), format="json")
        far = self.client.post(self.list_url, self._payload("17:30"), format="json")

        self.assertEqual(close.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("already booked", close.data["non_field_errors"][0])
        self.assertEqual(far.status_code, status.HTTP_201_CREATED, far.data)

    def test_buffer_spans_midnight(self) -> None:
        TransferBooking.objects.create(
            guest=self.guest,
            vehicle=self.vehicle,
            transfer_type="point_to_point",
            pickup_address="Hotel",
            pickup_date=self.pickup_date,
            pickup_time=time(23, 0),
            status=TransferBooking.Status.CONFIRMED,
        )

        next_morning = datetime.combine(self.pickup_date + timedelta(days=1), time(1, 0))
        later = datetime.combine(self.pickup_date + timedelta(days=1), time(2, 30))

        self.assertFalse(check_transfer_availability(self.vehicle, next_morning).available)
        self.assertTrue(check_transfer_availability(self.vehicle, later).available)

    def test_capacity_limits(self) -> None:
        too_many = self.client.post(self.list_url, self._payload("10:00", passengers=9), format="json")
        too_much_luggage = self.client.post(self.list_url, self._payload("10:00", luggage=7), format="json")

        self.assertEqual(too_many.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("at most 8", too_many.data["non_field_errors"][0])
        self.assertEqual(too_much_luggage.status_code, status.HTTP_400_BAD_REQUEST)

    def test_past_pickup_is_rejected(self) -> None:
        payload = self._payload("10:00", pickup_date=str(timezone.localdate() - timedelta(days=1)))

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_availability_endpoint(self) -> None:
        self.client.post(self.list_url, self._payload("14:00"), format="json")
        url = reverse("transfer-vehicle-availability", args=[self.vehicle.pk])
        self.client.force_authenticate(None)

        busy = self.client.get(url, {"pickup_date": self.pickup_date, "pickup_time": "12:00"})
        free = self.client.get(url, {"pickup_date": self.pickup_date, "pickup_time": "18:00"})
        invalid = self.client.get(url, {"pickup_date": self.pickup_date})

        self.assertFalse(busy.data["available"])
        self.assertTrue(free.data["available"])
        self.assertEqual(invalid.status_code, status.HTTP_400_BAD_REQUEST)

    def test_provider_runs_ride(self) -> None:
        booking_id = self.client.post(self.list_url, self._payload("14:00"), format="json").data["id"]

        self.client.force_authenticate(self.provider)
        self.client.post(reverse("transfer-booking-confirm", args=[booking_id]))
        assign = self.client.post(
            reverse("transfer-booking-assign", args=[booking_id]),
            {"driver_name": "Baraka", "driver_phone": "+255700000001"},
        )
        start = self.client.post(reverse("transfer-booking-start", args=[booking_id]))
        complete = self.client.post(reverse("transfer-booking-complete", args=[booking_id]))

        self.assertEqual(assign.status_code, status.HTTP_200_OK, assign.data)
        self.assertEqual(assign.data["driver_name"], "Baraka")
        self.assertEqual(start.data["status"], TransferBooking.Status.IN_PROGRESS)
        self.assertEqual(complete.data["status"], TransferBooking.Status.COMPLETED)

    def test_cannot_start_before_assignment(self) -> None:
        booking_id = self.client.post(self.list_url, self._payload("14:00"), format="json").data["id"]

        self.client.force_authenticate(self.provider)
        response = self.client.post(reverse("transfer-booking-start", args=[booking_id]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_guest_cancels_assigned_ride(self) -> None:
        booking_id = self.client.post(self.list_url, self._payload("14:00"), format="json").data["id"]
        TransferBooking.objects.filter(pk=booking_id).update(status=TransferBooking.Status.ASSIGNED)

        response = self.client.post(reverse("transfer-booking-cancel", args=[booking_id]), {"reason": "Flight cancelled"})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], TransferBooking.Status.CANCELLED)
