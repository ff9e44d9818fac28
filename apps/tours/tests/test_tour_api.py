"""Tests for tour pricing, capacity and booking endpoints."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.test import SimpleTestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.exceptions import BookingRuleError
from apps.bookings.services import lock_inventory_item
from apps.bookings.tasks import advance_reservation_statuses
from apps.tours.models import Tour, TourBooking
from apps.tours.services import quote_tour, remaining_capacity
from apps.users.models import User


class QuoteTourTests(SimpleTestCase):
    def test_child_and_senior_rates_with_tax(self) -> None:
        tour = Tour(name="Serengeti Safari", price=Decimal("100.00"), currency="USD")

        quote = quote_tour(tour, adults=2, children=1, seniors=1)

        self.assertEqual(quote.child_price.amount, Decimal("70.00"))
        self.assertEqual(quote.senior_price.amount, Decimal("85.00"))
        self.assertEqual(quote.subtotal.amount, Decimal("355.00"))
        self.assertEqual(quote.tax.amount, Decimal("35.50"))
        self.assertEqual(quote.total.amount, Decimal("390.50"))
        self.assertEqual(quote.participants, 4)

    def test_zero_participants(self) -> None:
        tour = Tour(name="Stone Town Walk", price=Decimal("20.00"))

        with self.assertRaises(BookingRuleError):
            quote_tour(tour, adults=0)


class TourBookingAPITests(APITestCase):
    def setUp(self) -> None:
        self.operator = User.objects.create_user(
            email="tours@example.com",
            password="OperatorPass123",
            role=User.RoleChoices.TOUR_OPERATOR,
        )
        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        self.tour = Tour.objects.create(
            operator=self.operator,
            name="Kilimanjaro Day Hike",
            location="Moshi, Tanzania",
            tour_type="hiking",
            duration="1 day",
            price=Decimal("80.00"),
            max_participants=5,
        )
        self.tour_date = timezone.localdate() + timedelta(days=7)
        self.list_url = reverse("tour-booking-list")
        self.client.force_authenticate(self.guest)

    def _book(self, **extra):
        payload = {"tour": self.tour.slug, "tour_date": str(self.tour_date), "adults": 2}
        payload.update(extra)
        return self.client.post(self.list_url, payload, format="json")

    def test_guest_books_tour(self) -> None:
        response = self._book(children=1, dietary_restrictions="Vegetarian")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        booking = TourBooking.objects.get()
        self.assertEqual(booking.total_participants, 3)
        self.assertEqual(booking.subtotal, Decimal("216.00"))
        self.assertEqual(booking.tax_amount, Decimal("21.60"))
        self.assertEqual(booking.total_price, Decimal("237.60"))
        self.assertEqual(response.data["tour_slug"], "kilimanjaro-day-hike")

    def test_first_booking_of_a_date_locks_the_tour(self) -> None:
        with mock.patch("apps.tours.services.lock_inventory_item", wraps=lock_inventory_item) as lock:
            response = self._book()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        lock.assert_called_once_with(self.tour)

    def test_capacity_is_per_date(self) -> None:
        self._book(adults=4)

        full = self._book(adults=2)
        other_day = self._book(adults=2, tour_date=str(self.tour_date + timedelta(days=1)))
        last_seat = self._book(adults=1)

        self.assertEqual(full.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Only 1 spot(s) left", full.data["non_field_errors"][0])
        self.assertEqual(other_day.status_code, status.HTTP_201_CREATED, other_day.data)
        self.assertEqual(last_seat.status_code, status.HTTP_201_CREATED, last_seat.data)
        self.assertEqual(remaining_capacity(self.tour, self.tour_date), 0)

    def test_cancelled_bookings_release_seats(self) -> None:
        booking_id = self._book(adults=5).data["id"]
        self.client.post(reverse("tour-booking-cancel", args=[booking_id]))

        self.assertEqual(remaining_capacity(self.tour, self.tour_date), 5)

    def test_inactive_tour_and_past_date(self) -> None:
        past = self._book(tour_date=str(timezone.localdate() - timedelta(days=1)))
        self.assertEqual(past.status_code, status.HTTP_400_BAD_REQUEST)

        self.tour.is_active = False
        self.tour.save(update_fields=["is_active"])
        inactive = self._book()
        self.assertEqual(inactive.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("not available", inactive.data["non_field_errors"][0])

    def test_operator_confirms_and_completes(self) -> None:
        booking_id = self._book().data["id"]

        self.client.force_authenticate(self.operator)
        confirm = self.client.post(reverse("tour-booking-confirm", args=[booking_id]))
        complete = self.client.post(reverse("tour-booking-complete", args=[booking_id]))

        self.assertEqual(confirm.data["status"], TourBooking.Status.CONFIRMED)
        self.assertEqual(complete.data["status"], TourBooking.Status.COMPLETED)

    def test_past_confirmed_tours_complete_automatically(self) -> None:
        booking = TourBooking.objects.create(
            guest=self.guest,
            tour=self.tour,
            tour_date=timezone.localdate() - timedelta(days=1),
            status=TourBooking.Status.CONFIRMED,
        )

        result = advance_reservation_statuses()

        booking.refresh_from_db()
        self.assertEqual(booking.status, TourBooking.Status.COMPLETED)
        self.assertEqual(result["finished"], 1)


class TourCatalogueAPITests(APITestCase):
    def setUp(self) -> None:
        self.operator = User.objects.create_user(
            email="tours@example.com",
            password="OperatorPass123",
            role=User.RoleChoices.TOUR_OPERATOR,
        )
        Tour.objects.create(
            operator=self.operator, name="Zanzibar Spice Tour", location="Zanzibar",
            tour_type="cultural", duration="Half day", price=Decimal("30.00"),
        )
        Tour.objects.create(
            operator=self.operator, name="Ngorongoro Crater", location="Arusha",
            tour_type="safari", duration="1 day", price=Decimal("250.00"), max_participants=6,
        )
        Tour.objects.create(
            operator=self.operator, name="Retired Tour", location="Arusha",
            tour_type="safari", price=Decimal("10.00"), is_active=False,
        )
        self.list_url = reverse("tour-list")

    def _names(self, params=None) -> set[str]:
        return {item["name"] for item in self.client.get(self.list_url, params or {}).data}

    def test_listing_filters(self) -> None:
        self.assertEqual(self._names(), {"Zanzibar Spice Tour", "Ngorongoro Crater"})
        self.assertEqual(self._names({"locations": "arusha,moshi"}), {"Ngorongoro Crater"})
        self.assertEqual(self._names({"tour_types": "cultural"}), {"Zanzibar Spice Tour"})
        self.assertEqual(self._names({"max_price": 100}), {"Zanzibar Spice Tour"})
        self.assertEqual(self._names({"exclude_slug": "ngorongoro-crater"}), {"Zanzibar Spice Tour"})

    def test_detail_by_slug_and_quote(self) -> None:
        detail = self.client.get(reverse("tour-detail", args=["ngorongoro-crater"]))
        self.assertEqual(detail.status_code, status.HTTP_200_OK)

        tour_date = timezone.localdate() + timedelta(days=3)
        quote = self.client.get(
            reverse("tour-quote", args=["ngorongoro-crater"]),
            {"adults": 1, "seniors": 1, "tour_date": tour_date},
        )
        self.assertEqual(quote.status_code, status.HTTP_200_OK, quote.data)
        self.assertEqual(quote.data["total_price"], Decimal("508.75"))
        self.assertEqual(quote.data["remaining_capacity"], 6)

        empty = self.client.get(reverse("tour-quote", args=["ngorongoro-crater"]), {"adults": 0})
        self.assertEqual(empty.status_code, status.HTTP_400_BAD_REQUEST)

    def test_filter_options(self) -> None:
        response = self.client.get(reverse("tour-filter-options"))

        self.assertEqual(response.data["locations"], ["Arusha", "Zanzibar"])
        self.assertEqual(response.data["tour_types"], ["cultural", "safari"])

    def test_only_operators_create_tours(self) -> None:
        customer = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        payload = {"name": "Lake Manyara", "location": "Arusha", "price": "120.00"}

        self.client.force_authenticate(customer)
        self.assertEqual(self.client.post(self.list_url, payload, format="json").status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.operator)
        created = self.client.post(self.list_url, payload, format="json")
        self.assertEqual(created.status_code, status.HTTP_201_CREATED, created.data)
        self.assertEqual(created.data["slug"], "lake-manyara")
