"""Unit tests for transfer pricing."""

from __future__ import annotations

from datetime import time
from decimal import Decimal

from django.test import SimpleTestCase

from apps.bookings.exceptions import BookingRuleError
from apps.transfers.models import TransferType, TransferVehicle
from apps.transfers.services import is_night_pickup, quote_transfer


class QuoteTransferTests(SimpleTestCase):
    def setUp(self) -> None:
        self.vehicle = TransferVehicle(
            make="Toyota",
            model="Alphard",
            currency="USD",
            base_price=Decimal("20.00"),
            price_per_km=Decimal("1.50"),
            price_per_hour=Decimal("25.00"),
            airport_surcharge=Decimal("10.00"),
            night_surcharge=Decimal("15.00"),
            waiting_time_fee=Decimal("5.00"),
        )

    def test_airport_transfer_by_distance(self) -> None:
        quote = quote_transfer(self.vehicle, TransferType.AIRPORT_TO_CITY, time(14, 0), distance_km=Decimal("40"))

        self.assertEqual(quote.distance_charge.amount, Decimal("60.00"))
        self.assertEqual(quote.airport_surcharge.amount, Decimal("10.00"))
        self.assertEqual(quote.night_surcharge.amount, Decimal("0"))
        self.assertEqual(quote.total.amount, Decimal("90.00"))

    def test_point_to_point_at_night_with_waiting(self) -> None:
        quote = quote_transfer(
            self.vehicle,
            TransferType.POINT_TO_POINT,
            time(23, 30),
            distance_km=10,
            waiting_minutes=20,
        )

        self.assertEqual(quote.airport_surcharge.amount, Decimal("0"))
        self.assertEqual(quote.night_surcharge.amount, Decimal("15.00"))
        # Two started 15-minute blocks
        self.assertEqual(quote.waiting_fee.amount, Decimal("10.00"))
        self.assertEqual(quote.total.amount, Decimal("60.00"))
        self.assertEqual(quote.as_dict()["total_price"], Decimal("60.00"))

    def test_hourly_hire_rounds_hours_up(self) -> None:
        quote = quote_transfer(self.vehicle, TransferType.HOURLY, time(9, 0), duration_minutes=150)

        self.assertEqual(quote.time_charge.amount, Decimal("75.00"))
        self.assertEqual(quote.distance_charge.amount, Decimal("0"))
        self.assertEqual(quote.total.amount, Decimal("95.00"))

    def test_hourly_hire_needs_hourly_rate(self) -> None:
        self.vehicle.price_per_hour = None

        with self.assertRaises(BookingRuleError):
            quote_transfer(self.vehicle, TransferType.HOURLY, time(9, 0), duration_minutes=60)

    def test_night_hours(self) -> None:
        self.assertTrue(is_night_pickup(time(22, 0)))
        self.assertTrue(is_night_pickup(time(5, 59)))
        self.assertFalse(is_night_pickup(time(6, 0)))
        self.assertFalse(is_night_pickup(time(21, 59)))
