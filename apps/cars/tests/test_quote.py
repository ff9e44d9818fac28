"""Unit tests for rental pricing and mileage charges."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase

from apps.cars.models import Vehicle
from apps.cars.services import calculate_mileage_charge, quote_rental


class QuoteRentalTests(SimpleTestCase):
    def setUp(self) -> None:
        self.vehicle = Vehicle(
            make="Toyota",
            model="RAV4",
            year=2022,
            daily_rate=Decimal("50.00"),
            weekly_rate=Decimal("300.00"),
            monthly_rate=Decimal("1000.00"),
            insurance_fee=Decimal("5.00"),
            deposit=Decimal("200.00"),
            currency="USD",
        )

    def test_short_rental_uses_daily_rate(self) -> None:
        quote = quote_rental(self.vehicle, date(2031, 3, 1), date(2031, 3, 4))

        self.assertEqual(quote.number_of_days, 3)
        self.assertEqual(quote.rate_type, "daily")
        self.assertEqual(quote.subtotal, Decimal("150.00"))
        self.assertEqual(quote.insurance_fee, Decimal("15.00"))
        self.assertEqual(quote.total_price, Decimal("365.00"))

    def test_weekly_rate_with_leftover_days(self) -> None:
        quote = quote_rental(self.vehicle, date(2031, 3, 1), date(2031, 3, 11))

        self.assertEqual(quote.rate_type, "weekly")
        self.assertEqual(quote.subtotal, Decimal("450.00"))
        self.assertEqual(quote.total_price, Decimal("450.00") + Decimal("50.00") + Decimal("200.00"))

    def test_monthly_rate_with_leftover_days(self) -> None:
        quote = quote_rental(self.vehicle, date(2031, 3, 1), date(2031, 4, 2))

        self.assertEqual(quote.number_of_days, 32)
        self.assertEqual(quote.rate_type, "monthly")
        self.assertEqual(quote.subtotal, Decimal("1100.00"))

    def test_long_rental_without_discount_rates(self) -> None:
        self.vehicle.weekly_rate = None
        self.vehicle.monthly_rate = None

        quote = quote_rental(self.vehicle, date(2031, 3, 1), date(2031, 4, 2))

        self.assertEqual(quote.rate_type, "daily")
        self.assertEqual(quote.subtotal, Decimal("1600.00"))

    def test_mileage_charge(self) -> None:
        self.vehicle.mileage_limit = 200
        self.vehicle.extra_mileage_fee = Decimal("0.25")

        self.assertEqual(calculate_mileage_charge(self.vehicle, 3, 700), Decimal("25.00"))
        self.assertEqual(calculate_mileage_charge(self.vehicle, 3, 500), Decimal("0.00"))
        self.assertEqual(calculate_mileage_charge(self.vehicle, 3, None), Decimal("0.00"))

        self.vehicle.mileage_limit = None
        self.assertEqual(calculate_mileage_charge(self.vehicle, 3, 5000), Decimal("0.00"))
