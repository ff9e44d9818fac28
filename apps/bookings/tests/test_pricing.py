"""Unit tests for stay pricing."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase

from apps.bookings.domain.pricing import (
    MONTHLY,
    NIGHTLY,
    add_months,
    calculate_booking_price,
    full_months_between,
)


class NightlyPricingTests(SimpleTestCase):
    def test_nights_times_price(self) -> None:
        breakdown = calculate_booking_price(date(2030, 1, 1), date(2030, 1, 4), Decimal("120.00"), NIGHTLY)

        self.assertEqual(breakdown.subtotal, Decimal("360.00"))
        self.assertEqual(breakdown.units_count, 3)
        self.assertEqual(breakdown.description, "3 nights")

    def test_single_night_description(self) -> None:
        breakdown = calculate_booking_price(date(2030, 1, 1), date(2030, 1, 2), 50, NIGHTLY)
        self.assertEqual(breakdown.description, "1 night")

    def test_invalid_range_is_free(self) -> None:
        breakdown = calculate_booking_price(date(2030, 1, 4), date(2030, 1, 4), 50, NIGHTLY)
        self.assertEqual(breakdown.subtotal, Decimal("0.00"))
        self.assertEqual(breakdown.description, "Invalid dates")


class MonthlyPricingTests(SimpleTestCase):
    def test_full_months_only(self) -> None:
        breakdown = calculate_booking_price(date(2030, 1, 15), date(2030, 3, 15), Decimal("900"), MONTHLY)

        self.assertEqual(breakdown.subtotal, Decimal("1800.00"))
        self.assertEqual(breakdown.units_count, Decimal("2.00"))
        self.assertEqual(breakdown.description, "2 months")

    def test_remaining_days_are_prorated(self) -> None:
        breakdown = calculate_booking_price(date(2030, 1, 1), date(2030, 2, 11), Decimal("900"), MONTHLY)

        # 1 month + 10 days at 900/30 per day
        self.assertEqual(breakdown.subtotal, Decimal("1200.00"))
        self.assertEqual(breakdown.units_count, Decimal("1.33"))
        self.assertEqual(breakdown.description, "1 month + 10 days")

    def test_short_stay_is_days_only(self) -> None:
        breakdown = calculate_booking_price(date(2030, 1, 1), date(2030, 1, 2), Decimal("1000"), MONTHLY)

        self.assertEqual(breakdown.subtotal, Decimal("33.33"))
        self.assertEqual(breakdown.description, "0 months + 1 day")

    def test_month_arithmetic_clamps_day(self) -> None:
        self.assertEqual(add_months(date(2030, 1, 31), 1), date(2030, 2, 28))
        self.assertEqual(full_months_between(date(2030, 1, 31), date(2030, 2, 28)), 1)
        self.assertEqual(full_months_between(date(2030, 1, 31), date(2030, 2, 27)), 0)
