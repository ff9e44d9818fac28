"""
Stay pricing

Nightly units are priced per night. Monthly units are priced per full
calendar month, with the remaining days prorated at 1/30 of the monthly
price.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

NIGHTLY = "nightly"
MONTHLY = "monthly"

PRORATION_DAYS = 30
CENT = Decimal("0.01")


@dataclass(frozen=True)
class PriceBreakdown:
    unit: str
    units_count: Decimal
    unit_price: Decimal
    subtotal: Decimal
    description: str

    @property
    def total(self) -> Decimal:
        return self.subtotal


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def add_months(start: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of the target month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def full_months_between(start: date, end: date) -> int:
    months = (end.year - start.year) * 12 + (end.month - start.month)
    while months > 0 and add_months(start, months) > end:
        months -= 1
    return max(months, 0)


def calculate_booking_price(
    start: date,
    end: date,
    unit_price,
    unit: str = NIGHTLY,
    proration_days: int = PRORATION_DAYS,
) -> PriceBreakdown:
    unit_price = Decimal(str(unit_price))

    if end <= start:
        return PriceBreakdown(unit, Decimal("0"), unit_price, Decimal("0.00"), "Invalid dates")

    if unit == NIGHTLY:
        nights = (end - start).days
        subtotal = (unit_price * nights).quantize(CENT, rounding=ROUND_HALF_UP)
        return PriceBreakdown(NIGHTLY, Decimal(nights), unit_price, subtotal, _plural(nights, "night"))

    if unit != MONTHLY:
        raise ValueError(f"Unknown pricing unit: {unit}")

    months = full_months_between(start, end)
    remaining_days = (end - add_months(start, months)).days
    total_months = Decimal(months) + Decimal(remaining_days) / proration_days
    subtotal = (total_months * unit_price).quantize(CENT, rounding=ROUND_HALF_UP)

    description = _plural(months, "month")
    if remaining_days > 0:
        description += f" + {_plural(remaining_days, 'day')}"

    return PriceBreakdown(
        MONTHLY,
        total_months.quantize(CENT, rounding=ROUND_HALF_UP),
        unit_price,
        subtotal,
        description,
    )
