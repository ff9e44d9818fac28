"""Pricing, capacity and booking services for tours."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import Sum  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.exceptions import BookingConflictError, BookingRuleError
from apps.bookings.services import lock_inventory_item, lock_queryset_if_possible
from shared.domain.value_objects import Money

from .models import Tour, TourBooking

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TourQuote:
    adults: int
    children: int
    seniors: int
    adult_price: Money
    child_price: Money
    senior_price: Money
    subtotal: Money
    tax: Money

    @property
    def participants(self) -> int:
        return self.adults + self.children + self.seniors

    @property
    def total(self) -> Money:
        return (self.subtotal + self.tax).quantize()

    def as_dict(self) -> dict:
        return {
            "participants": self.participants,
            "adult_price": self.adult_price.amount,
            "child_price": self.child_price.amount,
            "senior_price": self.senior_price.amount,
            "subtotal": self.subtotal.amount,
            "tax": self.tax.amount,
            "total_price": self.total.amount,
            "currency": self.total.currency,
        }


def quote_tour(tour: Tour, adults: int = 1, children: int = 0, seniors: int = 0) -> TourQuote:
    """Children pay a reduced share of the adult price, seniors a smaller discount; tax on top."""

    if adults + children + seniors <= 0:
        raise BookingRuleError("At least one participant is required.")

    config = settings.MARKETPLACE
    adult = Money(tour.price, tour.currency)
    child = (adult * Decimal(config["TOUR_CHILD_RATE"])).quantize()
    senior = (adult * Decimal(config["TOUR_SENIOR_RATE"])).quantize()
    subtotal = adult * adults + child * children + senior * seniors
    tax = (subtotal * Decimal(config["TOUR_TAX_RATE"])).quantize()
    return TourQuote(adults, children, seniors, adult, child, senior, subtotal.quantize(), tax)


def remaining_capacity(tour: Tour, tour_date: date, *, exclude_pk=None) -> int | None:
    """Seats left on a date, ``None`` when the tour has no participant limit."""

    if tour.max_participants is None:
        return None
    bookings = TourBooking.objects.filter(
        tour=tour,
        tour_date=tour_date,
        status__in=TourBooking.BLOCKING_STATUSES,
    )
    if exclude_pk is not None:
        bookings = bookings.exclude(pk=exclude_pk)
    if transaction.get_connection().in_atomic_block:
        # Lock the rows, then sum them in Python
        taken = sum(b.total_participants for b in lock_queryset_if_possible(bookings))
    else:
        taken = bookings.aggregate(taken=Sum("total_participants"))["taken"] or 0
    return max(tour.max_participants - taken, 0)


@transaction.atomic
def create_tour_booking(
    *,
    guest,
    tour: Tour,
    tour_date: date,
    adults: int = 1,
    children: int = 0,
    seniors: int = 0,
    **details,
) -> TourBooking:
    lock_inventory_item(tour)
    if not tour.is_active:
        raise BookingRuleError("This tour is not available for booking.")
    if tour_date < timezone.localdate():
        raise BookingRuleError("Tour date cannot be in the past.")

    quote = quote_tour(tour, adults, children, seniors)
    remaining = remaining_capacity(tour, tour_date)
    if remaining is not None and quote.participants > remaining:
        logger.info(f"Tour {tour.slug} on {tour_date}: {quote.participants} requested, {remaining} left")
        raise BookingConflictError(f"Only {remaining} spot(s) left on {tour_date}.")

    total = quote.total
    return TourBooking.objects.create(
        guest=guest,
        tour=tour,
        tour_date=tour_date,
        adults=adults,
        children=children,
        seniors=seniors,
        total_participants=quote.participants,
        adult_price=quote.adult_price.amount,
        child_price=quote.child_price.amount,
        senior_price=quote.senior_price.amount,
        subtotal=quote.subtotal.amount,
        tax_amount=quote.tax.amount,
        total_price=total.amount,
        currency=total.currency,
        contact_name=details.pop("contact_name", "") or guest.display_name,
        contact_email=details.pop("contact_email", "") or guest.email,
        contact_phone=details.pop("contact_phone", "") or (guest.phone or ""),
        **details,
    )


def tour_filter_options(queryset) -> dict:
    """Distinct locations, types and durations offered by the listed tours."""

    def distinct(field: str) -> list[str]:
        return sorted(v for v in queryset.order_by().values_list(field, flat=True).distinct() if v)

    return {
        "locations": distinct("location"),
        "tour_types": distinct("tour_type"),
        "durations": distinct("duration"),
    }
