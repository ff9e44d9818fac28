"""Availability, pricing and booking services for hotel rooms."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import F  # type: ignore

from apps.bookings.domain.pricing import PriceBreakdown, calculate_booking_price
from apps.bookings.exceptions import BookingConflictError, BookingRuleError
from apps.bookings.services import (
    blocking_reservations,
    build_inventory,
    lock_inventory_item,
    validate_future_range,
)
from shared.domain.value_objects import DateRange

from .models import HotelBooking, HotelProperty, Room

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


@dataclass(frozen=True)
class RoomAvailability:
    available: bool
    available_units: int
    total_units: int
    reason: str = ""


@dataclass(frozen=True)
class StayQuote:
    nights: int
    room_price: Decimal
    tax_amount: Decimal
    cleaning_fee: Decimal
    extra_guest_fee: Decimal
    total_price: Decimal
    currency: str
    breakdown: PriceBreakdown

    def as_dict(self) -> dict:
        return {
            "nights": self.nights,
            "room_price": self.room_price,
            "tax_amount": self.tax_amount,
            "cleaning_fee": self.cleaning_fee,
            "extra_guest_fee": self.extra_guest_fee,
            "total_price": self.total_price,
            "currency": self.currency,
            "description": self.breakdown.description,
        }


def check_room_availability(room: Room, check_in: date, check_out: date, *, exclude_pk=None) -> RoomAvailability:
    """How many units of the room are free on every night of the stay."""

    if not room.is_active or room.property.status != HotelProperty.Status.ACTIVE:
        return RoomAvailability(False, 0, room.total_units, "Room is not available for booking.")

    dates = DateRange(check_in, check_out)
    overlapping = blocking_reservations(
        HotelBooking.objects.filter(room=room),
        "check_in_date",
        "check_out_date",
        check_in,
        check_out,
        exclude_pk=exclude_pk,
    )
    inventory = build_inventory(room.total_units, overlapping, "check_in_date", "check_out_date")
    units = inventory.available_units(dates)
    return RoomAvailability(units > 0, units, room.total_units)


def validate_stay(room: Room, check_in: date, check_out: date, adults: int, children: int = 0) -> DateRange:
    dates = validate_future_range(check_in, check_out)
    nights = len(dates)
    if nights < room.minimum_stay:
        raise BookingRuleError(f"Minimum stay is {room.minimum_stay} night(s).")
    if room.maximum_stay and nights > room.maximum_stay:
        raise BookingRuleError(f"Maximum stay is {room.maximum_stay} night(s).")
    if adults < 1:
        raise BookingRuleError("At least one adult is required.")
    if adults + children > room.max_guests:
        raise BookingRuleError("Number of guests exceeds room capacity.")
    return dates


def quote_room_stay(room: Room, check_in: date, check_out: date, adults: int = 1, children: int = 0) -> StayQuote:
    nights = (check_out - check_in).days
    breakdown = calculate_booking_price(
        check_in,
        check_out,
        room.base_price,
        room.pricing_unit,
        proration_days=settings.MARKETPLACE["MONTHLY_PRORATION_DAYS"],
    )
    room_price = breakdown.subtotal
    tax_amount = (room_price * room.tax_rate / Decimal("100")).quantize(CENT, rounding=ROUND_HALF_UP)
    cleaning_fee = room.cleaning_fee

    extra_guest_fee = Decimal("0.00")
    guests = adults + children
    if room.extra_guest_fee and guests > room.capacity_adults:
        extra_guest_fee = room.extra_guest_fee * (guests - room.capacity_adults) * nights

    total = room_price + tax_amount + cleaning_fee + extra_guest_fee
    return StayQuote(
        nights=nights,
        room_price=room_price,
        tax_amount=tax_amount,
        cleaning_fee=cleaning_fee,
        extra_guest_fee=extra_guest_fee,
        total_price=total.quantize(CENT, rounding=ROUND_HALF_UP),
        currency=room.currency,
        breakdown=breakdown,
    )


@transaction.atomic
def create_hotel_booking(
    *,
    guest,
    room: Room,
    check_in: date,
    check_out: date,
    adults: int = 1,
    children: int = 0,
    infants: int = 0,
    **details,
) -> HotelBooking:
    """Hold one unit of the room for the stay.

    The room row is locked before the inventory is re-checked so two
    concurrent requests cannot both take the last unit.
    """

    lock_inventory_item(room)
    validate_stay(room, check_in, check_out, adults, children)
    availability = check_room_availability(room, check_in, check_out)
    if not availability.available:
        logger.info(f"Room {room.pk} full for {check_in} - {check_out}")
        raise BookingConflictError(availability.reason or "Room is not available for the selected dates.")

    quote = quote_room_stay(room, check_in, check_out, adults, children)
    booking = HotelBooking.objects.create(
        guest=guest,
        room=room,
        property=room.property,
        check_in_date=check_in,
        check_out_date=check_out,
        nights=quote.nights,
        adults=adults,
        children=children,
        infants=infants,
        room_price=quote.room_price,
        tax_amount=quote.tax_amount,
        cleaning_fee=quote.cleaning_fee,
        extra_guest_fee=quote.extra_guest_fee,
        total_price=quote.total_price,
        currency=quote.currency,
        price_description=quote.breakdown.description,
        guest_name=details.get("guest_name") or guest.display_name,
        guest_email=details.get("guest_email") or guest.email,
        guest_phone=details.get("guest_phone") or (guest.phone or ""),
        special_requests=details.get("special_requests", ""),
    )
    return booking


def properties_with_availability(queryset, check_in: date, check_out: date, guests: int = 1, min_price=None, max_price=None):
    """Restrict properties to those with at least one active room free for the stay."""

    rooms = (
        Room.objects.filter(property__in=queryset, is_active=True)
        .annotate(guest_capacity=F("capacity_adults") + F("capacity_children"))
        .filter(guest_capacity__gte=guests or 1)
        .select_related("property")
    )
    matching = set()
    for room in rooms:
        if min_price is not None and room.base_price < min_price:
            continue
        if max_price is not None and room.base_price > max_price:
            continue
        if check_room_availability(room, check_in, check_out).available:
            matching.add(room.property_id)
    return queryset.filter(pk__in=matching)
