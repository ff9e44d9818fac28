"""Availability, pricing and booking services for transfers."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.exceptions import BookingConflictError, BookingRuleError
from apps.bookings.services import lock_inventory_item, lock_queryset_if_possible
from shared.domain.value_objects import Money, TimeWindow

from .models import AIRPORT_TRANSFER_TYPES, TransferBooking, TransferType, TransferVehicle

logger = logging.getLogger(__name__)

WAITING_BLOCK_MINUTES = 15


@dataclass(frozen=True)
class TransferAvailability:
    available: bool
    reason: str = ""


@dataclass(frozen=True)
class TransferQuote:
    base_price: Money
    distance_charge: Money
    time_charge: Money
    airport_surcharge: Money
    night_surcharge: Money
    waiting_fee: Money

    @property
    def total(self) -> Money:
        return (
            self.base_price
            + self.distance_charge
            + self.time_charge
            + self.airport_surcharge
            + self.night_surcharge
            + self.waiting_fee
        ).quantize()

    def as_dict(self) -> dict:
        return {
            "base_price": self.base_price.amount,
            "distance_charge": self.distance_charge.amount,
            "time_charge": self.time_charge.amount,
            "airport_surcharge": self.airport_surcharge.amount,
            "night_surcharge": self.night_surcharge.amount,
            "waiting_fee": self.waiting_fee.amount,
            "total_price": self.total.amount,
            "currency": self.total.currency,
        }


def pickup_moment(pickup_date: date, pickup_time: time) -> datetime:
    return datetime.combine(pickup_date, pickup_time)


def is_night_pickup(pickup_time: time) -> bool:
    config = settings.MARKETPLACE
    return pickup_time.hour >= config["TRANSFER_NIGHT_START_HOUR"] or pickup_time.hour < config["TRANSFER_NIGHT_END_HOUR"]


def check_transfer_availability(
    vehicle: TransferVehicle, pickup_at: datetime, *, exclude_pk=None
) -> TransferAvailability:
    """The vehicle is free when no other ride picks up within the buffer around ``pickup_at``.

    The buffer spans midnight, so rides late on the previous day or early
    on the next day are compared as well.
    """

    if vehicle.status != TransferVehicle.Status.AVAILABLE:
        return TransferAvailability(False, "Vehicle is not available for booking.")

    window = TimeWindow.around(pickup_at, settings.MARKETPLACE["TRANSFER_BUFFER_HOURS"])
    candidates = TransferBooking.objects.filter(
        vehicle=vehicle,
        status__in=TransferBooking.BLOCKING_STATUSES,
        pickup_date__gte=window.start.date(),
        pickup_date__lte=window.end.date(),
    )
    if exclude_pk is not None:
        candidates = candidates.exclude(pk=exclude_pk)

    for booking in lock_queryset_if_possible(candidates):
        if window.contains(pickup_moment(booking.pickup_date, booking.pickup_time)):
            return TransferAvailability(False, "Vehicle is already booked around this pickup time.")
    return TransferAvailability(True)


def quote_transfer(
    vehicle: TransferVehicle,
    transfer_type: str,
    pickup_time: time,
    distance_km=0,
    duration_minutes: int = 0,
    waiting_minutes: int = 0,
) -> TransferQuote:
    currency = vehicle.currency
    zero = Money.zero(currency)

    distance_charge = time_charge = zero
    if transfer_type == TransferType.HOURLY:
        if not vehicle.price_per_hour:
            raise BookingRuleError("This vehicle is not available for hourly hire.")
        hours = max(1, math.ceil(duration_minutes / 60))
        time_charge = Money(vehicle.price_per_hour, currency) * hours
    else:
        distance_charge = Money(vehicle.price_per_km, currency) * Decimal(str(distance_km or 0))

    airport = zero
    if transfer_type in AIRPORT_TRANSFER_TYPES:
        airport = Money(vehicle.airport_surcharge, currency)

    night = Money(vehicle.night_surcharge, currency) if is_night_pickup(pickup_time) else zero

    waiting = zero
    if waiting_minutes > 0:
        blocks = math.ceil(waiting_minutes / WAITING_BLOCK_MINUTES)
        waiting = Money(vehicle.waiting_time_fee, currency) * blocks

    return TransferQuote(
        base_price=Money(vehicle.base_price, currency),
        distance_charge=distance_charge.quantize(),
        time_charge=time_charge.quantize(),
        airport_surcharge=airport,
        night_surcharge=night,
        waiting_fee=waiting.quantize(),
    )


def validate_capacity(vehicle: TransferVehicle, passengers: int, luggage: int) -> None:
    if passengers < 1:
        raise BookingRuleError("At least one passenger is required.")
    if passengers > vehicle.max_passengers:
        raise BookingRuleError(f"This vehicle seats at most {vehicle.max_passengers} passenger(s).")
    if luggage > vehicle.max_luggage:
        raise BookingRuleError(f"This vehicle carries at most {vehicle.max_luggage} piece(s) of luggage.")


@transaction.atomic
def create_transfer_booking(
    *,
    guest,
    vehicle: TransferVehicle,
    transfer_type: str,
    pickup_date: date,
    pickup_time: time,
    passengers: int = 1,
    luggage: int = 0,
    estimated_distance_km=Decimal("0"),
    estimated_duration_minutes: int = 0,
    waiting_minutes: int = 0,
    **details,
) -> TransferBooking:
    lock_inventory_item(vehicle)
    pickup_at = pickup_moment(pickup_date, pickup_time)
    if pickup_at < timezone.localtime().replace(tzinfo=None) - timedelta(minutes=1):
        raise BookingRuleError("Pickup time cannot be in the past.")
    if transfer_type == TransferType.HOURLY and estimated_duration_minutes <= 0:
        raise BookingRuleError("Hourly hire needs an estimated duration.")
    validate_capacity(vehicle, passengers, luggage)

    availability = check_transfer_availability(vehicle, pickup_at)
    if not availability.available:
        logger.info(f"Transfer vehicle {vehicle.pk} busy around {pickup_at}")
        raise BookingConflictError(availability.reason)

    quote = quote_transfer(
        vehicle,
        transfer_type,
        pickup_time,
        distance_km=estimated_distance_km,
        duration_minutes=estimated_duration_minutes,
        waiting_minutes=waiting_minutes,
    )
    total = quote.total
    return TransferBooking.objects.create(
        guest=guest,
        vehicle=vehicle,
        transfer_type=transfer_type,
        pickup_date=pickup_date,
        pickup_time=pickup_time,
        passengers=passengers,
        luggage=luggage,
        estimated_distance_km=estimated_distance_km,
        estimated_duration_minutes=estimated_duration_minutes,
        waiting_minutes=waiting_minutes,
        base_price=quote.base_price.amount,
        distance_charge=quote.distance_charge.amount,
        time_charge=quote.time_charge.amount,
        airport_surcharge=quote.airport_surcharge.amount,
        night_surcharge=quote.night_surcharge.amount,
        waiting_fee=quote.waiting_fee.amount,
        total_price=total.amount,
        currency=total.currency,
        contact_name=details.pop("contact_name", "") or guest.display_name,
        contact_email=details.pop("contact_email", "") or guest.email,
        contact_phone=details.pop("contact_phone", "") or (guest.phone or ""),
        **details,
    )


def assign_driver(booking: TransferBooking, driver_name: str, driver_phone: str = "") -> TransferBooking:
    booking.transition_to(TransferBooking.Status.ASSIGNED, commit=False)
    booking.driver_name = driver_name
    booking.driver_phone = driver_phone
    booking.save(update_fields=["status", "driver_name", "driver_phone", "updated_at"])
    return booking
