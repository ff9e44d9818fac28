"""Availability, pricing and lifecycle services for car rentals."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.exceptions import BookingConflictError, BookingRuleError
from apps.bookings.services import (
    blocking_reservations,
    build_inventory,
    lock_inventory_item,
    validate_future_range,
)
from shared.domain.value_objects import DateRange

from .models import CarRental, Vehicle

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30
MINIMUM_DRIVER_AGE = 21


@dataclass(frozen=True)
class VehicleAvailability:
    available: bool
    reason: str = ""


@dataclass(frozen=True)
class RentalQuote:
    number_of_days: int
    rate_type: str
    daily_rate: Decimal
    subtotal: Decimal
    insurance_fee: Decimal
    deposit: Decimal
    total_price: Decimal
    currency: str

    def as_dict(self) -> dict:
        return {
            "number_of_days": self.number_of_days,
            "rate_type": self.rate_type,
            "daily_rate": self.daily_rate,
            "subtotal": self.subtotal,
            "insurance_fee": self.insurance_fee,
            "deposit": self.deposit,
            "total_price": self.total_price,
            "currency": self.currency,
        }


def check_vehicle_availability(
    vehicle: Vehicle, pickup_date: date, return_date: date, *, exclude_pk=None
) -> VehicleAvailability:
    if vehicle.status != Vehicle.Status.AVAILABLE:
        return VehicleAvailability(False, f"Vehicle is {vehicle.get_status_display().lower()}.")

    overlapping = blocking_reservations(
        CarRental.objects.filter(vehicle=vehicle),
        "pickup_date",
        "return_date",
        pickup_date,
        return_date,
        exclude_pk=exclude_pk,
    )
    inventory = build_inventory(1, overlapping, "pickup_date", "return_date")
    if not inventory.can_allocate(DateRange(pickup_date, return_date)):
        return VehicleAvailability(False, "Vehicle is already booked for the selected dates.")
    return VehicleAvailability(True)


def quote_rental(vehicle: Vehicle, pickup_date: date, return_date: date) -> RentalQuote:
    """Price a rental, preferring the monthly then the weekly rate for long rentals.

    Whole 30-day blocks use the monthly rate and whole weeks the weekly
    rate; leftover days are charged at the daily rate.
    """

    days = (return_date - pickup_date).days
    daily = vehicle.daily_rate

    if days >= DAYS_PER_MONTH and vehicle.monthly_rate:
        months, rest = divmod(days, DAYS_PER_MONTH)
        subtotal = months * vehicle.monthly_rate + rest * daily
        rate_type = "monthly"
    elif days >= DAYS_PER_WEEK and vehicle.weekly_rate:
        weeks, rest = divmod(days, DAYS_PER_WEEK)
        subtotal = weeks * vehicle.weekly_rate + rest * daily
        rate_type = "weekly"
    else:
        subtotal = days * daily
        rate_type = "daily"

    insurance = vehicle.insurance_fee * days
    total = subtotal + insurance + vehicle.deposit
    return RentalQuote(
        number_of_days=days,
        rate_type=rate_type,
        daily_rate=daily,
        subtotal=subtotal.quantize(CENT, rounding=ROUND_HALF_UP),
        insurance_fee=insurance.quantize(CENT, rounding=ROUND_HALF_UP),
        deposit=vehicle.deposit,
        total_price=total.quantize(CENT, rounding=ROUND_HALF_UP),
        currency=vehicle.currency,
    )


def calculate_mileage_charge(vehicle: Vehicle, days: int, kilometres_driven: int | None) -> Decimal:
    """Overage for kilometres above ``mileage_limit`` per day, zero when unlimited."""

    if not vehicle.mileage_limit or kilometres_driven is None:
        return Decimal("0.00")
    excess = max(0, kilometres_driven - vehicle.mileage_limit * days)
    return (Decimal(excess) * vehicle.extra_mileage_fee).quantize(CENT, rounding=ROUND_HALF_UP)


def age_on(birth_date: date, on: date) -> int:
    return on.year - birth_date.year - ((on.month, on.day) < (birth_date.month, birth_date.day))


def validate_driver(return_date: date, license_expiry: date | None, date_of_birth: date | None) -> None:
    """The licence must stay valid for the whole rental and the driver be of age."""

    if license_expiry is not None and license_expiry < return_date:
        raise BookingRuleError("Driver license will expire before the return date.")
    if date_of_birth is not None and age_on(date_of_birth, timezone.localdate()) < MINIMUM_DRIVER_AGE:
        raise BookingRuleError(f"Driver must be at least {MINIMUM_DRIVER_AGE} years old.")


@transaction.atomic
def create_car_rental(*, renter, vehicle: Vehicle, pickup_date: date, return_date: date, **details) -> CarRental:
    lock_inventory_item(vehicle)
    validate_future_range(pickup_date, return_date)
    validate_driver(return_date, details.get("driver_license_expiry"), details.get("driver_date_of_birth"))
    availability = check_vehicle_availability(vehicle, pickup_date, return_date)
    if not availability.available:
        logger.info(f"Vehicle {vehicle.pk} unavailable for {pickup_date} - {return_date}")
        raise BookingConflictError(availability.reason)

    quote = quote_rental(vehicle, pickup_date, return_date)
    return CarRental.objects.create(
        guest=renter,
        vehicle=vehicle,
        pickup_date=pickup_date,
        return_date=return_date,
        number_of_days=quote.number_of_days,
        rate_type=quote.rate_type,
        daily_rate=quote.daily_rate,
        subtotal=quote.subtotal,
        insurance_fee=quote.insurance_fee,
        deposit=quote.deposit,
        total_price=quote.total_price,
        currency=quote.currency,
        driver_name=details.pop("driver_name", "") or renter.display_name,
        driver_email=details.pop("driver_email", "") or renter.email,
        driver_phone=details.pop("driver_phone", "") or (renter.phone or ""),
        **details,
    )


def activate_rental(rental: CarRental, mileage_start: int | None = None) -> CarRental:
    """Hand the car over to the renter."""

    rental.transition_to(CarRental.Status.ACTIVE, commit=False)
    if mileage_start is not None:
        rental.mileage_start = mileage_start
    rental.save(update_fields=["status", "mileage_start", "updated_at"])
    return rental


@transaction.atomic
def complete_rental(rental: CarRental, mileage_end: int | None = None) -> CarRental:
    """Close an active rental, charge mileage overage and release the deposit."""

    if mileage_end is not None:
        if rental.mileage_start is not None and mileage_end < rental.mileage_start:
            raise BookingRuleError("Return mileage cannot be lower than pickup mileage.")
        rental.mileage_end = mileage_end

    rental.transition_to(CarRental.Status.COMPLETED, commit=False)
    rental.mileage_charge = calculate_mileage_charge(
        rental.vehicle, rental.number_of_days, rental.kilometres_driven
    )
    rental.total_price += rental.mileage_charge
    rental.save(update_fields=["status", "mileage_end", "mileage_charge", "total_price", "updated_at"])
    logger.info(f"Rental {rental.booking_code} completed, mileage charge {rental.mileage_charge}")
    return refund_deposit(rental)


def refund_deposit(rental: CarRental) -> CarRental:
    if rental.status != CarRental.Status.COMPLETED:
        raise BookingRuleError("Deposit can only be refunded after the rental is completed.")
    if rental.deposit_refunded:
        raise BookingRuleError("Deposit has already been refunded.")
    rental.deposit_refunded = True
    rental.deposit_refunded_at = timezone.now()
    rental.save(update_fields=["deposit_refunded", "deposit_refunded_at", "updated_at"])
    logger.info(f"Deposit {rental.deposit} {rental.currency} released for rental {rental.booking_code}")
    return rental


def vehicles_available_between(queryset, pickup_date: date, return_date: date):
    busy = CarRental.objects.filter(
        status__in=CarRental.BLOCKING_STATUSES,
        pickup_date__lt=return_date,
        return_date__gt=pickup_date,
    ).values("vehicle_id")
    return queryset.filter(status=Vehicle.Status.AVAILABLE).exclude(pk__in=busy)
