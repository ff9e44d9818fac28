"""Car rental domain models."""

from __future__ import annotations

from datetime import time
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.models import Reservation, default_currency


class Vehicle(models.Model):
    """A rental car with its daily, weekly and monthly rates."""

    class Category(models.TextChoices):
        ECONOMY = "economy", _("Economy")
        COMPACT = "compact", _("Compact")
        MIDSIZE = "midsize", _("Midsize")
        SUV = "suv", _("SUV")
        LUXURY = "luxury", _("Luxury")
        VAN = "van", _("Van")
        PICKUP = "pickup", _("Pickup")
        CONVERTIBLE = "convertible", _("Convertible")

    class Transmission(models.TextChoices):
        AUTOMATIC = "automatic", _("Automatic")
        MANUAL = "manual", _("Manual")

    class FuelType(models.TextChoices):
        PETROL = "petrol", _("Petrol")
        DIESEL = "diesel", _("Diesel")
        HYBRID = "hybrid", _("Hybrid")
        ELECTRIC = "electric", _("Electric")

    class Status(models.TextChoices):
        AVAILABLE = "available", _("Available")
        RENTED = "rented", _("Rented")
        MAINTENANCE = "maintenance", _("Maintenance")
        INACTIVE = "inactive", _("Inactive")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="vehicles",
    )
    make = models.CharField(max_length=100)
    model = models.CharField(max_length=100)
    year = models.PositiveSmallIntegerField()
    category = models.CharField(max_length=20, choices=Category.choices, default=Category.ECONOMY)
    transmission = models.CharField(
        max_length=20,
        choices=Transmission.choices,
        default=Transmission.AUTOMATIC,
    )
    fuel_type = models.CharField(max_length=20, choices=FuelType.choices, default=FuelType.PETROL)
    seats = models.PositiveSmallIntegerField(default=5, validators=[MinValueValidator(1)])
    doors = models.PositiveSmallIntegerField(default=4)
    color = models.CharField(max_length=50, blank=True)
    license_plate = models.CharField(max_length=20, blank=True)
    description = models.TextField(blank=True)
    features = models.JSONField(default=list, blank=True)
    city = models.CharField(max_length=100)
    country = models.CharField(max_length=100)
    pickup_address = models.CharField(max_length=255, blank=True)

    currency = models.CharField(max_length=3, default=default_currency)
    daily_rate = models.DecimalField(max_digits=10, decimal_places=2)
    weekly_rate = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    monthly_rate = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    deposit = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    insurance_fee = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Insurance per rental day."),
    )
    mileage_limit = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text=_("Included kilometres per day. Empty means unlimited."),
    )
    extra_mileage_fee = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Charge per kilometre above the included mileage."),
    )

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AVAILABLE)
    average_rating = models.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0.00"))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Vehicle")
        verbose_name_plural = _("Vehicles")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["city", "country"], name="cars_vehicl_city_8d2f41_idx"),
            models.Index(fields=["status"], name="cars_vehicl_status_1c7e90_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.year} {self.make} {self.model}"


class CarRental(Reservation):
    """A vehicle rented from pickup date to return date."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        ACTIVE = "active", _("Active")
        COMPLETED = "completed", _("Completed")
        CANCELLED = "cancelled", _("Cancelled")

    TRANSITIONS = {
        Status.PENDING: {Status.CONFIRMED, Status.CANCELLED},
        Status.CONFIRMED: {Status.ACTIVE, Status.CANCELLED},
        Status.ACTIVE: {Status.COMPLETED},
    }
    BLOCKING_STATUSES = (Status.PENDING, Status.CONFIRMED, Status.ACTIVE)
    PROVIDER_LOOKUP = "vehicle__owner"
    START_FIELD = "pickup_date"
    END_FIELD = "return_date"
    # Advanced by the owner only: activate_rental, complete_rental

    vehicle = models.ForeignKey(Vehicle, on_delete=models.PROTECT, related_name="rentals")
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    pickup_date = models.DateField()
    return_date = models.DateField()
    pickup_time = models.TimeField(default=time(10, 0))
    return_time = models.TimeField(default=time(10, 0))
    pickup_location = models.CharField(max_length=255, blank=True)
    return_location = models.CharField(max_length=255, blank=True)

    number_of_days = models.PositiveSmallIntegerField(default=1)
    daily_rate = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    insurance_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    deposit = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    rate_type = models.CharField(max_length=10, default="daily")

    driver_name = models.CharField(max_length=255, blank=True)
    driver_email = models.EmailField(blank=True)
    driver_phone = models.CharField(max_length=30, blank=True)
    driver_license_number = models.CharField(max_length=50, blank=True)
    driver_license_expiry = models.DateField(null=True, blank=True)
    driver_date_of_birth = models.DateField(null=True, blank=True)

    mileage_start = models.PositiveIntegerField(null=True, blank=True)
    mileage_end = models.PositiveIntegerField(null=True, blank=True)
    mileage_charge = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    deposit_refunded = models.BooleanField(default=False)
    deposit_refunded_at = models.DateTimeField(null=True, blank=True)

    class Meta(Reservation.Meta):
        verbose_name = _("Car rental")
        verbose_name_plural = _("Car rentals")
        constraints = [
            models.CheckConstraint(
                condition=models.Q(return_date__gt=models.F("pickup_date")),
                name="car_rental_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["vehicle", "pickup_date", "return_date"], name="cars_carren_vehicle_4b6a13_idx"),
            models.Index(fields=["status"], name="cars_carren_status_e0d5c7_idx"),
        ]

    @property
    def item_title(self) -> str:
        return str(self.vehicle)

    @property
    def kilometres_driven(self) -> int | None:
        if self.mileage_start is None or self.mileage_end is None:
            return None
        return self.mileage_end - self.mileage_start
