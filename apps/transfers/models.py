"""Transfer domain models."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.models import Reservation, default_currency


class TransferType(models.TextChoices):
    AIRPORT_TO_CITY = "airport_to_city", _("Airport to city")
    CITY_TO_AIRPORT = "city_to_airport", _("City to airport")
    POINT_TO_POINT = "point_to_point", _("Point to point")
    HOURLY = "hourly", _("Hourly hire")


AIRPORT_TRANSFER_TYPES = (TransferType.AIRPORT_TO_CITY, TransferType.CITY_TO_AIRPORT)


class TransferVehicle(models.Model):
    """A chauffeured vehicle offered by a transfer provider."""

    class Category(models.TextChoices):
        SEDAN = "sedan", _("Sedan")
        SUV = "suv", _("SUV")
        VAN = "van", _("Van")
        MINIBUS = "minibus", _("Minibus")
        BUS = "bus", _("Bus")
        LUXURY = "luxury", _("Luxury")

    class Status(models.TextChoices):
        AVAILABLE = "available", _("Available")
        MAINTENANCE = "maintenance", _("Maintenance")
        INACTIVE = "inactive", _("Inactive")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="transfer_vehicles",
    )
    category = models.CharField(max_length=20, choices=Category.choices, default=Category.SEDAN)
    make = models.CharField(max_length=100)
    model = models.CharField(max_length=100)
    max_passengers = models.PositiveSmallIntegerField(default=3, validators=[MinValueValidator(1)])
    max_luggage = models.PositiveSmallIntegerField(default=2)
    features = models.JSONField(default=list, blank=True)
    city = models.CharField(max_length=100)
    country = models.CharField(max_length=100)
    airport_code = models.CharField(max_length=3, blank=True)

    currency = models.CharField(max_length=3, default=default_currency)
    base_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    price_per_km = models.DecimalField(max_digits=8, decimal_places=2, default=Decimal("0.00"))
    price_per_hour = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    airport_surcharge = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    night_surcharge = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Flat surcharge for pickups between 22:00 and 06:00."),
    )
    waiting_time_fee = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Charge per started 15 minutes of waiting."),
    )

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AVAILABLE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Transfer vehicle")
        verbose_name_plural = _("Transfer vehicles")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["city", "country"], name="transfers_t_city_2e9b70_idx"),
            models.Index(fields=["airport_code"], name="transfers_t_airport_6a1f3c_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.make} {self.model} ({self.get_category_display()})"


class TransferBooking(Reservation):
    """A ride booked for a pickup date and time."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        ASSIGNED = "assigned", _("Driver assigned")
        IN_PROGRESS = "in_progress", _("In progress")
        COMPLETED = "completed", _("Completed")
        CANCELLED = "cancelled", _("Cancelled")

    TRANSITIONS = {
        Status.PENDING: {Status.CONFIRMED, Status.CANCELLED},
        Status.CONFIRMED: {Status.ASSIGNED, Status.CANCELLED},
        Status.ASSIGNED: {Status.IN_PROGRESS, Status.CANCELLED},
        Status.IN_PROGRESS: {Status.COMPLETED},
    }
    BLOCKING_STATUSES = (Status.PENDING, Status.CONFIRMED, Status.ASSIGNED, Status.IN_PROGRESS)
    PROVIDER_LOOKUP = "vehicle__owner"
    START_FIELD = "pickup_date"

    vehicle = models.ForeignKey(TransferVehicle, on_delete=models.PROTECT, related_name="bookings")
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    transfer_type = models.CharField(max_length=20, choices=TransferType.choices)
    pickup_address = models.CharField(max_length=255)
    pickup_city = models.CharField(max_length=100, blank=True)
    dropoff_address = models.CharField(max_length=255, blank=True)
    dropoff_city = models.CharField(max_length=100, blank=True)
    flight_number = models.CharField(max_length=20, blank=True)
    pickup_date = models.DateField()
    pickup_time = models.TimeField()
    estimated_duration_minutes = models.PositiveIntegerField(default=0)
    estimated_distance_km = models.DecimalField(max_digits=8, decimal_places=2, default=Decimal("0.00"))
    waiting_minutes = models.PositiveIntegerField(default=0)
    passengers = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    luggage = models.PositiveSmallIntegerField(default=0)
    child_seats = models.PositiveSmallIntegerField(default=0)
    wheelchair_accessible = models.BooleanField(default=False)

    contact_name = models.CharField(max_length=255, blank=True)
    contact_email = models.EmailField(blank=True)
    contact_phone = models.CharField(max_length=30, blank=True)
    driver_name = models.CharField(max_length=255, blank=True)
    driver_phone = models.CharField(max_length=30, blank=True)

    base_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    distance_charge = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    time_charge = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    airport_surcharge = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    night_surcharge = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    waiting_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))

    class Meta(Reservation.Meta):
        verbose_name = _("Transfer booking")
        verbose_name_plural = _("Transfer bookings")
        indexes = [
            models.Index(fields=["vehicle", "pickup_date"], name="transfers_t_vehicle_9c4d52_idx"),
            models.Index(fields=["status"], name="transfers_t_status_b3e817_idx"),
        ]

    @property
    def item_title(self) -> str:
        return f"{self.get_transfer_type_display()} with {self.vehicle}"

    @property
    def period_label(self) -> str:
        return f"{self.pickup_date} {self.pickup_time:%H:%M}"
