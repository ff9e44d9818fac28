"""Hotel domain models."""

from __future__ import annotations

import builtins
from datetime import time
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.text import slugify  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.models import Reservation, default_currency


class HotelProperty(models.Model):
    """A hotel, resort, hostel or other lodging listed by a property owner."""

    class PropertyType(models.TextChoices):
        HOTEL = "hotel", _("Hotel")
        RESORT = "resort", _("Resort")
        HOSTEL = "hostel", _("Hostel")
        APARTMENT = "apartment", _("Apartment")
        GUESTHOUSE = "guesthouse", _("Guesthouse")
        VILLA = "villa", _("Villa")

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        INACTIVE = "inactive", _("Inactive")
        PENDING_APPROVAL = "pending_approval", _("Pending approval")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="hotel_properties",
    )
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=280, unique=True, blank=True)
    description = models.TextField(blank=True)
    property_type = models.CharField(
        max_length=20,
        choices=PropertyType.choices,
        default=PropertyType.HOTEL,
    )
    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100)
    country = models.CharField(max_length=100)
    star_rating = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )
    amenities = models.JSONField(default=list, blank=True)
    check_in_time = models.TimeField(default=time(14, 0))
    check_out_time = models.TimeField(default=time(11, 0))
    cancellation_policy = models.TextField(blank=True)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
    )
    average_rating = models.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0.00"))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Hotel property")
        verbose_name_plural = _("Hotel properties")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["city", "country"], name="hotels_hote_city_5b0e1d_idx"),
            models.Index(fields=["status"], name="hotels_hote_status_7c2a4e_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.city})"

    def save(self, *args, **kwargs):  # type: ignore
        if not self.slug:
            self.slug = self._unique_slug()
        super().save(*args, **kwargs)

    def _unique_slug(self) -> str:
        base = slugify(self.name)[:250] or "property"
        slug, suffix = base, 2
        while HotelProperty.objects.filter(slug=slug).exclude(pk=self.pk).exists():
            slug = f"{base}-{suffix}"
            suffix += 1
        return slug


class Room(models.Model):
    """A bookable room type with one or more identical units."""

    class RoomType(models.TextChoices):
        SINGLE = "single", _("Single")
        DOUBLE = "double", _("Double")
        TWIN = "twin", _("Twin")
        SUITE = "suite", _("Suite")
        FAMILY = "family", _("Family")
        DORM = "dorm", _("Dormitory")
        STUDIO = "studio", _("Studio")

    class PricingUnit(models.TextChoices):
        NIGHTLY = "nightly", _("Per night")
        MONTHLY = "monthly", _("Per month")

    property = models.ForeignKey(
        HotelProperty,
        on_delete=models.CASCADE,
        related_name="rooms",
    )
    name = models.CharField(max_length=255)
    room_type = models.CharField(max_length=20, choices=RoomType.choices, default=RoomType.DOUBLE)
    description = models.TextField(blank=True)
    capacity_adults = models.PositiveSmallIntegerField(default=2, validators=[MinValueValidator(1)])
    capacity_children = models.PositiveSmallIntegerField(default=0)
    capacity_infants = models.PositiveSmallIntegerField(default=0)
    amenities = models.JSONField(default=list, blank=True)
    base_price = models.DecimalField(max_digits=10, decimal_places=2)
    currency = models.CharField(max_length=3, default=default_currency)
    pricing_unit = models.CharField(
        max_length=10,
        choices=PricingUnit.choices,
        default=PricingUnit.NIGHTLY,
    )
    tax_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Tax in percent of the room price."),
    )
    cleaning_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    extra_guest_fee = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Per guest above the adult capacity, per night."),
    )
    total_units = models.PositiveSmallIntegerField(default=1)
    minimum_stay = models.PositiveSmallIntegerField(default=1)
    maximum_stay = models.PositiveSmallIntegerField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["property", "base_price"]

    def __str__(self) -> str:
        return f"{self.name} @ {self.property.name}"

    @builtins.property
    def max_guests(self) -> int:
        return self.capacity_adults + self.capacity_children


class HotelBooking(Reservation):
    """A stay in one unit of a room type."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        CHECKED_IN = "checked_in", _("Checked in")
        CHECKED_OUT = "checked_out", _("Checked out")
        CANCELLED = "cancelled", _("Cancelled")
        EXPIRED = "expired", _("Expired")

    TRANSITIONS = {
        Status.PENDING: {Status.CONFIRMED, Status.CANCELLED, Status.EXPIRED},
        Status.CONFIRMED: {Status.CHECKED_IN, Status.CANCELLED},
        Status.CHECKED_IN: {Status.CHECKED_OUT},
    }
    BLOCKING_STATUSES = (Status.PENDING, Status.CONFIRMED, Status.CHECKED_IN)
    EXPIRED_STATUS = Status.EXPIRED
    PROVIDER_LOOKUP = "property__owner"
    START_FIELD = "check_in_date"
    END_FIELD = "check_out_date"
    IN_PROGRESS_STATUS = Status.CHECKED_IN
    FINISHED_STATUS = Status.CHECKED_OUT

    room = models.ForeignKey(Room, on_delete=models.PROTECT, related_name="bookings")
    property = models.ForeignKey(HotelProperty, on_delete=models.PROTECT, related_name="bookings")
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    check_in_date = models.DateField()
    check_out_date = models.DateField()
    nights = models.PositiveSmallIntegerField(default=1)
    adults = models.PositiveSmallIntegerField(default=1)
    children = models.PositiveSmallIntegerField(default=0)
    infants = models.PositiveSmallIntegerField(default=0)
    guest_name = models.CharField(max_length=255, blank=True)
    guest_email = models.EmailField(blank=True)
    guest_phone = models.CharField(max_length=30, blank=True)
    room_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    cleaning_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    extra_guest_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    price_description = models.CharField(max_length=100, blank=True)

    class Meta(Reservation.Meta):
        verbose_name = _("Hotel booking")
        verbose_name_plural = _("Hotel bookings")
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out_date__gt=models.F("check_in_date")),
                name="hotel_booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "check_in_date", "check_out_date"], name="hotels_hote_room_id_3f9d2b_idx"),
            models.Index(fields=["status"], name="hotels_hote_status_a41c8e_idx"),
        ]

    @builtins.property
    def item_title(self) -> str:
        return f"{self.room.name}, {self.property.name}"
