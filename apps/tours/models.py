"""Tour domain models."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.text import slugify  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.models import Reservation, default_currency


class Tour(models.Model):
    """A tour package listed by a tour operator."""

    operator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="tours",
    )
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=280, unique=True, blank=True)
    description = models.TextField(blank=True)
    location = models.CharField(max_length=255)
    tour_type = models.CharField(max_length=50, blank=True)
    duration = models.CharField(max_length=50, blank=True, help_text=_("Label such as '3 days' or 'Half day'."))
    price = models.DecimalField(max_digits=10, decimal_places=2, help_text=_("Price per adult."))
    currency = models.CharField(max_length=3, default=default_currency)
    max_participants = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text=_("Participants per tour date. Empty means unlimited."),
    )
    meeting_point = models.CharField(max_length=255, blank=True)
    itinerary = models.JSONField(default=list, blank=True)
    inclusions = models.JSONField(default=list, blank=True)
    exclusions = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    average_rating = models.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0.00"))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Tour")
        verbose_name_plural = _("Tours")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["location"], name="tours_tour_locatio_5f3a2b_idx"),
            models.Index(fields=["is_active"], name="tours_tour_is_acti_c81d94_idx"),
        ]

    def __str__(self) -> str:
        return self.name

    def save(self, *args, **kwargs):  # type: ignore
        if not self.slug:
            base = slugify(self.name)[:250] or "tour"
            slug, suffix = base, 2
            while Tour.objects.filter(slug=slug).exclude(pk=self.pk).exists():
                slug = f"{base}-{suffix}"
                suffix += 1
            self.slug = slug
        super().save(*args, **kwargs)


class TourBooking(Reservation):
    """Seats on a tour for one date."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        COMPLETED = "completed", _("Completed")
        CANCELLED = "cancelled", _("Cancelled")

    TRANSITIONS = {
        Status.PENDING: {Status.CONFIRMED, Status.CANCELLED},
        Status.CONFIRMED: {Status.COMPLETED, Status.CANCELLED},
    }
    BLOCKING_STATUSES = (Status.PENDING, Status.CONFIRMED)
    PROVIDER_LOOKUP = "tour__operator"
    START_FIELD = "tour_date"
    FINISHED_STATUS = Status.COMPLETED

    tour = models.ForeignKey(Tour, on_delete=models.PROTECT, related_name="bookings")
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    tour_date = models.DateField()
    tour_time = models.TimeField(null=True, blank=True)
    adults = models.PositiveSmallIntegerField(default=1)
    children = models.PositiveSmallIntegerField(default=0)
    seniors = models.PositiveSmallIntegerField(default=0)
    total_participants = models.PositiveSmallIntegerField(default=1)
    adult_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    child_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    senior_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    contact_name = models.CharField(max_length=255, blank=True)
    contact_email = models.EmailField(blank=True)
    contact_phone = models.CharField(max_length=30, blank=True)
    dietary_restrictions = models.CharField(max_length=255, blank=True)
    accessibility_needs = models.CharField(max_length=255, blank=True)

    class Meta(Reservation.Meta):
        verbose_name = _("Tour booking")
        verbose_name_plural = _("Tour bookings")
        indexes = [
            models.Index(fields=["tour", "tour_date"], name="tours_tourb_tour_id_7e20f1_idx"),
            models.Index(fields=["status"], name="tours_tourb_status_4d9c36_idx"),
        ]

    @property
    def item_title(self) -> str:
        return self.tour.name
