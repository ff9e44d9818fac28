"""Shared reservation model for the booking verticals.

Hotels, cars, transfers and tours each store their reservations in their
own table, but all of them inherit the abstract ``Reservation`` below: a
booking code, the guest, a status driven by a per-vertical transition
table, payment bookkeeping and the hold timeout.
"""

from __future__ import annotations

import logging
import secrets
from datetime import timedelta
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .exceptions import InvalidTransitionError

logger = logging.getLogger(__name__)


def hold_expiry():
    minutes = settings.MARKETPLACE["BOOKING_HOLD_MINUTES"]
    return timezone.now() + timedelta(minutes=minutes)


def default_currency() -> str:
    return settings.MARKETPLACE["DEFAULT_CURRENCY"]


class Reservation(models.Model):
    """Base for every vertical's reservation.

    Subclasses declare:

    * ``status`` with their own choices;
    * ``TRANSITIONS`` mapping a status to the statuses it may move to;
    * ``BLOCKING_STATUSES`` listing statuses that occupy inventory;
    * ``PROVIDER_LOOKUP``, the ORM path from the reservation to the user who
      owns the booked inventory (``"room__property__owner"``);
    * optional ``START_FIELD``/``END_FIELD`` with ``IN_PROGRESS_STATUS`` and
      ``FINISHED_STATUS`` so the hourly task can advance them by date.
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    EXPIRED_STATUS = "cancelled"

    TRANSITIONS: dict[str, set[str]] = {}
    BLOCKING_STATUSES: tuple[str, ...] = ()
    PROVIDER_LOOKUP = ""
    START_FIELD: str | None = None
    END_FIELD: str | None = None
    IN_PROGRESS_STATUS: str | None = None
    FINISHED_STATUS: str | None = None

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", _("Awaiting payment")
        PAID = "paid", _("Paid")
        REFUNDED = "refunded", _("Refunded")
        FAILED = "failed", _("Failed")

    booking_code = models.CharField(max_length=12, unique=True, editable=False)
    guest = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="%(app_label)s_%(class)ss",
    )
    status = models.CharField(max_length=20, default=PENDING)
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    currency = models.CharField(max_length=3, default=default_currency)
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    special_requests = models.TextField(blank=True)
    expires_at = models.DateTimeField(
        null=True,
        blank=True,
        default=hold_expiry,
        help_text=_("Hold timeout after which an unpaid reservation is released."),
    )
    paid_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self._meta.verbose_name} #{self.booking_code}"

    def save(self, *args, **kwargs):  # type: ignore
        if self._state.adding and not self.booking_code:
            self.booking_code = self.generate_booking_code()
        super().save(*args, **kwargs)

    @staticmethod
    def generate_booking_code() -> str:
        return secrets.token_hex(4).upper()

    @property
    def item_title(self) -> str:
        """What was booked, for notifications."""
        return str(self._meta.verbose_name)

    @property
    def period_label(self) -> str:
        if self.START_FIELD and self.END_FIELD:
            return f"{getattr(self, self.START_FIELD)} - {getattr(self, self.END_FIELD)}"
        if self.START_FIELD:
            return str(getattr(self, self.START_FIELD))
        return ""

    # --- Ownership ----------------------------------------------------------
    @property
    def provider_id(self):
        """Primary key of the user owning the booked inventory."""
        *path, last = self.PROVIDER_LOOKUP.split("__")
        obj = self
        for part in path:
            obj = getattr(obj, part)
        return getattr(obj, f"{last}_id")

    def is_managed_by(self, user) -> bool:
        if not user.is_authenticated:
            return False
        if user.is_admin():
            return True
        return self.provider_id == user.id

    # --- Status machine -----------------------------------------------------
    @property
    def is_blocking(self) -> bool:
        return self.status in self.BLOCKING_STATUSES

    def can_transition_to(self, new_status: str) -> bool:
        return new_status in self.TRANSITIONS.get(self.status, set())

    def transition_to(self, new_status: str, *, commit: bool = True) -> None:
        if not self.can_transition_to(new_status):
            raise InvalidTransitionError(self.status, new_status)
        previous = self.status
        self.status = new_status
        if commit:
            self.save(update_fields=["status", "updated_at"])
        logger.info(f"{self._meta.label} {self.booking_code}: {previous} -> {new_status}")

    def mark_paid(self) -> None:
        self.payment_status = self.PaymentStatus.PAID
        self.paid_at = timezone.now()
        if self.status == self.PENDING:
            self.transition_to(self.CONFIRMED, commit=False)
        self.save(update_fields=["payment_status", "paid_at", "status", "updated_at"])

    def mark_cancelled(self, reason: str = "") -> None:
        self.transition_to(self.CANCELLED, commit=False)
        self.cancellation_reason = reason
        self.cancelled_at = timezone.now()
        if self.payment_status == self.PaymentStatus.PAID:
            self.payment_status = self.PaymentStatus.REFUNDED
        self.save(
            update_fields=["status", "payment_status", "cancellation_reason", "cancelled_at", "updated_at"]
        )

    def mark_expired(self) -> None:
        minutes = settings.MARKETPLACE["BOOKING_HOLD_MINUTES"]
        self.transition_to(self.EXPIRED_STATUS, commit=False)
        self.payment_status = self.PaymentStatus.FAILED
        self.cancellation_reason = f"Payment window expired ({minutes} minutes)"
        self.cancelled_at = timezone.now()
        self.save(
            update_fields=["status", "payment_status", "cancellation_reason", "cancelled_at", "updated_at"]
        )

    def should_expire(self) -> bool:
        return bool(self.expires_at and timezone.now() > self.expires_at and self.status == self.PENDING)


def reservation_models() -> list[type[Reservation]]:
    """Concrete reservation models of every installed vertical."""
    from django.apps import apps  # type: ignore

    return [model for model in apps.get_models() if issubclass(model, Reservation)]
