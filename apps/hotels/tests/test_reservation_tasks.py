"""Tests for the periodic reservation tasks and notifications."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.core import mail
from django.db import IntegrityError, transaction
from django.test import TestCase
from django.utils import timezone

from apps.bookings.services import lock_queryset_if_possible
from apps.bookings.tasks import advance_reservation_statuses, expire_pending_reservations
from apps.hotels.models import HotelBooking, HotelProperty, Room
from apps.notifications.tasks import notify_reservation_confirmed
from apps.users.models import User


class ReservationTaskTests(TestCase):
    def setUp(self) -> None:
        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        owner = User.objects.create_user(
            email="owner@example.com",
            password="OwnerPass123",
            role=User.RoleChoices.PROPERTY_OWNER,
        )
        self.property = HotelProperty.objects.create(owner=owner, name="Lodge", city="Moshi", country="Tanzania")
        self.room = Room.objects.create(property=self.property, name="Double", base_price=Decimal("50.00"))
        self.today = timezone.localdate()

    def _book(self, start_offset: int, nights: int, **fields) -> HotelBooking:
        check_in = self.today + timedelta(days=start_offset)
        return HotelBooking.objects.create(
            guest=self.guest,
            room=self.room,
            property=self.property,
            check_in_date=check_in,
            check_out_date=check_in + timedelta(days=nights),
            total_price=Decimal("100.00"),
            **fields,
        )

    def test_expired_holds_are_released(self) -> None:
        stale = self._book(3, 2, expires_at=timezone.now() - timedelta(minutes=1))
        fresh = self._book(3, 2)

        with self.captureOnCommitCallbacks(execute=True):
            result = expire_pending_reservations()

        self.assertEqual(result["hotels.HotelBooking"], 1)
        stale.refresh_from_db()
        fresh.refresh_from_db()
        self.assertEqual(stale.status, HotelBooking.Status.EXPIRED)
        self.assertEqual(stale.payment_status, HotelBooking.PaymentStatus.FAILED)
        self.assertEqual(fresh.status, HotelBooking.Status.PENDING)
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn("expired", mail.outbox[0].subject)

    def test_hold_paid_during_the_sweep_is_not_expired(self) -> None:
        hold = self._book(3, 2, expires_at=timezone.now() - timedelta(minutes=1))

        def pay_before_lock(queryset):
            HotelBooking.objects.filter(pk=hold.pk).update(
                status=HotelBooking.Status.CONFIRMED,
                payment_status=HotelBooking.PaymentStatus.PAID,
            )
            return lock_queryset_if_possible(queryset)

        with mock.patch("apps.bookings.tasks.lock_queryset_if_possible", side_effect=pay_before_lock):
            result = expire_pending_reservations()

        self.assertEqual(result["hotels.HotelBooking"], 0)
        hold.refresh_from_db()
        self.assertEqual(hold.status, HotelBooking.Status.CONFIRMED)
        self.assertEqual(hold.payment_status, HotelBooking.PaymentStatus.PAID)
        self.assertEqual(len(mail.outbox), 0)

    def test_confirmed_stays_advance_by_date(self) -> None:
        arriving = self._book(0, 2, status=HotelBooking.Status.CONFIRMED)
        departed = self._book(-3, 2, status=HotelBooking.Status.CHECKED_IN)
        future = self._book(5, 2, status=HotelBooking.Status.CONFIRMED)

        result = advance_reservation_statuses()

        self.assertEqual(result, {"started": 1, "finished": 1})
        arriving.refresh_from_db()
        departed.refresh_from_db()
        future.refresh_from_db()
        self.assertEqual(arriving.status, HotelBooking.Status.CHECKED_IN)
        self.assertEqual(departed.status, HotelBooking.Status.CHECKED_OUT)
        self.assertEqual(future.status, HotelBooking.Status.CONFIRMED)

    def test_confirmation_email_for_missing_reservation(self) -> None:
        self.assertFalse(notify_reservation_confirmed("hotels.HotelBooking", 9999))
        self.assertEqual(len(mail.outbox), 0)

    def test_database_rejects_zero_night_stay(self) -> None:
        with self.assertRaises(IntegrityError), transaction.atomic():
            self._book(3, 0)

        self.assertFalse(HotelBooking.objects.exists())
