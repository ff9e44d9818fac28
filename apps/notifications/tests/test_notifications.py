"""Tests for reservation emails and the tasks delivering them."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.core import mail
from django.test import TestCase
from django.utils import timezone

from apps.notifications.services import send_email_notification, send_reservation_confirmed_email
from apps.notifications.tasks import notify_reservation_confirmed, notify_reservation_expired
from apps.tours.models import Tour, TourBooking
from apps.users.models import User


class ReservationNotificationTests(TestCase):
    def setUp(self) -> None:
        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass123", first_name="Dana")
        operator = User.objects.create_user(
            email="operator@example.com",
            password="OperatorPass123",
            role=User.RoleChoices.TOUR_OPERATOR,
        )
        tour = Tour.objects.create(
            operator=operator,
            name="Old Town Walk",
            location="Tallinn",
            price=Decimal("40.00"),
            max_participants=10,
        )
        self.booking = TourBooking.objects.create(
            guest=self.guest,
            tour=tour,
            tour_date=timezone.localdate() + timedelta(days=5),
            total_price=Decimal("80.00"),
            currency="EUR",
        )

    def test_confirmation_email_contains_booking_details(self) -> None:
        self.assertTrue(send_reservation_confirmed_email(self.booking))

        self.assertEqual(len(mail.outbox), 1)
        email = mail.outbox[0]
        self.assertEqual(email.to, ["guest@example.com"])
        self.assertIn(self.booking.booking_code, email.subject)
        self.assertIn("Hello, Dana!", email.body)
        self.assertIn("80.00 EUR", email.body)
        self.assertEqual(email.alternatives[0][1], "text/html")

    def test_plain_body_is_derived_from_html(self) -> None:
        send_email_notification("guest@example.com", "Hi", "", html_message="<p>Welcome <b>back</b></p>")
        self.assertEqual(mail.outbox[0].body, "Welcome back")

    def test_backend_failure_returns_false(self) -> None:
        with mock.patch("apps.notifications.services.send_mail", side_effect=OSError("smtp down")):
            self.assertFalse(send_email_notification("guest@example.com", "Hi", "Body"))

    def test_tasks_load_reservation_by_label(self) -> None:
        self.assertTrue(notify_reservation_confirmed.delay("tours.TourBooking", self.booking.pk).get())
        self.assertTrue(notify_reservation_expired.delay("tours.TourBooking", self.booking.pk).get())

        self.assertEqual(len(mail.outbox), 2)
        self.assertIn("expired", mail.outbox[1].subject)

    def test_task_for_missing_reservation(self) -> None:
        self.assertFalse(notify_reservation_confirmed("tours.TourBooking", 999999))
        self.assertEqual(mail.outbox, [])
