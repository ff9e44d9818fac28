"""Notification services for sending reservation emails."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.utils.html import strip_tags  # type: ignore

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.models import Reservation

logger = logging.getLogger(__name__)


# ============================================================================
# EMAIL NOTIFICATIONS
# ============================================================================

def send_email_notification(
    recipient_email: str,
    subject: str,
    message: str,
    *,
    html_message: str | None = None,
) -> bool:
    """
    Send a single email.

    Args:
        recipient_email: Recipient address
        subject: Subject line
        message: Plain-text body, derived from `html_message` when empty
        html_message: Optional HTML body

    Returns:
        bool: True when the email was handed to the backend
    """
    try:
        if html_message and not message:
            message = strip_tags(html_message)

        send_mail(
            subject=subject,
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )

        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False


def _details(reservation: "Reservation") -> str:
    return "\n".join(
        [
            f"Booking code: {reservation.booking_code}",
            f"Item: {reservation.item_title}",
            f"When: {reservation.period_label}",
            f"Total: {reservation.total_price} {reservation.currency}",
        ]
    )


def send_reservation_confirmed_email(reservation: "Reservation") -> bool:
    """Tell the guest their reservation is confirmed."""
    guest = reservation.guest
    html_message = f"""
    <html>
    <body>
        <h2>Hello, {guest.display_name}!</h2>
        <p>Your reservation has been confirmed.</p>
        <ul>
            <li><strong>Booking code:</strong> {reservation.booking_code}</li>
            <li><strong>Item:</strong> {reservation.item_title}</li>
            <li><strong>When:</strong> {reservation.period_label}</li>
            <li><strong>Total:</strong> {reservation.total_price} {reservation.currency}</li>
        </ul>
    </body>
    </html>
    """
    return send_email_notification(
        recipient_email=guest.email,
        subject=f"Reservation #{reservation.booking_code} confirmed",
        message=f"Hello, {guest.display_name}!\n\nYour reservation has been confirmed.\n\n{_details(reservation)}",
        html_message=html_message,
    )


def send_reservation_expired_email(reservation: "Reservation") -> bool:
    """Tell the guest the payment window closed and the hold was released."""
    guest = reservation.guest
    return send_email_notification(
        recipient_email=guest.email,
        subject=f"Reservation #{reservation.booking_code} expired",
        message=(
            f"Hello, {guest.display_name}!\n\n"
            "The payment window for your reservation has closed and it was released.\n\n"
            f"{_details(reservation)}"
        ),
    )
