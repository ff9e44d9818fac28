"""Celery tasks delivering reservation notifications."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.apps import apps  # type: ignore

from .services import send_reservation_confirmed_email, send_reservation_expired_email

logger = logging.getLogger(__name__)


def _load_reservation(model_label: str, pk: int):
    model = apps.get_model(model_label)
    try:
        return model.objects.select_related("guest").get(pk=pk)
    except model.DoesNotExist:
        logger.error(f"{model_label} {pk} not found for notification")
        return None


@shared_task(name="notifications.notify_reservation_confirmed")
def notify_reservation_confirmed(model_label: str, pk: int) -> bool:
    reservation = _load_reservation(model_label, pk)
    if reservation is None:
        return False
    sent = send_reservation_confirmed_email(reservation)
    logger.info(f"[NOTIFICATION] Confirmation for {reservation.booking_code} sent={sent}")
    return sent


@shared_task(name="notifications.notify_reservation_expired")
def notify_reservation_expired(model_label: str, pk: int) -> bool:
    reservation = _load_reservation(model_label, pk)
    if reservation is None:
        return False
    sent = send_reservation_expired_email(reservation)
    logger.info(f"[NOTIFICATION] Expiry notice for {reservation.booking_code} sent={sent}")
    return sent
