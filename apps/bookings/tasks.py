"""Celery tasks for the booking verticals."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from .models import reservation_models
from .services import lock_queryset_if_possible

logger = logging.getLogger(__name__)


# ============================================================================
# PERIODIC TASKS (scheduled through Celery Beat)
# ============================================================================

@shared_task(name="bookings.expire_pending_reservations")
def expire_pending_reservations() -> dict[str, int]:
    """
    Release unpaid holds whose ``expires_at`` has passed.

    Runs every minute. Each vertical decides which status an expired hold
    lands in (hotels use ``expired``, the others ``cancelled``).

    Returns:
        dict: {"<app_label.Model>": number of expired reservations}
    """
    from apps.notifications.tasks import notify_reservation_expired

    now = timezone.now()
    result: dict[str, int] = {}

    for model in reservation_models():
        label = model._meta.label
        expired_count = 0
        stale_pks = list(
            model.objects.filter(status=model.PENDING, expires_at__lte=now).values_list("pk", flat=True)
        )

        for pk in stale_pks:
            try:
                with transaction.atomic():
                    # Re-read under lock: the hold may have been paid meanwhile
                    reservation = lock_queryset_if_possible(model.objects.filter(pk=pk)).first()
                    if reservation is None or not reservation.should_expire():
                        continue
                    reservation.mark_expired()
                    transaction.on_commit(lambda pk=pk, label=label: notify_reservation_expired.delay(label, pk))
                expired_count += 1
                logger.info(f"{label} {reservation.booking_code} expired automatically")
            except Exception as e:
                logger.error(f"Error expiring {label} {pk}: {e}", exc_info=True)

        if expired_count > 0:
            logger.info(f"Expired {expired_count} pending {label} reservations")
        result[label] = expired_count

    return result


@shared_task(name="bookings.advance_reservation_statuses")
def advance_reservation_statuses() -> dict[str, int]:
    """
    Move confirmed reservations forward by date.

    On the start date a confirmed stay or rental enters its in-progress
    status; once the end date has passed it is finished. Verticals without
    an in-progress status (tours) are finished straight from confirmed.
    Runs every hour.

    Returns:
        dict: {"started": n, "finished": n}
    """
    today = timezone.localdate()
    started = finished = 0

    for model in reservation_models():
        label = model._meta.label

        if model.IN_PROGRESS_STATUS and model.START_FIELD:
            to_start = model.objects.filter(
                status=model.CONFIRMED,
                **{f"{model.START_FIELD}__lte": today},
            )
            for reservation in to_start:
                try:
                    reservation.transition_to(model.IN_PROGRESS_STATUS)
                    started += 1
                except Exception as e:
                    logger.error(f"Error starting {label} {reservation.pk}: {e}", exc_info=True)

        end_field = model.END_FIELD or model.START_FIELD
        if model.FINISHED_STATUS and end_field:
            from_status = model.IN_PROGRESS_STATUS or model.CONFIRMED
            to_finish = model.objects.filter(
                status=from_status,
                **{f"{end_field}__lt": today},
            )
            for reservation in to_finish:
                try:
                    reservation.transition_to(model.FINISHED_STATUS)
                    finished += 1
                except Exception as e:
                    logger.error(f"Error finishing {label} {reservation.pk}: {e}", exc_info=True)

    if started or finished:
        logger.info(f"Advanced reservations: {started} started, {finished} finished")

    return {"started": started, "finished": finished}
