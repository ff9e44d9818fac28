import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("marketplace")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Expire unpaid holds in every vertical
    "expire-pending-reservations": {
        "task": "bookings.expire_pending_reservations",
        "schedule": 60.0,
        "options": {"expires": 50},
    },
    # Start and finish stays, rentals and tours by date
    "advance-reservation-statuses": {
        "task": "bookings.advance_reservation_statuses",
        "schedule": crontab(minute=0),
    },
}

app.conf.timezone = "Africa/Dar_es_Salaam"
