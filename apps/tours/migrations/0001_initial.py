from decimal import Decimal

import apps.bookings.models
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Tour",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("slug", models.SlugField(blank=True, max_length=280, unique=True)),
                ("description", models.TextField(blank=True)),
                ("location", models.CharField(max_length=255)),
                ("tour_type", models.CharField(blank=True, max_length=50)),
                (
                    "duration",
                    models.CharField(blank=True, help_text="Label such as '3 days' or 'Half day'.", max_length=50),
                ),
                ("price", models.DecimalField(decimal_places=2, help_text="Price per adult.", max_digits=10)),
                ("currency", models.CharField(default=apps.bookings.models.default_currency, max_length=3)),
                (
                    "max_participants",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Participants per tour date. Empty means unlimited.",
                        null=True,
                    ),
                ),
                ("meeting_point", models.CharField(blank=True, max_length=255)),
                ("itinerary", models.JSONField(blank=True, default=list)),
                ("inclusions", models.JSONField(blank=True, default=list)),
                ("exclusions", models.JSONField(blank=True, default=list)),
                ("is_active", models.BooleanField(default=True)),
                ("average_rating", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=3)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "operator",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tours",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Tour",
                "verbose_name_plural": "Tours",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["location"], name="tours_tour_locatio_5f3a2b_idx"),
                    models.Index(fields=["is_active"], name="tours_tour_is_acti_c81d94_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="TourBooking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("booking_code", models.CharField(editable=False, max_length=12, unique=True)),
                (
                    "payment_status",
                    models.CharField(
                        choices=[
                            ("pending", "Awaiting payment"),
                            ("paid", "Paid"),
                            ("refunded", "Refunded"),
                            ("failed", "Failed"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("currency", models.CharField(default=apps.bookings.models.default_currency, max_length=3)),
                ("total_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("special_requests", models.TextField(blank=True)),
                (
                    "expires_at",
                    models.DateTimeField(
                        blank=True,
                        default=apps.bookings.models.hold_expiry,
                        help_text="Hold timeout after which an unpaid reservation is released.",
                        null=True,
                    ),
                ),
                ("paid_at", models.DateTimeField(blank=True, null=True)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("cancellation_reason", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("confirmed", "Confirmed"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("tour_date", models.DateField()),
                ("tour_time", models.TimeField(blank=True, null=True)),
                ("adults", models.PositiveSmallIntegerField(default=1)),
                ("children", models.PositiveSmallIntegerField(default=0)),
                ("seniors", models.PositiveSmallIntegerField(default=0)),
                ("total_participants", models.PositiveSmallIntegerField(default=1)),
                ("adult_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("child_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("senior_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("subtotal", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("tax_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("contact_name", models.CharField(blank=True, max_length=255)),
                ("contact_email", models.EmailField(blank=True, max_length=254)),
                ("contact_phone", models.CharField(blank=True, max_length=30)),
                ("dietary_restrictions", models.CharField(blank=True, max_length=255)),
                ("accessibility_needs", models.CharField(blank=True, max_length=255)),
                (
                    "guest",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tours_tourbookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "tour",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to="tours.tour",
                    ),
                ),
            ],
            options={
                "verbose_name": "Tour booking",
                "verbose_name_plural": "Tour bookings",
                "ordering": ["-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["tour", "tour_date"], name="tours_tourb_tour_id_7e20f1_idx"),
                    models.Index(fields=["status"], name="tours_tourb_status_4d9c36_idx"),
                ],
            },
        ),
    ]
