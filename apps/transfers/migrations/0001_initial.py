from decimal import Decimal

import apps.bookings.models
import django.core.validators
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
            name="TransferVehicle",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("sedan", "Sedan"),
                            ("suv", "SUV"),
                            ("van", "Van"),
                            ("minibus", "Minibus"),
                            ("bus", "Bus"),
                            ("luxury", "Luxury"),
                        ],
                        default="sedan",
                        max_length=20,
                    ),
                ),
                ("make", models.CharField(max_length=100)),
                ("model", models.CharField(max_length=100)),
                (
                    "max_passengers",
                    models.PositiveSmallIntegerField(
                        default=3, validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                ("max_luggage", models.PositiveSmallIntegerField(default=2)),
                ("features", models.JSONField(blank=True, default=list)),
                ("city", models.CharField(max_length=100)),
                ("country", models.CharField(max_length=100)),
                ("airport_code", models.CharField(blank=True, max_length=3)),
                ("currency", models.CharField(default=apps.bookings.models.default_currency, max_length=3)),
                ("base_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("price_per_km", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=8)),
                ("price_per_hour", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("airport_surcharge", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                (
                    "night_surcharge",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Flat surcharge for pickups between 22:00 and 06:00.",
                        max_digits=10,
                    ),
                ),
                (
                    "waiting_time_fee",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Charge per started 15 minutes of waiting.",
                        max_digits=8,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("available", "Available"),
                            ("maintenance", "Maintenance"),
                            ("inactive", "Inactive"),
                        ],
                        default="available",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="transfer_vehicles",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Transfer vehicle",
                "verbose_name_plural": "Transfer vehicles",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["city", "country"], name="transfers_t_city_2e9b70_idx"),
                    models.Index(fields=["airport_code"], name="transfers_t_airport_6a1f3c_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="TransferBooking",
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
                            ("assigned", "Driver assigned"),
                            ("in_progress", "In progress"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                (
                    "transfer_type",
                    models.CharField(
                        choices=[
                            ("airport_to_city", "Airport to city"),
                            ("city_to_airport", "City to airport"),
                            ("point_to_point", "Point to point"),
                            ("hourly", "Hourly hire"),
                        ],
                        max_length=20,
                    ),
                ),
                ("pickup_address", models.CharField(max_length=255)),
                ("pickup_city", models.CharField(blank=True, max_length=100)),
                ("dropoff_address", models.CharField(blank=True, max_length=255)),
                ("dropoff_city", models.CharField(blank=True, max_length=100)),
                ("flight_number", models.CharField(blank=True, max_length=20)),
                ("pickup_date", models.DateField()),
                ("pickup_time", models.TimeField()),
                ("estimated_duration_minutes", models.PositiveIntegerField(default=0)),
                (
                    "estimated_distance_km",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=8),
                ),
                ("waiting_minutes", models.PositiveIntegerField(default=0)),
                (
                    "passengers",
                    models.PositiveSmallIntegerField(
                        default=1, validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                ("luggage", models.PositiveSmallIntegerField(default=0)),
                ("child_seats", models.PositiveSmallIntegerField(default=0)),
                ("wheelchair_accessible", models.BooleanField(default=False)),
                ("contact_name", models.CharField(blank=True, max_length=255)),
                ("contact_email", models.EmailField(blank=True, max_length=254)),
                ("contact_phone", models.CharField(blank=True, max_length=30)),
                ("driver_name", models.CharField(blank=True, max_length=255)),
                ("driver_phone", models.CharField(blank=True, max_length=30)),
                ("base_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("distance_charge", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("time_charge", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("airport_surcharge", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("night_surcharge", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("waiting_fee", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                (
                    "guest",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="transfers_transferbookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "vehicle",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to="transfers.transfervehicle",
                    ),
                ),
            ],
            options={
                "verbose_name": "Transfer booking",
                "verbose_name_plural": "Transfer bookings",
                "ordering": ["-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["vehicle", "pickup_date"], name="transfers_t_vehicle_9c4d52_idx"),
                    models.Index(fields=["status"], name="transfers_t_status_b3e817_idx"),
                ],
            },
        ),
    ]
