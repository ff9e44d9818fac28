import datetime
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
            name="Vehicle",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("make", models.CharField(max_length=100)),
                ("model", models.CharField(max_length=100)),
                ("year", models.PositiveSmallIntegerField()),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("economy", "Economy"),
                            ("compact", "Compact"),
                            ("midsize", "Midsize"),
                            ("suv", "SUV"),
                            ("luxury", "Luxury"),
                            ("van", "Van"),
                            ("pickup", "Pickup"),
                            ("convertible", "Convertible"),
                        ],
                        default="economy",
                        max_length=20,
                    ),
                ),
                (
                    "transmission",
                    models.CharField(
                        choices=[("automatic", "Automatic"), ("manual", "Manual")],
                        default="automatic",
                        max_length=20,
                    ),
                ),
                (
                    "fuel_type",
                    models.CharField(
                        choices=[
                            ("petrol", "Petrol"),
                            ("diesel", "Diesel"),
                            ("hybrid", "Hybrid"),
                            ("electric", "Electric"),
                        ],
                        default="petrol",
                        max_length=20,
                    ),
                ),
                (
                    "seats",
                    models.PositiveSmallIntegerField(
                        default=5, validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                ("doors", models.PositiveSmallIntegerField(default=4)),
                ("color", models.CharField(blank=True, max_length=50)),
                ("license_plate", models.CharField(blank=True, max_length=20)),
                ("description", models.TextField(blank=True)),
                ("features", models.JSONField(blank=True, default=list)),
                ("city", models.CharField(max_length=100)),
                ("country", models.CharField(max_length=100)),
                ("pickup_address", models.CharField(blank=True, max_length=255)),
                ("currency", models.CharField(default=apps.bookings.models.default_currency, max_length=3)),
                ("daily_rate", models.DecimalField(decimal_places=2, max_digits=10)),
                ("weekly_rate", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("monthly_rate", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("deposit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                (
                    "insurance_fee",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Insurance per rental day.",
                        max_digits=10,
                    ),
                ),
                (
                    "mileage_limit",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Included kilometres per day. Empty means unlimited.",
                        null=True,
                    ),
                ),
                (
                    "extra_mileage_fee",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Charge per kilometre above the included mileage.",
                        max_digits=8,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("available", "Available"),
                            ("rented", "Rented"),
                            ("maintenance", "Maintenance"),
                            ("inactive", "Inactive"),
                        ],
                        default="available",
                        max_length=20,
                    ),
                ),
                ("average_rating", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=3)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="vehicles",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Vehicle",
                "verbose_name_plural": "Vehicles",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["city", "country"], name="cars_vehicl_city_8d2f41_idx"),
                    models.Index(fields=["status"], name="cars_vehicl_status_1c7e90_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CarRental",
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
                            ("active", "Active"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("pickup_date", models.DateField()),
                ("return_date", models.DateField()),
                ("pickup_time", models.TimeField(default=datetime.time(10, 0))),
                ("return_time", models.TimeField(default=datetime.time(10, 0))),
                ("pickup_location", models.CharField(blank=True, max_length=255)),
                ("return_location", models.CharField(blank=True, max_length=255)),
                ("number_of_days", models.PositiveSmallIntegerField(default=1)),
                ("daily_rate", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("subtotal", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("insurance_fee", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("deposit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("rate_type", models.CharField(default="daily", max_length=10)),
                ("driver_name", models.CharField(blank=True, max_length=255)),
                ("driver_email", models.EmailField(blank=True, max_length=254)),
                ("driver_phone", models.CharField(blank=True, max_length=30)),
                ("driver_license_number", models.CharField(blank=True, max_length=50)),
                ("mileage_start", models.PositiveIntegerField(blank=True, null=True)),
                ("mileage_end", models.PositiveIntegerField(blank=True, null=True)),
                ("mileage_charge", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("deposit_refunded", models.BooleanField(default=False)),
                ("deposit_refunded_at", models.DateTimeField(blank=True, null=True)),
                (
                    "guest",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cars_carrentals",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "vehicle",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="rentals",
                        to="cars.vehicle",
                    ),
                ),
            ],
            options={
                "verbose_name": "Car rental",
                "verbose_name_plural": "Car rentals",
                "ordering": ["-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(
                        fields=["vehicle", "pickup_date", "return_date"], name="cars_carren_vehicle_4b6a13_idx"
                    ),
                    models.Index(fields=["status"], name="cars_carren_status_e0d5c7_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("return_date__gt", models.F("pickup_date"))),
                        name="car_rental_valid_dates",
                    ),
                ],
            },
        ),
    ]
