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
            name="HotelProperty",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("slug", models.SlugField(blank=True, max_length=280, unique=True)),
                ("description", models.TextField(blank=True)),
                (
                    "property_type",
                    models.CharField(
                        choices=[
                            ("hotel", "Hotel"),
                            ("resort", "Resort"),
                            ("hostel", "Hostel"),
                            ("apartment", "Apartment"),
                            ("guesthouse", "Guesthouse"),
                            ("villa", "Villa"),
                        ],
                        default="hotel",
                        max_length=20,
                    ),
                ),
                ("address", models.CharField(blank=True, max_length=255)),
                ("city", models.CharField(max_length=100)),
                ("country", models.CharField(max_length=100)),
                (
                    "star_rating",
                    models.PositiveSmallIntegerField(
                        blank=True,
                        null=True,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(5),
                        ],
                    ),
                ),
                ("amenities", models.JSONField(blank=True, default=list)),
                ("check_in_time", models.TimeField(default=datetime.time(14, 0))),
                ("check_out_time", models.TimeField(default=datetime.time(11, 0))),
                ("cancellation_policy", models.TextField(blank=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("active", "Active"),
                            ("inactive", "Inactive"),
                            ("pending_approval", "Pending approval"),
                        ],
                        default="active",
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
                        related_name="hotel_properties",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Hotel property",
                "verbose_name_plural": "Hotel properties",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["city", "country"], name="hotels_hote_city_5b0e1d_idx"),
                    models.Index(fields=["status"], name="hotels_hote_status_7c2a4e_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Room",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                (
                    "room_type",
                    models.CharField(
                        choices=[
                            ("single", "Single"),
                            ("double", "Double"),
                            ("twin", "Twin"),
                            ("suite", "Suite"),
                            ("family", "Family"),
                            ("dorm", "Dormitory"),
                            ("studio", "Studio"),
                        ],
                        default="double",
                        max_length=20,
                    ),
                ),
                ("description", models.TextField(blank=True)),
                (
                    "capacity_adults",
                    models.PositiveSmallIntegerField(
                        default=2, validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                ("capacity_children", models.PositiveSmallIntegerField(default=0)),
                ("capacity_infants", models.PositiveSmallIntegerField(default=0)),
                ("amenities", models.JSONField(blank=True, default=list)),
                ("base_price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("currency", models.CharField(default=apps.bookings.models.default_currency, max_length=3)),
                (
                    "pricing_unit",
                    models.CharField(
                        choices=[("nightly", "Per night"), ("monthly", "Per month")],
                        default="nightly",
                        max_length=10,
                    ),
                ),
                (
                    "tax_rate",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Tax in percent of the room price.",
                        max_digits=5,
                    ),
                ),
                ("cleaning_fee", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                (
                    "extra_guest_fee",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Per guest above the adult capacity, per night.",
                        max_digits=10,
                    ),
                ),
                ("total_units", models.PositiveSmallIntegerField(default=1)),
                ("minimum_stay", models.PositiveSmallIntegerField(default=1)),
                ("maximum_stay", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "property",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="rooms",
                        to="hotels.hotelproperty",
                    ),
                ),
            ],
            options={
                "verbose_name": "Room",
                "verbose_name_plural": "Rooms",
                "ordering": ["property", "base_price"],
            },
        ),
        migrations.CreateModel(
            name="HotelBooking",
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
                            ("checked_in", "Checked in"),
                            ("checked_out", "Checked out"),
                            ("cancelled", "Cancelled"),
                            ("expired", "Expired"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("check_in_date", models.DateField()),
                ("check_out_date", models.DateField()),
                ("nights", models.PositiveSmallIntegerField(default=1)),
                ("adults", models.PositiveSmallIntegerField(default=1)),
                ("children", models.PositiveSmallIntegerField(default=0)),
                ("infants", models.PositiveSmallIntegerField(default=0)),
                ("guest_name", models.CharField(blank=True, max_length=255)),
                ("guest_email", models.EmailField(blank=True, max_length=254)),
                ("guest_phone", models.CharField(blank=True, max_length=30)),
                ("room_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("tax_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("cleaning_fee", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("extra_guest_fee", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("price_description", models.CharField(blank=True, max_length=100)),
                (
                    "guest",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="hotels_hotelbookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "property",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to="hotels.hotelproperty",
                    ),
                ),
                (
                    "room",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to="hotels.room",
                    ),
                ),
            ],
            options={
                "verbose_name": "Hotel booking",
                "verbose_name_plural": "Hotel bookings",
                "ordering": ["-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["room", "check_in_date", "check_out_date"], name="hotels_hote_room_id_3f9d2b_idx"),
                    models.Index(fields=["status"], name="hotels_hote_status_a41c8e_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("check_out_date__gt", models.F("check_in_date"))),
                        name="hotel_booking_valid_dates",
                    ),
                ],
            },
        ),
    ]
