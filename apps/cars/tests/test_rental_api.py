"""Integration tests for vehicle search and the rental lifecycle."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.tasks import advance_reservation_statuses
from apps.cars.models import CarRental, Vehicle
from apps.users.models import User


class CarRentalAPITests(APITestCase):
    def setUp(self) -> None:
        self.owner = User.objects.create_user(
            email="cars@example.com",
            password="OwnerPass123",
            role=User.RoleChoices.CAR_OWNER,
        )
        self.renter = User.objects.create_user(email="renter@example.com", password="RenterPass123")
        self.other = User.objects.create_user(email="other@example.com", password="OtherPass123")
        self.vehicle = Vehicle.objects.create(
            owner=self.owner,
            make="Toyota",
            model="Land Cruiser",
            year=2021,
            category=Vehicle.Category.SUV,
            seats=7,
            city="Arusha",
            country="Tanzania",
            features=["gps", "4x4"],
            daily_rate=Decimal("80.00"),
            deposit=Decimal("300.00"),
            insurance_fee=Decimal("10.00"),
            mileage_limit=200,
            extra_mileage_fee=Decimal("0.50"),
        )
        self.list_url = reverse("car-rental-list")
        self.today = timezone.localdate()
        self.client.force_authenticate(self.renter)

    def _payload(self, start_offset: int, days: int) -> dict:
        pickup = self.today + timedelta(days=start_offset)
        return {
            "vehicle": self.vehicle.pk,
            "pickup_date": str(pickup),
            "return_date": str(pickup + timedelta(days=days)),
            "driver_license_number": "TZ-123456",
            "driver_license_expiry": str(self.today + timedelta(days=3 * 365)),
            "driver_date_of_birth": "1990-05-17",
        }

    def test_renter_creates_rental(self) -> None:
        response = self.client.post(self.list_url, self._payload(2, 3), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        rental = CarRental.objects.get()
        self.assertEqual(rental.number_of_days, 3)
        self.assertEqual(rental.subtotal, Decimal("240.00"))
        self.assertEqual(rental.insurance_fee, Decimal("30.00"))
        self.assertEqual(rental.total_price, Decimal("570.00"))
        self.assertEqual(rental.driver_email, "renter@example.com")
        self.assertEqual(rental.driver_license_number, "TZ-123456")

    def test_overlapping_rental_is_rejected(self) -> None:
        self.client.post(self.list_url, self._payload(2, 3), format="json")

        self.client.force_authenticate(self.other)
        overlap = self.client.post(self.list_url, self._payload(4, 2), format="json")
        adjacent = self.client.post(self.list_url, self._payload(5, 2), format="json")

        self.assertEqual(overlap.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("already booked", overlap.data["non_field_errors"][0])
        self.assertEqual(adjacent.status_code, status.HTTP_201_CREATED, adjacent.data)

    def test_vehicle_in_maintenance_cannot_be_rented(self) -> None:
        self.vehicle.status = Vehicle.Status.MAINTENANCE
        self.vehicle.save(update_fields=["status"])

        response = self.client.post(self.list_url, self._payload(2, 3), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_availability_endpoint(self) -> None:
        self.client.post(self.list_url, self._payload(2, 3), format="json")
        url = reverse("car-vehicle-availability", args=[self.vehicle.pk])
        self.client.force_authenticate(None)

        busy = self.client.get(url, {"pickup_date": self.today + timedelta(days=3), "return_date": self.today + timedelta(days=6)})
        free = self.client.get(url, {"pickup_date": self.today + timedelta(days=5), "return_date": self.today + timedelta(days=7)})
        past = self.client.get(url, {"pickup_date": self.today - timedelta(days=1), "return_date": self.today + timedelta(days=1)})

        self.assertEqual(busy.status_code, status.HTTP_200_OK)
        self.assertFalse(busy.data["available"])
        self.assertTrue(free.data["available"])
        self.assertEqual(free.data["quote"]["total_price"], Decimal("480.00"))
        self.assertEqual(past.status_code, status.HTTP_400_BAD_REQUEST)

    def test_owner_runs_rental_to_completion(self) -> None:
        created = self.client.post(self.list_url, self._payload(2, 3), format="json")
        rental_id = created.data["id"]

        self.client.force_authenticate(self.owner)
        confirm = self.client.post(reverse("car-rental-confirm", args=[rental_id]))
        activate = self.client.post(reverse("car-rental-activate", args=[rental_id]), {"mileage_start": 10000})
        complete = self.client.post(reverse("car-rental-complete", args=[rental_id]), {"mileage_end": 10700})

        self.assertEqual(confirm.status_code, status.HTTP_200_OK, confirm.data)
        self.assertEqual(activate.data["status"], CarRental.Status.ACTIVE)
        self.assertEqual(complete.status_code, status.HTTP_200_OK, complete.data)
        self.assertEqual(complete.data["status"], CarRental.Status.COMPLETED)
        # 700 km driven against 600 included
        self.assertEqual(complete.data["mileage_charge"], "50.00")
        self.assertEqual(complete.data["total_price"], "620.00")
        self.assertTrue(complete.data["deposit_refunded"])

    def test_return_mileage_below_pickup_is_rejected(self) -> None:
        created = self.client.post(self.list_url, self._payload(2, 3), format="json")
        rental = CarRental.objects.get(pk=created.data["id"])
        rental.status = CarRental.Status.ACTIVE
        rental.mileage_start = 5000
        rental.save()

        self.client.force_authenticate(self.owner)
        response = self.client.post(reverse("car-rental-complete", args=[rental.pk]), {"mileage_end": 4000})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_renter_cannot_activate_and_cannot_cancel_active_rental(self) -> None:
        created = self.client.post(self.list_url, self._payload(2, 3), format="json")
        rental_id = created.data["id"]

        forbidden = self.client.post(reverse("car-rental-activate", args=[rental_id]))
        self.assertEqual(forbidden.status_code, status.HTTP_403_FORBIDDEN)

        CarRental.objects.filter(pk=rental_id).update(status=CarRental.Status.ACTIVE)
        cancel = self.client.post(reverse("car-rental-cancel", args=[rental_id]))
        self.assertEqual(cancel.status_code, status.HTTP_400_BAD_REQUEST)

    def test_license_expiring_before_return_is_rejected(self) -> None:
        payload = self._payload(2, 3)
        payload["driver_license_expiry"] = str(self.today + timedelta(days=4))

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("expire before the return date", response.data["non_field_errors"][0])
        self.assertFalse(CarRental.objects.exists())

    def test_underage_driver_is_rejected(self) -> None:
        payload = self._payload(2, 3)
        payload["driver_date_of_birth"] = f"{self.today.year - 20}-01-01"

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("at least 21", response.data["non_field_errors"][0])

    def test_driver_documents_are_required(self) -> None:
        payload = self._payload(2, 3)
        del payload["driver_date_of_birth"]

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("driver_date_of_birth", response.data)

    def test_hourly_task_leaves_rentals_to_the_owner(self) -> None:
        rental = CarRental.objects.create(
            guest=self.renter,
            vehicle=self.vehicle,
            pickup_date=self.today - timedelta(days=3),
            return_date=self.today - timedelta(days=1),
            number_of_days=2,
            deposit=Decimal("300.00"),
            status=CarRental.Status.CONFIRMED,
        )

        advance_reservation_statuses()
        advance_reservation_statuses()
        rental.refresh_from_db()
        self.assertEqual(rental.status, CarRental.Status.CONFIRMED)

        self.client.force_authenticate(self.owner)
        self.client.post(reverse("car-rental-activate", args=[rental.pk]), {"mileage_start": 1000})
        complete = self.client.post(reverse("car-rental-complete", args=[rental.pk]), {"mileage_end": 1100})

        self.assertEqual(complete.status_code, status.HTTP_200_OK, complete.data)
        rental.refresh_from_db()
        self.assertEqual(rental.mileage_start, 1000)
        self.assertTrue(rental.deposit_refunded)

    def test_owner_cannot_cancel_for_renter(self) -> None:
        created = self.client.post(self.list_url, self._payload(2, 3), format="json")

        self.client.force_authenticate(self.owner)
        response = self.client.post(reverse("car-rental-cancel", args=[created.data["id"]]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class VehicleSearchAPITests(APITestCase):
    def setUp(self) -> None:
        owner = User.objects.create_user(
            email="cars@example.com",
            password="OwnerPass123",
            role=User.RoleChoices.CAR_OWNER,
        )
        renter = User.objects.create_user(email="renter@example.com", password="RenterPass123")
        common = {"owner": owner, "year": 2020, "country": "Tanzania"}
        self.suv = Vehicle.objects.create(
            make="Toyota", model="Prado", category="suv", seats=7, city="Arusha",
            features=["gps", "4x4"], daily_rate=Decimal("90.00"), **common,
        )
        self.compact = Vehicle.objects.create(
            make="Suzuki", model="Swift", category="compact", seats=5, city="Arusha",
            transmission="manual", features=["gps"], daily_rate=Decimal("35.00"), **common,
        )
        Vehicle.objects.create(
            make="Nissan", model="Patrol", category="suv", city="Arusha",
            status=Vehicle.Status.INACTIVE, daily_rate=Decimal("70.00"), **common,
        )
        self.pickup = timezone.localdate() + timedelta(days=10)
        CarRental.objects.create(
            guest=renter,
            vehicle=self.compact,
            pickup_date=self.pickup,
            return_date=self.pickup + timedelta(days=2),
            status=CarRental.Status.CONFIRMED,
        )
        self.url = reverse("car-vehicle-list")

    def _models(self, params) -> set[str]:
        return {item["model"] for item in self.client.get(self.url, params).data}

    def test_search_filters(self) -> None:
        self.assertEqual(self._models({"city": "arusha"}), {"Prado", "Swift"})
        self.assertEqual(self._models({"category": "suv"}), {"Prado"})
        self.assertEqual(self._models({"transmission": "manual"}), {"Swift"})
        self.assertEqual(self._models({"min_seats": 6}), {"Prado"})
        self.assertEqual(self._models({"features": "gps,4x4"}), {"Prado"})
        self.assertEqual(self._models({"max_price": 50}), {"Swift"})

    def test_search_by_dates(self) -> None:
        params = {"pickup_date": self.pickup + timedelta(days=1), "return_date": self.pickup + timedelta(days=4)}
        self.assertEqual(self._models(params), {"Prado"})

        later = {"pickup_date": self.pickup + timedelta(days=2), "return_date": self.pickup + timedelta(days=4)}
        self.assertEqual(self._models(later), {"Prado", "Swift"})

    def test_availability_reports_vehicle_hidden_from_date_search(self) -> None:
        busy = {"pickup_date": self.pickup + timedelta(days=1), "return_date": self.pickup + timedelta(days=4)}
        response = self.client.get(reverse("car-vehicle-availability", args=[self.compact.pk]), busy)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["available"])
        self.assertIn("already booked", response.data["reason"])
