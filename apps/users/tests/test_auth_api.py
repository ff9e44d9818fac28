"""API tests for authentication and profile endpoints."""

from __future__ import annotations

from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class AuthAPITests(APITestCase):
    def test_register_returns_tokens(self) -> None:
        payload = {
            "email": "guest@example.com",
            "phone": "+255700000001",
            "first_name": "Guest",
            "last_name": "User",
            "password": "StrongPass123",
            "password_confirm": "StrongPass123",
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertIn("access", response.data["tokens"])
        self.assertEqual(response.data["user"]["email"], payload["email"])
        self.assertEqual(response.data["user"]["role"], User.RoleChoices.CUSTOMER)

    def test_register_as_provider(self) -> None:
        payload = {
            "email": "owner@example.com",
            "password": "StrongPass123",
            "password_confirm": "StrongPass123",
            "role": User.RoleChoices.CAR_OWNER,
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        user = User.objects.get(email="owner@example.com")
        self.assertTrue(user.is_provider())
        self.assertTrue(user.can_manage("cars"))
        self.assertFalse(user.can_manage("hotels"))

    def test_register_cannot_claim_admin_role(self) -> None:
        payload = {
            "email": "sneaky@example.com",
            "password": "StrongPass123",
            "password_confirm": "StrongPass123",
            "role": User.RoleChoices.ADMIN,
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("role", response.data)

    def test_register_rejects_mismatched_passwords(self) -> None:
        payload = {
            "email": "guest@example.com",
            "password": "StrongPass123",
            "password_confirm": "OtherPass123",
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password_confirm", response.data)

    def test_login_limited_attempts(self) -> None:
        user = User.objects.create_user(
            email="lock@example.com",
            phone="+255700000002",
            password="CorrectPassword1",
        )

        url = reverse("auth:login")
        wrong_payload = {"login": user.email, "password": "wrong"}
        for _ in range(5):
            response = self.client.post(url, wrong_payload, format="json")

        user.refresh_from_db()
        self.assertTrue(user.is_locked)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        user.locked_until = timezone.now() - timedelta(minutes=1)
        user.save(update_fields=["locked_until"])
        response = self.client.post(url, {"login": user.email, "password": "CorrectPassword1"})
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

    def test_login_by_phone(self) -> None:
        User.objects.create_user(email="phone@example.com", phone="+255700000003", password="Secret12345")

        response = self.client.post(
            reverse("auth:login"),
            {"login": "+255700000003", "password": "Secret12345"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("refresh", response.data["tokens"])

    def test_token_refresh(self) -> None:
        User.objects.create_user(email="refresh@example.com", password="Secret12345")
        login = self.client.post(
            reverse("auth:login"),
            {"login": "refresh@example.com", "password": "Secret12345"},
            format="json",
        )

        response = self.client.post(
            reverse("auth:token_refresh"),
            {"refresh": login.data["tokens"]["refresh"]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("access", response.data)


class ProfileAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="me@example.com", password="Secret12345")
        self.url = reverse("user-me")

    def test_me_requires_authentication(self) -> None:
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_returns_and_updates_profile(self) -> None:
        self.client.force_authenticate(self.user)

        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["email"], "me@example.com")

        response = self.client.patch(self.url, {"first_name": "Amina", "role": "admin"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.user.refresh_from_db()
        self.assertEqual(self.user.first_name, "Amina")
        self.assertEqual(self.user.role, User.RoleChoices.CUSTOMER)

    def test_user_list_is_staff_only(self) -> None:
        self.client.force_authenticate(self.user)
        response = self.client.get(reverse("user-list"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
