"""API tests for authentication and profile endpoints."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.identity import actor_role
from apps.users.models import User
from shared.domain.errors import Forbidden


class AuthAPITests(APITestCase):
    def _register_payload(self, **extra) -> dict:
        payload = {
            "email": "renter@example.com",
            "phone": "+2348012345678",
            "first_name": "Ada",
            "last_name": "Obi",
            "password": "StrongPass123",
            "password_confirm": "StrongPass123",
        }
        payload.update(extra)
        return payload

    def test_register_returns_tokens(self) -> None:
        payload = self._register_payload()

        response = self.client.post(reverse("auth:register"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertIn("access", response.data["tokens"])
        self.assertIn("refresh", response.data["tokens"])
        self.assertEqual(response.data["user"]["email"], payload["email"])
        self.assertEqual(response.data["user"]["role"], User.RoleChoices.BUYER)

    def test_register_as_seller(self) -> None:
        response = self.client.post(reverse("auth:register"), self._register_payload(role="seller"), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(User.objects.get().role, User.RoleChoices.SELLER)

    def test_register_cannot_self_assign_admin(self) -> None:
        response = self.client.post(reverse("auth:register"), self._register_payload(role="admin"), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(User.objects.exists())

    def test_register_password_mismatch(self) -> None:
        response = self.client.post(
            reverse("auth:register"),
            self._register_payload(password_confirm="Different123"),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password_confirm", response.data)

    def test_register_duplicate_email(self) -> None:
        User.objects.create_user(email="renter@example.com", password="StrongPass123")
        response = self.client.post(reverse("auth:register"), self._register_payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", response.data)

    def test_login_and_refresh(self) -> None:
        User.objects.create_user(email="login@example.com", password="CorrectPassword1")

        response = self.client.post(
            reverse("auth:login"),
            {"email": "login@example.com", "password": "CorrectPassword1"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

        refresh = self.client.post(
            reverse("auth:token_refresh"),
            {"refresh": response.data["tokens"]["refresh"]},
            format="json",
        )
        self.assertEqual(refresh.status_code, status.HTTP_200_OK, refresh.data)
        self.assertIn("access", refresh.data)

    def test_login_wrong_password(self) -> None:
        User.objects.create_user(email="login@example.com", password="CorrectPassword1")
        response = self.client.post(
            reverse("auth:login"),
            {"email": "login@example.com", "password": "wrong"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_bearer_token_authenticates_requests(self) -> None:
        response = self.client.post(reverse("auth:register"), self._register_payload(), format="json")
        token = response.data["tokens"]["access"]

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        me = self.client.get(reverse("user-me"))

        self.assertEqual(me.status_code, status.HTTP_200_OK, me.data)
        self.assertEqual(me.data["email"], "renter@example.com")


class ProfileAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="me@example.com", password="StrongPass123")
        self.client.force_authenticate(self.user)

    def test_patch_me_updates_profile_but_not_role(self) -> None:
        response = self.client.patch(
            reverse("user-me"),
            {"first_name": "Chidi", "role": "admin"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.user.refresh_from_db()
        self.assertEqual(self.user.first_name, "Chidi")
        self.assertEqual(self.user.role, User.RoleChoices.BUYER)

    def test_user_list_is_admin_only(self) -> None:
        self.assertEqual(self.client.get(reverse("user-list")).status_code, status.HTTP_403_FORBIDDEN)

        admin = User.objects.create_superuser(email="root@example.com", password="StrongPass123")
        self.client.force_authenticate(admin)
        response = self.client.get(reverse("user-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 2)


class ActorRoleTests(APITestCase):
    def test_staff_is_admin(self) -> None:
        user = User.objects.create_user(email="staff@example.com", password="x", is_staff=True)
        self.assertEqual(actor_role(user), User.RoleChoices.ADMIN)

    def test_unknown_role_is_rejected(self) -> None:
        user = User.objects.create_user(email="odd@example.com", password="x")
        user.role = "superhero"
        with self.assertRaises(Forbidden):
            actor_role(user)
