from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

User = get_user_model()

PASSWORD = "Sk1ll-Tracker!"


class RegistrationTests(APITestCase):

    def test_register_creates_user_and_token(self) -> None:
        response = self.client.post(
            reverse("auth-register"),
            {
                "email": "ada@example.com",
                "password": PASSWORD,
                "first_name": "Ada",
                "last_name": "Lovelace",
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        user = User.objects.get(email="ada@example.com")
        self.assertTrue(user.check_password(PASSWORD))
        self.assertTrue(user.email_notifications_enabled)
        self.assertEqual(response.data["token"], Token.objects.get(user=user).key)
        self.assertEqual(response.data["user"]["email"], "ada@example.com")
        self.assertNotIn("password", response.data["user"])

    def test_register_rejects_duplicate_email(self) -> None:
        User.objects.create_user(username="ada@example.com", email="ada@example.com", password=PASSWORD)

        response = self.client.post(
            reverse("auth-register"),
            {
                "email": "ada@example.com",
                "password": PASSWORD,
                "first_name": "Ada",
                "last_name": "Byron",
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("User with this email already exists", response.data["email"])

    def test_register_rejects_email_longer_than_username_column(self) -> None:
        email = "a" * 139 + "@example.com"

        response = self.client.post(
            reverse("auth-register"),
            {
                "email": email,
                "password": PASSWORD,
                "first_name": "Ada",
                "last_name": "Lovelace",
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", response.data)
        self.assertFalse(User.objects.exists())

    def test_login_with_address_as_registered(self) -> None:
        registered = self.client.post(
            reverse("auth-register"),
            {
                "email": "Ada@EXAMPLE.com",
                "password": PASSWORD,
                "first_name": "Ada",
                "last_name": "Lovelace",
            },
            format="json",
        )
        self.assertEqual(registered.status_code, status.HTTP_201_CREATED)

        response = self.client.post(
            reverse("auth-login"),
            {"email": "Ada@EXAMPLE.com", "password": PASSWORD},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["user"]["email"], "Ada@example.com")


class LoginTests(APITestCase):

    def setUp(self) -> None:
        self.user = User.objects.create_user(
            username="ada@example.com",
            email="ada@example.com",
            password=PASSWORD,
        )

    def test_login_returns_token_and_records_last_login(self) -> None:
        response = self.client.post(
            reverse("auth-login"),
            {"email": "ada@example.com", "password": PASSWORD},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["token"], Token.objects.get(user=self.user).key)
        self.user.refresh_from_db()
        self.assertIsNotNone(self.user.last_login)

    def test_login_with_wrong_password(self) -> None:
        response = self.client.post(
            reverse("auth-login"),
            {"email": "ada@example.com", "password": "wrong"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["message"], "Invalid email or password")

    def test_token_authenticates_requests(self) -> None:
        token = Token.objects.create(user=self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

        response = self.client.get(reverse("auth-me"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["email"], "ada@example.com")


class ProfileTests(APITestCase):

    def setUp(self) -> None:
        self.user = User.objects.create_user(
            username="ada@example.com",
            email="ada@example.com",
            password=PASSWORD,
        )
        self.client.force_authenticate(self.user)

    def test_update_profile_and_notification_preference(self) -> None:
        response = self.client.put(
            reverse("auth-profile"),
            {
                "first_name": "Ada",
                "last_name": "King",
                "email_notifications_enabled": False,
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertEqual(self.user.display_name, "Ada King")
        self.assertFalse(self.user.email_notifications_enabled)

    def test_email_is_read_only(self) -> None:
        self.client.patch(
            reverse("auth-profile"),
            {"email": "someone@example.com"},
            format="json",
        )
        self.user.refresh_from_db()
        self.assertEqual(self.user.email, "ada@example.com")

    def test_me_rejects_updates(self) -> None:
        response = self.client.put(reverse("auth-me"), {"first_name": "X"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)

    def test_display_name_falls_back_to_email(self) -> None:
        self.assertEqual(self.user.display_name, "ada@example.com")
