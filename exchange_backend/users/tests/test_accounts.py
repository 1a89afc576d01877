from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from applications.models import SellerApplication
from audit.models import AuditEvent
from suites.models import Suite
from users.services import DuplicateEmailError, InvalidRoleError, register_user, set_user_role

User = get_user_model()


class AccountServiceTests(TestCase):
    """
    GUARANTEES:
    - Self-service accounts start as GUEST
    - Emails are unique regardless of case
    - Role changes are audited
    """

    def test_register_creates_guest(self):
        user = register_user(email="  New@Example.com ", password="pass1234", name=" New Person ")

        self.assertEqual(user.email, "new@example.com")
        self.assertEqual(user.name, "New Person")
        self.assertEqual(user.role, "GUEST")
        self.assertTrue(user.check_password("pass1234"))
        self.assertTrue(
            AuditEvent.objects.filter(action=AuditEvent.Action.USER_REGISTERED, target_id=str(user.pk)).exists()
        )

    def test_duplicate_email_is_rejected(self):
        register_user(email="dup@example.com", password="pass1234", name="One")

        with self.assertRaises(DuplicateEmailError):
            register_user(email="DUP@example.com", password="pass1234", name="Two")

    def test_set_role_to_admin_grants_staff(self):
        user = register_user(email="ops@example.com", password="pass1234", name="Ops")

        set_user_role(user=user, role="admin")

        user.refresh_from_db()
        self.assertEqual(user.role, "ADMIN")
        self.assertTrue(user.is_staff)

    def test_unknown_role_is_rejected(self):
        user = register_user(email="x@example.com", password="pass1234", name="X")

        with self.assertRaises(InvalidRoleError):
            set_user_role(user=user, role="SUPERFAN")


class AuthAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_register_then_login(self):
        register = self.client.post(
            reverse("users:register"),
            {"name": "Sam Buyer", "email": "sam@example.com", "password": "pass12345"},
            format="json",
        )
        self.assertEqual(register.status_code, 201)
        self.assertEqual(register.data["message"], "Account created successfully")
        self.assertEqual(register.data["user"]["role"], "GUEST")

        login = self.client.post(
            reverse("users:login"),
            {"email": "SAM@example.com", "password": "pass12345"},
            format="json",
        )
        self.assertEqual(login.status_code, 200)
        self.assertIn("access", login.data)
        self.assertIn("refresh", login.data)

    def test_register_rejects_short_password(self):
        response = self.client.post(
            reverse("users:register"),
            {"name": "Short", "email": "short@example.com", "password": "abc"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("password", response.data)

    def test_register_duplicate_email(self):
        User.objects.create_user(email="taken@example.com", password="pass1234")

        response = self.client.post(
            reverse("users:register"),
            {"name": "Again", "email": "taken@example.com", "password": "pass12345"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "EMAIL_TAKEN")

    def test_login_with_wrong_password(self):
        User.objects.create_user(email="user@example.com", password="pass1234")

        response = self.client.post(
            reverse("users:login"),
            {"email": "user@example.com", "password": "wrong-pass"},
            format="json",
        )

        self.assertEqual(response.status_code, 401)

    def test_me_includes_capabilities_and_verified_suites(self):
        user = User.objects.create_user(email="seller@example.com", password="pass1234", role="SELLER")
        suite = Suite.objects.create(area=Suite.Area.LOWER_FIRE, number=1)
        SellerApplication.objects.create(
            user=user,
            suite=suite,
            legal_name="Seller",
            status=SellerApplication.Status.APPROVED,
        )
        self.client.force_authenticate(user)

        response = self.client.get(reverse("users:me"))

        self.assertEqual(response.status_code, 200)
        self.assertIn("listings.create", response.data["capabilities"])
        self.assertEqual(response.data["verified_suite_ids"], [str(suite.pk)])

    def test_settings_update(self):
        user = User.objects.create_user(email="me@example.com", password="pass1234")
        self.client.force_authenticate(user)

        response = self.client.patch(
            reverse("users:settings"),
            {"name": " Jo ", "show_in_directory": True, "role": "ADMIN"},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        user.refresh_from_db()
        self.assertEqual(user.name, "Jo")
        self.assertTrue(user.show_in_directory)
        self.assertEqual(user.role, "GUEST")


class OwnersDirectoryTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.viewer = User.objects.create_user(email="viewer@example.com", password="pass1234")

        self.suite_a = Suite.objects.create(area=Suite.Area.LOWER_FIRE, number=2)
        self.suite_b = Suite.objects.create(area=Suite.Area.SOUTH_TERRACE, number=9)

    def _owner(self, email, name, role="SELLER", listed=True, suites=()):
        user = User.objects.create_user(
            email=email,
            password="pass1234",
            name=name,
            role=role,
            show_in_directory=listed,
        )
        for suite in suites:
            SellerApplication.objects.create(
                user=user,
                suite=suite,
                legal_name=name,
                status=SellerApplication.Status.APPROVED,
            )
        return user

    def test_directory_lists_opted_in_verified_owners(self):
        self._owner("zed@example.com", "Zed", suites=[self.suite_a, self.suite_b])
        self._owner("amy@example.com", "Amy", suites=[self.suite_a])
        self._owner("boss@example.com", "Zara Admin", role="ADMIN", suites=[self.suite_b])
        self._owner("hidden@example.com", "Hidden", listed=False, suites=[self.suite_a])
        self._owner("nosuite@example.com", "No Suite")

        self.client.force_authenticate(self.viewer)
        response = self.client.get(reverse("users:owners"))

        self.assertEqual(response.status_code, 200)
        names = [owner["name"] for owner in response.data["owners"]]
        self.assertEqual(names, ["Zara Admin", "Amy", "Zed"])
        self.assertEqual(len(response.data["owners"][2]["suites"]), 2)

    def test_directory_requires_login(self):
        response = self.client.get(reverse("users:owners"))
        self.assertIn(response.status_code, (401, 403))
