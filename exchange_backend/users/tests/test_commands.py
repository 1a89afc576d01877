from io import StringIO
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

User = get_user_model()


class UserCommandTests(TestCase):
    def test_seed_users_is_idempotent(self):
        call_command("seed_users", stdout=StringIO())
        call_command("seed_users", stdout=StringIO())

        self.assertEqual(User.objects.count(), 4)
        admin = User.objects.get(email="admin@example.com")
        self.assertTrue(admin.is_superuser)
        self.assertTrue(admin.check_password("Pass1234!"))

    def test_seed_users_rejects_short_password(self):
        with self.assertRaises(CommandError):
            call_command("seed_users", "--password", "short", stdout=StringIO())

    def test_set_user_role(self):
        User.objects.create_user(email="promote@example.com", password="pass1234")
        out = StringIO()

        call_command("set_user_role", "PROMOTE@example.com", "approver", stdout=out)

        self.assertEqual(User.objects.get(email="promote@example.com").role, "APPROVER")
        self.assertIn("GUEST -> APPROVER", out.getvalue())

    def test_set_user_role_unknown_user(self):
        with self.assertRaises(CommandError):
            call_command("set_user_role", "ghost@example.com", "ADMIN", stdout=StringIO())

    def test_ensure_superuser_from_env(self):
        env = {"AUTO_ADMIN_EMAIL": "Root@Example.com", "AUTO_ADMIN_PASSWORD": "s3cret-pass"}
        with mock.patch.dict("os.environ", env):
            call_command("ensure_superuser", stdout=StringIO())
            call_command("ensure_superuser", stdout=StringIO())

        user = User.objects.get(email="root@example.com")
        self.assertEqual(user.role, "ADMIN")
        self.assertTrue(user.is_superuser)
        self.assertEqual(User.objects.filter(email="root@example.com").count(), 1)
