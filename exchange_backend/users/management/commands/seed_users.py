# users/management/commands/seed_users.py

from __future__ import annotations

from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from permissions.roles import ROLE_ADMIN, ROLE_APPROVER, ROLE_GUEST, ROLE_SELLER


@dataclass(frozen=True)
class SeedUserSpec:
    label: str
    role: str
    email: str
    name: str = ""


SEED_USERS = [
    SeedUserSpec("Admin", ROLE_ADMIN, "admin@example.com", "Site Admin"),
    SeedUserSpec("Approver", ROLE_APPROVER, "approver@example.com", "Suite Approver"),
    SeedUserSpec("Seller", ROLE_SELLER, "seller@example.com", "Suite Owner"),
    SeedUserSpec("Guest", ROLE_GUEST, "guest@example.com", "Ticket Buyer"),
]


class Command(BaseCommand):
    help = "Seed one demo account per marketplace role."

    def add_arguments(self, parser):
        parser.add_argument(
            "--password",
            type=str,
            default="Pass1234!",
            help="Password for seeded users (default: Pass1234!)",
        )
        parser.add_argument(
            "--force-password",
            action="store_true",
            help="Reset password for existing seeded users too.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        password = options.get("password") or ""
        force_password = bool(options.get("force_password"))

        if len(password) < 8:
            raise CommandError("--password must be at least 8 characters.")

        User = get_user_model()

        created_count = 0
        updated_count = 0

        for seed in SEED_USERS:
            is_admin = seed.role == ROLE_ADMIN

            user, created = User.objects.get_or_create(
                email=seed.email,
                defaults={
                    "name": seed.name,
                    "role": seed.role,
                    "is_staff": is_admin,
                    "is_superuser": is_admin,
                    "is_active": True,
                },
            )

            dirty = False

            if user.role != seed.role:
                user.role = seed.role
                dirty = True

            if user.is_staff != is_admin or user.is_superuser != is_admin:
                user.is_staff = is_admin
                user.is_superuser = is_admin
                dirty = True

            if created or force_password:
                user.set_password(password)
                dirty = True

            if dirty:
                user.save()
                if not created:
                    updated_count += 1

            if created:
                created_count += 1
                self.stdout.write(f"created: {seed.label} ({seed.role}) -> {seed.email}")
            else:
                self.stdout.write(f"exists:  {seed.label} ({seed.role}) -> {seed.email}")

        self.stdout.write("\n--- Summary ---")
        self.stdout.write(f"Created: {created_count}")
        self.stdout.write(f"Updated: {updated_count}")
