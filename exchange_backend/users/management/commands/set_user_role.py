# users/management/commands/set_user_role.py

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from permissions.roles import ALL_ROLES
from users.services import InvalidRoleError, set_user_role


class Command(BaseCommand):
    help = "Change a user's marketplace role (e.g. make someone an APPROVER)."

    def add_arguments(self, parser):
        parser.add_argument("email", type=str)
        parser.add_argument("role", type=str, help=f"One of: {', '.join(sorted(ALL_ROLES))}")

    def handle(self, *args, **options):
        User = get_user_model()
        email = (options["email"] or "").strip()

        user = User.objects.filter(email__iexact=email).first()
        if user is None:
            raise CommandError(f"No user with email '{email}'")

        previous = user.role
        try:
            set_user_role(user=user, role=options["role"])
        except InvalidRoleError as exc:
            raise CommandError(str(exc))

        self.stdout.write(self.style.SUCCESS(f"{user.email}: {previous} -> {user.role}"))
