# suites/management/commands/seed_suites.py

from __future__ import annotations

from django.core.management.base import BaseCommand

from suites.services.catalog import seed_catalog


class Command(BaseCommand):
    help = "Create every suite in the venue catalog (idempotent)."

    def handle(self, *args, **options):
        created = seed_catalog()
        if created:
            self.stdout.write(self.style.SUCCESS(f"Created {created} suite(s)."))
        else:
            self.stdout.write("All suites already exist.")
