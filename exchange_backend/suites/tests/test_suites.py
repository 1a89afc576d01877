from datetime import timedelta
from decimal import Decimal
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.db import IntegrityError
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from listings.models import Listing
from suites.models import Suite
from suites.services.catalog import AREA_SUITE_COUNTS, get_or_create_suite, seed_catalog

User = get_user_model()


class SuiteCatalogTests(TestCase):
    """
    GUARANTEES:
    - (area, number) identifies one suite
    - display_name is derived from area + number
    - Seeding is idempotent
    """

    def test_display_names(self):
        self.assertEqual(Suite.objects.create(area=Suite.Area.LOWER_FIRE, number=12).display_name, "L12")
        self.assertEqual(Suite.objects.create(area=Suite.Area.NORTH_TERRACE, number=4).display_name, "UNT4")
        self.assertEqual(Suite.objects.create(area=Suite.Area.SOUTH_TERRACE, number=9).display_name, "UST9")

    def test_default_capacity(self):
        self.assertEqual(Suite.objects.create(area=Suite.Area.LOWER_FIRE, number=1).capacity, 8)

    def test_area_number_is_unique(self):
        Suite.objects.create(area=Suite.Area.LOWER_FIRE, number=3)

        with self.assertRaises(IntegrityError):
            Suite.objects.create(area=Suite.Area.LOWER_FIRE, number=3)

    def test_get_or_create_normalizes_input(self):
        suite, created = get_or_create_suite(area=" lower_fire ", number="15")
        again, created_again = get_or_create_suite(area="LOWER_FIRE", number=15)

        self.assertTrue(created)
        self.assertFalse(created_again)
        self.assertEqual(suite.pk, again.pk)

    def test_get_or_create_rejects_bad_input(self):
        for area, number in (("BALCONY", 1), ("LOWER_FIRE", 0), ("LOWER_FIRE", "abc"), ("LOWER_FIRE", None)):
            with self.subTest(area=area, number=number):
                with self.assertRaises(ValidationError):
                    get_or_create_suite(area=area, number=number)

    def test_seed_catalog_is_idempotent(self):
        Suite.objects.create(area=Suite.Area.LOWER_FIRE, number=1)

        created = seed_catalog()

        self.assertEqual(created, sum(AREA_SUITE_COUNTS.values()) - 1)
        self.assertEqual(seed_catalog(), 0)

    def test_seed_command(self):
        out = StringIO()
        call_command("seed_suites", stdout=out)

        self.assertIn("Created", out.getvalue())
        self.assertEqual(Suite.objects.count(), sum(AREA_SUITE_COUNTS.values()))


class SuiteAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.seller = User.objects.create_user(
            email="seller@example.com",
            password="pass1234",
            phone="555-0100",
            role="SELLER",
        )

        self.lower = Suite.objects.create(area=Suite.Area.LOWER_FIRE, number=12)
        self.north = Suite.objects.create(area=Suite.Area.NORTH_TERRACE, number=4)

    def _listing(self, suite, title, status=Listing.Status.ACTIVE, notes=""):
        return Listing.objects.create(
            seller=self.seller,
            suite=suite,
            slug=f"{title.lower().replace(' ', '-')}-1",
            event_title=title,
            event_datetime=timezone.now() + timedelta(days=7),
            quantity=4,
            original_quantity=4,
            price_per_seat=Decimal("80.00"),
            delivery_method=Listing.DeliveryMethod.MOBILE_TRANSFER,
            status=status,
            notes=notes,
            sold_at=timezone.now() if status == Listing.Status.SOLD else None,
        )

    def test_catalog_by_area(self):
        response = self.client.get(reverse("suites-list"), {"area": "north_terrace"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual([row["display_name"] for row in response.data], ["UNT4"])
        self.assertEqual(response.data[0]["map_key"], "NORTH:4")

    def test_map_highlights_suites_with_active_listings(self):
        older = self._listing(self.lower, "Older Game", notes="Older notes")
        Listing.objects.filter(pk=older.pk).update(created_at=timezone.now() - timedelta(hours=1))
        newest = self._listing(self.lower, "Newer Game")
        self._listing(self.north, "Sold Game", status=Listing.Status.SOLD)

        response = self.client.get(reverse("suites-venue-map"))

        self.assertEqual(response.status_code, 200)
        data = response.data["data"]
        self.assertEqual(data["highlighted"], ["LOWER:12"])
        self.assertEqual(data["disabled"], [])

        card = data["contacts"]["LOWER:12"]
        self.assertEqual(card["listing_id"], str(newest.pk))
        self.assertEqual(card["contact_email"], "seller@example.com")
        self.assertEqual(card["contact_phone"], "555-0100")
        self.assertIn("4 tickets available", card["notes"])

    def test_map_by_status_and_listing(self):
        sold = self._listing(self.north, "Sold Game", status=Listing.Status.SOLD)
        self._listing(self.lower, "Open Game")

        by_status = self.client.get(reverse("suites-venue-map"), {"status": "sold"})
        by_listing = self.client.get(reverse("suites-venue-map"), {"status": "SOLD", "listing_id": str(sold.pk)})

        self.assertEqual(by_status.data["data"]["highlighted"], ["NORTH:4"])
        self.assertEqual(list(by_listing.data["data"]["contacts"]), ["NORTH:4"])

    def test_map_rejects_bad_parameters(self):
        bad_status = self.client.get(reverse("suites-venue-map"), {"status": "GONE"})
        bad_listing = self.client.get(reverse("suites-venue-map"), {"listing_id": "nope"})

        self.assertEqual(bad_status.status_code, 400)
        self.assertEqual(bad_status.data["error"]["code"], "INVALID_STATUS")
        self.assertEqual(bad_listing.status_code, 400)
