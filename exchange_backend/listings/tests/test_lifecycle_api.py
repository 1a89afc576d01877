from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from listings.models import Listing
from suites.models import Suite

User = get_user_model()


class ListingLifecycleAPITests(TestCase):
    """
    PATCH endpoints under /api/listings/ that move inventory.

    GUARANTEES:
    - Service errors map to {"error": {"code", "message"}} with stable statuses
    - Successful calls return the listing's inventory state
    - Anonymous callers are rejected
    """

    def setUp(self):
        self.client = APIClient()

        self.seller = User.objects.create_user(
            email="seller@example.com",
            password="pass1234",
            role="SELLER",
        )
        self.stranger = User.objects.create_user(
            email="stranger@example.com",
            password="pass1234",
            role="SELLER",
        )

        self.suite = Suite.objects.create(area=Suite.Area.NORTH_TERRACE, number=4)
        self.listing = Listing.objects.create(
            seller=self.seller,
            suite=self.suite,
            slug="concert-1",
            event_title="Concert",
            event_datetime=timezone.now() + timedelta(days=3),
            quantity=8,
            original_quantity=8,
            price_per_seat=Decimal("100.00"),
            delivery_method=Listing.DeliveryMethod.PDF,
        )

        self.sell_url = reverse("listing-sell-tickets")
        self.all_sold_url = reverse("listing-mark-all-sold")
        self.available_url = reverse("listing-mark-available")
        self.toggle_url = reverse("listing-mark-sold")

    def _error_code(self, response):
        return response.data["error"]["code"]

    # --------------------------------------------------
    # Success shapes
    # --------------------------------------------------

    def test_partial_sale(self):
        self.client.force_authenticate(self.seller)

        response = self.client.patch(
            self.sell_url,
            {"listing_id": str(self.listing.pk), "quantity_sold": 3},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["message"], "3 ticket(s) sold. 5 ticket(s) remaining.")
        self.assertEqual(response.data["listing"]["quantity"], 5)
        self.assertEqual(response.data["listing"]["status"], "ACTIVE")

    def test_mark_all_sold_with_price(self):
        self.client.force_authenticate(self.seller)

        response = self.client.patch(
            self.all_sold_url,
            {"listing_id": str(self.listing.pk), "sale_price": 650},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["listing"]["status"], "SOLD")
        self.assertEqual(response.data["listing"]["quantity"], 0)
        self.assertEqual(Decimal(response.data["listing"]["sold_price_total"]), Decimal("650.00"))

    def test_mark_available(self):
        self.client.force_authenticate(self.seller)
        self.client.patch(self.all_sold_url, {"listing_id": str(self.listing.pk)}, format="json")

        response = self.client.patch(
            self.available_url,
            {"listing_id": str(self.listing.pk), "quantity": "6"},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["message"], "Listing marked as available successfully")
        self.assertEqual(response.data["listing"]["quantity"], 6)
        self.assertIsNone(response.data["listing"]["sold_at"])

    def test_toggle_round_trip(self):
        self.client.force_authenticate(self.seller)

        sold = self.client.patch(self.toggle_url, {"listing_id": str(self.listing.pk)}, format="json")
        self.assertEqual(sold.status_code, 200)
        self.assertEqual(sold.data["listing"]["status"], "SOLD")

        active = self.client.patch(self.toggle_url, {"listing_id": str(self.listing.pk)}, format="json")
        self.assertEqual(active.status_code, 200)
        self.assertEqual(active.data["listing"]["status"], "ACTIVE")
        self.assertEqual(active.data["listing"]["quantity"], 8)

    # --------------------------------------------------
    # Error mapping
    # --------------------------------------------------

    def test_anonymous_is_rejected(self):
        response = self.client.patch(
            self.sell_url,
            {"listing_id": str(self.listing.pk), "quantity_sold": 1},
            format="json",
        )
        self.assertIn(response.status_code, (401, 403))

    def test_invalid_quantity(self):
        self.client.force_authenticate(self.seller)

        response = self.client.patch(
            self.sell_url,
            {"listing_id": str(self.listing.pk), "quantity_sold": 0},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self._error_code(response), "INVALID_QUANTITY")

    def test_unknown_listing(self):
        self.client.force_authenticate(self.seller)

        response = self.client.patch(
            self.sell_url,
            {"listing_id": "00000000-0000-0000-0000-000000000000", "quantity_sold": 1},
            format="json",
        )

        self.assertEqual(response.status_code, 404)
        self.assertEqual(self._error_code(response), "LISTING_NOT_FOUND")

    def test_forbidden_for_other_seller(self):
        self.client.force_authenticate(self.stranger)

        response = self.client.patch(
            self.sell_url,
            {"listing_id": str(self.listing.pk), "quantity_sold": 1},
            format="json",
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(self._error_code(response), "FORBIDDEN")

    def test_insufficient_inventory(self):
        self.client.force_authenticate(self.seller)

        response = self.client.patch(
            self.sell_url,
            {"listing_id": str(self.listing.pk), "quantity_sold": 9},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self._error_code(response), "INSUFFICIENT_INVENTORY")
        self.assertEqual(response.data["error"]["message"], "Cannot sell 9 tickets. Only 8 available.")

    def test_already_sold(self):
        self.client.force_authenticate(self.seller)
        self.client.patch(self.all_sold_url, {"listing_id": str(self.listing.pk)}, format="json")

        response = self.client.patch(
            self.sell_url,
            {"listing_id": str(self.listing.pk), "quantity_sold": 1},
            format="json",
        )

        self.assertEqual(response.status_code, 409)
        self.assertEqual(self._error_code(response), "LISTING_ALREADY_SOLD")

    def test_invalid_sale_price(self):
        self.client.force_authenticate(self.seller)

        response = self.client.patch(
            self.all_sold_url,
            {"listing_id": str(self.listing.pk), "sale_price": "free"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self._error_code(response), "INVALID_SALE_PRICE")
        self.assertEqual(Listing.objects.get(pk=self.listing.pk).status, Listing.Status.ACTIVE)

    def test_oversized_sale_price(self):
        self.client.force_authenticate(self.seller)

        for price in ("1e30", "123456789012.00"):
            with self.subTest(sale_price=price):
                response = self.client.patch(
                    self.sell_url,
                    {"listing_id": str(self.listing.pk), "quantity_sold": 8, "sale_price": price},
                    format="json",
                )

                self.assertEqual(response.status_code, 400)
                self.assertEqual(self._error_code(response), "INVALID_SALE_PRICE")

        listing = Listing.objects.get(pk=self.listing.pk)
        self.assertEqual(listing.status, Listing.Status.ACTIVE)
        self.assertEqual(listing.quantity, 8)

    def test_oversized_quantity(self):
        self.client.force_authenticate(self.seller)

        response = self.client.patch(
            self.available_url,
            {"listing_id": str(self.listing.pk), "quantity": 10**20},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self._error_code(response), "INVALID_QUANTITY")
        self.assertEqual(Listing.objects.get(pk=self.listing.pk).quantity, 8)

    def test_invalid_toggle_status(self):
        self.client.force_authenticate(self.seller)

        response = self.client.patch(
            self.toggle_url,
            {"listing_id": str(self.listing.pk), "status": "PAUSED"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self._error_code(response), "INVALID_STATUS")

    def test_listing_id_is_required(self):
        self.client.force_authenticate(self.seller)

        response = self.client.patch(self.sell_url, {"quantity_sold": 1}, format="json")

        self.assertEqual(response.status_code, 400)
