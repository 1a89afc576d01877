from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient


class ProjectEndpointTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_health_check(self):
        response = self.client.get(reverse("health-check"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["status"], "ok")
        self.assertEqual(response.data["db"], "ok")

    def test_api_root_lists_lifecycle_endpoints(self):
        response = self.client.get(reverse("api-root"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.data["endpoints"]["listings"]["sell_tickets"],
            reverse("listing-sell-tickets"),
        )
