from types import SimpleNamespace

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIRequestFactory

from permissions.roles import (
    CAP_APPLICATIONS_REVIEW,
    CAP_FORUM_MODERATE,
    CAP_FORUM_POST,
    CAP_LISTINGS_CREATE,
    HasAnyCapability,
    HasCapability,
    IsAdmin,
    IsApproverOrAdmin,
    IsSellerOrAdmin,
    IsVerifiedOwner,
    capabilities_for,
    is_admin,
)

User = get_user_model()


class PermissionRoleTests(TestCase):
    """
    Tests for role-based permissions.

    GUARANTEES:
    - Correct role access
    - No privilege escalation
    - Anonymous users denied everywhere
    """

    def setUp(self):
        self.factory = APIRequestFactory()

        self.admin = User.objects.create_user(email="admin@example.com", password="pass", role="ADMIN")
        self.approver = User.objects.create_user(email="approver@example.com", password="pass", role="APPROVER")
        self.seller = User.objects.create_user(email="seller@example.com", password="pass", role="SELLER")
        self.guest = User.objects.create_user(email="guest@example.com", password="pass", role="GUEST")

    # --------------------------------------------------
    # Helpers
    # --------------------------------------------------

    def _request_for(self, user=None):
        request = self.factory.get("/")
        request.user = user
        return request

    def _view(self, capability=None, any_of=None):
        return SimpleNamespace(required_capability=capability, required_any_capabilities=any_of)

    # --------------------------------------------------
    # ROLES
    # --------------------------------------------------

    def test_admin_permissions(self):
        request = self._request_for(self.admin)

        self.assertTrue(IsAdmin().has_permission(request, None))
        self.assertTrue(IsApproverOrAdmin().has_permission(request, None))
        self.assertTrue(IsSellerOrAdmin().has_permission(request, None))
        self.assertTrue(is_admin(self.admin))

    def test_approver_permissions(self):
        request = self._request_for(self.approver)

        self.assertTrue(IsApproverOrAdmin().has_permission(request, None))
        self.assertTrue(IsVerifiedOwner().has_permission(request, None))

        self.assertFalse(IsAdmin().has_permission(request, None))
        self.assertFalse(IsSellerOrAdmin().has_permission(request, None))

    def test_seller_permissions(self):
        request = self._request_for(self.seller)

        self.assertTrue(IsSellerOrAdmin().has_permission(request, None))
        self.assertTrue(IsVerifiedOwner().has_permission(request, None))

        self.assertFalse(IsApproverOrAdmin().has_permission(request, None))
        self.assertFalse(is_admin(self.seller))

    def test_guest_permissions(self):
        request = self._request_for(self.guest)

        self.assertFalse(IsVerifiedOwner().has_permission(request, None))
        self.assertFalse(IsSellerOrAdmin().has_permission(request, None))
        self.assertEqual(capabilities_for(self.guest), set())

    # --------------------------------------------------
    # CAPABILITIES
    # --------------------------------------------------

    def test_capability_map(self):
        self.assertIn(CAP_LISTINGS_CREATE, capabilities_for(self.seller))
        self.assertIn(CAP_FORUM_POST, capabilities_for(self.seller))
        self.assertNotIn(CAP_APPLICATIONS_REVIEW, capabilities_for(self.seller))

        self.assertIn(CAP_APPLICATIONS_REVIEW, capabilities_for(self.approver))
        self.assertNotIn(CAP_LISTINGS_CREATE, capabilities_for(self.approver))

        self.assertIn(CAP_FORUM_MODERATE, capabilities_for(self.admin))

    def test_superuser_has_every_capability(self):
        root = User.objects.create_superuser(email="root@example.com", password="pass")
        root.role = "GUEST"

        self.assertTrue(is_admin(root))

    def test_has_capability(self):
        view = self._view(capability=CAP_APPLICATIONS_REVIEW)

        self.assertTrue(HasCapability().has_permission(self._request_for(self.approver), view))
        self.assertFalse(HasCapability().has_permission(self._request_for(self.seller), view))

    def test_has_capability_denies_without_requirement(self):
        self.assertFalse(HasCapability().has_permission(self._request_for(self.admin), self._view()))

    def test_has_any_capability(self):
        view = self._view(any_of={CAP_LISTINGS_CREATE, CAP_APPLICATIONS_REVIEW})

        self.assertTrue(HasAnyCapability().has_permission(self._request_for(self.seller), view))
        self.assertTrue(HasAnyCapability().has_permission(self._request_for(self.approver), view))
        self.assertFalse(HasAnyCapability().has_permission(self._request_for(self.guest), view))

    # --------------------------------------------------
    # ANONYMOUS
    # --------------------------------------------------

    def test_anonymous_user_denied_everywhere(self):
        request = self._request_for(None)
        view = self._view(capability=CAP_FORUM_POST, any_of={CAP_FORUM_POST})

        self.assertFalse(IsAdmin().has_permission(request, None))
        self.assertFalse(IsApproverOrAdmin().has_permission(request, None))
        self.assertFalse(IsSellerOrAdmin().has_permission(request, None))
        self.assertFalse(IsVerifiedOwner().has_permission(request, None))
        self.assertFalse(HasCapability().has_permission(request, view))
        self.assertFalse(HasAnyCapability().has_permission(request, view))
