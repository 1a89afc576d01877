from django.contrib.auth import get_user_model
from django.core import mail
from django.test import TestCase, override_settings

from applications.models import SellerApplication
from applications.services.exceptions import (
    ApplicationNotFoundError,
    DuplicateApplicationError,
    InvalidDecisionError,
)
from applications.services.verification import (
    decide_application,
    is_verified_for_suite,
    submit_application,
    verified_suite_ids,
)
from audit.models import AuditEvent
from suites.models import Suite

User = get_user_model()


@override_settings(
    EMAIL_BACKEND="django.core.mail.backends.locmem.EmailBackend",
    APPLICATION_REVIEW_EMAIL="review@example.com",
)
class SellerVerificationTests(TestCase):
    """
    Seller verification workflow.

    GUARANTEES:
    - One open or approved application per user and suite
    - Approval verifies the suite and promotes a guest to seller
    - Decisions are audited and mailed after commit
    """

    def setUp(self):
        self.guest = User.objects.create_user(email="owner@example.com", password="pass1234", name="Pat Owner")
        self.approver = User.objects.create_user(
            email="approver@example.com",
            password="pass1234",
            role="APPROVER",
        )

    def _submit(self, number=12, **kwargs):
        return submit_application(
            user=self.guest,
            suite_area="LOWER_FIRE",
            suite_number=number,
            legal_name="Pat Owner",
            **kwargs,
        )

    # --------------------------------------------------
    # Submit
    # --------------------------------------------------

    def test_submit_creates_suite_and_pending_application(self):
        application = self._submit()

        self.assertEqual(application.status, SellerApplication.Status.PENDING)
        self.assertEqual(application.suite.display_name, "L12")
        self.assertTrue(Suite.objects.filter(area="LOWER_FIRE", number=12).exists())
        self.assertFalse(is_verified_for_suite(self.guest, application.suite))

    def test_submit_notifies_reviewers(self):
        with self.captureOnCommitCallbacks(execute=True):
            self._submit()

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["review@example.com"])
        self.assertIn("L12", mail.outbox[0].subject)

    def test_pending_application_blocks_duplicate(self):
        self._submit()

        with self.assertRaises(DuplicateApplicationError) as ctx:
            self._submit()

        self.assertEqual(str(ctx.exception), "You already have a pending application for this suite")

    def test_approved_application_blocks_duplicate(self):
        application = self._submit()
        decide_application(application_id=application.pk, status="APPROVED", reviewer=self.approver)

        with self.assertRaises(DuplicateApplicationError) as ctx:
            self._submit()

        self.assertEqual(str(ctx.exception), "You are already verified for this suite")

    def test_denied_application_allows_reapplying(self):
        application = self._submit()
        decide_application(application_id=application.pk, status="DENIED", reviewer=self.approver)

        second = self._submit()

        self.assertEqual(second.status, SellerApplication.Status.PENDING)

    def test_other_suite_is_independent(self):
        self._submit(number=12)
        self._submit(number=13)

        self.assertEqual(SellerApplication.objects.filter(user=self.guest).count(), 2)

    # --------------------------------------------------
    # Decide
    # --------------------------------------------------

    def test_approval_verifies_and_promotes(self):
        application = self._submit()

        decided = decide_application(
            application_id=application.pk,
            status="approved",
            reviewer=self.approver,
            admin_note="Invoice checks out",
        )

        self.guest.refresh_from_db()
        self.assertEqual(decided.status, SellerApplication.Status.APPROVED)
        self.assertIsNotNone(decided.verified_at)
        self.assertEqual(decided.reviewed_by, self.approver)
        self.assertEqual(self.guest.role, "SELLER")
        self.assertTrue(is_verified_for_suite(self.guest, application.suite))
        self.assertEqual(verified_suite_ids(self.guest), {application.suite_id})
        self.assertTrue(
            AuditEvent.objects.filter(action=AuditEvent.Action.USER_ROLE_CHANGED, target_id=str(self.guest.pk)).exists()
        )

    def test_approval_keeps_approver_role(self):
        application = submit_application(
            user=self.approver,
            suite_area="NORTH_TERRACE",
            suite_number=2,
            legal_name="Approver Owner",
        )

        decide_application(application_id=application.pk, status="APPROVED", reviewer=self.approver)

        self.approver.refresh_from_db()
        self.assertEqual(self.approver.role, "APPROVER")

    def test_denial_keeps_guest(self):
        application = self._submit()

        decided = decide_application(
            application_id=application.pk,
            status="DENIED",
            reviewer=self.approver,
            denied_reason="Document unreadable",
        )

        self.guest.refresh_from_db()
        self.assertEqual(self.guest.role, "GUEST")
        self.assertEqual(decided.denied_reason, "Document unreadable")
        self.assertIsNone(decided.verified_at)

    def test_decision_mails_applicant(self):
        application = self._submit()

        with self.captureOnCommitCallbacks(execute=True):
            decide_application(
                application_id=application.pk,
                status="DENIED",
                reviewer=self.approver,
                denied_reason="Wrong suite",
            )

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["owner@example.com"])
        self.assertIn("Reason: Wrong suite", mail.outbox[0].body)

    def test_invalid_decision(self):
        application = self._submit()

        with self.assertRaises(InvalidDecisionError):
            decide_application(application_id=application.pk, status="PENDING", reviewer=self.approver)

    def test_unknown_application(self):
        with self.assertRaises(ApplicationNotFoundError):
            decide_application(
                application_id="00000000-0000-0000-0000-000000000000",
                status="APPROVED",
                reviewer=self.approver,
            )
