import shutil
import tempfile

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APIClient

from applications.models import ApplicationAttachment, SellerApplication

User = get_user_model()

MEDIA_ROOT = tempfile.mkdtemp()


@override_settings(MEDIA_ROOT=MEDIA_ROOT, UPLOAD_MAX_FILES=2, UPLOAD_MAX_FILE_SIZE_MB=1)
class SellerApplicationAPITests(TestCase):
    """
    /api/applications/ endpoints.
    """

    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(MEDIA_ROOT, ignore_errors=True)
        super().tearDownClass()

    def setUp(self):
        self.client = APIClient()

        self.guest = User.objects.create_user(email="guest@example.com", password="pass1234")
        self.approver = User.objects.create_user(
            email="approver@example.com",
            password="pass1234",
            role="APPROVER",
        )

        self.submit_payload = {
            "suite_area": "SOUTH_TERRACE",
            "suite_number": 5,
            "legal_name": "Guest Owner",
            "message": "Season ticket holder since 2015",
        }

    def _pdf(self, name="deed.pdf", size=128):
        return SimpleUploadedFile(name, b"%" * size, content_type="application/pdf")

    # --------------------------------------------------
    # Uploads
    # --------------------------------------------------

    def test_upload_then_submit_links_attachments(self):
        self.client.force_authenticate(self.guest)

        upload = self.client.post(
            reverse("application-uploads"),
            {"files": [self._pdf()]},
            format="multipart",
        )
        self.assertEqual(upload.status_code, 201)
        self.assertEqual(len(upload.data["attachments"]), 1)
        attachment_id = upload.data["attachments"][0]["id"]

        response = self.client.post(
            reverse("applications-list"),
            {**self.submit_payload, "attachments": [attachment_id]},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        application = SellerApplication.objects.get(pk=response.data["application"]["id"])
        self.assertEqual(application.attachments.count(), 1)

    def test_upload_rejects_disallowed_type(self):
        self.client.force_authenticate(self.guest)

        response = self.client.post(
            reverse("application-uploads"),
            {"files": [SimpleUploadedFile("run.exe", b"MZ", content_type="application/x-msdownload")]},
            format="multipart",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "INVALID_UPLOAD")
        self.assertFalse(ApplicationAttachment.objects.exists())

    def test_upload_rejects_too_many_files(self):
        self.client.force_authenticate(self.guest)

        response = self.client.post(
            reverse("application-uploads"),
            {"files": [self._pdf("a.pdf"), self._pdf("b.pdf"), self._pdf("c.pdf")]},
            format="multipart",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["message"], "Maximum 2 files allowed")

    def test_upload_rejects_oversized_file(self):
        self.client.force_authenticate(self.guest)

        response = self.client.post(
            reverse("application-uploads"),
            {"files": [self._pdf(size=1024 * 1024 + 1)]},
            format="multipart",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("exceeds maximum size of 1MB", response.data["error"]["message"])

    def test_upload_requires_files(self):
        self.client.force_authenticate(self.guest)

        response = self.client.post(reverse("application-uploads"), {}, format="multipart")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["message"], "No files provided")

    # --------------------------------------------------
    # Submit / review
    # --------------------------------------------------

    def test_duplicate_submit(self):
        self.client.force_authenticate(self.guest)
        self.client.post(reverse("applications-list"), self.submit_payload, format="json")

        response = self.client.post(reverse("applications-list"), self.submit_payload, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "DUPLICATE_APPLICATION")

    def test_review_queue_requires_capability(self):
        self.client.force_authenticate(self.guest)

        self.assertEqual(self.client.get(reverse("applications-list")).status_code, 403)
        self.assertEqual(self.client.get(reverse("applications-pending-count")).status_code, 403)

    def test_approver_sees_queue_and_decides(self):
        self.client.force_authenticate(self.guest)
        submitted = self.client.post(reverse("applications-list"), self.submit_payload, format="json")
        application_id = submitted.data["application"]["id"]

        self.client.force_authenticate(self.approver)

        count = self.client.get(reverse("applications-pending-count"))
        self.assertEqual(count.data["count"], 1)

        queue = self.client.get(reverse("applications-list"), {"status": "pending"})
        self.assertEqual(queue.status_code, 200)
        self.assertEqual(queue.data["count"], 1)

        decided = self.client.patch(
            reverse("applications-decide", args=[application_id]),
            {"status": "APPROVED"},
            format="json",
        )
        self.assertEqual(decided.status_code, 200)
        self.assertEqual(decided.data["application"]["status"], "APPROVED")

        self.guest.refresh_from_db()
        self.assertEqual(self.guest.role, "SELLER")

    def test_decide_unknown_application(self):
        self.client.force_authenticate(self.approver)

        response = self.client.patch(
            reverse("applications-decide", args=["00000000-0000-0000-0000-000000000000"]),
            {"status": "DENIED"},
            format="json",
        )

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"]["code"], "APPLICATION_NOT_FOUND")

    def test_applicant_sees_only_own_applications(self):
        other = User.objects.create_user(email="other@example.com", password="pass1234")
        self.client.force_authenticate(other)
        submitted = self.client.post(reverse("applications-list"), self.submit_payload, format="json")

        self.client.force_authenticate(self.guest)
        response = self.client.get(reverse("applications-detail", args=[submitted.data["application"]["id"]]))
        mine = self.client.get(reverse("applications-mine"))

        self.assertEqual(response.status_code, 404)
        self.assertEqual(mine.data["applications"], [])
