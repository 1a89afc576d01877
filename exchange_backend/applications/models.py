# applications/models.py

"""
SELLER VERIFICATION

A user proves ownership of a suite by submitting an application that an
approver/admin decides. An APPROVED application is the verification gate
for creating and editing listings on that suite.
"""

import os
import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone

from suites.models import Suite


class SellerApplication(models.Model):
    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        APPROVED = "APPROVED", "Approved"
        DENIED = "DENIED", "Denied"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="seller_applications",
    )
    suite = models.ForeignKey(
        Suite,
        on_delete=models.PROTECT,
        related_name="applications",
    )

    legal_name = models.CharField(max_length=255)
    message = models.TextField(blank=True)

    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )

    admin_note = models.TextField(blank=True)
    denied_reason = models.TextField(blank=True)

    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviewed_applications",
    )
    decided_at = models.DateTimeField(null=True, blank=True)
    verified_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "suite", "status"], name="sellerapp_user_suite_st_idx"),
        ]

    def __str__(self):
        return f"{self.user} -> {self.suite} [{self.status}]"

    @property
    def is_approved(self) -> bool:
        return self.status == self.Status.APPROVED


def attachment_upload_to(instance, filename):
    """
    uploads/applications/<user-id>-<timestamp>-<random>.<ext>
    """
    _, ext = os.path.splitext(filename or "")
    stamp = int(timezone.now().timestamp() * 1000)
    token = uuid.uuid4().hex[:12]
    return f"applications/{instance.uploaded_by_id}-{stamp}-{token}{ext.lower()}"


class ApplicationAttachment(models.Model):
    """
    Supporting document (deed, season-ticket invoice...).
    Uploaded first, then linked to an application on submit.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="application_attachments",
    )
    application = models.ForeignKey(
        SellerApplication,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="attachments",
    )

    file = models.FileField(upload_to=attachment_upload_to)
    original_name = models.CharField(max_length=255, blank=True)
    content_type = models.CharField(max_length=128)
    size = models.PositiveIntegerField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self):
        return self.original_name or self.file.name
