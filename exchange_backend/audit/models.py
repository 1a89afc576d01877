# audit/models.py

"""
AUDIT EVENT (APPEND-ONLY)

One row per security- or money-relevant mutation:
seller verification decisions, listing creation/edits, sales, reactivations.

Rows are written in the same transaction as the mutation they describe,
so an audit row exists iff the mutation committed.
"""

import uuid

from django.conf import settings
from django.db import models


class AuditEvent(models.Model):
    class Action(models.TextChoices):
        USER_REGISTERED = "USER_REGISTERED", "User registered"
        USER_ROLE_CHANGED = "USER_ROLE_CHANGED", "User role changed"

        SELLER_APPLICATION_CREATED = "SELLER_APPLICATION_CREATED", "Seller application created"
        SELLER_APPLICATION_APPROVED = "SELLER_APPLICATION_APPROVED", "Seller application approved"
        SELLER_APPLICATION_DENIED = "SELLER_APPLICATION_DENIED", "Seller application denied"

        LISTING_CREATED = "LISTING_CREATED", "Listing created"
        LISTING_UPDATED = "LISTING_UPDATED", "Listing updated"
        LISTING_TICKETS_SOLD = "LISTING_TICKETS_SOLD", "Listing tickets sold"
        LISTING_MARKED_SOLD = "LISTING_MARKED_SOLD", "Listing marked sold"
        LISTING_MARKED_AVAILABLE = "LISTING_MARKED_AVAILABLE", "Listing marked available"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="audit_events",
    )

    action = models.CharField(max_length=64, choices=Action.choices, db_index=True)

    target_type = models.CharField(max_length=64)
    target_id = models.CharField(max_length=64, db_index=True)

    metadata = models.JSONField(default=dict, blank=True)

    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=512, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["target_type", "target_id"], name="audit_target_idx"),
        ]

    def __str__(self):
        return f"{self.action} {self.target_type}:{self.target_id}"
