# messaging/models.py

import uuid

from django.conf import settings
from django.db import models

from listings.models import Listing

MESSAGE_MAX_LENGTH = 2000


class Message(models.Model):
    """
    Buyer -> seller message about one listing.
    to_user is always the listing's seller at send time.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    listing = models.ForeignKey(Listing, on_delete=models.CASCADE, related_name="messages")
    from_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
    )
    to_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_messages",
    )

    body = models.TextField(max_length=MESSAGE_MAX_LENGTH)

    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["to_user", "is_read"], name="message_to_user_read_idx"),
        ]

    def __str__(self):
        return f"{self.from_user} -> {self.to_user} ({self.listing_id})"
