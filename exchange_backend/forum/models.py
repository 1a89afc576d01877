# forum/models.py

"""
OWNERS FORUM

Discussions and replies between verified suite owners.
reply_count / last_activity_at are denormalized and maintained by
forum.services.discussions.add_reply().
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone

DEFAULT_CATEGORY = "General"


class Discussion(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="discussions",
    )

    title = models.CharField(max_length=200)
    content = models.TextField(max_length=5000)
    category = models.CharField(max_length=64, default=DEFAULT_CATEGORY, db_index=True)

    is_pinned = models.BooleanField(default=False)
    is_locked = models.BooleanField(default=False)

    view_count = models.PositiveIntegerField(default=0)
    reply_count = models.PositiveIntegerField(default=0)
    last_activity_at = models.DateTimeField(default=timezone.now, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-is_pinned", "-last_activity_at"]

    def __str__(self):
        return self.title


class DiscussionReply(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    discussion = models.ForeignKey(Discussion, on_delete=models.CASCADE, related_name="replies")
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="discussion_replies",
    )
    content = models.TextField(max_length=2000)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]
        verbose_name_plural = "discussion replies"

    def __str__(self):
        return f"Reply to {self.discussion_id} by {self.author_id}"
