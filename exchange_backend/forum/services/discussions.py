# forum/services/discussions.py

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from forum.models import DEFAULT_CATEGORY, Discussion, DiscussionReply
from forum.services.exceptions import DiscussionLockedError, DiscussionNotFoundError, ForumPermissionError
from permissions.roles import CAP_FORUM_POST, user_has_capability

logger = logging.getLogger(__name__)


def _require_post(user, *, what: str) -> None:
    if not user_has_capability(user, CAP_FORUM_POST):
        raise ForumPermissionError(f"You must be a verified suite owner to {what}")


def get_discussion(discussion_id) -> Discussion:
    try:
        return Discussion.objects.select_related("author").get(pk=discussion_id)
    except (Discussion.DoesNotExist, ValidationError, ValueError):
        raise DiscussionNotFoundError("Discussion not found")


def start_discussion(*, author, title: str, content: str, category: str = "") -> Discussion:
    _require_post(author, what="create discussions")

    discussion = Discussion.objects.create(
        author=author,
        title=title,
        content=content,
        category=(category or "").strip() or DEFAULT_CATEGORY,
    )
    logger.info("Discussion started", extra={"discussion_id": str(discussion.pk), "author_id": str(author.pk)})
    return discussion


def add_reply(*, author, discussion_id, content: str) -> DiscussionReply:
    _require_post(author, what="reply to discussions")

    with transaction.atomic():
        try:
            discussion = Discussion.objects.select_for_update().get(pk=discussion_id)
        except (Discussion.DoesNotExist, ValidationError, ValueError):
            raise DiscussionNotFoundError("Discussion not found")

        if discussion.is_locked:
            raise DiscussionLockedError("This discussion is locked and cannot accept new replies")

        reply = DiscussionReply.objects.create(discussion=discussion, author=author, content=content)

        Discussion.objects.filter(pk=discussion.pk).update(
            reply_count=F("reply_count") + 1,
            last_activity_at=timezone.now(),
        )

    logger.info("Discussion reply added", extra={"discussion_id": str(discussion.pk), "reply_id": str(reply.pk)})
    return reply


def record_view(discussion: Discussion) -> None:
    Discussion.objects.filter(pk=discussion.pk).update(view_count=F("view_count") + 1)


def moderate(*, discussion_id, is_pinned=None, is_locked=None) -> Discussion:
    discussion = get_discussion(discussion_id)
    fields = []
    if is_pinned is not None:
        discussion.is_pinned = bool(is_pinned)
        fields.append("is_pinned")
    if is_locked is not None:
        discussion.is_locked = bool(is_locked)
        fields.append("is_locked")
    if fields:
        discussion.save(update_fields=fields + ["updated_at"])
    return discussion
