# messaging/services/messages.py

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db.models import Q
from django.utils import timezone

from listings.models import Listing
from messaging.models import MESSAGE_MAX_LENGTH, Message
from messaging.services.exceptions import (
    InvalidMessageError,
    MessageListingNotFoundError,
    MessageNotFoundError,
    MessagePermissionError,
    MessagesNotAllowedError,
    SelfMessageError,
)

logger = logging.getLogger(__name__)

BOX_ALL = "all"
BOX_INBOX = "inbox"
BOX_SENT = "sent"
BOXES = {BOX_ALL, BOX_INBOX, BOX_SENT}


def send_message(*, sender, listing_id, body) -> Message:
    text = (body or "").strip()
    if not text:
        raise InvalidMessageError("Message cannot be empty")
    if len(text) > MESSAGE_MAX_LENGTH:
        raise InvalidMessageError(f"Message is too long (max {MESSAGE_MAX_LENGTH} characters)")

    try:
        listing = Listing.objects.select_related("seller").get(pk=listing_id)
    except (Listing.DoesNotExist, ValidationError, ValueError):
        raise MessageListingNotFoundError("Listing not found")

    if not listing.allow_messages:
        raise MessagesNotAllowedError("This seller does not accept messages through the platform")

    if listing.seller_id == sender.pk:
        raise SelfMessageError("You cannot send messages to yourself")

    message = Message.objects.create(
        listing=listing,
        from_user=sender,
        to_user=listing.seller,
        body=text,
    )

    logger.info(
        "Message sent",
        extra={"message_id": str(message.pk), "listing_id": str(listing.pk), "from_user_id": str(sender.pk)},
    )
    return message


def messages_for(user, box: str = BOX_ALL):
    qs = Message.objects.select_related("from_user", "to_user", "listing", "listing__suite")

    if box == BOX_INBOX:
        return qs.filter(to_user=user)
    if box == BOX_SENT:
        return qs.filter(from_user=user)
    return qs.filter(Q(to_user=user) | Q(from_user=user))


def unread_count(user) -> int:
    return Message.objects.filter(to_user=user, is_read=False).count()


def mark_read(*, user, message_id) -> Message:
    try:
        message = Message.objects.get(pk=message_id)
    except (Message.DoesNotExist, ValidationError, ValueError):
        raise MessageNotFoundError("Message not found")

    if message.to_user_id != user.pk:
        raise MessagePermissionError("You can only mark your own messages as read")

    if not message.is_read:
        message.is_read = True
        message.read_at = timezone.now()
        message.save(update_fields=["is_read", "read_at"])

    return message


def mark_all_read(*, user) -> int:
    return Message.objects.filter(to_user=user, is_read=False).update(is_read=True, read_at=timezone.now())
