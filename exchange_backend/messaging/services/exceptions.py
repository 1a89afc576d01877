# messaging/services/exceptions.py


class MessagingError(Exception):
    pass


class InvalidMessageError(MessagingError):
    """Empty or over-long body."""


class MessageListingNotFoundError(MessagingError):
    pass


class MessagesNotAllowedError(MessagingError):
    """Seller has not opted in to platform messages."""


class SelfMessageError(MessagingError):
    pass


class MessageNotFoundError(MessagingError):
    pass


class MessagePermissionError(MessagingError):
    """Only the recipient can mark a message read."""
