# applications/services/exceptions.py


class ApplicationError(Exception):
    """Base exception for seller-verification failures."""


class DuplicateApplicationError(ApplicationError):
    """User already has a PENDING or APPROVED application for this suite."""


class ApplicationNotFoundError(ApplicationError):
    pass


class InvalidDecisionError(ApplicationError):
    """Decision status is not APPROVED/DENIED."""


class AttachmentError(ApplicationError):
    """Upload rejected (count, size, or content type)."""
