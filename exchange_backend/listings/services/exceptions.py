# listings/services/exceptions.py

"""
LISTING SERVICE ERRORS

Every lifecycle/CRUD precondition failure maps to exactly one of these.
They are raised before any write; views translate them to HTTP responses.
"""


class ListingServiceError(Exception):
    """Base exception for all listing service failures."""


class ListingNotFoundError(ListingServiceError):
    """Referenced listing does not exist."""


class ListingPermissionError(ListingServiceError):
    """Actor is neither the listing's seller nor an admin."""


class SuiteNotVerifiedError(ListingPermissionError):
    """Actor is not a verified owner of the suite being listed."""


class InvalidQuantityError(ListingServiceError):
    """Quantity missing, not a positive whole number, or out of range."""


class InsufficientInventoryError(ListingServiceError):
    """Requested quantity_sold exceeds the listing's current quantity."""


class ListingAlreadySoldError(ListingServiceError):
    """Sell attempt against a listing already in SOLD state."""


class InvalidSalePriceError(ListingServiceError):
    """Sale price present but not a storable non-negative amount."""


class InvalidListingStatusError(ListingServiceError):
    """Requested status is not a lifecycle target (ACTIVE / SOLD)."""


class SuiteChangeError(ListingServiceError):
    """Edit tried to move a listing to a different suite."""
