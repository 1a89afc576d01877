# listings/views/errors.py

from rest_framework import status
from rest_framework.response import Response

from listings.services.exceptions import (
    InsufficientInventoryError,
    InvalidListingStatusError,
    InvalidQuantityError,
    InvalidSalePriceError,
    ListingAlreadySoldError,
    ListingNotFoundError,
    ListingPermissionError,
    ListingServiceError,
    SuiteChangeError,
    SuiteNotVerifiedError,
)


def error_response(*, code: str, message: str, http_status: int):
    """
    Canonical API error response.
    """
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )


# Most specific first
SERVICE_ERRORS = (
    (ListingNotFoundError, "LISTING_NOT_FOUND", status.HTTP_404_NOT_FOUND),
    (SuiteNotVerifiedError, "SUITE_NOT_VERIFIED", status.HTTP_403_FORBIDDEN),
    (ListingPermissionError, "FORBIDDEN", status.HTTP_403_FORBIDDEN),
    (InvalidQuantityError, "INVALID_QUANTITY", status.HTTP_400_BAD_REQUEST),
    (InsufficientInventoryError, "INSUFFICIENT_INVENTORY", status.HTTP_400_BAD_REQUEST),
    (ListingAlreadySoldError, "LISTING_ALREADY_SOLD", status.HTTP_409_CONFLICT),
    (InvalidSalePriceError, "INVALID_SALE_PRICE", status.HTTP_400_BAD_REQUEST),
    (InvalidListingStatusError, "INVALID_STATUS", status.HTTP_400_BAD_REQUEST),
    (SuiteChangeError, "SUITE_IMMUTABLE", status.HTTP_400_BAD_REQUEST),
)


def listing_error_response(exc: ListingServiceError):
    for error_class, code, http_status in SERVICE_ERRORS:
        if isinstance(exc, error_class):
            return error_response(code=code, message=str(exc), http_status=http_status)

    return error_response(
        code="LISTING_ERROR",
        message=str(exc),
        http_status=status.HTTP_400_BAD_REQUEST,
    )
