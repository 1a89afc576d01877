from .listing import (
    ListingSerializer,
    ListingStateSerializer,
    ListingWriteSerializer,
    MarkAllSoldCommandSerializer,
    MarkAvailableCommandSerializer,
    SellTicketsCommandSerializer,
    ToggleStatusCommandSerializer,
)

__all__ = [
    "ListingSerializer",
    "ListingStateSerializer",
    "ListingWriteSerializer",
    "MarkAllSoldCommandSerializer",
    "MarkAvailableCommandSerializer",
    "SellTicketsCommandSerializer",
    "ToggleStatusCommandSerializer",
]
