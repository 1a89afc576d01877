from .lifecycle import MarkAllSoldView, MarkAvailableView, SellTicketsView, ToggleStatusView
from .listing import ListingViewSet

__all__ = [
    "ListingViewSet",
    "MarkAllSoldView",
    "MarkAvailableView",
    "SellTicketsView",
    "ToggleStatusView",
]
