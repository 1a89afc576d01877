# listings/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from listings.views import (
    ListingViewSet,
    MarkAllSoldView,
    MarkAvailableView,
    SellTicketsView,
    ToggleStatusView,
)

router = SimpleRouter()
router.register(r"", ListingViewSet, basename="listings")

urlpatterns = [
    # ---------------- LIFECYCLE ----------------
    path("sell-tickets/", SellTicketsView.as_view(), name="listing-sell-tickets"),
    path("mark-all-sold/", MarkAllSoldView.as_view(), name="listing-mark-all-sold"),
    path("mark-available/", MarkAvailableView.as_view(), name="listing-mark-available"),
    path("mark-sold/", ToggleStatusView.as_view(), name="listing-mark-sold"),
    # ---------------- CRUD / BROWSE ----------------
    path("", include(router.urls)),
]
