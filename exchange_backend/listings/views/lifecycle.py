# listings/views/lifecycle.py

"""
LISTING LIFECYCLE ENDPOINTS (PATCH, body carries listing_id)

- /api/listings/sell-tickets/    {listing_id, quantity_sold, sale_price?}
- /api/listings/mark-all-sold/   {listing_id, sale_price?}
- /api/listings/mark-available/  {listing_id, quantity}
- /api/listings/mark-sold/       {listing_id, status?, quantity?}   (toggle)

Authorization (seller or admin) is decided by the service after the
listing is loaded, so a missing listing is a 404 rather than a 403.
"""

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from listings.serializers import (
    ListingStateSerializer,
    MarkAllSoldCommandSerializer,
    MarkAvailableCommandSerializer,
    SellTicketsCommandSerializer,
    ToggleStatusCommandSerializer,
)
from listings.services.exceptions import ListingServiceError
from listings.services.lifecycle import mark_all_sold, mark_as_available, sell_tickets, toggle_status
from listings.views.errors import listing_error_response


class LifecycleView(APIView):
    permission_classes = [IsAuthenticated]
    command_serializer_class = None

    def run(self, request, data):
        raise NotImplementedError

    @extend_schema(responses={200: ListingStateSerializer})
    def patch(self, request):
        command = self.command_serializer_class(data=request.data)
        command.is_valid(raise_exception=True)

        try:
            result = self.run(request, command.validated_data)
        except ListingServiceError as exc:
            return listing_error_response(exc)

        return Response(
            {
                "success": True,
                "message": result.message,
                "listing": ListingStateSerializer(result.listing).data,
            }
        )


class SellTicketsView(LifecycleView):
    command_serializer_class = SellTicketsCommandSerializer

    def run(self, request, data):
        return sell_tickets(
            listing_id=data["listing_id"],
            quantity_sold=data.get("quantity_sold"),
            sale_price=data.get("sale_price"),
            user=request.user,
            request=request,
        )


class MarkAllSoldView(LifecycleView):
    command_serializer_class = MarkAllSoldCommandSerializer

    def run(self, request, data):
        return mark_all_sold(
            listing_id=data["listing_id"],
            sale_price=data.get("sale_price"),
            user=request.user,
            request=request,
        )


class MarkAvailableView(LifecycleView):
    command_serializer_class = MarkAvailableCommandSerializer

    def run(self, request, data):
        return mark_as_available(
            listing_id=data["listing_id"],
            quantity=data.get("quantity"),
            user=request.user,
            request=request,
        )


class ToggleStatusView(LifecycleView):
    command_serializer_class = ToggleStatusCommandSerializer

    def run(self, request, data):
        return toggle_status(
            listing_id=data["listing_id"],
            status=data.get("status"),
            quantity=data.get("quantity"),
            user=request.user,
            request=request,
        )
