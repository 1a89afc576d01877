# suites/views/suite.py

from django.core.exceptions import ValidationError
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from listings.models import Listing
from suites.models import Suite
from suites.serializers import SuiteSerializer
from suites.services.venue_map import build_venue_map


class SuiteViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    GET /api/suites/?area=LOWER_FIRE   catalog (used by the sell + verify forms)
    GET /api/suites/map/               venue map feed
    """

    serializer_class = SuiteSerializer
    permission_classes = [AllowAny]
    pagination_class = None

    def get_queryset(self):
        qs = Suite.objects.filter(is_active=True).order_by("area", "number")
        area = (self.request.query_params.get("area") or "").strip().upper()
        if area:
            qs = qs.filter(area=area)
        return qs

    @extend_schema(
        parameters=[
            OpenApiParameter(name="status", type=str, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="listing_id", type=str, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    @action(detail=False, methods=["get"], url_path="map")
    def venue_map(self, request):
        listing_status = (request.query_params.get("status") or Listing.Status.ACTIVE).strip().upper()
        if listing_status not in Listing.Status.values:
            return Response(
                {"error": {"code": "INVALID_STATUS", "message": f"Unknown status '{listing_status}'"}},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            data = build_venue_map(
                status=listing_status,
                listing_id=(request.query_params.get("listing_id") or "").strip() or None,
            )
        except ValidationError:
            return Response(
                {"error": {"code": "INVALID_LISTING_ID", "message": "listing_id must be a UUID"}},
                status=status.HTTP_400_BAD_REQUEST,
            )

        return Response({"success": True, "data": data})
