# listings/views/listing.py

"""
LISTING VIEWSET

Public:
- GET /api/listings/                 browse (ACTIVE unless ?status=)
- GET /api/listings/<id>/
- GET /api/listings/slug/<slug>/     detail page (counts a view)

Authenticated:
- POST  /api/listings/               create (listings.create + verified suite)
- PATCH /api/listings/<id>/          edit (seller or admin)
- GET   /api/listings/mine/          own listings, every status
"""

from django.db.models import Q
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from listings.filters import ListingFilter
from listings.models import Listing
from listings.serializers import ListingSerializer, ListingWriteSerializer
from listings.services.exceptions import ListingServiceError
from listings.services.listing_service import create_listing, record_view, update_listing
from listings.views.errors import listing_error_response
from permissions.roles import CAP_LISTINGS_CREATE, HasCapability, is_admin

PUBLIC_STATUSES = (Listing.Status.ACTIVE, Listing.Status.SOLD)


class ListingPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = "limit"
    max_page_size = 100


class ListingViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = ListingSerializer
    pagination_class = ListingPagination
    filterset_class = ListingFilter

    required_capability = None

    def get_permissions(self):
        if self.action in {"list", "retrieve", "by_slug"}:
            return [AllowAny()]
        if self.action == "create":
            self.required_capability = CAP_LISTINGS_CREATE
            return [IsAuthenticated(), HasCapability()]
        return [IsAuthenticated()]

    def get_queryset(self):
        qs = Listing.objects.select_related("seller", "suite")
        user = self.request.user

        if self.action == "list":
            qs = qs.order_by("event_datetime", "-created_at")
            if not self.request.query_params.get("status"):
                qs = qs.filter(status=Listing.Status.ACTIVE)
            return qs

        if self.action == "mine":
            return qs.filter(seller=user).order_by("-created_at")

        if self.action in {"retrieve", "by_slug"} and not is_admin(user):
            # Drafts/withdrawn listings are visible to their seller only
            visible = Q(status__in=PUBLIC_STATUSES)
            if user.is_authenticated:
                visible |= Q(seller=user)
            return qs.filter(visible)

        return qs

    @extend_schema(request=ListingWriteSerializer, responses={201: ListingSerializer})
    def create(self, request):
        serializer = ListingWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        suite = data.pop("suite")

        try:
            listing = create_listing(user=request.user, suite=suite, data=data, request=request)
        except ListingServiceError as exc:
            return listing_error_response(exc)

        return Response(
            {"success": True, "listing": ListingSerializer(listing).data},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=ListingWriteSerializer, responses={200: ListingSerializer})
    def partial_update(self, request, pk=None):
        listing = self.get_object()

        serializer = ListingWriteSerializer(listing, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        suite = data.pop("suite", None)
        # Status moves through the lifecycle endpoints only
        data.pop("status", None)

        try:
            listing = update_listing(
                listing_id=listing.pk,
                user=request.user,
                data=data,
                suite=suite,
                request=request,
            )
        except ListingServiceError as exc:
            return listing_error_response(exc)

        return Response({"success": True, "listing": ListingSerializer(listing).data})

    @action(detail=False, methods=["get"], url_path="mine")
    def mine(self, request):
        serializer = ListingSerializer(self.get_queryset(), many=True)
        return Response({"success": True, "listings": serializer.data})

    @action(detail=False, methods=["get"], url_path=r"slug/(?P<slug>[-\w]+)")
    def by_slug(self, request, slug=None):
        listing = self.get_queryset().filter(slug=slug).first()
        if listing is None:
            return Response(
                {"error": {"code": "LISTING_NOT_FOUND", "message": "Listing not found"}},
                status=status.HTTP_404_NOT_FOUND,
            )

        record_view(listing)
        listing.view_count += 1

        return Response({"success": True, "listing": ListingSerializer(listing).data})
