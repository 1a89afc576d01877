# listings/serializers/listing.py

from decimal import Decimal

from django.conf import settings
from rest_framework import serializers

from listings.models import Listing
from suites.models import Suite


class ListingSellerSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)


class ListingSuiteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Suite
        fields = ["id", "area", "number", "display_name", "capacity"]
        read_only_fields = fields


class ListingSerializer(serializers.ModelSerializer):
    """
    Read shape for browse/detail/my-listings.
    """

    seller = ListingSellerSerializer(read_only=True)
    suite = ListingSuiteSerializer(read_only=True)

    class Meta:
        model = Listing
        fields = [
            "id",
            "slug",
            "seller",
            "suite",
            "event_title",
            "event_datetime",
            "quantity",
            "original_quantity",
            "price_per_seat",
            "delivery_method",
            "contact_email",
            "contact_phone",
            "contact_link",
            "contact_messenger",
            "allow_messages",
            "notes",
            "seat_numbers",
            "status",
            "sold_at",
            "sold_price_total",
            "view_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ListingWriteSerializer(serializers.ModelSerializer):
    """
    Create/edit input. Suite-dependent rules (capacity, ownership) live in
    listings.services.listing_service.
    """

    suite_id = serializers.PrimaryKeyRelatedField(
        queryset=Suite.objects.filter(is_active=True),
        source="suite",
    )
    quantity = serializers.IntegerField(min_value=1)
    price_per_seat = serializers.DecimalField(max_digits=10, decimal_places=2)
    status = serializers.ChoiceField(
        choices=[Listing.Status.DRAFT, Listing.Status.ACTIVE],
        required=False,
    )
    notes = serializers.CharField(required=False, allow_blank=True, max_length=1000)

    class Meta:
        model = Listing
        fields = [
            "suite_id",
            "event_title",
            "event_datetime",
            "quantity",
            "price_per_seat",
            "delivery_method",
            "contact_email",
            "contact_phone",
            "contact_link",
            "contact_messenger",
            "allow_messages",
            "notes",
            "seat_numbers",
            "status",
        ]

    def validate_event_title(self, value):
        value = (value or "").strip()
        if len(value) < 2:
            raise serializers.ValidationError("Event title must be at least 2 characters")
        return value

    def validate_price_per_seat(self, value):
        if value is None or value <= Decimal("0"):
            raise serializers.ValidationError("Price must be positive")
        ceiling = Decimal(settings.LISTING_MAX_PRICE_PER_SEAT)
        if value > ceiling:
            raise serializers.ValidationError(f"Price per seat cannot exceed ${ceiling:,.0f}")
        return value


# ======================================================
# LIFECYCLE COMMANDS (input only; parsing rules live in the service)
# ======================================================

class SellTicketsCommandSerializer(serializers.Serializer):
    listing_id = serializers.CharField()
    quantity_sold = serializers.JSONField(required=False, allow_null=True)
    sale_price = serializers.JSONField(required=False, allow_null=True)


class MarkAllSoldCommandSerializer(serializers.Serializer):
    listing_id = serializers.CharField()
    sale_price = serializers.JSONField(required=False, allow_null=True)


class MarkAvailableCommandSerializer(serializers.Serializer):
    listing_id = serializers.CharField()
    quantity = serializers.JSONField(required=False, allow_null=True)


class ToggleStatusCommandSerializer(serializers.Serializer):
    listing_id = serializers.CharField()
    status = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    quantity = serializers.JSONField(required=False, allow_null=True)


class ListingStateSerializer(serializers.ModelSerializer):
    """Inventory fields returned by lifecycle endpoints."""

    class Meta:
        model = Listing
        fields = ["id", "quantity", "original_quantity", "status", "sold_at", "sold_price_total"]
        read_only_fields = fields
