# listings/admin.py

from django.contrib import admin

from listings.models import Listing


@admin.register(Listing)
class ListingAdmin(admin.ModelAdmin):
    list_display = (
        "event_title",
        "suite",
        "seller",
        "quantity",
        "price_per_seat",
        "status",
        "sold_at",
        "sold_price_total",
    )
    list_filter = ("status", "delivery_method", "suite__area")
    search_fields = ("event_title", "slug", "seller__email", "suite__display_name")

    # Once a listing exists its inventory is managed by the lifecycle service
    inventory_fields = (
        "quantity",
        "original_quantity",
        "status",
        "sold_at",
        "sold_price_total",
    )

    def get_readonly_fields(self, request, obj=None):
        base = ("view_count", "created_at", "updated_at")
        if obj is None:
            return base
        return ("slug",) + self.inventory_fields + base
