# suites/services/venue_map.py

"""
VENUE MAP FEED

Suites with listings in the requested status, keyed "<LOWER|NORTH|SOUTH>:<number>".
When a suite has several listings the newest one supplies the contact card.
"""

from __future__ import annotations

from listings.models import Listing


def _contact_card(listing: Listing) -> dict:
    seller = listing.seller
    return {
        "contact_email": listing.contact_email or seller.email,
        "contact_phone": listing.contact_phone or seller.phone,
        "contact_link": listing.contact_link,
        "notes": listing.notes
        or f"{listing.quantity} tickets available • ${listing.price_per_seat} per seat",
        "listing_id": str(listing.pk),
        "event_title": listing.event_title,
        "event_datetime": listing.event_datetime.isoformat(),
        "quantity": listing.quantity,
        "price_per_seat": str(listing.price_per_seat),
        "delivery_method": listing.delivery_method,
        "slug": listing.slug,
    }


def build_venue_map(*, status: str = Listing.Status.ACTIVE, listing_id=None) -> dict:
    qs = (
        Listing.objects
        .filter(status=status)
        .select_related("seller", "suite")
        .order_by("-created_at")
    )
    if listing_id:
        qs = qs.filter(pk=listing_id)

    contacts: dict[str, dict] = {}
    highlighted: list[str] = []

    for listing in qs:
        key = listing.suite.map_key
        if key in contacts:
            continue
        contacts[key] = _contact_card(listing)
        highlighted.append(key)

    return {"contacts": contacts, "highlighted": highlighted, "disabled": []}
