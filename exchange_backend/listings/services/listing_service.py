# listings/services/listing_service.py

"""
LISTING CREATE / EDIT

Rules:
- Create: caller needs listings.create (SELLER/ADMIN) AND an APPROVED
  application for the suite. Admins are not exempt from the suite check here.
- Edit: seller or admin. A non-admin must still be verified for the suite.
  The suite is fixed at creation; a different suite is refused.
- quantity is 1..suite.capacity. Creating/editing sets original_quantity.
- A SOLD listing's quantity can't be edited; reactivate it instead.
- Inventory state (status/sold_at/sold_price_total) is never written here.
"""

from __future__ import annotations

import logging
import uuid

from django.db import transaction
from django.db.models import F
from django.utils import timezone
from django.utils.text import slugify

from applications.services.verification import is_verified_for_suite
from audit.models import AuditEvent
from audit.services import record_audit_event
from listings.models import Listing
from listings.services.exceptions import (
    InvalidQuantityError,
    ListingNotFoundError,
    ListingPermissionError,
    SuiteChangeError,
    SuiteNotVerifiedError,
)
from listings.services.lifecycle import can_manage_listing
from permissions.roles import CAP_LISTINGS_CREATE, is_admin, user_has_capability
from suites.models import Suite

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "event_title",
    "event_datetime",
    "price_per_seat",
    "delivery_method",
    "contact_email",
    "contact_phone",
    "contact_link",
    "contact_messenger",
    "allow_messages",
    "notes",
    "seat_numbers",
)


def build_slug(event_title: str) -> str:
    """<slugified-title>-<epoch-millis>"""
    base = slugify(event_title or "")[:200] or "listing"
    stamp = int(timezone.now().timestamp() * 1000)
    slug = f"{base}-{stamp}"
    if Listing.objects.filter(slug=slug).exists():
        slug = f"{slug}-{uuid.uuid4().hex[:6]}"
    return slug


def _check_quantity(quantity, suite: Suite) -> int:
    if quantity is None or int(quantity) < 1:
        raise InvalidQuantityError("Quantity must be at least 1")
    if int(quantity) > suite.capacity:
        raise InvalidQuantityError(f"Quantity cannot exceed {suite.capacity} seats")
    return int(quantity)


def create_listing(*, user, suite: Suite, data: dict, request=None) -> Listing:
    if not user_has_capability(user, CAP_LISTINGS_CREATE):
        raise ListingPermissionError("You must be an approved seller to create listings")

    if not is_verified_for_suite(user, suite):
        raise SuiteNotVerifiedError(
            "You do not have permission to list tickets for this suite. Please verify your ownership first."
        )

    quantity = _check_quantity(data.get("quantity"), suite)

    status = data.get("status") or Listing.Status.ACTIVE
    if status not in (Listing.Status.DRAFT, Listing.Status.ACTIVE):
        status = Listing.Status.ACTIVE

    fields = {name: data[name] for name in EDITABLE_FIELDS if name in data}
    fields["contact_email"] = fields.get("contact_email") or user.email

    with transaction.atomic():
        listing = Listing.objects.create(
            seller=user,
            suite=suite,
            slug=build_slug(data.get("event_title", "")),
            quantity=quantity,
            original_quantity=quantity,
            status=status,
            **fields,
        )

        record_audit_event(
            action=AuditEvent.Action.LISTING_CREATED,
            target=listing,
            actor=user,
            request=request,
            metadata={"suite": suite.display_name, "quantity": quantity, "status": status},
        )

    logger.info(
        "Listing created",
        extra={"listing_id": str(listing.pk), "suite": suite.display_name, "seller_id": str(user.pk)},
    )
    return listing


def update_listing(*, listing_id, user, data: dict, suite: Suite | None = None, request=None) -> Listing:
    with transaction.atomic():
        listing = (
            Listing.objects
            .select_for_update()
            .select_related("suite")
            .filter(pk=listing_id)
            .first()
        )
        if listing is None:
            raise ListingNotFoundError("Listing not found")

        if not can_manage_listing(user, listing):
            raise ListingPermissionError("You do not have permission to edit this listing")

        if suite is not None and suite.pk != listing.suite_id:
            raise SuiteChangeError("A listing cannot be moved to another suite")

        if not is_admin(user) and not is_verified_for_suite(user, listing.suite):
            raise SuiteNotVerifiedError("You do not have permission to list tickets for this suite.")

        changed = []

        if "quantity" in data and data["quantity"] is not None:
            if listing.status == Listing.Status.SOLD:
                raise InvalidQuantityError("Listing is sold. Mark it available to change the quantity.")
            quantity = _check_quantity(data["quantity"], listing.suite)
            listing.quantity = quantity
            listing.original_quantity = quantity
            changed += ["quantity", "original_quantity"]

        for name in EDITABLE_FIELDS:
            if name in data:
                setattr(listing, name, data[name])
                changed.append(name)

        if "contact_email" in changed and not listing.contact_email:
            listing.contact_email = user.email

        listing.save(update_fields=sorted(set(changed)) + ["updated_at"])

        record_audit_event(
            action=AuditEvent.Action.LISTING_UPDATED,
            target=listing,
            actor=user,
            request=request,
            metadata={"fields": sorted(set(changed))},
        )

    logger.info("Listing updated", extra={"listing_id": str(listing.pk), "fields": sorted(set(changed))})
    return listing


def record_view(listing: Listing) -> None:
    Listing.objects.filter(pk=listing.pk).update(view_count=F("view_count") + 1)
