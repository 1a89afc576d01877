# listings/services/lifecycle.py

"""
LISTING INVENTORY LIFECYCLE

Operations:
- sell_tickets(): record a (partial) sale, decrementing quantity
- mark_all_sold(): sell every remaining seat in one step
- mark_as_available(): put a listing back on the market with a fresh quantity
- toggle_status(): flip between ACTIVE and SOLD

HARD RULES:
- Preconditions are checked in a fixed order and a failure leaves the row untouched:
  quantity -> existence -> permission -> already sold -> inventory -> sale price.
- The decrement is ONE conditional UPDATE guarded by `quantity >= k AND status != SOLD`.
  Two sellers racing for the last seats can never oversell: the loser matches
  zero rows and is re-diagnosed against the committed state.
- mark_all_sold / mark_as_available / toggle_status lock the row (select_for_update)
  before reading the quantity they act on.
- Inputs are bounded by their columns: quantity <= MAX_QUANTITY and any sale
  total <= MAX_SALE_TOTAL, checked before the write.
- When a sale empties the listing, status/sold_at/sold_price_total are set in the
  same statement as the decrement (readers never see quantity=0 while ACTIVE).
- sold_price_total is written only when the listing closes. An absent sale price
  defaults to price_per_seat * quantity_sold of the closing sale.
- price_per_seat is never touched here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Case, CharField, DateTimeField, DecimalField, F, Q, Value, When
from django.utils import timezone

from audit.models import AuditEvent
from audit.services import record_audit_event
from listings.models import Listing
from listings.services.exceptions import (
    InsufficientInventoryError,
    InvalidListingStatusError,
    InvalidQuantityError,
    InvalidSalePriceError,
    ListingAlreadySoldError,
    ListingNotFoundError,
    ListingPermissionError,
)
from permissions.roles import is_admin

logger = logging.getLogger(__name__)

MONEY_Q = Decimal("0.01")

# Column ceilings: sold_price_total is DECIMAL(12, 2), quantity is a 32-bit PositiveIntegerField.
MAX_SALE_TOTAL = Decimal("9999999999.99")
MAX_QUANTITY = 2147483647

TOGGLE_TARGETS = {Listing.Status.ACTIVE, Listing.Status.SOLD}


@dataclass(frozen=True)
class LifecycleResult:
    listing: Listing
    message: str
    quantity_sold: int = 0


# ============================================================
# INPUT NORMALIZERS
# ============================================================

def _to_positive_int(value, *, field_name: str = "quantity") -> int:
    """
    Whole, strictly positive integer.
    Accepts ints and numeric strings ("3", " 3 ", "3.0"); rejects 2.5, "abc", True.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidQuantityError(f"{field_name} is required")

    if isinstance(value, bool):
        raise InvalidQuantityError(f"{field_name} must be a whole number")

    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidQuantityError(f"{field_name} must be a whole number")

    if not parsed.is_finite() or parsed != parsed.to_integral_value():
        raise InvalidQuantityError(f"{field_name} must be a whole number")

    if parsed <= 0:
        raise InvalidQuantityError(f"{field_name} must be a positive number")
    if parsed > MAX_QUANTITY:
        raise InvalidQuantityError(f"{field_name} cannot exceed {MAX_QUANTITY}")

    return int(parsed)


def _to_sale_price(value) -> Optional[Decimal]:
    """
    Optional total sale amount. None/blank means "not provided".
    Zero is allowed (tickets given away), negatives are not.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None

    if isinstance(value, bool):
        raise InvalidSalePriceError("Sale price must be a valid number")

    try:
        price = Decimal(str(value).strip())
        if not price.is_finite():
            raise InvalidSalePriceError("Sale price must be a valid number")
        if price < Decimal("0"):
            raise InvalidSalePriceError("Sale price must be a valid non-negative number")
        price = price.quantize(MONEY_Q, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        raise InvalidSalePriceError("Sale price must be a valid number")

    if price > MAX_SALE_TOTAL:
        raise InvalidSalePriceError(f"Sale price cannot exceed {MAX_SALE_TOTAL}")

    return price


# ============================================================
# LOOKUP + AUTHORIZATION
# ============================================================

def _get_listing(listing_id, *, for_update: bool = False) -> Listing:
    pk = getattr(listing_id, "pk", listing_id)
    if pk is None or pk == "":
        raise ListingNotFoundError("Listing not found")

    qs = Listing.objects.select_related("suite", "seller")
    if for_update:
        qs = qs.select_for_update()

    try:
        return qs.get(pk=pk)
    except (Listing.DoesNotExist, ValidationError, ValueError):
        raise ListingNotFoundError("Listing not found")


def can_manage_listing(user, listing: Listing) -> bool:
    """Seller of the listing, or an admin."""
    if not user or not getattr(user, "is_authenticated", False):
        return False
    return listing.seller_id == user.pk or is_admin(user)


def _require_manage(user, listing: Listing, *, verb: str) -> None:
    if not can_manage_listing(user, listing):
        raise ListingPermissionError(f"You do not have permission to {verb} this listing")


def _diagnose_lost_update(*, listing_id, quantity_sold: int):
    """
    The guarded UPDATE matched nothing: report what the committed row says now.
    """
    current = Listing.objects.filter(pk=listing_id).values("status", "quantity").first()

    if current is None:
        raise ListingNotFoundError("Listing not found")

    if current["status"] == Listing.Status.SOLD:
        raise ListingAlreadySoldError("This listing is already marked as sold")

    raise InsufficientInventoryError(
        f"Cannot sell {quantity_sold} tickets. Only {current['quantity']} available."
    )


# ============================================================
# SELL TICKETS
# ============================================================

def sell_tickets(*, listing_id, quantity_sold, sale_price=None, user, request=None) -> LifecycleResult:
    """
    Record the sale of `quantity_sold` seats.

    - Partial sale: quantity decreases, status unchanged.
    - Closing sale (quantity_sold == quantity): quantity=0, status=SOLD,
      sold_at=now, sold_price_total=sale_price or price_per_seat * quantity_sold.
    """
    qty = _to_positive_int(quantity_sold, field_name="quantity_sold")

    with transaction.atomic():
        listing = _get_listing(listing_id)
        _require_manage(user, listing, verb="sell tickets for")

        if listing.status == Listing.Status.SOLD:
            raise ListingAlreadySoldError("This listing is already marked as sold")

        if qty > listing.quantity:
            raise InsufficientInventoryError(
                f"Cannot sell {qty} tickets. Only {listing.quantity} available."
            )

        price = _to_sale_price(sale_price)
        closing_total = price
        if closing_total is None:
            closing_total = (Decimal(listing.price_per_seat) * qty).quantize(MONEY_Q, rounding=ROUND_HALF_UP)
        if closing_total > MAX_SALE_TOTAL:
            raise InvalidSalePriceError(f"Sale total cannot exceed {MAX_SALE_TOTAL}")

        now = timezone.now()
        closes = Q(quantity=qty)

        # Keyword order matters: the CASE columns read the pre-decrement quantity.
        updated = (
            Listing.objects
            .filter(pk=listing.pk, quantity__gte=qty)
            .exclude(status=Listing.Status.SOLD)
            .update(
                status=Case(
                    When(closes, then=Value(Listing.Status.SOLD.value)),
                    default=F("status"),
                    output_field=CharField(),
                ),
                sold_at=Case(
                    When(closes, then=Value(now, output_field=DateTimeField())),
                    default=F("sold_at"),
                    output_field=DateTimeField(),
                ),
                sold_price_total=Case(
                    When(closes, then=Value(closing_total, output_field=DecimalField(max_digits=12, decimal_places=2))),
                    default=F("sold_price_total"),
                    output_field=DecimalField(max_digits=12, decimal_places=2),
                ),
                quantity=F("quantity") - qty,
                updated_at=now,
            )
        )

        if updated == 0:
            logger.warning(
                "Listing sale lost a concurrent update",
                extra={"listing_id": str(listing.pk), "quantity_sold": qty},
            )
            _diagnose_lost_update(listing_id=listing.pk, quantity_sold=qty)

        listing.refresh_from_db()
        fully_sold = listing.status == Listing.Status.SOLD

        record_audit_event(
            action=AuditEvent.Action.LISTING_MARKED_SOLD if fully_sold else AuditEvent.Action.LISTING_TICKETS_SOLD,
            target=listing,
            actor=user,
            request=request,
            metadata={
                "quantity_sold": qty,
                "remaining": listing.quantity,
                "sale_price": str(price) if price is not None else None,
                "sold_price_total": str(listing.sold_price_total) if fully_sold else None,
            },
        )

    logger.info(
        "Tickets sold",
        extra={
            "listing_id": str(listing.pk),
            "quantity_sold": qty,
            "remaining": listing.quantity,
            "closed": fully_sold,
        },
    )

    if fully_sold:
        message = f"All {qty} remaining tickets sold! Listing marked as sold."
    else:
        message = f"{qty} ticket(s) sold. {listing.quantity} ticket(s) remaining."

    return LifecycleResult(listing=listing, message=message, quantity_sold=qty)


# ============================================================
# MARK ALL SOLD
# ============================================================

def mark_all_sold(*, listing_id, sale_price=None, user, request=None) -> LifecycleResult:
    """
    Sell every remaining seat. Equivalent to sell_tickets(quantity_sold=current quantity).
    """
    with transaction.atomic():
        listing = _get_listing(listing_id, for_update=True)
        _require_manage(user, listing, verb="update")

        if listing.status == Listing.Status.SOLD:
            raise ListingAlreadySoldError("This listing is already marked as sold")

        if listing.quantity > 0:
            return sell_tickets(
                listing_id=listing.pk,
                quantity_sold=listing.quantity,
                sale_price=sale_price,
                user=user,
                request=request,
            )

        return _close_empty_listing(listing=listing, sale_price=sale_price, user=user, request=request)


def _close_empty_listing(*, listing: Listing, sale_price, user, request) -> LifecycleResult:
    """
    A non-SOLD listing with nothing left (legacy rows). Close it without a sale.
    """
    price = _to_sale_price(sale_price)
    now = timezone.now()

    updated = (
        Listing.objects
        .filter(pk=listing.pk, quantity=0)
        .exclude(status=Listing.Status.SOLD)
        .update(
            status=Listing.Status.SOLD,
            sold_at=now,
            sold_price_total=price if price is not None else Decimal("0.00"),
            updated_at=now,
        )
    )
    if updated == 0:
        _diagnose_lost_update(listing_id=listing.pk, quantity_sold=0)

    listing.refresh_from_db()

    record_audit_event(
        action=AuditEvent.Action.LISTING_MARKED_SOLD,
        target=listing,
        actor=user,
        request=request,
        metadata={"quantity_sold": 0, "remaining": 0, "sold_price_total": str(listing.sold_price_total)},
    )

    return LifecycleResult(listing=listing, message="Listing marked as sold.", quantity_sold=0)


# ============================================================
# MARK AS AVAILABLE
# ============================================================

def mark_as_available(*, listing_id, quantity, user, request=None) -> LifecycleResult:
    """
    Full reset: status=ACTIVE, quantity=<given>, sold_at cleared.
    sold_price_total is kept as the record of the previous close.
    """
    qty = _to_positive_int(quantity, field_name="quantity")

    with transaction.atomic():
        listing = _get_listing(listing_id, for_update=True)
        _require_manage(user, listing, verb="update")

        if settings.LISTINGS_ENFORCE_CAPACITY_ON_REACTIVATION and qty > listing.suite.capacity:
            raise InvalidQuantityError(
                f"quantity cannot exceed suite capacity ({listing.suite.capacity})"
            )

        previous_status = listing.status
        now = timezone.now()

        updated = Listing.objects.filter(pk=listing.pk).update(
            status=Listing.Status.ACTIVE,
            quantity=qty,
            sold_at=None,
            updated_at=now,
        )
        if updated == 0:
            raise ListingNotFoundError("Listing not found")

        listing.refresh_from_db()

        record_audit_event(
            action=AuditEvent.Action.LISTING_MARKED_AVAILABLE,
            target=listing,
            actor=user,
            request=request,
            metadata={"quantity": qty, "previous_status": previous_status},
        )

    logger.info(
        "Listing marked available",
        extra={"listing_id": str(listing.pk), "quantity": qty, "previous_status": previous_status},
    )

    return LifecycleResult(listing=listing, message="Listing marked as available successfully")


# ============================================================
# TOGGLE STATUS
# ============================================================

def _to_toggle_target(value) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None

    target = str(value).strip().upper()
    if target not in TOGGLE_TARGETS:
        raise InvalidListingStatusError("Invalid status. Must be SOLD or ACTIVE")
    return target


def toggle_status(*, listing_id, status=None, quantity=None, user, request=None) -> LifecycleResult:
    """
    Flip a listing between ACTIVE and SOLD.

    - status omitted: SOLD -> ACTIVE, anything else -> SOLD.
    - SOLD target goes through the full-sale path (quantity=0, sold_price_total defaulted).
      A supplied quantity must be 0 or a whole number and is otherwise ignored.
    - ACTIVE target: quantity if supplied, else original_quantity when coming back
      from SOLD, else the current quantity.
    """
    target = _to_toggle_target(status)

    with transaction.atomic():
        listing = _get_listing(listing_id, for_update=True)
        _require_manage(user, listing, verb="update")

        if target is None:
            target = Listing.Status.ACTIVE if listing.status == Listing.Status.SOLD else Listing.Status.SOLD

        if target == Listing.Status.SOLD:
            if quantity not in (None, "", 0, "0"):
                _to_positive_int(quantity, field_name="quantity")
            result = mark_all_sold(listing_id=listing.pk, user=user, request=request)
            return replace(result, message="Listing marked as sold successfully")

        if quantity is None or (isinstance(quantity, str) and not quantity.strip()):
            if listing.status == Listing.Status.SOLD:
                restore = listing.original_quantity
            else:
                restore = listing.quantity
        else:
            restore = quantity

        return mark_as_available(listing_id=listing.pk, quantity=restore, user=user, request=request)
