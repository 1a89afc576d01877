# listings/models.py

"""
LISTING MODEL

A seller's offer of some number of seats for one event, tied to one suite.

LIFECYCLE (service-managed, see listings.services.lifecycle):
- quantity / status / sold_at / sold_price_total are written ONLY by the
  lifecycle service. Create/edit flows set the initial quantity.
- ACTIVE listings are discoverable; SOLD listings are hidden by default and
  need an explicit reactivation.
- price_per_seat is the asking price and is never touched by a sale.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from suites.models import Suite


class Listing(models.Model):
    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Draft"
        ACTIVE = "ACTIVE", "Active"
        PENDING_MODERATION = "PENDING_MODERATION", "Pending Review"
        SOLD = "SOLD", "Sold"
        WITHDRAWN = "WITHDRAWN", "Withdrawn"
        EXPIRED = "EXPIRED", "Expired"

    class DeliveryMethod(models.TextChoices):
        MOBILE_TRANSFER = "MOBILE_TRANSFER", "Mobile Transfer"
        PAPER = "PAPER", "Paper Tickets"
        PDF = "PDF", "PDF/E-Ticket"
        WILL_CALL = "WILL_CALL", "Will Call"
        OTHER = "OTHER", "Other"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    seller = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="listings",
    )
    suite = models.ForeignKey(
        Suite,
        on_delete=models.PROTECT,
        related_name="listings",
    )

    slug = models.SlugField(max_length=255, unique=True)

    event_title = models.CharField(max_length=255)
    event_datetime = models.DateTimeField(db_index=True)

    # Seats currently available (unsold)
    quantity = models.PositiveIntegerField()
    # Seats offered at creation / last edit; restored by a bare reactivation
    original_quantity = models.PositiveIntegerField()

    price_per_seat = models.DecimalField(max_digits=10, decimal_places=2)

    delivery_method = models.CharField(max_length=20, choices=DeliveryMethod.choices)

    contact_email = models.EmailField(blank=True)
    contact_phone = models.CharField(max_length=32, blank=True)
    contact_link = models.URLField(blank=True)
    contact_messenger = models.CharField(max_length=255, blank=True)
    allow_messages = models.BooleanField(default=False)

    notes = models.TextField(max_length=1000, blank=True)
    seat_numbers = models.CharField(max_length=255, blank=True)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
        db_index=True,
    )
    sold_at = models.DateTimeField(null=True, blank=True)
    sold_price_total = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)

    view_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "event_datetime"], name="listing_status_event_idx"),
            models.Index(fields=["seller", "status"], name="listing_seller_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(Q(status="SOLD") & Q(sold_at__isnull=False))
                | (~Q(status="SOLD") & Q(sold_at__isnull=True)),
                name="chk_listing_sold_at_matches_status",
            ),
            models.CheckConstraint(
                condition=Q(price_per_seat__gt=0),
                name="chk_listing_price_per_seat_gt_zero",
            ),
        ]

    def __str__(self):
        return f"{self.event_title} ({self.suite}) x{self.quantity} [{self.status}]"

    def clean(self):
        if self.price_per_seat is None or Decimal(self.price_per_seat) <= Decimal("0.00"):
            raise ValidationError({"price_per_seat": "Price must be positive"})

        if self.status == self.Status.SOLD and self.sold_at is None:
            raise ValidationError({"sold_at": "SOLD listings must carry sold_at"})

        if self.status != self.Status.SOLD and self.sold_at is not None:
            raise ValidationError({"sold_at": "Only SOLD listings carry sold_at"})

    @property
    def is_sold(self) -> bool:
        return self.status == self.Status.SOLD

    @property
    def default_contact_email(self) -> str:
        return self.contact_email or getattr(self.seller, "email", "")
