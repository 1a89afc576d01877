# listings/migrations/0001_initial.py

import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("suites", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Listing",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("slug", models.SlugField(max_length=255, unique=True)),
                ("event_title", models.CharField(max_length=255)),
                ("event_datetime", models.DateTimeField(db_index=True)),
                ("quantity", models.PositiveIntegerField()),
                ("original_quantity", models.PositiveIntegerField()),
                ("price_per_seat", models.DecimalField(decimal_places=2, max_digits=10)),
                (
                    "delivery_method",
                    models.CharField(
                        choices=[
                            ("MOBILE_TRANSFER", "Mobile Transfer"),
                            ("PAPER", "Paper Tickets"),
                            ("PDF", "PDF/E-Ticket"),
                            ("WILL_CALL", "Will Call"),
                            ("OTHER", "Other"),
                        ],
                        max_length=20,
                    ),
                ),
                ("contact_email", models.EmailField(blank=True, max_length=254)),
                ("contact_phone", models.CharField(blank=True, max_length=32)),
                ("contact_link", models.URLField(blank=True)),
                ("contact_messenger", models.CharField(blank=True, max_length=255)),
                ("allow_messages", models.BooleanField(default=False)),
                ("notes", models.TextField(blank=True, max_length=1000)),
                ("seat_numbers", models.CharField(blank=True, max_length=255)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("DRAFT", "Draft"),
                            ("ACTIVE", "Active"),
                            ("PENDING_MODERATION", "Pending Review"),
                            ("SOLD", "Sold"),
                            ("WITHDRAWN", "Withdrawn"),
                            ("EXPIRED", "Expired"),
                        ],
                        db_index=True,
                        default="ACTIVE",
                        max_length=20,
                    ),
                ),
                ("sold_at", models.DateTimeField(blank=True, null=True)),
                ("sold_price_total", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("view_count", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "seller",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="listings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "suite",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="listings",
                        to="suites.suite",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status", "event_datetime"], name="listing_status_event_idx"),
                    models.Index(fields=["seller", "status"], name="listing_seller_status_idx"),
                ],
            },
        ),
    ]
