# audit/migrations/0001_initial.py

import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="AuditEvent",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("USER_REGISTERED", "User registered"),
                            ("USER_ROLE_CHANGED", "User role changed"),
                            ("SELLER_APPLICATION_CREATED", "Seller application created"),
                            ("SELLER_APPLICATION_APPROVED", "Seller application approved"),
                            ("SELLER_APPLICATION_DENIED", "Seller application denied"),
                            ("LISTING_CREATED", "Listing created"),
                            ("LISTING_UPDATED", "Listing updated"),
                            ("LISTING_TICKETS_SOLD", "Listing tickets sold"),
                            ("LISTING_MARKED_SOLD", "Listing marked sold"),
                            ("LISTING_MARKED_AVAILABLE", "Listing marked available"),
                        ],
                        db_index=True,
                        max_length=64,
                    ),
                ),
                ("target_type", models.CharField(max_length=64)),
                ("target_id", models.CharField(db_index=True, max_length=64)),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("ip_address", models.GenericIPAddressField(blank=True, null=True)),
                ("user_agent", models.CharField(blank=True, max_length=512)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                (
                    "actor",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="audit_events",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["target_type", "target_id"], name="audit_target_idx")],
            },
        ),
    ]
