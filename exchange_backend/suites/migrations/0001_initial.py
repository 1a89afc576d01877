# suites/migrations/0001_initial.py

import uuid

from django.db import migrations, models

import suites.models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Suite",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "area",
                    models.CharField(
                        choices=[
                            ("LOWER_FIRE", "Lower Fire Suite"),
                            ("NORTH_TERRACE", "Upper North Terrace"),
                            ("SOUTH_TERRACE", "Upper South Terrace"),
                        ],
                        max_length=20,
                    ),
                ),
                ("number", models.PositiveIntegerField()),
                ("display_name", models.CharField(db_index=True, max_length=16)),
                ("capacity", models.PositiveIntegerField(default=suites.models.default_suite_capacity)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["area", "number"],
                "constraints": [
                    models.UniqueConstraint(fields=("area", "number"), name="uniq_suite_area_number"),
                ],
            },
        ),
    ]
