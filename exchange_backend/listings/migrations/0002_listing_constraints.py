# listings/migrations/0002_listing_constraints.py

from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("listings", "0001_initial"),
    ]

    operations = [
        migrations.AddConstraint(
            model_name="listing",
            constraint=models.CheckConstraint(
                condition=(
                    (models.Q(status="SOLD") & models.Q(sold_at__isnull=False))
                    | (~models.Q(status="SOLD") & models.Q(sold_at__isnull=True))
                ),
                name="chk_listing_sold_at_matches_status",
            ),
        ),
        migrations.AddConstraint(
            model_name="listing",
            constraint=models.CheckConstraint(
                condition=models.Q(price_per_seat__gt=0),
                name="chk_listing_price_per_seat_gt_zero",
            ),
        ),
    ]
