# suites/models.py

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


def default_suite_capacity() -> int:
    return int(getattr(settings, "SUITE_CAPACITY", 8) or 8)


class Suite(models.Model):
    """
    A physical suite in the venue.

    - (area, number) identifies a suite; display_name is derived (e.g. "L12", "UNT4").
    - capacity is the seat ceiling enforced on listing create/edit.
    """

    class Area(models.TextChoices):
        LOWER_FIRE = "LOWER_FIRE", "Lower Fire Suite"
        NORTH_TERRACE = "NORTH_TERRACE", "Upper North Terrace"
        SOUTH_TERRACE = "SOUTH_TERRACE", "Upper South Terrace"

    AREA_PREFIXES = {
        Area.LOWER_FIRE: "L",
        Area.NORTH_TERRACE: "UNT",
        Area.SOUTH_TERRACE: "UST",
    }

    # Venue-map section keys used by the browse map
    AREA_MAP_KEYS = {
        Area.LOWER_FIRE: "LOWER",
        Area.NORTH_TERRACE: "NORTH",
        Area.SOUTH_TERRACE: "SOUTH",
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    area = models.CharField(max_length=20, choices=Area.choices)
    number = models.PositiveIntegerField()
    display_name = models.CharField(max_length=16, db_index=True)

    capacity = models.PositiveIntegerField(default=default_suite_capacity)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["area", "number"]
        constraints = [
            models.UniqueConstraint(fields=["area", "number"], name="uniq_suite_area_number"),
        ]

    @classmethod
    def format_display_name(cls, area: str, number: int) -> str:
        return f"{cls.AREA_PREFIXES.get(area, area)}{int(number)}"

    @property
    def map_key(self) -> str:
        return f"{self.AREA_MAP_KEYS.get(self.area, 'LOWER')}:{self.number}"

    def clean(self):
        if self.number is None or int(self.number) <= 0:
            raise ValidationError({"number": "Suite number must be positive"})
        if self.capacity is None or int(self.capacity) <= 0:
            raise ValidationError({"capacity": "Capacity must be positive"})

    def save(self, *args, **kwargs):
        self.display_name = self.format_display_name(self.area, self.number)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.display_name
