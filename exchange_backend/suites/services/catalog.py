# suites/services/catalog.py

"""
SUITE CATALOG SERVICE

Purpose:
- Canonical list of suites in the venue (per area, numbered 1..N).
- Find-or-create a suite from user input (seller verification submits
  area + number, not a suite id).
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from suites.models import Suite

# Suites per area, numbered from 1
AREA_SUITE_COUNTS = {
    Suite.Area.LOWER_FIRE: 90,
    Suite.Area.NORTH_TERRACE: 20,
    Suite.Area.SOUTH_TERRACE: 20,
}


def _to_suite_number(value) -> int:
    if value is None or value == "" or isinstance(value, bool):
        raise ValidationError("Suite number is required")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Suite number must be a whole number")
    if number <= 0:
        raise ValidationError("Suite number must be positive")
    return number


def _to_area(value) -> str:
    area = (value or "").strip().upper()
    if area not in Suite.Area.values:
        raise ValidationError(
            f"Unknown suite area '{value}'. Expected one of: {', '.join(Suite.Area.values)}"
        )
    return area


def iter_catalog():
    """Yield (area, number) for every suite in the venue."""
    for area, count in AREA_SUITE_COUNTS.items():
        for number in range(1, count + 1):
            yield area, number


def get_or_create_suite(*, area, number) -> tuple[Suite, bool]:
    area = _to_area(area)
    number = _to_suite_number(number)

    existing = Suite.objects.filter(area=area, number=number).first()
    if existing:
        return existing, False

    try:
        with transaction.atomic():
            suite = Suite(area=area, number=number)
            suite.full_clean(exclude=["display_name"])
            suite.save()
            return suite, True
    except IntegrityError:
        # Lost a create race on (area, number); the winner's row is authoritative.
        return Suite.objects.get(area=area, number=number), False


@transaction.atomic
def seed_catalog() -> int:
    """Create every catalog suite that doesn't exist yet. Returns how many were created."""
    existing = set(Suite.objects.values_list("area", "number"))
    to_create = [
        Suite(area=area, number=number, display_name=Suite.format_display_name(area, number))
        for area, number in iter_catalog()
        if (area, number) not in existing
    ]
    Suite.objects.bulk_create(to_create)
    return len(to_create)
