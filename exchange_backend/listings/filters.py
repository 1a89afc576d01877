# listings/filters.py

"""
Browse filters for GET /api/listings/.

status defaults to ACTIVE when not supplied (see ListingViewSet.get_queryset).
"""

import django_filters
from django.db.models import Q

from listings.models import Listing
from suites.models import Suite


class ListingFilter(django_filters.FilterSet):
    q = django_filters.CharFilter(method="filter_q")
    area = django_filters.ChoiceFilter(field_name="suite__area", choices=Suite.Area.choices)
    suite = django_filters.NumberFilter(field_name="suite__number")
    date_from = django_filters.DateFilter(field_name="event_datetime", lookup_expr="date__gte")
    date_to = django_filters.DateFilter(field_name="event_datetime", lookup_expr="date__lte")
    price_min = django_filters.NumberFilter(field_name="price_per_seat", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="price_per_seat", lookup_expr="lte")
    seats_min = django_filters.NumberFilter(field_name="quantity", lookup_expr="gte")
    delivery_method = django_filters.ChoiceFilter(choices=Listing.DeliveryMethod.choices)
    status = django_filters.ChoiceFilter(choices=Listing.Status.choices)
    seller_id = django_filters.UUIDFilter(field_name="seller_id")
    sort = django_filters.ChoiceFilter(
        choices=(("date", "Event date"), ("price", "Price"), ("newest", "Newest")),
        method="filter_sort",
    )

    class Meta:
        model = Listing
        fields = []

    SORTS = {
        "date": ("event_datetime", "-created_at"),
        "price": ("price_per_seat", "event_datetime"),
        "newest": ("-created_at",),
    }

    def filter_q(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(event_title__icontains=value)
            | Q(notes__icontains=value)
            | Q(suite__display_name__iexact=value)
        )

    def filter_sort(self, queryset, name, value):
        return queryset.order_by(*self.SORTS.get(value, self.SORTS["date"]))
