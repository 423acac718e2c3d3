"""FilterSet definitions for booking listings."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Booking.Status.choices)
    property = django_filters.UUIDFilter(field_name="property_id")
    room = django_filters.UUIDFilter(field_name="room_id")
    move_in_after = django_filters.DateFilter(field_name="move_in_date", lookup_expr="gte")
    move_in_before = django_filters.DateFilter(field_name="move_in_date", lookup_expr="lte")

    class Meta:
        model = Booking
        fields = ["status", "property", "room"]
