"""Platform-wide counters for the admin dashboard."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable

from django.db.models import Count  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.models import Booking
from apps.properties.models import Property, Room

from .models import User

RECENT_SIGNUP_DAYS = 30


def _counts_by(queryset, field: str, keys: Iterable[str]) -> dict[str, int]:
    counts = dict.fromkeys(keys, 0)
    for row in queryset.order_by().values(field).annotate(total=Count("pk")):
        counts[row[field]] = row["total"]
    return counts


def dashboard_stats(now: datetime | None = None) -> dict:
    """Users per role and verification state, inventory and booking counts."""
    now = now or timezone.now()

    users: dict[str, dict[str, int]] = {}
    for role in User.Role.values:
        per_status = _counts_by(
            User.objects.filter(role=role),
            "verification_status",
            User.VerificationStatus.values,
        )
        users[role] = {"total": sum(per_status.values()), **per_status}

    return {
        "users": users,
        "properties": Property.objects.count(),
        "rooms": _counts_by(Room.objects.all(), "status", Room.Status.values),
        "bookings": _counts_by(Booking.objects.all(), "status", Booking.Status.values),
        "recent_signups": User.objects.filter(
            created_at__gte=now - timedelta(days=RECENT_SIGNUP_DAYS)
        ).count(),
    }
