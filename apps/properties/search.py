"""Availability search over rooms.

Two paths share one filter set:

- without a centre point the store does all the work: filtering, ordering
  by the requested column and slicing;
- with a centre point every matching room is loaded, its Haversine distance
  is computed in process (room coordinates first, then the property's), rooms
  outside the radius are dropped and the rest are ranked here.

A room whose distance cannot be resolved keeps ``distance_km = None`` and
is never excluded by the radius; it always sorts after rooms with a value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Iterable

from django.conf import settings  # type: ignore
from django.db.models import Q, QuerySet  # type: ignore

from shared.domain.value_objects import GeoPoint

from .models import Room

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "rent": "rent_amount",
    "deposit": "deposit_amount",
    "created": "created_at",
}
DEFAULT_SORT_COLUMN = "created_at"
SORT_BY_DISTANCE = "distance"


def default_radius_km() -> float:
    return float(getattr(settings, "ROOM_SEARCH_DEFAULT_RADIUS_KM", 10))


@dataclass(frozen=True)
class RoomSearchParams:
    """Validated search filters."""

    location: str = ""
    min_rent: Decimal | None = None
    max_rent: Decimal | None = None
    room_type: str = ""
    center: GeoPoint | None = None
    radius_km: float | None = None
    sort_by: str = ""
    sort_order: str = "desc"
    limit: int | None = None
    offset: int = 0

    @property
    def is_geo(self) -> bool:
        return self.center is not None

    @property
    def effective_radius_km(self) -> float:
        return self.radius_km if self.radius_km is not None else default_radius_km()

    @property
    def sort_column(self) -> str:
        return SORT_COLUMNS.get(self.sort_by, DEFAULT_SORT_COLUMN)

    @property
    def ascending(self) -> bool:
        return self.sort_order == "asc"


@dataclass
class RankedRoom:
    room: Room
    distance_km: float | None = None


@dataclass
class RoomSearchResult:
    rooms: list[RankedRoom] = field(default_factory=list)
    center: GeoPoint | None = None
    radius_km: float | None = None


def available_rooms(params: RoomSearchParams) -> QuerySet:
    """Available rooms narrowed by the non-geographic filters."""
    qs = Room.objects.filter(status=Room.Status.AVAILABLE).select_related(
        "property",
        "property__owner",
    )
    if params.location:
        qs = qs.filter(
            Q(property__city__icontains=params.location)
            | Q(property__state__icontains=params.location)
            | Q(property__address__icontains=params.location)
        )
    if params.min_rent is not None:
        qs = qs.filter(rent_amount__gte=params.min_rent)
    if params.max_rent is not None:
        qs = qs.filter(rent_amount__lte=params.max_rent)
    if params.room_type:
        qs = qs.filter(room_type=params.room_type)
    return qs


def room_distance_km(room: Room, center: GeoPoint) -> float | None:
    """Distance from ``center`` to the room, or None when it has no coordinates."""
    location = room.resolve_location()
    if location is None:
        return None
    return center.distance_to(location)


def within_radius(distance_km: float | None, radius_km: float) -> bool:
    """Radius check with an inclusive boundary; unknown distances pass."""
    return distance_km is None or distance_km <= radius_km


def sort_nulls_last(
    items: Iterable[RankedRoom],
    key: Callable[[RankedRoom], Any],
    descending: bool = False,
) -> list[RankedRoom]:
    """Stable sort on ``key`` with every ``None`` key placed at the end."""
    present: list[RankedRoom] = []
    missing: list[RankedRoom] = []
    for item in items:
        (missing if key(item) is None else present).append(item)
    present.sort(key=key, reverse=descending)
    return present + missing


def _paginate(items: list[RankedRoom], params: RoomSearchParams) -> list[RankedRoom]:
    end = params.offset + params.limit if params.limit is not None else None
    return items[params.offset:end]


def search_rooms(params: RoomSearchParams) -> RoomSearchResult:
    """Run an availability search."""
    qs = available_rooms(params)

    if not params.is_geo:
        prefix = "" if params.ascending else "-"
        qs = qs.order_by(f"{prefix}{params.sort_column}", "id")
        end = params.offset + params.limit if params.limit is not None else None
        rooms = [RankedRoom(room) for room in qs[params.offset:end]]
        logger.debug("Room search returned %d rooms (store ordering)", len(rooms))
        return RoomSearchResult(rooms=rooms)

    center = params.center
    radius = params.effective_radius_km
    candidates = [
        RankedRoom(room, room_distance_km(room, center))
        for room in qs.order_by("-created_at", "id")
    ]
    matches = [item for item in candidates if within_radius(item.distance_km, radius)]

    if params.sort_by == SORT_BY_DISTANCE:
        ranked = sort_nulls_last(matches, key=lambda item: item.distance_km)
    else:
        column = params.sort_column
        ranked = sort_nulls_last(
            matches,
            key=lambda item: getattr(item.room, column),
            descending=not params.ascending,
        )

    logger.debug(
        "Room search around %s within %.3f km: %d of %d candidates",
        center,
        radius,
        len(matches),
        len(candidates),
    )
    return RoomSearchResult(rooms=_paginate(ranked, params), center=center, radius_km=radius)
