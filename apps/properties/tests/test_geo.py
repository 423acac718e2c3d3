"""Unit tests for distance computation and ranking helpers."""

from datetime import date
from decimal import Decimal

import pytest

from apps.properties.search import (
    RankedRoom,
    RoomSearchParams,
    sort_nulls_last,
    within_radius,
)
from shared.domain.value_objects import EARTH_RADIUS_KM, GeoPoint, StayPeriod, haversine_km


def test_haversine_same_point_is_zero():
    assert haversine_km(12.9716, 77.5946, 12.9716, 77.5946) == 0


def test_haversine_one_degree_of_latitude():
    expected = EARTH_RADIUS_KM * 3.141592653589793 / 180
    assert haversine_km(0, 0, 1, 0) == pytest.approx(expected, rel=1e-9)


def test_haversine_is_symmetric():
    there = haversine_km(12.9716, 77.5946, 13.0827, 80.2707)
    back = haversine_km(13.0827, 80.2707, 12.9716, 77.5946)
    assert there == pytest.approx(back)
    # Bengaluru to Chennai
    assert 280 < there < 300


def test_radius_boundary_is_inclusive():
    assert within_radius(5.0, 5.0)
    assert not within_radius(5.01, 5.0)


def test_unknown_distance_is_never_excluded():
    assert within_radius(None, 0.5)


def test_sort_nulls_last_in_both_directions():
    items = [RankedRoom(room=None, distance_km=d) for d in (3.0, None, 1.0, 2.0)]

    ascending = sort_nulls_last(items, key=lambda item: item.distance_km)
    descending = sort_nulls_last(items, key=lambda item: item.distance_km, descending=True)

    assert [i.distance_km for i in ascending] == [1.0, 2.0, 3.0, None]
    assert [i.distance_km for i in descending] == [3.0, 2.0, 1.0, None]


def test_sort_column_mapping_falls_back_to_created():
    assert RoomSearchParams(sort_by="rent").sort_column == "rent_amount"
    assert RoomSearchParams(sort_by="deposit").sort_column == "deposit_amount"
    assert RoomSearchParams(sort_by="popularity").sort_column == "created_at"
    assert not RoomSearchParams().ascending


def test_geopoint_from_partial_coordinates_is_none():
    assert GeoPoint.from_coordinates(Decimal("12.97160000"), None) is None
    assert GeoPoint.from_coordinates(Decimal("12.97160000"), Decimal("77.59460000")) == GeoPoint(
        12.9716, 77.5946
    )


def test_geopoint_rejects_out_of_range_latitude():
    with pytest.raises(ValueError):
        GeoPoint(91, 0)


def test_stay_period_rejects_move_out_before_move_in():
    with pytest.raises(ValueError):
        StayPeriod(date(2025, 5, 2), date(2025, 5, 1))
    assert StayPeriod(date(2025, 5, 1)).is_open_ended
