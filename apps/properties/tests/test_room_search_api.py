"""API tests for the public room availability search."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.db import DatabaseError
from django.test import override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.properties.models import Room
from shared.domain.value_objects import haversine_km
from shared.testing import make_owner, make_property, make_room

CENTER_LAT = 12.9716
CENTER_LON = 77.5946


class RoomSearchAPITests(APITestCase):
    def setUp(self) -> None:
        owner = make_owner()
        self.city_centre = make_property(owner)
        mysuru = make_property(
            owner,
            name="Palace View",
            address="8 Sayyaji Rao Road",
            city="Mysuru",
            pincode="570001",
            latitude=Decimal("12.29580000"),
            longitude=Decimal("76.63940000"),
        )
        unmapped = make_property(
            owner,
            name="Lake Side",
            address="3 Tank Bund Road",
            city="Hyderabad",
            state="Telangana",
            pincode="500080",
            latitude=None,
            longitude=None,
        )

        self.near = make_room(
            self.city_centre,
            "101",
            rent_amount=Decimal("9000.00"),
            deposit_amount=Decimal("9000.00"),
            latitude=Decimal("12.98060000"),
            longitude=Decimal("77.59460000"),
        )
        self.fallback = make_room(
            self.city_centre, "102", room_type="Double", rent_amount=Decimal("7000.00")
        )
        self.far = make_room(mysuru, "201", rent_amount=Decimal("6000.00"))
        self.unknown = make_room(unmapped, "301", rent_amount=Decimal("5000.00"))
        make_room(self.city_centre, "103", status=Room.Status.OCCUPIED)

        # Deterministic creation order: near is newest, unknown oldest.
        now = timezone.now()
        for age, room in enumerate([self.near, self.fallback, self.far, self.unknown]):
            Room.objects.filter(pk=room.pk).update(created_at=now - timedelta(minutes=age))

        self.url = reverse("room-search")

    def _ids(self, response) -> list[str]:
        return [item["id"] for item in response.data["rooms"]]

    def test_anonymous_search_lists_available_rooms_newest_first(self) -> None:
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(
            self._ids(response),
            [str(r.pk) for r in (self.near, self.fallback, self.far, self.unknown)],
        )
        self.assertNotIn("search_center", response.data)
        first = response.data["rooms"][0]
        self.assertEqual(first["property"]["name"], "Green Residency")
        self.assertEqual(first["property"]["owner"]["business_name"], "Kumar Stays")
        self.assertIsNone(first["distance_km"])

    def test_sort_by_rent_ascending_with_limit_and_offset(self) -> None:
        response = self.client.get(
            self.url, {"sortBy": "rent", "sortOrder": "asc", "limit": 2, "offset": 1}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(self._ids(response), [str(self.far.pk), str(self.fallback.pk)])

    def test_unknown_sort_key_falls_back_to_newest_first(self) -> None:
        response = self.client.get(self.url, {"sortBy": "popularity", "sortOrder": "sideways"})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(self._ids(response)[0], str(self.near.pk))

    def test_location_matches_city_state_or_address(self) -> None:
        by_state = self.client.get(self.url, {"location": "karnataka"})
        by_address = self.client.get(self.url, {"location": "tank bund"})

        self.assertEqual(
            set(self._ids(by_state)),
            {str(self.near.pk), str(self.fallback.pk), str(self.far.pk)},
        )
        self.assertEqual(self._ids(by_address), [str(self.unknown.pk)])

    def test_rent_range_and_room_type_filters(self) -> None:
        response = self.client.get(self.url, {"minRent": "5500", "maxRent": "8000"})
        self.assertEqual(set(self._ids(response)), {str(self.fallback.pk), str(self.far.pk)})

        response = self.client.get(self.url, {"roomType": "Double"})
        self.assertEqual(self._ids(response), [str(self.fallback.pk)])

    def test_geo_search_uses_default_radius_and_keeps_unknown_distance(self) -> None:
        response = self.client.get(self.url, {"latitude": CENTER_LAT, "longitude": CENTER_LON})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(
            set(self._ids(response)),
            {str(self.near.pk), str(self.fallback.pk), str(self.unknown.pk)},
        )
        self.assertEqual(
            response.data["search_center"], {"latitude": CENTER_LAT, "longitude": CENTER_LON}
        )
        self.assertEqual(response.data["search_radius"], 10.0)

    def test_sort_by_distance_puts_unknown_last(self) -> None:
        response = self.client.get(
            self.url,
            {"latitude": CENTER_LAT, "longitude": CENTER_LON, "sortBy": "distance"},
        )

        rooms = response.data["rooms"]
        self.assertEqual(
            [room["id"] for room in rooms],
            [str(self.fallback.pk), str(self.near.pk), str(self.unknown.pk)],
        )
        # Room 102 has no coordinates of its own and uses the property's.
        self.assertEqual(rooms[0]["distance_km"], 0.0)
        self.assertAlmostEqual(rooms[1]["distance_km"], 1.0, places=1)
        self.assertIsNone(rooms[2]["distance_km"])

    def test_geo_search_sorts_by_column_with_order(self) -> None:
        response = self.client.get(
            self.url,
            {
                "latitude": CENTER_LAT,
                "longitude": CENTER_LON,
                "radius": 500,
                "sortBy": "rent",
                "sortOrder": "asc",
            },
        )

        self.assertEqual(
            self._ids(response),
            [str(r.pk) for r in (self.unknown, self.far, self.fallback, self.near)],
        )

    def test_radius_boundary_is_inclusive(self) -> None:
        self.near.refresh_from_db()
        exact = haversine_km(
            CENTER_LAT, CENTER_LON, float(self.near.latitude), float(self.near.longitude)
        )

        at_boundary = self.client.get(
            self.url, {"latitude": CENTER_LAT, "longitude": CENTER_LON, "radius": repr(exact)}
        )
        inside = self.client.get(
            self.url,
            {"latitude": CENTER_LAT, "longitude": CENTER_LON, "radius": repr(exact * 0.999)},
        )

        self.assertIn(str(self.near.pk), self._ids(at_boundary))
        self.assertNotIn(str(self.near.pk), self._ids(inside))
        self.assertIn(str(self.fallback.pk), self._ids(inside))

    @override_settings(ROOM_SEARCH_DEFAULT_RADIUS_KM=200)
    def test_default_radius_comes_from_settings(self) -> None:
        response = self.client.get(self.url, {"latitude": CENTER_LAT, "longitude": CENTER_LON})

        self.assertIn(str(self.far.pk), self._ids(response))
        self.assertEqual(response.data["search_radius"], 200.0)

    def test_malformed_numeric_filters_are_rejected(self) -> None:
        cases = [
            ({"latitude": "north", "longitude": CENTER_LON}, "latitude"),
            ({"latitude": CENTER_LAT, "longitude": "east"}, "longitude"),
            ({"latitude": 95, "longitude": CENTER_LON}, "latitude"),
            ({"latitude": CENTER_LAT, "longitude": CENTER_LON, "radius": "far"}, "radius"),
            ({"latitude": CENTER_LAT, "longitude": CENTER_LON, "radius": 0}, "radius"),
            ({"minRent": "cheap"}, "minRent"),
            ({"maxRent": "-1"}, "maxRent"),
            ({"minRent": "9000", "maxRent": "100"}, "minRent"),
            ({"latitude": CENTER_LAT}, "longitude"),
            ({"limit": 0}, "limit"),
        ]
        for params, field in cases:
            with self.subTest(params=params):
                response = self.client.get(self.url, params)
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
                self.assertIn(field, response.data)

    def test_store_failure_returns_generic_error(self) -> None:
        with mock.patch(
            "apps.properties.views.search_rooms",
            side_effect=DatabaseError("relation rooms does not exist"),
        ):
            response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {"error": "Internal server error"})
