"""API tests for owner-side property and room management."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.properties.models import Property, Room
from shared.testing import make_owner, make_property, make_room, make_tenant


class PropertyAPITests(APITestCase):
    def setUp(self) -> None:
        self.owner = make_owner()
        self.client.force_authenticate(self.owner)

    def test_verified_owner_creates_property(self) -> None:
        payload = {
            "name": "Green Residency",
            "address": "45 Residency Road",
            "city": "Bengaluru",
            "state": "Karnataka",
            "pincode": "560025",
            "amenities": ["wifi", "laundry"],
            "latitude": "12.97160000",
            "longitude": "77.59460000",
        }

        response = self.client.post(reverse("property-list"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        created = Property.objects.get(pk=response.data["id"])
        self.assertEqual(created.owner.user, self.owner)
        self.assertEqual(created.amenities, ["wifi", "laundry"])
        self.assertEqual(response.data["rooms_count"], 0)

    def test_property_needs_both_coordinates(self) -> None:
        payload = {
            "name": "Half Mapped",
            "address": "1 Church Street",
            "city": "Bengaluru",
            "state": "Karnataka",
            "pincode": "560001",
            "latitude": "12.97000000",
        }

        response = self.client.post(reverse("property-list"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("longitude", response.data)

    def test_pending_owner_is_forbidden(self) -> None:
        self.client.force_authenticate(make_owner(email="new@example.com", verified=False))

        response = self.client.get(reverse("property-list"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_tenant_is_forbidden(self) -> None:
        self.client.force_authenticate(make_tenant())

        response = self.client.get(reverse("property-list"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_owner_lists_only_own_properties(self) -> None:
        mine = make_property(self.owner)
        make_property(make_owner(email="rival@example.com"), name="Rival Towers")

        response = self.client.get(reverse("property-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([item["id"] for item in response.data["results"]], [str(mine.pk)])

    def test_other_owners_property_is_not_found(self) -> None:
        foreign = make_property(make_owner(email="rival@example.com"))

        response = self.client.get(reverse("property-detail", args=[foreign.pk]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {"error": "Property not found or access denied"})

    def test_add_and_list_rooms(self) -> None:
        property_obj = make_property(self.owner)
        url = reverse("property-rooms", args=[property_obj.pk])

        response = self.client.post(
            url,
            {
                "room_number": "101",
                "room_type": "Single",
                "rent_amount": "8500.00",
                "deposit_amount": "17000.00",
                "status": "maintenance",
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        # New rooms always start available.
        self.assertEqual(response.data["status"], Room.Status.AVAILABLE)
        self.assertEqual(response.data["property"], property_obj.pk)

        listing = self.client.get(url)
        self.assertEqual([room["room_number"] for room in listing.data], ["101"])

    def test_duplicate_room_number_rejected(self) -> None:
        property_obj = make_property(self.owner)
        make_room(property_obj, "101")

        response = self.client.post(
            reverse("property-rooms", args=[property_obj.pk]),
            {"room_number": "101", "room_type": "Double", "rent_amount": "9000.00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("room_number", response.data)
        self.assertEqual(Room.objects.filter(property=property_obj).count(), 1)

    def test_same_room_number_allowed_in_another_property(self) -> None:
        make_room(make_property(self.owner), "101")
        second = make_property(self.owner, name="Blue Residency")

        response = self.client.post(
            reverse("property-rooms", args=[second.pk]),
            {"room_number": "101", "room_type": "Double", "rent_amount": "9000.00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)


class RoomManagementAPITests(APITestCase):
    def setUp(self) -> None:
        self.owner = make_owner()
        self.room = make_room(make_property(self.owner))
        self.client.force_authenticate(self.owner)

    def test_owner_puts_room_under_maintenance(self) -> None:
        response = self.client.patch(
            reverse("room-set-status", args=[self.room.pk]),
            {"status": "maintenance"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.room.refresh_from_db()
        self.assertEqual(self.room.status, Room.Status.MAINTENANCE)

    def test_status_change_blocked_by_active_booking(self) -> None:
        tenant = make_tenant()
        Room.objects.filter(pk=self.room.pk).update(status=Room.Status.RESERVED)
        Booking.objects.create(
            tenant=tenant.tenant_profile,
            room=self.room,
            property=self.room.property,
            move_in_date=date(2025, 6, 1),
        )

        response = self.client.patch(
            reverse("room-set-status", args=[self.room.pk]),
            {"status": "available"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.room.refresh_from_db()
        self.assertEqual(self.room.status, Room.Status.RESERVED)

    def test_unknown_status_rejected(self) -> None:
        response = self.client.patch(
            reverse("room-set-status", args=[self.room.pk]),
            {"status": "demolished"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_other_owner_cannot_touch_room(self) -> None:
        self.client.force_authenticate(make_owner(email="rival@example.com"))

        response = self.client.patch(
            reverse("room-set-status", args=[self.room.pk]),
            {"status": "maintenance"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_update_room_coordinates(self) -> None:
        response = self.client.patch(
            reverse("room-coordinates", args=[self.room.pk]),
            {"latitude": "12.98060000", "longitude": "77.59460000"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.room.refresh_from_db()
        self.assertEqual(self.room.latitude, Decimal("12.98060000"))
        self.assertEqual(self.room.longitude, Decimal("77.59460000"))

    def test_coordinates_out_of_range_rejected(self) -> None:
        response = self.client.patch(
            reverse("room-coordinates", args=[self.room.pk]),
            {"latitude": "120", "longitude": "77.59460000"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("latitude", response.data)
