"""API tests for in-app notifications."""

from __future__ import annotations

from unittest import mock

from django.db import DatabaseError
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.notifications.models import Notification
from apps.notifications.services import notify
from shared.testing import make_owner, make_tenant


class NotificationAPITests(APITestCase):
    def setUp(self) -> None:
        self.tenant = make_tenant()
        self.owner = make_owner()
        self.first = notify(self.tenant.pk, "Booking Approved", "Room 101 is yours.",
                            Notification.Type.BOOKING)
        self.second = notify(self.tenant.pk, "Welcome", "Thanks for joining.")
        notify(self.owner.pk, "New Booking Request", "Asha Rao wants room 101.",
               Notification.Type.BOOKING)
        self.client.force_authenticate(self.tenant)

    def test_user_sees_only_own_notifications(self) -> None:
        response = self.client.get(reverse("notification-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        titles = {item["title"] for item in response.data["results"]}
        self.assertEqual(titles, {"Booking Approved", "Welcome"})

    def test_filter_by_read_state_and_type(self) -> None:
        Notification.objects.filter(pk=self.first.pk).update(is_read=True)

        unread = self.client.get(reverse("notification-list"), {"is_read": "false"})
        booking = self.client.get(reverse("notification-list"), {"type": "booking"})

        self.assertEqual([item["title"] for item in unread.data["results"]], ["Welcome"])
        self.assertEqual([item["title"] for item in booking.data["results"]], ["Booking Approved"])

    def test_mark_read(self) -> None:
        response = self.client.post(reverse("notification-mark-read", args=[self.first.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(response.data["is_read"])
        self.first.refresh_from_db()
        self.assertTrue(self.first.is_read)

    def test_cannot_mark_someone_elses_notification(self) -> None:
        foreign = Notification.objects.get(user=self.owner)

        response = self.client.post(reverse("notification-mark-read", args=[foreign.pk]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        foreign.refresh_from_db()
        self.assertFalse(foreign.is_read)

    def test_mark_all_read_only_touches_own_unread(self) -> None:
        response = self.client.post(reverse("notification-mark-all-read"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data, {"updated": 2})
        self.assertFalse(Notification.objects.filter(user=self.tenant, is_read=False).exists())
        self.assertTrue(Notification.objects.filter(user=self.owner, is_read=False).exists())

    def test_anonymous_access_rejected(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.get(reverse("notification-list"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class NotifyServiceTests(APITestCase):
    def test_store_failure_is_swallowed(self) -> None:
        tenant = make_tenant()

        with mock.patch.object(
            Notification.objects, "create", side_effect=DatabaseError("disk full")
        ):
            result = notify(tenant.pk, "Booking Approved", "Room 101 is yours.")

        self.assertIsNone(result)
        self.assertFalse(Notification.objects.exists())

    def test_default_type_is_system(self) -> None:
        tenant = make_tenant()

        notification = notify(tenant.pk, "Maintenance", "Water supply off on Sunday.")

        self.assertEqual(notification.type, Notification.Type.SYSTEM)
