"""URL routing for properties and rooms.

The public search is declared before the router so that ``rooms/available/``
is never taken for a room id.
"""

from __future__ import annotations

from django.urls import path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import AvailableRoomsView, PropertyViewSet, RoomViewSet

router = SimpleRouter()
router.register(r"rooms", RoomViewSet, basename="room")
router.register(r"", PropertyViewSet, basename="property")

urlpatterns = [
    path("rooms/available/", AvailableRoomsView.as_view(), name="room-search"),
    *router.urls,
]
