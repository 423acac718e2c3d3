"""Property API views."""

from __future__ import annotations

import logging

from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.services import change_room_status
from apps.users.permissions import IsVerifiedOwner, PrincipalMixin
from shared.domain.exceptions import ResourceNotFound
from shared.infrastructure.routing import UUID_LOOKUP_REGEX

from .models import Property, Room
from .search import search_rooms
from .serializers import (
    AvailableRoomSerializer,
    PropertySerializer,
    RoomCoordinatesSerializer,
    RoomSearchQuerySerializer,
    RoomSerializer,
    RoomStatusSerializer,
)

logger = logging.getLogger(__name__)


class AvailableRoomsView(APIView):
    """Public availability search.

    Query parameters: ``location``, ``minRent``, ``maxRent``, ``roomType``,
    ``latitude``, ``longitude``, ``radius`` (km), ``sortBy`` (rent, deposit,
    created, distance), ``sortOrder`` (asc, desc), ``limit``, ``offset``.
    """

    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        query = RoomSearchQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        result = search_rooms(query.to_params())

        rooms = [item.room for item in result.rooms]
        distances = {item.room.pk: item.distance_km for item in result.rooms}
        data = {
            "rooms": AvailableRoomSerializer(
                rooms, many=True, context={"request": request, "distances": distances}
            ).data,
        }
        if result.center is not None:
            data["search_center"] = result.center.to_dict()
            data["search_radius"] = result.radius_km
        return Response(data)


class PropertyViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """Owner-side property management: list, create, update and rooms."""

    serializer_class = PropertySerializer
    lookup_value_regex = UUID_LOOKUP_REGEX
    permission_classes = [IsVerifiedOwner]
    queryset = Property.objects.select_related("owner").prefetch_related("rooms")
    filterset_fields = ["city", "state"]

    def get_queryset(self):  # type: ignore
        if getattr(self, "swagger_fake_view", False):
            return Property.objects.none()
        return super().get_queryset().filter(owner__user=self.request.user)

    def get_object(self):  # type: ignore
        obj = self.get_queryset().filter(pk=self.kwargs["pk"]).first()
        if obj is None:
            raise ResourceNotFound("Property not found or access denied")
        return obj

    def perform_create(self, serializer):  # type: ignore
        instance = serializer.save(owner=self.request.user.owner_profile)
        logger.info("Property %s created by owner %s", instance.pk, instance.owner_id)

    @action(detail=True, methods=["get", "post"], serializer_class=RoomSerializer)
    def rooms(self, request, pk=None):  # type: ignore
        """List the property's rooms or add a new one."""
        property_obj = self.get_object()
        if request.method == "GET":
            serializer = RoomSerializer(property_obj.rooms.all(), many=True)
            return Response(serializer.data)

        serializer = RoomSerializer(data=request.data, context={"property": property_obj})
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            room = serializer.save(property=property_obj, status=Room.Status.AVAILABLE)
        logger.info("Room %s added to property %s", room.pk, property_obj.pk)
        return Response(RoomSerializer(room).data, status=status.HTTP_201_CREATED)


class RoomViewSet(PrincipalMixin, viewsets.GenericViewSet):
    """Owner-side room updates that do not go through a booking."""

    serializer_class = RoomSerializer
    lookup_value_regex = UUID_LOOKUP_REGEX
    permission_classes = [IsVerifiedOwner]
    queryset = Room.objects.select_related("property")

    def get_queryset(self):  # type: ignore
        if getattr(self, "swagger_fake_view", False):
            return Room.objects.none()
        return super().get_queryset().filter(property__owner__user=self.request.user)

    @action(detail=True, methods=["patch"], url_path="status", serializer_class=RoomStatusSerializer)
    def set_status(self, request, pk=None):  # type: ignore
        serializer = RoomStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room = change_room_status(self.get_principal(), pk, serializer.validated_data["status"])
        return Response(RoomSerializer(room).data)

    @action(detail=True, methods=["patch"], serializer_class=RoomCoordinatesSerializer)
    def coordinates(self, request, pk=None):  # type: ignore
        room = self.get_queryset().filter(pk=pk).first()
        if room is None:
            raise ResourceNotFound("Room not found or access denied")
        serializer = RoomCoordinatesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room.latitude = serializer.validated_data["latitude"]
        room.longitude = serializer.validated_data["longitude"]
        room.last_updated = timezone.now()
        room.save(update_fields=["latitude", "longitude", "last_updated", "updated_at"])
        logger.info("Room %s coordinates updated", room.pk)
        return Response(RoomSerializer(room).data)
