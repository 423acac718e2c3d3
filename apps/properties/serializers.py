"""Serializers for properties, rooms and the room search endpoint."""

from __future__ import annotations

import math
from typing import Any

from rest_framework import serializers  # type: ignore

from apps.users.models import OwnerProfile
from shared.domain.value_objects import GeoPoint

from .models import Property, Room
from .search import RoomSearchParams


def _validate_coordinate_pair(attrs: dict[str, Any], instance=None) -> None:
    """Latitude and longitude are set together or not at all."""
    latitude = attrs.get("latitude", getattr(instance, "latitude", None))
    longitude = attrs.get("longitude", getattr(instance, "longitude", None))
    if (latitude is None) != (longitude is None):
        missing = "longitude" if longitude is None else "latitude"
        raise serializers.ValidationError(
            {missing: ["Latitude and longitude must be provided together."]}
        )


class OwnerSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = OwnerProfile
        fields = ["name", "phone", "business_name"]


class PropertySerializer(serializers.ModelSerializer):
    """Owner-facing property representation."""

    rooms_count = serializers.SerializerMethodField()

    class Meta:
        model = Property
        fields = [
            "id",
            "name",
            "address",
            "city",
            "state",
            "pincode",
            "description",
            "amenities",
            "latitude",
            "longitude",
            "rooms_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "rooms_count", "created_at", "updated_at"]

    def get_rooms_count(self, obj: Property) -> int:
        return obj.rooms.count()

    def validate_pincode(self, value: str) -> str:
        if not value.isdigit():
            raise serializers.ValidationError("Pincode must contain digits only.")
        return value

    def validate_amenities(self, value: Any) -> list:
        if not isinstance(value, list):
            raise serializers.ValidationError("Amenities must be a list.")
        return value

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        _validate_coordinate_pair(attrs, self.instance)
        return attrs


class RoomSerializer(serializers.ModelSerializer):
    """Room as managed by its owner."""

    class Meta:
        model = Room
        fields = [
            "id",
            "property",
            "room_number",
            "room_type",
            "rent_amount",
            "deposit_amount",
            "amenities",
            "latitude",
            "longitude",
            "status",
            "last_updated",
            "created_at",
        ]
        read_only_fields = ["id", "property", "status", "last_updated", "created_at"]
        # Uniqueness per property is checked in validate(); the property is not client input.
        validators: list = []

    def validate_amenities(self, value: Any) -> list:
        if not isinstance(value, list):
            raise serializers.ValidationError("Amenities must be a list.")
        return value

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        _validate_coordinate_pair(attrs, self.instance)
        property_obj = self.context.get("property")
        room_number = attrs.get("room_number")
        if property_obj is not None and room_number:
            clash = Room.objects.filter(property=property_obj, room_number=room_number)
            if self.instance is not None:
                clash = clash.exclude(pk=self.instance.pk)
            if clash.exists():
                raise serializers.ValidationError(
                    {"room_number": ["Room number already exists in this property."]}
                )
        return attrs


class RoomStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Room.Status.choices)


class RoomCoordinatesSerializer(serializers.Serializer):
    latitude = serializers.DecimalField(
        max_digits=10, decimal_places=8, min_value=-90, max_value=90
    )
    longitude = serializers.DecimalField(
        max_digits=11, decimal_places=8, min_value=-180, max_value=180
    )


class PropertySummarySerializer(serializers.ModelSerializer):
    owner = OwnerSummarySerializer(read_only=True)

    class Meta:
        model = Property
        fields = ["id", "name", "address", "city", "state", "pincode", "amenities", "owner"]


class AvailableRoomSerializer(serializers.ModelSerializer):
    """Search hit: room, its property and owner summary, and distance."""

    property = PropertySummarySerializer(read_only=True)
    distance_km = serializers.SerializerMethodField()

    class Meta:
        model = Room
        fields = [
            "id",
            "room_number",
            "room_type",
            "rent_amount",
            "deposit_amount",
            "amenities",
            "latitude",
            "longitude",
            "status",
            "created_at",
            "property",
            "distance_km",
        ]

    def get_distance_km(self, obj: Room) -> float | None:
        distances = self.context.get("distances") or {}
        return distances.get(obj.pk)


class RoomSearchQuerySerializer(serializers.Serializer):
    """Parses the query string of the room search.

    Numeric filters are strict: anything unparsable is a 400 and never
    reaches the database. ``sortBy``/``sortOrder`` are lenient and fall back
    to newest first.
    """

    location = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)
    roomType = serializers.CharField(source="room_type", required=False, allow_blank=True)
    minRent = serializers.DecimalField(
        source="min_rent", max_digits=None, decimal_places=None, min_value=0, required=False
    )
    maxRent = serializers.DecimalField(
        source="max_rent", max_digits=None, decimal_places=None, min_value=0, required=False
    )
    latitude = serializers.FloatField(min_value=-90, max_value=90, required=False)
    longitude = serializers.FloatField(min_value=-180, max_value=180, required=False)
    radius = serializers.FloatField(required=False)
    sortBy = serializers.CharField(source="sort_by", required=False, allow_blank=True)
    sortOrder = serializers.CharField(source="sort_order", required=False, allow_blank=True)
    limit = serializers.IntegerField(min_value=1, required=False)
    offset = serializers.IntegerField(min_value=0, required=False)

    def _finite(self, value: float) -> float:
        if not math.isfinite(value):
            raise serializers.ValidationError("A finite number is required.")
        return value

    def validate_latitude(self, value: float) -> float:
        return self._finite(value)

    def validate_longitude(self, value: float) -> float:
        return self._finite(value)

    def validate_radius(self, value: float) -> float:
        value = self._finite(value)
        if value <= 0:
            raise serializers.ValidationError("Radius must be greater than zero.")
        return value

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        has_lat = "latitude" in attrs
        has_lon = "longitude" in attrs
        if has_lat != has_lon:
            missing = "longitude" if has_lat else "latitude"
            raise serializers.ValidationError(
                {missing: ["Latitude and longitude must be provided together."]}
            )
        min_rent = attrs.get("min_rent")
        max_rent = attrs.get("max_rent")
        if min_rent is not None and max_rent is not None and min_rent > max_rent:
            raise serializers.ValidationError(
                {"minRent": ["minRent must not be greater than maxRent."]}
            )
        return attrs

    def to_params(self) -> RoomSearchParams:
        data = self.validated_data
        center = None
        if "latitude" in data:
            center = GeoPoint(data["latitude"], data["longitude"])
        return RoomSearchParams(
            location=data.get("location", ""),
            min_rent=data.get("min_rent"),
            max_rent=data.get("max_rent"),
            room_type=data.get("room_type", ""),
            center=center,
            radius_km=data.get("radius"),
            sort_by=data.get("sort_by", ""),
            sort_order=data.get("sort_order", "desc"),
            limit=data.get("limit"),
            offset=data.get("offset", 0),
        )
