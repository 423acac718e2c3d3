"""Serializers for the booking domain."""

from __future__ import annotations

import re
from typing import Any

from django.utils.dateparse import parse_datetime  # type: ignore
from rest_framework import serializers  # type: ignore

from shared.infrastructure.routing import UUID_LOOKUP_REGEX

from .models import Booking

CANONICAL_UUID = re.compile(UUID_LOOKUP_REGEX)

# Request bodies may use camelCase or snake_case keys; camelCase wins when both are sent.
FIELD_ALIASES = {
    "roomId": "room_id",
    "moveInDate": "move_in_date",
    "moveOutDate": "move_out_date",
    "notes": "tenant_notes",
}


class FlexibleDateField(serializers.DateField):
    """Date that also accepts an ISO-8601 datetime and keeps its date part."""

    def to_internal_value(self, value):  # type: ignore
        if isinstance(value, str) and "T" in value:
            try:
                parsed = parse_datetime(value)
            except ValueError:
                parsed = None
            if parsed is None:
                self.fail("invalid", format="YYYY-MM-DD or an ISO-8601 datetime")
            return parsed.date()
        return super().to_internal_value(value)


class CanonicalUUIDField(serializers.UUIDField):
    """UUID accepted only in its hyphenated 8-4-4-4-12 text form."""

    def to_internal_value(self, data):  # type: ignore
        if not isinstance(data, str) or not CANONICAL_UUID.fullmatch(data):
            self.fail("invalid", value=data)
        return super().to_internal_value(data)


class BookingCreateSerializer(serializers.Serializer):
    """Booking request submitted by a tenant."""

    room_id = CanonicalUUIDField()
    move_in_date = FlexibleDateField()
    move_out_date = FlexibleDateField(required=False, allow_null=True)
    tenant_notes = serializers.CharField(
        required=False, allow_blank=True, default="", max_length=2000
    )

    def to_internal_value(self, data):  # type: ignore
        if hasattr(data, "items"):
            normalized = {key: value for key, value in data.items() if key not in FIELD_ALIASES}
            for alias, field_name in FIELD_ALIASES.items():
                if data.get(alias) not in (None, ""):
                    normalized[field_name] = data[alias]
            data = normalized
        return super().to_internal_value(data)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        move_out = attrs.get("move_out_date")
        if move_out is not None and move_out < attrs["move_in_date"]:
            raise serializers.ValidationError(
                {"move_out_date": ["Move-out date must not be before the move-in date."]}
            )
        return attrs


class BookingDecisionSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[
            (Booking.Status.APPROVED, Booking.Status.APPROVED.label),
            (Booking.Status.REJECTED, Booking.Status.REJECTED.label),
        ]
    )
    notes = serializers.CharField(required=False, allow_blank=True, default="", max_length=2000)


class BookingSerializer(serializers.ModelSerializer):
    """Booking with the room, property and tenant it refers to."""

    room = serializers.SerializerMethodField()
    property = serializers.SerializerMethodField()
    tenant = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "status",
            "room",
            "property",
            "tenant",
            "move_in_date",
            "move_out_date",
            "tenant_notes",
            "owner_notes",
            "booking_date",
            "decided_at",
            "cancelled_at",
            "cancellation_source",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_room(self, obj: Booking) -> dict:
        room = obj.room
        return {
            "id": str(room.pk),
            "room_number": room.room_number,
            "room_type": room.room_type,
            "rent_amount": str(room.rent_amount),
            "deposit_amount": str(room.deposit_amount),
            "status": room.status,
        }

    def get_property(self, obj: Booking) -> dict:
        prop = obj.property
        return {"id": str(prop.pk), "name": prop.name, "address": prop.address, "city": prop.city}

    def get_tenant(self, obj: Booking) -> dict:
        tenant = obj.tenant
        return {"id": str(tenant.pk), "name": tenant.name, "phone": tenant.phone}
