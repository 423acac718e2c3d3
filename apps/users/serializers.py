"""Serializers for user-related API endpoints."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import OwnerProfile, TenantProfile

User = get_user_model()


class OwnerProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = OwnerProfile
        fields = ["id", "name", "phone", "business_name", "business_address"]
        read_only_fields = ["id"]


class TenantProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = TenantProfile
        fields = [
            "id",
            "name",
            "phone",
            "emergency_contact",
            "emergency_contact_name",
            "room_number",
        ]
        read_only_fields = ["id", "room_number"]


class UserSerializer(serializers.ModelSerializer):
    """Account with whichever profile matches its role."""

    owner_profile = OwnerProfileSerializer(read_only=True)
    tenant_profile = TenantProfileSerializer(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "role",
            "verification_status",
            "is_active",
            "owner_profile",
            "tenant_profile",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "email",
            "role",
            "verification_status",
            "is_active",
            "created_at",
            "updated_at",
        ]


class UserStatusSerializer(serializers.Serializer):
    """Admin moderation payload: activation and/or owner verification."""

    is_active = serializers.BooleanField(required=False)
    verification_status = serializers.ChoiceField(
        choices=User.VerificationStatus.choices, required=False
    )
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if "is_active" not in attrs and "verification_status" not in attrs:
            raise serializers.ValidationError(
                {"non_field_errors": ["Provide is_active and/or verification_status."]}
            )
        return attrs


class TenantRosterSerializer(serializers.Serializer):
    """One row of an owner's tenant roster, built from an approved booking."""

    booking_id = serializers.UUIDField(source="pk")
    tenant_id = serializers.UUIDField(source="tenant.pk")
    name = serializers.CharField(source="tenant.name")
    phone = serializers.CharField(source="tenant.phone")
    email = serializers.EmailField(source="tenant.user.email")
    room_number = serializers.CharField(source="tenant.room_number")
    room = serializers.SerializerMethodField()
    property = serializers.SerializerMethodField()
    move_in_date = serializers.DateField()
    move_out_date = serializers.DateField()

    def get_room(self, booking) -> dict:
        room = booking.room
        return {
            "id": str(room.pk),
            "room_number": room.room_number,
            "room_type": room.room_type,
            "rent_amount": str(room.rent_amount),
        }

    def get_property(self, booking) -> dict:
        prop = booking.property
        return {"id": str(prop.pk), "name": prop.name, "address": prop.address}
