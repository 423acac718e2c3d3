"""Serializers for authentication flows (register, login)."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import PHONE_VALIDATOR, OwnerProfile, TenantProfile


User = get_user_model()

SELF_SERVICE_ROLES = (User.Role.TENANT, User.Role.OWNER)


class RegisterSerializer(serializers.Serializer):
    """Sign-up for tenants and owners.

    Owners start with ``verification_status=pending`` and cannot manage
    properties until an admin approves them. Admin accounts are never
    created through this endpoint.
    """

    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    role = serializers.ChoiceField(choices=SELF_SERVICE_ROLES)
    name = serializers.CharField(max_length=255)
    phone = serializers.CharField(validators=[PHONE_VALIDATOR])
    business_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    business_address = serializers.CharField(required=False, allow_blank=True)
    emergency_contact = serializers.CharField(
        max_length=20, required=False, allow_blank=True, validators=[PHONE_VALIDATOR]
    )
    emergency_contact_name = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def validate_email(self, value: str) -> str:
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("User already exists with this email.")
        return value

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if attrs["role"] == User.Role.OWNER:
            errors = {}
            for field in ("business_name", "business_address"):
                if not attrs.get(field):
                    errors[field] = ["This field is required for owners."]
            if errors:
                raise serializers.ValidationError(errors)
        return attrs

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        role = validated_data["role"]
        user = User.objects.create_user(
            email=validated_data["email"],
            password=validated_data["password"],
            username=validated_data["name"],
            role=role,
        )
        if role == User.Role.OWNER:
            OwnerProfile.objects.create(
                user=user,
                name=validated_data["name"],
                phone=validated_data["phone"],
                business_name=validated_data["business_name"],
                business_address=validated_data["business_address"],
            )
        else:
            TenantProfile.objects.create(
                user=user,
                name=validated_data["name"],
                phone=validated_data["phone"],
                emergency_contact=validated_data.get("emergency_contact", ""),
                emergency_contact_name=validated_data.get("emergency_contact_name", ""),
            )
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        try:
            user = User.objects.get(email__iexact=attrs["email"])
        except User.DoesNotExist:
            raise serializers.ValidationError({"email": "Invalid email or password."})

        if not user.check_password(attrs["password"]):
            raise serializers.ValidationError({"email": "Invalid email or password."})

        if not user.is_active:
            raise serializers.ValidationError({"non_field_errors": ["Account is deactivated."]})

        attrs["user"] = user
        return attrs
