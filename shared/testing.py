"""Factories used by the app test suites."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from apps.properties.models import Property, Room
from apps.users.models import OwnerProfile, TenantProfile, User


def make_owner(email: str = "owner@example.com", *, verified: bool = True, **profile: Any) -> User:
    user = User.objects.create_user(
        email=email,
        password="OwnerPass123",
        role=User.Role.OWNER,
        verification_status=(
            User.VerificationStatus.APPROVED if verified else User.VerificationStatus.PENDING
        ),
    )
    OwnerProfile.objects.create(
        user=user,
        name=profile.get("name", "Ravi Kumar"),
        phone=profile.get("phone", "+919800000001"),
        business_name=profile.get("business_name", "Kumar Stays"),
        business_address=profile.get("business_address", "12 MG Road, Bengaluru"),
    )
    return user


def make_tenant(email: str = "tenant@example.com", name: str = "Asha Rao") -> User:
    user = User.objects.create_user(email=email, password="TenantPass123", role=User.Role.TENANT)
    TenantProfile.objects.create(user=user, name=name, phone="+919800000002")
    return user


def make_admin(email: str = "admin@example.com") -> User:
    return User.objects.create_superuser(email=email, password="AdminPass123")


def make_property(owner: User, **overrides: Any) -> Property:
    data = {
        "name": "Green Residency",
        "address": "45 Residency Road, Shanthala Nagar",
        "city": "Bengaluru",
        "state": "Karnataka",
        "pincode": "560025",
        "latitude": Decimal("12.97160000"),
        "longitude": Decimal("77.59460000"),
    }
    data.update(overrides)
    return Property.objects.create(owner=owner.owner_profile, **data)


def make_room(property_obj: Property, room_number: str = "101", **overrides: Any) -> Room:
    data = {
        "room_type": "Single",
        "rent_amount": Decimal("8000.00"),
        "deposit_amount": Decimal("16000.00"),
    }
    data.update(overrides)
    return Room.objects.create(property=property_obj, room_number=room_number, **data)
