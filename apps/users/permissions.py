"""Role gate for the API.

Every protected view declares the roles it serves through one of the
permission classes below. Once the gate has passed, views build a
``Principal`` and hand it to domain services, which never look at
``request.user`` themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from rest_framework import permissions  # type: ignore

from .models import User


@dataclass(frozen=True)
class Principal:
    """Authenticated caller as seen by domain services."""

    user_id: UUID
    role: str

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        role = User.Role.ADMIN if user.is_platform_admin() else user.role
        return cls(user_id=user.pk, role=role)

    @property
    def is_tenant(self) -> bool:
        return self.role == User.Role.TENANT

    @property
    def is_owner(self) -> bool:
        return self.role == User.Role.OWNER

    @property
    def is_admin(self) -> bool:
        return self.role == User.Role.ADMIN


class RolePermission(permissions.BasePermission):
    """Allow authenticated, active users whose role is in ``allowed_roles``."""

    allowed_roles: frozenset[str] = frozenset()
    message = "You do not have permission to perform this action."

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user or not user.is_authenticated or not user.is_active:
            return False
        return Principal.from_user(user).role in self.allowed_roles


class IsTenant(RolePermission):
    allowed_roles = frozenset({User.Role.TENANT})
    message = "Only tenant accounts can perform this action."


class IsOwner(RolePermission):
    allowed_roles = frozenset({User.Role.OWNER})
    message = "Only owner accounts can perform this action."


class IsVerifiedOwner(IsOwner):
    """Owners may manage inventory only after an admin approved them."""

    message = "Owner account not verified. Please wait for admin approval."

    def has_permission(self, request, view) -> bool:  # type: ignore
        return super().has_permission(request, view) and request.user.is_verified


class IsPlatformAdmin(RolePermission):
    allowed_roles = frozenset({User.Role.ADMIN})
    message = "Only administrators can perform this action."


class IsBookingParticipant(RolePermission):
    """Any role that has a view on bookings."""

    allowed_roles = frozenset({User.Role.TENANT, User.Role.OWNER, User.Role.ADMIN})


class PrincipalMixin:
    """View mixin exposing the caller as a ``Principal``."""

    def get_principal(self) -> Principal:
        return Principal.from_user(self.request.user)  # type: ignore[attr-defined]
