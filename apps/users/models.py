"""User domain models for RoomNest.

The platform differentiates three roles (tenant, owner, admin). Owners
must be verified by an admin before they can manage properties; tenants
and owners each carry a profile with their contact details.
"""

from __future__ import annotations

import uuid
from typing import Any

from django.conf import settings  # type: ignore
from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.core.validators import RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


PHONE_VALIDATOR = RegexValidator(
    regex=r"^\+?\d{7,15}$",
    message=_("Invalid phone number. Use the international format without spaces."),
)


class UserManager(BaseUserManager):
    """User manager that logs users in by email."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("Email is required to create a user.")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", User.Role.TENANT)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", User.Role.ADMIN)
        extra_fields.setdefault("verification_status", User.VerificationStatus.APPROVED)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """Platform account with a role and a verification state."""

    class Role(models.TextChoices):
        TENANT = "tenant", _("Tenant")
        OWNER = "owner", _("Owner")
        ADMIN = "admin", _("Admin")

    class VerificationStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        APPROVED = "approved", _("Approved")
        REJECTED = "rejected", _("Rejected")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = models.CharField(_("Display name"), max_length=150, blank=True)
    email = models.EmailField(_("Email"), unique=True)
    role = models.CharField(
        _("Role"),
        max_length=20,
        choices=Role.choices,
        default=Role.TENANT,
    )
    verification_status = models.CharField(
        _("Verification status"),
        max_length=20,
        choices=VerificationStatus.choices,
        default=VerificationStatus.PENDING,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS: list[str] = []

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["role"], name="users_user_role_idx")]

    def __str__(self) -> str:
        return f"{self.email} ({self.get_role_display()})"

    def is_tenant(self) -> bool:
        return self.role == self.Role.TENANT

    def is_owner(self) -> bool:
        return self.role == self.Role.OWNER

    def is_platform_admin(self) -> bool:
        return self.role == self.Role.ADMIN or self.is_superuser

    @property
    def is_verified(self) -> bool:
        return self.verification_status == self.VerificationStatus.APPROVED


class OwnerProfile(models.Model):
    """Business details of a property owner."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="owner_profile",
    )
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=20, validators=[PHONE_VALIDATOR])
    business_name = models.CharField(max_length=255)
    business_address = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Owner profile")
        verbose_name_plural = _("Owner profiles")

    def __str__(self) -> str:
        return f"{self.business_name} ({self.name})"


class TenantProfile(models.Model):
    """Tenant contact details.

    ``room_number`` is derived data: it mirrors the room of the tenant's
    approved booking and is written only by the booking lifecycle.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="tenant_profile",
    )
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=20, validators=[PHONE_VALIDATOR])
    emergency_contact = models.CharField(max_length=20, blank=True)
    emergency_contact_name = models.CharField(max_length=255, blank=True)
    room_number = models.CharField(max_length=50, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Tenant profile")
        verbose_name_plural = _("Tenant profiles")
        indexes = [models.Index(fields=["room_number"], name="users_tenant_room_number_idx")]

    def __str__(self) -> str:
        return self.name
