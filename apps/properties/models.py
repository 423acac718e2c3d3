"""Property domain models for RoomNest.

A property belongs to an owner profile and is let room by room. Rooms
carry their own rent, deposit and status; the status is driven by the
booking lifecycle once a booking exists for the room.
"""

from __future__ import annotations

import uuid

from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import GeoPoint


LATITUDE_VALIDATORS = [MinValueValidator(-90), MaxValueValidator(90)]
LONGITUDE_VALIDATORS = [MinValueValidator(-180), MaxValueValidator(180)]


class Property(models.Model):
    """A building or house listed by an owner."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(
        "users.OwnerProfile",
        on_delete=models.CASCADE,
        related_name="properties",
    )
    name = models.CharField(max_length=255)
    address = models.TextField()
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    pincode = models.CharField(max_length=10)
    description = models.TextField(blank=True)
    amenities = models.JSONField(default=list, blank=True)
    latitude = models.DecimalField(
        max_digits=10,
        decimal_places=8,
        null=True,
        blank=True,
        validators=LATITUDE_VALIDATORS,
    )
    longitude = models.DecimalField(
        max_digits=11,
        decimal_places=8,
        null=True,
        blank=True,
        validators=LONGITUDE_VALIDATORS,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Property")
        verbose_name_plural = _("Properties")
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["city"], name="property_city_idx")]

    def __str__(self) -> str:
        return f"{self.name} ({self.city})"

    @property
    def location(self) -> GeoPoint | None:
        return GeoPoint.from_coordinates(self.latitude, self.longitude)


class Room(models.Model):
    """A lettable unit inside a property."""

    class Status(models.TextChoices):
        AVAILABLE = "available", _("Available")
        OCCUPIED = "occupied", _("Occupied")
        RESERVED = "reserved", _("Reserved")
        MAINTENANCE = "maintenance", _("Maintenance")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    property = models.ForeignKey(
        Property,
        on_delete=models.CASCADE,
        related_name="rooms",
    )
    room_number = models.CharField(max_length=50)
    room_type = models.CharField(
        max_length=100,
        help_text=_("Single, Double, Triple, etc."),
    )
    rent_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(0)],
    )
    deposit_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0)],
    )
    amenities = models.JSONField(default=list, blank=True)
    latitude = models.DecimalField(
        max_digits=10,
        decimal_places=8,
        null=True,
        blank=True,
        validators=LATITUDE_VALIDATORS,
    )
    longitude = models.DecimalField(
        max_digits=11,
        decimal_places=8,
        null=True,
        blank=True,
        validators=LONGITUDE_VALIDATORS,
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.AVAILABLE,
    )
    last_updated = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["property", "room_number"]
        constraints = [
            models.UniqueConstraint(
                fields=["property", "room_number"],
                name="unique_room_number_per_property",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "rent_amount"], name="room_status_rent_idx"),
            models.Index(fields=["room_type"], name="room_type_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.property.name} / {self.room_number}"

    def resolve_location(self) -> GeoPoint | None:
        """Room coordinates, falling back to the property's."""
        return GeoPoint.from_coordinates(self.latitude, self.longitude) or self.property.location
