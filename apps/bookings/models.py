"""Booking domain models for RoomNest."""

from __future__ import annotations

import uuid

from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """A tenant's request to move into a room.

    Lifecycle: ``pending -> approved | rejected`` (owner decision) and
    ``pending | approved -> cancelled`` (tenant or expiry). Rejected and
    cancelled bookings are terminal.
    """

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        APPROVED = "approved", _("Approved")
        REJECTED = "rejected", _("Rejected")
        CANCELLED = "cancelled", _("Cancelled")

    class CancellationSource(models.TextChoices):
        TENANT = "tenant", _("Tenant")
        SYSTEM = "system", _("System")

    ACTIVE_STATUSES = (Status.PENDING, Status.APPROVED)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant = models.ForeignKey(
        "users.TenantProfile",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    room = models.ForeignKey(
        "properties.Room",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    move_in_date = models.DateField()
    move_out_date = models.DateField(null=True, blank=True)
    tenant_notes = models.TextField(blank=True)
    owner_notes = models.TextField(blank=True)
    cancellation_source = models.CharField(
        max_length=20,
        choices=CancellationSource.choices,
        blank=True,
    )
    booking_date = models.DateTimeField(default=timezone.now)
    decided_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["tenant"],
                condition=models.Q(status__in=["pending", "approved"]),
                name="one_active_booking_per_tenant",
            ),
            models.UniqueConstraint(
                fields=["room"],
                condition=models.Q(status__in=["pending", "approved"]),
                name="one_active_booking_per_room",
            ),
            models.CheckConstraint(
                condition=models.Q(move_out_date__isnull=True)
                | models.Q(move_out_date__gte=models.F("move_in_date")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "booking_date"], name="booking_status_date_idx"),
            models.Index(fields=["property", "status"], name="booking_property_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking {self.pk} ({self.get_status_display()})"

    def is_active(self) -> bool:
        return self.status in self.ACTIVE_STATUSES
