"""Domain services for the booking lifecycle.

Every transition is one database transaction that moves the booking and
its room together, guarded by conditional updates on the current status so
that concurrent requests cannot both win. Notifications are sent after the
transaction has committed and never undo a transition.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from uuid import UUID

from django.conf import settings  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.notifications.models import Notification
from apps.notifications.services import notify
from apps.properties.models import Room
from apps.users.models import OwnerProfile, TenantProfile
from apps.users.permissions import Principal
from shared.domain.exceptions import DomainError, ResourceNotFound, StateConflict
from shared.domain.value_objects import StayPeriod

from .models import Booking

logger = logging.getLogger(__name__)

DECISIONS = (Booking.Status.APPROVED, Booking.Status.REJECTED)


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def _tenant_profile(principal: Principal, *, lock: bool = False) -> TenantProfile:
    qs = TenantProfile.objects.filter(user_id=principal.user_id)
    if lock:
        qs = _lock_queryset_if_possible(qs)
    tenant = qs.first()
    if tenant is None:
        raise ResourceNotFound("Tenant profile not found")
    return tenant


def _owner_profile(principal: Principal) -> OwnerProfile:
    owner = OwnerProfile.objects.filter(user_id=principal.user_id).first()
    if owner is None:
        raise ResourceNotFound("Owner profile not found")
    return owner


def _set_room_status(room_id: UUID, status: str, now: datetime) -> None:
    Room.objects.filter(pk=room_id).update(status=status, last_updated=now, updated_at=now)


def create_booking(
    principal: Principal,
    room_id: UUID,
    move_in_date: date,
    move_out_date: date | None = None,
    notes: str = "",
) -> Booking:
    """Request a room: the room becomes ``reserved`` and the booking ``pending``."""

    try:
        period = StayPeriod(move_in_date, move_out_date)
    except ValueError as exc:
        raise DomainError(str(exc)) from exc

    with transaction.atomic():
        tenant = _tenant_profile(principal, lock=True)

        if Booking.objects.filter(tenant=tenant, status__in=Booking.ACTIVE_STATUSES).exists():
            raise StateConflict("You already have an active booking")

        room = Room.objects.select_related("property__owner").filter(pk=room_id).first()
        if room is None:
            raise ResourceNotFound("Room not found")

        now = timezone.now()
        claimed = Room.objects.filter(pk=room.pk, status=Room.Status.AVAILABLE).update(
            status=Room.Status.RESERVED,
            last_updated=now,
            updated_at=now,
        )
        if not claimed:
            raise StateConflict("Room not available for booking")
        room.status = Room.Status.RESERVED
        room.last_updated = now

        try:
            with transaction.atomic():
                booking = Booking.objects.create(
                    tenant=tenant,
                    room=room,
                    property=room.property,
                    status=Booking.Status.PENDING,
                    move_in_date=period.move_in,
                    move_out_date=period.move_out,
                    tenant_notes=notes or "",
                    booking_date=now,
                )
        except IntegrityError as exc:
            # At most one active booking per tenant and per room.
            raise StateConflict("Booking conflicts with an existing active booking") from exc

    logger.info("Booking %s created by tenant %s for room %s", booking.pk, tenant.pk, room.pk)
    notify(
        room.property.owner.user_id,
        "New Booking Request",
        f"New booking request from {tenant.name} for room {room.room_number}",
        Notification.Type.BOOKING,
    )
    return booking


def decide_booking(
    principal: Principal,
    booking_id: UUID,
    decision: str,
    notes: str = "",
) -> Booking:
    """Approve or reject a pending booking on one of the owner's properties."""

    if decision not in DECISIONS:
        raise DomainError("Decision must be 'approved' or 'rejected'")

    owner = _owner_profile(principal)
    booking = (
        Booking.objects.select_related("room", "tenant")
        .filter(pk=booking_id, property__owner=owner)
        .first()
    )
    if booking is None:
        raise ResourceNotFound("Booking not found or access denied")

    with transaction.atomic():
        now = timezone.now()
        updated = Booking.objects.filter(pk=booking.pk, status=Booking.Status.PENDING).update(
            status=decision,
            owner_notes=notes or "",
            decided_at=now,
            updated_at=now,
        )
        if not updated:
            raise StateConflict("Booking has already been processed")

        if decision == Booking.Status.APPROVED:
            _set_room_status(booking.room_id, Room.Status.OCCUPIED, now)
            TenantProfile.objects.filter(pk=booking.tenant_id).update(
                room_number=booking.room.room_number,
                updated_at=now,
            )
        else:
            _set_room_status(booking.room_id, Room.Status.AVAILABLE, now)

    booking.refresh_from_db()
    logger.info("Booking %s %s by owner %s", booking.pk, decision, owner.pk)
    notify(
        booking.tenant.user_id,
        f"Booking {decision.capitalize()}",
        f"Your booking request for room {booking.room.room_number} has been {decision}.",
        Notification.Type.BOOKING,
    )
    return booking


def cancel_booking(principal: Principal, booking_id: UUID) -> Booking:
    """Cancel one of the tenant's pending or approved bookings."""

    tenant = _tenant_profile(principal)
    booking = (
        Booking.objects.select_related("room", "property__owner")
        .filter(pk=booking_id, tenant=tenant)
        .first()
    )
    if booking is None:
        raise ResourceNotFound("Booking not found or access denied")
    if booking.status == Booking.Status.CANCELLED:
        raise StateConflict("Booking is already cancelled")
    if booking.status == Booking.Status.REJECTED:
        raise StateConflict("Rejected bookings cannot be cancelled")

    with transaction.atomic():
        now = timezone.now()
        source = Booking.CancellationSource.TENANT
        was_approved = _cancel_if_status(booking, Booking.Status.APPROVED, source, now)
        if not was_approved and not _cancel_if_status(booking, Booking.Status.PENDING, source, now):
            raise StateConflict("Booking is no longer active")
        _release(booking, was_approved, now)

    booking.refresh_from_db()
    logger.info("Booking %s cancelled by tenant %s", booking.pk, tenant.pk)
    notify(
        booking.property.owner.user_id,
        "Booking Cancelled",
        f"Booking for room {booking.room.room_number} has been cancelled.",
        Notification.Type.BOOKING,
    )
    return booking


def _cancel_if_status(booking: Booking, status: str, source: str, now: datetime) -> bool:
    return bool(
        Booking.objects.filter(pk=booking.pk, status=status).update(
            status=Booking.Status.CANCELLED,
            cancellation_source=source,
            cancelled_at=now,
            updated_at=now,
        )
    )


def _release(booking: Booking, was_approved: bool, now: datetime) -> None:
    """Free the room; an approved tenant also loses the derived room number."""
    _set_room_status(booking.room_id, Room.Status.AVAILABLE, now)
    if was_approved:
        TenantProfile.objects.filter(
            pk=booking.tenant_id,
            room_number=booking.room.room_number,
        ).update(room_number="", updated_at=now)


def expire_stale_bookings(now: datetime | None = None) -> int:
    """Cancel pending bookings the owner left unanswered for too long.

    Returns the number of bookings that were expired.
    """
    now = now or timezone.now()
    cutoff = now - timedelta(hours=settings.BOOKING_EXPIRY_HOURS)
    stale = Booking.objects.select_related("room", "tenant").filter(
        status=Booking.Status.PENDING,
        booking_date__lt=cutoff,
    )

    expired = 0
    for booking in stale:
        with transaction.atomic():
            source = Booking.CancellationSource.SYSTEM
            if not _cancel_if_status(booking, Booking.Status.PENDING, source, now):
                continue
            _release(booking, False, now)
        expired += 1
        logger.info("Booking %s expired after %s hours", booking.pk, settings.BOOKING_EXPIRY_HOURS)
        notify(
            booking.tenant.user_id,
            "Booking Expired",
            f"Your booking request for room {booking.room.room_number} was not answered "
            f"in time and has been cancelled.",
            Notification.Type.BOOKING,
        )
    return expired


def change_room_status(principal: Principal, room_id: UUID, status: str) -> Room:
    """Owner's manual status change, refused while the room has an active booking."""

    owner = _owner_profile(principal)
    room = Room.objects.filter(pk=room_id, property__owner=owner).first()
    if room is None:
        raise ResourceNotFound("Room not found or access denied")

    now = timezone.now()
    with transaction.atomic():
        updated = (
            Room.objects.filter(pk=room.pk)
            .exclude(bookings__status__in=Booking.ACTIVE_STATUSES)
            .update(status=status, last_updated=now, updated_at=now)
        )
    if not updated:
        raise StateConflict("Cannot change room status while it has an active booking")

    logger.info("Room %s status set to %s by owner %s", room.pk, status, owner.pk)
    room.refresh_from_db()
    return room


def owner_tenancies(principal: Principal):
    """Approved bookings on the owner's properties, newest decision first.

    This is the owner's tenant roster: each row pairs a tenant with the room
    they currently occupy.
    """
    owner = _owner_profile(principal)
    return (
        Booking.objects.select_related("tenant__user", "room", "property")
        .filter(property__owner=owner, status=Booking.Status.APPROVED)
        .order_by("-decided_at", "-created_at")
    )
