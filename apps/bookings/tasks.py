"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from .services import expire_stale_bookings

logger = logging.getLogger(__name__)


# ============================================================================
# PERIODIC TASKS (run by Celery Beat, see config/celery.py)
# ============================================================================

@shared_task(name="bookings.expire_pending_bookings")
def expire_pending_bookings() -> dict[str, int]:
    """
    Cancel pending bookings older than ``BOOKING_EXPIRY_HOURS``.

    The room of every expired booking becomes available again and the
    tenant is notified.

    Returns:
        dict: {"expired": number of bookings cancelled}
    """
    expired_count = expire_stale_bookings()

    if expired_count > 0:
        logger.info("Expired %d pending bookings", expired_count)

    return {"expired": expired_count}
