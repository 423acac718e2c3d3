"""Notification services.

``notify`` is best effort: callers run it after their own transaction has
committed, and a failure to store the notification is logged and never
propagated back into the operation that triggered it.
"""

from __future__ import annotations

import logging
from uuid import UUID

from django.db import DatabaseError, transaction  # type: ignore

from .models import Notification

logger = logging.getLogger(__name__)


def notify(
    user_id: UUID,
    title: str,
    message: str,
    type: str = Notification.Type.SYSTEM,
) -> Notification | None:
    """Store an in-app notification for ``user_id``.

    Returns the notification, or None when it could not be written.
    """
    try:
        with transaction.atomic():
            notification = Notification.objects.create(
                user_id=user_id,
                title=title,
                message=message,
                type=type,
            )
    except DatabaseError:
        logger.warning(
            "Failed to store notification %r for user %s",
            title,
            user_id,
            exc_info=True,
        )
        return None

    logger.info("Notification %r stored for user %s", title, notification.user_id)
    return notification


def mark_all_read(user_id: UUID) -> int:
    """Mark every unread notification of the user as read."""
    return Notification.objects.filter(user_id=user_id, is_read=False).update(is_read=True)
