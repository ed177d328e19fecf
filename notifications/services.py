"""
services.py
-----------
Helpers for writing and reading in-app notifications.

Nothing here delivers anything (no email, no SMS); a notification is a row
the bell reads back by user_id.
"""

import logging

from django.db import DatabaseError

from .models import Notification

log = logging.getLogger(__name__)


def notify(user_id, title, message, type="booking", data=None):
    """
    Create a notification for user_id.

    Failures are logged and swallowed: a notification must never break the
    booking or message write that triggered it. Returns the Notification or None.
    """
    if not user_id:
        return None
    try:
        return Notification.objects.create(
            user_id=user_id,
            title=title,
            message=message,
            type=type,
            data=data or {},
        )
    except DatabaseError:
        log.exception("Error creating notification %r for %s", title, user_id)
        return None


def unread_count(user_id) -> int:
    return Notification.objects.filter(user_id=user_id, read=False).count()


def mark_all_read(user_id) -> int:
    """Flip every unread notification of user_id; returns how many changed."""
    return Notification.objects.filter(user_id=user_id, read=False).update(read=True)
