"""Tasks de background do intake."""

from app.infra.tasks.notification_dispatch import (
    NotificationJob,
    dispatch_notification,
    drain_notifications,
    pending_notifications,
)

__all__ = [
    "NotificationJob",
    "dispatch_notification",
    "drain_notifications",
    "pending_notifications",
]
