"""Notificadores pós-submissão (fila de email e webhook)."""

from app.infra.notifications.firestore_mail_queue import FirestoreMailQueueNotifier
from app.infra.notifications.webhook_notifier import WebhookNotifier

__all__ = ["FirestoreMailQueueNotifier", "WebhookNotifier"]
