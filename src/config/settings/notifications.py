"""Settings de notificações pós-submissão (fila de email e webhook)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

_VALID_NOTIFIERS = frozenset({"mail_queue", "webhook"})


def _split_csv(raw: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class NotificationSettings:
    """Configurações dos efeitos colaterais de notificação.

    Attributes:
        backends: Notificadores ativos (mail_queue, webhook)
        ops_emails: Destinatários internos das novas aplicações
        ops_webhook_url: Webhook interno (ex: canal do time)
        mail_queue_collection: Collection Firestore da fila de email
        webhook_timeout_seconds: Timeout do POST de webhook
    """

    backends: tuple[str, ...] = field(default_factory=tuple)
    ops_emails: tuple[str, ...] = field(default_factory=tuple)
    ops_webhook_url: str = ""
    mail_queue_collection: str = "mailQueue"
    webhook_timeout_seconds: float = 5.0

    def validate(self) -> list[str]:
        """Valida configurações de notificação.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        unknown = set(self.backends) - _VALID_NOTIFIERS
        if unknown:
            errors.append(f"INTAKE_NOTIFIER_BACKENDS inválido: {sorted(unknown)}")

        if "mail_queue" in self.backends and not self.ops_emails:
            errors.append("mail_queue requer INTAKE_OPS_EMAILS")

        if "webhook" in self.backends and not self.ops_webhook_url:
            errors.append("webhook requer INTAKE_OPS_WEBHOOK_URL")

        return errors


def _load_notifications_from_env() -> NotificationSettings:
    """Carrega NotificationSettings de variáveis de ambiente."""
    return NotificationSettings(
        backends=tuple(b.lower() for b in _split_csv(os.getenv("INTAKE_NOTIFIER_BACKENDS", ""))),
        ops_emails=_split_csv(os.getenv("INTAKE_OPS_EMAILS", "")),
        ops_webhook_url=os.getenv("INTAKE_OPS_WEBHOOK_URL", ""),
        mail_queue_collection=os.getenv("MAIL_QUEUE_COLLECTION", "mailQueue"),
        webhook_timeout_seconds=float(os.getenv("INTAKE_WEBHOOK_TIMEOUT_SECONDS", "5")),
    )


@lru_cache(maxsize=1)
def get_notification_settings() -> NotificationSettings:
    """Retorna instância cacheada de NotificationSettings."""
    return _load_notifications_from_env()
