"""Store de aplicações em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
Mesma semântica do colaborador Firestore: honeypot, revalidação,
idempotência por chave e rate limit por email.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable
from typing import Any

from app.infra.stores.server_checks import reject_if_honeypot, revalidate
from app.protocols.application_store import ApplicationStoreProtocol
from app.services.form_validator import FormValidator
from utils.errors import RateLimitedError
from utils.masking import email_fingerprint

logger = logging.getLogger(__name__)


class MemoryApplicationStore(ApplicationStoreProtocol):
    """Store de aplicações em memória.

    Args:
        rate_limit_seconds: Janela mínima entre submissões do mesmo email
            (0 desativa).
        validator: FormValidator para revalidação (novo se omitido).
        clock: Relógio monotônico injetável.
    """

    def __init__(
        self,
        rate_limit_seconds: int = 30,
        validator: FormValidator | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._rate_limit_seconds = rate_limit_seconds
        self._validator = validator or FormValidator()
        self._clock = clock
        self._records: dict[str, dict[str, Any]] = {}
        self._ids_by_key: dict[str, str] = {}
        self._last_by_email: dict[str, float] = {}

    @property
    def records(self) -> dict[str, dict[str, Any]]:
        """Registros persistidos por application_id (cópia)."""
        return dict(self._records)

    async def create_application(self, record: dict[str, Any], idempotency_key: str) -> str:
        reject_if_honeypot(record)
        revalidate(record, self._validator)

        existing = self._ids_by_key.get(idempotency_key)
        if existing is not None:
            logger.info("application_already_exists", extra={"application_id": existing})
            return existing

        fingerprint = email_fingerprint(str(record.get("email", "")))
        now = self._clock()
        last = self._last_by_email.get(fingerprint)
        if last is not None and self._rate_limit_seconds > 0:
            elapsed = now - last
            if elapsed < self._rate_limit_seconds:
                raise RateLimitedError(int(self._rate_limit_seconds - elapsed) + 1)

        application_id = f"app-{uuid.uuid4().hex[:16]}"
        self._records[application_id] = {**record, "status": "new"}
        self._ids_by_key[idempotency_key] = application_id
        self._last_by_email[fingerprint] = now
        logger.info(
            "application_created",
            extra={"application_id": application_id, "application_kind": record.get("applicationKind")},
        )
        return application_id
