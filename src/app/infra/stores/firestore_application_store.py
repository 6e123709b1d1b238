"""Firestore Application Store — persistência durável das aplicações.

Colaborador in-process com a mesma semântica do endpoint HTTP:
- honeypot preenchido → 400 "Spam detected."
- revalidação do registro (400 com erros de campo)
- idempotência: document id = chave de idempotência, gravação com
  ``create()``; repetir a chave retorna a aplicação existente
- rate limit por hash do email (janela configurável)

Firestore Python SDK é síncrono: as chamadas rodam em ``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from google.api_core import exceptions as google_exceptions

from app.infra.stores.server_checks import reject_if_honeypot, revalidate
from app.protocols.application_store import ApplicationStoreProtocol
from app.services.form_validator import FormValidator
from utils.errors import PermanentServerError, RateLimitedError, TransientServerError
from utils.masking import email_fingerprint

if TYPE_CHECKING:
    from collections.abc import Callable

    from google.cloud.firestore import Client as FirestoreClient

logger = logging.getLogger(__name__)

APPLICATIONS_COLLECTION = "applications"
RATE_LIMITS_COLLECTION = "applicationRateLimits"

_TRANSIENT_ERRORS: tuple[type[Exception], ...] = (
    google_exceptions.ServiceUnavailable,
    google_exceptions.DeadlineExceeded,
    google_exceptions.InternalServerError,
    google_exceptions.Aborted,
    google_exceptions.TooManyRequests,
)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class FirestoreApplicationStore(ApplicationStoreProtocol):
    """Store de aplicações usando Firestore.

    Args:
        firestore_client: Cliente Firestore.
        collection_name: Collection das aplicações.
        rate_limits_collection: Collection das janelas de rate limit.
        rate_limit_seconds: Janela mínima entre submissões do mesmo email.
        validator: FormValidator para revalidação (novo se omitido).
        clock: Relógio UTC injetável.
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = APPLICATIONS_COLLECTION,
        rate_limits_collection: str = RATE_LIMITS_COLLECTION,
        rate_limit_seconds: int = 30,
        validator: FormValidator | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name
        self._rate_limits = rate_limits_collection
        self._rate_limit_seconds = rate_limit_seconds
        self._validator = validator or FormValidator()
        self._clock = clock

    async def create_application(self, record: dict[str, Any], idempotency_key: str) -> str:
        reject_if_honeypot(record)
        revalidate(record, self._validator)
        try:
            return await asyncio.to_thread(self._create_sync, record, idempotency_key)
        except _TRANSIENT_ERRORS as exc:
            logger.warning(
                "firestore_transient_error",
                extra={"error_type": type(exc).__name__, "code": getattr(exc, "code", None)},
            )
            raise TransientServerError(type(exc).__name__, status_code=getattr(exc, "code", None)) from exc
        except google_exceptions.GoogleAPICallError as exc:
            logger.error(
                "firestore_call_failed",
                extra={"error_type": type(exc).__name__, "code": getattr(exc, "code", None)},
            )
            raise PermanentServerError(getattr(exc, "code", None) or 500, "Storage error.") from exc

    def _create_sync(self, record: dict[str, Any], idempotency_key: str) -> str:
        doc_ref = self._db.collection(self._collection).document(idempotency_key)
        if doc_ref.get().exists:
            logger.info("application_already_exists", extra={"application_id": idempotency_key})
            return idempotency_key

        now = self._clock()
        fingerprint = email_fingerprint(str(record.get("email", "")))
        self._enforce_rate_limit(fingerprint, now)

        data = {
            **record,
            "status": "new",
            "emailHash": fingerprint,
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            doc_ref.create(data)
        except google_exceptions.AlreadyExists:
            # Corrida com outra tentativa da mesma chave: registro já existe
            logger.info("application_create_conflict", extra={"application_id": idempotency_key})
            return idempotency_key

        self._db.collection(self._rate_limits).document(fingerprint).set(
            {"lastSubmittedAt": now, "expiresAt": now + timedelta(seconds=self._rate_limit_seconds)}
        )
        logger.info(
            "application_created",
            extra={"application_id": idempotency_key, "application_kind": record.get("applicationKind")},
        )
        return idempotency_key

    def _enforce_rate_limit(self, fingerprint: str, now: datetime) -> None:
        if self._rate_limit_seconds <= 0:
            return
        snapshot = self._db.collection(self._rate_limits).document(fingerprint).get()
        if not snapshot.exists:
            return
        last = (snapshot.to_dict() or {}).get("lastSubmittedAt")
        if not isinstance(last, datetime):
            return
        elapsed = (now - last).total_seconds()
        if elapsed < self._rate_limit_seconds:
            logger.info("application_rate_limited", extra={"email_hash": fingerprint})
            raise RateLimitedError(int(self._rate_limit_seconds - elapsed) + 1)
